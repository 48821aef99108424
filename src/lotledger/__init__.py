"""Lotledger: brokerage export import and FIFO lot tracking."""

__version__ = "0.1.0"


# The CLI pulls in click and the database layer; load it on first use
def __getattr__(name):
    if name == "main":
        from lotledger.cli.main import main
        return main
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
