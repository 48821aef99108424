"""Main CLI entry point."""

import click
from lotledger.database.factories import create_sqlite_database
from lotledger.utils.logging import configure_logging

# Import and register all commands at module level
from lotledger.cli.commands import (
    account,
    import_cmd,
    ledger,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides LOTLEDGER_DB_PATH environment variable)",
    envvar="LOTLEDGER_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging level (overrides LOG_LEVEL environment variable)",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str | None):
    """Lotledger - Brokerage import and lot tracking.

    Import brokerage transaction exports into a ledger of lots, dividends
    and cash deposits, matching sales to purchases first-in, first-out.
    """
    ctx.ensure_object(dict)
    configure_logging(log_level)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
account.register_commands(cli)
import_cmd.register_commands(cli)
ledger.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
