"""Domain layer for lotledger application."""

# Services are imported lazily: they depend on lotledger.database, which in
# turn imports lotledger.domain.entities.
_SERVICES = {
    "AccountService": "lotledger.domain.account",
    "CSVImportService": "lotledger.domain.csv_import",
    "LedgerReconciler": "lotledger.domain.reconciler",
    "TransactionMapper": "lotledger.domain.transaction_mapper",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        import importlib

        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
