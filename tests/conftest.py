"""Shared pytest fixtures for lotledger tests."""

import tempfile
import os
from decimal import Decimal
from pathlib import Path
import pytest

from lotledger.config import Settings, DEFAULT_CASH_EQUIVALENT_SYMBOLS
from lotledger.database.factories import create_sqlite_database
from lotledger.domain.account import AccountService
from lotledger.domain.csv_import import CSVImportService
from lotledger.domain.reconciler import LedgerReconciler
from lotledger.domain.transaction_mapper import TransactionMapper


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)

@pytest.fixture
def settings():
    """Settings independent of the test environment."""
    return Settings(
        cash_equivalent_symbols=DEFAULT_CASH_EQUIVALENT_SYMBOLS,
        default_risk_group="Equities",
        max_import_bytes=1024 * 1024,
    )

@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)

@pytest.fixture
def mapper(temp_db):
    """Create a TransactionMapper with a temporary database."""
    return TransactionMapper(temp_db)

@pytest.fixture
def reconciler(temp_db):
    """Create a LedgerReconciler with a temporary database."""
    return LedgerReconciler(temp_db)

@pytest.fixture
def import_service(temp_db, settings):
    """Create a CSVImportService with a temporary database."""
    return CSVImportService(temp_db, settings=settings)

@pytest.fixture
def sample_account(temp_db):
    """Create a sample account for testing."""
    account_id = temp_db.create_account(name="My Brokerage")
    return temp_db.get_account(account_id)

@pytest.fixture
def sample_symbol(temp_db):
    """Create SPY in a default risk group."""
    group_id = temp_db.create_risk_group("Equities")
    universe_id = temp_db.create_symbol("SPY", group_id)
    return temp_db.get_symbol(universe_id)

@pytest.fixture
def make_lot(temp_db, sample_account, sample_symbol):
    """Factory creating open SPY lots in the sample account."""

    def _make(quantity, buy_date, buy="100"):
        lot_id = temp_db.create_lot(
            universe_id=sample_symbol.id,
            account_id=sample_account.id,
            buy=Decimal(buy),
            buy_date=buy_date,
            quantity=Decimal(str(quantity)),
        )
        return lot_id

    return _make

@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()

@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"
