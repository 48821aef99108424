"""Abstract database interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Optional
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from lotledger.domain.entities import (
    Account,
    RiskGroup,
    UniverseSymbol,
    DepositType,
    Lot,
    Deposit,
)


class Database(ABC):
    """Abstract database interface for lotledger.

    This is everything the import pipeline needs from a store: point
    lookups and writes against reference data and the lot/deposit ledger.
    Each write is committed before the method returns.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def transaction(self) -> AbstractContextManager[None]:
        """Group writes into one unit of work.

        Writes made inside the block are committed together when it exits
        and rolled back together if it raises. Nested blocks join the
        outermost one.
        """
        pass

    # Account operations
    @abstractmethod
    def create_account(self, name: str) -> int:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def get_account_by_name(self, name: str) -> Optional[Account]:
        """Get account by exact (case-sensitive) name."""
        pass

    @abstractmethod
    def list_accounts(self) -> list[Account]:
        """List all accounts."""
        pass

    # Risk group operations
    @abstractmethod
    def create_risk_group(self, name: str) -> int:
        """Create a risk group. Returns risk group ID."""
        pass

    @abstractmethod
    def get_risk_group_by_name(self, name: str) -> Optional[RiskGroup]:
        """Get risk group by name."""
        pass

    # Universe operations
    @abstractmethod
    def create_symbol(self, symbol: str, risk_group_id: int) -> int:
        """Create a universe entry with zeroed market data. Returns its ID."""
        pass

    @abstractmethod
    def get_symbol(self, universe_id: int) -> Optional[UniverseSymbol]:
        """Get universe entry by ID."""
        pass

    @abstractmethod
    def get_symbol_by_ticker(self, symbol: str) -> Optional[UniverseSymbol]:
        """Get universe entry by ticker."""
        pass

    # Deposit type operations
    @abstractmethod
    def create_deposit_type(self, name: str) -> int:
        """Create a deposit type. Returns its ID."""
        pass

    @abstractmethod
    def get_deposit_type_by_name(self, name: str) -> Optional[DepositType]:
        """Get deposit type by name."""
        pass

    # Lot operations
    @abstractmethod
    def create_lot(
        self,
        universe_id: int,
        account_id: int,
        buy: Decimal,
        buy_date: date,
        quantity: Decimal,
        sell: Decimal = Decimal("0"),
        sell_date: Optional[date] = None,
        parent_lot_id: Optional[int] = None,
    ) -> int:
        """Create a lot. Returns lot ID.

        parent_lot_id links a piece split off by a partial sale to the lot
        of the purchase it came from.
        """
        pass

    @abstractmethod
    def get_lot(self, lot_id: int) -> Optional[Lot]:
        """Get lot by ID."""
        pass

    @abstractmethod
    def find_lot(
        self,
        universe_id: int,
        account_id: int,
        buy: Decimal,
        buy_date: date,
        quantity: Optional[Decimal] = None,
    ) -> list[Lot]:
        """Find lots with the given purchase fields, oldest ID first.

        When quantity is None, every lot of that purchase is returned,
        including pieces split off by partial sales.
        """
        pass

    @abstractmethod
    def list_open_lots(self, universe_id: int, account_id: int) -> list[Lot]:
        """List open lots for a symbol in an account, ordered by buy date (FIFO)."""
        pass

    @abstractmethod
    def list_closed_lots(
        self, universe_id: int, account_id: int, sell: Decimal, sell_date: date
    ) -> list[Lot]:
        """List lots closed at the given sell price and date."""
        pass

    @abstractmethod
    def update_lot(
        self,
        lot_id: int,
        quantity: Optional[Decimal] = None,
        sell: Optional[Decimal] = None,
        sell_date: Optional[date] = None,
    ) -> None:
        """Close a lot (sell and sell_date) and/or change its quantity."""
        pass

    @abstractmethod
    def list_lots(
        self,
        account_id: Optional[int] = None,
        universe_id: Optional[int] = None,
        open_only: bool = False,
        closed_only: bool = False,
    ) -> list[Lot]:
        """List lots with optional filters, ordered by buy date."""
        pass

    # Deposit operations
    @abstractmethod
    def create_deposit(
        self,
        date: date,
        amount: Decimal,
        account_id: int,
        div_deposit_type_id: int,
        universe_id: Optional[int] = None,
    ) -> int:
        """Create a dividend or cash deposit. Returns deposit ID."""
        pass

    @abstractmethod
    def find_deposit(
        self,
        date: date,
        amount: Decimal,
        account_id: int,
        div_deposit_type_id: int,
        universe_id: Optional[int],
    ) -> Optional[Deposit]:
        """Find a deposit matching every field; universe_id None matches NULL."""
        pass

    @abstractmethod
    def list_deposits(self, account_id: Optional[int] = None) -> list[Deposit]:
        """List deposits, optionally filtered by account, ordered by date."""
        pass
