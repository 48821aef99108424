"""Domain model entities for lotledger.

These are pure data classes representing business concepts, independent of
database schema. Persisted reference data and ledger records come first;
the ephemeral records produced and consumed by one import follow.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from typing import Any, Optional


@dataclass(frozen=True)
class Account:
    """Brokerage account domain entity."""

    id: int
    name: str
    created_at: datetime


@dataclass(frozen=True)
class RiskGroup:
    """Risk group a universe symbol belongs to."""

    id: int
    name: str


@dataclass(frozen=True)
class UniverseSymbol:
    """Tradable symbol ("universe" entry) domain entity."""

    id: int
    symbol: str
    risk_group_id: int
    last_price: Decimal
    distribution: Decimal
    distributions_per_year: int
    ex_date: Optional[date]
    most_recent_sell_date: Optional[date]
    expired: bool
    is_closed_end_fund: bool


@dataclass(frozen=True)
class DepositType:
    """Deposit type domain entity ("Dividend", "Cash Deposit")."""

    id: int
    name: str


@dataclass(frozen=True)
class Lot:
    """A persisted trade: shares acquired at one price and date.

    A lot is open while ``sell == 0`` and ``sell_date is None``.
    Pieces split off by a partial sale point back at the purchase lot
    through ``parent_lot_id``.
    """

    id: int
    universe_id: int
    account_id: int
    buy: Decimal
    sell: Decimal
    buy_date: date
    sell_date: Optional[date]
    quantity: Decimal
    parent_lot_id: Optional[int] = None

    @property
    def is_open(self) -> bool:
        return self.sell == 0 and self.sell_date is None


@dataclass(frozen=True)
class Deposit:
    """A persisted dividend or cash deposit."""

    id: int
    date: date
    amount: Decimal
    account_id: int
    div_deposit_type_id: int
    universe_id: Optional[int]


# Import pipeline records


@dataclass(frozen=True)
class RawCsvRow:
    """One data line of a brokerage export, after parsing."""

    date: str
    account: str
    action: str
    symbol: str
    description: str
    quantity: Decimal
    price: Decimal
    total_amount: Decimal


@dataclass(frozen=True)
class MappedTrade:
    """Purchase intent: becomes a new open lot."""

    universe_id: int
    account_id: int
    buy: Decimal
    buy_date: date
    quantity: Decimal
    sell: Decimal = Decimal("0")


@dataclass(frozen=True)
class MappedSale:
    """Sale intent: closes or splits open lots FIFO."""

    universe_id: int
    account_id: int
    sell: Decimal
    sell_date: date
    quantity: Decimal


@dataclass(frozen=True)
class MappedDivDeposit:
    """Dividend or cash movement; ``universe_id=None`` means pure cash."""

    date: date
    amount: Decimal
    account_id: int
    div_deposit_type_id: int
    universe_id: Optional[int]


@dataclass(frozen=True)
class UnknownTransaction:
    """Row whose action text did not match any known transaction type."""

    date: str
    action: str
    symbol: str
    description: str


@dataclass
class MappedTransactions:
    """Output of the mapper, grouped by category."""

    trades: list[MappedTrade] = field(default_factory=list)
    sales: list[MappedSale] = field(default_factory=list)
    div_deposits: list[MappedDivDeposit] = field(default_factory=list)
    unknown_transactions: list[UnknownTransaction] = field(default_factory=list)


@dataclass
class ImportResult:
    """Outcome of one import call."""

    success: bool
    imported: int
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @classmethod
    def rejected(cls, message: str) -> "ImportResult":
        """Result for a batch rejected before any ledger writes."""
        return cls(success=False, imported=0, errors=[message], warnings=[])

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "imported": self.imported,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
        }
