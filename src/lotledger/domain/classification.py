"""Classification of export action text into transaction kinds."""

from collections.abc import Iterable
from enum import Enum

from lotledger.config import DEFAULT_CASH_EQUIVALENT_SYMBOLS
from lotledger.domain.entities import RawCsvRow


class TransactionKind(str, Enum):
    PURCHASE = "purchase"
    SALE = "sale"
    DIVIDEND = "dividend"
    CASH_MOVEMENT = "cash_movement"
    UNKNOWN = "unknown"


# Export actions carry free text after the verb, e.g.
# "YOU BOUGHT OFS CREDIT COMPANY INC COM (OCCI) (Cash)", so match substrings.
# Checked in order; the first hit wins.
ACTION_PATTERNS: tuple[tuple[str, TransactionKind], ...] = (
    ("YOU BOUGHT", TransactionKind.PURCHASE),
    ("PURCHASE INTO CORE ACCOUNT", TransactionKind.PURCHASE),
    ("REINVESTMENT", TransactionKind.PURCHASE),
    ("YOU SOLD", TransactionKind.SALE),
    ("REDEMPTION FROM CORE ACCOUNT", TransactionKind.SALE),
    ("DIVIDEND RECEIVED", TransactionKind.DIVIDEND),
    ("ELECTRONIC FUNDS TRANSFER", TransactionKind.CASH_MOVEMENT),
)


def classify_action(action: str) -> TransactionKind:
    """Return the transaction kind an action string describes."""
    text = action.upper()
    for pattern, kind in ACTION_PATTERNS:
        if pattern in text:
            return kind
    return TransactionKind.UNKNOWN


class CashEquivalentPolicy:
    """Decides which tickers are money-market/sweep vehicles.

    Buys and sells of these symbols move cash rather than open or close
    positions.
    """

    def __init__(self, symbols: Iterable[str] | None = None):
        if symbols is None:
            symbols = DEFAULT_CASH_EQUIVALENT_SYMBOLS
        self.symbols = frozenset(s.strip().upper() for s in symbols)

    def __call__(self, symbol: str) -> bool:
        return symbol.strip().upper() in self.symbols

    def __repr__(self) -> str:
        return f"CashEquivalentPolicy({sorted(self.symbols)!r})"


def classify_row(row: RawCsvRow, is_cash_equivalent: CashEquivalentPolicy) -> TransactionKind:
    """Classify a row, routing trades in cash-equivalent symbols to cash movements."""
    kind = classify_action(row.action)
    if kind in (TransactionKind.PURCHASE, TransactionKind.SALE) and is_cash_equivalent(row.symbol):
        return TransactionKind.CASH_MOVEMENT
    return kind
