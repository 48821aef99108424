"""Maps parsed export rows onto ledger intents.

Each row is classified, its account, symbol and deposit type are resolved
against reference data (created when missing), and the result is sorted
into purchases, sales, deposits and unknown rows. Mapping is all-or-nothing:
the first row that cannot be resolved aborts the whole call. Reference rows
created for earlier rows in that call are not rolled back.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from lotledger.config import DEFAULT_RISK_GROUP
from lotledger.database.base import Database
from lotledger.domain.account import AccountService
from lotledger.domain.classification import CashEquivalentPolicy, TransactionKind, classify_row
from lotledger.domain.entities import (
    MappedDivDeposit,
    MappedSale,
    MappedTrade,
    MappedTransactions,
    RawCsvRow,
    UnknownTransaction,
)
from lotledger.domain.errors import (
    DomainError,
    ResolutionError,
    ValidationError,
    invalid_date,
    negative_purchase_quantity,
)
from lotledger.utils.date_parser import parse_trade_date
from lotledger.utils.logging import get_logger

logger = get_logger(__name__)

DIVIDEND_TYPE = "Dividend"
CASH_DEPOSIT_TYPE = "Cash Deposit"


@dataclass
class _MappingRun:
    """Lookups resolved during one map_rows call. Never shared between calls."""

    accounts: dict[str, int] = field(default_factory=dict)
    symbols: dict[str, int] = field(default_factory=dict)
    deposit_types: dict[str, int] = field(default_factory=dict)
    risk_group_id: Optional[int] = None


class TransactionMapper:
    """Service that turns RawCsvRows into MappedTransactions."""

    def __init__(
        self,
        db: Database,
        cash_equivalents: CashEquivalentPolicy | Iterable[str] | None = None,
        default_risk_group: str = DEFAULT_RISK_GROUP,
    ):
        """Initialize transaction mapper.

        Args:
            db: Database instance
            cash_equivalents: Policy or tickers treated as cash; defaults to
                the money-market sweep symbols
            default_risk_group: Risk group given to auto-created symbols
        """
        self.db = db
        self.account_service = AccountService(db)
        if not isinstance(cash_equivalents, CashEquivalentPolicy):
            cash_equivalents = CashEquivalentPolicy(cash_equivalents)
        self.is_cash_equivalent = cash_equivalents
        self.default_risk_group = default_risk_group

    def map_rows(self, rows: list[RawCsvRow]) -> MappedTransactions:
        """Classify and resolve rows, in input order.

        Raises:
            DomainError: ResolutionError or ValidationError for the first row
                that cannot be mapped, prefixed with its row number
        """
        result = MappedTransactions()
        run = _MappingRun()

        for row_num, row in enumerate(rows, start=2):  # Header is row 1
            try:
                self._map_row(row, run, result)
            except DomainError as e:
                raise type(e)(f"Row {row_num}: {e}") from e

        logger.info(
            "Mapped %d rows: %d purchases, %d sales, %d deposits, %d unknown",
            len(rows),
            len(result.trades),
            len(result.sales),
            len(result.div_deposits),
            len(result.unknown_transactions),
        )
        return result

    def _map_row(self, row: RawCsvRow, run: _MappingRun, result: MappedTransactions) -> None:
        kind = classify_row(row, self.is_cash_equivalent)
        logger.debug("Row %r classified as %s", row.action, kind.value)

        if kind is TransactionKind.UNKNOWN:
            result.unknown_transactions.append(
                UnknownTransaction(
                    date=row.date,
                    action=row.action,
                    symbol=row.symbol,
                    description=row.description,
                )
            )
            return

        account_id = self._resolve_account(row.account, run)
        txn_date = self._parse_date(row.date)

        if kind is TransactionKind.PURCHASE:
            if row.quantity < 0:
                raise ValidationError(negative_purchase_quantity(row.symbol, row.quantity))
            if not row.symbol:
                raise ValidationError("Purchase is missing a symbol")
            result.trades.append(
                MappedTrade(
                    universe_id=self._resolve_symbol(row.symbol, run),
                    account_id=account_id,
                    buy=row.price,
                    buy_date=txn_date,
                    quantity=row.quantity,
                )
            )

        elif kind is TransactionKind.SALE:
            universe_id = self._find_symbol(row.symbol, run)
            if universe_id is None:
                # Sale of a symbol never bought here: record the proceeds as cash
                logger.info("Sale of unknown symbol %r recorded as cash deposit", row.symbol)
                result.div_deposits.append(self._cash_movement(row, account_id, txn_date, run))
                return
            result.sales.append(
                MappedSale(
                    universe_id=universe_id,
                    account_id=account_id,
                    sell=row.price,
                    sell_date=txn_date,
                    quantity=row.quantity,
                )
            )

        elif kind is TransactionKind.DIVIDEND:
            universe_id = self._resolve_symbol(row.symbol, run) if row.symbol else None
            result.div_deposits.append(
                MappedDivDeposit(
                    date=txn_date,
                    amount=row.total_amount,
                    account_id=account_id,
                    div_deposit_type_id=self._resolve_deposit_type(DIVIDEND_TYPE, run),
                    universe_id=universe_id,
                )
            )

        else:
            result.div_deposits.append(self._cash_movement(row, account_id, txn_date, run))

    def _cash_movement(
        self, row: RawCsvRow, account_id: int, txn_date: date, run: _MappingRun
    ) -> MappedDivDeposit:
        return MappedDivDeposit(
            date=txn_date,
            amount=row.total_amount,
            account_id=account_id,
            div_deposit_type_id=self._resolve_deposit_type(CASH_DEPOSIT_TYPE, run),
            universe_id=None,
        )

    def _parse_date(self, date_str: str) -> date:
        try:
            return parse_trade_date(date_str)
        except ValueError:
            raise ResolutionError(invalid_date(date_str))

    def _resolve_account(self, name: str, run: _MappingRun) -> int:
        if not name:
            raise ResolutionError("Account name is required")
        if name not in run.accounts:
            run.accounts[name] = self.account_service.find_or_create(name)
        return run.accounts[name]

    def _find_symbol(self, symbol: str, run: _MappingRun) -> Optional[int]:
        if symbol in run.symbols:
            return run.symbols[symbol]
        entry = self.db.get_symbol_by_ticker(symbol) if symbol else None
        if entry is None:
            return None
        run.symbols[symbol] = entry.id
        return entry.id

    def _resolve_symbol(self, symbol: str, run: _MappingRun) -> int:
        universe_id = self._find_symbol(symbol, run)
        if universe_id is None:
            logger.info("Adding %s to universe in risk group '%s'", symbol, self.default_risk_group)
            universe_id = self.db.create_symbol(symbol, self._resolve_risk_group(run))
            run.symbols[symbol] = universe_id
        return universe_id

    def _resolve_risk_group(self, run: _MappingRun) -> int:
        if run.risk_group_id is None:
            group = self.db.get_risk_group_by_name(self.default_risk_group)
            if group is not None:
                run.risk_group_id = group.id
            else:
                run.risk_group_id = self.db.create_risk_group(self.default_risk_group)
        return run.risk_group_id

    def _resolve_deposit_type(self, name: str, run: _MappingRun) -> int:
        if name not in run.deposit_types:
            deposit_type = self.db.get_deposit_type_by_name(name)
            if deposit_type is not None:
                run.deposit_types[name] = deposit_type.id
            else:
                logger.info("Creating deposit type '%s'", name)
                run.deposit_types[name] = self.db.create_deposit_type(name)
        return run.deposit_types[name]
