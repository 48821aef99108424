"""Ledger reconciliation: applies mapped intents to lots and deposits.

Every write is preceded by an existence check, so importing the same file
twice leaves the ledger unchanged. Sales are matched against open lots
first-in, first-out. Items are processed independently: one failure is
recorded and the rest still run.
"""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Optional

from lotledger.database.base import Database
from lotledger.domain.entities import (
    ImportResult,
    Lot,
    MappedDivDeposit,
    MappedSale,
    MappedTrade,
    MappedTransactions,
    UnknownTransaction,
)
from lotledger.domain.errors import (
    ReconciliationError,
    insufficient_open_quantity,
    no_open_lots,
    unknown_transaction,
)
from lotledger.utils.logging import get_logger

logger = get_logger(__name__)

PURCHASE_STAGE = "Failed to import purchase"
SALE_STAGE = "Failed to import sale"
DEPOSIT_STAGE = "Failed to import deposit"

SaleKey = tuple[int, int, Decimal, date]


class LedgerReconciler:
    """Service that persists mapped transactions into the lot ledger."""

    def __init__(self, db: Database):
        """Initialize ledger reconciler.

        Args:
            db: Database instance
        """
        self.db = db

    def reconcile(self, mapped: MappedTransactions) -> ImportResult:
        """Apply all purchases, then sales, then deposits.

        Never raises for an individual item; failures are collected in
        ``errors`` with a stage prefix.

        Returns:
            ImportResult with the number of items applied or already present
        """
        errors: list[str] = []
        warnings = collect_unknown_warnings(mapped.unknown_transactions)
        # Closed quantity per (universe, account, sell, sell_date) that this
        # call has already matched a sale against
        sale_claims: dict[SaleKey, Decimal] = defaultdict(Decimal)

        imported = 0
        for trade in mapped.trades:
            try:
                self.process_purchase(trade)
                imported += 1
            except Exception as e:
                self._record(errors, PURCHASE_STAGE, e)

        for sale in mapped.sales:
            try:
                self.process_sale(sale, sale_claims)
                imported += 1
            except Exception as e:
                self._record(errors, SALE_STAGE, e)

        for deposit in mapped.div_deposits:
            try:
                self.process_deposit(deposit)
                imported += 1
            except Exception as e:
                self._record(errors, DEPOSIT_STAGE, e)

        logger.info(
            "Reconciled %d items with %d errors and %d warnings",
            imported,
            len(errors),
            len(warnings),
        )
        return ImportResult(
            success=not errors,
            imported=imported,
            errors=errors,
            warnings=warnings,
        )

    @staticmethod
    def _record(errors: list[str], stage: str, error: Exception) -> None:
        message = f"{stage}: {error}"
        logger.warning(message)
        errors.append(message)

    def process_purchase(self, trade: MappedTrade) -> bool:
        """Create an open lot unless this purchase is already in the ledger.

        A purchase is present when a lot with its universe, account, price
        and date was bought in the same quantity. For a lot that partial
        sales have split, that is the lot's remaining quantity plus the
        pieces split off from it; other fills of the same day never count.

        Returns:
            True if a lot was created, False if it was skipped as a duplicate
        """
        with self.db.transaction():
            lots = self.db.find_lot(trade.universe_id, trade.account_id, trade.buy, trade.buy_date)
            if any(quantity == trade.quantity for quantity in purchased_quantities(lots)):
                logger.debug("Purchase %s already recorded", trade)
                return False

            self.db.create_lot(
                universe_id=trade.universe_id,
                account_id=trade.account_id,
                buy=trade.buy,
                buy_date=trade.buy_date,
                quantity=trade.quantity,
            )
        return True

    def process_sale(
        self, sale: MappedSale, claims: Optional[dict[SaleKey, Decimal]] = None
    ) -> bool:
        """Close open lots for a sale, oldest first.

        All lot changes for one sale are committed together; if any of them
        fails the ledger is left as it was.

        Args:
            sale: Sale to apply; the sign of its quantity is ignored
            claims: Closed quantity already matched by earlier sales in the
                same import, keyed by universe, account, sell price and date

        Returns:
            True if lots were closed, False if the sale was already applied

        Raises:
            ReconciliationError: If the open lots cannot cover the sale
        """
        if claims is None:
            claims = defaultdict(Decimal)
        quantity = abs(sale.quantity)
        if quantity == 0:
            raise ReconciliationError(f"Sale of {self._symbol_name(sale.universe_id)} has zero quantity")

        key: SaleKey = (sale.universe_id, sale.account_id, sale.sell, sale.sell_date)
        with self.db.transaction():
            applied = self._apply_sale(sale, key, quantity, claims)
        claims[key] += quantity
        return applied

    def _apply_sale(
        self, sale: MappedSale, key: SaleKey, quantity: Decimal, claims: dict[SaleKey, Decimal]
    ) -> bool:
        closed = self.db.list_closed_lots(*key)
        unclaimed = sum((lot.quantity for lot in closed), Decimal("0")) - claims[key]
        if unclaimed >= quantity:
            logger.debug("Sale %s already recorded", sale)
            return False

        open_lots = self.db.list_open_lots(sale.universe_id, sale.account_id)
        if not open_lots:
            raise ReconciliationError(
                no_open_lots(
                    self._account_name(sale.account_id),
                    self._symbol_name(sale.universe_id),
                    quantity,
                )
            )

        open_quantity = sum((lot.quantity for lot in open_lots), Decimal("0"))
        if open_quantity < quantity:
            raise ReconciliationError(
                insufficient_open_quantity(
                    self._account_name(sale.account_id),
                    self._symbol_name(sale.universe_id),
                    quantity,
                    open_quantity,
                )
            )

        exact = next((lot for lot in open_lots if lot.quantity == quantity), None)
        if exact is not None:
            self._close_lot(exact, sale)
        else:
            self._consume_fifo(open_lots, quantity, sale)
        return True

    def _consume_fifo(self, open_lots: list[Lot], quantity: Decimal, sale: MappedSale) -> None:
        remaining = quantity
        for lot in open_lots:
            if remaining == 0:
                break
            if lot.quantity <= remaining:
                self._close_lot(lot, sale)
                remaining -= lot.quantity
            else:
                self._split_lot(lot, remaining, sale)
                remaining = Decimal("0")

    def _close_lot(self, lot: Lot, sale: MappedSale) -> None:
        logger.debug("Closing lot %d (%s shares) at %s", lot.id, lot.quantity, sale.sell)
        self.db.update_lot(lot.id, sell=sale.sell, sell_date=sale.sell_date)

    def _split_lot(self, lot: Lot, sold: Decimal, sale: MappedSale) -> None:
        logger.debug("Splitting lot %d: %s of %s shares sold", lot.id, sold, lot.quantity)
        self.db.create_lot(
            universe_id=lot.universe_id,
            account_id=lot.account_id,
            buy=lot.buy,
            buy_date=lot.buy_date,
            quantity=sold,
            sell=sale.sell,
            sell_date=sale.sell_date,
            parent_lot_id=lot.parent_lot_id or lot.id,
        )
        self.db.update_lot(lot.id, quantity=lot.quantity - sold)

    def process_deposit(self, deposit: MappedDivDeposit) -> bool:
        """Record a dividend or cash deposit unless an identical one exists.

        Returns:
            True if a deposit was created, False if it was skipped
        """
        fields = dict(
            date=deposit.date,
            amount=deposit.amount,
            account_id=deposit.account_id,
            div_deposit_type_id=deposit.div_deposit_type_id,
            universe_id=deposit.universe_id,
        )
        with self.db.transaction():
            if self.db.find_deposit(**fields) is not None:
                logger.debug("Deposit %s already recorded", deposit)
                return False
            self.db.create_deposit(**fields)
        return True

    def _account_name(self, account_id: int) -> str:
        account = self.db.get_account(account_id)
        return account.name if account is not None else str(account_id)

    def _symbol_name(self, universe_id: int) -> str:
        entry = self.db.get_symbol(universe_id)
        return entry.symbol if entry is not None else str(universe_id)


def collect_unknown_warnings(unknowns: list[UnknownTransaction]) -> list[str]:
    """Return one warning string per unrecognised row."""
    return [unknown_transaction(u.action, u.symbol, u.date) for u in unknowns]


def purchased_quantities(lots: list[Lot]) -> list[Decimal]:
    """Return the bought quantity of each purchase among lots sharing a purchase key.

    Pieces split off by partial sales are folded back into the lot they
    came from.
    """
    bought = {lot.id: lot.quantity for lot in lots if lot.parent_lot_id is None}
    for lot in lots:
        if lot.parent_lot_id in bought:
            bought[lot.parent_lot_id] += lot.quantity
    return list(bought.values())
