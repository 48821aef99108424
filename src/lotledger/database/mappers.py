"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the ledger code never sees ORM
instances or their session state.
"""

from decimal import Decimal

from lotledger.domain import entities as domain
from lotledger.database.models import (
    Account as ORMAccount,
    RiskGroup as ORMRiskGroup,
    Universe as ORMUniverse,
    DivDepositType as ORMDivDepositType,
    Trade as ORMTrade,
    DivDeposit as ORMDivDeposit,
)


def _decimal(value) -> Decimal:
    # SQLite hands Numeric columns back as Decimal, but unflushed defaults
    # may still be plain ints
    return value if isinstance(value, Decimal) else Decimal(str(value))


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        name=orm_account.name,
        created_at=orm_account.created_at,
    )


def risk_group_to_domain(orm_group: ORMRiskGroup) -> domain.RiskGroup:
    """Convert SQLAlchemy RiskGroup model to domain RiskGroup entity."""
    return domain.RiskGroup(id=orm_group.id, name=orm_group.name)


def symbol_to_domain(orm_symbol: ORMUniverse) -> domain.UniverseSymbol:
    """Convert SQLAlchemy Universe model to domain UniverseSymbol entity."""
    return domain.UniverseSymbol(
        id=orm_symbol.id,
        symbol=orm_symbol.symbol,
        risk_group_id=orm_symbol.risk_group_id,
        last_price=_decimal(orm_symbol.last_price),
        distribution=_decimal(orm_symbol.distribution),
        distributions_per_year=orm_symbol.distributions_per_year,
        ex_date=orm_symbol.ex_date,
        most_recent_sell_date=orm_symbol.most_recent_sell_date,
        expired=orm_symbol.expired,
        is_closed_end_fund=orm_symbol.is_closed_end_fund,
    )


def deposit_type_to_domain(orm_type: ORMDivDepositType) -> domain.DepositType:
    """Convert SQLAlchemy DivDepositType model to domain DepositType entity."""
    return domain.DepositType(id=orm_type.id, name=orm_type.name)


def lot_to_domain(orm_trade: ORMTrade) -> domain.Lot:
    """Convert SQLAlchemy Trade model to domain Lot entity."""
    return domain.Lot(
        id=orm_trade.id,
        universe_id=orm_trade.universe_id,
        account_id=orm_trade.account_id,
        buy=_decimal(orm_trade.buy),
        sell=_decimal(orm_trade.sell),
        buy_date=orm_trade.buy_date,
        sell_date=orm_trade.sell_date,
        quantity=_decimal(orm_trade.quantity),
        parent_lot_id=orm_trade.parent_lot_id,
    )


def deposit_to_domain(orm_deposit: ORMDivDeposit) -> domain.Deposit:
    """Convert SQLAlchemy DivDeposit model to domain Deposit entity."""
    return domain.Deposit(
        id=orm_deposit.id,
        date=orm_deposit.date,
        amount=_decimal(orm_deposit.amount),
        account_id=orm_deposit.account_id,
        div_deposit_type_id=orm_deposit.div_deposit_type_id,
        universe_id=orm_deposit.universe_id,
    )
