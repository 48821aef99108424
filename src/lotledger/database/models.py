"""SQLAlchemy models for the lotledger database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    Index,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()

# Share counts carry fractional shares from reinvestments
QUANTITY = Numeric(18, 6)
PRICE = Numeric(18, 6)
MONEY = Numeric(14, 2)


class Account(Base):
    """Brokerage account model."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    trades = relationship("Trade", back_populates="account")
    div_deposits = relationship("DivDeposit", back_populates="account")


class RiskGroup(Base):
    """Risk group model."""

    __tablename__ = "risk_group"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)

    symbols = relationship("Universe", back_populates="risk_group")


class Universe(Base):
    """Tradable symbol model."""

    __tablename__ = "universe"

    id = Column(Integer, primary_key=True)
    symbol = Column(String, unique=True, nullable=False)
    risk_group_id = Column(Integer, ForeignKey("risk_group.id"), nullable=False)
    last_price = Column(PRICE, default=0, nullable=False)
    distribution = Column(PRICE, default=0, nullable=False)
    distributions_per_year = Column(Integer, default=0, nullable=False)
    ex_date = Column(Date, nullable=True)
    most_recent_sell_date = Column(Date, nullable=True)
    expired = Column(Boolean, default=False, nullable=False)
    is_closed_end_fund = Column(Boolean, default=True, nullable=False)

    # Relationships
    risk_group = relationship("RiskGroup", back_populates="symbols")
    trades = relationship("Trade", back_populates="universe")


class DivDepositType(Base):
    """Deposit type model."""

    __tablename__ = "div_deposit_types"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)


class Trade(Base):
    """Lot model: one buy, optionally closed by a sell."""

    __tablename__ = "trades"

    id = Column(Integer, primary_key=True)
    universe_id = Column(Integer, ForeignKey("universe.id"), nullable=False)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    buy = Column(PRICE, nullable=False)
    sell = Column(PRICE, default=0, nullable=False)
    buy_date = Column(Date, nullable=False)
    sell_date = Column(Date, nullable=True)
    quantity = Column(QUANTITY, nullable=False)
    # Set on pieces split off by a partial sale
    parent_lot_id = Column(Integer, ForeignKey("trades.id"), nullable=True)

    __table_args__ = (
        Index("ix_trades_universe_account", "universe_id", "account_id"),
    )

    # Relationships
    account = relationship("Account", back_populates="trades")
    universe = relationship("Universe", back_populates="trades")


class DivDeposit(Base):
    """Dividend or cash deposit model."""

    __tablename__ = "div_deposits"

    id = Column(Integer, primary_key=True)
    date = Column(Date, nullable=False)
    amount = Column(MONEY, nullable=False)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    div_deposit_type_id = Column(Integer, ForeignKey("div_deposit_types.id"), nullable=False)
    universe_id = Column(Integer, ForeignKey("universe.id"), nullable=True)

    # Relationships
    account = relationship("Account", back_populates="div_deposits")
    deposit_type = relationship("DivDepositType")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
