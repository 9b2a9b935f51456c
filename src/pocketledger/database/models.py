"""SQLAlchemy models for pocketledger database."""

from datetime import datetime, UTC
from decimal import Decimal
from typing import Optional
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    UniqueConstraint,
    Index,
    create_engine,
    event,
)
from sqlalchemy.engine import Dialect
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session
from sqlalchemy.types import TypeDecorator

Base = declarative_base()


def _utcnow() -> datetime:
    # Naive UTC, as DateTime columns come back from every backend
    return datetime.now(UTC).replace(tzinfo=None)


class Money(TypeDecorator):
    """Exact decimal column.

    Backends with a native NUMERIC keep it; SQLite has none and would round
    trip through float, so values are stored as canonical decimal strings there.
    """

    impl = Numeric
    cache_ok = True

    def __init__(self, precision: int = 14, scale: int = 2):
        super().__init__(precision=precision, scale=scale, asdecimal=True)

    def load_dialect_impl(self, dialect: Dialect):
        if dialect.name == "sqlite":
            return dialect.type_descriptor(String(40))
        return dialect.type_descriptor(self.impl)

    def process_bind_param(self, value: Optional[Decimal], dialect: Dialect):
        if value is None:
            return None
        value = Decimal(value)
        if dialect.name == "sqlite":
            return str(value)
        return value

    def process_result_value(self, value, dialect: Dialect) -> Optional[Decimal]:
        if value is None:
            return None
        return Decimal(str(value))


class Account(Base):
    """Account model."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    owner_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    type = Column(String, nullable=False)
    balance = Column(Money, nullable=False, default=Decimal("0"))
    limit = Column(Money, nullable=True)
    color = Column(String, nullable=False, default="#000000")
    is_archived = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    transactions = relationship("Transaction", back_populates="account")


class Category(Base):
    """Category model."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    owner_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    type = Column(String, nullable=False)
    budget = Column(Money, nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    transactions = relationship("Transaction", back_populates="category")


class Transaction(Base):
    """Transaction model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    owner_id = Column(String, nullable=False, index=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    amount = Column(Money, nullable=False)
    date = Column(Date, nullable=False)
    type = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    account = relationship("Account", back_populates="transactions")
    category = relationship("Category", back_populates="transactions")


class Debt(Base):
    """Debt model."""

    __tablename__ = "debts"

    id = Column(Integer, primary_key=True)
    owner_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    total_amount = Column(Money, nullable=False)
    remaining_amount = Column(Money, nullable=False)
    year = Column(Integer, nullable=False)
    month = Column(Integer, nullable=False)
    payment_year = Column(Integer, nullable=False)
    payment_month = Column(Integer, nullable=False)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=True)
    interest_rate = Column(Money, nullable=True)
    due_date = Column(Integer, nullable=True)
    min_payment = Column(Money, nullable=True)
    status = Column(String, nullable=False, default="active")
    created_at = Column(DateTime, default=_utcnow, nullable=False)


class IncomeEntry(Base):
    """Monthly income entry model."""

    __tablename__ = "income_entries"

    id = Column(Integer, primary_key=True)
    owner_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    amount = Column(Money, nullable=False)
    year = Column(Integer, nullable=False)
    month = Column(Integer, nullable=False)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)


class FixedIncome(Base):
    """Recurring income definition model."""

    __tablename__ = "fixed_incomes"

    id = Column(Integer, primary_key=True)
    owner_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    amount = Column(Money, nullable=False)
    day_of_month = Column(Integer, nullable=False)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    starts_at = Column(DateTime, nullable=False)
    ends_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)


class Investment(Base):
    """Investment model."""

    __tablename__ = "investments"

    id = Column(Integer, primary_key=True)
    owner_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    type = Column(String, nullable=False)
    initial_amount = Column(Money, nullable=False)
    current_value = Column(Money, nullable=False)
    quantity = Column(Money(14, 4), nullable=True)
    ticker = Column(String, nullable=True)
    last_updated = Column(DateTime, default=_utcnow, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    entries = relationship(
        "InvestmentEntry", back_populates="investment", cascade="all, delete-orphan"
    )


class InvestmentEntry(Base):
    """Monthly investment value snapshot model."""

    __tablename__ = "investment_entries"

    id = Column(Integer, primary_key=True)
    owner_id = Column(String, nullable=False, index=True)
    investment_id = Column(Integer, ForeignKey("investments.id"), nullable=False)
    year = Column(Integer, nullable=False)
    month = Column(Integer, nullable=False)
    value = Column(Money, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    # At most one logical value per investment and month
    __table_args__ = (
        UniqueConstraint("investment_id", "year", "month", name="uq_investment_period"),
        Index("ix_investment_entries_period", "investment_id", "year", "month"),
    )

    investment = relationship("Investment", back_populates="entries")


class Goal(Base):
    """Savings goal model."""

    __tablename__ = "goals"

    id = Column(Integer, primary_key=True)
    owner_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    target_amount = Column(Money, nullable=False)
    current_amount = Column(Money, nullable=False, default=Decimal("0"))
    deadline = Column(Date, nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)


class OwnerSettings(Base):
    """Per-owner preferences model."""

    __tablename__ = "owner_settings"

    id = Column(Integer, primary_key=True)
    owner_id = Column(String, nullable=False, unique=True)
    currency = Column(String, nullable=False, default="BRL")
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)


def _serialize_sqlite_writers(engine) -> None:
    """Start every SQLite transaction with BEGIN IMMEDIATE.

    pysqlite only emits BEGIN before DML and SQLite ignores FOR UPDATE, so a
    balance read would otherwise run outside the transaction that writes it.
    BEGIN IMMEDIATE takes the database write lock up front, which serializes
    read-then-write sequences across connections.
    """

    @event.listens_for(engine, "connect")
    def _disable_pysqlite_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    if engine.dialect.name == "sqlite":
        _serialize_sqlite_writers(engine)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
