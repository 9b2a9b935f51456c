"""Domain model entities for pocketledger.

These are pure data classes representing business concepts, independent of
database schema. Every record belongs to exactly one owner and all money
fields are exact decimals.
"""

from dataclasses import dataclass
from datetime import datetime, date
from decimal import Decimal
from typing import Optional

ACCOUNT_TYPES = ("checking", "savings", "credit", "cash", "investment")
LIABILITY_ACCOUNT_TYPES = frozenset({"credit"})
CATEGORY_TYPES = ("income", "expense")
TRANSACTION_TYPES = ("income", "expense", "transfer")
DEBT_STATUSES = ("active", "paid", "defaulted")
INVESTMENT_TYPES = ("stock", "crypto", "bond", "real_estate", "other")
CURRENCIES = ("BRL", "USD")
DEFAULT_CURRENCY = "BRL"


@dataclass(frozen=True)
class Account:
    """Account domain entity."""

    id: int
    owner_id: str
    name: str
    type: str
    balance: Decimal
    limit: Optional[Decimal]
    color: str
    is_archived: bool
    created_at: datetime

    @property
    def is_liability(self) -> bool:
        return self.type in LIABILITY_ACCOUNT_TYPES


@dataclass(frozen=True)
class Category:
    """Category domain entity."""

    id: int
    owner_id: str
    name: str
    type: str
    budget: Optional[Decimal]
    created_at: datetime


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity. `amount` is always unsigned."""

    id: int
    owner_id: str
    account_id: int
    category_id: Optional[int]
    amount: Decimal
    date: date
    type: str
    description: str
    created_at: datetime


@dataclass(frozen=True)
class Debt:
    """Debt domain entity.

    `(year, month)` is the competency period, `(payment_year, payment_month)`
    the period in which the debt is paid.
    """

    id: int
    owner_id: str
    name: str
    total_amount: Decimal
    remaining_amount: Decimal
    year: int
    month: int
    payment_year: int
    payment_month: int
    account_id: Optional[int]
    interest_rate: Optional[Decimal]
    due_date: Optional[int]
    min_payment: Optional[Decimal]
    status: str
    created_at: datetime


@dataclass(frozen=True)
class IncomeEntry:
    """Income attributed to an account for a given month."""

    id: int
    owner_id: str
    name: str
    amount: Decimal
    year: int
    month: int
    account_id: int
    category_id: Optional[int]
    created_at: datetime


@dataclass(frozen=True)
class FixedIncome:
    """Recurring monthly income definition, active between starts_at and ends_at."""

    id: int
    owner_id: str
    name: str
    amount: Decimal
    day_of_month: int
    account_id: int
    category_id: Optional[int]
    starts_at: datetime
    ends_at: Optional[datetime]
    created_at: datetime

    def is_active_between(self, start: datetime, end: datetime) -> bool:
        """Whether the definition overlaps the [start, end] window."""
        return self.starts_at <= end and (self.ends_at is None or self.ends_at >= start)


@dataclass(frozen=True)
class Investment:
    """Investment domain entity."""

    id: int
    owner_id: str
    name: str
    type: str
    initial_amount: Decimal
    current_value: Decimal
    quantity: Optional[Decimal]
    ticker: Optional[str]
    last_updated: datetime
    created_at: datetime


@dataclass(frozen=True)
class InvestmentEntry:
    """Monthly value snapshot of an investment."""

    id: int
    owner_id: str
    investment_id: int
    year: int
    month: int
    value: Decimal
    created_at: datetime

    @property
    def period(self) -> tuple[int, int]:
        return (self.year, self.month)


@dataclass(frozen=True)
class Goal:
    """Savings goal. Progress is tracked by hand and never touches a balance."""

    id: int
    owner_id: str
    name: str
    target_amount: Decimal
    current_amount: Decimal
    deadline: Optional[date]
    created_at: datetime

    @property
    def progress(self) -> Decimal:
        """Fraction of the target reached, 0 for an empty target."""
        if self.target_amount == 0:
            return Decimal("0")
        return self.current_amount / self.target_amount


@dataclass(frozen=True)
class MonthlyIncomeTotal:
    """Income totals for one month of an annual summary."""

    month: int
    fixed_total: Decimal
    variable_total: Decimal

    @property
    def total(self) -> Decimal:
        return self.fixed_total + self.variable_total


@dataclass(frozen=True)
class AnnualIncomeSummary:
    """Twelve monthly income totals for a year."""

    year: int
    months: tuple[MonthlyIncomeTotal, ...]
