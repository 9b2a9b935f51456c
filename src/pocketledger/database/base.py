"""Abstract database interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Optional, Any, Mapping
from datetime import date, datetime
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from pocketledger.domain.entities import (
    Account,
    Category,
    Transaction,
    Debt,
    IncomeEntry,
    FixedIncome,
    Investment,
    InvestmentEntry,
    Goal,
)


class Database(ABC):
    """Abstract database interface for pocketledger.

    Every read and write is scoped by owner: a record that belongs to another
    owner is reported exactly like a missing one (None / False). Getters called
    with for_update=True lock the row until the enclosing transaction() ends.
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
        """Group store calls into one atomic unit.

        Everything executed inside the block commits together on normal exit
        and rolls back entirely if an exception escapes. Nested blocks join
        the outermost one.
        """
        pass

    # Account operations
    @abstractmethod
    def create_account(
        self,
        owner_id: str,
        name: str,
        type: str,
        balance: Decimal,
        limit: Optional[Decimal] = None,
        color: str = "#000000",
    ) -> Account:
        """Create a new account."""
        pass

    @abstractmethod
    def get_account(self, account_id: int, owner_id: str) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def list_accounts(self, owner_id: str, include_archived: bool = False) -> list[Account]:
        """List accounts, hiding archived ones unless asked."""
        pass

    @abstractmethod
    def update_account(
        self, account_id: int, owner_id: str, changes: Mapping[str, Any]
    ) -> Optional[Account]:
        """Update descriptive account fields (name, type, limit, color, is_archived)."""
        pass

    @abstractmethod
    def adjust_account_balance(
        self, account_id: int, owner_id: str, delta: Decimal
    ) -> Optional[Account]:
        """Add delta to the account balance under a row lock.

        Returns the updated account, or None if it does not exist.
        """
        pass

    # Category operations
    @abstractmethod
    def create_category(
        self, owner_id: str, name: str, type: str, budget: Optional[Decimal] = None
    ) -> Category:
        """Create a category."""
        pass

    @abstractmethod
    def get_category(self, category_id: int, owner_id: str) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def list_categories(self, owner_id: str) -> list[Category]:
        """List categories."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        owner_id: str,
        account_id: int,
        amount: Decimal,
        date: date,
        type: str,
        description: str = "",
        category_id: Optional[int] = None,
    ) -> Transaction:
        """Create a transaction."""
        pass

    @abstractmethod
    def get_transaction(
        self, transaction_id: int, owner_id: str, for_update: bool = False
    ) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def update_transaction(
        self, transaction_id: int, owner_id: str, changes: Mapping[str, Any]
    ) -> Optional[Transaction]:
        """Update transaction columns given in changes."""
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: int, owner_id: str) -> bool:
        """Delete a transaction. Returns False if it did not exist."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        owner_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        account_id: Optional[int] = None,
        category_id: Optional[int] = None,
        type: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[Transaction]:
        """List transactions, newest first, with optional filters."""
        pass

    # Debt operations
    @abstractmethod
    def create_debt(
        self,
        owner_id: str,
        name: str,
        total_amount: Decimal,
        remaining_amount: Decimal,
        year: int,
        month: int,
        payment_year: int,
        payment_month: int,
        status: str = "active",
        account_id: Optional[int] = None,
        interest_rate: Optional[Decimal] = None,
        due_date: Optional[int] = None,
        min_payment: Optional[Decimal] = None,
    ) -> Debt:
        """Create a debt."""
        pass

    @abstractmethod
    def get_debt(self, debt_id: int, owner_id: str, for_update: bool = False) -> Optional[Debt]:
        """Get debt by ID."""
        pass

    @abstractmethod
    def update_debt(self, debt_id: int, owner_id: str, changes: Mapping[str, Any]) -> Optional[Debt]:
        """Update debt columns given in changes."""
        pass

    @abstractmethod
    def delete_debt(self, debt_id: int, owner_id: str) -> bool:
        """Delete a debt. Returns False if it did not exist."""
        pass

    @abstractmethod
    def list_debts(self, owner_id: str) -> list[Debt]:
        """List debts."""
        pass

    # Income entry operations
    @abstractmethod
    def create_income_entry(
        self,
        owner_id: str,
        name: str,
        amount: Decimal,
        year: int,
        month: int,
        account_id: int,
        category_id: Optional[int] = None,
    ) -> IncomeEntry:
        """Create an income entry."""
        pass

    @abstractmethod
    def get_income_entry(
        self, entry_id: int, owner_id: str, for_update: bool = False
    ) -> Optional[IncomeEntry]:
        """Get income entry by ID."""
        pass

    @abstractmethod
    def update_income_entry(
        self, entry_id: int, owner_id: str, changes: Mapping[str, Any]
    ) -> Optional[IncomeEntry]:
        """Update income entry columns given in changes."""
        pass

    @abstractmethod
    def delete_income_entry(self, entry_id: int, owner_id: str) -> bool:
        """Delete an income entry. Returns False if it did not exist."""
        pass

    @abstractmethod
    def list_income_entries(self, owner_id: str, year: Optional[int] = None) -> list[IncomeEntry]:
        """List income entries, optionally for one year."""
        pass

    # Fixed income operations
    @abstractmethod
    def create_fixed_income(
        self,
        owner_id: str,
        name: str,
        amount: Decimal,
        day_of_month: int,
        account_id: int,
        starts_at: datetime,
        category_id: Optional[int] = None,
    ) -> FixedIncome:
        """Create a fixed income definition."""
        pass

    @abstractmethod
    def get_fixed_income(
        self, fixed_id: int, owner_id: str, for_update: bool = False
    ) -> Optional[FixedIncome]:
        """Get fixed income definition by ID."""
        pass

    @abstractmethod
    def update_fixed_income(
        self, fixed_id: int, owner_id: str, changes: Mapping[str, Any]
    ) -> Optional[FixedIncome]:
        """Update fixed income columns given in changes."""
        pass

    @abstractmethod
    def list_fixed_incomes(self, owner_id: str) -> list[FixedIncome]:
        """List all fixed income definitions, including closed ones."""
        pass

    # Investment operations
    @abstractmethod
    def create_investment(
        self,
        owner_id: str,
        name: str,
        type: str,
        initial_amount: Decimal,
        current_value: Decimal,
        quantity: Optional[Decimal] = None,
        ticker: Optional[str] = None,
    ) -> Investment:
        """Create an investment."""
        pass

    @abstractmethod
    def get_investment(
        self, investment_id: int, owner_id: str, for_update: bool = False
    ) -> Optional[Investment]:
        """Get investment by ID."""
        pass

    @abstractmethod
    def list_investments(self, owner_id: str) -> list[Investment]:
        """List investments."""
        pass

    @abstractmethod
    def update_investment(
        self, investment_id: int, owner_id: str, changes: Mapping[str, Any]
    ) -> Optional[Investment]:
        """Update investment columns given in changes."""
        pass

    @abstractmethod
    def adjust_investment_value(
        self, investment_id: int, owner_id: str, delta: Decimal, last_updated: datetime
    ) -> Optional[Investment]:
        """Add delta to the investment's current value under a row lock."""
        pass

    @abstractmethod
    def delete_investment(self, investment_id: int, owner_id: str) -> bool:
        """Delete an investment and its entries. Returns False if it did not exist."""
        pass

    # Investment entry operations
    @abstractmethod
    def create_investment_entry(
        self, owner_id: str, investment_id: int, year: int, month: int, value: Decimal
    ) -> InvestmentEntry:
        """Create an investment entry."""
        pass

    @abstractmethod
    def get_investment_entry(
        self, entry_id: int, owner_id: str, for_update: bool = False
    ) -> Optional[InvestmentEntry]:
        """Get investment entry by ID."""
        pass

    @abstractmethod
    def get_investment_entry_by_period(
        self, investment_id: int, year: int, month: int
    ) -> Optional[InvestmentEntry]:
        """Get the entry of an investment for one month, locking it for update."""
        pass

    @abstractmethod
    def update_investment_entry_value(self, entry_id: int, value: Decimal) -> Optional[InvestmentEntry]:
        """Overwrite an entry's value."""
        pass

    @abstractmethod
    def get_latest_investment_entry(self, investment_id: int) -> Optional[InvestmentEntry]:
        """Get the entry with the greatest (year, month) for an investment."""
        pass

    @abstractmethod
    def list_investment_entries(
        self,
        owner_id: str,
        year: Optional[int] = None,
        investment_id: Optional[int] = None,
    ) -> list[InvestmentEntry]:
        """List investment entries ordered by investment, year and month."""
        pass

    # Goal operations
    @abstractmethod
    def create_goal(
        self,
        owner_id: str,
        name: str,
        target_amount: Decimal,
        current_amount: Decimal,
        deadline: Optional[date] = None,
    ) -> Goal:
        """Create a savings goal."""
        pass

    @abstractmethod
    def get_goal(self, goal_id: int, owner_id: str) -> Optional[Goal]:
        """Get goal by ID."""
        pass

    @abstractmethod
    def update_goal(self, goal_id: int, owner_id: str, changes: Mapping[str, Any]) -> Optional[Goal]:
        """Update goal columns given in changes."""
        pass

    @abstractmethod
    def list_goals(self, owner_id: str) -> list[Goal]:
        """List goals in creation order."""
        pass

    # Owner settings
    @abstractmethod
    def get_currency(self, owner_id: str) -> str:
        """Get the owner's display currency, BRL when never set."""
        pass

    @abstractmethod
    def set_currency(self, owner_id: str, currency: str) -> str:
        """Store the owner's display currency."""
        pass
