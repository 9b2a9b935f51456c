"""Income domain service: monthly income entries and fixed incomes."""

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Callable, Optional

from pocketledger.database.base import Database
from pocketledger.domain.entities import (
    AnnualIncomeSummary,
    FixedIncome,
    IncomeEntry,
    MonthlyIncomeTotal,
)
from pocketledger.domain.errors import ConsistencyError, ValidationError, income_entry_not_found
from pocketledger.domain.policies import BalanceCutover, IncomeEntryPolicy
from pocketledger.domain.posting import PostingEngine
from pocketledger.domain.references import require_account, require_category
from pocketledger.domain.validation import (
    require_day_of_month,
    require_month,
    require_positive,
    require_text,
    require_year,
)
from pocketledger.utils.date_parser import end_of_month, first_day_next_month

logger = logging.getLogger(__name__)


class IncomeService:
    """Service for income entries and fixed income definitions.

    Income entries credit their account once their month reaches the
    balance cutover. Fixed incomes only feed projections and summaries;
    they never move a balance. Changes to a fixed income apply from the
    next month on, so months already under way keep their history.
    """

    def __init__(
        self,
        db: Database,
        cutover: BalanceCutover,
        now: Optional[Callable[[], datetime]] = None,
    ):
        """Initialize income service.

        Args:
            db: Database instance
            cutover: First (year, month) whose entries post to balances
            now: Clock returning naive local datetimes (defaults to datetime.now)
        """
        self.db = db
        self.policy = IncomeEntryPolicy(cutover)
        self.posting = PostingEngine(db)
        self.now = now or datetime.now

    # Income entries

    def create_entry(
        self,
        owner_id: str,
        name: str,
        amount: Any,
        year: int,
        month: int,
        account_id: int,
        category_id: Optional[int] = None,
    ) -> IncomeEntry:
        """Create an income entry and credit its account when tracked.

        Raises:
            ValidationError: If input is invalid
            NotFoundError: If account or category doesn't exist for this owner
        """
        name = require_text(name, "name")
        amount = require_positive(amount, "amount")
        year = require_year(year)
        month = require_month(month)

        with self.db.transaction():
            require_account(self.db, account_id, owner_id)
            require_category(self.db, category_id, owner_id)
            entry = self.db.create_income_entry(
                owner_id=owner_id,
                name=name,
                amount=amount,
                year=year,
                month=month,
                account_id=account_id,
                category_id=category_id,
            )
            self.posting.apply_transition(owner_id, None, self.policy.effect(entry))

        logger.debug("Created income entry %s for %04d-%02d", entry.id, year, month)
        return entry

    def update_entry(
        self,
        owner_id: str,
        entry_id: int,
        name: Optional[str] = None,
        amount: Any = None,
        year: Optional[int] = None,
        month: Optional[int] = None,
        account_id: Optional[int] = None,
        category_id: Optional[int] = None,
        clear_category: bool = False,
    ) -> Optional[IncomeEntry]:
        """Update an income entry and move its balance effect.

        Returns:
            Updated entry, or None if the owner has no such entry

        Raises:
            ValidationError: If input is invalid
            NotFoundError: If the new account or category doesn't exist
        """
        changes: dict[str, Any] = {}
        if name is not None:
            changes["name"] = require_text(name, "name")
        if amount is not None:
            changes["amount"] = require_positive(amount, "amount")
        if year is not None:
            changes["year"] = require_year(year)
        if month is not None:
            changes["month"] = require_month(month)
        if clear_category:
            if category_id is not None:
                raise ValidationError("Cannot set both category_id and clear_category")
            changes["category_id"] = None

        with self.db.transaction():
            existing = self.db.get_income_entry(entry_id, owner_id, for_update=True)
            if existing is None:
                logger.info("Update requested for unknown income entry %s", entry_id)
                return None
            if account_id is not None:
                require_account(self.db, account_id, owner_id)
                changes["account_id"] = account_id
            if category_id is not None:
                require_category(self.db, category_id, owner_id)
                changes["category_id"] = category_id

            updated = existing
            if changes:
                updated = self.db.update_income_entry(entry_id, owner_id, changes)
            self.posting.apply_transition(
                owner_id, self.policy.effect(existing), self.policy.effect(updated)
            )

        return updated

    def delete_entry(self, owner_id: str, entry_id: int) -> bool:
        """Delete an income entry, reverting its credit if it was posted.

        Returns:
            False if the owner has no such entry
        """
        with self.db.transaction():
            existing = self.db.get_income_entry(entry_id, owner_id, for_update=True)
            if existing is None:
                logger.info("Delete requested for unknown income entry %s", entry_id)
                return False
            self.posting.apply_transition(owner_id, self.policy.effect(existing), None)
            if not self.db.delete_income_entry(entry_id, owner_id):
                raise ConsistencyError(income_entry_not_found(entry_id))

        logger.debug("Deleted income entry %s", entry_id)
        return True

    def get_entry(self, owner_id: str, entry_id: int) -> Optional[IncomeEntry]:
        return self.db.get_income_entry(entry_id, owner_id)

    def list_entries(self, owner_id: str, year: Optional[int] = None) -> list[IncomeEntry]:
        """List income entries ordered by period, optionally for one year."""
        if year is not None:
            year = require_year(year)
        return self.db.list_income_entries(owner_id, year=year)

    # Fixed incomes

    def list_fixed(self, owner_id: str) -> list[FixedIncome]:
        """List definitions that are open or still running this month."""
        now = self.now()
        return [
            fixed
            for fixed in self.db.list_fixed_incomes(owner_id)
            if fixed.ends_at is None or (fixed.ends_at >= now and fixed.ends_at >= fixed.starts_at)
        ]

    def create_fixed(
        self,
        owner_id: str,
        name: str,
        amount: Any,
        day_of_month: int,
        account_id: int,
        category_id: Optional[int] = None,
        starts_at: Optional[datetime] = None,
    ) -> FixedIncome:
        """Create a fixed income definition starting now unless told otherwise.

        Raises:
            ValidationError: If input is invalid
            NotFoundError: If account or category doesn't exist for this owner
        """
        name = require_text(name, "name")
        amount = require_positive(amount, "amount")
        day_of_month = require_day_of_month(day_of_month, "day_of_month")
        if starts_at is None:
            starts_at = self.now()

        with self.db.transaction():
            require_account(self.db, account_id, owner_id)
            require_category(self.db, category_id, owner_id)
            fixed = self.db.create_fixed_income(
                owner_id=owner_id,
                name=name,
                amount=amount,
                day_of_month=day_of_month,
                account_id=account_id,
                starts_at=starts_at,
                category_id=category_id,
            )

        logger.debug("Created fixed income %s starting %s", fixed.id, starts_at)
        return fixed

    def update_fixed_future_only(
        self,
        owner_id: str,
        fixed_id: int,
        name: Optional[str] = None,
        amount: Any = None,
        day_of_month: Optional[int] = None,
        account_id: Optional[int] = None,
        category_id: Optional[int] = None,
    ) -> Optional[FixedIncome]:
        """Change a fixed income from next month on.

        The current definition is closed at the end of this month and a new
        one with the merged fields starts on the first day of next month. A
        definition that has not started yet is simply edited in place. Once
        closed, a definition is frozen; later edits go to its replacement.

        Returns:
            The definition in effect from next month, or None if the owner
            has no such open definition
        """
        changes: dict[str, Any] = {}
        if name is not None:
            changes["name"] = require_text(name, "name")
        if amount is not None:
            changes["amount"] = require_positive(amount, "amount")
        if day_of_month is not None:
            changes["day_of_month"] = require_day_of_month(day_of_month, "day_of_month")

        now = self.now()
        month_end = end_of_month(now)
        with self.db.transaction():
            existing = self._open_fixed(owner_id, fixed_id)
            if existing is None:
                return None
            if account_id is not None:
                require_account(self.db, account_id, owner_id)
                changes["account_id"] = account_id
            if category_id is not None:
                require_category(self.db, category_id, owner_id)
                changes["category_id"] = category_id

            if existing.starts_at > month_end:
                return self.db.update_fixed_income(fixed_id, owner_id, changes) if changes else existing

            self.db.update_fixed_income(fixed_id, owner_id, {"ends_at": month_end})
            replacement = self.db.create_fixed_income(
                owner_id=owner_id,
                name=changes.get("name", existing.name),
                amount=changes.get("amount", existing.amount),
                day_of_month=changes.get("day_of_month", existing.day_of_month),
                account_id=changes.get("account_id", existing.account_id),
                starts_at=first_day_next_month(now),
                category_id=changes.get("category_id", existing.category_id),
            )

        logger.debug("Fixed income %s replaced by %s from next month", fixed_id, replacement.id)
        return replacement

    def delete_fixed_future_only(self, owner_id: str, fixed_id: int) -> bool:
        """Stop a fixed income after the current month.

        Returns:
            False if the owner has no such open definition
        """
        now = self.now()
        with self.db.transaction():
            if self._open_fixed(owner_id, fixed_id) is None:
                return False
            self.db.update_fixed_income(fixed_id, owner_id, {"ends_at": end_of_month(now)})
        return True

    def _open_fixed(self, owner_id: str, fixed_id: int) -> Optional[FixedIncome]:
        # A closed definition already has its successor (or none, if stopped);
        # only the open one may be changed.
        fixed = self.db.get_fixed_income(fixed_id, owner_id, for_update=True)
        if fixed is None or fixed.ends_at is not None:
            logger.info("Fixed income %s is unknown or already closed", fixed_id)
            return None
        return fixed

    # Reporting

    def annual_summary(self, owner_id: str, year: int) -> AnnualIncomeSummary:
        """Monthly fixed and variable income totals for one year.

        The fixed part sums the definitions active at any point of the month;
        the variable part sums income transactions dated in the month.
        """
        year = require_year(year)
        fixed_incomes = self.db.list_fixed_incomes(owner_id)
        transactions = self.db.list_transactions(
            owner_id,
            start_date=date(year, 1, 1),
            end_date=date(year, 12, 31),
            type="income",
        )

        variable_by_month = {month: Decimal("0") for month in range(1, 13)}
        for txn in transactions:
            variable_by_month[txn.date.month] += txn.amount

        months = []
        for month in range(1, 13):
            window_start = datetime(year, month, 1)
            window_end = end_of_month(window_start)
            fixed_total = sum(
                (f.amount for f in fixed_incomes if f.is_active_between(window_start, window_end)),
                Decimal("0"),
            )
            months.append(
                MonthlyIncomeTotal(
                    month=month,
                    fixed_total=fixed_total,
                    variable_total=variable_by_month[month],
                )
            )
        return AnnualIncomeSummary(year=year, months=tuple(months))
