"""Investment domain service and the investment application command."""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Callable, Optional

from pocketledger.database.base import Database
from pocketledger.domain.entities import (
    INVESTMENT_TYPES,
    Account,
    Investment,
    InvestmentEntry,
    Transaction,
)
from pocketledger.domain.errors import (
    ConsistencyError,
    NotFoundError,
    investment_not_found,
)
from pocketledger.domain.policies import Posting
from pocketledger.domain.posting import PostingEngine
from pocketledger.domain.references import require_account
from pocketledger.domain.validation import (
    QUANTITY_PLACES,
    optional_decimal,
    require_choice,
    require_date,
    require_month,
    require_non_negative,
    require_positive,
    require_text,
    require_year,
    to_decimal,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InvestmentApplicationResult:
    """Records touched by applying money from an account to an investment."""

    account: Account
    investment: Investment
    transaction: Transaction


class InvestmentApplication:
    """Move money from an account into an investment.

    Three effects commit together or not at all: the account is debited,
    the investment value grows by the same amount and a transfer
    transaction is recorded for the audit trail. The transfer itself never
    posts, so the account is debited exactly once.
    """

    def __init__(
        self,
        db: Database,
        owner_id: str,
        investment_id: int,
        account_id: int,
        amount: Any,
        date: date,
        description: Optional[str] = None,
        now: Optional[Callable[[], datetime]] = None,
    ):
        self.db = db
        self.owner_id = owner_id
        self.investment_id = investment_id
        self.account_id = account_id
        self.amount = amount
        self.date = date
        self.description = description
        self.now = now or datetime.now
        self.posting = PostingEngine(db)

    def execute(self) -> InvestmentApplicationResult:
        """Apply the money.

        Raises:
            ValidationError: If amount or date are invalid
            NotFoundError: If investment or account doesn't exist for this owner
            ConsistencyError: If a record vanished mid-operation
        """
        amount = require_positive(self.amount, "amount")
        txn_date = require_date(self.date)

        with self.db.transaction():
            investment = self.db.get_investment(self.investment_id, self.owner_id, for_update=True)
            if investment is None:
                raise NotFoundError(investment_not_found(self.investment_id))
            require_account(self.db, self.account_id, self.owner_id)
            description = self.description or f"Apply investment: {investment.name}"

            [account] = self.posting.apply_transition(
                self.owner_id, None, Posting(account_id=self.account_id, delta=-amount)
            )
            updated = self.db.adjust_investment_value(
                self.investment_id, self.owner_id, amount, self.now()
            )
            if updated is None:
                raise ConsistencyError(investment_not_found(self.investment_id))
            txn = self.db.create_transaction(
                owner_id=self.owner_id,
                account_id=self.account_id,
                amount=amount,
                date=txn_date,
                type="transfer",
                description=description,
                category_id=None,
            )

        logger.info(
            "Applied %s from account %s to investment %s",
            amount,
            self.account_id,
            self.investment_id,
        )
        return InvestmentApplicationResult(account=account, investment=updated, transaction=txn)


class InvestmentService:
    """Service for investments and their monthly value entries.

    Whenever an entry is written for the latest month on record, the
    investment's current value follows it. Backfilled history leaves the
    current value alone.
    """

    def __init__(self, db: Database, now: Optional[Callable[[], datetime]] = None):
        """Initialize investment service.

        Args:
            db: Database instance
            now: Clock used for last_updated (defaults to datetime.now)
        """
        self.db = db
        self.now = now or datetime.now

    def create_investment(
        self,
        owner_id: str,
        name: str,
        type: str,
        initial_amount: Any,
        current_value: Any = None,
        quantity: Any = None,
        ticker: Optional[str] = None,
    ) -> Investment:
        """Create an investment; current value starts at the initial amount.

        Raises:
            ValidationError: If input is invalid
        """
        name = require_text(name, "name")
        require_choice(type, "investment type", INVESTMENT_TYPES)
        initial = require_non_negative(initial_amount, "initial_amount")
        if current_value is None:
            value = initial
        else:
            value = require_non_negative(current_value, "current_value")
        quantity_value = optional_decimal(quantity, "quantity", QUANTITY_PLACES)

        investment = self.db.create_investment(
            owner_id=owner_id,
            name=name,
            type=type,
            initial_amount=initial,
            current_value=value,
            quantity=quantity_value,
            ticker=ticker or None,
        )
        logger.debug("Created investment %s", investment.id)
        return investment

    def get_investment(self, investment_id: int, owner_id: str) -> Optional[Investment]:
        """Get investment by ID.

        Returns:
            Investment or None if not found
        """
        return self.db.get_investment(investment_id, owner_id)

    def list_investments(self, owner_id: str) -> list[Investment]:
        return self.db.list_investments(owner_id)

    def update_investment(
        self,
        investment_id: int,
        owner_id: str,
        name: Optional[str] = None,
        type: Optional[str] = None,
        initial_amount: Any = None,
        current_value: Any = None,
        quantity: Any = None,
        ticker: Optional[str] = None,
    ) -> Investment:
        """Correct investment fields, including the current value.

        Raises:
            NotFoundError: If the investment doesn't exist
            ValidationError: If input is invalid
        """
        changes: dict[str, Any] = {}
        if name is not None:
            changes["name"] = require_text(name, "name")
        if type is not None:
            changes["type"] = require_choice(type, "investment type", INVESTMENT_TYPES)
        if initial_amount is not None:
            changes["initial_amount"] = require_non_negative(initial_amount, "initial_amount")
        if current_value is not None:
            changes["current_value"] = require_non_negative(current_value, "current_value")
            changes["last_updated"] = self.now()
        if quantity is not None:
            changes["quantity"] = to_decimal(quantity, "quantity", QUANTITY_PLACES)
        if ticker is not None:
            changes["ticker"] = ticker

        if not changes:
            investment = self.db.get_investment(investment_id, owner_id)
        else:
            investment = self.db.update_investment(investment_id, owner_id, changes)
        if investment is None:
            raise NotFoundError(investment_not_found(investment_id))
        return investment

    def delete_investment(self, investment_id: int, owner_id: str) -> bool:
        """Delete an investment together with its entries.

        Returns:
            False if the investment does not exist
        """
        deleted = self.db.delete_investment(investment_id, owner_id)
        if not deleted:
            logger.info("Delete requested for unknown investment %s", investment_id)
        return deleted

    def upsert_entry(
        self, owner_id: str, investment_id: int, year: int, month: int, value: Any
    ) -> Optional[InvestmentEntry]:
        """Add value to the investment's entry for (year, month).

        A second call for the same month accumulates into the existing entry.

        Returns:
            The written entry, or None if the owner has no such investment
        """
        year = require_year(year)
        month = require_month(month)
        value = to_decimal(value, "value")

        with self.db.transaction():
            if self.db.get_investment(investment_id, owner_id, for_update=True) is None:
                logger.info("Entry requested for unknown investment %s", investment_id)
                return None
            existing = self.db.get_investment_entry_by_period(investment_id, year, month)
            if existing is None:
                entry = self.db.create_investment_entry(
                    owner_id=owner_id,
                    investment_id=investment_id,
                    year=year,
                    month=month,
                    value=value,
                )
            else:
                entry = self.db.update_investment_entry_value(existing.id, existing.value + value)
            self._refresh_current_value(owner_id, entry)

        return entry

    def update_entry(self, owner_id: str, entry_id: int, value: Any) -> Optional[InvestmentEntry]:
        """Overwrite an entry's value.

        Returns:
            The updated entry, or None if the owner has no such entry
        """
        value = to_decimal(value, "value")
        with self.db.transaction():
            existing = self.db.get_investment_entry(entry_id, owner_id, for_update=True)
            if existing is None:
                logger.info("Update requested for unknown investment entry %s", entry_id)
                return None
            entry = self.db.update_investment_entry_value(entry_id, value)
            self._refresh_current_value(owner_id, entry)
        return entry

    def list_entries(
        self, owner_id: str, year: Optional[int] = None, investment_id: Optional[int] = None
    ) -> list[InvestmentEntry]:
        if year is not None:
            year = require_year(year)
        return self.db.list_investment_entries(owner_id, year=year, investment_id=investment_id)

    def apply_investment(
        self,
        owner_id: str,
        investment_id: int,
        account_id: int,
        amount: Any,
        date: date,
        description: Optional[str] = None,
    ) -> InvestmentApplicationResult:
        """Debit an account and grow an investment by the same amount."""
        return InvestmentApplication(
            self.db,
            owner_id=owner_id,
            investment_id=investment_id,
            account_id=account_id,
            amount=amount,
            date=date,
            description=description,
            now=self.now,
        ).execute()

    def _refresh_current_value(self, owner_id: str, entry: InvestmentEntry) -> None:
        latest = self.db.get_latest_investment_entry(entry.investment_id)
        if latest is None or latest.period != entry.period:
            return
        self.db.update_investment(
            entry.investment_id,
            owner_id,
            {"current_value": entry.value, "last_updated": self.now()},
        )
        logger.debug(
            "Investment %s current value set to %s from %04d-%02d",
            entry.investment_id,
            entry.value,
            entry.year,
            entry.month,
        )
