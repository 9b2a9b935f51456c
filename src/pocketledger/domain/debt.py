"""Debt domain service."""

import logging
from dataclasses import asdict
from decimal import Decimal
from typing import Any, Mapping, Optional

from pocketledger.database.base import Database
from pocketledger.domain.entities import DEBT_STATUSES, Debt
from pocketledger.domain.errors import ConsistencyError, NotFoundError, ValidationError, debt_not_found
from pocketledger.domain.policies import BalanceCutover, DebtPolicy
from pocketledger.domain.posting import PostingEngine
from pocketledger.domain.references import require_account
from pocketledger.domain.validation import (
    require_choice,
    require_day_of_month,
    require_month,
    require_non_negative,
    require_text,
    require_year,
)

logger = logging.getLogger(__name__)


def normalize(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Force remaining_amount to zero on paid debts.

    Args:
        fields: Debt column values

    Returns:
        A new dict; unchanged unless status is "paid"
    """
    normalized = dict(fields)
    if normalized.get("status") == "paid":
        normalized["remaining_amount"] = Decimal("0")
    return normalized


class DebtService:
    """Service for managing debts.

    Paying a debt that is linked to an account draws the total amount from
    that account, as decided by DebtPolicy.
    """

    def __init__(self, db: Database, cutover: BalanceCutover):
        """Initialize debt service.

        Args:
            db: Database instance
            cutover: First tracked (year, month); earlier payments never post
        """
        self.db = db
        self.policy = DebtPolicy(cutover)
        self.posting = PostingEngine(db)

    def create_debt(
        self,
        owner_id: str,
        name: str,
        total_amount: Any,
        year: int,
        month: int,
        payment_year: Optional[int] = None,
        payment_month: Optional[int] = None,
        remaining_amount: Any = None,
        status: str = "active",
        account_id: Optional[int] = None,
        interest_rate: Any = None,
        due_date: Optional[int] = None,
        min_payment: Any = None,
    ) -> Debt:
        """Create a debt and post its payment if it is already paid.

        Args:
            owner_id: Owner of the debt
            name: Debt name
            total_amount: Total owed
            year: Competency year
            month: Competency month
            payment_year: Payment year (defaults to the competency year)
            payment_month: Payment month (defaults to the competency month)
            remaining_amount: Amount still owed (defaults to total_amount)
            status: active, paid or defaulted
            account_id: Optional account the payment is drawn from
            interest_rate: Optional annual rate in percent
            due_date: Optional day of month
            min_payment: Optional minimum payment

        Returns:
            Created debt

        Raises:
            ValidationError: If input is invalid
            NotFoundError: If the account doesn't exist for this owner
        """
        fields: dict[str, Any] = {
            "name": require_text(name, "name"),
            "total_amount": require_non_negative(total_amount, "total_amount"),
            "year": require_year(year),
            "month": require_month(month),
            "payment_year": require_year(
                year if payment_year is None else payment_year, "payment_year"
            ),
            "payment_month": require_month(
                month if payment_month is None else payment_month, "payment_month"
            ),
            "status": require_choice(status, "debt status", DEBT_STATUSES),
            "account_id": account_id,
        }
        if remaining_amount is None:
            fields["remaining_amount"] = fields["total_amount"]
        else:
            fields["remaining_amount"] = require_non_negative(remaining_amount, "remaining_amount")
        fields.update(self._optional_fields(interest_rate, due_date, min_payment))

        with self.db.transaction():
            if account_id is not None:
                require_account(self.db, account_id, owner_id)
            debt = self.db.create_debt(owner_id=owner_id, **normalize(fields))
            self.posting.apply_transition(owner_id, None, self.policy.effect(debt))

        logger.debug("Created debt %s (%s)", debt.id, debt.status)
        return debt

    def get_debt(self, debt_id: int, owner_id: str) -> Optional[Debt]:
        """Get debt by ID.

        Returns:
            Debt or None if not found
        """
        return self.db.get_debt(debt_id, owner_id)

    def list_debts(self, owner_id: str) -> list[Debt]:
        return self.db.list_debts(owner_id)

    def update_debt(
        self,
        debt_id: int,
        owner_id: str,
        name: Optional[str] = None,
        total_amount: Any = None,
        remaining_amount: Any = None,
        year: Optional[int] = None,
        month: Optional[int] = None,
        payment_year: Optional[int] = None,
        payment_month: Optional[int] = None,
        status: Optional[str] = None,
        account_id: Optional[int] = None,
        clear_account: bool = False,
        interest_rate: Any = None,
        due_date: Optional[int] = None,
        min_payment: Any = None,
    ) -> Debt:
        """Update debt fields and move its balance effect.

        Eligibility is evaluated on both the stored and the updated state, so
        a status flip, a new payment period or a new account each revert the
        old posting and apply the new one.

        Raises:
            NotFoundError: If the debt or the new account doesn't exist
            ValidationError: If input is invalid
        """
        changes: dict[str, Any] = {}
        if name is not None:
            changes["name"] = require_text(name, "name")
        if total_amount is not None:
            changes["total_amount"] = require_non_negative(total_amount, "total_amount")
        if remaining_amount is not None:
            changes["remaining_amount"] = require_non_negative(remaining_amount, "remaining_amount")
        if year is not None:
            changes["year"] = require_year(year)
        if month is not None:
            changes["month"] = require_month(month)
        if payment_year is not None:
            changes["payment_year"] = require_year(payment_year, "payment_year")
        if payment_month is not None:
            changes["payment_month"] = require_month(payment_month, "payment_month")
        if status is not None:
            changes["status"] = require_choice(status, "debt status", DEBT_STATUSES)
        if clear_account:
            if account_id is not None:
                raise ValidationError("Cannot set both account_id and clear_account")
            changes["account_id"] = None
        changes.update(self._optional_fields(interest_rate, due_date, min_payment))

        with self.db.transaction():
            existing = self.db.get_debt(debt_id, owner_id, for_update=True)
            if existing is None:
                raise NotFoundError(debt_not_found(debt_id))
            if account_id is not None:
                require_account(self.db, account_id, owner_id)
                changes["account_id"] = account_id

            merged = normalize({**asdict(existing), **changes})
            if "remaining_amount" in changes or merged["remaining_amount"] != existing.remaining_amount:
                changes["remaining_amount"] = merged["remaining_amount"]

            updated = existing
            if changes:
                updated = self.db.update_debt(debt_id, owner_id, changes)
            self.posting.apply_transition(
                owner_id, self.policy.effect(existing), self.policy.effect(updated)
            )

        logger.debug("Updated debt %s (%s)", debt_id, updated.status)
        return updated

    def delete_debt(self, debt_id: int, owner_id: str) -> bool:
        """Delete a debt, reverting its payment if it was posted.

        Returns:
            False if the debt does not exist
        """
        with self.db.transaction():
            existing = self.db.get_debt(debt_id, owner_id, for_update=True)
            if existing is None:
                logger.info("Delete requested for unknown debt %s", debt_id)
                return False
            self.posting.apply_transition(owner_id, self.policy.effect(existing), None)
            if not self.db.delete_debt(debt_id, owner_id):
                raise ConsistencyError(debt_not_found(debt_id))
        return True

    @staticmethod
    def _optional_fields(interest_rate: Any, due_date: Optional[int], min_payment: Any) -> dict[str, Any]:
        fields: dict[str, Any] = {}
        if interest_rate is not None:
            fields["interest_rate"] = require_non_negative(interest_rate, "interest_rate")
        if due_date is not None:
            fields["due_date"] = require_day_of_month(due_date, "due_date")
        if min_payment is not None:
            fields["min_payment"] = require_non_negative(min_payment, "min_payment")
        return fields
