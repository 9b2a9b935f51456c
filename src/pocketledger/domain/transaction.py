"""Transaction domain service."""

import logging
from typing import Any, Optional
from datetime import date

from pocketledger.database.base import Database
from pocketledger.domain.entities import TRANSACTION_TYPES, Transaction as TransactionEntity
from pocketledger.domain.errors import (
    ConsistencyError,
    NotFoundError,
    ValidationError,
    transaction_not_found,
)
from pocketledger.domain.policies import TransactionPolicy
from pocketledger.domain.posting import PostingEngine
from pocketledger.domain.references import require_account, require_category
from pocketledger.domain.validation import require_choice, require_date, require_positive

logger = logging.getLogger(__name__)


class TransactionService:
    """Service for managing transactions.

    Income adds its amount to the account balance, expense subtracts it and
    transfers are audit records that never move a balance on their own.
    """

    def __init__(self, db: Database, policy: Optional[TransactionPolicy] = None):
        """Initialize transaction service.

        Args:
            db: Database instance
            policy: Balance effect policy (defaults to TransactionPolicy())
        """
        self.db = db
        self.policy = policy or TransactionPolicy()
        self.posting = PostingEngine(db)

    def create_transaction(
        self,
        owner_id: str,
        account_id: int,
        amount: Any,
        date: date,
        type: str,
        description: str = "",
        category_id: Optional[int] = None,
    ) -> TransactionEntity:
        """Create a transaction and post its effect.

        Args:
            owner_id: Owner of the transaction
            account_id: Account ID
            amount: Unsigned amount (> 0)
            date: Transaction date
            type: income, expense or transfer
            description: Free text
            category_id: Optional category ID

        Returns:
            Created transaction

        Raises:
            ValidationError: If input is invalid
            NotFoundError: If account or category doesn't exist for this owner
        """
        amount = require_positive(amount, "amount")
        txn_date = require_date(date)
        require_choice(type, "transaction type", TRANSACTION_TYPES)

        with self.db.transaction():
            require_account(self.db, account_id, owner_id)
            require_category(self.db, category_id, owner_id)

            txn = self.db.create_transaction(
                owner_id=owner_id,
                account_id=account_id,
                amount=amount,
                date=txn_date,
                type=type,
                description=description or "",
                category_id=category_id,
            )
            self.posting.apply_transition(owner_id, None, self.policy.effect(txn))

        logger.debug("Created %s transaction %s on account %s", type, txn.id, account_id)
        return txn

    def get_transaction(self, transaction_id: int, owner_id: str) -> Optional[TransactionEntity]:
        """Get transaction by ID.

        Returns:
            Transaction entity or None if not found
        """
        return self.db.get_transaction(transaction_id, owner_id)

    def update_transaction(
        self,
        transaction_id: int,
        owner_id: str,
        account_id: Optional[int] = None,
        amount: Any = None,
        date: Optional[date] = None,
        type: Optional[str] = None,
        description: Optional[str] = None,
        category_id: Optional[int] = None,
        clear_category: bool = False,
    ) -> TransactionEntity:
        """Update transaction fields and move its balance effect.

        The effect of the old state is reverted against the old account and
        the effect of the new state applied against the (possibly different)
        new account, in one database transaction.

        Args:
            transaction_id: Transaction ID to update
            owner_id: Owner of the transaction
            account_id: Optional new account ID
            amount: Optional new amount
            date: Optional new date
            type: Optional new type
            description: Optional new description
            category_id: Optional new category ID
            clear_category: If True, clear the category (category_id must be None)

        Returns:
            Updated transaction

        Raises:
            NotFoundError: If transaction, account or category doesn't exist
            ValidationError: If input is invalid
        """
        changes: dict[str, Any] = {}
        if amount is not None:
            changes["amount"] = require_positive(amount, "amount")
        if date is not None:
            changes["date"] = require_date(date)
        if type is not None:
            changes["type"] = require_choice(type, "transaction type", TRANSACTION_TYPES)
        if description is not None:
            changes["description"] = description
        if clear_category:
            if category_id is not None:
                raise ValidationError("Cannot set both category_id and clear_category")
            changes["category_id"] = None

        with self.db.transaction():
            existing = self.db.get_transaction(transaction_id, owner_id, for_update=True)
            if existing is None:
                raise NotFoundError(transaction_not_found(transaction_id))

            if account_id is not None:
                require_account(self.db, account_id, owner_id)
                changes["account_id"] = account_id
            if category_id is not None:
                require_category(self.db, category_id, owner_id)
                changes["category_id"] = category_id

            updated = existing
            if changes:
                updated = self.db.update_transaction(transaction_id, owner_id, changes)
            self.posting.apply_transition(
                owner_id, self.policy.effect(existing), self.policy.effect(updated)
            )

        logger.debug("Updated transaction %s", transaction_id)
        return updated

    def delete_transaction(self, transaction_id: int, owner_id: str) -> bool:
        """Delete a transaction, reverting its balance effect first.

        Returns:
            False if the transaction does not exist

        Raises:
            ConsistencyError: If the row vanished after its effect was reverted;
                nothing is committed
        """
        with self.db.transaction():
            existing = self.db.get_transaction(transaction_id, owner_id, for_update=True)
            if existing is None:
                logger.info("Delete requested for unknown transaction %s", transaction_id)
                return False
            self.posting.apply_transition(owner_id, self.policy.effect(existing), None)
            if not self.db.delete_transaction(transaction_id, owner_id):
                raise ConsistencyError(transaction_not_found(transaction_id))

        logger.debug("Deleted transaction %s", transaction_id)
        return True

    def list_transactions(
        self,
        owner_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        account_id: Optional[int] = None,
        category_id: Optional[int] = None,
        type: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[TransactionEntity]:
        """List transactions with filters, newest first."""
        if type is not None:
            require_choice(type, "transaction type", TRANSACTION_TYPES)
        return self.db.list_transactions(
            owner_id,
            start_date=start_date,
            end_date=end_date,
            account_id=account_id,
            category_id=category_id,
            type=type,
            limit=limit,
        )
