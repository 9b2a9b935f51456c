"""Account domain service."""

import logging
from decimal import Decimal
from typing import Any, Optional

from pocketledger.database.base import Database
from pocketledger.domain.entities import ACCOUNT_TYPES, Account as AccountEntity
from pocketledger.domain.errors import ValidationError
from pocketledger.domain.references import require_account
from pocketledger.domain.validation import (
    optional_decimal,
    require_choice,
    require_non_negative,
    require_text,
    to_decimal,
)

logger = logging.getLogger(__name__)


class AccountService:
    """Service for managing accounts.

    Balances are only set once, at creation. Afterwards they move through
    the posting engine.
    """

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(
        self,
        owner_id: str,
        name: str,
        type: str,
        balance: Any = Decimal("0"),
        limit: Any = None,
        color: str = "#000000",
    ) -> AccountEntity:
        """Create a new account.

        Args:
            owner_id: Owner of the account
            name: Account name
            type: One of checking, savings, credit, cash, investment
            balance: Opening balance
            limit: Optional credit limit
            color: Display color

        Returns:
            Created account

        Raises:
            ValidationError: If input is invalid or the name is already used
        """
        name = require_text(name, "name")
        require_choice(type, "account type", ACCOUNT_TYPES)
        opening = to_decimal(balance, "balance")
        limit_value = optional_decimal(limit, "limit")
        if limit_value is not None:
            require_non_negative(limit_value, "limit")

        self._check_unique_name(owner_id, name)

        account = self.db.create_account(
            owner_id=owner_id,
            name=name,
            type=type,
            balance=opening,
            limit=limit_value,
            color=color,
        )
        logger.debug("Created account %s for %s", account.id, owner_id)
        return account

    def get_account(self, account_id: int, owner_id: str) -> Optional[AccountEntity]:
        """Get account by ID.

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id, owner_id)

    def require_account(self, account_id: int, owner_id: str) -> AccountEntity:
        """Get account by ID or raise NotFoundError."""
        return require_account(self.db, account_id, owner_id)

    def list_accounts(self, owner_id: str, include_archived: bool = False) -> list[AccountEntity]:
        """List accounts.

        Returns:
            List of account entities
        """
        return self.db.list_accounts(owner_id, include_archived=include_archived)

    def rename_account(self, account_id: int, owner_id: str, name: str) -> AccountEntity:
        """Rename an account.

        Raises:
            NotFoundError: If account not found
            ValidationError: If name already exists
        """
        self.require_account(account_id, owner_id)
        name = require_text(name, "name")
        self._check_unique_name(owner_id, name, exclude_id=account_id)
        return self.db.update_account(account_id, owner_id, {"name": name})

    def update_account(
        self,
        account_id: int,
        owner_id: str,
        type: Optional[str] = None,
        limit: Any = None,
        color: Optional[str] = None,
        clear_limit: bool = False,
    ) -> AccountEntity:
        """Update descriptive account fields. The balance is never editable here."""
        self.require_account(account_id, owner_id)
        changes: dict[str, Any] = {}
        if type is not None:
            changes["type"] = require_choice(type, "account type", ACCOUNT_TYPES)
        if clear_limit:
            if limit is not None:
                raise ValidationError("Cannot set both limit and clear_limit")
            changes["limit"] = None
        elif limit is not None:
            changes["limit"] = require_non_negative(limit, "limit")
        if color is not None:
            changes["color"] = color
        if not changes:
            return self.require_account(account_id, owner_id)
        return self.db.update_account(account_id, owner_id, changes)

    def archive_account(self, account_id: int, owner_id: str) -> bool:
        """Archive an account. Accounts are never physically deleted.

        Returns:
            False if the account does not exist
        """
        archived = self.db.update_account(account_id, owner_id, {"is_archived": True})
        if archived is None:
            logger.info("Archive requested for unknown account %s", account_id)
            return False
        return True

    def total_balance(self, owner_id: str) -> Decimal:
        """Sum of active account balances, with credit balances counted as owed."""
        total = Decimal("0")
        for account in self.db.list_accounts(owner_id):
            if account.is_liability:
                total -= account.balance
            else:
                total += account.balance
        return total

    def _check_unique_name(self, owner_id: str, name: str, exclude_id: Optional[int] = None) -> None:
        for acc in self.db.list_accounts(owner_id, include_archived=True):
            if acc.id != exclude_id and acc.name == name:
                raise ValidationError(f"Account with name '{name}' already exists")
