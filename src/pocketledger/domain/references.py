"""Existence and ownership checks for referenced records."""

from typing import Optional

from pocketledger.database.base import Database
from pocketledger.domain.entities import Account, Category
from pocketledger.domain.errors import NotFoundError, account_not_found, category_not_found


def require_account(db: Database, account_id: int, owner_id: str) -> Account:
    """Return the owner's account or raise NotFoundError."""
    account = db.get_account(account_id, owner_id)
    if account is None:
        raise NotFoundError(account_not_found(account_id))
    return account


def require_category(db: Database, category_id: Optional[int], owner_id: str) -> Optional[Category]:
    """Return the owner's category, None when no category is given."""
    if category_id is None:
        return None
    category = db.get_category(category_id, owner_id)
    if category is None:
        raise NotFoundError(category_not_found(category_id))
    return category
