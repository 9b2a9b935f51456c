"""Posting engine: the only code path that changes an account balance."""

import logging
from decimal import Decimal
from typing import Optional

from pocketledger.database.base import Database
from pocketledger.domain.entities import Account
from pocketledger.domain.errors import ConsistencyError, NotFoundError, account_not_found
from pocketledger.domain.policies import Posting

logger = logging.getLogger(__name__)


class PostingEngine:
    """Applies and reverts signed balance deltas on single accounts."""

    def __init__(self, db: Database):
        """Initialize posting engine.

        Args:
            db: Database instance
        """
        self.db = db

    def post(self, account_id: int, owner_id: str, delta: Decimal) -> Account:
        """Add a signed delta to an account balance.

        Args:
            account_id: Account to post against
            owner_id: Owner the account must belong to
            delta: Signed amount to add

        Returns:
            Updated account

        Raises:
            NotFoundError: If the account does not exist or belongs to another owner
        """
        account = self.db.adjust_account_balance(account_id, owner_id, delta)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        logger.info(
            "Posted %s to account %s, balance now %s", delta, account_id, account.balance
        )
        return account

    def apply_transition(
        self, owner_id: str, old: Optional[Posting], new: Optional[Posting]
    ) -> list[Account]:
        """Move a record's balance effect from its old state to its new one.

        The old posting is reverted and the new one applied, netted per
        account so that each touched account receives exactly one delta.
        Accounts whose net delta is zero are left alone.

        Args:
            owner_id: Owner of the record and its accounts
            old: Effect of the record before the change (None if not posted)
            new: Effect of the record after the change (None if not posted)

        Returns:
            Accounts whose balance changed, in posting order

        Raises:
            ConsistencyError: If an account vanished after the caller checked it;
                callers run this inside Database.transaction() so nothing sticks
        """
        net: dict[int, Decimal] = {}
        if old is not None:
            reverted = old.reverted()
            net[reverted.account_id] = net.get(reverted.account_id, Decimal("0")) + reverted.delta
        if new is not None:
            net[new.account_id] = net.get(new.account_id, Decimal("0")) + new.delta

        changed = []
        for account_id, delta in net.items():
            if delta == 0:
                continue
            try:
                changed.append(self.post(account_id, owner_id, delta))
            except NotFoundError as exc:
                raise ConsistencyError(f"Cannot settle balance effect: {exc}") from exc
        return changed
