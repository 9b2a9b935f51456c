"""Savings goal domain service."""

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Optional

from pocketledger.database.base import Database
from pocketledger.domain.entities import Goal
from pocketledger.domain.errors import ValidationError
from pocketledger.domain.validation import require_date, require_non_negative, require_text

logger = logging.getLogger(__name__)


class GoalService:
    """Service for savings goals.

    Goals are bookkeeping only: neither creating nor updating one moves any
    account balance.
    """

    def __init__(self, db: Database):
        self.db = db

    def create_goal(
        self,
        owner_id: str,
        name: str,
        target_amount: Any,
        current_amount: Any = Decimal("0"),
        deadline: Optional[date] = None,
    ) -> Goal:
        """Create a goal.

        Args:
            owner_id: Owner of the goal
            name: Goal name
            target_amount: Amount to reach
            current_amount: Amount saved so far
            deadline: Optional target date

        Returns:
            Created goal

        Raises:
            ValidationError: If input is invalid
        """
        goal = self.db.create_goal(
            owner_id=owner_id,
            name=require_text(name, "name"),
            target_amount=require_non_negative(target_amount, "target_amount"),
            current_amount=require_non_negative(current_amount, "current_amount"),
            deadline=None if deadline is None else require_date(deadline, "deadline"),
        )
        logger.debug("Created goal %s for %s", goal.id, owner_id)
        return goal

    def get_goal(self, goal_id: int, owner_id: str) -> Optional[Goal]:
        return self.db.get_goal(goal_id, owner_id)

    def list_goals(self, owner_id: str) -> list[Goal]:
        return self.db.list_goals(owner_id)

    def update_goal(
        self,
        goal_id: int,
        owner_id: str,
        name: Optional[str] = None,
        target_amount: Any = None,
        current_amount: Any = None,
        deadline: Optional[date] = None,
        clear_deadline: bool = False,
    ) -> Optional[Goal]:
        """Update goal fields.

        Returns:
            Updated goal, or None if the owner has no such goal

        Raises:
            ValidationError: If input is invalid
        """
        changes: dict[str, Any] = {}
        if name is not None:
            changes["name"] = require_text(name, "name")
        if target_amount is not None:
            changes["target_amount"] = require_non_negative(target_amount, "target_amount")
        if current_amount is not None:
            changes["current_amount"] = require_non_negative(current_amount, "current_amount")
        if clear_deadline:
            if deadline is not None:
                raise ValidationError("Cannot set both deadline and clear_deadline")
            changes["deadline"] = None
        elif deadline is not None:
            changes["deadline"] = require_date(deadline, "deadline")

        if not changes:
            goal = self.db.get_goal(goal_id, owner_id)
        else:
            goal = self.db.update_goal(goal_id, owner_id, changes)
        if goal is None:
            logger.info("Update requested for unknown goal %s", goal_id)
        return goal
