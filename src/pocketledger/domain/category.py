"""Category domain service."""

from typing import Any, Optional

from pocketledger.database.base import Database
from pocketledger.domain.entities import CATEGORY_TYPES, Category
from pocketledger.domain.errors import ValidationError
from pocketledger.domain.references import require_category
from pocketledger.domain.validation import optional_decimal, require_choice, require_text


class CategoryService:
    """Service for managing categories."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_category(self, owner_id: str, name: str, type: str, budget: Any = None) -> Category:
        """Create a category.

        Args:
            owner_id: Owner of the category
            name: Category name
            type: income or expense
            budget: Optional monthly budget

        Returns:
            Created category

        Raises:
            ValidationError: If input is invalid or the name is taken for that type
        """
        name = require_text(name, "name")
        require_choice(type, "category type", CATEGORY_TYPES)
        budget_value = optional_decimal(budget, "budget")

        for existing in self.db.list_categories(owner_id):
            if existing.name == name and existing.type == type:
                raise ValidationError(f"Category '{name}' already exists")

        return self.db.create_category(owner_id=owner_id, name=name, type=type, budget=budget_value)

    def get_category(self, category_id: int, owner_id: str) -> Optional[Category]:
        """Get category by ID.

        Returns:
            Category or None if not found
        """
        return self.db.get_category(category_id, owner_id)

    def require_category(self, category_id: int, owner_id: str) -> Category:
        """Get category by ID or raise NotFoundError."""
        return require_category(self.db, category_id, owner_id)

    def get_category_by_name(self, owner_id: str, name: str) -> Optional[Category]:
        """Find a category by exact name."""
        for category in self.db.list_categories(owner_id):
            if category.name == name:
                return category
        return None

    def list_categories(self, owner_id: str) -> list[Category]:
        return self.db.list_categories(owner_id)
