"""Category domain service."""

from typing import Optional

from ledgerimport.database.base import Database
from ledgerimport.domain.entities import Category, CategoryType
from ledgerimport.domain.errors import NotFoundError, ValidationError, category_not_found

MAX_CATEGORY_NAME_LENGTH = 50


class CategoryService:
    """Service for managing categories."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_category(self, user_id: str, name: str, category_type: str = "expense") -> int:
        """Create a category.

        Raises:
            ValidationError: If the name or type is invalid
        """
        name = (name or "").strip()
        if not name or len(name) > MAX_CATEGORY_NAME_LENGTH:
            raise ValidationError(
                f"Category name must be 1 to {MAX_CATEGORY_NAME_LENGTH} characters"
            )
        try:
            kind = CategoryType(category_type)
        except ValueError:
            raise ValidationError(
                f"Invalid category type '{category_type}', expected income or expense"
            ) from None

        return self.db.create_category(user_id=user_id, name=name, category_type=kind.value)

    def get_category(self, category_id: int, user_id: str) -> Optional[Category]:
        """Get category by ID, or None."""
        return self.db.get_category(category_id, user_id)

    def require_category(self, category_id: int, user_id: str) -> Category:
        """Get category by ID.

        Raises:
            NotFoundError: If the category does not exist for the user
        """
        category = self.db.get_category(category_id, user_id)
        if category is None:
            raise NotFoundError(category_not_found(category_id))
        return category

    def list_categories(self, user_id: str) -> list[Category]:
        """List categories for a user."""
        return self.db.list_categories(user_id)
