"""
Category repository for RecruitDesk.

Provides data access operations for the category hierarchy.
"""

import re
from typing import Optional

from pymongo import ASCENDING
from pymongo.client_session import ClientSession

from recruitdesk.core.exceptions import NotFoundError, ProtectedDocumentError
from recruitdesk.data.models.category import (
    Category,
    CategoryCreate,
    CategoryNode,
    CategoryUpdate,
    build_category_tree,
)
from recruitdesk.utils.logger import get_logger

from .base import BaseRepository

logger = get_logger(__name__)


class CategoryRepository(BaseRepository[Category]):
    """Repository for category document operations."""

    @property
    def model_class(self) -> type[Category]:
        return Category

    def create_from_schema(self, data: CategoryCreate) -> Category:
        """Create a category, checking that its parent exists."""
        if data.parent_id and self.get_by_id(data.parent_id) is None:
            raise NotFoundError(self.collection_name, data.parent_id)
        return self.create(Category(**data.model_dump(exclude_none=True)))

    def update_from_schema(self, id_value: str, data: CategoryUpdate) -> Optional[Category]:
        """Update a category from an update schema."""
        update_data = data.model_dump(exclude_unset=True, exclude_none=True)
        if update_data.get("parent_id") == id_value:
            raise ValueError("A category cannot be its own parent")
        if not update_data:
            return self.get_by_id(id_value)
        return self.update(id_value, update_data)

    def get_by_name(self, name: str) -> Optional[Category]:
        """Get a category by name, ignoring case."""
        return self.find_one({"name": {"$regex": f"^{re.escape(name.strip())}$", "$options": "i"}})

    def get_ordered(self, active_only: bool = False) -> list[Category]:
        """All categories by ``sort_order``."""
        query = {"is_active": True} if active_only else {}
        return self.find(query, limit=0, sort_by="sort_order", sort_order=ASCENDING)

    def get_children(self, parent_id: str) -> list[Category]:
        """Direct subcategories of ``parent_id``."""
        return self.find({"parent_id": parent_id}, limit=0, sort_by="sort_order", sort_order=ASCENDING)

    def get_tree(self, active_only: bool = False) -> list[CategoryNode]:
        """The category hierarchy."""
        return build_category_tree(self.get_ordered(active_only=active_only))

    def set_active(self, id_value: str, is_active: bool) -> Optional[Category]:
        return self.update(id_value, {"is_active": is_active})

    def delete(self, id_value: str, session: Optional[ClientSession] = None) -> bool:
        """
        Delete a category.

        Raises:
            ProtectedDocumentError: The category still has subcategories
        """
        if self.exists({"parent_id": id_value}):
            category = self.get_by_id(id_value)
            name = category.name if category else id_value
            raise ProtectedDocumentError(
                self.collection_name,
                id_value,
                f'Cannot delete "{name}". Please delete all subcategories first.',
            )
        return super().delete(id_value, session=session)


# Singleton instance
_category_repository: Optional[CategoryRepository] = None


def get_category_repository() -> CategoryRepository:
    """Get the category repository singleton instance."""
    global _category_repository
    if _category_repository is None:
        _category_repository = CategoryRepository()
    return _category_repository
