"""
Category data models for RecruitDesk.

Categories group jobs and candidates. They form a hierarchy through
``parent_id``; jobs and candidates reference them by ``category_ids``.
"""

from typing import Iterable, Optional

from pydantic import BaseModel, Field

from .base import BaseDocument


class Category(BaseDocument):
    """
    Category document.

    Stored in the categories collection.
    """

    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    parent_id: Optional[str] = None
    is_active: bool = True
    color: Optional[str] = None  # hex, for display
    sort_order: int = 0

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    class Settings:
        """MongoDB collection settings."""

        name = "categories"
        indexes = [
            "name",
            "parent_id",
            "is_active",
            "sort_order",
            "created_at",
        ]


class CategoryNode(BaseModel):
    """A category with its subcategories, for hierarchical display."""

    category: Category
    children: list["CategoryNode"] = Field(default_factory=list)
    level: int = 0


def build_category_tree(categories: Iterable[Category]) -> list[CategoryNode]:
    """
    Arrange categories into a forest ordered by ``sort_order`` then name.

    Categories whose parent is not in the list are treated as roots.
    """
    items = list(categories)
    known = {c.id for c in items}
    by_parent: dict[Optional[str], list[Category]] = {}
    for category in items:
        parent = category.parent_id if category.parent_id in known else None
        by_parent.setdefault(parent, []).append(category)

    def _nodes(parent_id: Optional[str], level: int, seen: frozenset) -> list[CategoryNode]:
        siblings = sorted(by_parent.get(parent_id, []), key=lambda c: (c.sort_order, c.name.lower()))
        return [
            CategoryNode(
                category=c,
                level=level,
                children=_nodes(c.id, level + 1, seen | {c.id}) if c.id not in seen else [],
            )
            for c in siblings
        ]

    return _nodes(None, 0, frozenset())


class CategoryCreate(BaseModel):
    """Schema for creating a new category."""

    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    parent_id: Optional[str] = None
    color: Optional[str] = None
    sort_order: int = 0


class CategoryUpdate(BaseModel):
    """Schema for updating an existing category."""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    parent_id: Optional[str] = None
    is_active: Optional[bool] = None
    color: Optional[str] = None
    sort_order: Optional[int] = None
