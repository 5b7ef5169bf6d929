"""
Tag repository for RecruitDesk.

Provides data access operations for tag documents.
"""

import re
from typing import Optional

from pymongo import ASCENDING
from pymongo.client_session import ClientSession

from recruitdesk.core.exceptions import ProtectedDocumentError
from recruitdesk.data.models.tag import Tag, TagCreate, TagUpdate
from recruitdesk.utils.logger import get_logger

from .base import BaseRepository

logger = get_logger(__name__)


class TagRepository(BaseRepository[Tag]):
    """Repository for tag document operations."""

    @property
    def model_class(self) -> type[Tag]:
        return Tag

    def create_from_schema(self, data: TagCreate, is_system: bool = False) -> Tag:
        """Create a tag. Only the application itself creates system tags."""
        return self.create(Tag(**data.model_dump(exclude_none=True), is_system=is_system))

    def update_from_schema(self, id_value: str, data: TagUpdate) -> Optional[Tag]:
        """Update a tag from an update schema."""
        update_data = data.model_dump(exclude_unset=True, exclude_none=True)
        if not update_data:
            return self.get_by_id(id_value)
        return self.update(id_value, update_data)

    def get_by_name(self, name: str) -> Optional[Tag]:
        """Get a tag by name, ignoring case."""
        return self.find_one({"name": {"$regex": f"^{re.escape(name.strip())}$", "$options": "i"}})

    def get_by_type(self, is_system: bool) -> list[Tag]:
        """System tags or user-created tags, by name."""
        return self.find({"is_system": is_system}, limit=0, sort_by="name", sort_order=ASCENDING)

    def search(self, text: str, limit: int = 50) -> list[Tag]:
        """Case-insensitive search in tag name and description."""
        pattern = {"$regex": re.escape(text), "$options": "i"}
        return self.find({"$or": [{"name": pattern}, {"description": pattern}]}, limit=limit)

    def delete(self, id_value: str, session: Optional[ClientSession] = None) -> bool:
        """
        Delete a user-created tag.

        Raises:
            ProtectedDocumentError: The tag is a system tag
        """
        tag = self.get_by_id(id_value)
        if tag is not None and tag.is_system:
            raise ProtectedDocumentError(self.collection_name, id_value, "System tags cannot be deleted")
        return super().delete(id_value, session=session)


# Singleton instance
_tag_repository: Optional[TagRepository] = None


def get_tag_repository() -> TagRepository:
    """Get the tag repository singleton instance."""
    global _tag_repository
    if _tag_repository is None:
        _tag_repository = TagRepository()
    return _tag_repository
