"""
Tag data models for RecruitDesk.

Tags are flat labels on jobs and candidates (``tag_ids``). System tags are
created by the application and cannot be deleted by users.
"""

from typing import Optional

from pydantic import BaseModel, Field

from .base import BaseDocument


class Tag(BaseDocument):
    """
    Tag document.

    Stored in the tags collection.
    """

    name: str = Field(..., min_length=1, max_length=50)
    description: Optional[str] = None
    color: Optional[str] = None
    is_system: bool = False

    class Settings:
        """MongoDB collection settings."""

        name = "tags"
        indexes = [
            "name",
            "is_system",
            "created_at",
        ]


class TagCreate(BaseModel):
    """Schema for creating a new tag."""

    name: str = Field(..., min_length=1, max_length=50)
    description: Optional[str] = None
    color: Optional[str] = None


class TagUpdate(BaseModel):
    """Schema for updating an existing tag."""

    name: Optional[str] = Field(None, min_length=1, max_length=50)
    description: Optional[str] = None
    color: Optional[str] = None
