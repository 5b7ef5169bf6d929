"""
Base model classes for RecruitDesk data models.

Provides common fields and functionality shared across all models.
"""

from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Any, Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, field_validator


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def new_document_id() -> str:
    """Generate a document id client-side, the way the store assigns them."""
    return str(ObjectId())


def to_bson(value: Any) -> Any:
    """Convert values BSON cannot encode: plain dates become midnight UTC, enums their value."""
    if isinstance(value, dict):
        return {k: to_bson(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [to_bson(v) for v in value]
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, date) and not isinstance(value, datetime):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    return value


def coerce_id(value: Any) -> Any:
    """Accept ObjectIds and populated references (``{"id": ...}``) where an id string is expected."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict):
        ref = value.get("id") or value.get("_id")
        return str(ref) if ref is not None else None
    return value


class TimestampMixin(BaseModel):
    """Mixin providing timestamp fields for models."""

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class BaseDocument(TimestampMixin):
    """
    Base document model for the document store.

    Every document carries a string id (stored as ``_id``) plus creation and
    update timestamps. Collections are ordered by ``created_at`` descending.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
        use_enum_values=True,
        validate_default=True,
    )

    id: Optional[str] = Field(default=None, alias="_id")

    @field_validator("id", mode="before")
    @classmethod
    def normalize_id(cls, v: Any) -> Any:
        """Store ids as strings even when the server assigned an ObjectId."""
        return coerce_id(v)

    def model_dump_mongo(self) -> dict[str, Any]:
        """Convert model to MongoDB-compatible dictionary."""
        data = to_bson(self.model_dump(by_alias=True, exclude_none=True))
        if data.get("_id") is None:
            data.pop("_id", None)
        return data

    def ensure_id(self) -> str:
        """Assign a generated id if the document has none yet."""
        if self.id is None:
            self.id = new_document_id()
        return self.id


class EmbeddedModel(BaseModel):
    """
    Base model for embedded documents (subdocuments).

    Use this for models that are embedded within other documents
    rather than stored in their own collection.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
        validate_default=True,
    )


class Address(EmbeddedModel):
    """Postal address shared by clients and job locations."""

    street: Optional[str] = None
    city: str = ""
    state: Optional[str] = None
    country: str = ""
    postal_code: Optional[str] = None

    @property
    def display_string(self) -> str:
        """Get formatted location string."""
        parts = [p for p in [self.city, self.state, self.country] if p]
        return ", ".join(parts) if parts else "Location not specified"


class Attachment(EmbeddedModel):
    """An uploaded file (resume, additional documents)."""

    id: str = Field(default_factory=new_document_id)
    name: str
    url: str
    size: int = Field(default=0, ge=0)
    type: str = "application/pdf"
    uploaded_at: datetime = Field(default_factory=utc_now)
    uploaded_by: Optional[str] = None
