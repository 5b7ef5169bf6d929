"""
Team member data models for RecruitDesk.

Identity lives with the external provider; these documents hold the
dashboard's view of a team member, including the role that drives
permission checks.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from recruitdesk.auth.permissions import get_role_permissions, resolve_role
from recruitdesk.utils.constants import UserRole

from .base import BaseDocument


class User(BaseDocument):
    """
    Team member document.

    Stored in the users collection.
    """

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: Optional[str] = None
    avatar: Optional[str] = None

    role: UserRole = UserRole.VIEWER
    status: Literal["active", "inactive", "suspended", "pending"] = "active"
    department: Optional[str] = None
    position: Optional[str] = None
    email_verified: bool = False

    last_login_at: Optional[datetime] = None
    login_count: int = 0
    invited_by: Optional[str] = None
    invited_at: Optional[datetime] = None

    @field_validator("role", mode="before")
    @classmethod
    def default_unknown_role(cls, v: object) -> UserRole:
        return resolve_role(v)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def is_active(self) -> bool:
        return self.status == "active"

    @property
    def permissions(self) -> list[str]:
        """Permissions derived from the role, sorted for display."""
        return sorted(p.value for p in get_role_permissions(self.role))

    class Settings:
        """MongoDB collection settings."""

        name = "users"
        indexes = [
            "role",
            "status",
            "created_at",
        ]


class UserCreate(BaseModel):
    """Schema for inviting a team member."""

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: Optional[str] = None
    role: UserRole = UserRole.VIEWER
    department: Optional[str] = None
    position: Optional[str] = None


class UserUpdate(BaseModel):
    """Schema for updating a team member."""

    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    phone: Optional[str] = None
    avatar: Optional[str] = None
    role: Optional[UserRole] = None
    status: Optional[Literal["active", "inactive", "suspended", "pending"]] = None
    department: Optional[str] = None
    position: Optional[str] = None
