"""
Team member repository for RecruitDesk.
"""

from typing import Optional

from recruitdesk.data.models.user import User, UserCreate, UserUpdate
from recruitdesk.utils.constants import UserRole
from recruitdesk.utils.logger import get_logger

from .base import BaseRepository

logger = get_logger(__name__)


class UserRepository(BaseRepository[User]):
    """Repository for team member document operations."""

    @property
    def model_class(self) -> type[User]:
        return User

    def create_from_schema(self, data: UserCreate, invited_by: Optional[str] = None) -> User:
        """Create a pending team member from an invitation."""
        user = User(**data.model_dump(exclude_none=True), status="pending", invited_by=invited_by)
        return self.create(user)

    def update_from_schema(self, id_value: str, data: UserUpdate) -> Optional[User]:
        """Update a team member from an update schema."""
        update_data = data.model_dump(exclude_unset=True, exclude_none=True)
        if not update_data:
            return self.get_by_id(id_value)
        return self.update(id_value, update_data)

    def get_by_email(self, email: str) -> Optional[User]:
        return self.find_one({"email": email})

    def get_by_role(self, role: UserRole) -> list[User]:
        """Get team members holding ``role``."""
        return self.find({"role": UserRole(role).value}, limit=0)

    def get_active(self) -> list[User]:
        return self.find({"status": "active"}, limit=0)

    def set_role(self, id_value: str, role: UserRole) -> Optional[User]:
        return self.update(id_value, {"role": UserRole(role).value})


# Singleton instance
_user_repository: Optional[UserRepository] = None


def get_user_repository() -> UserRepository:
    """Get the user repository singleton instance."""
    global _user_repository
    if _user_repository is None:
        _user_repository = UserRepository()
    return _user_repository
