"""
Candidate repository for RecruitDesk.

Provides data access operations for candidate documents, including
per-job pipeline lookups.
"""

import re
from typing import Optional

from recruitdesk.data.models.candidate import Candidate, CandidateCreate, CandidateUpdate
from recruitdesk.utils.constants import CandidateStatus
from recruitdesk.utils.logger import get_logger

from .base import BaseRepository

logger = get_logger(__name__)


class CandidateRepository(BaseRepository[Candidate]):
    """Repository for candidate document operations."""

    @property
    def model_class(self) -> type[Candidate]:
        return Candidate

    def create_from_schema(self, data: CandidateCreate) -> Candidate:
        """Create a candidate from a create schema."""
        candidate = Candidate(**data.model_dump(exclude_none=True))
        return self.create(candidate)

    def update_from_schema(self, id_value: str, data: CandidateUpdate) -> Optional[Candidate]:
        """Update a candidate from an update schema."""
        update_data = data.model_dump(exclude_unset=True, exclude_none=True)
        if not update_data:
            return self.get_by_id(id_value)
        return self.update(id_value, update_data)

    @staticmethod
    def _email_query(email: str) -> dict:
        return {"email": {"$regex": f"^{re.escape(email.strip())}$", "$options": "i"}}

    def get_by_email(self, email: str) -> Optional[Candidate]:
        """Get a candidate by email address."""
        return self.find_one(self._email_query(email))

    def email_exists(self, email: str) -> bool:
        """Check if a candidate with this email exists."""
        return self.exists(self._email_query(email))

    def get_by_job(self, job_id: str) -> list[Candidate]:
        """Get candidates attached to a job."""
        return self.find({"job_ids": job_id}, limit=0)

    def get_by_client(self, client_id: str) -> list[Candidate]:
        """Get candidates attached to any of a client's jobs."""
        return self.find({"client_ids": client_id}, limit=0)

    def get_by_job_status(self, job_id: str, status: CandidateStatus) -> list[Candidate]:
        """Get candidates in ``status`` for one job's pipeline."""
        return self.find(
            {"job_applications": {"$elemMatch": {"job_id": job_id, "status": CandidateStatus(status).value}}},
            limit=0,
        )

    def get_active(self, limit: int = 0) -> list[Candidate]:
        """Get candidates flagged active."""
        return self.find({"is_active": True}, limit=limit)

    def deactivate(self, id_value: str) -> Optional[Candidate]:
        """Soft-delete a candidate."""
        return self.update(id_value, {"is_active": False})


# Singleton instance
_candidate_repository: Optional[CandidateRepository] = None


def get_candidate_repository() -> CandidateRepository:
    """Get the candidate repository singleton instance."""
    global _candidate_repository
    if _candidate_repository is None:
        _candidate_repository = CandidateRepository()
    return _candidate_repository
