"""
Application repository for RecruitDesk.

Provides data access operations for inbound application documents.
"""

from typing import Optional

from recruitdesk.core.state_machine import validate_transition
from recruitdesk.data.models.application import Application, ApplicationCreate
from recruitdesk.utils.constants import ApplicationStatus
from recruitdesk.utils.logger import get_logger

from .base import BaseRepository

logger = get_logger(__name__)


class ApplicationRepository(BaseRepository[Application]):
    """Repository for application document operations."""

    @property
    def model_class(self) -> type[Application]:
        return Application

    def create_from_schema(
        self,
        data: ApplicationCreate,
        target_client_id: Optional[str] = None,
        job_title: Optional[str] = None,
        client_name: Optional[str] = None,
    ) -> Application:
        """Create a pending application, caching job and client display names."""
        application = Application(
            **data.model_dump(exclude_none=True),
            target_client_id=target_client_id,
            job_title=job_title,
            client_name=client_name,
        )
        return self.create(application)

    def update_status(
        self,
        id_value: str,
        status: ApplicationStatus,
        extra: Optional[dict] = None,
    ) -> Optional[Application]:
        """Move an application to ``status`` if the transition table allows it."""
        application = self.get_by_id(id_value)
        if application is None:
            return None

        validate_transition("application", application.status, status)
        return self.update(id_value, {"status": ApplicationStatus(status).value, **(extra or {})})

    def get_by_status(self, status: ApplicationStatus, limit: int = 0) -> list[Application]:
        """Get applications by status."""
        return self.find({"status": ApplicationStatus(status).value}, limit=limit, sort_by="submitted_at")

    def get_pending(self) -> list[Application]:
        """Applications awaiting review, newest first."""
        return self.find(
            {"status": {"$in": [ApplicationStatus.PENDING.value, ApplicationStatus.UNDER_REVIEW.value]}},
            limit=0,
            sort_by="submitted_at",
        )

    def get_by_job(self, job_id: str) -> list[Application]:
        """Applications that target or were assigned to a job."""
        return self.find(
            {"$or": [{"target_job_id": job_id}, {"assigned_job_id": job_id}]},
            limit=0,
        )

    def get_by_email(self, email: str) -> list[Application]:
        """All applications submitted from one address."""
        return self.find({"email": email}, limit=0)


# Singleton instance
_application_repository: Optional[ApplicationRepository] = None


def get_application_repository() -> ApplicationRepository:
    """Get the application repository singleton instance."""
    global _application_repository
    if _application_repository is None:
        _application_repository = ApplicationRepository()
    return _application_repository
