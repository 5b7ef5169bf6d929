"""
Application review service for RecruitDesk.

Approving an application creates the candidate it turns into, records the
approval, and adds the candidate to the assigned job, all in one transaction
when transactions are enabled.
"""

from typing import Any, Optional

from pymongo.errors import PyMongoError

from recruitdesk.auth.permissions import Permission, require_permission
from recruitdesk.core.exceptions import NotFoundError, RecruitDeskError, RelationshipError
from recruitdesk.core.workflow import (
    ResumeScore,
    approve_application_and_create_candidate,
    calculate_resume_score,
    reject_application,
)
from recruitdesk.data.database import get_database_manager
from recruitdesk.data.models import Application, Candidate, Job
from recruitdesk.data.repositories import (
    ApplicationRepository,
    CandidateRepository,
    JobRepository,
    get_application_repository,
    get_candidate_repository,
    get_job_repository,
)
from recruitdesk.utils.logger import AuditType, audit_log, get_logger

logger = get_logger(__name__)

# Fields written back to the application document on review
_REVIEW_FIELDS = (
    "status",
    "assigned_job_id",
    "assigned_client_id",
    "approved_by",
    "approved_by_name",
    "approved_at",
    "reviewed_by",
    "reviewed_at",
    "rejection_reason",
    "review_notes",
    "candidate_id",
)


class ApplicationService:
    """Permission-checked approve/reject/score for inbound applications."""

    def __init__(
        self,
        application_repository: Optional[ApplicationRepository] = None,
        candidate_repository: Optional[CandidateRepository] = None,
        job_repository: Optional[JobRepository] = None,
        db_manager: Any = None,
    ) -> None:
        self._applications = application_repository or get_application_repository()
        self._candidates = candidate_repository or get_candidate_repository()
        self._jobs = job_repository or get_job_repository()
        self._db = db_manager or get_database_manager()

    def _load_application(self, application_id: str) -> Application:
        application = self._applications.get_by_id(application_id)
        if application is None:
            raise NotFoundError("applications", application_id)
        return application

    def _load_job(self, job_id: Optional[str]) -> Job:
        if not job_id:
            raise RecruitDeskError("Application has no target job; a job id is required")
        job = self._jobs.get_by_id(job_id)
        if job is None:
            raise NotFoundError("jobs", job_id)
        return job

    @staticmethod
    def _review_update(application: Application) -> dict[str, Any]:
        return {field: getattr(application, field) for field in _REVIEW_FIELDS}

    def approve(
        self,
        actor: Any,
        application_id: str,
        assigned_job_id: Optional[str] = None,
    ) -> tuple[Application, Candidate]:
        """
        Approve an application and persist the candidate created from it.

        Args:
            actor: Reviewing user (needs ``applications.approve``)
            application_id: Application to approve
            assigned_job_id: Job to place the candidate on; defaults to the targeted job

        Returns:
            The approved application and the new candidate
        """
        require_permission(actor, Permission.APPLICATIONS_APPROVE)
        application = self._load_application(application_id)
        job = self._load_job(assigned_job_id or application.target_job_id)

        approved, candidate = approve_application_and_create_candidate(
            application,
            job.id,
            approved_by=getattr(actor, "id", None) or "",
            approved_by_name=getattr(actor, "full_name", None) or "",
        )
        if job.client_id and job.client_id not in candidate.client_ids:
            candidate = candidate.model_copy(update={"client_ids": [*candidate.client_ids, job.client_id]})
        if job.client_id != approved.assigned_client_id:
            approved = approved.model_copy(update={"assigned_client_id": job.client_id})

        try:
            with self._db.sync_transaction() as session:
                self._candidates.create(candidate, session=session)
                self._applications.update(application_id, self._review_update(approved), session=session)
                self._jobs.add_to_array(job.id, "candidate_ids", candidate.id, session=session)
                self._jobs.add_to_array(job.id, "application_ids", application_id, session=session)
        except PyMongoError as e:
            logger.error(f"Failed to persist approval of application {application_id}: {e}")
            raise RelationshipError(f"Failed to persist approval of application {application_id}") from e

        audit_log(
            "application_approved",
            {
                "user_id": getattr(actor, "id", None),
                "application_id": application_id,
                "candidate_id": candidate.id,
                "job_id": job.id,
            },
            audit_type=AuditType.WORKFLOW,
        )
        return approved, candidate

    def reject(
        self,
        actor: Any,
        application_id: str,
        reason: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Application:
        """Reject an application."""
        require_permission(actor, Permission.APPLICATIONS_REJECT)
        application = self._load_application(application_id)
        rejected = reject_application(application, getattr(actor, "id", None) or "", reason=reason, notes=notes)
        self._applications.update(application_id, self._review_update(rejected))

        audit_log(
            "application_rejected",
            {"user_id": getattr(actor, "id", None), "application_id": application_id, "reason": reason},
            audit_type=AuditType.WORKFLOW,
        )
        return rejected

    def score(self, actor: Any, application_id: str, job_id: Optional[str] = None) -> ResumeScore:
        """Resume score of an application against its targeted (or a given) job."""
        require_permission(actor, Permission.APPLICATIONS_VIEW)
        application = self._load_application(application_id)
        job = self._load_job(job_id or application.target_job_id)
        return calculate_resume_score(application, job)
