"""
Relationship service for RecruitDesk.

Writes both sides of the client/job and job/candidate links. With
``DB_USE_TRANSACTIONS`` enabled the two writes share one transaction;
otherwise they are applied one after the other and a failure between them
is logged and left for ``validate`` to report.
"""

from typing import Any, Optional

from pymongo.errors import PyMongoError

from recruitdesk.auth.permissions import Permission, require_permission
from recruitdesk.core.exceptions import NotFoundError, RelationshipError
from recruitdesk.core.relationships import RelationshipReport, validate_relationships
from recruitdesk.data.database import get_database_manager
from recruitdesk.data.models import Candidate, Job, JobApplication, utc_now
from recruitdesk.data.repositories import (
    CandidateRepository,
    ClientRepository,
    JobRepository,
    get_candidate_repository,
    get_client_repository,
    get_job_repository,
)
from recruitdesk.utils.constants import CandidateStatus
from recruitdesk.utils.logger import AuditType, audit_log, get_logger

logger = get_logger(__name__)


class RelationshipService:
    """
    Keeps the two-sided id arrays in step.

    Usage:
        service = RelationshipService()
        service.assign_candidate_to_job(user, candidate_id, job_id)
    """

    def __init__(
        self,
        client_repository: Optional[ClientRepository] = None,
        job_repository: Optional[JobRepository] = None,
        candidate_repository: Optional[CandidateRepository] = None,
        db_manager: Any = None,
    ) -> None:
        self._clients = client_repository or get_client_repository()
        self._jobs = job_repository or get_job_repository()
        self._candidates = candidate_repository or get_candidate_repository()
        self._db = db_manager or get_database_manager()

    def _load_job(self, job_id: str) -> Job:
        job = self._jobs.get_by_id(job_id)
        if job is None:
            raise NotFoundError("jobs", job_id)
        return job

    def _load_candidate(self, candidate_id: str) -> Candidate:
        candidate = self._candidates.get_by_id(candidate_id)
        if candidate is None:
            raise NotFoundError("candidates", candidate_id)
        return candidate

    # -------------------------------------------------------------------------
    # Job <-> Client
    # -------------------------------------------------------------------------

    def link_job_to_client(self, actor: Any, job_id: str, client_id: str) -> Job:
        """Point a job at a client and add it to the client's job list."""
        require_permission(actor, Permission.JOBS_EDIT)
        job = self._load_job(job_id)
        if self._clients.get_by_id(client_id) is None:
            raise NotFoundError("clients", client_id)

        previous = job.client_id
        try:
            with self._db.sync_transaction() as session:
                if previous and previous != client_id:
                    self._clients.remove_from_array(previous, "job_ids", job_id, session=session)
                self._jobs.update(job_id, {"client_id": client_id}, session=session)
                self._clients.add_to_array(client_id, "job_ids", job_id, session=session)
        except PyMongoError as e:
            logger.error(f"Failed to link job {job_id} to client {client_id}: {e}")
            raise RelationshipError(f"Failed to link job {job_id} to client {client_id}") from e

        audit_log(
            "job_linked_to_client",
            {"user_id": getattr(actor, "id", None), "job_id": job_id, "client_id": client_id},
            audit_type=AuditType.RELATIONSHIP,
        )
        return job.model_copy(update={"client_id": client_id})

    # -------------------------------------------------------------------------
    # Candidate <-> Job
    # -------------------------------------------------------------------------

    def assign_candidate_to_job(self, actor: Any, candidate_id: str, job_id: str) -> Candidate:
        """
        Add a candidate to a job's pipeline.

        The candidate gets a job application in status ``new`` unless one
        already exists; repeated calls change nothing.
        """
        require_permission(actor, Permission.CANDIDATES_EDIT)
        candidate = self._load_candidate(candidate_id)
        job = self._load_job(job_id)

        job_applications = list(candidate.job_applications)
        if candidate.job_application(job_id) is None:
            now = utc_now()
            job_applications.append(
                JobApplication(job_id=job_id, status=CandidateStatus.NEW, applied_at=now, last_status_change=now)
            )

        job_ids = candidate.job_ids if job_id in candidate.job_ids else [*candidate.job_ids, job_id]
        client_ids = list(candidate.client_ids)
        if job.client_id and job.client_id not in client_ids:
            client_ids.append(job.client_id)

        update = {
            "job_ids": job_ids,
            "client_ids": client_ids,
            "job_applications": [a.model_dump() for a in job_applications],
        }
        try:
            with self._db.sync_transaction() as session:
                self._candidates.update(candidate_id, update, session=session)
                self._jobs.add_to_array(job_id, "candidate_ids", candidate_id, session=session)
        except PyMongoError as e:
            logger.error(f"Failed to assign candidate {candidate_id} to job {job_id}: {e}")
            raise RelationshipError(f"Failed to assign candidate {candidate_id} to job {job_id}") from e

        audit_log(
            "candidate_assigned",
            {"user_id": getattr(actor, "id", None), "candidate_id": candidate_id, "job_id": job_id},
            audit_type=AuditType.RELATIONSHIP,
        )
        return candidate.model_copy(
            update={"job_ids": job_ids, "client_ids": client_ids, "job_applications": job_applications}
        )

    def unassign_candidate_from_job(self, actor: Any, candidate_id: str, job_id: str) -> Candidate:
        """Remove a candidate from a job's pipeline, dropping their job application."""
        require_permission(actor, Permission.CANDIDATES_EDIT)
        candidate = self._load_candidate(candidate_id)

        job_ids = [i for i in candidate.job_ids if i != job_id]
        job_applications = [a for a in candidate.job_applications if a.job_id != job_id]
        update = {
            "job_ids": job_ids,
            "job_applications": [a.model_dump() for a in job_applications],
        }
        try:
            with self._db.sync_transaction() as session:
                self._candidates.update(candidate_id, update, session=session)
                self._jobs.remove_from_array(job_id, "candidate_ids", candidate_id, session=session)
        except PyMongoError as e:
            logger.error(f"Failed to unassign candidate {candidate_id} from job {job_id}: {e}")
            raise RelationshipError(f"Failed to unassign candidate {candidate_id} from job {job_id}") from e

        audit_log(
            "candidate_unassigned",
            {"user_id": getattr(actor, "id", None), "candidate_id": candidate_id, "job_id": job_id},
            audit_type=AuditType.RELATIONSHIP,
        )
        return candidate.model_copy(update={"job_ids": job_ids, "job_applications": job_applications})

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def validate(self, actor: Any) -> RelationshipReport:
        """Check every stored relationship; reports problems without fixing them."""
        require_permission(actor, Permission.ANALYTICS_VIEW)
        report = validate_relationships(
            self._clients.get_all(),
            self._jobs.get_all(),
            self._candidates.get_all(),
        )
        if not report.valid:
            logger.warning(f"Relationship check found {len(report.errors)} problem(s)")
        return report
