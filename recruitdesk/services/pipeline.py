"""
Pipeline board service for RecruitDesk.

Moves candidates between a job's pipeline stages. The stage id must belong
to the job's pipeline (or the default pipeline when the job has none), and
the resulting status change must be allowed by the candidate transition
table.
"""

from typing import Any, Optional

from recruitdesk.auth.permissions import Permission, require_permission
from recruitdesk.core.exceptions import NotFoundError, RecruitDeskError
from recruitdesk.core.workflow import move_candidate_to_stage
from recruitdesk.data.models import Candidate, Job, Pipeline
from recruitdesk.data.repositories import (
    CandidateRepository,
    JobRepository,
    PipelineRepository,
    get_candidate_repository,
    get_job_repository,
    get_pipeline_repository,
)
from recruitdesk.utils.logger import AuditType, audit_log, get_logger

logger = get_logger(__name__)


class PipelineService:
    def __init__(
        self,
        candidate_repository: Optional[CandidateRepository] = None,
        job_repository: Optional[JobRepository] = None,
        pipeline_repository: Optional[PipelineRepository] = None,
    ) -> None:
        self._candidates = candidate_repository or get_candidate_repository()
        self._jobs = job_repository or get_job_repository()
        self._pipelines = pipeline_repository or get_pipeline_repository()

    def pipeline_for_job(self, job: Job) -> Optional[Pipeline]:
        """The job's pipeline, falling back to the default one."""
        if job.pipeline_id:
            pipeline = self._pipelines.get_by_id(job.pipeline_id)
            if pipeline is not None:
                return pipeline
            logger.warning(f"Job {job.id} references missing pipeline {job.pipeline_id}")
        return self._pipelines.get_default()

    def move_candidate(self, actor: Any, candidate_id: str, job_id: str, stage_id: str) -> Candidate:
        """
        Move a candidate to ``stage_id`` on a job's board and persist it.

        Raises:
            PermissionDeniedError: The actor cannot edit candidates
            NotFoundError: Candidate or job does not exist
            RecruitDeskError: The stage is not part of the job's pipeline
            InvalidTransitionError: The stage's status is not reachable
        """
        require_permission(actor, Permission.CANDIDATES_EDIT)
        candidate = self._candidates.get_by_id(candidate_id)
        if candidate is None:
            raise NotFoundError("candidates", candidate_id)
        job = self._jobs.get_by_id(job_id)
        if job is None:
            raise NotFoundError("jobs", job_id)

        pipeline = self.pipeline_for_job(job)
        if pipeline is not None and pipeline.get_stage(stage_id) is None:
            raise RecruitDeskError(f"Stage '{stage_id}' is not part of pipeline '{pipeline.name}'")

        previous = candidate.status_for_job(job_id)
        moved = move_candidate_to_stage(candidate, job_id, stage_id)
        self._candidates.update(
            candidate_id,
            {"job_applications": [a.model_dump() for a in moved.job_applications]},
        )

        audit_log(
            "candidate_moved",
            {
                "user_id": getattr(actor, "id", None),
                "candidate_id": candidate_id,
                "job_id": job_id,
                "stage_id": stage_id,
                "from_status": previous,
                "to_status": moved.status_for_job(job_id),
            },
            audit_type=AuditType.WORKFLOW,
        )
        return moved
