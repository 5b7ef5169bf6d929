"""
Job repository for RecruitDesk.

Provides data access operations for job posting documents, including
client lookups and validated status changes.
"""

from typing import Optional

from recruitdesk.core.state_machine import validate_transition
from recruitdesk.data.models.base import utc_now
from recruitdesk.data.models.job import Job, JobCreate, JobStatistics, JobUpdate
from recruitdesk.utils.constants import JobStatus
from recruitdesk.utils.logger import get_logger

from .base import BaseRepository

logger = get_logger(__name__)


class JobRepository(BaseRepository[Job]):
    """Repository for job posting document operations."""

    @property
    def model_class(self) -> type[Job]:
        return Job

    # -------------------------------------------------------------------------
    # Create Operations
    # -------------------------------------------------------------------------

    def create_from_schema(self, data: JobCreate) -> Job:
        """Create a draft job from a create schema."""
        fields = data.model_dump(exclude_none=True)
        job = Job(**fields)
        return self.create(job)

    # -------------------------------------------------------------------------
    # Update Operations
    # -------------------------------------------------------------------------

    def update_from_schema(self, id_value: str, data: JobUpdate) -> Optional[Job]:
        """Update a job from an update schema."""
        update_data = data.model_dump(exclude_unset=True, exclude_none=True)
        if not update_data:
            return self.get_by_id(id_value)
        return self.update(id_value, update_data)

    def update_status(self, id_value: str, status: JobStatus) -> Optional[Job]:
        """
        Move a job to ``status`` if the transition table allows it.

        Publishing (moving to OPEN the first time) stamps ``posted_date``.
        """
        job = self.get_by_id(id_value)
        if job is None:
            return None

        validate_transition("job", job.status, status)
        update: dict = {"status": JobStatus(status).value}
        if status == JobStatus.OPEN and job.posted_date is None:
            update["posted_date"] = utc_now()
        return self.update(id_value, update)

    def publish(self, id_value: str) -> Optional[Job]:
        """Publish a job posting (set to OPEN status)."""
        return self.update_status(id_value, JobStatus.OPEN)

    def close(self, id_value: str) -> Optional[Job]:
        """Close a job posting."""
        return self.update_status(id_value, JobStatus.CLOSED)

    def set_statistics(self, id_value: str, statistics: JobStatistics) -> Optional[Job]:
        """Store computed statistics on the job document."""
        return self.update(id_value, {"statistics": statistics.model_dump()})

    # -------------------------------------------------------------------------
    # Query Operations
    # -------------------------------------------------------------------------

    def get_by_client(self, client_id: str) -> list[Job]:
        """Get all jobs belonging to a client."""
        return self.find({"client_id": client_id}, limit=0)

    def get_by_status(self, status: JobStatus, limit: int = 0) -> list[Job]:
        """Get jobs by status."""
        return self.find({"status": JobStatus(status).value}, limit=limit)

    def get_open_jobs(self) -> list[Job]:
        """Get all jobs accepting applications."""
        return self.get_by_status(JobStatus.OPEN)

    def get_by_candidate(self, candidate_id: str) -> list[Job]:
        """Get jobs that list ``candidate_id`` in their candidate ids."""
        return self.find({"candidate_ids": candidate_id}, limit=0)

    def get_by_recruiter(self, recruiter_id: str) -> list[Job]:
        """Get jobs a recruiter is assigned to."""
        return self.find(
            {"$or": [{"assigned_recruiter_id": recruiter_id}, {"recruiter_ids": recruiter_id}]},
            limit=0,
        )

    def search(self, text: str, limit: int = 50) -> list[Job]:
        """Case-insensitive search in title and department."""
        import re

        pattern = {"$regex": re.escape(text), "$options": "i"}
        return self.find({"$or": [{"title": pattern}, {"department": pattern}]}, limit=limit)

    def get_status_counts(self) -> dict[str, int]:
        """Count jobs per status."""
        collection = self._get_sync_collection()
        pipeline = [{"$group": {"_id": "$status", "count": {"$sum": 1}}}]
        counts = {status.value: 0 for status in JobStatus}
        for row in collection.aggregate(pipeline):
            counts[row["_id"]] = row["count"]
        return counts


# Singleton instance
_job_repository: Optional[JobRepository] = None


def get_job_repository() -> JobRepository:
    """Get the job repository singleton instance."""
    global _job_repository
    if _job_repository is None:
        _job_repository = JobRepository()
    return _job_repository
