"""
Statistics service for RecruitDesk.

Loads collections through the repositories, runs the pure rollups from
``recruitdesk.core.statistics``, and can write the computed statistics back
onto client and job documents.
"""

import asyncio
from typing import Any, Optional

from pydantic import BaseModel, Field

from recruitdesk.auth.permissions import Permission, require_permission
from recruitdesk.core.exceptions import NotFoundError
from recruitdesk.core.statistics import (
    ApplicationStats,
    DashboardOverview,
    calculate_application_stats,
    calculate_client_statistics,
    calculate_dashboard_overview,
    calculate_job_statistics,
)
from recruitdesk.data.models import Application, Candidate, Client, ClientStatistics, Job, JobStatistics
from recruitdesk.data.repositories import (
    ApplicationRepository,
    CandidateRepository,
    ClientRepository,
    JobRepository,
    get_application_repository,
    get_candidate_repository,
    get_client_repository,
    get_job_repository,
)
from recruitdesk.utils.logger import LoggerMixin


class DataSnapshot(BaseModel):
    """Everything the rollups read, fetched once."""

    clients: list[Client] = Field(default_factory=list)
    jobs: list[Job] = Field(default_factory=list)
    candidates: list[Candidate] = Field(default_factory=list)
    applications: list[Application] = Field(default_factory=list)


class StatisticsService(LoggerMixin):
    """
    Derived numbers for the dashboard.

    Usage:
        service = StatisticsService()
        overview = service.overview(user)
    """

    def __init__(
        self,
        client_repository: Optional[ClientRepository] = None,
        job_repository: Optional[JobRepository] = None,
        candidate_repository: Optional[CandidateRepository] = None,
        application_repository: Optional[ApplicationRepository] = None,
    ) -> None:
        self._clients = client_repository or get_client_repository()
        self._jobs = job_repository or get_job_repository()
        self._candidates = candidate_repository or get_candidate_repository()
        self._applications = application_repository or get_application_repository()

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def load(self) -> DataSnapshot:
        return DataSnapshot(
            clients=self._clients.get_all(),
            jobs=self._jobs.get_all(),
            candidates=self._candidates.get_all(),
            applications=self._applications.get_all(),
        )

    async def load_async(self) -> DataSnapshot:
        """Fetch the four collections concurrently."""
        clients, jobs, candidates, applications = await asyncio.gather(
            self._clients.get_all_async(),
            self._jobs.get_all_async(),
            self._candidates.get_all_async(),
            self._applications.get_all_async(),
        )
        return DataSnapshot(clients=clients, jobs=jobs, candidates=candidates, applications=applications)

    # -------------------------------------------------------------------------
    # Rollups
    # -------------------------------------------------------------------------

    def client_statistics(self, actor: Any, client_id: str, data: Optional[DataSnapshot] = None) -> ClientStatistics:
        require_permission(actor, Permission.ANALYTICS_VIEW)
        if self._clients.get_by_id(client_id) is None:
            raise NotFoundError("clients", client_id)
        data = data or self.load()
        return calculate_client_statistics(client_id, data.jobs, data.candidates)

    def job_statistics(self, actor: Any, job_id: str, data: Optional[DataSnapshot] = None) -> JobStatistics:
        require_permission(actor, Permission.ANALYTICS_VIEW)
        if self._jobs.get_by_id(job_id) is None:
            raise NotFoundError("jobs", job_id)
        data = data or self.load()
        return calculate_job_statistics(job_id, data.candidates, data.applications)

    def application_stats(self, actor: Any) -> ApplicationStats:
        require_permission(actor, Permission.ANALYTICS_VIEW)
        return calculate_application_stats(self._applications.get_all())

    def overview(self, actor: Any) -> DashboardOverview:
        require_permission(actor, Permission.ANALYTICS_VIEW)
        data = self.load()
        return calculate_dashboard_overview(data.clients, data.jobs, data.candidates, data.applications)

    async def overview_async(self, actor: Any) -> DashboardOverview:
        require_permission(actor, Permission.ANALYTICS_VIEW)
        data = await self.load_async()
        return calculate_dashboard_overview(data.clients, data.jobs, data.candidates, data.applications)

    # -------------------------------------------------------------------------
    # Write-back
    # -------------------------------------------------------------------------

    def refresh_all(self, actor: Any) -> dict[str, int]:
        """
        Recompute and store statistics on every client and job.

        Returns:
            Number of client and job documents updated
        """
        require_permission(actor, Permission.CLIENTS_EDIT)
        require_permission(actor, Permission.JOBS_EDIT)
        data = self.load()

        updated = {"clients": 0, "jobs": 0}
        for client in data.clients:
            statistics = calculate_client_statistics(client.id, data.jobs, data.candidates)
            if self._clients.set_statistics(client.id, statistics) is not None:
                updated["clients"] += 1
        for job in data.jobs:
            statistics = calculate_job_statistics(job.id, data.candidates, data.applications)
            if self._jobs.set_statistics(job.id, statistics) is not None:
                updated["jobs"] += 1

        self.logger.info(f"Refreshed statistics on {updated['clients']} clients and {updated['jobs']} jobs")
        return updated
