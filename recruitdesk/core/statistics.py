"""
Derived statistics for RecruitDesk.

Pure functions over already-fetched lists. Each call is a linear scan;
nothing is cached or paginated. Rates are percentages and are 0 when the
denominator is empty.
"""

from collections import Counter
from datetime import datetime, timezone
from typing import Iterable, Optional, Sequence

from pydantic import BaseModel, Field

from recruitdesk.data.models import (
    Application,
    Candidate,
    Client,
    ClientStatistics,
    Job,
    JobStatistics,
)
from recruitdesk.utils.constants import (
    CLOSED_CANDIDATE_STATUSES,
    REJECTED_CANDIDATE_STATUSES,
    ApplicationStatus,
    CandidateStatus,
    ClientStatus,
    JobStatus,
)


class SourceCount(BaseModel):
    source: str
    count: int


class ApplicationStats(BaseModel):
    """Review funnel for a set of applications."""

    total: int = 0
    pending: int = 0
    under_review: int = 0
    approved: int = 0
    rejected: int = 0
    withdrawn: int = 0
    approval_rate: float = 0.0
    top_sources: list[SourceCount] = Field(default_factory=list)
    applications_by_day: dict[str, int] = Field(default_factory=dict)


class DashboardOverview(BaseModel):
    """Headline numbers for the dashboard cards."""

    open_jobs: int = 0
    total_jobs: int = 0
    active_candidates: int = 0
    total_candidates: int = 0
    pending_applications: int = 0
    active_clients: int = 0
    total_clients: int = 0


# -------------------------------------------------------------------------
# Helpers
# -------------------------------------------------------------------------


def percentage(part: int, whole: int) -> float:
    """``part / whole`` as a percentage rounded to one decimal, 0 for an empty whole."""
    if whole <= 0:
        return 0.0
    return round(part / whole * 100, 1)


def _statuses_for(candidate: Candidate, job_ids: set[str]) -> list[str]:
    return [app.status for app in candidate.job_applications if app.job_id in job_ids]


def _average_days_to_hire(candidates: Iterable[Candidate], job_ids: set[str]) -> Optional[float]:
    durations = []
    for candidate in candidates:
        for app in candidate.job_applications:
            if app.job_id in job_ids and app.status == CandidateStatus.HIRED:
                delta = _aware(app.last_status_change) - _aware(app.applied_at)
                durations.append(delta.total_seconds() / 86400)
    if not durations:
        return None
    return round(sum(durations) / len(durations), 1)


def _aware(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


# -------------------------------------------------------------------------
# Client / Job Rollups
# -------------------------------------------------------------------------


def calculate_client_statistics(
    client_id: str,
    jobs: Sequence[Job],
    candidates: Sequence[Candidate],
) -> ClientStatistics:
    """
    Roll up a client's jobs and the candidates attached to them.

    A candidate belongs to the client when any of its ``job_ids`` is one of
    the client's jobs. Candidate counts only look at the job applications for
    those jobs: active means any status other than hired/rejected/withdrawn,
    rejected counts rejected or withdrawn.
    """
    client_jobs = [j for j in jobs if j.client_id == client_id]
    job_ids = {j.id for j in client_jobs}

    client_candidates = [c for c in candidates if job_ids.intersection(c.job_ids)]

    active = hired = rejected = 0
    for candidate in client_candidates:
        statuses = _statuses_for(candidate, job_ids)
        if any(s not in CLOSED_CANDIDATE_STATUSES for s in statuses):
            active += 1
        if any(s == CandidateStatus.HIRED for s in statuses):
            hired += 1
        if any(s in REJECTED_CANDIDATE_STATUSES for s in statuses):
            rejected += 1

    total_candidates = len(client_candidates)
    return ClientStatistics(
        total_jobs=len(client_jobs),
        active_jobs=sum(1 for j in client_jobs if j.status == JobStatus.OPEN),
        closed_jobs=sum(1 for j in client_jobs if j.status == JobStatus.CLOSED),
        draft_jobs=sum(1 for j in client_jobs if j.status == JobStatus.DRAFT),
        total_candidates=total_candidates,
        active_candidates=active,
        hired_candidates=hired,
        rejected_candidates=rejected,
        average_time_to_hire=_average_days_to_hire(client_candidates, job_ids),
        success_rate=percentage(hired, total_candidates),
    )


def calculate_job_statistics(
    job_id: str,
    candidates: Sequence[Candidate],
    applications: Sequence[Application],
) -> JobStatistics:
    """
    Roll up one job's applications and pipeline.

    Applications count when they target or were assigned to the job.
    ``candidates_in_pipeline`` counts each candidate once: those whose status
    for this job is not hired, rejected or withdrawn.
    """
    job_candidates = [c for c in candidates if job_id in c.job_ids]
    job_applications = [a for a in applications if a.is_for_job(job_id)]

    counts: Counter = Counter()
    for candidate in job_candidates:
        statuses = set(_statuses_for(candidate, {job_id}))
        if statuses - CLOSED_CANDIDATE_STATUSES:
            counts["active"] += 1
        if CandidateStatus.HIRED.value in statuses:
            counts["hired"] += 1
        if statuses & REJECTED_CANDIDATE_STATUSES:
            counts["rejected"] += 1
        if CandidateStatus.INTERVIEWING.value in statuses:
            counts["interviewing"] += 1
        if CandidateStatus.OFFER_EXTENDED.value in statuses:
            counts["offer_extended"] += 1

    return JobStatistics(
        total_applications=len(job_applications),
        approved_applications=sum(1 for a in job_applications if a.status == ApplicationStatus.APPROVED),
        rejected_applications=sum(1 for a in job_applications if a.status == ApplicationStatus.REJECTED),
        total_candidates=len(job_candidates),
        active_candidates=counts["active"],
        hired_candidates=counts["hired"],
        rejected_candidates=counts["rejected"],
        interviewing_candidates=counts["interviewing"],
        offer_extended_candidates=counts["offer_extended"],
        # "active" already includes interviewing and offer_extended
        candidates_in_pipeline=counts["active"],
        average_time_to_hire=_average_days_to_hire(job_candidates, {job_id}),
        success_rate=percentage(counts["hired"], len(job_candidates)),
    )


# -------------------------------------------------------------------------
# Applications / Dashboard
# -------------------------------------------------------------------------


def calculate_application_stats(
    applications: Sequence[Application],
    top_sources: int = 5,
) -> ApplicationStats:
    """Counts per review status, approval rate over decided applications, top sources."""
    by_status = Counter(a.status for a in applications)
    by_source = Counter(a.source for a in applications)
    by_day = Counter(_aware(a.submitted_at).date().isoformat() for a in applications)

    approved = by_status[ApplicationStatus.APPROVED.value]
    rejected = by_status[ApplicationStatus.REJECTED.value]

    return ApplicationStats(
        total=len(applications),
        pending=by_status[ApplicationStatus.PENDING.value],
        under_review=by_status[ApplicationStatus.UNDER_REVIEW.value],
        approved=approved,
        rejected=rejected,
        withdrawn=by_status[ApplicationStatus.WITHDRAWN.value],
        approval_rate=percentage(approved, approved + rejected),
        top_sources=[
            SourceCount(source=source, count=count)
            for source, count in by_source.most_common(top_sources)
        ],
        applications_by_day=dict(sorted(by_day.items())),
    )


def calculate_dashboard_overview(
    clients: Sequence[Client],
    jobs: Sequence[Job],
    candidates: Sequence[Candidate],
    applications: Sequence[Application],
) -> DashboardOverview:
    """Headline counts across all collections."""
    active_candidates = sum(
        1
        for c in candidates
        if any(app.status not in CLOSED_CANDIDATE_STATUSES for app in c.job_applications)
    )
    return DashboardOverview(
        open_jobs=sum(1 for j in jobs if j.status == JobStatus.OPEN),
        total_jobs=len(jobs),
        active_candidates=active_candidates,
        total_candidates=len(candidates),
        pending_applications=sum(1 for a in applications if a.status == ApplicationStatus.PENDING),
        active_clients=sum(1 for c in clients if c.status == ClientStatus.ACTIVE),
        total_clients=len(clients),
    )
