"""
Hiring workflow helpers for RecruitDesk.

Small pure transforms: pipeline stage to status mapping, status updates on a
candidate's job application, application approval/rejection, and the resume
score heuristic. Nothing here touches the database; callers persist the
returned records.
"""

from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, Field

from recruitdesk.core.exceptions import RecruitDeskError
from recruitdesk.core.state_machine import validate_transition
from recruitdesk.data.models import (
    Application,
    Candidate,
    Job,
    JobApplication,
    Skill,
    new_document_id,
    utc_now,
)
from recruitdesk.utils.constants import (
    DEFAULT_STAGE_STATUS,
    RESUME_SCORE_EDUCATION,
    RESUME_SCORE_FULL_EXPERIENCE_YEARS,
    RESUME_SCORE_RELEVANCE,
    RESUME_SCORE_WEIGHTS,
    STAGE_TO_STATUS,
    ApplicationStatus,
    CandidateStatus,
    SkillLevel,
)


# =============================================================================
# Pipeline Stages
# =============================================================================


def map_stage_to_status(stage_id: str) -> CandidateStatus:
    """Candidate status for a pipeline stage id; unknown stages map to ``new``."""
    return STAGE_TO_STATUS.get(stage_id, DEFAULT_STAGE_STATUS)


def update_candidate_status(
    candidate: Candidate,
    job_id: str,
    new_status: Union[CandidateStatus, str],
    stage_id: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Candidate:
    """
    Return a copy of ``candidate`` with its status for ``job_id`` changed.

    The move is checked against the candidate transition table. Moving to the
    current status leaves the record untouched apart from ``current_stage``.

    Raises:
        RecruitDeskError: The candidate has no application for ``job_id``
        InvalidTransitionError: The move is not allowed
    """
    entry = candidate.job_application(job_id)
    if entry is None:
        raise RecruitDeskError(f"Candidate {candidate.id} has no application for job {job_id}")

    status = CandidateStatus(new_status)
    validate_transition("candidate", entry.status, status)

    now = now or utc_now()
    changed = entry.status != status.value
    updated_entries = []
    for app in candidate.job_applications:
        if app.job_id != job_id:
            updated_entries.append(app)
            continue
        update: dict = {}
        if changed:
            update.update(status=status.value, last_status_change=now)
        if stage_id is not None:
            update["current_stage"] = stage_id
        updated_entries.append(app.model_copy(update=update))

    return candidate.model_copy(update={"job_applications": updated_entries, "updated_at": now})


def move_candidate_to_stage(
    candidate: Candidate,
    job_id: str,
    stage_id: str,
    now: Optional[datetime] = None,
) -> Candidate:
    """Move a candidate to a pipeline stage, deriving the status from the stage id."""
    return update_candidate_status(candidate, job_id, map_stage_to_status(stage_id), stage_id=stage_id, now=now)


# =============================================================================
# Application Review
# =============================================================================


def approve_application_and_create_candidate(
    application: Application,
    assigned_job_id: str,
    approved_by: str,
    approved_by_name: str,
    now: Optional[datetime] = None,
) -> tuple[Application, Candidate]:
    """
    Approve an application and build the candidate it turns into.

    The candidate gets a generated id and one job application in status
    ``new`` for ``assigned_job_id``; the returned application points at it
    through ``candidate_id``. Nothing is persisted.

    Raises:
        InvalidTransitionError: The application is already closed
    """
    validate_transition("application", application.status, ApplicationStatus.APPROVED)
    now = now or utc_now()
    candidate_id = new_document_id()
    client_ids = [application.target_client_id] if application.target_client_id else []

    candidate = Candidate(
        id=candidate_id,
        first_name=application.first_name,
        last_name=application.last_name,
        email=application.email,
        phone=application.phone,
        current_title=application.current_title,
        current_company=application.current_company,
        years_of_experience=application.years_of_experience or 0,
        source=application.source,
        resume_url=application.resume.url if application.resume else None,
        linkedin_url=application.linkedin_url,
        portfolio_url=application.portfolio_url,
        job_ids=[assigned_job_id],
        application_ids=[application.id] if application.id else [],
        client_ids=client_ids,
        job_applications=[
            JobApplication(
                job_id=assigned_job_id,
                application_id=application.id,
                status=CandidateStatus.NEW,
                applied_at=application.submitted_at,
                last_status_change=now,
            )
        ],
        skills=[Skill(name=s, level=SkillLevel.INTERMEDIATE) for s in application.skills],
        is_active=True,
        created_at=now,
        updated_at=now,
    )

    updated_application = application.model_copy(
        update={
            "status": ApplicationStatus.APPROVED.value,
            "assigned_job_id": assigned_job_id,
            "assigned_client_id": application.target_client_id,
            "approved_by": approved_by,
            "approved_by_name": approved_by_name,
            "approved_at": now,
            "reviewed_by": approved_by,
            "reviewed_at": now,
            "candidate_id": candidate_id,
            "updated_at": now,
        }
    )
    return updated_application, candidate


def reject_application(
    application: Application,
    reviewed_by: str,
    reason: Optional[str] = None,
    notes: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Application:
    """Return a rejected copy of ``application``."""
    validate_transition("application", application.status, ApplicationStatus.REJECTED)
    now = now or utc_now()
    return application.model_copy(
        update={
            "status": ApplicationStatus.REJECTED.value,
            "reviewed_by": reviewed_by,
            "reviewed_at": now,
            "rejection_reason": reason,
            "review_notes": notes if notes is not None else application.review_notes,
            "updated_at": now,
        }
    )


# =============================================================================
# Resume Score
# =============================================================================


class ResumeScoreDetails(BaseModel):
    matched_skills: list[str] = Field(default_factory=list)
    missing_skills: list[str] = Field(default_factory=list)
    experience_years: float = 0
    recommendations: list[str] = Field(default_factory=list)


class ResumeScore(BaseModel):
    """Weighted heuristic score; every component is in [0, 100]."""

    overall: int
    skills: int
    experience: int
    education: int
    relevance: int
    details: ResumeScoreDetails


def calculate_resume_score(application: Application, job: Job) -> ResumeScore:
    """
    Score an application against a job's required skills.

    An applicant skill matches when it is a case-insensitive substring of a
    required skill; a required skill is missing when no applicant skill
    contains it. This is a placeholder heuristic, not a trained model.
    """
    required = job.requirements.skills.required
    applicant_skills = application.skills

    matched = [s for s in applicant_skills if any(s.lower() in req.lower() for req in required)]
    missing = [req for req in required if not any(req.lower() in s.lower() for s in applicant_skills)]

    skills_score = min(len(matched) / len(required), 1.0) * 100 if required else 0.0
    years = max(application.years_of_experience or 0, 0)
    experience_score = min(years / RESUME_SCORE_FULL_EXPERIENCE_YEARS, 1.0) * 100
    education_score = RESUME_SCORE_EDUCATION[application.has_cover_letter]
    relevance_score = RESUME_SCORE_RELEVANCE[application.has_resume]

    overall = (
        skills_score * RESUME_SCORE_WEIGHTS["skills"]
        + experience_score * RESUME_SCORE_WEIGHTS["experience"]
        + education_score * RESUME_SCORE_WEIGHTS["education"]
        + relevance_score * RESUME_SCORE_WEIGHTS["relevance"]
    )

    if missing:
        recommendations = [f"Consider candidates with: {', '.join(missing)}"]
    else:
        recommendations = ["Strong match for the position"]

    return ResumeScore(
        overall=round(overall),
        skills=round(skills_score),
        experience=round(experience_score),
        education=education_score,
        relevance=relevance_score,
        details=ResumeScoreDetails(
            matched_skills=matched,
            missing_skills=missing,
            experience_years=years,
            recommendations=recommendations,
        ),
    )
