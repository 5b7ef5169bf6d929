"""
Application data models for RecruitDesk.

An application is an inbound submission for a job. Approval promotes it
into a Candidate record; ``candidate_id`` then points at that record.
"""

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, EmailStr, Field

from recruitdesk.utils.constants import ApplicationStatus, CandidateSource, Priority

from .base import Attachment, BaseDocument, EmbeddedModel, utc_now


class ExpectedSalary(EmbeddedModel):
    """Applicant's salary expectation."""

    min: float = 0
    max: float = 0
    currency: str = "USD"
    period: Literal["hourly", "monthly", "yearly"] = "yearly"


class Application(BaseDocument):
    """
    Inbound application document.

    Stored in the applications collection.
    """

    # Target
    target_job_id: Optional[str] = None
    target_client_id: Optional[str] = None
    job_title: Optional[str] = None  # cached for display
    client_name: Optional[str] = None  # cached for display

    # Applicant
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: Optional[str] = None
    current_title: Optional[str] = None
    current_company: Optional[str] = None
    years_of_experience: Optional[float] = Field(default=None, ge=0)
    skills: list[str] = Field(default_factory=list)
    expected_salary: Optional[ExpectedSalary] = None
    available_start_date: Optional[date] = None
    preferred_work_mode: Optional[Literal["remote", "onsite", "hybrid"]] = None
    willing_to_relocate: Optional[bool] = None
    linkedin_url: Optional[str] = None
    portfolio_url: Optional[str] = None

    # Submission
    status: ApplicationStatus = ApplicationStatus.PENDING
    priority: Optional[Priority] = None
    source: CandidateSource = CandidateSource.WEBSITE
    referred_by: Optional[str] = None
    cover_letter: Optional[str] = None
    resume: Optional[Attachment] = None
    additional_documents: list[Attachment] = Field(default_factory=list)
    submitted_at: datetime = Field(default_factory=utc_now)

    # Review
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    review_notes: Optional[str] = None
    rejection_reason: Optional[str] = None

    # Approval
    assigned_job_id: Optional[str] = None
    assigned_client_id: Optional[str] = None
    approved_by: Optional[str] = None
    approved_by_name: Optional[str] = None
    approved_at: Optional[datetime] = None
    candidate_id: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def has_resume(self) -> bool:
        return self.resume is not None

    @property
    def has_cover_letter(self) -> bool:
        return bool(self.cover_letter and self.cover_letter.strip())

    def is_for_job(self, job_id: str) -> bool:
        """True when the application targets or was assigned to ``job_id``."""
        return job_id in (self.target_job_id, self.assigned_job_id)

    class Settings:
        """MongoDB collection settings."""

        name = "applications"
        indexes = [
            "target_job_id",
            "assigned_job_id",
            "status",
            "email",
            "submitted_at",
            "created_at",
        ]


class ApplicationCreate(BaseModel):
    """Schema for submitting a new application."""

    target_job_id: str
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: Optional[str] = None
    cover_letter: Optional[str] = None
    current_title: Optional[str] = None
    current_company: Optional[str] = None
    years_of_experience: Optional[float] = None
    skills: list[str] = Field(default_factory=list)
    source: CandidateSource = CandidateSource.WEBSITE
    referred_by: Optional[str] = None
    resume: Optional[Attachment] = None


class ApplicationReview(BaseModel):
    """Schema for a reviewer's decision."""

    status: ApplicationStatus
    priority: Optional[Priority] = None
    review_notes: Optional[str] = None
    rejection_reason: Optional[str] = None
