"""
Candidate data models for RecruitDesk.

A candidate is an approved applicant. Each job the candidate is attached to
gets a ``JobApplication`` sub-record carrying that job's pipeline status.
"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from recruitdesk.utils.constants import CandidateSource, CandidateStatus, SkillLevel

from .base import BaseDocument, EmbeddedModel, utc_now


class Skill(EmbeddedModel):
    """Represents a single skill with metadata."""

    name: str
    level: SkillLevel = SkillLevel.INTERMEDIATE
    years_of_experience: Optional[float] = None

    @field_validator("name")
    @classmethod
    def strip_skill_name(cls, v: str) -> str:
        return v.strip()


class WorkExperience(EmbeddedModel):
    """Represents a single work experience entry."""

    job_title: str
    company: str
    location: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None  # None indicates current position
    is_current: bool = False
    description: Optional[str] = None


class Education(EmbeddedModel):
    """Represents a single education entry."""

    degree: str
    field_of_study: Optional[str] = None
    institution: str
    graduation_date: Optional[date] = None


class Language(EmbeddedModel):
    """Represents a language proficiency."""

    language: str
    proficiency: str = "conversational"  # native, fluent, professional, conversational, basic


class JobApplication(EmbeddedModel):
    """A candidate's standing in one job's pipeline."""

    job_id: str
    application_id: Optional[str] = None
    status: CandidateStatus = CandidateStatus.NEW
    current_stage: Optional[str] = None
    applied_at: datetime = Field(default_factory=utc_now)
    last_status_change: datetime = Field(default_factory=utc_now)
    email_ids: list[str] = Field(default_factory=list)
    emails_sent: int = 0
    emails_received: int = 0
    notes: Optional[str] = None


class Candidate(BaseDocument):
    """
    Main candidate model.

    This is the primary document stored in the candidates collection.
    """

    # Personal Information
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: Optional[str] = None
    location: Optional[str] = None
    avatar: Optional[str] = None

    # Professional
    current_title: Optional[str] = None
    current_company: Optional[str] = None
    years_of_experience: float = Field(default=0, ge=0)
    source: CandidateSource = CandidateSource.OTHER
    resume_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    portfolio_url: Optional[str] = None

    # Qualifications
    skills: list[Skill] = Field(default_factory=list)
    education: list[Education] = Field(default_factory=list)
    work_experience: list[WorkExperience] = Field(default_factory=list)
    languages: list[Language] = Field(default_factory=list)

    # Relationships
    job_ids: list[str] = Field(default_factory=list)
    application_ids: list[str] = Field(default_factory=list)
    client_ids: list[str] = Field(default_factory=list)
    job_applications: list[JobApplication] = Field(default_factory=list)

    category_ids: list[str] = Field(default_factory=list)
    tag_ids: list[str] = Field(default_factory=list)
    total_emails_sent: int = 0
    total_emails_received: int = 0
    is_active: bool = True

    @property
    def full_name(self) -> str:
        """Get candidate's full name."""
        return f"{self.first_name} {self.last_name}"

    @property
    def skill_names(self) -> list[str]:
        """Get list of all skill names."""
        return [skill.name for skill in self.skills]

    def job_application(self, job_id: str) -> Optional[JobApplication]:
        """The pipeline sub-record for ``job_id``, if any."""
        for entry in self.job_applications:
            if entry.job_id == job_id:
                return entry
        return None

    def status_for_job(self, job_id: str) -> Optional[str]:
        """Pipeline status for ``job_id``, or None when not attached."""
        entry = self.job_application(job_id)
        return entry.status if entry else None

    @property
    def overall_status(self) -> str:
        """Most recently changed pipeline status, ``new`` with no applications."""
        if not self.job_applications:
            return CandidateStatus.NEW.value
        latest = max(self.job_applications, key=lambda a: a.last_status_change)
        return latest.status

    class Settings:
        """MongoDB collection settings."""

        name = "candidates"
        indexes = [
            "email",
            "job_ids",
            "client_ids",
            "job_applications.status",
            "created_at",
        ]


class CandidateCreate(BaseModel):
    """Schema for creating a new candidate."""

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: Optional[str] = None
    location: Optional[str] = None
    current_title: Optional[str] = None
    current_company: Optional[str] = None
    years_of_experience: float = 0
    source: CandidateSource = CandidateSource.OTHER
    resume_url: Optional[str] = None
    skills: list[Skill] = Field(default_factory=list)
    education: list[Education] = Field(default_factory=list)
    work_experience: list[WorkExperience] = Field(default_factory=list)
    languages: list[Language] = Field(default_factory=list)


class CandidateUpdate(BaseModel):
    """Schema for updating an existing candidate."""

    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    current_title: Optional[str] = None
    current_company: Optional[str] = None
    years_of_experience: Optional[float] = None
    resume_url: Optional[str] = None
    skills: Optional[list[Skill]] = None
    education: Optional[list[Education]] = None
    work_experience: Optional[list[WorkExperience]] = None
    languages: Optional[list[Language]] = None
    is_active: Optional[bool] = None
