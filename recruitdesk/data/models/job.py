"""
Job posting data models for RecruitDesk.

Defines the schema for job postings, including requirements and the
id lists linking a job to its client, applications and candidates.
"""

from datetime import date, datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from recruitdesk.utils.constants import (
    ExperienceLevel,
    JobStatus,
    JobType,
    Priority,
    WorkMode,
)

from .base import Address, BaseDocument, EmbeddedModel, coerce_id


class SalaryRange(EmbeddedModel):
    """Salary range for the position."""

    min: float = Field(default=0, ge=0)
    max: float = Field(default=0, ge=0)
    currency: str = "USD"
    period: Literal["hourly", "daily", "monthly", "yearly"] = "yearly"
    is_negotiable: bool = False

    @model_validator(mode="after")
    def check_bounds(self) -> "SalaryRange":
        """Reject inverted ranges."""
        if self.max and self.min > self.max:
            raise ValueError("Salary minimum must not exceed maximum")
        return self

    @property
    def display_string(self) -> str:
        """Format as ``USD 100,000 - 150,000``."""
        return f"{self.currency} {self.min:,.0f} - {self.max:,.0f}"


class SkillSet(EmbeddedModel):
    """Required and nice-to-have skills."""

    required: list[str] = Field(default_factory=list)
    preferred: list[str] = Field(default_factory=list)


class JobRequirements(EmbeddedModel):
    """Qualifications asked of applicants."""

    education: Optional[str] = None
    experience: str = ""
    skills: SkillSet = Field(default_factory=SkillSet)
    languages: list[str] = Field(default_factory=list)
    certifications: list[str] = Field(default_factory=list)


class JobStatistics(EmbeddedModel):
    """Application and candidate rollups for one job."""

    total_applications: int = 0
    approved_applications: int = 0
    rejected_applications: int = 0
    total_candidates: int = 0
    active_candidates: int = 0
    hired_candidates: int = 0
    rejected_candidates: int = 0
    interviewing_candidates: int = 0
    offer_extended_candidates: int = 0
    candidates_in_pipeline: int = 0
    average_time_to_hire: Optional[float] = None  # days
    success_rate: float = 0.0


class Job(BaseDocument):
    """
    Main job posting model.

    Represents an opening at a client, with its pipeline and the ids of the
    applications and candidates attached to it.
    """

    # Basic Information
    title: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    responsibilities: list[str] = Field(default_factory=list)
    department: Optional[str] = None

    # Client (foreign key)
    client_id: str

    # Employment Details
    status: JobStatus = JobStatus.DRAFT
    type: JobType = JobType.FULL_TIME
    experience_level: ExperienceLevel = ExperienceLevel.MID
    work_mode: WorkMode = WorkMode.ONSITE
    location: Optional[Address] = None
    salary_range: Optional[SalaryRange] = None
    requirements: JobRequirements = Field(default_factory=JobRequirements)

    priority: Priority = Priority.MEDIUM
    openings: int = Field(default=1, ge=0)
    filled_positions: int = Field(default=0, ge=0)
    application_deadline: Optional[date] = None
    start_date: Optional[date] = None
    posted_date: Optional[datetime] = None

    # Team and taxonomy
    assigned_recruiter_id: Optional[str] = None
    recruiter_ids: list[str] = Field(default_factory=list)
    hiring_manager_ids: list[str] = Field(default_factory=list)
    category_ids: list[str] = Field(default_factory=list)
    tag_ids: list[str] = Field(default_factory=list)
    pipeline_id: Optional[str] = None

    # Relationships
    application_ids: list[str] = Field(default_factory=list)
    candidate_ids: list[str] = Field(default_factory=list)

    statistics: JobStatistics = Field(default_factory=JobStatistics)

    @field_validator("client_id", mode="before")
    @classmethod
    def normalize_client_id(cls, v: Any) -> Any:
        """Jobs fetched with a populated client carry an object instead of an id."""
        return coerce_id(v)

    @property
    def required_skills(self) -> list[str]:
        """Get list of required skill names."""
        return list(self.requirements.skills.required)

    @property
    def is_active(self) -> bool:
        """Check if job is currently accepting applications."""
        if self.status != JobStatus.OPEN:
            return False
        if self.application_deadline and self.application_deadline < date.today():
            return False
        return True

    @property
    def remaining_openings(self) -> int:
        """Positions still to fill."""
        return max(self.openings - self.filled_positions, 0)

    class Settings:
        """MongoDB collection settings."""

        name = "jobs"
        indexes = [
            "client_id",
            "status",
            "type",
            "priority",
            "candidate_ids",
            "created_at",
        ]


class JobCreate(BaseModel):
    """Schema for creating a new job posting."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    client_id: str
    type: JobType = JobType.FULL_TIME
    experience_level: ExperienceLevel = ExperienceLevel.MID
    work_mode: WorkMode = WorkMode.ONSITE
    location: Optional[Address] = None
    salary_range: Optional[SalaryRange] = None
    requirements: Optional[JobRequirements] = None
    responsibilities: list[str] = Field(default_factory=list)
    department: Optional[str] = None
    priority: Priority = Priority.MEDIUM
    openings: int = 1
    application_deadline: Optional[date] = None
    start_date: Optional[date] = None
    recruiter_ids: list[str] = Field(default_factory=list)
    hiring_manager_ids: list[str] = Field(default_factory=list)
    category_ids: list[str] = Field(default_factory=list)
    tag_ids: list[str] = Field(default_factory=list)
    pipeline_id: Optional[str] = None


class JobUpdate(BaseModel):
    """Schema for updating an existing job posting."""

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    type: Optional[JobType] = None
    experience_level: Optional[ExperienceLevel] = None
    work_mode: Optional[WorkMode] = None
    location: Optional[Address] = None
    salary_range: Optional[SalaryRange] = None
    requirements: Optional[JobRequirements] = None
    responsibilities: Optional[list[str]] = None
    department: Optional[str] = None
    priority: Optional[Priority] = None
    openings: Optional[int] = None
    filled_positions: Optional[int] = None
    application_deadline: Optional[date] = None
    start_date: Optional[date] = None
    recruiter_ids: Optional[list[str]] = None
    hiring_manager_ids: Optional[list[str]] = None
    category_ids: Optional[list[str]] = None
    tag_ids: Optional[list[str]] = None
    pipeline_id: Optional[str] = None
