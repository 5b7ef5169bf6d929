"""
Application-wide constants for RecruitDesk.

This module contains all constant values used throughout the application.
Modify these values to customize behavior without changing code logic.
"""

from enum import Enum
from typing import Final


# =============================================================================
# Application Constants
# =============================================================================

APP_NAME: Final[str] = "RecruitDesk"
APP_DISPLAY_NAME: Final[str] = "RecruitDesk Applicant Tracking"
VERSION: Final[str] = "0.1.0"


# =============================================================================
# Collections
# =============================================================================


class Collection(str, Enum):
    """Document store collections, one per entity."""

    CLIENTS = "clients"
    JOBS = "jobs"
    CANDIDATES = "candidates"
    APPLICATIONS = "applications"
    USERS = "users"
    PIPELINES = "pipelines"
    CATEGORIES = "categories"
    TAGS = "tags"


# =============================================================================
# Enums
# =============================================================================


class UserRole(str, Enum):
    """Role of a team member."""

    ADMIN = "admin"
    RECRUITER = "recruiter"
    HIRING_MANAGER = "hiring_manager"
    VIEWER = "viewer"


class ClientStatus(str, Enum):
    """Status of a client account."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    PENDING = "pending"


class ClientType(str, Enum):
    """Industry/segment of a client."""

    STARTUP = "startup"
    SME = "sme"
    ENTERPRISE = "enterprise"
    TECHNOLOGY = "technology"
    HEALTHCARE = "healthcare"
    FINANCE = "finance"
    EDUCATION = "education"
    OTHER = "other"


class CompanySize(str, Enum):
    """Headcount bracket of a client."""

    SMALL = "1-50"
    MEDIUM = "51-200"
    LARGE = "201-500"
    ENTERPRISE = "500+"


class JobStatus(str, Enum):
    """Status of a job posting."""

    DRAFT = "draft"
    OPEN = "open"
    ON_HOLD = "on_hold"
    CLOSED = "closed"
    CANCELLED = "cancelled"


class JobType(str, Enum):
    """Type of employment for the position."""

    FULL_TIME = "full_time"
    PART_TIME = "part_time"
    CONTRACT = "contract"
    FREELANCE = "freelance"
    INTERNSHIP = "internship"
    TEMPORARY = "temporary"


class ExperienceLevel(str, Enum):
    """Required experience level for the position."""

    ENTRY = "entry"
    JUNIOR = "junior"
    MID = "mid"
    SENIOR = "senior"
    LEAD = "lead"
    EXECUTIVE = "executive"


class WorkMode(str, Enum):
    """Work location type."""

    REMOTE = "remote"
    ONSITE = "onsite"
    HYBRID = "hybrid"


class Priority(str, Enum):
    """Priority level for jobs and applications."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class CandidateStatus(str, Enum):
    """Status of a candidate within one job's pipeline."""

    NEW = "new"
    ACTIVE = "active"
    INTERVIEWING = "interviewing"
    OFFER_EXTENDED = "offer_extended"
    HIRED = "hired"
    REJECTED = "rejected"
    WITHDRAWN = "withdrawn"


class ApplicationStatus(str, Enum):
    """Review status of an inbound application."""

    PENDING = "pending"
    UNDER_REVIEW = "under_review"
    APPROVED = "approved"
    REJECTED = "rejected"
    WITHDRAWN = "withdrawn"


class CandidateSource(str, Enum):
    """Where a candidate or application came from."""

    WEBSITE = "website"
    LINKEDIN = "linkedin"
    JOB_BOARD = "job_board"
    REFERRAL = "referral"
    EMAIL = "email"
    AGENCY = "agency"
    DIRECT = "direct"
    IMPORT = "import"
    OTHER = "other"


class SkillLevel(str, Enum):
    """Self-reported proficiency of a candidate skill."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"


# Candidate statuses that no longer count as active in a pipeline
CLOSED_CANDIDATE_STATUSES: Final[frozenset[str]] = frozenset(
    {CandidateStatus.HIRED.value, CandidateStatus.REJECTED.value, CandidateStatus.WITHDRAWN.value}
)

# Candidate statuses counted as rejected in statistics
REJECTED_CANDIDATE_STATUSES: Final[frozenset[str]] = frozenset(
    {CandidateStatus.REJECTED.value, CandidateStatus.WITHDRAWN.value}
)


# =============================================================================
# Pipeline Constants
# =============================================================================

# Pipeline stage id -> candidate status. Unknown stages fall back to NEW.
STAGE_TO_STATUS: Final[dict[str, CandidateStatus]] = {
    "new": CandidateStatus.NEW,
    "screening": CandidateStatus.ACTIVE,
    "phone_screen": CandidateStatus.ACTIVE,
    "interviewing": CandidateStatus.INTERVIEWING,
    "testing": CandidateStatus.INTERVIEWING,
    "technical_test": CandidateStatus.INTERVIEWING,
    "technical_interview": CandidateStatus.INTERVIEWING,
    "behavioral": CandidateStatus.INTERVIEWING,
    "sales_assessment": CandidateStatus.INTERVIEWING,
    "manager_interview": CandidateStatus.INTERVIEWING,
    "final_interview": CandidateStatus.INTERVIEWING,
    "reference_check": CandidateStatus.INTERVIEWING,
    "offer": CandidateStatus.OFFER_EXTENDED,
    "offer_extended": CandidateStatus.OFFER_EXTENDED,
    "hired": CandidateStatus.HIRED,
    "rejected": CandidateStatus.REJECTED,
    "withdrawn": CandidateStatus.WITHDRAWN,
}

DEFAULT_STAGE_STATUS: Final[CandidateStatus] = CandidateStatus.NEW


# =============================================================================
# Scoring Constants
# =============================================================================

# Weights for the resume score heuristic
RESUME_SCORE_WEIGHTS: Final[dict[str, float]] = {
    "skills": 0.40,
    "experience": 0.30,
    "education": 0.15,
    "relevance": 0.15,
}

# Years of experience that earn the full experience component
RESUME_SCORE_FULL_EXPERIENCE_YEARS: Final[float] = 5.0

# Education component: with / without a cover letter
RESUME_SCORE_EDUCATION: Final[dict[bool, int]] = {True: 80, False: 60}

# Relevance component: with / without an attached resume
RESUME_SCORE_RELEVANCE: Final[dict[bool, int]] = {True: 90, False: 50}


# =============================================================================
# Session Constants
# =============================================================================

SESSION_KEYS: Final[dict[str, str]] = {
    "access_token": "ats_access_token",
    "refresh_token": "ats_refresh_token",
    "selected_job_id": "pipeline_selected_job_id",
}
