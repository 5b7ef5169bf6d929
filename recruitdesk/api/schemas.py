"""
Pydantic models for REST backend payloads.

The backend speaks camelCase JSON; models accept either the camelCase alias
or the snake_case field name and dump camelCase for requests.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base model for backend payloads."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        validate_default=True,
        extra="ignore",
    )

    def to_payload(self) -> dict[str, Any]:
        """Request body: camelCase keys, unset fields left out."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ApiDocument(ApiModel):
    """A backend record; ids arrive as ``id`` or ``_id``."""

    id: Optional[str] = Field(default=None, validation_alias=AliasChoices("id", "_id"))
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# =============================================================================
# Auth & Users
# =============================================================================


class ApiUser(ApiDocument):
    email: str
    first_name: str = ""
    last_name: str = ""
    role: str = "viewer"
    is_active: bool = True
    email_verified: bool = False
    department: Optional[str] = None
    title: Optional[str] = None
    phone: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class AuthSession(ApiModel):
    """Login, magic-link and first-admin responses."""

    user: Optional[ApiUser] = None
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None


class UserUpdate(ApiModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: Optional[str] = None
    is_active: Optional[bool] = None
    department: Optional[str] = None
    title: Optional[str] = None
    phone: Optional[str] = None


# =============================================================================
# Interviews
# =============================================================================


class InterviewType(str, Enum):
    PHONE = "phone"
    VIDEO = "video"
    IN_PERSON = "in_person"
    TECHNICAL = "technical"
    FINAL = "final"


class InterviewStatus(str, Enum):
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"


class InterviewOutcome(str, Enum):
    PENDING = "pending"
    PASSED = "passed"
    FAILED = "failed"


class Interview(ApiDocument):
    candidate_id: str
    candidate_name: str = ""
    client_id: str
    client_name: str = ""
    job_id: str
    job_title: str = ""
    interview_date: datetime
    interview_type: InterviewType
    interviewer_name: Optional[str] = None
    interviewer_email: Optional[str] = None
    meeting_link: Optional[str] = None
    location: Optional[str] = None
    time_zone: Optional[str] = None
    status: InterviewStatus = InterviewStatus.SCHEDULED
    outcome: Optional[InterviewOutcome] = None
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    feedback: Optional[str] = None
    notes: Optional[str] = None
    duration: Optional[int] = None  # minutes


class InterviewCreate(ApiModel):
    candidate_id: str
    client_id: str
    job_id: str
    interview_date: datetime
    interview_type: InterviewType
    interviewer_name: Optional[str] = None
    interviewer_email: Optional[EmailStr] = None
    meeting_link: Optional[str] = None
    location: Optional[str] = None
    time_zone: Optional[str] = None
    notes: Optional[str] = None
    duration: Optional[int] = None


class InterviewUpdate(ApiModel):
    interview_date: Optional[datetime] = None
    interview_type: Optional[InterviewType] = None
    interviewer_name: Optional[str] = None
    interviewer_email: Optional[EmailStr] = None
    meeting_link: Optional[str] = None
    location: Optional[str] = None
    time_zone: Optional[str] = None
    status: Optional[InterviewStatus] = None
    outcome: Optional[InterviewOutcome] = None
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    feedback: Optional[str] = None
    notes: Optional[str] = None
    duration: Optional[int] = None


class InterviewReview(ApiModel):
    """Feedback submitted when an interview is marked complete."""

    rating: int = Field(ge=1, le=5)
    feedback: str = Field(min_length=1)
    recommendation: str = "pending"
    strengths: Optional[str] = None
    weaknesses: Optional[str] = None
    candidate_id: Optional[str] = None
    job_id: Optional[str] = None


# =============================================================================
# Emails
# =============================================================================


class EmailStatus(str, Enum):
    DRAFT = "draft"
    SENT = "sent"
    DELIVERED = "delivered"
    OPENED = "opened"
    BOUNCED = "bounced"
    FAILED = "failed"
    RECEIVED = "received"
    PROCESSED = "processed"


class EmailType(str, Enum):
    INTERVIEW_INVITATION = "interview_invitation"
    APPLICATION_ACKNOWLEDGMENT = "application_acknowledgment"
    FOLLOW_UP = "follow_up"
    OFFER_LETTER = "offer_letter"
    REJECTION = "rejection"
    SCREENING_REQUEST = "screening_request"
    REFERENCE_CHECK = "reference_check"
    GENERAL = "general"
    AUTOMATED = "automated"


class EmailPriority(str, Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"


class EmailDirection(str, Enum):
    INBOUND = "inbound"
    OUTBOUND = "outbound"


class EmailAddress(ApiModel):
    email: str
    name: Optional[str] = None


class EmailRecipient(EmailAddress):
    type: str = "to"


class Email(ApiDocument):
    candidate_id: str
    job_id: str
    client_id: Optional[str] = None
    thread_id: Optional[str] = None
    parent_email_id: Optional[str] = None
    direction: EmailDirection = EmailDirection.OUTBOUND
    type: EmailType = EmailType.GENERAL
    status: EmailStatus = EmailStatus.DRAFT
    priority: EmailPriority = EmailPriority.NORMAL
    subject: str = ""
    body: str = ""
    from_: Optional[EmailAddress] = Field(default=None, alias="from")
    to: list[EmailRecipient] = Field(default_factory=list)
    sent_at: Optional[datetime] = None
    sent_by: Optional[str] = None
    sent_by_name: Optional[str] = None
    template_id: Optional[str] = None
    is_read: bool = False
    is_automated: bool = False


class SendEmailRequest(ApiModel):
    candidate_id: str
    job_id: str
    subject: str
    body: str
    template_id: Optional[str] = None


# =============================================================================
# Email Templates
# =============================================================================


class EmailTemplateType(str, Enum):
    INTERVIEW = "interview"
    OFFER = "offer"
    REJECTION = "rejection"
    FOLLOW_UP = "follow_up"
    APPLICATION_RECEIVED = "application_received"
    GENERAL = "general"


class EmailTemplate(ApiDocument):
    name: str
    subject: str
    body: str
    type: EmailTemplateType = EmailTemplateType.GENERAL
    variables: list[str] = Field(default_factory=list)
    is_default: bool = False
    is_active: bool = True


class EmailTemplateCreate(ApiModel):
    name: str
    subject: str
    body: str
    type: EmailTemplateType = EmailTemplateType.GENERAL
    is_default: Optional[bool] = None
    is_active: Optional[bool] = None


class EmailTemplateUpdate(ApiModel):
    name: Optional[str] = None
    subject: Optional[str] = None
    body: Optional[str] = None
    type: Optional[EmailTemplateType] = None
    is_default: Optional[bool] = None
    is_active: Optional[bool] = None
