"""
Client data models for RecruitDesk.

A client is a company the agency recruits for. Clients own jobs through
``job_ids``; their statistics are derived from jobs and candidates.
"""

from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from recruitdesk.utils.constants import ClientStatus, ClientType, CompanySize

from .base import Address, BaseDocument, EmbeddedModel, new_document_id


class ContactPerson(EmbeddedModel):
    """A person at the client company."""

    id: str = Field(default_factory=new_document_id)
    name: str = Field(..., min_length=1)
    email: EmailStr
    phone: Optional[str] = None
    position: str = ""


class ClientStatistics(EmbeddedModel):
    """Job and candidate rollups for one client."""

    total_jobs: int = 0
    active_jobs: int = 0
    closed_jobs: int = 0
    draft_jobs: int = 0
    total_candidates: int = 0
    active_candidates: int = 0
    hired_candidates: int = 0
    rejected_candidates: int = 0
    average_time_to_hire: Optional[float] = None  # days
    success_rate: float = 0.0  # percentage of candidates hired


class Client(BaseDocument):
    """
    Client company document.

    Stored in the clients collection.
    """

    company_name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    website: Optional[str] = None
    logo: Optional[str] = None
    type: ClientType = ClientType.OTHER
    status: ClientStatus = ClientStatus.ACTIVE
    company_size: CompanySize = CompanySize.SMALL

    primary_contact: Optional[ContactPerson] = None
    contacts: list[ContactPerson] = Field(default_factory=list)
    address: Optional[Address] = None

    notes: Optional[str] = None
    tags: list[str] = Field(default_factory=list)

    # Relationships
    job_ids: list[str] = Field(default_factory=list)

    statistics: ClientStatistics = Field(default_factory=ClientStatistics)

    @property
    def has_notes(self) -> bool:
        """Whether the client has communication notes."""
        return bool(self.notes and self.notes.strip())

    @property
    def all_contacts(self) -> list[ContactPerson]:
        """Primary contact followed by the other contacts, without duplicates."""
        result = [self.primary_contact] if self.primary_contact else []
        seen = {c.id for c in result}
        result.extend(c for c in self.contacts if c.id not in seen)
        return result

    class Settings:
        """MongoDB collection settings."""

        name = "clients"
        indexes = [
            "company_name",
            "status",
            "type",
            "tags",
            "created_at",
        ]


class ClientCreate(BaseModel):
    """Schema for creating a new client."""

    company_name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    website: Optional[str] = None
    type: ClientType = ClientType.OTHER
    company_size: CompanySize = CompanySize.SMALL
    primary_contact: Optional[ContactPerson] = None
    address: Optional[Address] = None
    notes: Optional[str] = None


class ClientUpdate(BaseModel):
    """Schema for updating an existing client."""

    company_name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    website: Optional[str] = None
    logo: Optional[str] = None
    type: Optional[ClientType] = None
    status: Optional[ClientStatus] = None
    company_size: Optional[CompanySize] = None
    primary_contact: Optional[ContactPerson] = None
    contacts: Optional[list[ContactPerson]] = None
    address: Optional[Address] = None
    notes: Optional[str] = None
    tags: Optional[list[str]] = None
