"""
Client repository for RecruitDesk.

Provides data access operations for client company documents.
"""

import re
from typing import Optional

from recruitdesk.data.models.client import Client, ClientCreate, ClientStatistics, ClientUpdate, ContactPerson
from recruitdesk.utils.constants import ClientStatus
from recruitdesk.utils.logger import get_logger

from .base import BaseRepository

logger = get_logger(__name__)


class ClientRepository(BaseRepository[Client]):
    """Repository for client document operations."""

    @property
    def model_class(self) -> type[Client]:
        return Client

    def create_from_schema(self, data: ClientCreate) -> Client:
        """Create a client from a create schema."""
        client = Client(**data.model_dump(exclude_none=True))
        if client.primary_contact:
            client.contacts = [client.primary_contact]
        return self.create(client)

    def update_from_schema(self, id_value: str, data: ClientUpdate) -> Optional[Client]:
        """Update a client from an update schema."""
        update_data = data.model_dump(exclude_unset=True, exclude_none=True)
        if not update_data:
            return self.get_by_id(id_value)
        return self.update(id_value, update_data)

    def update_status(self, id_value: str, status: ClientStatus) -> Optional[Client]:
        """Update client status."""
        return self.update(id_value, {"status": ClientStatus(status).value})

    def add_contact(self, id_value: str, contact: ContactPerson) -> Optional[Client]:
        """Append a contact person to the client."""
        collection = self._get_sync_collection()
        result = collection.update_one(
            {"_id": id_value},
            {"$push": {"contacts": contact.model_dump()}},
        )
        if result.matched_count == 0:
            return None
        return self.get_by_id(id_value)

    def set_statistics(self, id_value: str, statistics: ClientStatistics) -> Optional[Client]:
        """Store computed statistics on the client document."""
        return self.update(id_value, {"statistics": statistics.model_dump()})

    def get_by_status(self, status: ClientStatus) -> list[Client]:
        """Get clients by status."""
        return self.find({"status": ClientStatus(status).value}, limit=0)

    def get_by_job(self, job_id: str) -> Optional[Client]:
        """Get the client listing ``job_id``."""
        return self.find_one({"job_ids": job_id})

    def search(self, text: str, limit: int = 50) -> list[Client]:
        """Case-insensitive search in company name, contact name and notes."""
        pattern = {"$regex": re.escape(text), "$options": "i"}
        return self.find(
            {
                "$or": [
                    {"company_name": pattern},
                    {"primary_contact.name": pattern},
                    {"notes": pattern},
                ]
            },
            limit=limit,
        )


# Singleton instance
_client_repository: Optional[ClientRepository] = None


def get_client_repository() -> ClientRepository:
    """Get the client repository singleton instance."""
    global _client_repository
    if _client_repository is None:
        _client_repository = ClientRepository()
    return _client_repository
