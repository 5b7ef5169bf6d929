"""
Exception hierarchy for RecruitDesk.

Network and HTTP failures are raised and handled at the call site,
authorization failures are turned into guard decisions, and subscription
errors are only logged.
"""

from typing import Any, Optional


class RecruitDeskError(Exception):
    """Base exception for all RecruitDesk errors."""
    pass


class PermissionDeniedError(RecruitDeskError):
    """Raised when a user lacks the permission an action requires."""

    def __init__(self, permission: str, role: Optional[str] = None, message: Optional[str] = None):
        self.permission = permission
        self.role = role
        super().__init__(message or f"Role '{role}' lacks permission '{permission}'")


class InvalidTransitionError(RecruitDeskError):
    """Raised when a status change is not in the entity's transition table."""

    def __init__(self, entity: str, current: str, target: str):
        self.entity = entity
        self.current = current
        self.target = target
        super().__init__(f"Invalid {entity} status transition: {current} -> {target}")


class NotFoundError(RecruitDeskError):
    """Raised when a referenced document does not exist."""

    def __init__(self, collection: str, document_id: str):
        self.collection = collection
        self.document_id = document_id
        super().__init__(f"{collection} document not found: {document_id}")


class RelationshipError(RecruitDeskError):
    """Raised when a two-sided relationship write fails."""
    pass


class ProtectedDocumentError(RecruitDeskError):
    """Raised when deleting a document other records or the system depend on."""

    def __init__(self, collection: str, document_id: str, reason: str):
        self.collection = collection
        self.document_id = document_id
        self.reason = reason
        super().__init__(reason)


class ApiError(RecruitDeskError):
    """Raised when the REST backend returns an error or a ``success: false`` envelope."""

    def __init__(self, status_code: int, message: str, payload: Any = None):
        self.status_code = status_code
        self.message = message
        self.payload = payload
        super().__init__(f"[{status_code}] {message}")


class AuthenticationError(ApiError):
    """Raised when the session cannot be authenticated or refreshed."""

    def __init__(self, message: str = "Authentication required", payload: Any = None):
        super().__init__(401, message, payload)
