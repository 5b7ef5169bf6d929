"""
Current-user identity for RecruitDesk.

The identity provider issues the session token; RecruitDesk only reads its
claims. Signature verification belongs to the provider and the backend, so
claims are decoded without verifying the signature.
"""

import time
from typing import Any, Optional

import jwt
from pydantic import BaseModel

from recruitdesk.auth.permissions import get_role_permissions, resolve_role
from recruitdesk.utils.constants import UserRole
from recruitdesk.utils.logger import get_logger

logger = get_logger(__name__)


def decode_claims(token: str) -> dict[str, Any]:
    """
    Decode a JWT payload without verifying it.

    Raises:
        jwt.InvalidTokenError: The token is malformed
    """
    return jwt.decode(token, options={"verify_signature": False})


def is_token_expired(token: Optional[str], skew_seconds: int = 60, now: Optional[float] = None) -> bool:
    """
    Check whether a token is missing, malformed, or within ``skew_seconds`` of expiry.

    Tokens without an ``exp`` claim never count as expired here.
    """
    if not token:
        return True
    try:
        claims = decode_claims(token)
    except jwt.InvalidTokenError as e:
        logger.debug(f"Treating malformed token as expired: {e}")
        return True

    exp = claims.get("exp")
    if exp is None:
        return False
    try:
        expires_at = float(exp)
    except (TypeError, ValueError):
        logger.debug(f"Treating token with unreadable exp claim as expired: {exp!r}")
        return True
    current = time.time() if now is None else now
    return current >= expires_at - skew_seconds


class CurrentUser(BaseModel):
    """The signed-in team member as seen by the dashboard."""

    id: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: UserRole = UserRole.VIEWER

    @property
    def full_name(self) -> str:
        parts = [p for p in (self.first_name, self.last_name) if p]
        return " ".join(parts) if parts else (self.email or self.id)

    @property
    def permissions(self) -> list[str]:
        return sorted(p.value for p in get_role_permissions(self.role))

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> "CurrentUser":
        """
        Build the user from session claims.

        The role is read from ``public_metadata.role`` (``publicMetadata`` and
        ``metadata`` are accepted too) and defaults to viewer.

        Raises:
            ValueError: The claims carry no user id (``sub``, ``user_id`` or ``id``)
        """
        user_id = claims.get("sub") or claims.get("user_id") or claims.get("id")
        if not user_id:
            raise ValueError("Session claims carry no user id")
        metadata = claims.get("public_metadata") or claims.get("publicMetadata") or claims.get("metadata") or {}
        return cls(
            id=str(user_id),
            email=claims.get("email"),
            first_name=claims.get("first_name") or claims.get("given_name"),
            last_name=claims.get("last_name") or claims.get("family_name"),
            role=resolve_role(metadata.get("role") if isinstance(metadata, dict) else None),
        )

    @classmethod
    def from_token(cls, token: str) -> "CurrentUser":
        """Build the user from a session token's claims."""
        return cls.from_claims(decode_claims(token))
