"""
Typed wrappers around REST backend endpoints.

Each resource class groups the calls for one area of the backend and returns
parsed pydantic models.
"""

from __future__ import annotations

from typing import Any, Optional, Union

from recruitdesk.api.client import ApiClient
from recruitdesk.api.schemas import (
    ApiUser,
    AuthSession,
    Email,
    EmailTemplate,
    EmailTemplateCreate,
    EmailTemplateType,
    EmailTemplateUpdate,
    Interview,
    InterviewCreate,
    InterviewReview,
    InterviewUpdate,
    SendEmailRequest,
    UserUpdate,
)
from recruitdesk.core.exceptions import ApiError
from recruitdesk.utils.logger import get_logger

logger = get_logger(__name__)


def _as_list(data: Any) -> list[Any]:
    if data is None:
        return []
    if isinstance(data, list):
        return data
    raise ApiError(200, "Expected a list in response data", data)


def _as_object(data: Any) -> dict[str, Any]:
    if isinstance(data, dict):
        return data
    raise ApiError(200, "Expected an object in response data", data)


def _bool_param(value: Optional[bool]) -> Optional[str]:
    if value is None:
        return None
    return "true" if value else "false"


class _Resource:
    def __init__(self, client: ApiClient) -> None:
        self._client = client


# =============================================================================
# Auth
# =============================================================================


class AuthApi(_Resource):
    """Sign-in, sign-out and account recovery endpoints."""

    def _store(self, data: Any) -> AuthSession:
        session = AuthSession.model_validate(_as_object(data))
        if session.access_token:
            self._client.session.save_tokens(session.access_token, session.refresh_token)
        return session

    async def login(self, email: str, password: str) -> AuthSession:
        envelope = await self._client.post(
            "/auth/login",
            json={"email": email, "password": password},
            authenticated=False,
        )
        session = self._store(envelope.data)
        logger.info(f"Signed in as {email}")
        return session

    async def logout(self) -> None:
        """Sign out on the backend; local tokens are cleared either way."""
        try:
            await self._client.post("/auth/logout")
        finally:
            self._client.session.clear_tokens()

    async def me(self) -> ApiUser:
        envelope = await self._client.get("/auth/me")
        data = _as_object(envelope.data)
        return ApiUser.model_validate(data.get("user", data))

    async def refresh(self) -> str:
        return await self._client.refresh_access_token()

    async def request_magic_link(self, email: str) -> Optional[str]:
        envelope = await self._client.post("/auth/magic-link", json={"email": email}, authenticated=False)
        return envelope.message

    async def verify_magic_link(self, token: str) -> AuthSession:
        envelope = await self._client.get(f"/auth/magic-link/{token}", authenticated=False)
        return self._store(envelope.data)

    async def verify_email(self, token: str) -> Optional[str]:
        envelope = await self._client.get(f"/auth/verify-email/{token}", authenticated=False)
        return envelope.message

    async def set_password(self, token: str, password: str) -> Optional[str]:
        envelope = await self._client.post(
            "/auth/set-password",
            json={"token": token, "password": password},
            authenticated=False,
        )
        return envelope.message

    async def forgot_password(self, email: str) -> Optional[str]:
        envelope = await self._client.post("/auth/forgot-password", json={"email": email}, authenticated=False)
        return envelope.message

    async def reset_password(self, token: str, password: str) -> Optional[str]:
        envelope = await self._client.post(
            "/auth/reset-password",
            json={"token": token, "password": password},
            authenticated=False,
        )
        return envelope.message

    async def register_first_admin(self, email: str, first_name: str, last_name: str, password: str) -> AuthSession:
        """Create the first admin account; the backend refuses once any user exists."""
        envelope = await self._client.post(
            "/auth/register-first-admin",
            json={"email": email, "firstName": first_name, "lastName": last_name, "password": password},
            authenticated=False,
        )
        return self._store(envelope.data)


# =============================================================================
# Users
# =============================================================================


class UsersApi(_Resource):
    async def list(self, role: Optional[str] = None, is_active: Optional[bool] = None) -> list[ApiUser]:
        envelope = await self._client.get("/users", params={"role": role, "isActive": _bool_param(is_active)})
        return [ApiUser.model_validate(u) for u in _as_list(envelope.data)]

    async def get(self, user_id: str) -> ApiUser:
        envelope = await self._client.get(f"/users/{user_id}")
        return ApiUser.model_validate(_as_object(envelope.data))

    async def update(self, user_id: str, update: UserUpdate) -> ApiUser:
        envelope = await self._client.patch(f"/users/{user_id}", json=update.to_payload())
        return ApiUser.model_validate(_as_object(envelope.data))

    async def remove(self, user_id: str) -> None:
        await self._client.delete(f"/users/{user_id}")


# =============================================================================
# Interviews
# =============================================================================


class InterviewsApi(_Resource):
    async def list(
        self,
        candidate_id: Optional[str] = None,
        job_id: Optional[str] = None,
        client_id: Optional[str] = None,
    ) -> list[Interview]:
        envelope = await self._client.get(
            "/interviews",
            params={"candidateId": candidate_id, "jobId": job_id, "clientId": client_id},
        )
        return [Interview.model_validate(i) for i in _as_list(envelope.data)]

    async def get(self, interview_id: str) -> Interview:
        envelope = await self._client.get(f"/interviews/{interview_id}")
        return Interview.model_validate(_as_object(envelope.data))

    async def schedule(self, interview: InterviewCreate) -> Interview:
        envelope = await self._client.post("/interviews", json=interview.to_payload())
        return Interview.model_validate(_as_object(envelope.data))

    async def update(self, interview_id: str, update: InterviewUpdate) -> Interview:
        envelope = await self._client.put(f"/interviews/{interview_id}", json=update.to_payload())
        return Interview.model_validate(_as_object(envelope.data))

    async def cancel(self, interview_id: str) -> None:
        await self._client.delete(f"/interviews/{interview_id}")

    async def complete(self, interview_id: str, review: InterviewReview) -> Interview:
        envelope = await self._client.post(f"/interviews/{interview_id}/complete", json=review.to_payload())
        return Interview.model_validate(_as_object(envelope.data))


# =============================================================================
# Emails
# =============================================================================


class EmailsApi(_Resource):
    async def list(
        self,
        candidate_id: Optional[str] = None,
        job_id: Optional[str] = None,
        limit: int = 100,
    ) -> list[Email]:
        envelope = await self._client.get(
            "/emails",
            params={
                "candidateId": candidate_id,
                "jobId": job_id,
                "sortBy": "createdAt",
                "sortOrder": "desc",
                "limit": limit,
            },
        )
        return [Email.model_validate(e) for e in _as_list(envelope.data)]

    async def get(self, email_id: str) -> Email:
        envelope = await self._client.get(f"/emails/{email_id}")
        return Email.model_validate(_as_object(envelope.data))

    async def send(self, request: SendEmailRequest) -> Email:
        envelope = await self._client.post("/emails", json=request.to_payload())
        return Email.model_validate(_as_object(envelope.data))


# =============================================================================
# Email Templates
# =============================================================================


class EmailTemplatesApi(_Resource):
    async def list(
        self,
        type: Optional[Union[EmailTemplateType, str]] = None,
        is_default: Optional[bool] = None,
        is_active: Optional[bool] = None,
    ) -> list[EmailTemplate]:
        type_value = type.value if isinstance(type, EmailTemplateType) else type
        envelope = await self._client.get(
            "/email-templates",
            params={
                "type": type_value,
                "isDefault": _bool_param(is_default),
                "isActive": _bool_param(is_active),
            },
        )
        return [EmailTemplate.model_validate(t) for t in _as_list(envelope.data)]

    async def get(self, template_id: str) -> EmailTemplate:
        envelope = await self._client.get(f"/email-templates/{template_id}")
        return EmailTemplate.model_validate(_as_object(envelope.data))

    async def by_type(self, type: Union[EmailTemplateType, str]) -> list[EmailTemplate]:
        type_value = type.value if isinstance(type, EmailTemplateType) else type
        envelope = await self._client.get(f"/email-templates/type/{type_value}")
        return [EmailTemplate.model_validate(t) for t in _as_list(envelope.data)]

    async def defaults(self) -> list[EmailTemplate]:
        envelope = await self._client.get("/email-templates/defaults")
        return [EmailTemplate.model_validate(t) for t in _as_list(envelope.data)]

    async def create(self, template: EmailTemplateCreate) -> EmailTemplate:
        envelope = await self._client.post("/email-templates", json=template.to_payload())
        return EmailTemplate.model_validate(_as_object(envelope.data))

    async def update(self, template_id: str, update: EmailTemplateUpdate) -> EmailTemplate:
        envelope = await self._client.put(f"/email-templates/{template_id}", json=update.to_payload())
        return EmailTemplate.model_validate(_as_object(envelope.data))

    async def delete(self, template_id: str) -> None:
        await self._client.delete(f"/email-templates/{template_id}")

    async def duplicate(self, template_id: str) -> EmailTemplate:
        envelope = await self._client.post(f"/email-templates/{template_id}/duplicate")
        return EmailTemplate.model_validate(_as_object(envelope.data))
