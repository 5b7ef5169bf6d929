"""
HTTP client for the RecruitDesk REST backend.

Every request carries the stored access token as a Bearer header. A 401
triggers one token refresh and a single replay of the request; concurrent
401s share the same in-flight refresh. A refresh that fails clears the stored
tokens and raises AuthenticationError.
"""

import asyncio
from typing import Any, Optional

import httpx
from pydantic import BaseModel

from recruitdesk.auth.session import SessionStore
from recruitdesk.core.exceptions import ApiError, AuthenticationError
from recruitdesk.utils.config import get_settings
from recruitdesk.utils.logger import get_logger

logger = get_logger(__name__)


class ApiEnvelope(BaseModel):
    """Standard ``{success, data, message}`` response body."""

    success: bool = True
    data: Any = None
    message: Optional[str] = None
    count: Optional[int] = None


def _error_message(payload: Any, default: str) -> str:
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict) and error.get("message"):
            return error["message"]
        if isinstance(error, str) and error:
            return error
        if payload.get("message"):
            return payload["message"]
    return default


class ApiClient:
    """
    Async JSON client with Bearer auth and coalesced token refresh.

    Usage:
        async with ApiClient() as client:
            envelope = await client.get("/users")
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        session: Optional[SessionStore] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        settings = get_settings()
        self._base_url = (base_url or settings.api_base_url).rstrip("/")
        self._session = session or SessionStore(settings.auth.session_file)
        self._http = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=timeout if timeout is not None else settings.api.timeout_seconds,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )
        self._refresh_task: Optional[asyncio.Future] = None

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def session(self) -> SessionStore:
        return self._session

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # -------------------------------------------------------------------------
    # Requests
    # -------------------------------------------------------------------------

    async def _send(
        self,
        method: str,
        path: str,
        token: Optional[str],
        json: Any = None,
        params: Optional[dict[str, Any]] = None,
    ) -> httpx.Response:
        headers = {"Authorization": f"Bearer {token}"} if token else None
        return await self._http.request(method, path, json=json, params=params, headers=headers)

    async def request(
        self,
        method: str,
        path: str,
        json: Any = None,
        params: Optional[dict[str, Any]] = None,
        authenticated: bool = True,
    ) -> ApiEnvelope:
        """
        Send a request and unwrap the response envelope.

        Raises:
            AuthenticationError: The session could not be authenticated or refreshed
            ApiError: Non-2xx response or ``success: false``
            httpx.HTTPError: Network failure
        """
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        token = self._session.access_token if authenticated else None
        response = await self._send(method, path, token, json=json, params=params)

        if response.status_code == 401 and authenticated:
            logger.info(f"{method} {path} returned 401, refreshing access token")
            # Another request may have refreshed while this one was in flight.
            current = self._session.access_token
            if not current or current == token:
                current = await self.refresh_access_token()
            response = await self._send(method, path, current, json=json, params=params)

        return self._parse(response)

    def _parse(self, response: httpx.Response) -> ApiEnvelope:
        try:
            payload = response.json() if response.content else None
        except ValueError:
            payload = None

        if response.status_code == 401:
            raise AuthenticationError(_error_message(payload, "Authentication required"), payload)
        if response.is_error:
            raise ApiError(
                response.status_code,
                _error_message(payload, response.reason_phrase or "Request failed"),
                payload,
            )

        if isinstance(payload, dict) and "success" in payload:
            envelope = ApiEnvelope.model_validate(payload)
        else:
            envelope = ApiEnvelope(data=payload)

        if not envelope.success:
            raise ApiError(response.status_code, envelope.message or "Request failed", payload)
        return envelope

    async def get(self, path: str, params: Optional[dict[str, Any]] = None, **kwargs: Any) -> ApiEnvelope:
        return await self.request("GET", path, params=params, **kwargs)

    async def post(self, path: str, json: Any = None, **kwargs: Any) -> ApiEnvelope:
        return await self.request("POST", path, json=json, **kwargs)

    async def put(self, path: str, json: Any = None, **kwargs: Any) -> ApiEnvelope:
        return await self.request("PUT", path, json=json, **kwargs)

    async def patch(self, path: str, json: Any = None, **kwargs: Any) -> ApiEnvelope:
        return await self.request("PATCH", path, json=json, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> ApiEnvelope:
        return await self.request("DELETE", path, **kwargs)

    # -------------------------------------------------------------------------
    # Token Refresh
    # -------------------------------------------------------------------------

    async def refresh_access_token(self) -> str:
        """
        Exchange the refresh token for a new access token.

        At most one refresh runs at a time; concurrent callers await the
        same result.
        """
        if self._refresh_task is None or self._refresh_task.done():
            self._refresh_task = asyncio.ensure_future(self._refresh())
        return await asyncio.shield(self._refresh_task)

    async def _refresh(self) -> str:
        refresh_token = self._session.refresh_token
        if not refresh_token:
            self._session.clear_tokens()
            raise AuthenticationError("No refresh token available")

        try:
            response = await self._http.post("/auth/refresh", json={"refreshToken": refresh_token})
            envelope = self._parse(response)
        except (ApiError, httpx.HTTPError) as e:
            logger.warning(f"Token refresh failed: {e}")
            self._session.clear_tokens()
            raise AuthenticationError("Token refresh failed") from e

        data = envelope.data or {}
        access_token = data.get("accessToken") if isinstance(data, dict) else None
        if not access_token:
            self._session.clear_tokens()
            raise AuthenticationError("Token refresh returned no access token")

        self._session.save_tokens(access_token, data.get("refreshToken"))
        logger.info("Access token refreshed")
        return access_token
