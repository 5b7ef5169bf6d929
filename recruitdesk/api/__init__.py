"""
REST backend client for RecruitDesk.

Usage:
    async with ApiClient() as client:
        templates = await EmailTemplatesApi(client).list(is_active=True)
"""

from recruitdesk.api.client import ApiClient, ApiEnvelope
from recruitdesk.api.resources import (
    AuthApi,
    EmailsApi,
    EmailTemplatesApi,
    InterviewsApi,
    UsersApi,
)

__all__ = [
    "ApiClient",
    "ApiEnvelope",
    "AuthApi",
    "UsersApi",
    "InterviewsApi",
    "EmailsApi",
    "EmailTemplatesApi",
]
