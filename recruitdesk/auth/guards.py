"""
Route and component guards.

A guard takes the current authentication state and a required permission or
role, and returns a decision for the caller to render: wait while the user is
loading, send anonymous users to the login page, allow, show an access-denied
message, or silently redirect to a fallback page.
"""

from enum import Enum
from typing import Iterable, Optional, Union

from pydantic import BaseModel

from recruitdesk.auth.identity import CurrentUser, is_token_expired
from recruitdesk.auth.permissions import (
    Permission,
    PermissionLike,
    RoleLike,
    get_role_label,
    has_permission,
    has_role,
)
from recruitdesk.utils.config import get_settings
from recruitdesk.utils.constants import UserRole
from recruitdesk.utils.logger import AuditType, audit_log, get_logger

logger = get_logger(__name__)


class AuthState(BaseModel):
    """Current user resolution, as seen by a guard."""

    user: Optional[CurrentUser] = None
    is_loading: bool = False

    @property
    def is_signed_in(self) -> bool:
        return self.user is not None


class GuardOutcome(str, Enum):
    LOADING = "loading"
    REDIRECT = "redirect"
    ALLOW = "allow"
    DENY = "deny"
    HIDDEN = "hidden"


class GuardDecision(BaseModel):
    """What the caller should render."""

    outcome: GuardOutcome
    redirect_to: Optional[str] = None
    message: Optional[str] = None

    @property
    def allowed(self) -> bool:
        return self.outcome == GuardOutcome.ALLOW


LOADING = GuardDecision(outcome=GuardOutcome.LOADING)
ALLOW = GuardDecision(outcome=GuardOutcome.ALLOW)
HIDDEN = GuardDecision(outcome=GuardOutcome.HIDDEN)


def _permission_value(permission: PermissionLike) -> str:
    return permission.value if isinstance(permission, Permission) else str(permission)


def _role_value(role: RoleLike) -> str:
    return role.value if isinstance(role, UserRole) else str(role)


def _unauthenticated(state: AuthState) -> Optional[GuardDecision]:
    if state.is_loading:
        return LOADING
    if state.user is None:
        return GuardDecision(outcome=GuardOutcome.REDIRECT, redirect_to=get_settings().auth.login_path)
    return None


def _denied(
    user: CurrentUser,
    message: str,
    show_message: bool,
    fallback_path: Optional[str],
    details: dict,
) -> GuardDecision:
    audit_log(
        "access_denied",
        {"user_id": user.id, "role": _role_value(user.role), **details},
        audit_type=AuditType.ACCESS,
    )
    if show_message:
        return GuardDecision(outcome=GuardOutcome.DENY, message=message)
    return GuardDecision(
        outcome=GuardOutcome.REDIRECT,
        redirect_to=fallback_path or get_settings().auth.fallback_path,
    )


def permission_guard(
    state: AuthState,
    permission: PermissionLike,
    fallback_path: Optional[str] = None,
    show_message: bool = True,
) -> GuardDecision:
    """
    Gate a page on a single permission.

    Args:
        state: Current authentication state
        permission: Permission the page requires (admin always passes)
        fallback_path: Where to send denied users when ``show_message`` is off
        show_message: Show an access-denied message instead of redirecting

    Returns:
        The guard decision
    """
    pending = _unauthenticated(state)
    if pending is not None:
        return pending

    user = state.user
    if has_permission(user.role, permission):
        return ALLOW

    perm = _permission_value(permission)
    return _denied(
        user,
        f"You don't have permission to access this page. This feature requires the {perm} permission.",
        show_message,
        fallback_path,
        {"permission": perm},
    )


def role_guard(
    state: AuthState,
    allowed_roles: Iterable[RoleLike],
    fallback_path: Optional[str] = None,
    show_message: bool = True,
) -> GuardDecision:
    """Gate a page on membership in one of ``allowed_roles``."""
    pending = _unauthenticated(state)
    if pending is not None:
        return pending

    roles = list(allowed_roles)
    user = state.user
    if has_role(user.role, roles):
        return ALLOW

    labels = ", ".join(get_role_label(r) for r in roles)
    return _denied(
        user,
        f"You don't have permission to access this page. This page is only available to: {labels}. "
        f"Your current role is: {get_role_label(user.role)}",
        show_message,
        fallback_path,
        {"allowed_roles": [_role_value(r) for r in roles]},
    )


def require_role_guard(
    state: AuthState,
    role_or_roles: Union[RoleLike, Iterable[RoleLike]],
) -> GuardDecision:
    """
    Show or hide an inline element by role.

    Never redirects or shows a message; anything other than an allowed,
    signed-in user hides the element.
    """
    if isinstance(role_or_roles, (str, UserRole)):
        roles = [role_or_roles]
    else:
        roles = list(role_or_roles)

    if state.is_loading or state.user is None:
        return HIDDEN
    return ALLOW if has_role(state.user.role, roles) else HIDDEN


def resolve_auth_state(token: Optional[str], skew_seconds: Optional[int] = None) -> AuthState:
    """
    Build the guard state from a session token.

    Missing, malformed or expired tokens resolve to a signed-out state.
    """
    skew = get_settings().auth.token_expiry_skew_seconds if skew_seconds is None else skew_seconds
    if is_token_expired(token, skew_seconds=skew):
        return AuthState(user=None)
    try:
        user = CurrentUser.from_token(token)
    except ValueError as e:
        logger.warning(f"Ignoring session token: {e}")
        return AuthState(user=None)
    return AuthState(user=user)
