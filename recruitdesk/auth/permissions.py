"""
Role-based access control for RecruitDesk.

Roles map to a fixed set of dotted permissions. The table is hardcoded:
there are no attribute rules and nothing is persisted. Admin passes every
check.
"""

from enum import Enum
from typing import Any, Final, Iterable, Optional, Union

from recruitdesk.core.exceptions import PermissionDeniedError
from recruitdesk.utils.constants import UserRole
from recruitdesk.utils.logger import AuditType, audit_log, get_logger

logger = get_logger(__name__)


class Permission(str, Enum):
    """Granular permissions, grouped by dashboard section."""

    # Clients
    CLIENTS_VIEW = "clients.view"
    CLIENTS_CREATE = "clients.create"
    CLIENTS_EDIT = "clients.edit"
    CLIENTS_DELETE = "clients.delete"

    # Jobs
    JOBS_VIEW = "jobs.view"
    JOBS_CREATE = "jobs.create"
    JOBS_EDIT = "jobs.edit"
    JOBS_DELETE = "jobs.delete"
    JOBS_PUBLISH = "jobs.publish"

    # Candidates
    CANDIDATES_VIEW = "candidates.view"
    CANDIDATES_CREATE = "candidates.create"
    CANDIDATES_EDIT = "candidates.edit"
    CANDIDATES_DELETE = "candidates.delete"
    CANDIDATES_IMPORT = "candidates.import"
    CANDIDATES_EXPORT = "candidates.export"

    # Applications
    APPLICATIONS_VIEW = "applications.view"
    APPLICATIONS_REVIEW = "applications.review"
    APPLICATIONS_APPROVE = "applications.approve"
    APPLICATIONS_REJECT = "applications.reject"

    # Interviews
    INTERVIEWS_VIEW = "interviews.view"
    INTERVIEWS_SCHEDULE = "interviews.schedule"
    INTERVIEWS_EDIT = "interviews.edit"
    INTERVIEWS_CANCEL = "interviews.cancel"

    # Team
    TEAM_VIEW = "team.view"
    TEAM_INVITE = "team.invite"
    TEAM_EDIT = "team.edit"
    TEAM_REMOVE = "team.remove"

    # Settings
    SETTINGS_VIEW = "settings.view"
    SETTINGS_EDIT = "settings.edit"

    # Analytics
    ANALYTICS_VIEW = "analytics.view"
    ANALYTICS_EXPORT = "analytics.export"


RoleLike = Union[UserRole, str, None]
PermissionLike = Union[Permission, str]


# =============================================================================
# Role -> Permission Matrix
# =============================================================================

ROLE_PERMISSIONS: Final[dict[UserRole, frozenset[Permission]]] = {
    UserRole.ADMIN: frozenset(Permission),
    UserRole.RECRUITER: frozenset(
        {
            Permission.CLIENTS_VIEW,
            Permission.CLIENTS_CREATE,
            Permission.CLIENTS_EDIT,
            Permission.JOBS_VIEW,
            Permission.JOBS_CREATE,
            Permission.JOBS_EDIT,
            Permission.JOBS_PUBLISH,
            Permission.CANDIDATES_VIEW,
            Permission.CANDIDATES_CREATE,
            Permission.CANDIDATES_EDIT,
            Permission.CANDIDATES_IMPORT,
            Permission.CANDIDATES_EXPORT,
            Permission.APPLICATIONS_VIEW,
            Permission.APPLICATIONS_REVIEW,
            Permission.APPLICATIONS_APPROVE,
            Permission.APPLICATIONS_REJECT,
            Permission.INTERVIEWS_VIEW,
            Permission.INTERVIEWS_SCHEDULE,
            Permission.INTERVIEWS_EDIT,
            Permission.TEAM_VIEW,
            Permission.SETTINGS_VIEW,
            Permission.ANALYTICS_VIEW,
        }
    ),
    UserRole.HIRING_MANAGER: frozenset(
        {
            Permission.CLIENTS_VIEW,
            Permission.JOBS_VIEW,
            Permission.CANDIDATES_VIEW,
            Permission.CANDIDATES_EXPORT,
            Permission.APPLICATIONS_VIEW,
            Permission.APPLICATIONS_REVIEW,
            Permission.APPLICATIONS_APPROVE,
            Permission.APPLICATIONS_REJECT,
            Permission.INTERVIEWS_VIEW,
            Permission.INTERVIEWS_SCHEDULE,
            Permission.TEAM_VIEW,
            Permission.ANALYTICS_VIEW,
        }
    ),
    UserRole.VIEWER: frozenset(
        {
            Permission.CLIENTS_VIEW,
            Permission.JOBS_VIEW,
            Permission.CANDIDATES_VIEW,
            Permission.APPLICATIONS_VIEW,
            Permission.INTERVIEWS_VIEW,
            Permission.TEAM_VIEW,
            Permission.ANALYTICS_VIEW,
        }
    ),
}

ROLE_LABELS: Final[dict[UserRole, str]] = {
    UserRole.ADMIN: "Administrator",
    UserRole.RECRUITER: "Recruiter",
    UserRole.HIRING_MANAGER: "Hiring Manager",
    UserRole.VIEWER: "Viewer",
}

ROLE_DESCRIPTIONS: Final[dict[UserRole, str]] = {
    UserRole.ADMIN: "Full system access with ability to manage users and settings",
    UserRole.RECRUITER: "Can manage clients, jobs, candidates, and applications",
    UserRole.HIRING_MANAGER: "Can review candidates and approve applications",
    UserRole.VIEWER: "Read-only access to view data across the system",
}

# Dashboard section -> permission needed to work in it
FEATURE_PERMISSIONS: Final[dict[str, Permission]] = {
    "clients": Permission.CLIENTS_EDIT,
    "jobs": Permission.JOBS_EDIT,
    "applications": Permission.APPLICATIONS_REVIEW,
    "candidates": Permission.CANDIDATES_EDIT,
    "team": Permission.TEAM_EDIT,
    "analytics": Permission.ANALYTICS_VIEW,
    "messages": Permission.APPLICATIONS_REVIEW,
}

DEFAULT_ROLE: Final[UserRole] = UserRole.VIEWER


# =============================================================================
# Lookups
# =============================================================================


def _as_role(role: RoleLike) -> Optional[UserRole]:
    if isinstance(role, UserRole):
        return role
    if not role:
        return None
    try:
        return UserRole(role)
    except ValueError:
        return None


def _as_permission(permission: PermissionLike) -> Optional[Permission]:
    if isinstance(permission, Permission):
        return permission
    try:
        return Permission(permission)
    except ValueError:
        return None


def resolve_role(value: Any) -> UserRole:
    """
    Parse a raw role value from session claims.

    Missing or unrecognized roles resolve to the read-only viewer role.
    """
    role = _as_role(value) if isinstance(value, (str, UserRole)) else None
    if role is None:
        if value:
            logger.warning(f"Unknown role {value!r}, falling back to {DEFAULT_ROLE.value}")
        return DEFAULT_ROLE
    return role


def get_role_permissions(role: RoleLike) -> frozenset[Permission]:
    """Permissions granted to ``role``; empty for unknown roles."""
    resolved = _as_role(role)
    if resolved is None:
        return frozenset()
    return ROLE_PERMISSIONS[resolved]


def is_admin(role: RoleLike) -> bool:
    """Check if the role is admin."""
    return _as_role(role) is UserRole.ADMIN


def has_role(role: RoleLike, roles: Iterable[RoleLike]) -> bool:
    """Check if the role is one of ``roles``."""
    resolved = _as_role(role)
    if resolved is None:
        return False
    return resolved in {_as_role(r) for r in roles}


def has_permission(role: RoleLike, permission: PermissionLike) -> bool:
    """
    Check whether ``role`` grants ``permission``.

    Admin bypasses the table. Unknown roles and unknown permissions are denied.
    """
    resolved = _as_role(role)
    if resolved is None:
        return False
    if resolved is UserRole.ADMIN:
        return True
    perm = _as_permission(permission)
    if perm is None:
        return False
    return perm in ROLE_PERMISSIONS[resolved]


def has_any_permission(role: RoleLike, permissions: Iterable[PermissionLike]) -> bool:
    """True if the role grants at least one of ``permissions``."""
    return any(has_permission(role, p) for p in permissions)


def has_all_permissions(role: RoleLike, permissions: Iterable[PermissionLike]) -> bool:
    """True if the role grants every one of ``permissions``."""
    return all(has_permission(role, p) for p in permissions)


def can_access_feature(role: RoleLike, feature: str) -> bool:
    """Check access to a dashboard section; unknown sections are denied."""
    permission = FEATURE_PERMISSIONS.get(feature)
    if permission is None:
        return False
    return has_permission(role, permission)


def get_restricted_message(feature: str) -> str:
    """Message shown in place of a section the user cannot access."""
    return f"You don't have permission to access {feature}. Please contact your administrator."


def get_role_label(role: RoleLike) -> str:
    resolved = _as_role(role)
    return ROLE_LABELS[resolved] if resolved else "Guest"


def require_permission(user: Any, permission: PermissionLike) -> None:
    """
    Raise PermissionDeniedError unless ``user`` holds ``permission``.

    Args:
        user: Anything with a ``role`` and optional ``id`` attribute, or None
        permission: The permission the action needs
    """
    role = getattr(user, "role", None) if user is not None else None
    if has_permission(role, permission):
        return

    perm_value = permission.value if isinstance(permission, Permission) else str(permission)
    role_value = role.value if isinstance(role, UserRole) else role
    audit_log(
        "permission_denied",
        {
            "user_id": getattr(user, "id", None),
            "role": role_value,
            "permission": perm_value,
        },
        audit_type=AuditType.ACCESS,
    )
    raise PermissionDeniedError(perm_value, role_value)
