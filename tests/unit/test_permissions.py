"""
Tests for recruitdesk.auth.permissions: role matrix and checks.
"""

import pytest

from recruitdesk.auth.permissions import (
    FEATURE_PERMISSIONS,
    ROLE_PERMISSIONS,
    Permission,
    can_access_feature,
    get_restricted_message,
    get_role_label,
    get_role_permissions,
    has_all_permissions,
    has_any_permission,
    has_permission,
    has_role,
    is_admin,
    require_permission,
    resolve_role,
)
from recruitdesk.core.exceptions import PermissionDeniedError
from recruitdesk.utils.constants import UserRole


class TestRoleMatrix:
    def test_admin_holds_every_permission(self):
        assert ROLE_PERMISSIONS[UserRole.ADMIN] == frozenset(Permission)

    def test_viewer_is_read_only(self):
        assert all(p.value.endswith(".view") for p in ROLE_PERMISSIONS[UserRole.VIEWER])

    def test_recruiter_cannot_delete(self):
        recruiter = ROLE_PERMISSIONS[UserRole.RECRUITER]
        assert Permission.CLIENTS_DELETE not in recruiter
        assert Permission.CANDIDATES_DELETE not in recruiter

    def test_hiring_manager_can_approve_but_not_edit_jobs(self):
        manager = ROLE_PERMISSIONS[UserRole.HIRING_MANAGER]
        assert Permission.APPLICATIONS_APPROVE in manager
        assert Permission.JOBS_EDIT not in manager

    def test_every_role_has_an_entry(self):
        assert set(ROLE_PERMISSIONS) == set(UserRole)


class TestHasPermission:
    def test_recruiter_can_edit_candidates(self):
        assert has_permission(UserRole.RECRUITER, Permission.CANDIDATES_EDIT)

    def test_accepts_string_role_and_permission(self):
        assert has_permission("recruiter", "jobs.publish")

    def test_viewer_cannot_edit(self):
        assert not has_permission("viewer", Permission.JOBS_EDIT)

    def test_admin_bypasses_table(self):
        assert has_permission("admin", Permission.SETTINGS_EDIT)

    @pytest.mark.parametrize("role", [None, "", "superuser"])
    def test_unknown_role_denied(self, role):
        assert not has_permission(role, Permission.CLIENTS_VIEW)

    def test_unknown_permission_denied(self):
        assert not has_permission("recruiter", "rockets.launch")

    def test_any_and_all(self):
        perms = [Permission.CLIENTS_VIEW, Permission.CLIENTS_DELETE]
        assert has_any_permission("viewer", perms)
        assert not has_all_permissions("viewer", perms)
        assert has_all_permissions("admin", perms)


class TestRoles:
    def test_is_admin(self):
        assert is_admin("admin")
        assert not is_admin(UserRole.RECRUITER)

    def test_has_role(self):
        assert has_role("recruiter", [UserRole.ADMIN, "recruiter"])
        assert not has_role("viewer", ["admin"])
        assert not has_role(None, ["viewer"])

    def test_resolve_role_defaults_to_viewer(self):
        assert resolve_role(None) == UserRole.VIEWER
        assert resolve_role("overlord") == UserRole.VIEWER
        assert resolve_role(42) == UserRole.VIEWER

    def test_resolve_role_known(self):
        assert resolve_role("hiring_manager") == UserRole.HIRING_MANAGER

    def test_get_role_permissions_unknown_role_is_empty(self):
        assert get_role_permissions("nobody") == frozenset()

    def test_labels(self):
        assert get_role_label(UserRole.HIRING_MANAGER) == "Hiring Manager"
        assert get_role_label("admin") == "Administrator"
        assert get_role_label(None) == "Guest"


class TestFeatures:
    def test_every_feature_maps_to_a_permission(self):
        assert all(isinstance(p, Permission) for p in FEATURE_PERMISSIONS.values())

    def test_recruiter_can_access_messages(self):
        assert can_access_feature("recruiter", "messages")

    def test_viewer_cannot_access_team(self):
        assert not can_access_feature("viewer", "team")

    def test_unknown_feature_denied(self):
        assert not can_access_feature("admin", "billing")

    def test_restricted_message(self):
        assert get_restricted_message("team") == (
            "You don't have permission to access team. Please contact your administrator."
        )


class TestRequirePermission:
    def test_passes_silently(self, recruiter_user):
        require_permission(recruiter_user, Permission.CANDIDATES_EDIT)

    def test_raises_with_details(self, viewer_user):
        with pytest.raises(PermissionDeniedError) as exc_info:
            require_permission(viewer_user, Permission.CANDIDATES_EDIT)
        assert exc_info.value.permission == "candidates.edit"
        assert exc_info.value.role == "viewer"

    def test_no_user_is_denied(self):
        with pytest.raises(PermissionDeniedError):
            require_permission(None, Permission.CLIENTS_VIEW)
