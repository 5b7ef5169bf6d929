"""
Tests for recruitdesk.auth.guards: route and component gating.
"""

import time

import jwt

from recruitdesk.auth.guards import (
    AuthState,
    GuardOutcome,
    permission_guard,
    require_role_guard,
    resolve_auth_state,
    role_guard,
)
from recruitdesk.auth.permissions import Permission
from recruitdesk.utils.constants import UserRole


class TestPermissionGuard:
    def test_loading_state(self):
        decision = permission_guard(AuthState(is_loading=True), Permission.JOBS_VIEW)
        assert decision.outcome == GuardOutcome.LOADING
        assert not decision.allowed

    def test_signed_out_redirects_to_login(self):
        decision = permission_guard(AuthState(), Permission.JOBS_VIEW)
        assert decision.outcome == GuardOutcome.REDIRECT
        assert decision.redirect_to == "/login"

    def test_allowed(self, recruiter_user):
        decision = permission_guard(AuthState(user=recruiter_user), Permission.JOBS_EDIT)
        assert decision.allowed

    def test_admin_always_allowed(self, admin_user):
        assert permission_guard(AuthState(user=admin_user), Permission.SETTINGS_EDIT).allowed

    def test_denied_with_message(self, viewer_user):
        decision = permission_guard(AuthState(user=viewer_user), Permission.JOBS_EDIT)
        assert decision.outcome == GuardOutcome.DENY
        assert decision.message == (
            "You don't have permission to access this page. "
            "This feature requires the jobs.edit permission."
        )

    def test_denied_silently_redirects_to_fallback(self, viewer_user):
        decision = permission_guard(AuthState(user=viewer_user), Permission.JOBS_EDIT, show_message=False)
        assert decision.outcome == GuardOutcome.REDIRECT
        assert decision.redirect_to == "/dashboard"

    def test_custom_fallback(self, viewer_user):
        decision = permission_guard(
            AuthState(user=viewer_user),
            "team.edit",
            fallback_path="/settings",
            show_message=False,
        )
        assert decision.redirect_to == "/settings"


class TestRoleGuard:
    def test_allowed_role(self, hiring_manager_user):
        decision = role_guard(AuthState(user=hiring_manager_user), [UserRole.ADMIN, UserRole.HIRING_MANAGER])
        assert decision.allowed

    def test_denied_message_lists_roles(self, viewer_user):
        decision = role_guard(AuthState(user=viewer_user), [UserRole.ADMIN, "recruiter"])
        assert decision.outcome == GuardOutcome.DENY
        assert "This page is only available to: Administrator, Recruiter." in decision.message
        assert decision.message.endswith("Your current role is: Viewer")

    def test_signed_out(self):
        assert role_guard(AuthState(), ["admin"]).redirect_to == "/login"

    def test_loading(self):
        assert role_guard(AuthState(is_loading=True), ["admin"]).outcome == GuardOutcome.LOADING


class TestRequireRoleGuard:
    def test_single_role(self, admin_user):
        assert require_role_guard(AuthState(user=admin_user), "admin").allowed

    def test_hidden_for_other_roles(self, viewer_user):
        assert require_role_guard(AuthState(user=viewer_user), ["admin", "recruiter"]).outcome == GuardOutcome.HIDDEN

    def test_hidden_while_loading_or_signed_out(self):
        assert require_role_guard(AuthState(is_loading=True), "admin").outcome == GuardOutcome.HIDDEN
        assert require_role_guard(AuthState(), "admin").outcome == GuardOutcome.HIDDEN

    def test_never_redirects(self, viewer_user):
        decision = require_role_guard(AuthState(user=viewer_user), UserRole.ADMIN)
        assert decision.redirect_to is None
        assert decision.message is None


class TestResolveAuthState:
    def test_valid_token(self, make_token):
        state = resolve_auth_state(make_token(role="recruiter"))
        assert state.is_signed_in
        assert state.user.role == UserRole.RECRUITER

    def test_expired_token_signs_out(self, make_token):
        assert not resolve_auth_state(make_token(expires_in=-60)).is_signed_in

    def test_missing_token(self):
        assert resolve_auth_state(None).user is None

    def test_malformed_token(self):
        assert resolve_auth_state("garbage").user is None

    def test_skew_override(self, make_token):
        token = make_token(expires_in=30)
        assert resolve_auth_state(token).user is None
        assert resolve_auth_state(token, skew_seconds=0).user is not None

    def test_non_numeric_exp_signs_out(self):
        token = jwt.encode({"sub": "u1", "exp": "soon"}, "k", algorithm="HS256")
        assert resolve_auth_state(token).user is None

    def test_token_without_subject_signs_out(self):
        token = jwt.encode({"email": "a@example.com", "exp": int(time.time()) + 600}, "k", algorithm="HS256")
        assert resolve_auth_state(token).user is None
