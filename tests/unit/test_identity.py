"""
Tests for recruitdesk.auth.identity and recruitdesk.auth.session.
"""

import time

import jwt
import pytest

from recruitdesk.auth.identity import CurrentUser, decode_claims, is_token_expired
from recruitdesk.auth.session import SessionStore
from recruitdesk.utils.constants import UserRole


# ═══════════════════════════════════════════════════════════════════════════
#  Tokens
# ═══════════════════════════════════════════════════════════════════════════


class TestDecodeClaims:
    def test_signature_not_verified(self, make_token):
        claims = decode_claims(make_token(role="admin"))
        assert claims["sub"] == "user_1"
        assert claims["public_metadata"] == {"role": "admin"}


class TestIsTokenExpired:
    def test_missing_token(self):
        assert is_token_expired(None)
        assert is_token_expired("")

    def test_malformed_token(self):
        assert is_token_expired("not.a.jwt")

    def test_fresh_token(self, make_token):
        assert not is_token_expired(make_token(expires_in=3600))

    def test_expired_token(self, make_token):
        assert is_token_expired(make_token(expires_in=-10))

    def test_within_skew_counts_as_expired(self, make_token):
        token = make_token(expires_in=30)
        assert is_token_expired(token, skew_seconds=60)
        assert not is_token_expired(token, skew_seconds=0)

    def test_no_exp_claim_never_expires(self, make_token):
        assert not is_token_expired(make_token(expires_in=None))

    def test_explicit_clock(self):
        token = jwt.encode({"sub": "u", "exp": 1_000}, "k", algorithm="HS256")
        assert not is_token_expired(token, skew_seconds=0, now=999)
        assert is_token_expired(token, skew_seconds=0, now=1_000)

    def test_non_numeric_exp_counts_as_expired(self):
        token = jwt.encode({"sub": "u", "exp": "soon"}, "k", algorithm="HS256")
        assert is_token_expired(token)

    def test_numeric_string_exp(self):
        token = jwt.encode({"sub": "u", "exp": "1000"}, "k", algorithm="HS256")
        assert is_token_expired(token, skew_seconds=0, now=1_000)
        assert not is_token_expired(token, skew_seconds=0, now=999)


# ═══════════════════════════════════════════════════════════════════════════
#  CurrentUser
# ═══════════════════════════════════════════════════════════════════════════


class TestCurrentUser:
    def test_from_token(self, make_token):
        user = CurrentUser.from_token(make_token(role="hiring_manager"))
        assert user.id == "user_1"
        assert user.role == UserRole.HIRING_MANAGER
        assert user.full_name == "Alex Morgan"

    def test_missing_role_defaults_to_viewer(self, make_token):
        assert CurrentUser.from_token(make_token(role=None)).role == UserRole.VIEWER

    def test_unknown_role_defaults_to_viewer(self, make_token):
        assert CurrentUser.from_token(make_token(role="root")).role == UserRole.VIEWER

    def test_camel_case_metadata_and_oidc_names(self):
        user = CurrentUser.from_claims(
            {
                "user_id": "u9",
                "publicMetadata": {"role": "recruiter"},
                "given_name": "Robin",
                "family_name": "Hart",
            }
        )
        assert user.id == "u9"
        assert user.role == UserRole.RECRUITER
        assert user.full_name == "Robin Hart"

    def test_claims_without_user_id_are_rejected(self):
        with pytest.raises(ValueError):
            CurrentUser.from_claims({"email": "a@example.com", "public_metadata": {"role": "admin"}})

    def test_full_name_falls_back_to_email(self):
        user = CurrentUser(id="u1", email="u1@example.com")
        assert user.full_name == "u1@example.com"

    def test_permissions_follow_role(self):
        user = CurrentUser(id="u1", role=UserRole.VIEWER)
        assert "analytics.view" in user.permissions
        assert "jobs.edit" not in user.permissions


# ═══════════════════════════════════════════════════════════════════════════
#  SessionStore
# ═══════════════════════════════════════════════════════════════════════════


class TestSessionStore:
    def test_empty_when_file_missing(self, session_store):
        assert session_store.access_token is None
        assert session_store.selected_job_id is None

    def test_save_and_clear_tokens(self, session_store):
        session_store.save_tokens("access", "refresh")
        assert session_store.access_token == "access"
        assert session_store.refresh_token == "refresh"

        session_store.clear_tokens()
        assert session_store.access_token is None
        assert session_store.refresh_token is None

    def test_save_tokens_keeps_refresh_token_when_not_given(self, session_store):
        session_store.save_tokens("a1", "r1")
        session_store.save_tokens("a2")
        assert session_store.access_token == "a2"
        assert session_store.refresh_token == "r1"

    def test_job_selection_persists_across_instances(self, session_store):
        session_store.save_job_selection("job_7")
        assert SessionStore(session_store.path).selected_job_id == "job_7"

        session_store.clear_job_selection()
        assert SessionStore(session_store.path).selected_job_id is None

    def test_clearing_tokens_keeps_selection(self, session_store):
        session_store.save_tokens("a", "r")
        session_store.save_job_selection("job_1")
        session_store.clear_tokens()
        assert session_store.selected_job_id == "job_1"

    def test_corrupt_file_reads_as_empty(self, session_store):
        session_store.path.write_text("{not json", encoding="utf-8")
        assert session_store.access_token is None

    def test_non_object_file_reads_as_empty(self, session_store):
        session_store.path.write_text("[1, 2]", encoding="utf-8")
        assert session_store.get("anything") is None

    def test_write_after_corrupt_file_recovers(self, session_store):
        session_store.path.write_text("{not json", encoding="utf-8")
        session_store.save_tokens("fresh")
        assert session_store.access_token == "fresh"

    def test_creates_parent_directory(self, tmp_path):
        store = SessionStore(tmp_path / "nested" / "dir" / "session.json")
        store.set("key", "value")
        assert store.get("key") == "value"


def test_tokens_expire_relative_to_now(make_token):
    token = make_token(expires_in=120)
    assert not is_token_expired(token, skew_seconds=60, now=time.time())
