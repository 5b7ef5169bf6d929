"""
Shared test fixtures for the RecruitDesk test suite.

Sets environment variables before any recruitdesk imports to prevent config
failures, then provides signed-in users, session tokens, sample documents
and a database manager that never connects.
"""

import os

# === Set environment BEFORE any recruitdesk imports ===
os.environ.setdefault("APP_ENVIRONMENT", "testing")
os.environ.setdefault("DB_NAME", "recruitdesk_test")

import time
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone
from typing import Any, Optional
from unittest.mock import MagicMock

import jwt
import pytest

from recruitdesk.auth.identity import CurrentUser
from recruitdesk.auth.session import SessionStore
from recruitdesk.data.models import (
    Application,
    Candidate,
    Client,
    Job,
    JobApplication,
    JobRequirements,
    SkillSet,
)
from recruitdesk.utils.config import reload_settings
from recruitdesk.utils.constants import ApplicationStatus, CandidateStatus, JobStatus, UserRole

TEST_API_URL = "http://api.test/api"


# ---------------------------------------------------------------------------
# Settings isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point the session file and log files into tmp_path and the backend at a fake host."""
    monkeypatch.setenv("AUTH_SESSION_FILE", str(tmp_path / "session.json"))
    monkeypatch.delenv("AUTH_SESSION_TOKEN", raising=False)
    monkeypatch.setenv("API_URL", TEST_API_URL)
    monkeypatch.delenv("SYNC_MODE", raising=False)
    monkeypatch.setenv("APP_ENVIRONMENT", "testing")
    monkeypatch.setenv("LOG_CONSOLE_OUTPUT", "false")
    monkeypatch.setenv("LOG_FILE_PATH", str(tmp_path / "logs" / "recruitdesk.log"))
    settings = reload_settings()
    yield settings
    reload_settings()


@pytest.fixture
def session_store(tmp_path):
    return SessionStore(tmp_path / "session.json")


# ---------------------------------------------------------------------------
# Tokens and users
# ---------------------------------------------------------------------------


@pytest.fixture
def make_token():
    """Factory that signs a session JWT for the given role and lifetime."""

    def _factory(
        role: Optional[str] = "recruiter",
        expires_in: Optional[int] = 3600,
        sub: str = "user_1",
        **claims: Any,
    ) -> str:
        payload: dict[str, Any] = {
            "sub": sub,
            "email": "alex@example.com",
            "first_name": "Alex",
            "last_name": "Morgan",
            **claims,
        }
        if role is not None:
            payload["public_metadata"] = {"role": role}
        if expires_in is not None:
            payload["exp"] = int(time.time()) + expires_in
        return jwt.encode(payload, "test-secret", algorithm="HS256")

    return _factory


def _user(role: UserRole, user_id: str) -> CurrentUser:
    return CurrentUser(id=user_id, email=f"{user_id}@example.com", first_name="Test", last_name=role.value, role=role)


@pytest.fixture
def admin_user():
    return _user(UserRole.ADMIN, "admin_1")


@pytest.fixture
def recruiter_user():
    return _user(UserRole.RECRUITER, "recruiter_1")


@pytest.fixture
def hiring_manager_user():
    return _user(UserRole.HIRING_MANAGER, "manager_1")


@pytest.fixture
def viewer_user():
    return _user(UserRole.VIEWER, "viewer_1")


# ---------------------------------------------------------------------------
# Sample documents
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_client():
    return Client(id="client_1", company_name="Acme Corp", job_ids=["job_1"])


@pytest.fixture
def sample_job(sample_client):
    return Job(
        id="job_1",
        title="Backend Engineer",
        department="Engineering",
        client_id=sample_client.id,
        status=JobStatus.OPEN,
        requirements=JobRequirements(skills=SkillSet(required=["Python", "PostgreSQL", "Docker"])),
        candidate_ids=["cand_1"],
    )


@pytest.fixture
def sample_candidate(sample_job):
    applied = datetime(2024, 1, 1, tzinfo=timezone.utc)
    return Candidate(
        id="cand_1",
        first_name="Jane",
        last_name="Smith",
        email="jane.smith@example.com",
        job_ids=[sample_job.id],
        client_ids=[sample_job.client_id],
        job_applications=[
            JobApplication(
                job_id=sample_job.id,
                status=CandidateStatus.NEW,
                applied_at=applied,
                last_status_change=applied,
            )
        ],
    )


@pytest.fixture
def sample_application(sample_job):
    return Application(
        id="app_1",
        target_job_id=sample_job.id,
        target_client_id=sample_job.client_id,
        first_name="Sam",
        last_name="Lee",
        email="sam.lee@example.com",
        skills=["python", "docker"],
        years_of_experience=3,
        status=ApplicationStatus.PENDING,
    )


@pytest.fixture
def make_candidate():
    """Factory for candidates with one status per job."""

    def _factory(candidate_id: str, statuses: dict[str, str], hired_after_days: Optional[int] = None) -> Candidate:
        applied = datetime(2024, 1, 1, tzinfo=timezone.utc)
        changed = applied + timedelta(days=hired_after_days) if hired_after_days is not None else applied
        return Candidate(
            id=candidate_id,
            first_name="Cand",
            last_name=candidate_id,
            email=f"{candidate_id}@example.com",
            job_ids=list(statuses),
            job_applications=[
                JobApplication(job_id=job_id, status=status, applied_at=applied, last_status_change=changed)
                for job_id, status in statuses.items()
            ],
        )

    return _factory


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_db_manager():
    """Database manager whose transactions run without a session."""
    manager = MagicMock()

    @contextmanager
    def _transaction():
        yield None

    manager.sync_transaction.side_effect = _transaction
    return manager
