"""
Tests for the recruitdesk command line interface.

Database and backend calls are patched out; only argument handling,
permission gating and output are exercised.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from loguru import logger
from typer.testing import CliRunner

from recruitdesk.auth.guards import AuthState
from recruitdesk.cli import app
from recruitdesk.utils.config import reload_settings

runner = CliRunner()


def _output(result) -> str:
    """Command output with rich's line wrapping collapsed."""
    return " ".join(result.output.split())


@pytest.fixture
def signed_in():
    """Patch the CLI's auth lookup to return the given user."""

    def _sign_in(user):
        patcher = patch("recruitdesk.cli._auth_state", return_value=AuthState(user=user))
        patcher.start()
        return user

    yield _sign_in
    patch.stopall()


@pytest.fixture
def no_db():
    with patch("recruitdesk.cli._require_db"):
        yield


class TestSystemCommands:
    def test_version(self):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert "RecruitDesk" in result.output
        assert "0.1.0" in result.output

    def test_info(self):
        result = runner.invoke(app, ["info"])
        assert result.exit_code == 0
        assert "http://api.test/api" in result.output


class TestSessionCommands:
    def test_whoami_signed_out(self):
        result = runner.invoke(app, ["whoami"])
        assert result.exit_code == 1
        assert "Not signed in" in result.output

    def test_whoami_from_env_token(self, monkeypatch, make_token):
        monkeypatch.setenv("AUTH_SESSION_TOKEN", make_token(role="admin"))
        reload_settings()
        result = runner.invoke(app, ["whoami"])
        assert result.exit_code == 0
        assert "Alex Morgan" in result.output
        assert "Administrator" in result.output

    def test_whoami_from_stored_token(self, session_store, make_token):
        session_store.save_tokens(make_token(role="viewer"))
        result = runner.invoke(app, ["whoami"])
        assert result.exit_code == 0
        assert "Viewer" in result.output

    def test_expired_stored_token_is_signed_out(self, session_store, make_token):
        session_store.save_tokens(make_token(expires_in=-5))
        assert runner.invoke(app, ["whoami"]).exit_code == 1

    def test_permissions_for_role(self):
        result = runner.invoke(app, ["permissions", "--role", "viewer"])
        assert result.exit_code == 0
        assert "jobs.view" in result.output
        assert "Viewer" in result.output

    def test_permissions_invalid_role(self):
        result = runner.invoke(app, ["permissions", "--role", "root"])
        assert result.exit_code == 1
        assert "Invalid role" in result.output


class TestGuards:
    def test_signed_out_is_refused(self):
        result = runner.invoke(app, ["list-jobs"])
        assert result.exit_code == 1
        assert "Not signed in" in result.output

    def test_missing_permission_shows_message(self, signed_in, viewer_user):
        signed_in(viewer_user)
        result = runner.invoke(app, ["approve-application", "app_1"])
        assert result.exit_code == 1
        assert "This feature requires the applications.approve permission." in _output(result)


class TestSelectJob:
    def test_show_current(self, signed_in, viewer_user, session_store):
        signed_in(viewer_user)
        session_store.save_job_selection("job_7")
        result = runner.invoke(app, ["select-job"])
        assert result.exit_code == 0
        assert "job_7" in result.output

    def test_clear(self, signed_in, viewer_user, session_store):
        signed_in(viewer_user)
        session_store.save_job_selection("job_7")
        result = runner.invoke(app, ["select-job", "--clear"])
        assert result.exit_code == 0
        assert session_store.selected_job_id is None

    def test_select_existing_job(self, signed_in, viewer_user, session_store, sample_job, no_db):
        signed_in(viewer_user)
        repo = MagicMock()
        repo.get_by_id.return_value = sample_job
        with patch("recruitdesk.data.repositories.get_job_repository", return_value=repo):
            result = runner.invoke(app, ["select-job", "job_1"])
        assert result.exit_code == 0
        assert "Backend Engineer" in result.output
        assert session_store.selected_job_id == "job_1"

    def test_select_unknown_job(self, signed_in, viewer_user, session_store, no_db):
        signed_in(viewer_user)
        repo = MagicMock()
        repo.get_by_id.return_value = None
        with patch("recruitdesk.data.repositories.get_job_repository", return_value=repo):
            result = runner.invoke(app, ["select-job", "job_404"])
        assert result.exit_code == 1
        assert session_store.selected_job_id is None


class TestWorkflowCommands:
    def test_approve(self, signed_in, recruiter_user, sample_application, sample_candidate, no_db):
        signed_in(recruiter_user)
        approved = sample_application.model_copy(update={"status": "approved", "assigned_job_id": "job_1"})
        service = MagicMock()
        service.approve.return_value = (approved, sample_candidate)

        with patch("recruitdesk.services.ApplicationService", return_value=service):
            result = runner.invoke(app, ["approve-application", "app_1", "--job", "job_1"])

        assert result.exit_code == 0
        assert "Application app_1 approved" in result.output
        assert "Jane Smith" in result.output
        service.approve.assert_called_once_with(recruiter_user, "app_1", assigned_job_id="job_1")

    def test_move_candidate_needs_a_job(self, signed_in, recruiter_user):
        signed_in(recruiter_user)
        result = runner.invoke(app, ["move-candidate", "cand_1", "screening"])
        assert result.exit_code == 1
        assert "No job given" in result.output

    def test_move_candidate_uses_selected_job(self, signed_in, recruiter_user, session_store, sample_candidate, no_db):
        signed_in(recruiter_user)
        session_store.save_job_selection("job_1")
        service = MagicMock()
        service.move_candidate.return_value = sample_candidate

        with patch("recruitdesk.services.PipelineService", return_value=service):
            result = runner.invoke(app, ["move-candidate", "cand_1", "new"])

        assert result.exit_code == 0
        service.move_candidate.assert_called_once_with(recruiter_user, "cand_1", "job_1", "new")


class TestTemplates:
    def test_lists_templates(self, signed_in, recruiter_user):
        from recruitdesk.api.schemas import EmailTemplate

        signed_in(recruiter_user)
        resource = MagicMock()
        resource.list = AsyncMock(
            return_value=[EmailTemplate(id="t1", name="Interview Invite", subject="s", body="b", type="interview")]
        )

        with patch("recruitdesk.api.EmailTemplatesApi", return_value=resource):
            result = runner.invoke(app, ["templates", "--active"])

        assert result.exit_code == 0
        assert "Interview Invite" in result.output
        resource.list.assert_awaited_once_with(type=None, is_active=True)

    def test_viewer_cannot_see_templates(self, signed_in, viewer_user):
        signed_in(viewer_user)
        assert runner.invoke(app, ["templates"]).exit_code == 1


class TestLogging:
    def test_every_command_configures_logging(self):
        with patch("recruitdesk.cli.setup_logging") as setup:
            result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        setup.assert_called_once_with()

    def test_file_and_audit_sinks_installed(self, monkeypatch, tmp_path):
        monkeypatch.setenv("APP_ENVIRONMENT", "development")
        reload_settings()
        try:
            assert runner.invoke(app, ["version"]).exit_code == 0
            assert (tmp_path / "logs" / "recruitdesk.log").exists()
            assert (tmp_path / "logs" / "audit.log").exists()
        finally:
            logger.remove()


class TestTaxonomy:
    def test_category_tree(self, signed_in, viewer_user, no_db):
        from recruitdesk.data.models import Category, build_category_tree

        signed_in(viewer_user)
        categories = [
            Category(id="cat_eng", name="Engineering"),
            Category(id="cat_be", name="Backend", parent_id="cat_eng", is_active=False),
        ]
        repo = MagicMock()
        repo.get_tree.return_value = build_category_tree(categories)

        with patch("recruitdesk.data.repositories.get_category_repository", return_value=repo):
            result = runner.invoke(app, ["list-categories"])

        assert result.exit_code == 0
        assert "Engineering" in result.output
        assert "Backend" in result.output
        assert "inactive" in result.output
        repo.get_tree.assert_called_once_with(active_only=False)

    def test_tags_by_kind(self, signed_in, viewer_user, no_db):
        from recruitdesk.data.models import Tag

        signed_in(viewer_user)
        repo = MagicMock()
        repo.get_by_type.return_value = [Tag(id="tag_1", name="Remote", is_system=True)]

        with patch("recruitdesk.data.repositories.get_tag_repository", return_value=repo):
            result = runner.invoke(app, ["list-tags", "--kind", "system"])

        assert result.exit_code == 0
        assert "Remote" in result.output
        repo.get_by_type.assert_called_once_with(True)

    def test_invalid_tag_kind(self, signed_in, viewer_user):
        signed_in(viewer_user)
        result = runner.invoke(app, ["list-tags", "--kind", "pinned"])
        assert result.exit_code == 1
        assert "Invalid kind" in result.output
