"""
Tests for recruitdesk.utils.config: settings and backend URL resolution.
"""

from recruitdesk.utils.config import (
    DEVELOPMENT_API_URL,
    PRODUCTION_API_URL,
    DatabaseSettings,
    get_settings,
    reload_settings,
)

TEST_API_URL = "http://api.test/api"


class TestApiBaseUrl:
    def test_env_override(self):
        assert get_settings().api_base_url == TEST_API_URL

    def test_trailing_slash_stripped(self, monkeypatch):
        monkeypatch.setenv("API_URL", "https://api.example.com/api/")
        assert reload_settings().api_base_url == "https://api.example.com/api"

    def test_production_default(self, monkeypatch):
        monkeypatch.delenv("API_URL")
        monkeypatch.setenv("APP_ENVIRONMENT", "production")
        assert reload_settings().api_base_url == PRODUCTION_API_URL

    def test_development_default(self, monkeypatch):
        monkeypatch.delenv("API_URL")
        monkeypatch.setenv("APP_ENVIRONMENT", "development")
        assert reload_settings().api_base_url == DEVELOPMENT_API_URL

    def test_blank_url_falls_back(self, monkeypatch):
        monkeypatch.setenv("API_URL", "   ")
        monkeypatch.setenv("APP_ENVIRONMENT", "testing")
        assert reload_settings().api_base_url == DEVELOPMENT_API_URL


class TestDatabaseSettings:
    def test_connection_string_without_credentials(self):
        assert DatabaseSettings(host="db", port=27018).connection_string == "mongodb://db:27018"

    def test_connection_string_with_credentials(self):
        settings = DatabaseSettings(host="db", username="app", password="secret")
        assert settings.connection_string == "mongodb://app:secret@db:27017"

    def test_transactions_off_by_default(self):
        assert not DatabaseSettings().use_transactions


class TestNestedSettings:
    def test_prefixes(self, monkeypatch):
        monkeypatch.setenv("SYNC_MODE", "poll")
        monkeypatch.setenv("SYNC_POLL_INTERVAL_SECONDS", "0.5")
        monkeypatch.setenv("AUTH_TOKEN_EXPIRY_SKEW_SECONDS", "0")
        settings = reload_settings()
        assert settings.sync.mode == "poll"
        assert settings.sync.poll_interval_seconds == 0.5
        assert settings.auth.token_expiry_skew_seconds == 0

    def test_session_file_isolated(self, tmp_path):
        assert get_settings().auth.session_file == tmp_path / "session.json"

    def test_reload_replaces_singleton(self):
        first = get_settings()
        assert reload_settings() is not first
        assert get_settings() is not first
