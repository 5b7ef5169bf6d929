"""
Configuration management for RecruitDesk.

Uses Pydantic Settings for type-safe configuration with environment variable support.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Base paths
ROOT_DIR = Path(__file__).parent.parent.parent
PACKAGE_DIR = ROOT_DIR / "recruitdesk"
DATA_DIR = ROOT_DIR / "data"

# Backend URLs used when API_URL is not set
PRODUCTION_API_URL = "https://api.recruitdesk.app/api"
DEVELOPMENT_API_URL = "http://localhost:5001/api"


class DatabaseSettings(BaseSettings):
    """MongoDB document store configuration."""

    model_config = SettingsConfigDict(env_prefix="DB_")

    host: str = "localhost"
    port: int = 27017
    name: str = "recruitdesk"
    username: str | None = None
    password: str | None = None
    replica_set: str | None = None

    # Multi-document transactions need a replica set
    use_transactions: bool = False

    @property
    def connection_string(self) -> str:
        """Generate MongoDB connection string."""
        if self.username and self.password:
            return f"mongodb://{self.username}:{self.password}@{self.host}:{self.port}"
        return f"mongodb://{self.host}:{self.port}"


class ApiSettings(BaseSettings):
    """REST backend configuration."""

    model_config = SettingsConfigDict(env_prefix="API_")

    url: str | None = None
    timeout_seconds: float = 30.0

    @field_validator("url")
    @classmethod
    def strip_trailing_slash(cls, v: str | None) -> str | None:
        """Normalize the base URL so paths can be appended."""
        if v is None:
            return v
        v = v.strip()
        return v.rstrip("/") or None


class AuthSettings(BaseSettings):
    """Identity and local session configuration."""

    model_config = SettingsConfigDict(env_prefix="AUTH_")

    # Session token issued by the identity provider, overrides the stored one
    session_token: str | None = None
    session_file: Path = DATA_DIR / "session.json"
    token_expiry_skew_seconds: int = 60
    login_path: str = "/login"
    fallback_path: str = "/dashboard"


class SyncSettings(BaseSettings):
    """Real-time synchronization configuration."""

    model_config = SettingsConfigDict(env_prefix="SYNC_")

    mode: Literal["change_stream", "poll"] = "change_stream"
    poll_interval_seconds: float = 5.0
    collections: list[str] = Field(
        default_factory=lambda: [
            "clients",
            "jobs",
            "candidates",
            "applications",
            "users",
            "pipelines",
            "categories",
            "tags",
        ]
    )


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: str = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"
    file_path: Path = ROOT_DIR / "logs" / "recruitdesk.log"
    rotation: str = "10 MB"
    retention: str = "30 days"
    console_output: bool = True


class AppSettings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    name: str = "RecruitDesk"
    version: str = "0.1.0"
    description: str = "Recruiter dashboard for clients, jobs, candidates and applications"
    debug: bool = False

    # Environment
    environment: Literal["development", "production", "testing"] = "development"

    # Nested settings
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    api: ApiSettings = Field(default_factory=ApiSettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    sync: SyncSettings = Field(default_factory=SyncSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @property
    def api_base_url(self) -> str:
        """
        Resolve the REST backend base URL.

        Priority: API_URL env var > production URL in production > development URL.
        """
        if self.api.url:
            return self.api.url
        if self.environment == "production":
            return PRODUCTION_API_URL
        return DEVELOPMENT_API_URL


# Global settings instance (singleton pattern)
_settings: AppSettings | None = None


def get_settings() -> AppSettings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = AppSettings()
    return _settings


def reload_settings() -> AppSettings:
    """Force reload settings from environment."""
    global _settings
    _settings = AppSettings()
    return _settings
