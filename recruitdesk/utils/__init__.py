"""
Utility modules for RecruitDesk.

This package contains shared utilities used across the application:
- config: Configuration management
- logger: Logging infrastructure
- constants: Application-wide constants and enums
"""

from recruitdesk.utils.config import (
    AppSettings,
    get_settings,
    reload_settings,
    ROOT_DIR,
    PACKAGE_DIR,
    DATA_DIR,
)
from recruitdesk.utils.constants import (
    APP_NAME,
    APP_DISPLAY_NAME,
    VERSION,
    ApplicationStatus,
    CandidateStatus,
    Collection,
    JobStatus,
    UserRole,
)
from recruitdesk.utils.logger import (
    setup_logging,
    get_logger,
    audit_log,
    AuditType,
    LoggerMixin,
    log,
)

__all__ = [
    # Config
    "AppSettings",
    "get_settings",
    "reload_settings",
    "ROOT_DIR",
    "PACKAGE_DIR",
    "DATA_DIR",
    # Constants
    "APP_NAME",
    "APP_DISPLAY_NAME",
    "VERSION",
    "ApplicationStatus",
    "CandidateStatus",
    "Collection",
    "JobStatus",
    "UserRole",
    # Logger
    "setup_logging",
    "get_logger",
    "audit_log",
    "AuditType",
    "LoggerMixin",
    "log",
]
