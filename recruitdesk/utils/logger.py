"""
Logging infrastructure for RecruitDesk.

Uses Loguru for console and file logging with rotation, plus a separate
audit sink for access decisions and hiring actions. Audit entries carry an
``audit_type`` and the acting user so the audit file can be read on its own.
"""

import re
import sys
from enum import Enum
from typing import Any, Optional, Union

from loguru import logger

from recruitdesk.utils.config import get_settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)
AUDIT_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {extra[audit_type]: <12} | {extra[audit_user]} | {message}"

REDACTED = "***REDACTED***"

SENSITIVE_KEYS = frozenset({
    "password", "passwd", "pwd", "secret", "token", "api_key", "apikey",
    "auth", "credential", "private_key", "session", "cookie",
})

# Three base64url segments, the shape of a session JWT
_JWT_PATTERN = re.compile(r"\beyJ[\w-]+\.[\w-]+\.[\w-]*")


class AuditType(str, Enum):
    """Kinds of audit entries."""

    ACCESS = "ACCESS"  # permission checks and guard denials
    WORKFLOW = "WORKFLOW"  # approvals, rejections, stage moves
    RELATIONSHIP = "RELATIONSHIP"  # two-sided link writes


def _is_audit_record(record: dict) -> bool:
    return "audit_type" in record["extra"]


def setup_logging() -> None:
    """
    Configure application-wide logging.

    Replaces any existing handlers. Outside the testing environment a
    rotating application log and an audit log are written next to each other
    under ``LOG_FILE_PATH``'s directory.
    """
    settings = get_settings()
    log_settings = settings.logging

    logger.remove()

    # Security: diagnose=False outside development to keep tokens out of stack traces
    enable_diagnose = settings.debug and settings.environment == "development"

    if log_settings.console_output:
        logger.add(
            sys.stderr,
            format=CONSOLE_FORMAT,
            level=log_settings.level,
            colorize=True,
            backtrace=True,
            diagnose=enable_diagnose,
        )

    if settings.environment == "testing":
        return

    log_file = log_settings.file_path
    log_file.parent.mkdir(parents=True, exist_ok=True)

    logger.add(
        log_file,
        format=log_settings.format,
        level=log_settings.level,
        filter=lambda record: not _is_audit_record(record),
        rotation=log_settings.rotation,
        retention=log_settings.retention,
        compression="zip",
        backtrace=True,
        diagnose=enable_diagnose,
        enqueue=True,
    )

    logger.add(
        log_file.parent / "audit.log",
        format=AUDIT_FORMAT,
        level="INFO",
        filter=_is_audit_record,
        rotation="1 week",
        retention="1 year",
        compression="zip",
        enqueue=True,
    )

    logger.info(f"Logging initialized - Level: {log_settings.level}, file: {log_file}")


def get_logger(name: str) -> Any:
    """Get a logger bound to ``name`` (typically ``__name__``)."""
    return logger.bind(name=name)


def sanitize(data: Any) -> Any:
    """
    Redact secrets before they reach a log sink.

    Values under sensitive keys are replaced entirely; session tokens embedded
    in other strings (e.g. an ``Authorization`` header) are masked in place.
    """
    if isinstance(data, dict):
        return {
            k: REDACTED if any(s in str(k).lower() for s in SENSITIVE_KEYS) else sanitize(v)
            for k, v in data.items()
        }
    if isinstance(data, (list, tuple)):
        return [sanitize(item) for item in data]
    if isinstance(data, str):
        return _JWT_PATTERN.sub(REDACTED, data)
    return data


def audit_log(
    action: str,
    details: dict[str, Any],
    audit_type: Union[AuditType, str] = AuditType.ACCESS,
    user_id: Optional[str] = None,
) -> None:
    """
    Write an audit entry.

    Args:
        action: What happened (e.g. "access_denied", "application_approved")
        details: Relevant ids and values; secrets are redacted
        audit_type: Entry kind, see ``AuditType``
        user_id: Acting user; taken from ``details["user_id"]`` when omitted
    """
    kind = AuditType(audit_type).value
    actor = user_id or details.get("user_id") or "-"
    logger.bind(audit_type=kind, audit_user=actor).info(f"{action} | {sanitize(details)}")


class LoggerMixin:
    """Gives a class a ``logger`` bound to its class name."""

    @property
    def logger(self) -> Any:
        if not hasattr(self, "_logger"):
            self._logger = get_logger(self.__class__.__name__)
        return self._logger


# Module-level logger for quick access
log = logger
