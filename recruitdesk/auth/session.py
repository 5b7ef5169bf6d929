"""
Local session state for RecruitDesk.

Persists the access and refresh tokens plus one UI selection (the job
picked on the pipeline board) in a small JSON file. Read and write failures
are logged and never raised.
"""

import json
from pathlib import Path
from typing import Any, Optional

from recruitdesk.utils.constants import SESSION_KEYS
from recruitdesk.utils.logger import get_logger

logger = get_logger(__name__)


class SessionStore:
    """JSON-file backed key/value store for session state."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    # -------------------------------------------------------------------------
    # Raw Access
    # -------------------------------------------------------------------------

    def _load(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to read session file {self._path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.error(f"Ignoring malformed session file {self._path}")
            return {}
        return data

    def _dump(self, data: dict[str, Any]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        except OSError as e:
            logger.error(f"Failed to write session file {self._path}: {e}")

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._dump(data)

    def remove(self, *keys: str) -> None:
        data = self._load()
        if not any(k in data for k in keys):
            return
        for key in keys:
            data.pop(key, None)
        self._dump(data)

    # -------------------------------------------------------------------------
    # Tokens
    # -------------------------------------------------------------------------

    @property
    def access_token(self) -> Optional[str]:
        return self.get(SESSION_KEYS["access_token"])

    @property
    def refresh_token(self) -> Optional[str]:
        return self.get(SESSION_KEYS["refresh_token"])

    def save_tokens(self, access_token: str, refresh_token: Optional[str] = None) -> None:
        """Store a new access token, and the refresh token when one is given."""
        data = self._load()
        data[SESSION_KEYS["access_token"]] = access_token
        if refresh_token:
            data[SESSION_KEYS["refresh_token"]] = refresh_token
        self._dump(data)

    def clear_tokens(self) -> None:
        self.remove(SESSION_KEYS["access_token"], SESSION_KEYS["refresh_token"])

    # -------------------------------------------------------------------------
    # Pipeline Selection
    # -------------------------------------------------------------------------

    @property
    def selected_job_id(self) -> Optional[str]:
        return self.get(SESSION_KEYS["selected_job_id"])

    def save_job_selection(self, job_id: str) -> None:
        self.set(SESSION_KEYS["selected_job_id"], job_id)

    def clear_job_selection(self) -> None:
        self.remove(SESSION_KEYS["selected_job_id"])
