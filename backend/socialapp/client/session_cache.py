"""File-backed copy of the signed-in user and access token."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING, Any

from .errors import SessionRequired

if TYPE_CHECKING:
    from .config import ClientConfig

log = logging.getLogger(__name__)


class SessionCache:
    """
    Persist ``{"user": {...}, "access_token": "..."}`` between runs.

    A file that cannot be parsed is removed and treated as an empty cache.
    The refresh token is never stored here; it lives in the HTTP cookie jar.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    @classmethod
    def from_config(cls, config: ClientConfig) -> SessionCache:
        """Cache stored at ``config.session_file``."""
        return cls(config.session_file)

    def load(self) -> dict[str, Any] | None:
        """Return the cached session, or ``None`` when there is none."""
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        try:
            state = json.loads(raw)
        except json.JSONDecodeError:
            log.warning("Corrupt session cache at %s; clearing it.", self.path)
            self.clear()
            return None
        if not isinstance(state, dict):
            log.warning("Unexpected session cache shape at %s; clearing it.", self.path)
            self.clear()
            return None
        return state

    def save(self, state: dict[str, Any]) -> None:
        """Write ``state`` atomically."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        tmp.write_text(json.dumps(state), encoding="utf-8")
        os.replace(tmp, self.path)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)

    @property
    def access_token(self) -> str | None:
        state = self.load() or {}
        token = state.get("access_token")
        return token if isinstance(token, str) and token else None


def require_session(cache: SessionCache) -> dict[str, Any]:
    """
    Guard for actions that need a signed-in user.

    :returns: The cached session.
    :raises SessionRequired: When nothing usable is cached.
    """
    state = cache.load()
    if not state or not state.get("access_token"):
        raise SessionRequired("Sign in required")
    return state
