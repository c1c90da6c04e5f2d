"""Client configuration, built once and passed to every component."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_BASE_URL = "http://localhost:5000/api/v1"


def _default_session_file() -> Path:
    return Path.home() / ".socialapp" / "session.json"


@dataclass(frozen=True, slots=True)
class ClientConfig:
    """
    Settings for :class:`~socialapp.client.api_client.ApiClient`.

    :param base_url: API root including the version segment.
    :param timeout: Per-request timeout in seconds.
    :param session_file: Where the session cache is persisted.
    """

    base_url: str = DEFAULT_BASE_URL
    timeout: float = 10.0
    session_file: Path = field(default_factory=_default_session_file)

    @classmethod
    def from_env(cls) -> ClientConfig:
        """Read ``SOCIALAPP_API_URL``, ``SOCIALAPP_TIMEOUT`` and ``SOCIALAPP_SESSION_FILE``."""
        session_file = os.getenv("SOCIALAPP_SESSION_FILE")
        return cls(
            base_url=os.getenv("SOCIALAPP_API_URL", DEFAULT_BASE_URL),
            timeout=float(os.getenv("SOCIALAPP_TIMEOUT", "10")),
            session_file=Path(session_file) if session_file else _default_session_file(),
        )

    def url(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"
