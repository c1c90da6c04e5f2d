"""Cross-origin policy for the browser client."""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS

from socialapp.core.logger import REQUEST_ID_HEADER

ALLOWED_HEADERS = ("Content-Type", "Authorization", REQUEST_ID_HEADER)
ALLOWED_METHODS = ("GET", "POST", "PUT", "DELETE", "OPTIONS")


def parse_origins(raw: str | None) -> list[str] | None:
    """Split a comma separated ``CORS_ORIGINS`` value.

    ``None`` stands for "any origin": returned for a blank value or ``"*"``.
    """

    origins = [item.strip() for item in (raw or "").split(",") if item.strip()]
    if not origins or origins == ["*"]:
        return None
    return origins


def init_app(app: Flask) -> None:
    """Apply the policy to ``/api/*``.

    The refresh cookie only travels on credentialed requests, which browsers
    refuse for a wildcard origin. Credentials are therefore enabled only when
    explicit origins are configured.
    """

    origins = parse_origins(app.config.get("CORS_ORIGINS"))
    CORS(
        app,
        resources={r"/api/*": {"origins": origins or "*"}},
        supports_credentials=origins is not None,
        allow_headers=list(ALLOWED_HEADERS),
        expose_headers=[REQUEST_ID_HEADER],
        methods=list(ALLOWED_METHODS),
        max_age=app.config.get("CORS_MAX_AGE", 600),
    )
