"""JSON logging to stdout, correlated by request id and acting user."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import IO, Any
from uuid import uuid4

from flask import Flask, Response, g, has_request_context, request

REQUEST_ID_HEADER = "X-Request-ID"
CORRELATION_HEADERS = (REQUEST_ID_HEADER, "X-Correlation-ID")

# ``extra=`` keys copied into the payload when present on a record
EXTRA_KEYS = (
    "endpoint",
    "elapsed_ms",
    "user_id",
    "auth_source",
    "post_id",
    "status",
    "path",
)


class JSONFormatter(logging.Formatter):
    """One JSON object per line; the timestamp is the record's creation time."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(
                timespec="milliseconds"
            ),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
        }
        for key in EXTRA_KEYS:
            value = getattr(record, key, None)
            if value is not None:
                payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class RequestContextFilter(logging.Filter):
    """Stamp records with the request id, path and, once known, the acting user."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not has_request_context():
            record.request_id = getattr(record, "request_id", None)
            return True
        record.request_id = ensure_request_id()
        if getattr(record, "path", None) is None:
            record.path = request.path
        user = g.get("current_user")
        if user is not None and getattr(record, "user_id", None) is None:
            record.user_id = user.id
        return True


def ensure_request_id() -> str:
    """Return the id of the current request, adopting or minting it once.

    The first correlation header present on the request wins; otherwise a
    UUID4 is generated. The value is cached on ``flask.g`` so logs, error
    bodies and the response header all agree. Outside a request a fresh id
    is returned on every call.
    """

    if not has_request_context():
        return str(uuid4())
    cached = g.get("request_id")
    if cached:
        return cached
    request_id = next(
        (request.headers[h] for h in CORRELATION_HEADERS if request.headers.get(h)),
        None,
    ) or str(uuid4())
    g.request_id = request_id
    return request_id


def resolve_level(level: str | int) -> int:
    """Map ``"debug"``/``"INFO"``/``10`` style values to a logging level."""

    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(level: str | int = "INFO", *, stream: IO[str] | None = None) -> None:
    """Route the root logger to a single JSON handler.

    :param level: Root level; unknown names fall back to ``INFO``.
    :param stream: Destination, ``sys.stdout`` by default.
    """

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(JSONFormatter())
    handler.addFilter(RequestContextFilter())
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(resolve_level(level))


def init_app(app: Flask) -> None:
    """Seed the request id per request and echo it on every response."""

    app.logger.addFilter(RequestContextFilter())

    @app.before_request
    def _seed_request_id() -> None:
        # ``g`` outlives a request when an app context was already pushed
        g.pop("request_id", None)
        ensure_request_id()

    @app.after_request
    def _echo_request_id(response: Response) -> Response:
        response.headers.setdefault(REQUEST_ID_HEADER, ensure_request_id())
        return response


__all__ = [
    "JSONFormatter",
    "RequestContextFilter",
    "configure_logging",
    "ensure_request_id",
    "init_app",
    "resolve_level",
]
