"""JSON failure envelope and the handlers that produce it.

Every error leaves the process as::

    {"success": false, "message": "...", "code": "...", "request_id": "..."}

with an optional ``details`` mapping. Stack traces and driver messages are
logged, never returned.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, jsonify, request
from marshmallow import ValidationError as MarshmallowValidationError
from sqlalchemy.exc import IntegrityError, OperationalError
from werkzeug.exceptions import HTTPException

from socialapp.core.logger import ensure_request_id

log = logging.getLogger(__name__)

# Codes that differ from the slugged reason phrase
_CODE_OVERRIDES = {
    HTTPStatus.REQUEST_ENTITY_TOO_LARGE: "payload_too_large",
    HTTPStatus.UNPROCESSABLE_ENTITY: "unprocessable_entity",
}


def code_for_status(status: int) -> str:
    """Return a snake_case code for ``status`` (``404`` -> ``"not_found"``)."""
    try:
        http_status = HTTPStatus(status)
    except ValueError:
        return "error"
    if http_status in _CODE_OVERRIDES:
        return _CODE_OVERRIDES[http_status]
    return http_status.phrase.lower().replace(" ", "_").replace("-", "_").replace("'", "")


def failure(
    status: int,
    message: str,
    *,
    code: str | None = None,
    details: dict[str, Any] | None = None,
) -> tuple[Response, int]:
    """Build the JSON failure response.

    :param status: HTTP status.
    :param message: Client-safe summary.
    :param code: Stable code; derived from ``status`` when omitted.
    :param details: Optional structured extras such as field errors.
    """
    body: dict[str, Any] = {
        "success": False,
        "message": message,
        "code": code or code_for_status(status),
        "request_id": ensure_request_id(),
    }
    if details:
        body["details"] = details
    return jsonify(body), int(status)


class APIError(Exception):
    """Error raised by the HTTP layer and rendered as a failure envelope.

    Subclasses pin ``status_code``, ``code`` and ``default_message``; an
    instance may override the message and attach ``details``.
    """

    status_code: int = HTTPStatus.BAD_REQUEST
    code: str = "bad_request"
    default_message: str = "Bad request"

    def __init__(self, message: str | None = None, *, details: dict[str, Any] | None = None) -> None:
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)

    def render(self) -> tuple[Response, int]:
        return failure(self.status_code, self.message, code=self.code, details=self.details)


class BadRequest(APIError):
    pass


class Unauthorized(APIError):
    status_code = HTTPStatus.UNAUTHORIZED
    code = "unauthorized"
    default_message = "Unauthorized"


class NotFound(APIError):
    status_code = HTTPStatus.NOT_FOUND
    code = "not_found"
    default_message = "Resource not found"


class Conflict(APIError):
    status_code = HTTPStatus.CONFLICT
    code = "conflict"
    default_message = "Conflict"


def _on_api_error(err: APIError):
    if err.status_code >= 500:
        log.error("api_error", extra={"status": err.status_code, "path": request.path})
    else:
        log.warning("api_error %s: %s", err.code, err.message, extra={"status": err.status_code})
    return err.render()


def _on_http_exception(err: HTTPException):
    status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
    if status == HTTPStatus.NOT_FOUND:
        message = f"Route '{request.path}' not found"
    else:
        message = (err.description or HTTPStatus(status).phrase).strip()
    (log.error if status >= 500 else log.warning)("http_error %s", message, extra={"status": status})
    return failure(status, message)


def _on_validation_error(err: MarshmallowValidationError):
    log.warning("validation_error", extra={"status": HTTPStatus.BAD_REQUEST})
    return failure(
        HTTPStatus.BAD_REQUEST,
        "Validation failed",
        code="validation_error",
        details={"errors": err.messages},
    )


def _on_integrity_error(err: IntegrityError):
    log.error("integrity_error", exc_info=True)
    return failure(HTTPStatus.CONFLICT, "Resource conflict", code="conflict")


def _on_operational_error(err: OperationalError):
    log.error("database_unavailable", exc_info=True)
    return failure(HTTPStatus.SERVICE_UNAVAILABLE, "Service temporarily unavailable")


def _on_unexpected(err: Exception):
    log.error("unhandled_exception", exc_info=True)
    return failure(HTTPStatus.INTERNAL_SERVER_ERROR, "Unexpected error")


HANDLERS = (
    (APIError, _on_api_error),
    (HTTPException, _on_http_exception),
    (MarshmallowValidationError, _on_validation_error),
    (IntegrityError, _on_integrity_error),
    (OperationalError, _on_operational_error),
    (Exception, _on_unexpected),
)


def init_app(app: Flask) -> None:
    """Register the JSON handlers on ``app``."""
    for exc_type, handler in HANDLERS:
        app.register_error_handler(exc_type, handler)
