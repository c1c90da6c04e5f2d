"""Shared API helpers: response envelope, session guard, service calls."""

from __future__ import annotations

import functools
import logging
import time
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Response, current_app, g, jsonify, request

from socialapp.core.errors import Unauthorized
from socialapp.core.extensions import get_token_service
from socialapp.core.logger import ensure_request_id
from socialapp.services._shared.base import BaseService, ServiceContext
from socialapp.services._shared.errors import AuthenticationError, ServiceError
from socialapp.services.auth import AuthService, SessionResolver, UserOut

F = TypeVar("F", bound=Callable[..., Any])
T = TypeVar("T")

log = logging.getLogger(__name__)


def json_response(payload: Any, *, status: int = 200) -> Response:
    """``jsonify`` with an explicit status."""

    response = jsonify(payload)
    response.status_code = status
    return response


def success_response(data: Any = None, *, message: str = "OK", status: int = 200) -> Response:
    """Wrap ``data`` in the success envelope ``{success, message, data}``."""

    return json_response({"success": True, "message": message, "data": data}, status=status)


def timing(func: F) -> F:
    """Log how long the wrapped view took, at DEBUG."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            current_app.logger.debug(
                "request.elapsed",
                extra={
                    "endpoint": request.endpoint,
                    "elapsed_ms": round((time.perf_counter() - start) * 1000, 2),
                },
            )

    return wrapper  # type: ignore[return-value]


def call_service(func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """Invoke a service method, re-raising service errors as API errors."""

    try:
        return func(*args, **kwargs)
    except ServiceError as exc:
        raise BaseService.translate_exceptions(exc) from exc


def service_context() -> ServiceContext:
    """Build the service context for the current request."""

    user = getattr(g, "current_user", None)
    return ServiceContext(
        actor_id=user.id if user is not None else None,
        request_id=ensure_request_id(),
    )


def auth_service() -> AuthService:
    return AuthService(tokens=get_token_service(), ctx=service_context())


# --------------------------------------------------------------------------- #
# Session guard
# --------------------------------------------------------------------------- #


def refresh_cookie_name() -> str:
    return str(current_app.config.get("REFRESH_COOKIE_NAME", "jwt"))


def require_session(func: F) -> F:
    """Resolve the caller from the bearer header or the refresh cookie.

    On success ``g.current_user`` holds a :class:`UserOut` and
    ``g.auth_source`` is ``"access"`` or ``"refresh"``. On failure a 401 is
    raised and the view never runs.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        g.pop("current_user", None)
        g.pop("auth_source", None)
        resolver = SessionResolver(get_token_service(), auth_service().find_user)
        try:
            session = resolver.resolve(
                request.headers.get("Authorization"),
                request.cookies.get(refresh_cookie_name()),
            )
        except AuthenticationError as exc:
            log.warning("session.rejected", extra={"endpoint": request.endpoint, "status": str(exc)})
            raise Unauthorized(str(exc)) from exc
        g.current_user = session.user
        g.auth_source = session.source
        log.info(
            "session.resolved",
            extra={"user_id": session.user.id, "auth_source": session.source},
        )
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def current_user() -> UserOut:
    """Return the user attached by :func:`require_session`."""

    return g.current_user


# --------------------------------------------------------------------------- #
# Refresh cookie
# --------------------------------------------------------------------------- #


def set_refresh_cookie(response: Response, token: str) -> Response:
    """Attach the refresh token as the ``HttpOnly`` session cookie."""

    config = current_app.config
    max_age = int(get_token_service().refresh_ttl.total_seconds())
    response.set_cookie(
        refresh_cookie_name(),
        token,
        max_age=max_age,
        path="/",
        httponly=True,
        secure=bool(config.get("REFRESH_COOKIE_SECURE", False)),
        samesite=config.get("REFRESH_COOKIE_SAMESITE", "Lax"),
    )
    return response


def clear_refresh_cookie(response: Response) -> Response:
    """Expire the refresh cookie with the same attributes it was set with."""

    config = current_app.config
    response.delete_cookie(
        refresh_cookie_name(),
        path="/",
        httponly=True,
        secure=bool(config.get("REFRESH_COOKIE_SECURE", False)),
        samesite=config.get("REFRESH_COOKIE_SAMESITE", "Lax"),
    )
    return response
