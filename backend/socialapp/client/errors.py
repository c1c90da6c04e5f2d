"""Exceptions raised by the HTTP client."""

from __future__ import annotations


class ClientError(Exception):
    """Base class for client-side failures."""


class ApiError(ClientError):
    """
    Non-2xx response from the API.

    :param status: HTTP status code, ``0`` when the request never completed.
    :param message: Server message, or a transport description.
    :param code: Stable error code from the failure envelope, if any.
    """

    def __init__(self, status: int, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.status = status
        self.message = message
        self.code = code

    def __str__(self) -> str:
        return f"{self.status}: {self.message}"


class SessionExpired(ApiError):
    """A 401 was received; the cached session has been cleared."""

    def __init__(self, message: str = "Not Authorized", code: str | None = "unauthorized") -> None:
        super().__init__(401, message, code)


class SessionRequired(ClientError):
    """A guarded action ran without a cached session."""
