"""
Service-layer exceptions.

Nothing here knows about HTTP; :meth:`BaseService.translate_exceptions`
maps these onto status codes at the API boundary.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


class ServiceError(Exception):
    """Root of every error a service raises on purpose."""


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """``entity`` with identifier ``key`` does not exist."""

    entity: str
    key: str | int

    def __str__(self) -> str:
        return f"{self.entity} not found: {self.key}"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """A uniqueness rule on ``entity`` was violated; ``detail`` is client-safe."""

    entity: str
    detail: str

    def __str__(self) -> str:
        return self.detail


@dataclass(slots=True)
class ValidationFailedError(ServiceError):
    """
    Input broke a domain rule, e.g. an empty post or too many images.

    :param message: Summary for the client.
    :param details: Field name to list of messages.
    """

    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return self.message


class AuthenticationError(ServiceError):
    """Credentials or a token did not resolve to an existing user."""


class InvalidTokenError(AuthenticationError):
    """Bad signature, malformed payload, wrong token type or expired."""
