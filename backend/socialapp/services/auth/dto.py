# socialapp/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass

# Commands


@dataclass(frozen=True, slots=True)
class RegisterIn:
    """
    Input DTO for registration.

    :param name: Display name.
    :type name: str
    :param email: Login email (normalized by the model).
    :type email: str
    :param password: Raw password to be hashed by the model.
    :type password: str
    :param username: Optional public handle; generated when omitted.
    :type username: str | None
    """

    name: str
    email: str
    password: str
    username: str | None = None


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    :param email: User email.
    :type email: str
    :param password: Raw password (to be verified).
    :type password: str
    """

    email: str
    password: str


# Results


@dataclass(frozen=True, slots=True)
class UserOut:
    """
    Public user representation. Never carries the password hash.

    :param id: User identifier.
    :type id: int
    :param name: Display name.
    :type name: str
    :param username: Public handle.
    :type username: str
    :param email: Login email.
    :type email: str
    """

    id: int
    name: str
    username: str
    email: str


@dataclass(frozen=True, slots=True)
class AuthResultOut:
    """
    Output of register/login: the user plus a fresh token pair.

    The refresh token is meant for the ``jwt`` cookie only and must not be
    echoed in a response body.
    """

    user: UserOut
    access_token: str
    refresh_token: str


@dataclass(frozen=True, slots=True)
class RefreshOut:
    """Output of a refresh: a new access token and a rotated refresh token."""

    access_token: str
    refresh_token: str


@dataclass(frozen=True, slots=True)
class ResolvedSession:
    """
    Identity attached to a protected request.

    :param user: The acting user.
    :type user: UserOut
    :param source: ``"access"`` (bearer header) or ``"refresh"`` (cookie).
    :type source: str
    """

    user: UserOut
    source: str
