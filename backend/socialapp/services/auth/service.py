"""
AuthService
===========

Account lifecycle on top of the credential store and the token service:

- ``register``: create a user, generating a username when none is given,
  and issue a token pair.
- ``login``: verify credentials and issue a token pair.
- ``refresh``: trade a valid refresh token for a new pair.
- ``me``: public profile of the acting user.

Logout has no server-side state to destroy; the API layer only clears the
refresh cookie.
"""

from __future__ import annotations

import logging
import random
import re
from collections.abc import Callable

from sqlalchemy.exc import IntegrityError

from socialapp.models.user import User
from socialapp.repositories.user import UserRepository
from socialapp.services._shared.base import BaseService, ServiceContext
from socialapp.services._shared.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationFailedError,
)
from socialapp.services.auth.dto import (
    AuthResultOut,
    LoginIn,
    RefreshOut,
    RegisterIn,
    UserOut,
)
from socialapp.services.auth.session import USER_GONE_MESSAGE
from socialapp.services.tokens import TokenService

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "User already exists with this email"
INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"

USERNAME_ATTEMPTS = 5
_USERNAME_UNSAFE = re.compile(r"[^a-z0-9._]+")


def _random_suffix() -> int:
    return random.randint(1000, 9999)  # noqa: S311 - not a secret


def to_user_out(user: User) -> UserOut:
    """Project an ORM user onto its public DTO."""
    return UserOut(id=user.id, name=user.name, username=user.username, email=user.email)


class AuthService(BaseService):
    """
    Registration, credential login and token refresh.

    :param tokens: Token issuer/verifier.
    :param ctx: Optional request context.
    :param suffix: Source of the numeric username suffix (injectable for tests).
    """

    def __init__(
        self,
        *,
        tokens: TokenService,
        ctx: ServiceContext | None = None,
        suffix: Callable[[], int] | None = None,
    ) -> None:
        super().__init__(ctx=ctx)
        self.tokens = tokens
        self._suffix = suffix or _random_suffix

    # ------------------------------------------------------------------ #
    # Register
    # ------------------------------------------------------------------ #

    def register(self, dto: RegisterIn) -> AuthResultOut:
        """
        Create an account and issue its first token pair.

        :param dto: Registration input.
        :returns: Public user and token pair.
        :raises ConflictError: When the email (or explicit username) is taken.
        :raises ValidationFailedError: When the model rejects a field.
        """
        try:
            with self.rw_uow() as uow:
                repo: UserRepository = uow.users
                if repo.exists_by_email(dto.email):
                    raise ConflictError("User", DUPLICATE_EMAIL_MESSAGE)

                username = self._pick_username(repo, dto)
                try:
                    user = User(name=dto.name, email=dto.email, username=username)
                    user.password = dto.password
                except ValueError as exc:
                    raise ValidationFailedError(str(exc), {"user": [str(exc)]}) from exc
                repo.add(user)
                out = to_user_out(user)
        except IntegrityError as exc:
            # Lost a race against a concurrent registration.
            raise ConflictError("User", DUPLICATE_EMAIL_MESSAGE) from exc

        logger.info("auth.registered", extra={"user_id": out.id})
        return self._issue(out)

    def _pick_username(self, repo: UserRepository, dto: RegisterIn) -> str:
        if dto.username:
            if repo.exists_by_username(dto.username):
                raise ConflictError("User", "Username already taken")
            return dto.username.strip()

        local_part = dto.email.strip().lower().split("@", 1)[0]
        base = _USERNAME_UNSAFE.sub("", local_part)[:48] or "user"
        for _ in range(USERNAME_ATTEMPTS):
            candidate = f"{base}{self._suffix()}"
            if not repo.exists_by_username(candidate):
                return candidate
        raise ConflictError("User", "Could not generate a unique username")

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> AuthResultOut:
        """
        Authenticate credentials and issue a fresh token pair.

        :raises AuthenticationError: If the email is unknown or the password
            does not match. Both cases share one message.
        """
        with self.ro_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.authenticate(dto.email, dto.password)
            if user is None:
                logger.warning("auth.login_failed")
                raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)
            out = to_user_out(user)

        logger.info("auth.login", extra={"user_id": out.id})
        return self._issue(out)

    # ------------------------------------------------------------------ #
    # Refresh
    # ------------------------------------------------------------------ #

    def refresh(self, refresh_token: str | None) -> RefreshOut:
        """
        Verify ``refresh_token`` and issue a new access/refresh pair.

        :raises InvalidTokenError: On a missing, forged or expired token.
        :raises AuthenticationError: When the subject no longer exists.
        """
        claims = self.tokens.verify_refresh(refresh_token or "")
        with self.ro_uow() as uow:
            if not uow.users.exists(claims.user_id):
                raise AuthenticationError(USER_GONE_MESSAGE)

        return RefreshOut(
            access_token=self.tokens.issue_access_token(claims.user_id),
            refresh_token=self.tokens.issue_refresh_token(claims.user_id),
        )

    # ------------------------------------------------------------------ #
    # Profile
    # ------------------------------------------------------------------ #

    def me(self, user_id: int) -> UserOut:
        """Return the public profile of ``user_id``."""
        user = self.find_user(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    def find_user(self, user_id: int) -> UserOut | None:
        """Load a user by id, or ``None``. Used as the session user loader."""
        with self.ro_uow() as uow:
            user = uow.users.get(user_id)
            return to_user_out(user) if user is not None else None

    def _issue(self, user: UserOut) -> AuthResultOut:
        return AuthResultOut(
            user=user,
            access_token=self.tokens.issue_access_token(user.id),
            refresh_token=self.tokens.issue_refresh_token(user.id),
        )
