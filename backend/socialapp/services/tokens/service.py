"""
TokenService
============

Issues and verifies the two classes of signed bearer tokens:

- **access** tokens: short-lived, sent in ``Authorization: Bearer``.
- **refresh** tokens: long-lived, sent only in the ``jwt`` cookie.

Each class is signed with its own secret, so a leaked access secret cannot
forge refresh tokens and vice versa. Tokens are stateless: nothing is
persisted and there is no revocation list.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import uuid4

import jwt

from socialapp.services._shared.errors import InvalidTokenError
from socialapp.services.tokens.dto import TokenClaims

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"

DEFAULT_ACCESS_TTL = timedelta(minutes=15)
DEFAULT_REFRESH_TTL = timedelta(days=7)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class TokenService:
    """
    Pure token issuing/verification over two secrets and a clock.

    :param access_secret: HMAC key for access tokens.
    :param refresh_secret: HMAC key for refresh tokens; must differ.
    :param access_ttl: Access token lifetime.
    :param refresh_ttl: Refresh token lifetime.
    :param algorithm: JWS algorithm (HMAC family).
    :param clock: Callable returning an aware ``datetime``; injectable for tests.
    :raises ValueError: If a secret is empty or both secrets are equal.
    """

    def __init__(
        self,
        access_secret: str,
        refresh_secret: str,
        *,
        access_ttl: timedelta = DEFAULT_ACCESS_TTL,
        refresh_ttl: timedelta = DEFAULT_REFRESH_TTL,
        algorithm: str = "HS256",
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if not access_secret or not refresh_secret:
            raise ValueError("Token secrets must be non-empty.")
        if access_secret == refresh_secret:
            raise ValueError("Access and refresh tokens must be signed with different secrets.")
        self.access_secret = access_secret
        self.refresh_secret = refresh_secret
        self.access_ttl = access_ttl
        self.refresh_ttl = refresh_ttl
        self.algorithm = algorithm
        self._clock = clock or _utcnow

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> TokenService:
        """Build the service from a Flask config mapping."""
        return cls(
            str(config.get("ACCESS_TOKEN_SECRET") or ""),
            str(config.get("REFRESH_TOKEN_SECRET") or ""),
            access_ttl=timedelta(minutes=int(config.get("ACCESS_TOKEN_TTL_MINUTES", 15))),
            refresh_ttl=timedelta(days=int(config.get("REFRESH_TOKEN_TTL_DAYS", 7))),
        )

    # ------------------------------------------------------------------ #
    # Issuing
    # ------------------------------------------------------------------ #

    def issue_access_token(self, user_id: int | str) -> str:
        """Return a signed access token for ``user_id``."""
        return self._encode(user_id, ACCESS_TOKEN_TYPE, self.access_ttl, self.access_secret)

    def issue_refresh_token(self, user_id: int | str) -> str:
        """Return a signed refresh token for ``user_id``."""
        return self._encode(user_id, REFRESH_TOKEN_TYPE, self.refresh_ttl, self.refresh_secret)

    def _encode(self, user_id: int | str, token_type: str, ttl: timedelta, secret: str) -> str:
        now = self._clock()
        payload = {
            "sub": str(user_id),
            "type": token_type,
            "iat": int(now.timestamp()),
            "exp": int((now + ttl).timestamp()),
            "jti": uuid4().hex,
        }
        return jwt.encode(payload, secret, algorithm=self.algorithm)

    # ------------------------------------------------------------------ #
    # Verification
    # ------------------------------------------------------------------ #

    def verify(self, token: str, secret: str, *, expected_type: str | None = None) -> TokenClaims:
        """
        Verify ``token`` against ``secret`` and return its claims.

        Expiry is checked against the injected clock rather than the wall
        clock so results are deterministic for a given clock.

        :raises InvalidTokenError: On signature mismatch, malformed payload,
            wrong token type or elapsed expiry.
        """
        if not token or not isinstance(token, str):
            raise InvalidTokenError("Token missing")
        try:
            payload = jwt.decode(
                token,
                secret,
                algorithms=[self.algorithm],
                options={
                    "require": ["sub", "exp", "type"],
                    "verify_exp": False,
                    "verify_iat": False,
                },
            )
        except jwt.PyJWTError as exc:
            raise InvalidTokenError(f"Token rejected: {exc}") from exc

        token_type = payload.get("type")
        if expected_type is not None and token_type != expected_type:
            raise InvalidTokenError("Wrong token type")

        try:
            expires_at = datetime.fromtimestamp(int(payload["exp"]), tz=UTC)
            user_id = int(payload["sub"])
        except (TypeError, ValueError) as exc:
            raise InvalidTokenError("Malformed token payload") from exc

        if expires_at <= self._clock():
            raise InvalidTokenError("Token expired")

        return TokenClaims(user_id=user_id, token_type=str(token_type), expires_at=expires_at)

    def verify_access(self, token: str) -> TokenClaims:
        """Verify an access token against the access secret."""
        return self.verify(token, self.access_secret, expected_type=ACCESS_TOKEN_TYPE)

    def verify_refresh(self, token: str) -> TokenClaims:
        """Verify a refresh token against the refresh secret."""
        return self.verify(token, self.refresh_secret, expected_type=REFRESH_TOKEN_TYPE)
