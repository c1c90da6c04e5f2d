"""
Per-request identity resolution.

Two credentials can identify the caller of a protected endpoint:

1. ``Authorization: Bearer <access token>`` verified against the access
   secret.
2. The ``jwt`` cookie verified against the refresh secret, tried when the
   header is absent or its token does not verify.

Every call of :meth:`SessionResolver.resolve` either returns a
:class:`ResolvedSession` or raises :class:`AuthenticationError`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from socialapp.services._shared.errors import AuthenticationError, InvalidTokenError
from socialapp.services.auth.dto import ResolvedSession, UserOut
from socialapp.services.tokens import ACCESS_TOKEN_TYPE, REFRESH_TOKEN_TYPE, TokenService

logger = logging.getLogger(__name__)

NO_TOKEN_MESSAGE = "Not Authorized, No Token"
TOKEN_FAILED_MESSAGE = "Not Authorized, Token Failed"
USER_GONE_MESSAGE = "Not Authorized, user no longer exists"

UserLoader = Callable[[int], UserOut | None]


def bearer_token(authorization: str | None) -> str | None:
    """Extract the token from an ``Authorization: Bearer`` header value."""
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


class SessionResolver:
    """
    Resolve the acting user from a bearer header and/or the refresh cookie.

    :param tokens: Token verifier holding both secrets.
    :param load_user: Callable returning the user for an id, or ``None``.
    """

    def __init__(self, tokens: TokenService, load_user: UserLoader) -> None:
        self.tokens = tokens
        self.load_user = load_user

    def resolve(self, authorization: str | None, refresh_cookie: str | None) -> ResolvedSession:
        """
        Run the access-then-refresh fallback.

        A verified token whose subject no longer exists ends resolution with
        a failure; it never falls through to the next credential.

        :param authorization: Raw ``Authorization`` header value.
        :param refresh_cookie: Raw ``jwt`` cookie value.
        :raises AuthenticationError: When no credential identifies a live user.
        """
        presented = False

        access = bearer_token(authorization)
        if access:
            presented = True
            try:
                claims = self.tokens.verify_access(access)
            except InvalidTokenError as exc:
                logger.info("session.access_rejected", extra={"status": str(exc)})
            else:
                return self._attach(claims.user_id, ACCESS_TOKEN_TYPE)

        if refresh_cookie:
            presented = True
            try:
                claims = self.tokens.verify_refresh(refresh_cookie)
            except InvalidTokenError as exc:
                logger.info("session.refresh_rejected", extra={"status": str(exc)})
            else:
                return self._attach(claims.user_id, REFRESH_TOKEN_TYPE)

        if presented:
            raise AuthenticationError(TOKEN_FAILED_MESSAGE)
        raise AuthenticationError(NO_TOKEN_MESSAGE)

    def _attach(self, user_id: int, source: str) -> ResolvedSession:
        user = self.load_user(user_id)
        if user is None:
            logger.warning("session.user_gone", extra={"user_id": user_id, "auth_source": source})
            raise AuthenticationError(USER_GONE_MESSAGE)
        return ResolvedSession(user=user, source=source)
