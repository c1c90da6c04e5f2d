"""Registration, login, refresh and per-request session resolution."""

from socialapp.services.auth.dto import (
    AuthResultOut,
    LoginIn,
    RefreshOut,
    RegisterIn,
    ResolvedSession,
    UserOut,
)
from socialapp.services.auth.service import AuthService
from socialapp.services.auth.session import SessionResolver, bearer_token

__all__ = [
    "AuthResultOut",
    "AuthService",
    "LoginIn",
    "RefreshOut",
    "RegisterIn",
    "ResolvedSession",
    "SessionResolver",
    "UserOut",
    "bearer_token",
]
