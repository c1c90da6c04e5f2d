"""Signed access/refresh token issuing and verification."""

from socialapp.services.tokens.dto import TokenClaims
from socialapp.services.tokens.service import (
    ACCESS_TOKEN_TYPE,
    REFRESH_TOKEN_TYPE,
    TokenService,
)

__all__ = ["ACCESS_TOKEN_TYPE", "REFRESH_TOKEN_TYPE", "TokenClaims", "TokenService"]
