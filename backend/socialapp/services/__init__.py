"""Application services.

Services own transactions through units of work and raise
framework-agnostic errors from :mod:`socialapp.services._shared.errors`.
"""

from socialapp.services.auth import AuthService, SessionResolver
from socialapp.services.posts import PostService
from socialapp.services.tokens import TokenService

__all__ = ["AuthService", "PostService", "SessionResolver", "TokenService"]
