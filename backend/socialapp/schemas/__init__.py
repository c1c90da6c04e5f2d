"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import AccessTokenSchema, AuthResultSchema, LoginSchema, RegisterSchema, UserSchema
from .common import PageQuerySchema
from .post import (
    CommentCreateSchema,
    CommentSchema,
    FeedPageSchema,
    LikeToggleSchema,
    PostCreateSchema,
    PostSchema,
)

__all__ = [
    "AccessTokenSchema",
    "AuthResultSchema",
    "LoginSchema",
    "RegisterSchema",
    "UserSchema",
    "PageQuerySchema",
    "CommentCreateSchema",
    "CommentSchema",
    "FeedPageSchema",
    "LikeToggleSchema",
    "PostCreateSchema",
    "PostSchema",
]
