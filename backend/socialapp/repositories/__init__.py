"""Data access for users and posts."""

from __future__ import annotations

from socialapp.repositories.base import BaseRepository, Pagination, paginate_select
from socialapp.repositories.post import PostRepository
from socialapp.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "Pagination",
    "PostRepository",
    "UserRepository",
    "paginate_select",
]
