"""
Transaction boundary contract used by the services.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from socialapp.repositories import PostRepository, UserRepository


class UnitOfWork(ABC):
    """
    One use-case, one transaction.

    ``users`` and ``posts`` are bound to the same session, so a comment
    insert and the re-read of its post observe the same state. Leaving the
    ``with`` block decides the outcome: implementations commit or discard.
    """

    users: UserRepository
    posts: PostRepository

    def __enter__(self) -> UnitOfWork:
        return self

    @abstractmethod
    def __exit__(self, exc_type, exc, tb) -> None: ...

    @abstractmethod
    def commit(self) -> None: ...

    @abstractmethod
    def rollback(self) -> None: ...
