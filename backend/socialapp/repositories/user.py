"""Lookups on the ``users`` table."""

from __future__ import annotations

from sqlalchemy import ColumnElement, exists, select

from socialapp.models.user import User
from socialapp.repositories.base import BaseRepository


def _email_matches(email: str) -> ColumnElement[bool]:
    return User.email == email.strip().lower()


class UserRepository(BaseRepository[User]):
    """Stores and finds accounts. Token handling lives in the services."""

    model = User

    def get_by_email(self, email: str) -> User | None:
        """Case- and whitespace-insensitive email lookup."""
        return self.session.scalars(select(User).where(_email_matches(email))).first()

    def exists_by_email(self, email: str) -> bool:
        return bool(self.session.scalar(select(exists().where(_email_matches(email)))))

    def exists_by_username(self, username: str) -> bool:
        return bool(self.session.scalar(select(exists().where(User.username == username.strip()))))

    def authenticate(self, email: str, password: str) -> User | None:
        """
        Resolve login credentials.

        :returns: The user, or ``None`` for an unknown email and for a wrong
            password alike.
        """
        user = self.get_by_email(email)
        return user if user is not None and user.verify_password(password) else None
