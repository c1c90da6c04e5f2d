"""Account table: identity, public handle and password hash."""

from __future__ import annotations

import re
from typing import NoReturn

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, validates
from werkzeug.security import check_password_hash, generate_password_hash

from socialapp.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

MIN_PASSWORD_LENGTH = 8

EMAIL_PATTERN = re.compile(r"^[\w.+-]+@[\w-]+(\.[\w-]+)*\.\w{2,10}$")


def _required(value: object, label: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{label} is required.")
    return value.strip()


class User(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    A registered account.

    ``email`` is stored trimmed and lowercased so lookups are
    case-insensitive. ``username`` is the public handle; the auth service
    derives one from the name when the client omits it. The raw password is
    never stored or readable: assign to :attr:`password` and compare with
    :meth:`verify_password`.
    """

    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("email", name="uq_users_email"),
        UniqueConstraint("username", name="uq_users_username"),
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(254), nullable=False, index=True)
    username: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    @property
    def password(self) -> NoReturn:
        raise AttributeError("Password is write-only.")

    @password.setter
    def password(self, raw: str) -> None:
        """Hash ``raw`` with werkzeug's salted default method.

        :raises ValueError: When shorter than :data:`MIN_PASSWORD_LENGTH`.
        """
        if not isinstance(raw, str) or len(raw) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters.")
        self.password_hash = generate_password_hash(raw)

    def verify_password(self, raw: str) -> bool:
        """Return whether ``raw`` matches the stored hash (``False`` if none)."""
        return bool(
            self.password_hash
            and isinstance(raw, str)
            and check_password_hash(self.password_hash, raw)
        )

    @validates("email")
    def _validate_email(self, key: str, value: str) -> str:
        email = _required(value, "Email").lower()
        if EMAIL_PATTERN.match(email) is None:
            raise ValueError("Please provide a valid email address.")
        return email

    @validates("name", "username")
    def _validate_text(self, key: str, value: str) -> str:
        return _required(value, key.capitalize())
