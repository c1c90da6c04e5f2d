"""Column mixins shared by the models."""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import DateTime, Integer
from sqlalchemy.orm import Mapped, mapped_column


def utcnow() -> datetime:
    """Return the current UTC time with microsecond precision."""
    return datetime.now(UTC)


class CreatedAtMixin:
    """Provide a ``created_at`` column filled on the application side.

    The value is produced in Python rather than by ``func.now()`` so that
    rows written within the same second still order correctly on backends
    whose server clock has second resolution (SQLite).
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        index=True,
    )


class TimestampMixin(CreatedAtMixin):
    """Add an ``updated_at`` column refreshed on every ORM update."""

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )


class PKMixin:
    """Expose an integer surrogate primary key column named ``id``."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True)


class ReprMixin:
    """``<Post id=3>`` style representation."""

    def __repr__(self) -> str:
        cls = self.__class__.__name__
        key = getattr(self, "id", None)
        return f"<{cls} id={key}>"
