"""
Units of work over the Flask-SQLAlchemy scoped session.
"""

from __future__ import annotations

from sqlalchemy import event
from sqlalchemy.orm import Session, scoped_session

from socialapp.core.extensions import db
from socialapp.repositories import PostRepository, UserRepository
from socialapp.uow.base import UnitOfWork


class _SessionUnitOfWork(UnitOfWork):
    """Bind both repositories to ``db.session``."""

    def __init__(self) -> None:
        self.session = db.session
        self.users = UserRepository(session=self.session)
        self.posts = PostRepository(session=self.session)

    def rollback(self) -> None:
        self.session.rollback()


class SQLAlchemyUnitOfWork(_SessionUnitOfWork):
    """Commit on a clean exit; roll back on an exception or a failed commit."""

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is not None:
            self.rollback()
            return
        try:
            self.commit()
        except Exception:
            self.rollback()
            raise

    def commit(self) -> None:
        self.session.commit()


class SQLAlchemyReadOnlyUnitOfWork(_SessionUnitOfWork):
    """
    Reads only: any flush carrying pending changes raises ``RuntimeError``.

    The transaction is left open on a clean exit so instances loaded inside
    the block can still be serialized by the caller.
    """

    def __init__(self) -> None:
        super().__init__()
        self._target: Session | None = None

    def __enter__(self) -> SQLAlchemyReadOnlyUnitOfWork:
        # listening on the scoped_session would hook every session it creates
        session = self.session
        self._target = session() if isinstance(session, scoped_session) else session
        event.listen(self._target, "before_flush", _refuse_writes)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        target, self._target = self._target, None
        if target is not None:
            event.remove(target, "before_flush", _refuse_writes)
        if exc_type is not None:
            self.rollback()

    def commit(self) -> None:
        raise RuntimeError("Read-only UnitOfWork does not allow commit().")


def _refuse_writes(session: Session, flush_context, instances) -> None:
    if session.new or session.dirty or session.deleted:
        raise RuntimeError(
            "Read-only UnitOfWork: ORM flush blocked with pending inserts, updates or deletes."
        )
