"""Repository base class and offset pagination.

Repositories only read and stage rows. They flush to obtain primary keys
but never commit or roll back; the unit of work owns the transaction.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from sqlalchemy import Select, exists, select
from sqlalchemy.orm import Session

from socialapp.core.extensions import db

M = TypeVar("M")


@dataclass(slots=True, frozen=True)
class Pagination:
    """1-based ``page`` of ``limit`` rows; both already validated as ``>= 1``."""

    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def paginate_select(session: Session, stmt: Select[Any], pagination: Pagination) -> list[Any]:
    """Run an ordered ``stmt`` for one page.

    ``unique()`` collapses duplicate parents produced by joined eager loads.
    """
    window = stmt.offset(pagination.offset).limit(pagination.limit)
    return list(session.scalars(window).unique())


class BaseRepository(Generic[M]):
    """
    Primary-key access for one mapped class.

    Subclasses set ``model`` and may override :meth:`_default_eagerload` to
    attach loader options to :meth:`get`.
    """

    model: type[M]

    def __init__(self, session: Session | None = None) -> None:
        self._session = session

    @property
    def session(self) -> Session:
        """The injected session, else the Flask-scoped ``db.session``."""
        return self._session if self._session is not None else db.session

    def _default_eagerload(self, stmt: Select[Any]) -> Select[Any]:
        return stmt

    def add(self, instance: M) -> M:
        """Stage ``instance`` and flush so its ``id`` is assigned."""
        self.session.add(instance)
        self.flush()
        return instance

    def get(self, entity_id: int, *, refresh: bool = False) -> M | None:
        """
        Load by primary key.

        :param refresh: Reload attributes of an instance already in the
            identity map, e.g. after adding a comment to a loaded post.
        """
        stmt = self._default_eagerload(select(self.model).where(self.model.id == entity_id))
        if refresh:
            stmt = stmt.execution_options(populate_existing=True)
        return self.session.scalars(stmt).unique().first()

    def exists(self, entity_id: int) -> bool:
        return bool(self.session.scalar(select(exists().where(self.model.id == entity_id))))

    def flush(self) -> None:
        self.session.flush()
