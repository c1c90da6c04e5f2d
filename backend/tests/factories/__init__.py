"""Factory Boy base wired to the transactional test session."""

from __future__ import annotations

import factory


class SQLAlchemySession:
    """Hold the session handed over by the ``session`` fixture."""

    _session = None

    @classmethod
    def set(cls, session):
        cls._session = session

    @classmethod
    def get(cls):
        """Return the registered session.

        Raises
        ------
        RuntimeError
            If a factory runs in a test that did not request ``session``.
        """
        if cls._session is None:
            raise RuntimeError("Factories session not set. Did you pass the 'session' fixture?")
        return cls._session


class BaseFactory(factory.alchemy.SQLAlchemyModelFactory):
    """Flush-only persistence so each test can still roll everything back."""

    class Meta:
        abstract = True
        # Callable so the lookup happens per instance, after the fixture ran.
        sqlalchemy_session_factory = SQLAlchemySession.get
        sqlalchemy_session_persistence = "flush"
