"""Shared fixtures.

One in-memory SQLite database per run. Every test gets a session bound to
an outer transaction that is rolled back afterwards; commits issued by the
code under test only release a SAVEPOINT.
"""

from __future__ import annotations

import pytest
from sqlalchemy import event
from sqlalchemy.orm import scoped_session, sessionmaker

from socialapp.core.config import TestingConfig
from socialapp.core.extensions import db as _db
from socialapp.core.extensions import get_object_storage, get_token_service
from socialapp.factory import create_app


class InMemoryConfig(TestingConfig):
    # ignore TEST_DATABASE_URL from the developer environment
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"


def _enable_sqlite_savepoints(engine) -> None:
    """Let pysqlite emit BEGIN itself so SAVEPOINTs nest inside it."""
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine, "connect")
    def _disable_pysqlite_transactions(dbapi_connection, connection_record):  # pragma: no cover
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _emit_begin(conn):  # pragma: no cover
        conn.exec_driver_sql("BEGIN")


@pytest.fixture(scope="session")
def app():
    """The application under test, built once per run."""
    app = create_app(InMemoryConfig, instance_config_filename=None)
    app.logger.setLevel("WARNING")
    return app


@pytest.fixture(scope="session")
def db(app):
    """Schema created once; the app context stays pushed for the whole run."""
    with app.app_context():
        _enable_sqlite_savepoints(_db.engine)
        _db.create_all()
        yield _db
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope="session")
def connection(db):
    """Keep a dedicated connection open for the whole session."""
    conn = db.engine.connect()
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture(scope="function")
def session(db, connection):
    """Provide a SQLAlchemy session joined to an outer transaction.

    Yields
    ------
    sqlalchemy.orm.scoping.scoped_session
        Scoped session bound to the shared connection. Application commits
        only release a SAVEPOINT; the outer transaction is rolled back after
        each test.
    """
    outer = connection.begin()
    factory = sessionmaker(
        bind=connection,
        autoflush=False,
        join_transaction_mode="create_savepoint",
    )
    scoped = scoped_session(factory)

    # Monkey-patch db.session so app code uses this scoped session
    original_session = db.session
    db.session = scoped

    try:
        yield scoped
    finally:
        scoped.remove()
        db.session = original_session
        outer.rollback()


@pytest.fixture()
def client(app, session):
    """Flask test client sharing the transactional session."""
    return app.test_client()


@pytest.fixture()
def tokens(app):
    """Token service configured from the testing secrets."""
    return get_token_service()


@pytest.fixture()
def storage(app):
    """In-memory object storage used by the app under test."""
    return get_object_storage()


@pytest.fixture(scope="session")
def faker():
    """Seeded Faker so generated names and emails repeat between runs."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


@pytest.fixture(autouse=True)
def _factories_session(session):
    """Wire Factory Boy's session helper to the transactional session fixture."""
    from tests.factories import SQLAlchemySession

    SQLAlchemySession.set(session)
    yield
    SQLAlchemySession.set(None)


@pytest.fixture()
def user(session):
    """Committed user, visible to every request made within the test."""
    from tests.factories.user import UserFactory

    account = UserFactory(name="Alex Martinez", email="alex.martinez@example.com", username="alexm")
    session.commit()
    session.refresh(account)
    return account


@pytest.fixture()
def access_token(tokens, user):
    """Valid access token for :func:`user`."""
    return tokens.issue_access_token(user.id)
