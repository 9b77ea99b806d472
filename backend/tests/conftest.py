"""Shared fixtures: one app per run, one rolled-back transaction per test.

The schema lives in in-memory SQLite. Every test gets its own outer
transaction and SAVEPOINT on a shared connection; the app, the units of work
and the factories all use the same scoped session.
"""

from __future__ import annotations

import os
from datetime import timedelta

import pytest
from sqlalchemy.orm import scoped_session, sessionmaker

from restoreviews.core.config import TestingConfig
from restoreviews.core.extensions import db as _db
from restoreviews.core.roles import Role
from restoreviews.factory import create_app
from restoreviews.services._shared.ports.token_service import Identity

SIGNING_KEY = "pytest-signing-key-0123456789abcdef0123"


class TestConfig(TestingConfig):
    """Pinned in-memory database and signing key so helper-minted tokens verify."""

    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    JWT_SECRET_KEY = SIGNING_KEY
    LOG_LEVEL = "WARNING"


@pytest.fixture(scope="session")
def app():
    """Create a Flask application configured for testing."""
    # A developer .env must not point the suite at a real database.
    os.environ.pop("DATABASE_URL", None)
    app = create_app(TestConfig)
    app.logger.setLevel("WARNING")
    return app


@pytest.fixture(scope="session")
def db(app):
    """Create database tables once per test session."""
    with app.app_context():
        _db.create_all()
        yield _db
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope="session")
def connection(db):
    """Keep a dedicated DBAPI connection open for the whole session."""
    conn = db.engine.connect()
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture(scope="function")
def session(db, connection):
    """Provide a SQLAlchemy session wrapped in an outer transaction.

    The session joins the connection with ``create_savepoint``: its own
    ``commit()``/``rollback()`` only release or roll back a SAVEPOINT, and the
    outer transaction is rolled back once the test finishes.
    """
    top_trans = connection.begin()
    nested = connection.begin_nested()

    SessionFactory = sessionmaker(
        bind=connection,
        join_transaction_mode="create_savepoint",
        autoflush=False,
    )
    scoped = scoped_session(SessionFactory)

    # Units of work and repositories read ``db.session``.
    original_session = db.session
    db.session.remove()
    db.session = scoped

    try:
        yield scoped
    finally:
        scoped.remove()
        db.session = original_session
        if nested.is_active:
            nested.rollback()
        top_trans.rollback()


@pytest.fixture()
def client(app, session):
    """Flask test client sharing the transactional session."""
    return app.test_client()


@pytest.fixture()
def token_service(app):
    """The token service the application was booted with."""
    from restoreviews.core.security import get_token_service

    return get_token_service()


@pytest.fixture()
def auth_header(token_service):
    """Return a callable building an ``Authorization`` header for an account.

    ``ttl`` may be negative to mint an already-expired token.
    """

    def _build(user, *, ttl: timedelta | None = None) -> dict[str, str]:
        identity = Identity(subject_id=user.id, username=user.username, role=Role(user.role))
        return {"Authorization": f"Bearer {token_service.issue(identity, ttl)}"}

    return _build


@pytest.fixture(autouse=True)
def _factories_session(session):
    """Point every factory at this test's session."""
    from tests.factories import SQLAlchemySession

    SQLAlchemySession.set(session)
    yield
