"""factory_boy bases bound to the per-test database session."""

from __future__ import annotations

import factory


class SQLAlchemySession:
    """Holder for the session the autouse fixture installs before each test."""

    _session = None

    @classmethod
    def set(cls, session):
        cls._session = session

    @classmethod
    def get(cls):
        if cls._session is None:
            raise RuntimeError("No factory session installed; request the 'session' fixture.")
        return cls._session


class BaseFactory(factory.alchemy.SQLAlchemyModelFactory):
    """
    Shared factory options.

    ``commit`` only releases the per-test SAVEPOINT, so created rows stay
    visible to request handlers and vanish at teardown.
    """

    class Meta:
        abstract = True
        sqlalchemy_session_factory = SQLAlchemySession.get
        sqlalchemy_session_persistence = "commit"
