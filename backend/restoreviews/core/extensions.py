"""Database extensions shared by models, repositories and the CLI.

``db`` and ``migrate`` are created unbound at import time and attached to an
application by :func:`init_app`, so models can be declared before any app
exists.
"""

from __future__ import annotations

from flask import Flask
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import MetaData

# Constraint names must be deterministic: the migration scripts and
# ``violates()`` refer to them (``uq_users_email``, ``ck_reviews_rating_range``...).
NAMING_CONVENTION = {
    "pk": "pk_%(table_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
}

db: SQLAlchemy = SQLAlchemy(
    metadata=MetaData(naming_convention=NAMING_CONVENTION),
    session_options={"autoflush": False},
)
# Batch mode lets ALTERs run on SQLite during local development.
migrate = Migrate(render_as_batch=True)


def init_app(app: Flask) -> None:
    """Bind ``db`` and ``migrate`` to ``app`` and register the model metadata."""
    db.init_app(app)

    from restoreviews import models  # noqa: F401  (populates db.metadata)

    migrate.init_app(app, db)


__all__ = ["NAMING_CONVENTION", "db", "init_app", "migrate"]
