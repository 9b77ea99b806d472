"""Liveness/readiness probe."""

from __future__ import annotations

from flask import Blueprint, current_app
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from restoreviews.api.deps import json_response, timing
from restoreviews.core.extensions import db

bp = Blueprint("health", __name__)


def _database_ok() -> bool:
    try:
        db.session.execute(text("SELECT 1"))
    except SQLAlchemyError:  # pragma: no cover - depends on DB backend
        current_app.logger.exception("health.db_unreachable")
        return False
    return True


@bp.get("/health")
@timing
def healthcheck():
    """Report ``{"status", "db", "version"}``; always ``200`` so probes can read it."""
    return json_response(
        {
            "status": "ok",
            "db": "ok" if _database_ok() else "fail",
            "version": current_app.config.get("APP_VERSION", "dev"),
        }
    )
