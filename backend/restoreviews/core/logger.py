"""JSON logging on stdout, correlated per request.

Each record carries ``request_id`` and, once a route guard has verified a
session token, the caller's ``user_id``. Passwords and tokens are never
logged; callers pass identifiers through ``extra=`` instead.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

from flask import Flask, g, has_request_context, request

REQUEST_ID_HEADER = "X-Request-ID"
CORRELATION_HEADERS = (REQUEST_ID_HEADER, "X-Correlation-ID")

# ``extra=`` keys copied onto the JSON line when present on the record.
EXTRA_KEYS = ("user_id", "role", "reason", "path", "endpoint", "elapsed_ms")


class JSONFormatter(logging.Formatter):
    """One JSON object per line: time, level, logger, message plus known extras."""

    def format(self, record: logging.LogRecord) -> str:  # pragma: no cover - formatting logic
        line: dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, UTC).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
        }
        for key in EXTRA_KEYS:
            value = getattr(record, key, None)
            if value is not None:
                line[key] = value
        if record.exc_info:
            line["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(line, default=str)


class RequestContextFilter(logging.Filter):
    """Stamp records with the request id and, when known, the acting account."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not has_request_context():
            record.request_id = None
            return True
        record.request_id = ensure_request_id()
        claims = g.get("claims")
        if claims is not None and getattr(record, "user_id", None) is None:
            record.user_id = claims.subject_id
        return True


def ensure_request_id() -> str:
    """Return the request's correlation id, adopting an inbound header or minting one."""
    if not has_request_context():
        return str(uuid4())
    request_id = g.get("request_id")
    if request_id is None:
        inbound = (request.headers.get(h) for h in CORRELATION_HEADERS)
        request_id = next((value for value in inbound if value), None) or str(uuid4())
        g.request_id = request_id
    return request_id


def configure_logging(level: str | int = "INFO") -> None:
    """Replace root handlers with a single JSON stdout handler at ``level``."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())
    handler.addFilter(RequestContextFilter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    root.setLevel(level if isinstance(level, int) else logging.INFO)


def init_app(app: Flask) -> None:
    """Seed a fresh request id before each request and echo it on the response."""
    app.logger.addFilter(RequestContextFilter())

    @app.before_request
    def _start_request() -> None:  # pragma: no cover - integration glue
        # ``g`` outlives the request when an app context was already pushed.
        g.pop("request_id", None)
        g.pop("claims", None)
        ensure_request_id()

    @app.after_request
    def _echo_request_id(response):  # pragma: no cover - integration glue
        response.headers.setdefault(REQUEST_ID_HEADER, ensure_request_id())
        return response


__all__ = [
    "JSONFormatter",
    "RequestContextFilter",
    "configure_logging",
    "ensure_request_id",
    "init_app",
]
