"""CORS configuration helper for API resources."""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS


def init_app(app: Flask) -> None:
    """Configure CORS for everything mounted below ``API_BASE_PREFIX``.

    When ``CORS_ORIGINS`` is blank or ``"*"`` the policy allows any origin but
    disables credential support. The ``Authorization`` header is always
    allowed so browsers can send bearer tokens.
    """
    raw_origins = app.config.get("CORS_ORIGINS", "")
    origins = [o.strip() for o in raw_origins.split(",") if o.strip()]
    wildcard = len(origins) == 0 or origins == ["*"]
    prefix = app.config.get("API_BASE_PREFIX", "/api").rstrip("/")

    CORS(
        app,
        resources={rf"{prefix}/*": {"origins": "*" if wildcard else origins}},
        supports_credentials=not wildcard,
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
        max_age=app.config.get("CORS_MAX_AGE", 600),
    )
