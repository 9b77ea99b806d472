"""WSGI proxy middleware configuration helper."""

from __future__ import annotations

from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix


def init_app(app: Flask) -> None:
    """Trust one hop of ``X-Forwarded-*`` headers when ``USE_PROXYFIX`` is set.

    Deployments sit behind a single reverse proxy in front of gunicorn; the
    flag is off in tests so the client address stays the test client's.
    """
    if app.config.get("USE_PROXYFIX", True):
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)
