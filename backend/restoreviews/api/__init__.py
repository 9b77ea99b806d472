"""HTTP surface: versioned blueprints mounted under ``API_BASE_PREFIX``."""

from __future__ import annotations

from collections.abc import Iterable

from flask import Blueprint, Flask


def mount(app: Flask, prefix: str, registry: Iterable[tuple[Blueprint, str]]) -> None:
    """Register each ``(blueprint, relative_prefix)`` pair below ``prefix``.

    ``mount(app, "/api/v1", [(auth_bp, "/auth")])`` serves ``auth_bp`` at
    ``/api/v1/auth``; an empty relative prefix mounts at ``prefix`` itself.
    """
    base = "/" + prefix.strip("/")
    for blueprint, relative in registry:
        tail = relative.strip("/")
        app.register_blueprint(blueprint, url_prefix=f"{base}/{tail}" if tail else base)


def init_app(app: Flask) -> None:
    from restoreviews.api.v1 import API_VERSION, REGISTRY

    base = app.config.get("API_BASE_PREFIX", "/api").rstrip("/")
    mount(app, f"{base}/{API_VERSION}", REGISTRY)


__all__ = ["init_app", "mount"]
