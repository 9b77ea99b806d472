"""Boot-time wiring of the session token service.

The signing key is read exactly once, here, and handed to the token service
constructor. Everything downstream receives the built service through
``app.extensions`` instead of reading configuration itself.
"""

from __future__ import annotations

from datetime import timedelta
from typing import cast

from flask import Flask, current_app

from restoreviews.core.config import ConfigurationError
from restoreviews.infra.jwt.jwt_token_service import JWTTokenService
from restoreviews.services._shared.ports.token_service import TokenService

EXTENSION_KEY = "token_service"


def build_token_service(config: dict) -> JWTTokenService:
    """Create the token service from a Flask config mapping.

    :param config: Application configuration.
    :type config: dict
    :returns: Ready-to-use token service.
    :rtype: JWTTokenService
    :raises ConfigurationError: When the signing key is absent or the TTL is invalid.
    """
    ttl_minutes = int(config.get("JWT_ACCESS_TOKEN_TTL_MINUTES", 20))
    if ttl_minutes <= 0:
        raise ConfigurationError("JWT_ACCESS_TOKEN_TTL_MINUTES must be positive.")
    return JWTTokenService(
        secret_key=config.get("JWT_SECRET_KEY"),
        algorithm=str(config.get("JWT_ALGORITHM", "HS256")),
        default_ttl=timedelta(minutes=ttl_minutes),
    )


def init_app(app: Flask) -> None:
    """Build the token service and register it on the application."""
    app.extensions[EXTENSION_KEY] = build_token_service(app.config)


def get_token_service() -> TokenService:
    """Return the token service bound to the current application."""
    service = current_app.extensions.get(EXTENSION_KEY)
    if service is None:
        raise ConfigurationError("Token service is not initialized. Call init_app() first.")
    return cast(TokenService, service)


__all__ = ["EXTENSION_KEY", "build_token_service", "get_token_service", "init_app"]
