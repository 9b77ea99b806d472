"""Settings classes selected by the ``APP_ENV`` environment variable.

A ``.env`` file in the working directory is loaded first (when present), so
local runs can keep ``JWT_SECRET_KEY`` and ``DATABASE_URL`` out of the shell.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Final

from dotenv import load_dotenv

ENV_VAR: Final[str] = "APP_ENV"  # development | testing | production
DEFAULT_ENV: Final[str] = "development"

_TRUTHY = frozenset({"1", "true", "yes", "y", "on"})

load_dotenv()


class ConfigurationError(RuntimeError):
    """A mandatory setting is missing or unusable; the process must not serve."""


def env_bool(name: str, default: bool = False) -> bool:
    """Read a flag such as ``USE_PROXYFIX=yes``. Unset means ``default``."""
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def env_int(name: str, default: int) -> int:
    """
    Read an integer setting.

    :param name: Environment variable name.
    :type name: str
    :param default: Value used when the variable is unset or blank.
    :type default: int
    :returns: Parsed value.
    :rtype: int
    :raises ConfigurationError: If the variable is set but not an integer.
    """
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc


class BaseConfig:
    """
    Settings shared by every environment.

    Session tokens
    --------------
    ``JWT_SECRET_KEY`` has no default. :func:`restoreviews.factory.create_app`
    builds the token service from it and raises :class:`ConfigurationError`
    when it is absent or blank. Tokens live ``JWT_ACCESS_TOKEN_TTL_MINUTES``
    (20 by default) and are signed with ``JWT_ALGORITHM`` (an HMAC variant).

    Listing
    -------
    ``PAGINATION_DEFAULT_TAKE`` is the page size when a request sends no
    ``take``; ``PAGINATION_MAX_TAKE`` caps whatever it sends.
    """

    API_BASE_PREFIX = "/api"
    APP_VERSION = os.getenv("APP_VERSION", "dev")

    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY")
    JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
    JWT_ACCESS_TOKEN_TTL_MINUTES = env_int("JWT_ACCESS_TOKEN_TTL_MINUTES", 20)

    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./restoreviews.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO")

    PAGINATION_DEFAULT_TAKE = env_int("PAGINATION_DEFAULT_TAKE", 10)
    PAGINATION_MAX_TAKE = env_int("PAGINATION_MAX_TAKE", 100)

    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173")
    USE_PROXYFIX = env_bool("USE_PROXYFIX", True)

    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    DEBUG = env_bool("FLASK_DEBUG", True)
    CORS_MAX_AGE = 600


class TestingConfig(BaseConfig):
    """
    Automated test runs.

    Uses in-memory SQLite unless ``TEST_DATABASE_URL`` is set, and ships a
    throwaway signing key so the suite boots without extra environment.
    """

    TESTING = True
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    SQLALCHEMY_ECHO = False
    JWT_SECRET_KEY = os.getenv("TEST_JWT_SECRET_KEY", "testing-only-signing-key-0123456789abcdef")
    USE_PROXYFIX = False
    PROPAGATE_EXCEPTIONS = True


class ProductionConfig(BaseConfig):
    SQLALCHEMY_ECHO = False


CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config(name: str | None = None) -> type[BaseConfig]:
    """
    Resolve a settings class by name, defaulting to ``$APP_ENV``.

    Unknown or empty names resolve to :class:`DevelopmentConfig`.
    """
    key = (name if name is not None else os.getenv(ENV_VAR, DEFAULT_ENV)).strip().lower()
    return CONFIG_MAP.get(key, DevelopmentConfig)


__all__ = [
    "BaseConfig",
    "CONFIG_MAP",
    "ConfigurationError",
    "DevelopmentConfig",
    "ENV_VAR",
    "ProductionConfig",
    "TestingConfig",
    "env_bool",
    "env_int",
    "get_config",
]
