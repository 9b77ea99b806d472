"""Application factory."""

from __future__ import annotations

from flask import Flask

from restoreviews.core.config import BaseConfig, get_config
from restoreviews.core.logger import configure_logging


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    instance_relative_config: bool = True,
    instance_config_filename: str = "config.py",
) -> Flask:
    """
    Build the restaurant-review API.

    :param config: Settings class/object, an environment name
        (``"testing"``...), or ``None`` to follow ``$APP_ENV``.
    :param instance_relative_config: Look for overrides in the instance folder.
    :param instance_config_filename: Override file inside the instance folder.
    :returns: Configured application.
    :rtype: flask.Flask
    :raises ConfigurationError: When ``JWT_SECRET_KEY`` is missing or the token
        settings are unusable. Nothing is registered in that case.
    """
    from restoreviews import cli
    from restoreviews.api import init_app as init_api
    from restoreviews.core import cors, errors, extensions, logger, proxy, security

    app = Flask(__name__, instance_relative_config=instance_relative_config)
    if config is None or isinstance(config, str):
        config = get_config(config)
    app.config.from_object(config)
    if instance_relative_config and instance_config_filename:
        app.config.from_pyfile(instance_config_filename, silent=True)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    # The signing key is read here and nowhere else; failing it aborts the boot.
    security.init_app(app)

    for init in (
        proxy.init_app,
        extensions.init_app,
        logger.init_app,
        cors.init_app,
        init_api,
        errors.init_app,
        cli.init_app,
    ):
        init(app)

    app.logger.info("app.ready", extra={"endpoint": app.config.get("API_BASE_PREFIX")})
    return app
