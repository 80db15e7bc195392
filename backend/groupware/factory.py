"""Application factory wiring Flask extensions, services and CLI commands."""

from __future__ import annotations

from flask import Flask

from groupware.core.config import BaseConfig, get_config
from groupware.core.logger import configure_logging, init_app as init_logging


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    instance_relative_config: bool = True,
    instance_config_filename: str = "config.py",
) -> Flask:
    """Build and configure the Flask application."""

    app = Flask(__name__, instance_relative_config=instance_relative_config)

    app.config.from_object(get_config() if config is None else config)
    if instance_relative_config and instance_config_filename:
        app.config.from_pyfile(instance_config_filename, silent=True)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    from groupware.core import extensions

    extensions.init_app(app)

    init_logging(app)

    from groupware.services.refresh_tokens.wiring import (
        EXTENSION_KEY,
        build_refresh_token_service,
    )

    app.extensions[EXTENSION_KEY] = build_refresh_token_service(app.config)
    app.logger.info(
        "refresh_token.service_ready",
        extra={"backend": app.config.get("REFRESH_TOKEN_BACKEND")},
    )

    from groupware import cli as app_cli

    app_cli.init_app(app)

    return app
