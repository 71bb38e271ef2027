"""
Flask application factory wiring configuration, logging and form rendering.

Usage:
    from formbinding.app import create_app
    app = create_app('development')
"""

from typing import Any, Optional

import structlog
from flask import Flask

from config.logging import configure_application_logging
from config.settings import BaseConfig, get_config

from .flask_ext import FormRendering

logger = structlog.get_logger(__name__)


def create_app(
    config_name: Optional[str] = None,
    config: Optional[BaseConfig] = None,
    **config_overrides: Any
) -> Flask:
    """
    Create a Flask application with form rendering enabled.

    Args:
        config_name: Configuration environment name (development, testing, production)
        config: Configuration instance, takes precedence over ``config_name``
        **config_overrides: Additional configuration overrides

    Returns:
        Configured Flask application
    """
    config = config or get_config(config_name)

    app = Flask(__name__.split('.')[0])
    app.config.from_object(config)
    if config_overrides:
        app.config.update(config_overrides)

    configure_application_logging(config, force=True)
    FormRendering(app)

    logger.info(
        "Flask application created",
        app_name=app.config.get('APP_NAME'),
        debug_mode=app.config.get('DEBUG', False),
        testing_mode=app.config.get('TESTING', False)
    )
    return app
