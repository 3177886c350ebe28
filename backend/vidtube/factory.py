"""Application factory wiring Flask extensions and blueprints."""

from __future__ import annotations

from flask import Flask

from vidtube.core.config import BaseConfig, get_config
from vidtube.core.logger import configure_logging
from vidtube.core.logger import init_app as init_logging


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    instance_relative_config: bool = True,
    instance_config_filename: str = "config.py",
) -> Flask:
    """Build and configure the Flask application.

    :param config: Config object or import path; ``APP_ENV`` decides when omitted.
    :param instance_relative_config: Look for overrides in the instance folder.
    :param instance_config_filename: Override file inside the instance folder.
    :returns: Configured application.
    """

    app = Flask(__name__, instance_relative_config=instance_relative_config)

    app.config.from_object(get_config() if config is None else config)
    if instance_relative_config and instance_config_filename:
        app.config.from_pyfile(instance_config_filename, silent=True)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    from vidtube.core import proxy

    proxy.init_app(app)

    from vidtube.core import extensions

    extensions.init_app(app)

    init_logging(app)

    from vidtube.core import cors

    cors.init_app(app)

    from vidtube.core import limits

    limits.init_app(app)

    from vidtube.api import init_app as init_api

    init_api(app)

    from vidtube.core import errors

    errors.init_app(app)

    return app
