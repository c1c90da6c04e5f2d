"""``create_app``: configuration, extensions, HTTP surface and CLI."""

from __future__ import annotations

from importlib import import_module

from flask import Flask

from socialapp.core.config import BaseConfig, get_config
from socialapp.core.logger import configure_logging

# Order matters: ProxyFix wraps wsgi_app first, extensions must exist before
# the blueprints that use them, and error handlers go on last.
COMPONENTS = (
    "socialapp.core.proxy",
    "socialapp.core.extensions",
    "socialapp.core.logger",
    "socialapp.core.cors",
    "socialapp.api",
    "socialapp.core.errors",
    "socialapp.cli",
)


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    instance_config_filename: str | None = "config.py",
) -> Flask:
    """Build the application.

    :param config: Config class, object or import path. ``None`` picks the
        class named by ``APP_ENV``.
    :param instance_config_filename: Override file read from the instance
        folder when it exists. ``None`` skips it.
    :raises ValueError: When the access and refresh secrets are equal.
    """

    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(get_config() if config is None else config)
    if instance_config_filename:
        app.config.from_pyfile(instance_config_filename, silent=True)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))
    for dotted in COMPONENTS:
        import_module(dotted).init_app(app)
    return app
