"""WSGI proxy middleware configuration helper."""

from __future__ import annotations

from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix


def init_app(app: Flask) -> None:
    """Trust ``X-Forwarded-*`` headers when ``USE_PROXYFIX`` is set.

    The rate limiter keys login attempts on the client address, so behind a
    reverse proxy the forwarded address must be honoured or every caller
    shares one bucket. ``PROXYFIX_HOPS`` sets how many proxies are trusted.
    """
    if not app.config.get("USE_PROXYFIX", True):
        return
    hops = int(app.config.get("PROXYFIX_HOPS", 1))
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=hops, x_proto=hops, x_host=hops)
