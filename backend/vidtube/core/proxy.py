"""WSGI proxy middleware configuration helper."""

from __future__ import annotations

from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix


def init_app(app: Flask) -> None:
    """Wrap the WSGI app with :class:`~werkzeug.middleware.proxy_fix.ProxyFix`.

    :param app: Application sitting behind a reverse proxy.
    :type app: flask.Flask

    ``USE_PROXYFIX`` (default ``True``) toggles the middleware and
    ``PROXY_HOPS`` (default ``1``) sets how many ``X-Forwarded-*`` hops are
    trusted. The secure-cookie flag relies on the forwarded scheme.
    """
    if not app.config.get("USE_PROXYFIX", True):
        return
    hops = int(app.config.get("PROXY_HOPS", 1))
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=hops, x_proto=hops, x_host=hops)
