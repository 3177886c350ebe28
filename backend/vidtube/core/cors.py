"""CORS configuration helper for API resources."""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS


def _split(raw: str | None) -> list[str]:
    return [item.strip() for item in (raw or "").split(",") if item.strip()]


def init_app(app: Flask) -> None:
    """Configure CORS for API endpoints based on application config.

    Parameters
    ----------
    app: flask.Flask
        Application whose ``CORS_ORIGINS``, ``CORS_METHODS``,
        ``CORS_ALLOW_HEADERS`` and ``CORS_MAX_AGE`` settings are consulted.
        When ``CORS_ORIGINS`` is blank or ``"*"`` the policy allows any origin
        but disables credential support, which also stops browsers from
        sending the token cookies cross-origin.
    """
    origins = _split(app.config.get("CORS_ORIGINS", ""))
    wildcard = len(origins) == 0 or origins == ["*"]

    CORS(
        app,
        resources={r"/api/*": {"origins": "*" if wildcard else origins}},
        methods=_split(app.config.get("CORS_METHODS")) or None,
        allow_headers=_split(app.config.get("CORS_ALLOW_HEADERS")) or "*",
        supports_credentials=not wildcard,
        max_age=app.config.get("CORS_MAX_AGE", 600),
    )
