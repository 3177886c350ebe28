"""Global Flask extension instances and initialization helpers."""

from __future__ import annotations

from typing import Any

from flask import Flask, current_app
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import MetaData

# Global naming convention for all constraints
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)

# Global singletons (import-safe)
db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)
migrate = Migrate(render_as_batch=True)

MEDIA_UPLINK_KEY = "media_uplink"


def init_app(app: Flask) -> None:
    """Initialize SQLAlchemy, migrations, and the media host client.

    Parameters
    ----------
    app: flask.Flask
        Application used to bind extension instances. This call imports the
        :mod:`vidtube.models` package to ensure SQLAlchemy metadata is ready
        for migrations.

    Notes
    -----
    The media uplink is only built when ``MEDIA_BUCKET`` is configured. Tests
    and local setups without a bucket install their own uplink under
    ``app.extensions["media_uplink"]``.
    """
    db.init_app(app)

    # Ensure models are imported so Alembic sees metadata
    from vidtube import models as _models  # noqa: F401

    migrate.init_app(app, db)

    if not app.config.get("MEDIA_BUCKET"):
        app.extensions.pop(MEDIA_UPLINK_KEY, None)
        return

    from vidtube.infra.storage.s3_media_uplink import S3MediaUplink

    app.extensions[MEDIA_UPLINK_KEY] = S3MediaUplink.from_config(app.config)


def get_media_uplink() -> Any:
    """Return the media uplink registered on the current application."""
    uplink = current_app.extensions.get(MEDIA_UPLINK_KEY)
    if uplink is None:
        raise RuntimeError("Media uplink is not configured. Set MEDIA_BUCKET first.")
    return uplink
