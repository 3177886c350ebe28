"""Application settings with environment-based simple classes."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from datetime import timedelta
from typing import Final

from dotenv import load_dotenv

# Public selector env var (keep neutral name to avoid collisions)
ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'

_DURATION_RE: Final = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$", re.IGNORECASE)
_DURATION_UNITS: Final[Mapping[str, str]] = {
    "": "seconds",
    "s": "seconds",
    "m": "minutes",
    "h": "hours",
    "d": "days",
}

# Load .env in development (no-op when the file is missing)
load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Parse a boolean flag from an environment variable.

    Parameters
    ----------
    name: str
        Environment variable to inspect.
    default: bool, optional
        Value returned when the variable is unset. Defaults to ``False``.

    Returns
    -------
    bool
        ``True`` if the value resembles ``{"1", "true", "yes", "y", "on"}``
        ignoring case; otherwise ``False`` or ``default`` when missing.
    """
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "y", "on"}


def env_int(name: str, default: int) -> int:
    """Parse an integer from an environment variable, falling back to ``default``."""
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    return int(val)


def parse_duration(value: str | int | timedelta) -> timedelta:
    """Convert a token lifetime setting into a :class:`~datetime.timedelta`.

    Accepts plain seconds (``900``/``"900"``) or a number with a unit suffix
    (``"15m"``, ``"12h"``, ``"10d"``).

    :param value: Raw configuration value.
    :type value: str | int | timedelta
    :returns: Parsed duration.
    :rtype: timedelta
    :raises ValueError: If the value cannot be parsed.
    """
    if isinstance(value, timedelta):
        return value
    if isinstance(value, int):
        return timedelta(seconds=value)
    match = _DURATION_RE.match(str(value))
    if match is None:
        raise ValueError(f"Invalid duration: {value!r}")
    amount, unit = match.groups()
    return timedelta(**{_DURATION_UNITS[unit.lower()]: int(amount)})


class BaseConfig:
    """Base configuration shared across environments.

    Attributes
    ----------
    API_BASE_PREFIX: str
        Root path for registering API blueprints.
    SECRET_KEY: str
        Flask secret. Defaults to a development placeholder.
    ACCESS_TOKEN_SECRET: str
        HMAC key for access tokens.
    ACCESS_TOKEN_EXPIRY: str
        Access token lifetime (``"15m"`` style or seconds).
    REFRESH_TOKEN_SECRET: str
        HMAC key for refresh tokens. Must differ from the access secret.
    REFRESH_TOKEN_EXPIRY: str
        Refresh token lifetime.
    JWT_ALGORITHM: str
        Signing algorithm passed to PyJWT.
    PASSWORD_HASH_METHOD: str
        ``werkzeug.security`` hashing method.
    AUTH_COOKIE_SECURE: bool
        Emit token cookies with the ``Secure`` flag.
    AUTH_COOKIE_SAMESITE: str | None
        ``SameSite`` attribute for token cookies.
    JSON_BODY_LIMIT: int
        Maximum size in bytes of ``application/json`` bodies.
    FORM_BODY_LIMIT: int
        Maximum size in bytes of form-encoded bodies.
    MAX_CONTENT_LENGTH: int
        Hard cap enforced by Flask (covers multipart uploads).
    UPLOAD_TMP_DIR: str
        Directory where incoming files wait until the media host has them.
    SQLALCHEMY_DATABASE_URI: str
        Database connection string consumed by SQLAlchemy.
    LOG_LEVEL: str
        Root logging verbosity (``INFO`` by default).
    CORS_ORIGINS: str
        Comma-separated list of allowed origins for CORS.
    CORS_METHODS: str
        Comma-separated list of methods allowed cross-origin.
    CORS_ALLOW_HEADERS: str
        Comma-separated list of request headers allowed cross-origin.
    MEDIA_BUCKET: str | None
        Bucket on the S3-compatible media host. Uploads are disabled when unset.

    Notes
    -----
    Values are primarily sourced from environment variables, enabling
    configuration without code changes.
    """

    API_BASE_PREFIX = "/api"

    # Secrets
    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    ACCESS_TOKEN_SECRET = os.getenv("ACCESS_TOKEN_SECRET", "CHANGE_ME_ACCESS")
    ACCESS_TOKEN_EXPIRY = os.getenv("ACCESS_TOKEN_EXPIRY", "15m")
    REFRESH_TOKEN_SECRET = os.getenv("REFRESH_TOKEN_SECRET", "CHANGE_ME_REFRESH")
    REFRESH_TOKEN_EXPIRY = os.getenv("REFRESH_TOKEN_EXPIRY", "10d")
    JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
    PASSWORD_HASH_METHOD = os.getenv("PASSWORD_HASH_METHOD", "scrypt")

    # Session cookies
    AUTH_COOKIE_SECURE = env_bool("AUTH_COOKIE_SECURE", True)
    AUTH_COOKIE_SAMESITE = os.getenv("AUTH_COOKIE_SAMESITE") or None

    # Request bodies & uploads
    JSON_BODY_LIMIT = env_int("JSON_BODY_LIMIT", 20 * 1024)
    FORM_BODY_LIMIT = env_int("FORM_BODY_LIMIT", 10 * 1024)
    MAX_CONTENT_LENGTH = env_int("MAX_CONTENT_LENGTH", 16 * 1024 * 1024)
    UPLOAD_TMP_DIR = os.getenv("UPLOAD_TMP_DIR", "./public/temp")

    # DB
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./dev.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)

    # Flask & JSON
    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False

    # Logging & CORS
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173")
    CORS_METHODS = os.getenv("CORS_METHODS", "GET,POST,PUT,PATCH,DELETE")
    CORS_ALLOW_HEADERS = os.getenv("CORS_ALLOW_HEADERS", "Content-Type,Authorization")

    # Media host (S3-compatible)
    MEDIA_BUCKET = os.getenv("MEDIA_BUCKET")
    MEDIA_ENDPOINT_URL = os.getenv("MEDIA_ENDPOINT_URL")
    MEDIA_REGION = os.getenv("MEDIA_REGION", "auto")
    MEDIA_ACCESS_KEY_ID = os.getenv("MEDIA_ACCESS_KEY_ID")
    MEDIA_SECRET_ACCESS_KEY = os.getenv("MEDIA_SECRET_ACCESS_KEY")
    MEDIA_PUBLIC_BASE_URL = os.getenv("MEDIA_PUBLIC_BASE_URL")

    # Flask built-ins
    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Configuration tailored for local development.

    Notes
    -----
    Enables debug mode by default and sends token cookies over plain HTTP so
    the flow works against ``http://localhost``.
    """

    DEBUG = env_bool("FLASK_DEBUG", True)
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)
    AUTH_COOKIE_SECURE = env_bool("AUTH_COOKIE_SECURE", False)
    CORS_MAX_AGE = 600  # 10 minutes


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Forces ``TESTING`` mode and disables debug logs.
    - Uses an in-memory SQLite database unless ``TEST_DATABASE_URL`` is set.
    - Uses a cheap password hash so the suite stays fast.
    """

    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)
    PASSWORD_HASH_METHOD = "pbkdf2:sha256:1000"
    ACCESS_TOKEN_SECRET = "testing-access-secret"
    REFRESH_TOKEN_SECRET = "testing-refresh-secret"
    PROPAGATE_EXCEPTIONS = False


class ProductionConfig(BaseConfig):
    """Configuration defaults for production deployments.

    Notes
    -----
    Keeps debug and SQL echoing disabled while relying on WSGI-level log
    configuration for noise control.
    """

    DEBUG = False
    SQLALCHEMY_ECHO = False
    PROPAGATE_EXCEPTIONS = False
    AUTH_COOKIE_SECURE = True


# Map names -> classes (simple, explicit)
CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the configuration class inferred from ``APP_ENV``.

    Returns
    -------
    type[BaseConfig]
        Class to pass to :meth:`flask.Config.from_object`.

    Notes
    -----
    Falls back to :class:`DevelopmentConfig` when ``APP_ENV`` is unset or
    unknown.
    """
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)
