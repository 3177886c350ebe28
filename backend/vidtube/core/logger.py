"""JSON logging for the accounts API.

Every record is stamped with the id of the request that produced it. Context
handed to a logger through ``extra=`` becomes top-level keys of the JSON line,
except keys that name credentials (tokens, passwords, secrets, cookies): those
are dropped so a careless call site cannot leak them into the log stream.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from flask import Flask, has_request_context, request

REQUEST_ID_HEADER = "X-Request-ID"
CORRELATION_HEADERS = ("X-Request-ID", "X-Correlation-ID")
REQUEST_ID_ENVIRON_KEY = "vidtube.request_id"
MAX_REQUEST_ID_LENGTH = 128

SENSITIVE_MARKERS = ("token", "password", "secret", "authorization", "cookie")

# Attributes every LogRecord carries; anything else arrived through ``extra=``.
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime", "request_id"}


def is_sensitive_key(key: str) -> bool:
    lowered = key.lower()
    return any(marker in lowered for marker in SENSITIVE_MARKERS)


class JSONFormatter(logging.Formatter):
    """Render log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, timezone.utc).isoformat(
                timespec="milliseconds"
            ),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
        }
        for key, value in vars(record).items():
            if key in _RECORD_ATTRS or key.startswith("_") or is_sensitive_key(key):
                continue
            payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class RequestIdFilter(logging.Filter):
    """Stamp ``request_id`` on records emitted while a request is being served."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = ensure_request_id() if has_request_context() else None
        return True


def _incoming_request_id() -> str | None:
    for header in CORRELATION_HEADERS:
        value = request.headers.get(header, "").strip()
        if value:
            return value[:MAX_REQUEST_ID_LENGTH]
    return None


def ensure_request_id() -> str:
    """
    Return the current request id, adopting the caller's header or minting one.

    The id lives in the WSGI environ, so it belongs to exactly one request even
    when an application context outlives several of them. Outside a request a
    fresh id is returned each call.
    """
    if not has_request_context():
        return str(uuid4())
    environ = request.environ
    if REQUEST_ID_ENVIRON_KEY not in environ:
        environ[REQUEST_ID_ENVIRON_KEY] = _incoming_request_id() or str(uuid4())
    return environ[REQUEST_ID_ENVIRON_KEY]


def configure_logging(level: str | int = "INFO") -> None:
    """Send the root logger to stdout as JSON at ``level``."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())
    handler.addFilter(RequestIdFilter())
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level.upper() if isinstance(level, str) else level)


def init_app(app: Flask) -> None:
    """Seed a request id per request and echo it in ``X-Request-ID``."""
    app.logger.addFilter(RequestIdFilter())

    @app.before_request
    def _seed_request_id() -> None:
        ensure_request_id()

    @app.after_request
    def _inject_response_header(response):
        response.headers[REQUEST_ID_HEADER] = ensure_request_id()
        return response


__all__ = ["configure_logging", "init_app", "ensure_request_id", "is_sensitive_key"]
