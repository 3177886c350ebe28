"""Centralized JSON error handling for the API.

Every failure leaving the app has the same envelope::

    {"statusCode": 401, "message": "...", "success": false,
     "errors": [...], "request_id": "..."}
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, jsonify, request
from marshmallow import ValidationError as MarshmallowValidationError
from sqlalchemy.exc import IntegrityError, OperationalError
from werkzeug.exceptions import HTTPException

from vidtube.core.logger import ensure_request_id
from vidtube.services._shared.errors import ServiceError

log = logging.getLogger(__name__)


def _http_status_to_code(status_code: int) -> str:
    """Map common HTTP status codes to canonical, stable error codes."""
    mapping = {
        400: "bad_request",
        401: "unauthorized",
        403: "forbidden",
        404: "not_found",
        405: "method_not_allowed",
        409: "conflict",
        413: "payload_too_large",
        415: "unsupported_media_type",
        422: "unprocessable_entity",
        500: "internal_server_error",
        503: "service_unavailable",
    }
    return mapping.get(status_code, "error")


def _flatten_messages(messages: Any, prefix: str = "") -> list[str]:
    """Flatten marshmallow's nested ``messages`` into ``"field: reason"`` strings."""
    if isinstance(messages, dict):
        flat: list[str] = []
        for key, value in messages.items():
            label = f"{prefix}.{key}" if prefix else str(key)
            flat.extend(_flatten_messages(value, label))
        return flat
    if isinstance(messages, (list, tuple)):
        flat = []
        for item in messages:
            flat.extend(_flatten_messages(item, prefix))
        return flat
    return [f"{prefix}: {messages}" if prefix else str(messages)]


def error_envelope(
    *,
    status: int,
    message: str,
    errors: list[str] | None = None,
    code: str | None = None,
) -> dict[str, Any]:
    """
    Build the failure envelope shared by all handlers.

    :param status: HTTP status code.
    :param message: Human-readable error summary (safe for clients).
    :param errors: Optional list of detail strings.
    :param code: Stable machine-consumable error code; derived from status when omitted.
    :returns: JSON-serializable dictionary.
    :rtype: dict
    """
    return {
        "statusCode": int(status),
        "message": message,
        "success": False,
        "errors": list(errors or []),
        "code": code or _http_status_to_code(int(status)),
        "request_id": ensure_request_id(),
    }


def _error_response(payload: dict[str, Any]) -> tuple[Response, int]:
    return jsonify(payload), payload["statusCode"]


class APIError(Exception):
    """
    Represent a transport-level API error raised directly from views.

    Parameters
    ----------
    message : str
        Human-readable description presented to clients.
    status_code : int, optional
        HTTP status code to return. Defaults to ``400``.
    code : str, optional
        Machine-readable identifier. Defaults to ``"bad_request"``.
    errors : list[str] | None, optional
        Detail strings included in the ``errors`` array.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        code: str = "bad_request",
        errors: list[str] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = int(status_code)
        self.code = code
        self.errors = list(errors or [])

    def to_envelope(self) -> dict[str, Any]:
        return error_envelope(
            status=self.status_code, message=self.message, errors=self.errors, code=self.code
        )


class PayloadTooLarge(APIError):
    """413 when a request body exceeds the configured limit."""

    def __init__(self, message: str = "Request body too large") -> None:
        super().__init__(
            message, status_code=HTTPStatus.REQUEST_ENTITY_TOO_LARGE, code="payload_too_large"
        )


def init_app(app: Flask) -> None:
    """
    Attach JSON error handlers to the Flask app.

    Notes
    -----
    - Domain :class:`ServiceError` subclasses carry their own status.
    - 5xx are logged with ``exc_info``; 4xx as warnings.
    - Raw database messages never reach the client.
    """

    @app.errorhandler(ServiceError)
    def handle_service_error(err: ServiceError):
        payload = error_envelope(
            status=err.status_code, message=err.message, errors=err.details, code=err.code
        )
        if err.status_code >= 500:
            log.error(
                "ServiceError: kind=%s status=%s msg=%s",
                err.kind,
                err.status_code,
                err.message,
                exc_info=err,
            )
        else:
            log.warning(
                "ServiceError: kind=%s status=%s msg=%s", err.kind, err.status_code, err.message
            )
        return _error_response(payload)

    @app.errorhandler(APIError)
    def handle_api_error(err: APIError):
        level = log.error if err.status_code >= 500 else log.warning
        level("APIError: code=%s status=%s msg=%s", err.code, err.status_code, err.message)
        return _error_response(err.to_envelope())

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        error_code = _http_status_to_code(status)
        # Werkzeug may provide HTML-ish description; normalize for clients
        message = (err.description or error_code.replace("_", " ").capitalize()).strip()
        if status == HTTPStatus.NOT_FOUND:
            message = f"Route '{request.path}' not found"
        level = log.error if status >= 500 else log.warning
        level("HTTPException: code=%s status=%s detail=%s", error_code, status, message)
        return _error_response(error_envelope(status=status, message=message, code=error_code))

    @app.errorhandler(MarshmallowValidationError)
    def handle_validation_error(err: MarshmallowValidationError):
        payload = error_envelope(
            status=HTTPStatus.BAD_REQUEST,
            message="Validation failed",
            errors=_flatten_messages(err.messages),
            code="validation_error",
        )
        log.warning("ValidationError: errors=%s", payload["errors"])
        return _error_response(payload)

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        log.error("IntegrityError escaped the service layer", exc_info=True)
        return _error_response(
            error_envelope(status=HTTPStatus.CONFLICT, message="Resource conflict")
        )

    @app.errorhandler(OperationalError)
    def handle_operational_error(err: OperationalError):
        log.error("OperationalError", exc_info=True)
        return _error_response(
            error_envelope(
                status=HTTPStatus.SERVICE_UNAVAILABLE, message="Service temporarily unavailable"
            )
        )

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        # Unexpected server-side error; never leak internal details
        log.error("Unhandled exception", exc_info=True)
        return _error_response(
            error_envelope(status=HTTPStatus.INTERNAL_SERVER_ERROR, message="Unexpected error")
        )
