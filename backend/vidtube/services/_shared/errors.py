"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic**: they never import Flask. Each one
carries the HTTP status it maps to so ``vidtube/core/errors.py`` can render
the error envelope without a translation table.
"""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    Parameters
    ----------
    exc : IntegrityError
        The exception raised by SQLAlchemy during flush/commit.
    constraint_name : str
        Constraint name (e.g. ``"uq_users_email"``). SQLite reports the
        column instead (``"users.email"``), so callers may pass either.

    Returns
    -------
    bool
        True if the driver message mentions the given name.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    return constraint_name.lower() in message


# --------------------------------------------------------------------------- #
# Base type
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    :param message: Client-safe summary.
    :type message: str
    :param details: Optional list of detail strings (e.g. per-field reasons).
    :type details: Iterable[str] | None
    """

    status_code: int = 400
    code: str = "bad_request"
    default_message: str = "Bad request"

    def __init__(self, message: str | None = None, details: Iterable[str] | None = None) -> None:
        self.message = message or self.default_message
        self.details: list[str] = list(details or [])
        super().__init__(self.message)

    @property
    def kind(self) -> str:
        return type(self).__name__


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


class ValidationError(ServiceError):
    """Input failed a business validation rule."""

    status_code = 400
    code = "validation_error"
    default_message = "Validation failed"


class AuthenticationError(ServiceError):
    """Credentials or tokens were missing or rejected."""

    status_code = 401
    code = "unauthorized"
    default_message = "Unauthorized request"


class InvalidTokenError(AuthenticationError):
    """A token failed signature, expiry, type or stored-value checks."""

    default_message = "Invalid token"


class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    status_code = 404
    code = "not_found"

    def __init__(self, entity: str, key: str | int) -> None:
        self.entity = entity
        self.key = key
        super().__init__(f"{entity} not found: {key}")


class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    status_code = 409
    code = "conflict"

    def __init__(self, entity: str, detail: str) -> None:
        self.entity = entity
        self.detail = detail
        super().__init__(f"Conflict on {entity}: {detail}")


class DependencyError(ServiceError):
    """An external collaborator (e.g. the media host) did not deliver."""

    status_code = 500
    code = "dependency_failed"
    default_message = "Upstream dependency failed"


class TokenPersistenceError(ServiceError):
    """The issued refresh token could not be stored."""

    status_code = 500
    code = "token_persistence_failed"
    default_message = "Something went wrong while generating tokens"
