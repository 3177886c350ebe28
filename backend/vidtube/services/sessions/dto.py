# vidtube/services/sessions/dto.py
from __future__ import annotations

from dataclasses import dataclass

from vidtube.services.accounts.dto import AccountOut

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class RegisterIn:
    """
    Input DTO for registration.

    :param username: Desired handle (any case).
    :type username: str
    :param email: Email address.
    :type email: str
    :param full_name: Display name.
    :type full_name: str
    :param password: Raw password (hashed by the service).
    :type password: str
    :param avatar_path: Local temp path of the avatar upload (required).
    :type avatar_path: str | None
    :param cover_image_path: Local temp path of the cover upload (optional).
    :type cover_image_path: str | None
    """

    username: str
    email: str
    full_name: str
    password: str
    avatar_path: str | None = None
    cover_image_path: str | None = None


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    :param username: Handle (matched case-insensitively).
    :type username: str
    :param password: Raw password (to be verified).
    :type password: str
    """

    username: str
    password: str


@dataclass(frozen=True, slots=True)
class ChangePasswordIn:
    """
    Input DTO for password change.

    :param account_id: Authenticated account.
    :type account_id: int
    :param old_password: Current password, verified before the change.
    :type old_password: str
    :param new_password: Replacement password.
    :type new_password: str
    """

    account_id: int
    old_password: str
    new_password: str


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class LoginOut:
    """
    Successful login: sanitized account plus the token pair.
    """

    account: AccountOut
    access_token: str
    refresh_token: str
