# vidtube/services/sessions/service.py
"""
SessionService
==============

Account sessions: ``Anonymous -> Authenticated`` via register + login,
``Authenticated -> Authenticated`` via refresh and
``Authenticated -> Anonymous`` via logout. Every write to ``password_hash``
goes through the injected :class:`PasswordHasher`.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from vidtube.models.user import User
from vidtube.services._shared.base import BaseService
from vidtube.services._shared.errors import (
    AuthenticationError,
    ConflictError,
    DependencyError,
    InvalidTokenError,
    NotFoundError,
    ValidationError,
    violates,
)
from vidtube.services._shared.ports import MediaUplink, PasswordHasher
from vidtube.services.accounts.dto import AccountOut
from vidtube.services.sessions.dto import ChangePasswordIn, LoginIn, LoginOut, RegisterIn
from vidtube.services.tokens.dto import TokenPairOut, TokenSubject
from vidtube.services.tokens.service import (
    INVALID_ACCESS_TOKEN,
    INVALID_REFRESH_TOKEN,
    TokenService,
)

log = logging.getLogger(__name__)

_DUPLICATE_ACCOUNT = "User with email or username already exists"


class SessionService(BaseService):
    """
    Registration, login, logout, refresh, password change and request
    authentication.
    """

    def __init__(
        self,
        *,
        tokens: TokenService,
        hasher: PasswordHasher,
        uplink: MediaUplink | None = None,
    ) -> None:
        """
        :param tokens: Token lifecycle service.
        :param hasher: Password digest adapter.
        :param uplink: Media host adapter; needed by :meth:`register` only.
        """
        super().__init__()
        self.tokens = tokens
        self.hasher = hasher
        self.uplink = uplink

    # ------------------------------------------------------------------ #
    # Register
    # ------------------------------------------------------------------ #

    def register(self, dto: RegisterIn) -> AccountOut:
        """
        Create an account.

        Duplicates are rejected before anything is uploaded; the unique
        constraints catch races between that check and the insert.

        :param dto: Registration input.
        :returns: Sanitized account.
        :raises ValidationError: Blank field or missing avatar.
        :raises ConflictError: Handle (any case) or email already taken.
        :raises DependencyError: The avatar upload produced no URL.
        """
        self.require_fields(
            username=dto.username,
            email=dto.email,
            password=dto.password,
            full_name=dto.full_name,
        )
        if not dto.avatar_path:
            raise ValidationError("Avatar file is required")

        with self.ro_uow() as uow:
            if uow.users.exists_by_username_or_email(dto.username, dto.email):
                raise ConflictError("User", _DUPLICATE_ACCOUNT)

        if self.uplink is None:
            raise DependencyError("Media uploads are not configured")
        avatar = self.uplink.upload(dto.avatar_path)
        if avatar is None or not avatar.url:
            raise DependencyError("Avatar upload failed")
        cover = self.uplink.upload(dto.cover_image_path) if dto.cover_image_path else None

        try:
            with self.rw_uow() as uow:
                user = uow.users.add(
                    User(
                        username=dto.username,
                        email=dto.email,
                        full_name=dto.full_name,
                        password_hash=self.hasher.hash(dto.password),
                        avatar=avatar.url,
                        cover_image=cover.url if cover else "",
                    )
                )
                account_id = user.id
        except IntegrityError as exc:
            if violates(exc, "users.username") or violates(exc, "uq_users_username"):
                raise ConflictError("User", _DUPLICATE_ACCOUNT) from exc
            if violates(exc, "users.email") or violates(exc, "uq_users_email"):
                raise ConflictError("User", _DUPLICATE_ACCOUNT) from exc
            raise
        except ValueError as exc:
            # model validators reject malformed email/handle
            raise ValidationError(str(exc)) from exc

        log.info("session.registered", extra={"account_id": account_id})
        with self.ro_uow() as uow:
            created = uow.users.get(account_id)
            if created is None:
                raise DependencyError("Something went wrong while registering the user")
            return AccountOut.from_model(created)

    # ------------------------------------------------------------------ #
    # Login / logout
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> LoginOut:
        """
        Verify credentials and issue a token pair.

        :raises ValidationError: Blank handle or password.
        :raises NotFoundError: Unknown handle.
        :raises AuthenticationError: Wrong password.
        """
        self.require_fields(username=dto.username, password=dto.password)
        with self.ro_uow() as uow:
            user = uow.users.get_by_username(dto.username)
            if user is None:
                raise NotFoundError("User", dto.username.strip().lower())
            if not self.hasher.verify(dto.password, user.password_hash):
                log.warning("session.login_rejected", extra={"account_id": user.id})
                raise AuthenticationError("Invalid user credentials")
            subject = TokenSubject.from_model(user)
            account = AccountOut.from_model(user)

        pair = self.tokens.issue_token_pair(subject)
        log.info("session.login", extra={"account_id": account.id})
        return LoginOut(
            account=account,
            access_token=pair.access_token,
            refresh_token=pair.refresh_token,
        )

    def logout(self, account_id: int) -> None:
        """Revoke the stored refresh token. Safe to repeat."""
        self.tokens.revoke(account_id)
        log.info("session.logout", extra={"account_id": account_id})

    # ------------------------------------------------------------------ #
    # Refresh
    # ------------------------------------------------------------------ #

    def refresh(self, token: str | None) -> TokenPairOut:
        """
        Rotate a refresh token into a new pair.

        :param token: Refresh token from the cookie or the request body.
        :raises AuthenticationError: No token supplied.
        :raises InvalidTokenError: Token invalid, already used, or its account is gone.
        """
        if not token:
            raise AuthenticationError("Unauthorized request")

        account_id = self.tokens.refresh_subject(token)
        with self.ro_uow() as uow:
            user = uow.users.get(account_id)
            if user is None:
                raise InvalidTokenError(INVALID_REFRESH_TOKEN)
            subject = TokenSubject.from_model(user)

        pair = self.tokens.rotate(token, subject)
        log.info("session.refresh", extra={"account_id": account_id})
        return pair

    # ------------------------------------------------------------------ #
    # Password
    # ------------------------------------------------------------------ #

    def change_password(self, dto: ChangePasswordIn) -> None:
        """
        Replace the password after checking the old one.

        Existing tokens stay valid.

        :raises ValidationError: Blank new password.
        :raises NotFoundError: Account no longer exists.
        :raises AuthenticationError: Old password does not match.
        """
        if not (dto.new_password or "").strip():
            raise ValidationError("New password is required")

        with self.rw_uow() as uow:
            user = uow.users.get(dto.account_id)
            if user is None:
                raise NotFoundError("User", dto.account_id)
            if not self.hasher.verify(dto.old_password or "", user.password_hash):
                raise AuthenticationError("Invalid old password")
            uow.users.set_password_hash(user.id, self.hasher.hash(dto.new_password))
        log.info("session.password_changed", extra={"account_id": dto.account_id})

    # ------------------------------------------------------------------ #
    # Request authentication
    # ------------------------------------------------------------------ #

    def authenticate(self, token: str | None) -> AccountOut:
        """
        Resolve the account behind an access token.

        :raises AuthenticationError: Missing token.
        :raises InvalidTokenError: Bad signature, expired, or account gone.
        """
        if not token:
            raise AuthenticationError("Unauthorized request")
        claims = self.tokens.verify_access_token(token)
        with self.ro_uow() as uow:
            user = uow.users.get(claims.account_id)
            if user is None:
                raise InvalidTokenError(INVALID_ACCESS_TOKEN)
            return AccountOut.from_model(user)
