# vidtube/services/accounts/service.py
"""Account maintenance: current account, profile edits, media and views."""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from vidtube.services._shared.base import BaseService
from vidtube.services._shared.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
)
from vidtube.services._shared.ports import MediaUplink
from vidtube.services.accounts.dto import AccountOut, UpdateDetailsIn, WatchEntryOut

log = logging.getLogger(__name__)


class AccountService(BaseService):
    """Operations an authenticated account performs on itself."""

    def __init__(self, *, uplink: MediaUplink | None = None) -> None:
        """
        :param uplink: Media host adapter; required only for image updates.
        """
        super().__init__()
        self.uplink = uplink

    def get_account(self, account_id: int) -> AccountOut:
        """
        :raises NotFoundError: If the account does not exist.
        """
        with self.ro_uow() as uow:
            user = uow.users.get(account_id)
            if user is None:
                raise NotFoundError("User", account_id)
            return AccountOut.from_model(user)

    def update_details(self, account_id: int, dto: UpdateDetailsIn) -> AccountOut:
        """
        Replace full name and email.

        :raises ValidationError: If either field is blank.
        :raises ConflictError: If another account already uses the email.
        :raises NotFoundError: If the account does not exist.
        """
        self.require_fields(full_name=dto.full_name, email=dto.email)
        try:
            with self.rw_uow() as uow:
                users = uow.users
                user = users.get(account_id)
                if user is None:
                    raise NotFoundError("User", account_id)
                if users.email_taken_by_other(dto.email, account_id):
                    raise ConflictError("User", "email already in use")
                users.assign_updates(user, {"full_name": dto.full_name, "email": dto.email})
        except IntegrityError as exc:
            raise ConflictError("User", "email already in use") from exc
        except ValueError as exc:
            # model validators reject malformed values
            raise ValidationError(str(exc)) from exc
        return self.get_account(account_id)

    # ------------------------------------------------------------------ #
    # Images
    # ------------------------------------------------------------------ #

    def update_avatar(self, account_id: int, local_path: str | None) -> AccountOut:
        """Upload a new avatar and store its URL."""
        return self._replace_image(account_id, local_path, field="avatar", label="Avatar")

    def update_cover_image(self, account_id: int, local_path: str | None) -> AccountOut:
        """Upload a new cover image and store its URL."""
        return self._replace_image(
            account_id, local_path, field="cover_image", label="Cover image"
        )

    def _replace_image(
        self, account_id: int, local_path: str | None, *, field: str, label: str
    ) -> AccountOut:
        if not local_path:
            raise ValidationError(f"{label} file is missing")
        if self.uplink is None:
            raise DependencyError("Media uploads are not configured")

        uploaded = self.uplink.upload(local_path)
        if uploaded is None or not uploaded.url:
            raise DependencyError(f"Error while uploading {label.lower()}")

        with self.rw_uow() as uow:
            user = uow.users.get(account_id)
            if user is None:
                raise NotFoundError("User", account_id)
            uow.users.assign_updates(user, {field: uploaded.url})
        log.info("account.%s_updated", field, extra={"account_id": account_id})
        return self.get_account(account_id)

    # ------------------------------------------------------------------ #
    # Watch history
    # ------------------------------------------------------------------ #

    def record_view(self, account_id: int, video_id: int) -> WatchEntryOut:
        """
        Append ``video_id`` to the account's watch history.

        :raises NotFoundError: If the video or the account does not exist.
        """
        with self.rw_uow() as uow:
            if uow.users.get(account_id) is None:
                raise NotFoundError("User", account_id)
            if uow.videos.get(video_id) is None:
                raise NotFoundError("Video", video_id)
            entry = uow.watch_history.append(account_id, video_id)
            return WatchEntryOut(entry_id=entry.id, video_id=video_id)
