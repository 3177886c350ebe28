# vidtube/services/channels/service.py
"""Read model over accounts, subscription edges and watch history."""

from __future__ import annotations

from sqlalchemy.engine import RowMapping

from vidtube.services._shared.base import BaseService
from vidtube.services._shared.errors import NotFoundError, ValidationError
from vidtube.services.channels.dto import (
    ChannelProfileOut,
    VideoOwnerOut,
    WatchHistoryItemOut,
)


class ChannelService(BaseService):
    """Channel profile and watch-history aggregation. Read-only."""

    def get_channel_profile(
        self, username: str | None, viewer_id: int | None = None
    ) -> ChannelProfileOut:
        """
        Load a channel by handle with its subscription counters.

        :param username: Handle, matched case-insensitively.
        :param viewer_id: Account viewing the page; ``None`` for anonymous.
        :returns: Channel profile.
        :raises ValidationError: Blank handle.
        :raises NotFoundError: No account with that handle.
        """
        if not (username or "").strip():
            raise ValidationError("username is missing")

        with self.ro_uow() as uow:
            row = uow.users.channel_profile(username, viewer_id=viewer_id)
        if row is None:
            raise NotFoundError("Channel", username.strip().lower())
        return ChannelProfileOut(
            id=row["id"],
            full_name=row["full_name"],
            username=row["username"],
            avatar=row["avatar"],
            cover_image=row["cover_image"] or "",
            email=row["email"],
            subscribers_count=int(row["subscribers_count"] or 0),
            subscribed_to_count=int(row["subscribed_to_count"] or 0),
            is_subscribed_to_channel=bool(row["is_subscribed_to_channel"]),
        )

    def get_watch_history(self, account_id: int) -> list[WatchHistoryItemOut]:
        """
        Return watched videos oldest first, repeats included.

        :param account_id: Account whose history is read.
        :returns: History items; ``[]`` when nothing was watched.
        :raises NotFoundError: The account does not exist.
        """
        with self.ro_uow() as uow:
            if uow.users.get(account_id) is None:
                raise NotFoundError("User", account_id)
            rows = uow.watch_history.list_with_videos(account_id)
        return [_history_item(row) for row in rows]


def _history_item(row: RowMapping) -> WatchHistoryItemOut:
    owner = None
    if row["owner_id"] is not None:
        owner = VideoOwnerOut(
            id=row["owner_id"],
            full_name=row["owner_full_name"],
            username=row["owner_username"],
            avatar=row["owner_avatar"],
        )
    return WatchHistoryItemOut(
        id=row["id"],
        video_file=row["video_file"],
        thumbnail=row["thumbnail"],
        title=row["title"],
        description=row["description"] or "",
        duration=float(row["duration"] or 0),
        views=int(row["views"] or 0),
        is_published=bool(row["is_published"]),
        created_at=row["created_at"],
        watched_at=row["watched_at"],
        owner=owner,
    )
