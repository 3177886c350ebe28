"""Watch history repository with the video/owner join."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.engine import RowMapping
from sqlalchemy.orm import aliased

from vidtube.models.user import User
from vidtube.models.video import Video
from vidtube.models.watch_history import WatchHistoryEntry
from vidtube.repositories.base import BaseRepository


class WatchHistoryRepository(BaseRepository[WatchHistoryEntry]):
    """Persistence-only repository for :class:`WatchHistoryEntry`."""

    model = WatchHistoryEntry

    def append(self, user_id: int, video_id: int) -> WatchHistoryEntry:
        """Record one more view; repeated views are kept."""
        return self.add(WatchHistoryEntry(user_id=user_id, video_id=video_id))

    def list_with_videos(self, user_id: int) -> list[RowMapping]:
        """Return the history of ``user_id`` joined with videos and owners.

        Rows come back in view order. Entries whose video is gone are dropped
        by the inner join; a deleted owner yields ``owner_id = None``.

        :param user_id: Account whose history is read.
        :type user_id: int
        :returns: One mapping per entry.
        :rtype: list[RowMapping]
        """
        owner = aliased(User, name="owner")
        stmt = (
            select(
                WatchHistoryEntry.id.label("entry_id"),
                WatchHistoryEntry.created_at.label("watched_at"),
                Video.id,
                Video.video_file,
                Video.thumbnail,
                Video.title,
                Video.description,
                Video.duration,
                Video.views,
                Video.is_published,
                Video.created_at,
                owner.id.label("owner_id"),
                owner.full_name.label("owner_full_name"),
                owner.username.label("owner_username"),
                owner.avatar.label("owner_avatar"),
            )
            .select_from(WatchHistoryEntry)
            .join(Video, Video.id == WatchHistoryEntry.video_id)
            .outerjoin(owner, owner.id == Video.owner_id)
            .where(WatchHistoryEntry.user_id == user_id)
            .order_by(WatchHistoryEntry.id.asc())
        )
        return list(self.session.execute(stmt).mappings().all())
