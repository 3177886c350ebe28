"""Append-only watch history rows."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vidtube.core.extensions import db

from .base import CreatedAtMixin, PKMixin, ReprMixin

if TYPE_CHECKING:
    from .user import User


class WatchHistoryEntry(PKMixin, ReprMixin, CreatedAtMixin, db.Model):
    """
    One view of a video by an account.

    Ascending ``id`` is view order. The same video may appear many times.
    """

    __tablename__ = "watch_history_entries"
    __repr_fields__ = ("user_id", "video_id")

    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    video_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("videos.id", ondelete="CASCADE"), nullable=False
    )

    user: Mapped[User] = relationship(back_populates="watch_history")
