"""Video metadata referenced by watch history."""

from __future__ import annotations

from sqlalchemy import Boolean, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vidtube.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin
from .user import User


class Video(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Uploaded video.

    Fields
    ------
    video_file : str
        URL of the media file on the media host.
    thumbnail : str
        URL of the thumbnail image.
    duration : float
        Length in seconds.
    owner_id : int | None
        Uploading account. Nulled when the owner is deleted so watch history
        keeps the video.
    """

    __tablename__ = "videos"
    __repr_fields__ = ("title",)

    video_file: Mapped[str] = mapped_column(String(500), nullable=False)
    thumbnail: Mapped[str] = mapped_column(String(500), nullable=False)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    duration: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    views: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    owner_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )

    owner: Mapped[User | None] = relationship(lazy="joined")
