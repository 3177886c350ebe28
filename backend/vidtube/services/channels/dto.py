# vidtube/services/channels/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class ChannelProfileOut:
    """
    Public channel page with subscription counters.

    :param subscribers_count: Accounts subscribed to this channel.
    :param subscribed_to_count: Channels this account subscribes to.
    :param is_subscribed_to_channel: Whether the viewer subscribes to it.
    """

    id: int
    full_name: str
    username: str
    avatar: str
    cover_image: str
    email: str
    subscribers_count: int
    subscribed_to_count: int
    is_subscribed_to_channel: bool


@dataclass(frozen=True, slots=True)
class VideoOwnerOut:
    """Projection of a video owner inside watch history."""

    id: int
    full_name: str
    username: str
    avatar: str


@dataclass(frozen=True, slots=True)
class WatchHistoryItemOut:
    """
    One watched video, in view order.

    :param owner: Uploader, or ``None`` when that account is gone.
    """

    id: int
    video_file: str
    thumbnail: str
    title: str
    description: str
    duration: float
    views: int
    is_published: bool
    created_at: datetime | None
    watched_at: datetime | None
    owner: VideoOwnerOut | None
