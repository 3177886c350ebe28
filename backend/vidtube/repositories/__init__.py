"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from vidtube.repositories.base import BaseRepository
from vidtube.repositories.subscription import SubscriptionRepository
from vidtube.repositories.user import UserRepository
from vidtube.repositories.video import VideoRepository
from vidtube.repositories.watch_history import WatchHistoryRepository

__all__ = [
    "BaseRepository",
    "SubscriptionRepository",
    "UserRepository",
    "VideoRepository",
    "WatchHistoryRepository",
]
