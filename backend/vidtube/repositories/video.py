"""Video repository."""

from __future__ import annotations

from vidtube.models.video import Video
from vidtube.repositories.base import BaseRepository


class VideoRepository(BaseRepository[Video]):
    """Persistence-only repository for :class:`Video`."""

    model = Video
