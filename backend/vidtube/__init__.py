"""Account and social-graph backend of a video-sharing service.

``from vidtube import create_app`` is the supported entry point.
"""

from __future__ import annotations

from .factory import create_app

__all__ = ["create_app"]
