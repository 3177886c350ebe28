"""In-memory stand-in for the media host."""

from __future__ import annotations

import os
from pathlib import Path

from vidtube.services._shared.ports import MediaUploadResult


class StubMediaUplink:
    """Record uploads and hand out predictable URLs.

    Honours the uplink contract: the temp file is gone after ``upload``
    returns, whether the upload "succeeded" or not.

    Parameters
    ----------
    fail: bool
        When ``True`` every upload returns ``None``.
    """

    base_url = "https://media.test"

    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.uploaded: list[str] = []

    def reset(self) -> None:
        self.fail = False
        self.uploaded.clear()

    def upload(self, local_path: str) -> MediaUploadResult | None:
        path = Path(local_path)
        try:
            if self.fail or not path.exists():
                return None
            self.uploaded.append(path.name)
            key = f"media/{len(self.uploaded)}{path.suffix.lower()}"
            return MediaUploadResult(url=f"{self.base_url}/{key}", key=key)
        finally:
            if path.exists():
                os.remove(path)
