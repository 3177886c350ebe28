from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class MediaUploadResult:
    """
    Location of a file accepted by the media host.

    :param url: Public URL stored on the account.
    :type url: str
    :param key: Object key on the host.
    :type key: str
    """

    url: str
    key: str


class MediaUplink(Protocol):
    """Port for pushing a local temp file to the media host.

    ``upload`` returns ``None`` when the host rejects or cannot be reached and
    always removes ``local_path`` before returning.
    """

    def upload(self, local_path: str) -> MediaUploadResult | None: ...
