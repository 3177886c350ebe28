"""
vidtube.services._shared.ports
==============================

Ports (hexagonal interfaces) that keep the service layer independent of
concrete infrastructure.

- :mod:`token_provider`: :class:`~.TokenProvider`, JWT signing/decoding.
- :mod:`password_hasher`: :class:`~.PasswordHasher`, one-way digests.
- :mod:`media_uplink`: :class:`~.MediaUplink`, pushing uploads to the media host.

Concrete adapters live under ``vidtube.infra``.
"""

from __future__ import annotations

from .media_uplink import MediaUplink, MediaUploadResult
from .password_hasher import PasswordHasher
from .token_provider import TokenProvider

__all__ = [
    "MediaUplink",
    "MediaUploadResult",
    "PasswordHasher",
    "TokenProvider",
]
