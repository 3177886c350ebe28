from __future__ import annotations

from datetime import timedelta
from typing import Any, Protocol


class TokenProvider(Protocol):
    """Port for signing and decoding JWTs.

    Implementations add ``iat``/``exp`` on encode and verify signature and
    expiry on decode, raising
    :class:`~vidtube.services._shared.errors.InvalidTokenError` on any failure.
    """

    def encode(self, claims: dict[str, Any], *, key: str, expires_delta: timedelta) -> str: ...

    def decode(self, token: str, *, key: str) -> dict[str, Any]: ...
