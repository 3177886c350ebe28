# vidtube/infra/jwt/pyjwt_token_provider.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from vidtube.services._shared.errors import InvalidTokenError
from vidtube.services._shared.ports import TokenProvider


@dataclass(slots=True)
class PyJWTTokenProvider(TokenProvider):
    """
    Adapter for PyJWT.

    The signing key is passed per call so access and refresh tokens can use
    separate secrets.

    :param algorithm: HMAC algorithm (``HS256`` by default).
    :param leeway: Clock skew tolerated on ``exp``, in seconds.
    """

    algorithm: str = "HS256"
    leeway: int = 0

    def encode(self, claims: dict[str, Any], *, key: str, expires_delta: timedelta) -> str:
        now = datetime.now(tz=UTC)
        payload = dict(claims)
        payload["iat"] = int(now.timestamp())
        payload["exp"] = int((now + expires_delta).timestamp())
        return jwt.encode(payload, key, algorithm=self.algorithm)

    def decode(self, token: str, *, key: str) -> dict[str, Any]:
        try:
            return jwt.decode(
                token,
                key,
                algorithms=[self.algorithm],
                leeway=self.leeway,
                options={"require": ["exp", "iat", "sub"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise InvalidTokenError("Token expired") from exc
        except jwt.InvalidTokenError as exc:
            raise InvalidTokenError("Invalid token") from exc
