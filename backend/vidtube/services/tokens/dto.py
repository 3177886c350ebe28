# vidtube/services/tokens/dto.py
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from vidtube.core.config import parse_duration

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class TokenSubject:
    """
    Snapshot of the account fields that go into tokens.

    :param id: Account identifier (``sub`` claim).
    :type id: int
    :param email: Email claim (access token only).
    :type email: str
    :param username: Handle claim (access token only).
    :type username: str
    :param full_name: Display name claim (access token only).
    :type full_name: str
    :param refresh_token: Refresh token currently stored for the account.
    :type refresh_token: str | None
    """

    id: int
    email: str
    username: str
    full_name: str
    refresh_token: str | None = None

    @classmethod
    def from_model(cls, user: Any) -> TokenSubject:
        return cls(
            id=user.id,
            email=user.email,
            username=user.username,
            full_name=user.full_name,
            refresh_token=user.refresh_token,
        )


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class TokenPairOut:
    """
    Output DTO with access and refresh tokens.

    :param access_token: Encoded access JWT.
    :type access_token: str
    :param refresh_token: Encoded refresh JWT.
    :type refresh_token: str
    """

    access_token: str
    refresh_token: str


@dataclass(frozen=True, slots=True)
class AccessClaims:
    """Verified access-token claims."""

    account_id: int
    email: str
    username: str
    full_name: str
    jti: str
    expires_at: datetime


# ------------------------------ Config DTO -------------------------------- #


@dataclass(frozen=True, slots=True)
class TokenConfig:
    """
    Token emission configuration.

    :param access_secret: HMAC key for access tokens.
    :type access_secret: str
    :param refresh_secret: HMAC key for refresh tokens.
    :type refresh_secret: str
    :param access_ttl: Access token lifetime.
    :type access_ttl: timedelta
    :param refresh_ttl: Refresh token lifetime.
    :type refresh_ttl: timedelta
    :param algorithm: JWT signing algorithm shared by both token kinds.
    :type algorithm: str
    """

    access_secret: str
    refresh_secret: str
    access_ttl: timedelta
    refresh_ttl: timedelta
    algorithm: str = "HS256"

    def __post_init__(self) -> None:
        if not self.access_secret or not self.refresh_secret:
            raise ValueError("Token secrets must be configured.")
        if self.access_secret == self.refresh_secret:
            raise ValueError("Access and refresh tokens must use different secrets.")

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> TokenConfig:
        """Build from ``ACCESS_TOKEN_*``/``REFRESH_TOKEN_*`` settings."""
        return cls(
            access_secret=config["ACCESS_TOKEN_SECRET"],
            refresh_secret=config["REFRESH_TOKEN_SECRET"],
            access_ttl=parse_duration(config["ACCESS_TOKEN_EXPIRY"]),
            refresh_ttl=parse_duration(config["REFRESH_TOKEN_EXPIRY"]),
            algorithm=config.get("JWT_ALGORITHM", "HS256"),
        )
