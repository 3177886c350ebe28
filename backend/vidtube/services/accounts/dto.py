# vidtube/services/accounts/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class AccountOut:
    """
    Sanitized account view; never carries the password hash or refresh token.

    :param id: Account identifier.
    :param username: Lowercased handle.
    :param email: Lowercased email.
    :param full_name: Display name.
    :param avatar: Avatar URL.
    :param cover_image: Cover image URL, empty when absent.
    :param created_at: Creation timestamp.
    :param updated_at: Last update timestamp.
    """

    id: int
    username: str
    email: str
    full_name: str
    avatar: str
    cover_image: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_model(cls, user: Any) -> AccountOut:
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            full_name=user.full_name,
            avatar=user.avatar,
            cover_image=user.cover_image or "",
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


@dataclass(frozen=True, slots=True)
class WatchEntryOut:
    """
    Result of recording a view.

    :param entry_id: Watch history row id.
    :param video_id: Viewed video.
    """

    entry_id: int
    video_id: int


# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class UpdateDetailsIn:
    """
    Profile edit payload. Both fields are required.

    :param full_name: New display name.
    :param email: New email.
    """

    full_name: str
    email: str
