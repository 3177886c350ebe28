"""Account model: credentials, public channel fields and refresh-token slot."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Index, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from vidtube.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .watch_history import WatchHistoryEntry


class User(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Registered account, doubling as a public channel.

    Fields
    ------
    username : str
        Public handle. Stored trimmed and lowercased, so uniqueness is
        case-insensitive.
    email : str
        Login email. Stored trimmed and lowercased.
    full_name : str
        Display name.
    password_hash : str
        Digest produced by the password hasher. Written only by registration
        and change-password.
    avatar : str
        URL of the avatar image on the media host.
    cover_image : str
        URL of the channel cover image, empty when absent.
    refresh_token : str | None
        The single refresh token currently honoured for this account. Written
        only by the token service.
    """

    __tablename__ = "users"
    __repr_fields__ = ("username",)

    username: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(254), nullable=False)
    full_name: Mapped[str] = mapped_column(String(100), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    avatar: Mapped[str] = mapped_column(String(500), nullable=False)
    cover_image: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    refresh_token: Mapped[str | None] = mapped_column(Text, nullable=True)

    watch_history: Mapped[list[WatchHistoryEntry]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="WatchHistoryEntry.id",
        passive_deletes=True,
    )

    __table_args__ = (
        UniqueConstraint("email", name="uq_users_email"),
        UniqueConstraint("username", name="uq_users_username"),
        Index("ix_users_full_name", "full_name"),
    )

    # -------------------- Validators --------------------
    @validates("username")
    def _normalize_username(self, key: str, value: str) -> str:
        """
        Trim and lowercase the handle.

        :raises ValueError: If the handle is missing or only whitespace.
        """
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Username is required.")
        return value.strip().lower()

    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        """
        Normalize and sanity-check email.

        :raises ValueError: If email is missing or malformed.
        """
        if not value or not isinstance(value, str):
            raise ValueError("Email is required.")
        v = value.strip().lower()
        # Minimal sanity check; full validation happens at API layer.
        if "@" not in v or "." not in v.split("@")[-1]:
            raise ValueError("Email format looks invalid.")
        return v

    @validates("full_name")
    def _normalize_full_name(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Full name is required.")
        return value.strip()
