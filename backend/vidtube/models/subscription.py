"""Subscription edge between two accounts."""

from __future__ import annotations

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from vidtube.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin


class Subscription(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Directed edge ``subscriber -> channel``.

    Edges are immutable: they are created by a subscribe action and removed by
    an unsubscribe action. At most one edge exists per pair and an account
    cannot subscribe to itself.
    """

    __tablename__ = "subscriptions"
    __repr_fields__ = ("subscriber_id", "channel_id")

    subscriber_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    channel_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    __table_args__ = (
        UniqueConstraint("subscriber_id", "channel_id", name="uq_subscriptions_pair"),
        CheckConstraint("subscriber_id <> channel_id", name="not_self"),
        Index("ix_subscriptions_channel_id", "channel_id"),
    )
