"""Subscription edge repository."""

from __future__ import annotations

from typing import cast

from sqlalchemy import delete, select

from vidtube.models.subscription import Subscription
from vidtube.repositories.base import BaseRepository


class SubscriptionRepository(BaseRepository[Subscription]):
    """Persistence-only repository for :class:`Subscription` edges."""

    model = Subscription

    def get_edge(self, subscriber_id: int, channel_id: int) -> Subscription | None:
        stmt = select(Subscription).where(
            Subscription.subscriber_id == subscriber_id,
            Subscription.channel_id == channel_id,
        )
        return cast(Subscription | None, self.session.execute(stmt).scalars().first())

    def delete_edge(self, subscriber_id: int, channel_id: int) -> bool:
        """Remove the edge if present.

        :returns: ``True`` when an edge was deleted.
        """
        result = self.session.execute(
            delete(Subscription).where(
                Subscription.subscriber_id == subscriber_id,
                Subscription.channel_id == channel_id,
            )
        )
        return bool(result.rowcount)
