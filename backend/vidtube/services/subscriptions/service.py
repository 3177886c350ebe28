# vidtube/services/subscriptions/service.py
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from vidtube.models.subscription import Subscription
from vidtube.services._shared.base import BaseService
from vidtube.services._shared.errors import NotFoundError, ValidationError
from vidtube.services.subscriptions.dto import SubscriptionOut

log = logging.getLogger(__name__)


class SubscriptionService(BaseService):
    """Create and remove subscription edges. Both operations are idempotent."""

    def subscribe(self, subscriber_id: int, channel_id: int) -> SubscriptionOut:
        """
        Subscribe ``subscriber_id`` to ``channel_id``.

        :raises ValidationError: Self-subscription.
        :raises NotFoundError: Unknown channel.
        """
        if subscriber_id == channel_id:
            raise ValidationError("You cannot subscribe to your own channel")

        try:
            with self.rw_uow() as uow:
                if uow.users.get(channel_id) is None:
                    raise NotFoundError("Channel", channel_id)
                existing = uow.subscriptions.get_edge(subscriber_id, channel_id)
                if existing is not None:
                    return _edge_out(existing, created=False)
                edge = uow.subscriptions.add(
                    Subscription(subscriber_id=subscriber_id, channel_id=channel_id)
                )
                out = _edge_out(edge, created=True)
        except IntegrityError:
            # a concurrent request created the same edge first
            with self.ro_uow() as uow:
                existing = uow.subscriptions.get_edge(subscriber_id, channel_id)
                if existing is None:
                    raise
                return _edge_out(existing, created=False)

        log.info(
            "subscriptions.created",
            extra={"account_id": subscriber_id, "channel_id": channel_id},
        )
        return out

    def unsubscribe(self, subscriber_id: int, channel_id: int) -> bool:
        """
        Remove the edge if present.

        :returns: ``True`` when an edge was deleted.
        """
        with self.rw_uow() as uow:
            removed = uow.subscriptions.delete_edge(subscriber_id, channel_id)
        if removed:
            log.info(
                "subscriptions.removed",
                extra={"account_id": subscriber_id, "channel_id": channel_id},
            )
        return removed


def _edge_out(edge: Subscription, *, created: bool) -> SubscriptionOut:
    return SubscriptionOut(
        id=edge.id,
        subscriber_id=edge.subscriber_id,
        channel_id=edge.channel_id,
        created=created,
    )
