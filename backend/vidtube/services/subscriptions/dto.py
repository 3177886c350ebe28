# vidtube/services/subscriptions/dto.py
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SubscriptionOut:
    """
    Subscription edge.

    :param created: ``False`` when the edge already existed.
    """

    id: int
    subscriber_id: int
    channel_id: int
    created: bool
