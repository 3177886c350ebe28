"""Subscription endpoints."""

from __future__ import annotations

from flask import Blueprint

from vidtube.api.deps import (
    current_account,
    json_response,
    require_auth,
    subscription_service,
    timing,
)
from vidtube.schemas import SubscriptionSchema

bp = Blueprint("subscriptions", __name__)

subscription_schema = SubscriptionSchema()


@bp.post("/c/<int:channel_id>")
@require_auth
@timing
def subscribe(channel_id: int):
    """Subscribe the caller to ``channel_id``; repeating the call is harmless."""

    edge = subscription_service().subscribe(current_account().id, channel_id)
    status = 201 if edge.created else 200
    message = "Subscribed successfully" if edge.created else "Already subscribed"
    return json_response(subscription_schema.dump(edge), message=message, status=status)


@bp.delete("/c/<int:channel_id>")
@require_auth
@timing
def unsubscribe(channel_id: int):
    removed = subscription_service().unsubscribe(current_account().id, channel_id)
    return json_response(
        {"channel_id": channel_id, "removed": removed}, message="Unsubscribed successfully"
    )
