"""Channel read-model schemas."""

from __future__ import annotations

from marshmallow import Schema, fields


class ChannelProfileSchema(Schema):
    """Channel page with subscription counters."""

    id = fields.Integer(required=True)
    full_name = fields.String(required=True)
    username = fields.String(required=True)
    avatar = fields.String(required=True)
    cover_image = fields.String(required=True)
    email = fields.Email(required=True)
    subscribers_count = fields.Integer(required=True)
    subscribed_to_count = fields.Integer(required=True)
    is_subscribed_to_channel = fields.Boolean(required=True)


class VideoOwnerSchema(Schema):
    id = fields.Integer(required=True)
    full_name = fields.String(required=True)
    username = fields.String(required=True)
    avatar = fields.String(required=True)


class WatchHistoryItemSchema(Schema):
    """Watched video with its owner collapsed to a single object."""

    id = fields.Integer(required=True)
    video_file = fields.String(required=True)
    thumbnail = fields.String(required=True)
    title = fields.String(required=True)
    description = fields.String(required=True)
    duration = fields.Float(required=True)
    views = fields.Integer(required=True)
    is_published = fields.Boolean(required=True)
    created_at = fields.DateTime(allow_none=True)
    watched_at = fields.DateTime(allow_none=True)
    owner = fields.Nested(VideoOwnerSchema, allow_none=True)


class SubscriptionSchema(Schema):
    id = fields.Integer(required=True)
    subscriber_id = fields.Integer(required=True)
    channel_id = fields.Integer(required=True)
    created = fields.Boolean(required=True)
