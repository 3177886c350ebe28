"""Account resource schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate


class AccountSchema(Schema):
    """Public representation of an account. Never includes secrets."""

    id = fields.Integer(required=True)
    username = fields.String(required=True)
    email = fields.Email(required=True)
    full_name = fields.String(required=True)
    avatar = fields.String(required=True)
    cover_image = fields.String(required=True)
    created_at = fields.DateTime(allow_none=True)
    updated_at = fields.DateTime(allow_none=True)


class UpdateAccountSchema(Schema):
    """Editable profile fields."""

    class Meta:
        unknown = EXCLUDE

    full_name = fields.String(required=True, validate=validate.Length(max=100))
    email = fields.Email(required=True, validate=validate.Length(max=254))


class WatchEntrySchema(Schema):
    """Acknowledgement of a recorded view."""

    entry_id = fields.Integer(required=True)
    video_id = fields.Integer(required=True)
