"""Session-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

from vidtube.schemas.account import AccountSchema


class RegisterSchema(Schema):
    """Form fields accompanying the multipart registration request.

    Blank-after-trim checks live in the service so they apply to every caller.
    """

    class Meta:
        unknown = EXCLUDE

    username = fields.String(required=True, validate=validate.Length(max=50))
    email = fields.Email(required=True, validate=validate.Length(max=254))
    full_name = fields.String(required=True, validate=validate.Length(max=100))
    password = fields.String(required=True, validate=validate.Length(max=128))


class LoginSchema(Schema):
    """Credentials for login."""

    class Meta:
        unknown = EXCLUDE

    username = fields.String(required=True, validate=validate.Length(max=50))
    password = fields.String(required=True, validate=validate.Length(max=128))


class RefreshSchema(Schema):
    """Body fallback for clients that cannot send the refresh cookie."""

    class Meta:
        unknown = EXCLUDE

    refresh_token = fields.String(load_default=None)


class ChangePasswordSchema(Schema):
    """Old and new password."""

    class Meta:
        unknown = EXCLUDE

    old_password = fields.String(required=True, validate=validate.Length(max=128))
    new_password = fields.String(required=True, validate=validate.Length(max=128))


class TokenPairSchema(Schema):
    """Response payload with both tokens."""

    access_token = fields.String(required=True)
    refresh_token = fields.String(required=True)


class LoginResultSchema(TokenPairSchema):
    """Response payload for a successful login."""

    user = fields.Nested(AccountSchema, attribute="account", required=True)
