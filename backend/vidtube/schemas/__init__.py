"""Marshmallow schemas for request validation and response serialization."""

from vidtube.schemas.account import AccountSchema, UpdateAccountSchema, WatchEntrySchema
from vidtube.schemas.channel import (
    ChannelProfileSchema,
    SubscriptionSchema,
    VideoOwnerSchema,
    WatchHistoryItemSchema,
)
from vidtube.schemas.session import (
    ChangePasswordSchema,
    LoginResultSchema,
    LoginSchema,
    RefreshSchema,
    RegisterSchema,
    TokenPairSchema,
)

__all__ = [
    "AccountSchema",
    "ChangePasswordSchema",
    "ChannelProfileSchema",
    "LoginResultSchema",
    "LoginSchema",
    "RefreshSchema",
    "RegisterSchema",
    "SubscriptionSchema",
    "TokenPairSchema",
    "UpdateAccountSchema",
    "VideoOwnerSchema",
    "WatchEntrySchema",
    "WatchHistoryItemSchema",
]
