"""Service layer public API.

Callers import services and DTOs from :mod:`vidtube.services` without
knowing the internal layout.
"""

from vidtube.services._shared.base import BaseService
from vidtube.services.accounts import AccountOut, AccountService, UpdateDetailsIn, WatchEntryOut
from vidtube.services.channels import (
    ChannelProfileOut,
    ChannelService,
    VideoOwnerOut,
    WatchHistoryItemOut,
)
from vidtube.services.sessions import (
    ChangePasswordIn,
    LoginIn,
    LoginOut,
    RegisterIn,
    SessionService,
)
from vidtube.services.subscriptions import SubscriptionOut, SubscriptionService
from vidtube.services.tokens import (
    AccessClaims,
    TokenConfig,
    TokenPairOut,
    TokenService,
    TokenSubject,
)

__all__ = [
    "AccessClaims",
    "AccountOut",
    "AccountService",
    "BaseService",
    "ChangePasswordIn",
    "ChannelProfileOut",
    "ChannelService",
    "LoginIn",
    "LoginOut",
    "RegisterIn",
    "SessionService",
    "SubscriptionOut",
    "SubscriptionService",
    "TokenConfig",
    "TokenPairOut",
    "TokenService",
    "TokenSubject",
    "UpdateDetailsIn",
    "VideoOwnerOut",
    "WatchEntryOut",
    "WatchHistoryItemOut",
]
