from vidtube.services.subscriptions.dto import SubscriptionOut
from vidtube.services.subscriptions.service import SubscriptionService

__all__ = ["SubscriptionOut", "SubscriptionService"]
