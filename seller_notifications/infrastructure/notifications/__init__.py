"""Realtime notification helpers for the infrastructure layer."""

from .feed import NotificationChangeFeed, Subscription, notification_feed
from .serialization import serialize_change, serialize_notification

__all__ = [
    "NotificationChangeFeed",
    "Subscription",
    "notification_feed",
    "serialize_change",
    "serialize_notification",
]
