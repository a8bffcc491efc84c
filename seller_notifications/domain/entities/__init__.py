"""Domain entities exposed by the application."""

from .account import AccountContext
from .notification import (
    NOTIFICATION_TYPE_CUSTOMER,
    NOTIFICATION_TYPE_ORDER,
    NOTIFICATION_TYPE_PRODUCT,
    NOTIFICATION_TYPE_SYSTEM,
    NOTIFICATION_TYPES,
    Notification,
)
from .notification_change import (
    CHANGE_DELETE,
    CHANGE_INSERT,
    CHANGE_UPDATE,
    NotificationChange,
)

__all__ = [
    "AccountContext",
    "Notification",
    "NOTIFICATION_TYPES",
    "NOTIFICATION_TYPE_ORDER",
    "NOTIFICATION_TYPE_PRODUCT",
    "NOTIFICATION_TYPE_CUSTOMER",
    "NOTIFICATION_TYPE_SYSTEM",
    "NotificationChange",
    "CHANGE_INSERT",
    "CHANGE_UPDATE",
    "CHANGE_DELETE",
]
