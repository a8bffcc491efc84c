"""Domain entity representing a seller notification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

NOTIFICATION_TYPE_ORDER = "order"
NOTIFICATION_TYPE_PRODUCT = "product"
NOTIFICATION_TYPE_CUSTOMER = "customer"
NOTIFICATION_TYPE_SYSTEM = "system"

NOTIFICATION_TYPES = (
    NOTIFICATION_TYPE_ORDER,
    NOTIFICATION_TYPE_PRODUCT,
    NOTIFICATION_TYPE_CUSTOMER,
    NOTIFICATION_TYPE_SYSTEM,
)


@dataclass
class Notification:
    """Information message delivered to a single seller account."""

    id: str | None
    user_id: str
    type: str
    title: str
    message: str | None = None
    link: str | None = None
    read: bool = False
    created_at: datetime | None = None


__all__ = [
    "Notification",
    "NOTIFICATION_TYPES",
    "NOTIFICATION_TYPE_ORDER",
    "NOTIFICATION_TYPE_PRODUCT",
    "NOTIFICATION_TYPE_CUSTOMER",
    "NOTIFICATION_TYPE_SYSTEM",
]
