"""Pydantic schemas exposed by the HTTP interface."""

from .notification import (
    NotificationCount,
    NotificationCreate,
    NotificationIdsRequest,
    NotificationRead,
)

__all__ = [
    "NotificationCount",
    "NotificationCreate",
    "NotificationIdsRequest",
    "NotificationRead",
]
