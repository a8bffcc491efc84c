"""Domain entity describing a change applied to the notifications table."""

from __future__ import annotations

from dataclasses import dataclass

from .notification import Notification

CHANGE_INSERT = "INSERT"
CHANGE_UPDATE = "UPDATE"
CHANGE_DELETE = "DELETE"


@dataclass(frozen=True)
class NotificationChange:
    """A single row-level change delivered through the change feed.

    ``new`` holds the row after an insert or update, ``old`` the row before an
    update or delete. ``user_id`` is the owner of the affected row and is what
    scoped subscriptions filter on.
    """

    event: str
    user_id: str
    new: Notification | None = None
    old: Notification | None = None


__all__ = ["NotificationChange", "CHANGE_INSERT", "CHANGE_UPDATE", "CHANGE_DELETE"]
