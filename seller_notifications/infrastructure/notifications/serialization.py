"""Helpers to turn notifications and change events into JSON payloads."""

from __future__ import annotations

from typing import Any

from seller_notifications.domain.entities import Notification, NotificationChange


def serialize_notification(notification: Notification | None) -> dict[str, Any] | None:
    """Return the JSON-serializable representation of ``notification``."""

    if notification is None:
        return None
    return {
        "id": notification.id,
        "user_id": notification.user_id,
        "type": notification.type,
        "title": notification.title,
        "message": notification.message,
        "link": notification.link,
        "read": notification.read,
        "created_at": notification.created_at.isoformat()
        if notification.created_at
        else None,
    }


def serialize_change(change: NotificationChange) -> dict[str, Any]:
    """Return the websocket message describing ``change``."""

    return {
        "type": "notification-change",
        "data": {
            "event": change.event,
            "user_id": change.user_id,
            "new": serialize_notification(change.new),
            "old": serialize_notification(change.old),
        },
    }


__all__ = ["serialize_notification", "serialize_change"]
