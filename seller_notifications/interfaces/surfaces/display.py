"""Display helpers shared by the notification surfaces."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from seller_notifications.domain.entities import (
    NOTIFICATION_TYPE_CUSTOMER,
    NOTIFICATION_TYPE_ORDER,
    NOTIFICATION_TYPE_PRODUCT,
    NOTIFICATION_TYPE_SYSTEM,
    Notification,
)
from seller_notifications.utils import format_time_ago

DEFAULT_NOTIFICATION_LINK = "/notification"


@dataclass(frozen=True)
class NotificationStyle:
    """Icon and accent colour used to render a notification type."""

    icon: str
    color: str


_STYLES: dict[str, NotificationStyle] = {
    NOTIFICATION_TYPE_ORDER: NotificationStyle(
        icon="/images/content/shopping-bag.svg", color="#83BF6E"
    ),
    NOTIFICATION_TYPE_PRODUCT: NotificationStyle(
        icon="/images/content/star.svg", color="#8E59FF"
    ),
    NOTIFICATION_TYPE_CUSTOMER: NotificationStyle(
        icon="/images/content/message.svg", color="#2A85FF"
    ),
    NOTIFICATION_TYPE_SYSTEM: NotificationStyle(
        icon="/images/content/notification.svg", color="#FF6A55"
    ),
}


def get_notification_style(notification_type: str | None) -> NotificationStyle:
    """Return the style for ``notification_type``; unknown types render as system."""

    return _STYLES.get(notification_type or "", _STYLES[NOTIFICATION_TYPE_SYSTEM])


@dataclass(frozen=True)
class NotificationView:
    """Render-ready projection of a :class:`Notification`."""

    id: str | None
    title: str
    message: str | None
    time_ago: str
    style: NotificationStyle
    link: str
    is_new: bool
    show_reply_control: bool

    @classmethod
    def from_notification(
        cls, notification: Notification, *, now: datetime | None = None
    ) -> "NotificationView":
        return cls(
            id=notification.id,
            title=notification.title,
            message=notification.message,
            time_ago=format_time_ago(notification.created_at, now=now)
            if notification.created_at
            else "",
            style=get_notification_style(notification.type),
            link=notification.link or DEFAULT_NOTIFICATION_LINK,
            is_new=not notification.read,
            show_reply_control=bool(notification.message),
        )


__all__ = [
    "DEFAULT_NOTIFICATION_LINK",
    "NotificationStyle",
    "NotificationView",
    "get_notification_style",
]
