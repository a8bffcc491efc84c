"""Aggregate application use cases."""

from .notifications import ListOptions, NotificationAccessLayer, NotificationFields

__all__ = [
    "ListOptions",
    "NotificationAccessLayer",
    "NotificationFields",
]
