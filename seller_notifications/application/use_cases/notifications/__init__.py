"""Use cases for reading and mutating seller notifications."""

from .access import ListOptions, NotificationAccessLayer, NotificationFields

__all__ = [
    "ListOptions",
    "NotificationAccessLayer",
    "NotificationFields",
]
