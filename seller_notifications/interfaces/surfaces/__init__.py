"""View models for the two notification surfaces of the seller dashboard."""

from .base import GENERIC_WRITE_ERROR, NotificationSurface, SurfaceState
from .display import (
    DEFAULT_NOTIFICATION_LINK,
    NotificationStyle,
    NotificationView,
    get_notification_style,
)
from .dropdown import DELETE_ALL_CONFIRMATION, NotificationDropdown
from .full_list import (
    DELETE_CONFIRMATION,
    FILTER_TYPES,
    SORTING_NEW,
    SORTING_OPTIONS,
    SORTING_RECENT,
    SORTING_THIS_YEAR,
    NotificationList,
)

__all__ = [
    "DEFAULT_NOTIFICATION_LINK",
    "DELETE_ALL_CONFIRMATION",
    "DELETE_CONFIRMATION",
    "FILTER_TYPES",
    "GENERIC_WRITE_ERROR",
    "NotificationDropdown",
    "NotificationList",
    "NotificationStyle",
    "NotificationSurface",
    "NotificationView",
    "SORTING_NEW",
    "SORTING_OPTIONS",
    "SORTING_RECENT",
    "SORTING_THIS_YEAR",
    "SurfaceState",
    "get_notification_style",
]
