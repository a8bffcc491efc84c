"""Paginated notification list page."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from seller_notifications.application.use_cases.notifications import (
    ListOptions,
    NotificationAccessLayer,
)
from seller_notifications.config import get_settings
from seller_notifications.domain.entities import (
    NOTIFICATION_TYPE_CUSTOMER,
    NOTIFICATION_TYPE_ORDER,
    NOTIFICATION_TYPE_PRODUCT,
    NOTIFICATION_TYPE_SYSTEM,
    AccountContext,
    Notification,
)
from seller_notifications.domain.results import OperationResult

from .base import AlertHandler, ConfirmHandler, NotificationSurface

logger = logging.getLogger(__name__)

SORTING_RECENT = "Recent"
SORTING_NEW = "New"
SORTING_THIS_YEAR = "This year"
SORTING_OPTIONS = (SORTING_RECENT, SORTING_NEW, SORTING_THIS_YEAR)

FILTER_TYPES: dict[str, str] = {
    "Comments": NOTIFICATION_TYPE_CUSTOMER,
    "Likes": NOTIFICATION_TYPE_PRODUCT,
    "Review": NOTIFICATION_TYPE_PRODUCT,
    "Mentions": NOTIFICATION_TYPE_CUSTOMER,
    "Purchases": NOTIFICATION_TYPE_ORDER,
    "Message": NOTIFICATION_TYPE_SYSTEM,
}

DELETE_CONFIRMATION = "Are you sure you want to delete this notification?"


class NotificationList(NotificationSurface):
    """Full notification list with sorting, type filters and "load more".

    ``has_more`` is true whenever the last fetched page was exactly
    ``page_size`` long, so a final page that happens to be full costs one
    extra, empty fetch before it turns false.
    """

    name = "notification list"

    def __init__(
        self,
        access: NotificationAccessLayer,
        account: AccountContext | None,
        *,
        page_size: int | None = None,
        sorting: str = SORTING_RECENT,
        filters: Iterable[str] = (),
        alert: AlertHandler | None = None,
        confirm: ConfirmHandler | None = None,
        scoped: bool | None = None,
    ) -> None:
        super().__init__(access, account, alert=alert, confirm=confirm, scoped=scoped)
        self.page_size = page_size or get_settings().notifications_page_size
        self.sorting = _validate_sorting(sorting)
        self.filters: list[str] = list(filters)
        self.has_more = True
        self.loading_more = False

    @property
    def title(self) -> str:
        if self.sorting == SORTING_NEW:
            return f"New ({self.unread_count})"
        return "Notifications"

    @property
    def notification_type(self) -> str | None:
        # Only the first recognised filter is applied.
        for name in self.filters:
            mapped = FILTER_TYPES.get(name)
            if mapped:
                return mapped
        return None

    def list_options(self, offset: int = 0) -> ListOptions:
        return ListOptions(
            limit=self.page_size,
            offset=offset,
            type=self.notification_type,
            unread_only=self.sorting == SORTING_NEW,
        )

    async def set_sorting(self, sorting: str) -> None:
        self.sorting = _validate_sorting(sorting)
        await self.refresh()

    async def set_filters(self, filters: Iterable[str]) -> None:
        self.filters = list(filters)
        await self.refresh()

    async def load_more(self) -> None:
        """Append the next page, starting after the items already held."""

        if not self.has_more:
            return
        self.loading_more = True
        try:
            options = self.list_options(offset=len(self.items))
            result = await self.access.list(self.account, options)
            if not result.ok:
                logger.error(
                    "%s failed to load more notifications: %s",
                    self.name,
                    result.error.message,
                )
                return
            page = list(result.data)
            self.items.extend(page)
            self.has_more = len(page) == options.limit
        finally:
            self.loading_more = False

    async def delete_item(self, notification: Notification) -> OperationResult | None:
        if not self._confirm(DELETE_CONFIRMATION):
            return None
        result = await self.access.delete(self.account, notification.id)
        self._report_write_error(result, "deleting notification")
        await self.refresh()
        return result

    def _on_page_loaded(self, page: Sequence[Notification], options: ListOptions) -> None:
        self.has_more = len(page) == options.limit


def _validate_sorting(sorting: str) -> str:
    if sorting not in SORTING_OPTIONS:
        allowed = ", ".join(SORTING_OPTIONS)
        raise ValueError(f"Unknown sorting '{sorting}'. Expected one of: {allowed}")
    return sorting


__all__ = [
    "DELETE_CONFIRMATION",
    "FILTER_TYPES",
    "NotificationList",
    "SORTING_NEW",
    "SORTING_OPTIONS",
    "SORTING_RECENT",
    "SORTING_THIS_YEAR",
]
