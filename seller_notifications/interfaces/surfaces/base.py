"""State machine shared by the dropdown and the full notification list.

Each surface keeps its own copy of the notifications it shows and of the
unread count, holds its own change feed subscription and re-fetches both on
every change event. Two mounted surfaces therefore fetch twice per change.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Callable, Sequence
from contextlib import asynccontextmanager
from datetime import datetime
from enum import Enum

import anyio

from seller_notifications.application.use_cases.notifications import (
    ListOptions,
    NotificationAccessLayer,
)
from seller_notifications.domain.entities import (
    AccountContext,
    Notification,
    NotificationChange,
)
from seller_notifications.domain.errors import NotificationError
from seller_notifications.domain.results import OperationResult
from seller_notifications.infrastructure.notifications import Subscription

from .display import NotificationView

logger = logging.getLogger(__name__)

AlertHandler = Callable[[str], None]
ConfirmHandler = Callable[[str], bool]

GENERIC_WRITE_ERROR = "Something went wrong. Please try again."


class SurfaceState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    LOAD_ERROR = "load_error"


def _log_alert(message: str) -> None:
    logger.warning("Notification alert: %s", message)


def _always_confirm(_message: str) -> bool:
    return True


class NotificationSurface:
    """Base class for a view that lists notifications and an unread count.

    Subclasses provide :meth:`list_options` and may react to a freshly fetched
    first page through :meth:`_on_page_loaded`.
    """

    name = "surface"

    def __init__(
        self,
        access: NotificationAccessLayer,
        account: AccountContext | None,
        *,
        alert: AlertHandler | None = None,
        confirm: ConfirmHandler | None = None,
        scoped: bool | None = None,
    ) -> None:
        self.access = access
        self.account = account
        self.state = SurfaceState.IDLE
        self.items: list[Notification] = []
        self.unread_count = 0
        self.error: NotificationError | None = None
        self.refresh_count = 0
        self.changes_received = 0
        self._alert = alert or _log_alert
        self._confirm = confirm or _always_confirm
        self._scoped = scoped
        self._subscription: Subscription | None = None

    def list_options(self) -> ListOptions:
        raise NotImplementedError

    @property
    def subscription(self) -> Subscription | None:
        return self._subscription

    async def mount(self) -> None:
        """Open the change feed subscription and load the first page."""

        result = self.access.subscribe(self.account, scoped=self._scoped)
        if result.ok:
            self._subscription = result.data
        else:
            logger.error("%s could not subscribe: %s", self.name, result.error.message)
        await self.refresh()

    def unmount(self) -> None:
        """Release the subscription. In-flight fetches are not cancelled."""

        self.access.unsubscribe(self._subscription)
        self._subscription = None

    @asynccontextmanager
    async def mounted(self) -> AsyncIterator["NotificationSurface"]:
        """Mount the surface and consume change events until the block exits."""

        await self.mount()
        async with anyio.create_task_group() as task_group:
            if self._subscription is not None:
                task_group.start_soon(self.listen, self._subscription)
            try:
                yield self
            finally:
                self.unmount()
                task_group.cancel_scope.cancel()

    async def listen(self, subscription: Subscription) -> None:
        async for change in subscription:
            await self.apply_change(change)

    async def apply_change(self, change: NotificationChange) -> None:
        """Handle one change event: always re-fetch, never diff the payload."""

        self.changes_received += 1
        logger.debug(
            "%s received %s for user %s", self.name, change.event, change.user_id
        )
        await self.refresh()

    async def refresh(self) -> None:
        """Fetch the first page and the unread count concurrently."""

        self.state = SurfaceState.LOADING
        options = self.list_options()
        results: dict[str, OperationResult] = {}

        async def fetch_page() -> None:
            results["page"] = await self.access.list(self.account, options)

        async def fetch_count() -> None:
            results["count"] = await self.access.count(self.account, unread_only=True)

        async with anyio.create_task_group() as task_group:
            task_group.start_soon(fetch_page)
            task_group.start_soon(fetch_count)

        page_result = results["page"]
        count_result = results["count"]

        if page_result.ok:
            self.items = list(page_result.data)
            self._on_page_loaded(self.items, options)
        else:
            logger.error(
                "%s failed to fetch notifications: %s",
                self.name,
                page_result.error.message,
            )
            self.items = []
            self._on_page_loaded([], options)

        if count_result.ok:
            self.unread_count = count_result.data or 0
        else:
            logger.error(
                "%s failed to fetch unread count: %s",
                self.name,
                count_result.error.message,
            )
            self.unread_count = 0

        self.error = page_result.error or count_result.error
        self.state = SurfaceState.LOAD_ERROR if self.error else SurfaceState.LOADED
        self.refresh_count += 1

    async def open_item(self, notification: Notification) -> str:
        """Mark ``notification`` read if needed and return where to navigate."""

        if not notification.read:
            result = await self.access.mark_read(self.account, notification.id)
            self._report_write_error(result, "marking notification as read")
            await self.refresh()
        return NotificationView.from_notification(notification).link

    async def mark_all_read(self) -> OperationResult:
        result = await self.access.mark_all_read(self.account)
        self._report_write_error(result, "marking all as read")
        await self.refresh()
        return result

    def views(self, *, now: datetime | None = None) -> list[NotificationView]:
        return [NotificationView.from_notification(item, now=now) for item in self.items]

    def _on_page_loaded(self, page: Sequence[Notification], options: ListOptions) -> None:
        """Hook invoked after the first page was (re)loaded."""

    def _report_write_error(self, result: OperationResult, action: str) -> None:
        if result.ok:
            return
        message = result.error.message if result.error else ""
        logger.error("%s failed %s: %s", self.name, action, message)
        self._alert(message or GENERIC_WRITE_ERROR)


__all__ = [
    "AlertHandler",
    "ConfirmHandler",
    "GENERIC_WRITE_ERROR",
    "NotificationSurface",
    "SurfaceState",
]
