"""Compact notification panel shown from the header bell."""

from __future__ import annotations

from seller_notifications.application.use_cases.notifications import (
    ListOptions,
    NotificationAccessLayer,
)
from seller_notifications.config import get_settings
from seller_notifications.domain.entities import AccountContext, Notification
from seller_notifications.domain.results import OperationResult

from .base import AlertHandler, ConfirmHandler, NotificationSurface

DELETE_ALL_CONFIRMATION = "Are you sure you want to delete all notifications?"


class NotificationDropdown(NotificationSurface):
    """Latest few notifications, the unread badge and bulk actions."""

    name = "notification dropdown"

    def __init__(
        self,
        access: NotificationAccessLayer,
        account: AccountContext | None,
        *,
        limit: int | None = None,
        alert: AlertHandler | None = None,
        confirm: ConfirmHandler | None = None,
        scoped: bool | None = None,
    ) -> None:
        super().__init__(access, account, alert=alert, confirm=confirm, scoped=scoped)
        self.limit = limit or get_settings().notifications_dropdown_limit
        self.visible = False

    def list_options(self) -> ListOptions:
        return ListOptions(limit=self.limit)

    @property
    def title(self) -> str:
        if self.unread_count > 0:
            return f"Notification ({self.unread_count})"
        return "Notification"

    @property
    def badge(self) -> int | None:
        return self.unread_count if self.unread_count > 0 else None

    def toggle(self) -> None:
        self.visible = not self.visible

    def close(self) -> None:
        self.visible = False

    async def open_item(self, notification: Notification) -> str:
        link = await super().open_item(notification)
        self.close()
        return link

    async def delete_all(self) -> OperationResult | None:
        """Delete every notification of the account after confirmation."""

        if not self._confirm(DELETE_ALL_CONFIRMATION):
            return None
        result = await self.access.delete_all(self.account)
        self._report_write_error(result, "deleting all notifications")
        await self.refresh()
        return result


__all__ = ["NotificationDropdown", "DELETE_ALL_CONFIRMATION"]
