"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

NotificationType = Literal["order", "product", "customer", "system"]


class NotificationCreate(BaseModel):
    """Payload used to create a notification for the current account."""

    title: str = Field(..., min_length=1, max_length=200)
    type: NotificationType = "system"
    message: str | None = None
    link: str | None = Field(default=None, max_length=500)


class NotificationIdsRequest(BaseModel):
    """Payload used to act on a batch of notifications."""

    ids: list[str] = Field(..., min_length=1, description="Notification identifiers")

    def unique_ids(self) -> list[str]:
        """Return the list of identifiers without duplicates preserving order."""

        unique: list[str] = []
        seen: set[str] = set()
        for notification_id in self.ids:
            if notification_id in seen:
                continue
            seen.add(notification_id)
            unique.append(notification_id)
        return unique


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    type: str
    title: str
    message: str | None = None
    link: str | None = None
    read: bool = False
    created_at: datetime


class NotificationCount(BaseModel):
    """Number of notifications matching a count request."""

    count: int


__all__ = [
    "NotificationCount",
    "NotificationCreate",
    "NotificationIdsRequest",
    "NotificationRead",
]
