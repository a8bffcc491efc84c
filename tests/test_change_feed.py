"""Tests for the in-process notification change feed."""

from __future__ import annotations

import pytest

from seller_notifications.domain.entities import Notification, NotificationChange
from seller_notifications.infrastructure.notifications import (
    NotificationChangeFeed,
    serialize_change,
)

pytestmark = pytest.mark.anyio


def _insert_for(user_id: str) -> NotificationChange:
    return NotificationChange(
        event="INSERT",
        user_id=user_id,
        new=Notification(id="n-1", user_id=user_id, type="order", title="New order"),
    )


async def test_scoped_subscription_only_sees_own_rows() -> None:
    feed = NotificationChangeFeed(scoped=True)
    subscription = feed.subscribe("seller-a")

    assert feed.publish(_insert_for("seller-b")) == 0
    assert feed.publish(_insert_for("seller-a")) == 1
    feed.unsubscribe(subscription)

    assert [change.user_id async for change in subscription] == ["seller-a"]


async def test_unscoped_subscription_sees_every_account() -> None:
    feed = NotificationChangeFeed(scoped=False)
    subscription = feed.subscribe("seller-a")

    feed.publish(_insert_for("seller-b"))
    feed.publish(_insert_for("seller-a"))
    feed.unsubscribe(subscription)

    assert [change.user_id async for change in subscription] == ["seller-b", "seller-a"]


async def test_per_subscription_scope_overrides_feed_policy() -> None:
    feed = NotificationChangeFeed(scoped=True)
    subscription = feed.subscribe("seller-a", scoped=False)

    assert subscription.scoped is False
    assert feed.publish(_insert_for("seller-b")) == 1
    feed.unsubscribe(subscription)


async def test_unsubscribe_is_idempotent_and_accepts_none() -> None:
    feed = NotificationChangeFeed()
    subscription = feed.subscribe("seller-a")

    feed.unsubscribe(subscription)
    feed.unsubscribe(subscription)
    feed.unsubscribe(None)

    assert subscription.closed is True
    assert feed.subscriber_count == 0
    assert feed.publish(_insert_for("seller-a")) == 0


async def test_full_queue_discards_oldest_events_and_keeps_subscriber() -> None:
    feed = NotificationChangeFeed(queue_size=2)
    slow = feed.subscribe("seller-a")

    for _ in range(3):
        assert feed.publish(_insert_for("seller-a")) == 1

    assert slow.closed is False
    assert slow.dropped == 1
    assert feed.subscriber_count == 1

    feed.unsubscribe(slow)
    assert len([change async for change in slow]) == 2


async def test_closing_keeps_buffered_events() -> None:
    feed = NotificationChangeFeed(queue_size=2)
    subscription = feed.subscribe("seller-a")
    feed.publish(_insert_for("seller-a"))

    feed.unsubscribe(subscription)

    assert [change.user_id async for change in subscription] == ["seller-a"]


def test_serialize_change_uses_iso_timestamps() -> None:
    change = _insert_for("seller-a")

    message = serialize_change(change)

    assert message["type"] == "notification-change"
    assert message["data"]["event"] == "INSERT"
    assert message["data"]["new"]["title"] == "New order"
    assert message["data"]["new"]["created_at"] is None
    assert message["data"]["old"] is None
