"""Tests for the dropdown and full-list notification surfaces."""

from __future__ import annotations

from collections.abc import Callable
from datetime import timedelta

import anyio
import pytest

from seller_notifications.application.use_cases.notifications import NotificationFields
from seller_notifications.domain.entities import NotificationChange
from seller_notifications.interfaces.surfaces import (
    DEFAULT_NOTIFICATION_LINK,
    GENERIC_WRITE_ERROR,
    NotificationDropdown,
    NotificationList,
    NotificationView,
    SurfaceState,
    get_notification_style,
)

pytestmark = pytest.mark.anyio


async def _wait_until(predicate: Callable[[], bool], timeout: float = 5) -> None:
    with anyio.fail_after(timeout):
        while not predicate():
            await anyio.sleep(0.01)


async def test_mount_loads_first_page_and_unread_count(access, seller, seed) -> None:
    seed(seller.user_id, 7)
    seed(seller.user_id, 2, read=True)
    dropdown = NotificationDropdown(access, seller, limit=5)

    assert dropdown.state is SurfaceState.IDLE
    await dropdown.mount()

    assert dropdown.state is SurfaceState.LOADED
    assert len(dropdown.items) == 5
    assert dropdown.unread_count == 7
    assert dropdown.badge == 7
    assert dropdown.title == "Notification (7)"
    assert dropdown.subscription is not None
    dropdown.unmount()
    assert access.feed.subscriber_count == 0


async def test_read_failures_degrade_to_empty_list(access) -> None:
    surface = NotificationList(access, None)

    await surface.mount()

    assert surface.state is SurfaceState.LOAD_ERROR
    assert surface.items == []
    assert surface.unread_count == 0
    assert surface.subscription is None


async def test_any_change_triggers_a_full_refresh(access, seller, seed) -> None:
    seed(seller.user_id, 2)
    surface = NotificationList(access, seller)
    await surface.mount()
    refreshes = surface.refresh_count

    await surface.apply_change(NotificationChange(event="UPDATE", user_id="anyone"))

    assert surface.refresh_count == refreshes + 1
    assert surface.changes_received == 1
    surface.unmount()


async def test_pagination_boundary_costs_one_empty_fetch(access, seller, seed) -> None:
    seed(seller.user_id, 10)
    surface = NotificationList(access, seller, page_size=10)

    await surface.mount()
    assert len(surface.items) == 10
    assert surface.has_more is True

    await surface.load_more()
    assert len(surface.items) == 10
    assert surface.has_more is False
    assert surface.loading_more is False
    surface.unmount()


async def test_load_more_appends_next_page(access, seller, seed) -> None:
    seeded = seed(seller.user_id, 13)
    surface = NotificationList(access, seller, page_size=10)

    await surface.mount()
    await surface.load_more()

    assert [n.id for n in surface.items] == [n.id for n in seeded]
    assert surface.has_more is False

    seed(seller.user_id, 3, start=seeded[-1].created_at - timedelta(hours=1))
    await surface.load_more()
    assert len(surface.items) == 13
    surface.unmount()


async def test_new_sorting_lists_only_unread(access, seller, seed) -> None:
    seed(seller.user_id, 3)
    seed(seller.user_id, 4, read=True)
    surface = NotificationList(access, seller)
    await surface.mount()
    assert len(surface.items) == 7
    assert surface.title == "Notifications"

    await surface.set_sorting("New")

    assert len(surface.items) == 3
    assert surface.title == "New (3)"
    with pytest.raises(ValueError):
        await surface.set_sorting("Oldest")
    surface.unmount()


async def test_filters_map_to_the_first_known_type(access, seller, seed) -> None:
    seed(seller.user_id, 2, notification_type="order")
    seed(seller.user_id, 3, notification_type="customer")
    surface = NotificationList(access, seller)
    await surface.mount()

    await surface.set_filters(["Unknown", "Purchases", "Comments"])

    assert surface.notification_type == "order"
    assert len(surface.items) == 2
    surface.unmount()


async def test_opening_an_unread_item_marks_it_read(access, seller, seed) -> None:
    (notification,) = seed(seller.user_id)
    dropdown = NotificationDropdown(access, seller)
    await dropdown.mount()
    dropdown.toggle()

    link = await dropdown.open_item(dropdown.items[0])

    assert link == DEFAULT_NOTIFICATION_LINK
    assert dropdown.visible is False
    assert dropdown.unread_count == 0
    assert dropdown.items[0].read is True
    assert (await access.get_by_id(seller, notification.id)).data.read is True
    dropdown.unmount()


async def test_mark_all_read_refreshes_badge(access, seller, seed) -> None:
    seed(seller.user_id, 3)
    dropdown = NotificationDropdown(access, seller)
    await dropdown.mount()

    result = await dropdown.mark_all_read()

    assert result.ok
    assert dropdown.unread_count == 0
    assert dropdown.badge is None
    assert dropdown.title == "Notification"
    dropdown.unmount()


async def test_failed_write_alerts_and_still_refreshes(access, seller, seed) -> None:
    (notification,) = seed(seller.user_id)
    alerts: list[str] = []
    surface = NotificationList(access, seller, alert=alerts.append)
    await surface.mount()
    await access.delete(seller, notification.id)
    refreshes = surface.refresh_count

    result = await surface.delete_item(notification)

    assert not result.ok
    assert alerts == [result.error.message]
    assert surface.refresh_count == refreshes + 1
    assert surface.items == []
    surface.unmount()


async def test_write_without_session_alerts_backend_message(access) -> None:
    alerts: list[str] = []
    dropdown = NotificationDropdown(access, None, alert=alerts.append)

    await dropdown.mark_all_read()

    assert alerts == ["User not authenticated"]
    assert alerts[0] != GENERIC_WRITE_ERROR
    assert dropdown.refresh_count == 1


async def test_delete_all_requires_confirmation(access, seller, seed) -> None:
    seed(seller.user_id, 2)
    answers = iter([False, True])
    dropdown = NotificationDropdown(access, seller, confirm=lambda _message: next(answers))
    await dropdown.mount()

    assert await dropdown.delete_all() is None
    assert len(dropdown.items) == 2

    result = await dropdown.delete_all()
    assert result.ok
    assert dropdown.items == []
    dropdown.unmount()


async def test_scoped_surface_ignores_other_accounts(
    access, seller, other_seller, seed
) -> None:
    seed(seller.user_id, 1)
    surface = NotificationList(access, seller)

    async with surface.mounted():
        await access.create(other_seller, NotificationFields(title="Not yours"))
        await access.create(seller, NotificationFields(title="Yours"))
        await _wait_until(lambda: any(n.title == "Yours" for n in surface.items))

        assert surface.changes_received == 1

    assert access.feed.subscriber_count == 0


async def test_unscoped_surface_refetches_for_any_account(
    access, seller, other_seller, seed
) -> None:
    seed(seller.user_id, 1)
    surface = NotificationList(access, seller, scoped=False)

    async with surface.mounted():
        await access.create(other_seller, NotificationFields(title="Not yours"))
        await _wait_until(lambda: surface.changes_received == 1)
        await _wait_until(lambda: surface.state is SurfaceState.LOADED)

        assert [n.title for n in surface.items] == ["Notification 0"]


async def test_each_mounted_surface_refetches_independently(
    access, seller, seed
) -> None:
    seed(seller.user_id, 1)
    dropdown = NotificationDropdown(access, seller)
    full_list = NotificationList(access, seller)

    async with dropdown.mounted(), full_list.mounted():
        assert access.feed.subscriber_count == 2
        await access.create(seller, NotificationFields(title="Fresh"))
        await _wait_until(
            lambda: dropdown.changes_received == 1 and full_list.changes_received == 1
        )
        await _wait_until(lambda: dropdown.unread_count == 2 and full_list.unread_count == 2)

    assert access.feed.subscriber_count == 0


def test_views_apply_display_rules(seller) -> None:
    from datetime import datetime, timedelta, timezone

    from seller_notifications.domain.entities import Notification

    now = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)
    with_message = Notification(
        id="1",
        user_id=seller.user_id,
        type="customer",
        title="New comment",
        message="Nice product",
        link="/comments",
        created_at=now - timedelta(minutes=45),
    )
    bare = Notification(
        id="2",
        user_id=seller.user_id,
        type="unknown",
        title="System",
        read=True,
        created_at=now - timedelta(hours=3),
    )

    first = NotificationView.from_notification(with_message, now=now)
    second = NotificationView.from_notification(bare, now=now)

    assert first.time_ago == "45m"
    assert first.link == "/comments"
    assert first.show_reply_control is True
    assert first.is_new is True
    assert first.style == get_notification_style("customer")
    assert second.time_ago == "3h"
    assert second.link == DEFAULT_NOTIFICATION_LINK
    assert second.show_reply_control is False
    assert second.style.color == "#FF6A55"


async def test_bulk_write_larger_than_feed_queue_keeps_surface_live(
    access, seller, seed
) -> None:
    seed(seller.user_id, 40)
    dropdown = NotificationDropdown(access, seller)

    async with dropdown.mounted():
        await dropdown.mark_all_read()
        assert access.feed.subscriber_count == 1
        assert dropdown.subscription.closed is False

        await access.create(seller, NotificationFields(title="Fresh after bulk"))
        await _wait_until(
            lambda: dropdown.unread_count == 1
            and dropdown.items[0].title == "Fresh after bulk"
        )

    assert access.feed.subscriber_count == 0
