"""In-process change feed for the notifications table.

Each subscriber owns a bounded queue. Publishing never blocks: when a
subscriber falls behind, its oldest queued event is discarded to make room.
Subscriptions only end through :meth:`NotificationChangeFeed.unsubscribe`.
"""

from __future__ import annotations

import asyncio
import logging
from uuid import uuid4

from seller_notifications.config import get_settings
from seller_notifications.domain.entities import NotificationChange

logger = logging.getLogger(__name__)

_CLOSED = object()


class Subscription:
    """Cancellable handle yielding :class:`NotificationChange` events.

    Iterate it with ``async for``; iteration ends once the handle is closed.
    """

    def __init__(
        self,
        feed: "NotificationChangeFeed",
        *,
        user_id: str,
        scoped: bool,
        queue_size: int,
    ) -> None:
        self.id = uuid4().hex
        self.user_id = user_id
        self.scoped = scoped
        self._feed = feed
        self._queue: asyncio.Queue = asyncio.Queue(maxsize=queue_size)
        self._closed = False
        self.dropped = 0

    @property
    def closed(self) -> bool:
        return self._closed

    def matches(self, change: NotificationChange) -> bool:
        """Return whether ``change`` should be delivered to this subscriber."""

        return not self.scoped or change.user_id == self.user_id

    def offer(self, change: NotificationChange) -> bool:
        """Queue ``change`` without waiting, evicting the oldest event when full.

        Returns ``False`` only when the handle is already closed.
        """

        if self._closed:
            return False
        while True:
            try:
                self._queue.put_nowait(change)
            except asyncio.QueueFull:
                self._queue.get_nowait()
                self.dropped += 1
                continue
            return True

    def close(self) -> None:
        """Release the handle and wake up any pending iteration."""

        if self._closed:
            return
        self._closed = True
        self._feed._remove(self)
        # A full queue has no pending reader; iteration stops once it drains.
        try:
            self._queue.put_nowait(_CLOSED)
        except asyncio.QueueFull:
            pass

    def __aiter__(self) -> "Subscription":
        return self

    async def __anext__(self) -> NotificationChange:
        if self._closed and self._queue.empty():
            raise StopAsyncIteration
        item = await self._queue.get()
        if item is _CLOSED:
            raise StopAsyncIteration
        return item


class NotificationChangeFeed:
    """Publish-subscribe hub for inserts, updates and deletes of notifications."""

    def __init__(self, *, queue_size: int = 256, scoped: bool = True) -> None:
        self._subscriptions: dict[str, Subscription] = {}
        self._queue_size = queue_size
        self.scoped = scoped

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def subscribe(self, user_id: str, *, scoped: bool | None = None) -> Subscription:
        """Open a new subscription on behalf of ``user_id``.

        ``scoped`` overrides the feed-wide policy for this subscription only.
        """

        subscription = Subscription(
            self,
            user_id=user_id,
            scoped=self.scoped if scoped is None else scoped,
            queue_size=self._queue_size,
        )
        self._subscriptions[subscription.id] = subscription
        logger.info(
            "Notification feed subscriber connected (user=%s, scoped=%s), total=%d",
            user_id,
            subscription.scoped,
            self.subscriber_count,
        )
        return subscription

    def unsubscribe(self, subscription: Subscription | None) -> None:
        """Close ``subscription``; ``None`` and repeated calls are ignored."""

        if subscription is None:
            return
        subscription.close()

    def publish(self, change: NotificationChange) -> int:
        """Deliver ``change`` to every matching subscriber and return how many got it."""

        delivered = 0
        for subscription in list(self._subscriptions.values()):
            if not subscription.matches(change):
                continue
            dropped_before = subscription.dropped
            if subscription.offer(change):
                delivered += 1
            if subscription.dropped > dropped_before:
                logger.warning(
                    "Notification feed subscriber %s is behind, discarded its oldest event "
                    "(discarded so far: %d)",
                    subscription.id,
                    subscription.dropped,
                )

        logger.debug(
            "Notification change published: event=%s user=%s delivered=%d",
            change.event,
            change.user_id,
            delivered,
        )
        return delivered

    def _remove(self, subscription: Subscription) -> None:
        if self._subscriptions.pop(subscription.id, None) is not None:
            logger.info(
                "Notification feed subscriber disconnected, remaining=%d",
                self.subscriber_count,
            )


def _build_default_feed() -> NotificationChangeFeed:
    settings = get_settings()
    return NotificationChangeFeed(
        queue_size=settings.notifications_feed_queue_size,
        scoped=settings.notifications_feed_scoped,
    )


notification_feed = _build_default_feed()


__all__ = ["NotificationChangeFeed", "Subscription", "notification_feed"]
