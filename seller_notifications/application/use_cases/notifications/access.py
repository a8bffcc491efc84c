"""Notification access layer.

Translates domain operations into repository calls and normalizes every
outcome into an :class:`OperationResult`. Nothing raised by the persistence
layer crosses this boundary; callers inspect ``result.error`` instead.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import TypeVar

from anyio import to_thread
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from seller_notifications.config import get_settings
from seller_notifications.domain.entities import (
    CHANGE_DELETE,
    CHANGE_INSERT,
    CHANGE_UPDATE,
    NOTIFICATION_TYPE_SYSTEM,
    NOTIFICATION_TYPES,
    AccountContext,
    Notification,
    NotificationChange,
)
from seller_notifications.domain.errors import (
    BackendError,
    NotAuthenticatedError,
    NotFoundError,
    NotificationError,
)
from seller_notifications.domain.results import OperationResult
from seller_notifications.infrastructure.notifications import (
    NotificationChangeFeed,
    Subscription,
    notification_feed,
)
from seller_notifications.infrastructure.repositories import NotificationRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class ListOptions:
    """Filters and pagination accepted by :meth:`NotificationAccessLayer.list`.

    ``limit`` falls back to the configured default (50) when omitted.
    """

    limit: int | None = None
    offset: int = 0
    type: str | None = None
    unread_only: bool = False


@dataclass(frozen=True)
class NotificationFields:
    """Caller-provided fields of a notification about to be created."""

    title: str
    type: str = NOTIFICATION_TYPE_SYSTEM
    message: str | None = None
    link: str | None = None


class NotificationAccessLayer:
    """Stateless façade over the notifications table and its change feed."""

    def __init__(
        self,
        session_factory: sessionmaker[Session] | None = None,
        *,
        feed: NotificationChangeFeed | None = None,
        default_limit: int | None = None,
    ) -> None:
        if session_factory is None:
            from seller_notifications.infrastructure.database import SessionLocal

            session_factory = SessionLocal
        self._session_factory = session_factory
        self._feed = feed or notification_feed
        self._default_limit = default_limit or get_settings().notifications_default_limit

    @property
    def feed(self) -> NotificationChangeFeed:
        return self._feed

    async def list(
        self, account: AccountContext | None, options: ListOptions | None = None
    ) -> OperationResult[Sequence[Notification]]:
        """Return the account's notifications, newest first."""

        options = options or ListOptions()
        limit = self._default_limit if options.limit is None else options.limit

        def work(repository: NotificationRepository) -> Sequence[Notification]:
            if limit <= 0:
                raise ValueError("limit must be a positive integer")
            if options.offset < 0:
                raise ValueError("offset cannot be negative")
            _validate_type(options.type, allow_empty=True)
            return repository.list_for_user(
                account.user_id,
                limit=limit,
                offset=options.offset,
                notification_type=options.type,
                unread_only=options.unread_only,
            )

        return await self._execute("fetching notifications", account, work)

    async def get_by_id(
        self, account: AccountContext | None, notification_id: str
    ) -> OperationResult[Notification]:
        def work(repository: NotificationRepository) -> Notification:
            notification = repository.get(notification_id, user_id=account.user_id)
            if notification is None:
                raise NotFoundError(notification_id)
            return notification

        return await self._execute("fetching notification", account, work)

    async def create(
        self, account: AccountContext | None, fields: NotificationFields
    ) -> OperationResult[Notification]:
        """Insert a new unread notification owned by ``account``."""

        def work(repository: NotificationRepository) -> Notification:
            title = (fields.title or "").strip()
            if not title:
                raise ValueError("title is required")
            _validate_type(fields.type)
            return repository.create(
                Notification(
                    id=None,
                    user_id=account.user_id,
                    type=fields.type,
                    title=title,
                    message=fields.message or None,
                    link=fields.link or None,
                    read=False,
                )
            )

        result = await self._execute("creating notification", account, work)
        if result.ok:
            self._publish(CHANGE_INSERT, [result.data], new=True)
        return result

    async def mark_read(
        self, account: AccountContext | None, notification_id: str
    ) -> OperationResult[Notification]:
        """Set ``read`` on one notification; repeating the call is harmless."""

        def work(repository: NotificationRepository) -> Notification:
            notification = repository.mark_as_read(notification_id, user_id=account.user_id)
            if notification is None:
                raise NotFoundError(notification_id)
            return notification

        result = await self._execute("marking notification as read", account, work)
        if result.ok:
            self._publish(CHANGE_UPDATE, [result.data], new=True)
        return result

    async def mark_many_read(
        self, account: AccountContext | None, notification_ids: Iterable[str]
    ) -> OperationResult[Sequence[Notification]]:
        ids = list(notification_ids)

        def work(repository: NotificationRepository) -> Sequence[Notification]:
            return repository.mark_many_as_read(ids, user_id=account.user_id)

        result = await self._execute("marking notifications as read", account, work)
        if result.ok:
            self._publish(CHANGE_UPDATE, result.data, new=True)
        return result

    async def mark_all_read(
        self, account: AccountContext | None
    ) -> OperationResult[Sequence[Notification]]:
        def work(repository: NotificationRepository) -> Sequence[Notification]:
            return repository.mark_all_as_read(account.user_id)

        result = await self._execute("marking all notifications as read", account, work)
        if result.ok:
            self._publish(CHANGE_UPDATE, result.data, new=True)
        return result

    async def delete(
        self, account: AccountContext | None, notification_id: str
    ) -> OperationResult[Notification]:
        def work(repository: NotificationRepository) -> Notification:
            notification = repository.delete(notification_id, user_id=account.user_id)
            if notification is None:
                raise NotFoundError(notification_id)
            return notification

        result = await self._execute("deleting notification", account, work)
        if result.ok:
            self._publish(CHANGE_DELETE, [result.data], new=False)
        return result

    async def delete_many(
        self, account: AccountContext | None, notification_ids: Iterable[str]
    ) -> OperationResult[Sequence[Notification]]:
        ids = list(notification_ids)

        def work(repository: NotificationRepository) -> Sequence[Notification]:
            return repository.delete_many(ids, user_id=account.user_id)

        result = await self._execute("deleting notifications", account, work)
        if result.ok:
            self._publish(CHANGE_DELETE, result.data, new=False)
        return result

    async def delete_all(
        self, account: AccountContext | None
    ) -> OperationResult[Sequence[Notification]]:
        def work(repository: NotificationRepository) -> Sequence[Notification]:
            return repository.delete_all_for_user(account.user_id)

        result = await self._execute("deleting all notifications", account, work)
        if result.ok:
            self._publish(CHANGE_DELETE, result.data, new=False)
        return result

    async def count(
        self, account: AccountContext | None, *, unread_only: bool = False
    ) -> OperationResult[int]:
        def work(repository: NotificationRepository) -> int:
            return repository.count_for_user(account.user_id, unread_only=unread_only)

        return await self._execute("getting notification count", account, work)

    def subscribe(
        self, account: AccountContext | None, *, scoped: bool | None = None
    ) -> OperationResult[Subscription]:
        """Open a change feed subscription for ``account``.

        The returned handle must be released with :meth:`unsubscribe`.
        """

        if account is None:
            error = NotAuthenticatedError()
            logger.error("Error subscribing to notifications: %s", error.message)
            return OperationResult.failure(error)
        return OperationResult.success(self._feed.subscribe(account.user_id, scoped=scoped))

    def unsubscribe(self, subscription: Subscription | None) -> None:
        self._feed.unsubscribe(subscription)

    async def _execute(
        self,
        description: str,
        account: AccountContext | None,
        work: Callable[[NotificationRepository], T],
    ) -> OperationResult[T]:
        if account is None:
            error = NotAuthenticatedError()
            logger.error("Error %s: %s", description, error.message)
            return OperationResult.failure(error)

        try:
            data = await to_thread.run_sync(self._run_in_session, work)
        except NotificationError as exc:
            logger.error("Error %s: %s", description, exc.message)
            return OperationResult.failure(exc)
        except (SQLAlchemyError, ValueError) as exc:
            logger.error("Error %s: %s", description, exc)
            return OperationResult.failure(BackendError.from_exception(exc))
        return OperationResult.success(data)

    def _run_in_session(self, work: Callable[[NotificationRepository], T]) -> T:
        session = self._session_factory()
        try:
            return work(NotificationRepository(session))
        except SQLAlchemyError:
            session.rollback()
            raise
        finally:
            session.close()

    def _publish(self, event: str, notifications: Sequence[Notification], *, new: bool) -> None:
        for notification in notifications:
            change = NotificationChange(
                event=event,
                user_id=notification.user_id,
                new=notification if new else None,
                old=None if new else notification,
            )
            self._feed.publish(change)


def _validate_type(notification_type: str | None, *, allow_empty: bool = False) -> None:
    if allow_empty and not notification_type:
        return
    if notification_type not in NOTIFICATION_TYPES:
        allowed = ", ".join(NOTIFICATION_TYPES)
        raise ValueError(f"Invalid notification type '{notification_type}'. Expected one of: {allowed}")


__all__ = ["ListOptions", "NotificationAccessLayer", "NotificationFields"]
