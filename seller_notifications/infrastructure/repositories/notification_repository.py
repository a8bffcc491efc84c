"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Iterable

from sqlalchemy import false, func
from sqlalchemy.orm import Query, Session

from seller_notifications.domain.entities import Notification
from seller_notifications.infrastructure.models import NotificationModel
from seller_notifications.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)


class NotificationRepository:
    """Provide CRUD operations for :class:`Notification` objects.

    Every query is filtered by the owning ``user_id``; the repository is the
    only place that row ownership is enforced.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_user(
        self,
        user_id: str,
        *,
        limit: int | None = 50,
        offset: int = 0,
        notification_type: str | None = None,
        unread_only: bool = False,
    ) -> Sequence[Notification]:
        query = self._filtered(
            user_id, notification_type=notification_type, unread_only=unread_only
        )
        query = query.order_by(NotificationModel.created_at.desc())
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def count_for_user(
        self,
        user_id: str,
        *,
        notification_type: str | None = None,
        unread_only: bool = False,
    ) -> int:
        query = self._filtered(
            user_id, notification_type=notification_type, unread_only=unread_only
        )
        return query.with_entities(func.count(NotificationModel.id)).scalar() or 0

    def get(self, notification_id: str, *, user_id: str) -> Notification | None:
        model = self._get_model(notification_id, user_id=user_id)
        if model is None:
            return None
        return self._to_entity(model)

    def create(self, notification: Notification) -> Notification:
        model = NotificationModel()
        self._apply_entity_to_model(model, notification)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def mark_as_read(self, notification_id: str, *, user_id: str) -> Notification | None:
        model = self._get_model(notification_id, user_id=user_id)
        if model is None:
            return None
        model.read = True
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def mark_many_as_read(
        self, notification_ids: Iterable[str], *, user_id: str
    ) -> Sequence[Notification]:
        ids = _clean_ids(notification_ids)
        if not ids:
            return []
        models = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.id.in_(ids), NotificationModel.user_id == user_id)
            .all()
        )
        return self._mark_models_read(models)

    def mark_all_as_read(self, user_id: str) -> Sequence[Notification]:
        models = self._filtered(user_id, unread_only=True).all()
        return self._mark_models_read(models)

    def delete(self, notification_id: str, *, user_id: str) -> Notification | None:
        model = self._get_model(notification_id, user_id=user_id)
        if model is None:
            return None
        entity = self._to_entity(model)
        self.session.delete(model)
        self.session.commit()
        return entity

    def delete_many(
        self, notification_ids: Iterable[str], *, user_id: str
    ) -> Sequence[Notification]:
        ids = _clean_ids(notification_ids)
        if not ids:
            return []
        models = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.id.in_(ids), NotificationModel.user_id == user_id)
            .all()
        )
        return self._delete_models(models)

    def delete_all_for_user(self, user_id: str) -> Sequence[Notification]:
        models = self._filtered(user_id).all()
        return self._delete_models(models)

    def _filtered(
        self,
        user_id: str,
        *,
        notification_type: str | None = None,
        unread_only: bool = False,
    ) -> Query:
        query = self.session.query(NotificationModel).filter(
            NotificationModel.user_id == user_id
        )
        if notification_type:
            query = query.filter(NotificationModel.type == notification_type)
        if unread_only:
            query = query.filter(NotificationModel.read == false())
        return query

    def _get_model(self, notification_id: str, *, user_id: str) -> NotificationModel | None:
        return (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.id == notification_id,
                NotificationModel.user_id == user_id,
            )
            .one_or_none()
        )

    def _mark_models_read(self, models: Sequence[NotificationModel]) -> Sequence[Notification]:
        for model in models:
            model.read = True
        self.session.commit()
        for model in models:
            self.session.refresh(model)
        return [self._to_entity(model) for model in models]

    def _delete_models(self, models: Sequence[NotificationModel]) -> Sequence[Notification]:
        entities = [self._to_entity(model) for model in models]
        for model in models:
            self.session.delete(model)
        self.session.commit()
        return entities

    @staticmethod
    def _apply_entity_to_model(model: NotificationModel, notification: Notification) -> None:
        if notification.id is not None:
            model.id = notification.id
        model.created_at = (
            ensure_app_naive_datetime(notification.created_at)
            or ensure_app_naive_datetime(now_in_app_timezone())
        )
        model.user_id = notification.user_id
        model.type = notification.type
        model.title = notification.title
        model.message = notification.message
        model.link = notification.link
        model.read = bool(notification.read)

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            user_id=model.user_id,
            type=model.type,
            title=model.title,
            message=model.message,
            link=model.link,
            read=bool(model.read),
            created_at=ensure_app_timezone(model.created_at),
        )


def _clean_ids(notification_ids: Iterable[str]) -> list[str]:
    unique: list[str] = []
    for notification_id in notification_ids:
        if notification_id and notification_id not in unique:
            unique.append(notification_id)
    return unique


__all__ = ["NotificationRepository"]
