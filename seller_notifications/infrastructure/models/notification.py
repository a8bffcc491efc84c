"""SQLAlchemy model for persisted notifications."""

from uuid import uuid4

from sqlalchemy import Boolean, Column, DateTime, Index, String, Text

from seller_notifications.infrastructure.database import Base
from seller_notifications.utils import now_in_app_naive_datetime


def _new_notification_id() -> str:
    return str(uuid4())


class NotificationModel(Base):
    """Database representation for seller notifications."""

    __tablename__ = "notifications"
    __table_args__ = (
        Index("ix_notifications_user_id_created_at", "user_id", "created_at"),
    )

    id = Column(String(36), primary_key=True, default=_new_notification_id)
    user_id = Column(String(64), nullable=False, index=True)
    type = Column(String(20), nullable=False)
    title = Column(String(200), nullable=False)
    message = Column(Text, nullable=True)
    link = Column(String(500), nullable=True)
    read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


__all__ = ["NotificationModel"]
