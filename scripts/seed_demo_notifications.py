"""Utility script to seed demo notifications for a seller account."""

from __future__ import annotations

import argparse
from datetime import timedelta
from itertools import cycle

from sqlalchemy.exc import SQLAlchemyError

from seller_notifications.domain.entities import NOTIFICATION_TYPES, Notification
from seller_notifications.infrastructure.database import SessionLocal, initialize_database
from seller_notifications.infrastructure.repositories import NotificationRepository
from seller_notifications.utils import now_in_app_timezone

DEMO_MESSAGES = {
    "order": ("New order received", "Order #{n} was placed for 2 items.", "/products/dashboard"),
    "product": ("Your product got a review", "A customer left a 5 star rating.", None),
    "customer": ("New comment", "A customer asked about shipping times.", "/customers/overview"),
    "system": ("Payout processed", None, "/payouts"),
}


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for seeding."""

    parser = argparse.ArgumentParser(
        description="Insert demo notifications for a seller account.",
    )
    parser.add_argument("--user-id", required=True, help="Owning account identifier")
    parser.add_argument(
        "--count",
        type=int,
        default=12,
        help="Number of notifications to create (default: 12)",
    )
    parser.add_argument(
        "--read-ratio",
        type=float,
        default=0.25,
        help="Fraction of the seeded notifications already marked as read",
    )
    return parser.parse_args()


def build_demo_notifications(user_id: str, count: int, read_ratio: float) -> list[Notification]:
    """Return ``count`` demo notifications spread over the last few days."""

    now = now_in_app_timezone()
    read_cutoff = int(count * read_ratio)
    notifications: list[Notification] = []
    for index, notification_type in zip(range(count), cycle(NOTIFICATION_TYPES)):
        title, message, link = DEMO_MESSAGES[notification_type]
        notifications.append(
            Notification(
                id=None,
                user_id=user_id,
                type=notification_type,
                title=title,
                message=message.format(n=1000 + index) if message else None,
                link=link,
                read=index >= count - read_cutoff,
                created_at=now - timedelta(hours=index * 7),
            )
        )
    return notifications


def main() -> None:
    args = parse_args()
    if args.count <= 0:
        raise SystemExit("--count must be a positive integer.")

    initialize_database()

    session = SessionLocal()
    try:
        repository = NotificationRepository(session)
        created = [
            repository.create(notification)
            for notification in build_demo_notifications(
                args.user_id, args.count, args.read_ratio
            )
        ]
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Could not seed notifications: {exc}") from exc
    else:
        print(f"Seeded {len(created)} notifications for user {args.user_id}.")
    finally:
        session.close()


if __name__ == "__main__":
    main()
