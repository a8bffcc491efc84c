"""Utility script to remove demo notifications from the database."""

from __future__ import annotations

import argparse

from sqlalchemy.exc import SQLAlchemyError

from seller_notifications.infrastructure.database import SessionLocal, initialize_database
from seller_notifications.infrastructure.models import NotificationModel
from seller_notifications.infrastructure.repositories import NotificationRepository


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Delete notifications for one account, or for every account.",
    )
    parser.add_argument(
        "--user-id",
        default=None,
        help="Only delete notifications owned by this account",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    initialize_database()

    session = SessionLocal()
    try:
        if args.user_id:
            deleted = len(NotificationRepository(session).delete_all_for_user(args.user_id))
        else:
            deleted = session.query(NotificationModel).delete(synchronize_session=False)
            session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Could not clear notifications: {exc}") from exc
    else:
        print(f"Cleared {deleted} notifications.")
    finally:
        session.close()


if __name__ == "__main__":
    main()
