"""Shared fixtures for the seller notifications test-suite."""

from __future__ import annotations

import os
import sys
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

TEST_DB_PATH = Path(tempfile.gettempdir()) / "seller_notifications_test.db"
os.environ.setdefault("DATABASE_URL", f"sqlite:///{TEST_DB_PATH}")
os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("ACCESS_TOKEN_EXPIRE_MINUTES", "30")
os.environ.setdefault("APP_TIMEZONE", "UTC")

from seller_notifications.config import get_settings  # noqa: E402

get_settings.cache_clear()

from seller_notifications.application.use_cases.notifications import (  # noqa: E402
    NotificationAccessLayer,
)
from seller_notifications.domain.entities import AccountContext, Notification  # noqa: E402
from seller_notifications.infrastructure.database import (  # noqa: E402
    build_engine,
    build_session_factory,
    initialize_database,
)
from seller_notifications.infrastructure.notifications import (  # noqa: E402
    NotificationChangeFeed,
)
from seller_notifications.infrastructure.repositories import (  # noqa: E402
    NotificationRepository,
)


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def engine(tmp_path):
    """Provide an engine bound to a fresh SQLite file for each test."""

    test_engine = build_engine(f"sqlite:///{tmp_path / 'notifications.db'}")
    initialize_database(test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def feed() -> NotificationChangeFeed:
    return NotificationChangeFeed(queue_size=32, scoped=True)


@pytest.fixture
def access(session_factory, feed) -> NotificationAccessLayer:
    return NotificationAccessLayer(session_factory, feed=feed, default_limit=50)


@pytest.fixture
def seller() -> AccountContext:
    return AccountContext(user_id="seller-a", email="a@example.com")


@pytest.fixture
def other_seller() -> AccountContext:
    return AccountContext(user_id="seller-b", email="b@example.com")


@pytest.fixture
def seed(session_factory):
    """Insert notifications directly, one minute apart, newest first."""

    def _seed(
        user_id: str,
        count: int = 1,
        *,
        read: bool = False,
        notification_type: str = "order",
        start: datetime | None = None,
        title_prefix: str = "Notification",
    ) -> list[Notification]:
        newest = start or datetime.now(timezone.utc)
        created: list[Notification] = []
        with session_factory() as session:
            repository = NotificationRepository(session)
            for index in range(count):
                created.append(
                    repository.create(
                        Notification(
                            id=None,
                            user_id=user_id,
                            type=notification_type,
                            title=f"{title_prefix} {index}",
                            message=f"Message {index}",
                            read=read,
                            created_at=newest - timedelta(minutes=index),
                        )
                    )
                )
        return created

    return _seed
