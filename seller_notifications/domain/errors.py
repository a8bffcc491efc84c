"""Error taxonomy reported by the notification access layer."""

from __future__ import annotations


class NotificationError(Exception):
    """Base class for failures reported by notification operations."""

    code = "notification_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotAuthenticatedError(NotificationError):
    """Raised when an account-scoped operation runs without a session."""

    code = "not_authenticated"

    def __init__(self, message: str = "User not authenticated") -> None:
        super().__init__(message)


class NotFoundError(NotificationError):
    """Raised when a single-row lookup does not match any notification."""

    code = "not_found"

    def __init__(self, notification_id: str) -> None:
        super().__init__(f"Notification with id {notification_id} not found")
        self.notification_id = notification_id


class BackendError(NotificationError):
    """Opaque passthrough of whatever the persistence layer reported."""

    code = "backend_error"

    def __init__(self, message: str, *, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause

    @classmethod
    def from_exception(cls, exc: BaseException) -> "BackendError":
        return cls(str(exc) or exc.__class__.__name__, cause=exc)


__all__ = [
    "NotificationError",
    "NotAuthenticatedError",
    "NotFoundError",
    "BackendError",
]
