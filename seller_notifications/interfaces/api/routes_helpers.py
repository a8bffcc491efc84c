"""Helper utilities shared across API route handlers."""

from typing import TypeVar

from fastapi import HTTPException, status

from seller_notifications.domain.errors import (
    NotAuthenticatedError,
    NotFoundError,
    NotificationError,
)
from seller_notifications.domain.results import OperationResult

T = TypeVar("T")


def status_for_error(error: NotificationError) -> int:
    """Return the HTTP status code that represents ``error``."""

    if isinstance(error, NotAuthenticatedError):
        return status.HTTP_401_UNAUTHORIZED
    if isinstance(error, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    return status.HTTP_400_BAD_REQUEST


def unwrap_result(result: OperationResult[T]) -> T:
    """Return ``result.data`` or raise the matching :class:`HTTPException`."""

    if result.error is None:
        return result.data

    error = result.error
    headers = None
    if isinstance(error, NotAuthenticatedError):
        headers = {"WWW-Authenticate": "Bearer"}
    raise HTTPException(
        status_code=status_for_error(error),
        detail={"code": error.code, "message": error.message},
        headers=headers,
    )
