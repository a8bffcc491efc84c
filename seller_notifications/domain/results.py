"""Result pair returned by every notification access layer operation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from .errors import NotificationError

T = TypeVar("T")


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """Either ``data`` or ``error`` is populated, never both and never neither."""

    data: T | None = None
    error: NotificationError | None = None

    def __post_init__(self) -> None:
        if self.error is not None and self.data is not None:
            raise ValueError("OperationResult cannot hold both data and an error")
        if self.error is None and self.data is None:
            raise ValueError("OperationResult needs either data or an error")

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, data: T) -> "OperationResult[T]":
        return cls(data=data, error=None)

    @classmethod
    def failure(cls, error: NotificationError) -> "OperationResult[T]":
        return cls(data=None, error=error)


__all__ = ["OperationResult"]
