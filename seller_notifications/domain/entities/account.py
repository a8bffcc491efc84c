"""Domain entity describing the account a request acts on behalf of."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AccountContext:
    """Authenticated seller account resolved from a session token."""

    user_id: str
    email: str | None = None


__all__ = ["AccountContext"]
