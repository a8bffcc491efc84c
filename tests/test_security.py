"""Tests for session token helpers."""

from __future__ import annotations

from datetime import timedelta

import pytest

from seller_notifications.domain.entities import AccountContext
from seller_notifications.infrastructure.security import (
    account_from_token,
    create_access_token,
    create_account_token,
)


def test_account_token_round_trip() -> None:
    account = AccountContext(user_id="seller-a", email="a@example.com")

    assert account_from_token(create_account_token(account)) == account


def test_expired_token_is_rejected() -> None:
    token = create_account_token(
        AccountContext(user_id="seller-a"), expires_delta=timedelta(minutes=-1)
    )

    with pytest.raises(ValueError):
        account_from_token(token)


def test_token_without_subject_is_rejected() -> None:
    with pytest.raises(ValueError):
        account_from_token(create_access_token({"email": "a@example.com"}))
