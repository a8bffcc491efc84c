"""FastAPI dependency utilities."""

from functools import lru_cache

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from seller_notifications.application.use_cases.notifications import NotificationAccessLayer
from seller_notifications.domain.entities import AccountContext
from seller_notifications.infrastructure.security import account_from_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token", auto_error=False)


def resolve_account(token: str | None) -> AccountContext | None:
    """Resolve the account carried by ``token``; ``None`` when no token was sent."""

    if not token:
        return None
    try:
        return account_from_token(token)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc


def get_account_context(token: str | None = Depends(oauth2_scheme)) -> AccountContext | None:
    """Return the account of the current session, if any.

    A missing session is not rejected here; the access layer reports it as
    ``NotAuthenticated`` so every operation keeps a single failure path.
    """

    return resolve_account(token)


@lru_cache
def get_access_layer() -> NotificationAccessLayer:
    """Return the shared :class:`NotificationAccessLayer` instance."""

    return NotificationAccessLayer()
