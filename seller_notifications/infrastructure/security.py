"""Security helpers for session token generation."""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from seller_notifications.config import get_settings
from seller_notifications.domain.entities import AccountContext

_ALGORITHM = "HS256"


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    settings = get_settings()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    return jwt.encode({**data, "exp": expire}, settings.secret_key, algorithm=_ALGORITHM)


def decode_access_token(token: str) -> dict:
    settings = get_settings()
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[_ALGORITHM])
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc


def create_account_token(account: AccountContext, expires_delta: timedelta | None = None) -> str:
    """Issue a session token whose subject is ``account``."""

    claims: dict[str, str] = {"sub": account.user_id}
    if account.email:
        claims["email"] = account.email
    return create_access_token(claims, expires_delta)


def account_from_token(token: str) -> AccountContext:
    """Resolve the :class:`AccountContext` carried by ``token``."""

    payload = decode_access_token(token)
    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject:
        raise ValueError("Could not validate credentials")
    email = payload.get("email")
    return AccountContext(user_id=subject, email=email if isinstance(email, str) else None)
