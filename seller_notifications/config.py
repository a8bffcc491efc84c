"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./notifications.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        description="Secret key for signing JWT tokens", min_length=1
    )
    access_token_expire_minutes: int = Field(
        default=60,
        description="Number of minutes before access tokens expire",
        gt=0,
    )
    app_timezone: str = Field(
        default="UTC",
        description="Timezone used to stamp and render notification timestamps",
    )
    notifications_default_limit: int = Field(
        default=50,
        description="Number of rows returned by a list call without an explicit limit",
        gt=0,
    )
    notifications_page_size: int = Field(
        default=10,
        description="Page size used by the full notification list",
        gt=0,
    )
    notifications_dropdown_limit: int = Field(
        default=5,
        description="Number of notifications shown in the header dropdown",
        gt=0,
    )
    notifications_feed_scoped: bool = Field(
        default=True,
        description="Deliver change events only for rows owned by the subscriber",
    )
    notifications_feed_queue_size: int = Field(
        default=256,
        description="Pending change events buffered per subscriber before it is dropped",
        gt=0,
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
