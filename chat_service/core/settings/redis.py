"""Redis settings for cross-process subscription fan-out."""

from __future__ import annotations

from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .yaml_sources import create_redis_yaml_source


class RedisSettings(BaseSettings):
    """Redis pub/sub settings.

    Environment variables use REDIS_ prefix.
    Example: REDIS_URL="redis://localhost:6379/0"

    When no URL is configured, subscription events are delivered in-process only.
    """

    redis_url: str | None = Field(
        default=None,
        alias="REDIS_URL",
        description="Redis connection URL (redis://[username:password@]host:port/db)",
    )
    channel_prefix: str = Field(
        default="chat",
        min_length=1,
        max_length=50,
        description="Prefix prepended to every pub/sub channel name",
    )
    socket_timeout: float = Field(default=5.0, gt=0, le=60.0)

    model_config = SettingsConfigDict(
        env_prefix="REDIS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        populate_by_name=True,
        extra="ignore",
        env_ignore_empty=True,
    )

    @classmethod
    def settings_customise_sources(
        cls, settings_cls, init_settings, env_settings, dotenv_settings, file_secret_settings
    ):
        """Customize settings source precedence: init > yaml > env > dotenv > secrets."""
        return (
            init_settings,
            create_redis_yaml_source(settings_cls),
            env_settings,
            dotenv_settings,
            file_secret_settings,
        )

    @property
    def is_configured(self) -> bool:
        """Check if a Redis URL is set."""
        return bool(self.redis_url)

    def channel(self, name: str) -> str:
        """Return the fully-qualified channel name."""
        return f"{self.channel_prefix}:{name}"

    def client_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``redis.asyncio.from_url``."""
        return {"socket_timeout": self.socket_timeout, "decode_responses": True}
