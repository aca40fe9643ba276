"""Unified settings composition for convenient access.

Usage:
    from chat_service.core.settings import get_settings

    settings = get_settings()
    print(settings.app.port)
    print(settings.graphql.default_message_page_size)

Each nested settings class still loads from its own environment prefix
(APP_, DB_, GRAPHQL_, LOG_, REDIS_). Code that only needs one domain should
prefer the individual get_*_settings() loaders.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .app import AppSettings
from .graphql import GraphQLSettings
from .loader import (
    get_app_settings,
    get_db_settings,
    get_graphql_settings,
    get_logging_settings,
    get_redis_settings,
)
from .logs import LoggingSettings
from .postgres import PostgresSettings
from .redis import RedisSettings


class Settings(BaseSettings):
    """Unified settings composing all domain settings."""

    model_config = SettingsConfigDict(frozen=True, extra="ignore")

    app: AppSettings = Field(default_factory=get_app_settings)
    db: PostgresSettings = Field(default_factory=get_db_settings)
    graphql: GraphQLSettings = Field(default_factory=get_graphql_settings)
    logging: LoggingSettings = Field(default_factory=get_logging_settings)
    redis: RedisSettings = Field(default_factory=get_redis_settings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get unified settings instance (cached)."""
    return Settings()
