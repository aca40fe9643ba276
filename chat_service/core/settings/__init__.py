"""Modular Pydantic Settings v2 configuration.

Settings are split by domain (app/db/graphql/logging/redis), read from
environment variables with optional YAML conf.d overrides, cached by
LRU loaders, and frozen after validation.

Configuration precedence (highest to lowest):
    1. init kwargs (testing/overrides)
    2. YAML/conf.d files (optional, local/dev)
    3. Environment variables
    4. .env file
    5. secrets_dir
"""

from __future__ import annotations

from .loader import (
    clear_all_caches,
    get_app_settings,
    get_db_settings,
    get_graphql_settings,
    get_logging_settings,
    get_redis_settings,
)
from .unified import Settings, get_settings

__all__ = [
    "Settings",
    "clear_all_caches",
    "get_app_settings",
    "get_db_settings",
    "get_graphql_settings",
    "get_logging_settings",
    "get_redis_settings",
    "get_settings",
]
