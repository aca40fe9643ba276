"""YAML config source with conf.d directory support.

Each settings domain can be configured from an optional base file and a
directory of override files that are applied in alphabetical order:

- conf/app.yaml, conf/app.d/*.yaml
- conf/db.yaml, conf/db.d/*.yaml
- conf/graphql.yaml, conf/graphql.d/*.yaml
- conf/logging.yaml, conf/logging.d/*.yaml
- conf/redis.yaml, conf/redis.d/*.yaml

Missing files are skipped, so a checkout without a ``conf`` directory runs
purely from environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic_settings.sources.providers.yaml import YamlConfigSettingsSource

if TYPE_CHECKING:
    from pydantic_settings import BaseSettings


class ConfDYamlConfigSettingsSource(YamlConfigSettingsSource):
    """YAML settings source that merges ``<name>.yaml`` with ``<name>.d/*``."""

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        yaml_file: str,
        confd_dir: str | None,
        config_dir_env: str,
        base_dir: str = "conf",
        yaml_file_encoding: str | None = "utf-8",
    ) -> None:
        config_base = Path(os.getenv(config_dir_env, base_dir))

        yaml_files: list[Path] = []
        main_file = config_base / yaml_file
        if main_file.exists():
            yaml_files.append(main_file)

        if confd_dir:
            confd_path = config_base / confd_dir
            if confd_path.is_dir():
                yaml_files.extend(sorted(confd_path.glob("*.yaml")))
                yaml_files.extend(sorted(confd_path.glob("*.yml")))

        self._yaml_files = yaml_files

        super().__init__(
            settings_cls=settings_cls,
            yaml_file=yaml_files if yaml_files else None,
            yaml_file_encoding=yaml_file_encoding,
        )

    @property
    def yaml_files(self) -> list[Path]:
        """Files that were found and will be merged, in load order."""
        return list(self._yaml_files)

    def __repr__(self) -> str:
        files_str = ", ".join(str(f) for f in self._yaml_files)
        return f"{self.__class__.__name__}(yaml_files=[{files_str}])"


def _domain_source(
    settings_cls: type[BaseSettings], name: str, env_prefix: str
) -> ConfDYamlConfigSettingsSource:
    return ConfDYamlConfigSettingsSource(
        settings_cls,
        yaml_file=f"{name}.yaml",
        confd_dir=f"{name}.d",
        config_dir_env=f"{env_prefix}_CONFIG_DIR",
    )


def create_app_yaml_source(settings_cls: type[BaseSettings]) -> ConfDYamlConfigSettingsSource:
    """Create YAML source for AppSettings (override directory with APP_CONFIG_DIR)."""
    return _domain_source(settings_cls, "app", "APP")


def create_db_yaml_source(settings_cls: type[BaseSettings]) -> ConfDYamlConfigSettingsSource:
    """Create YAML source for PostgresSettings (override directory with DB_CONFIG_DIR)."""
    return _domain_source(settings_cls, "db", "DB")


def create_graphql_yaml_source(settings_cls: type[BaseSettings]) -> ConfDYamlConfigSettingsSource:
    """Create YAML source for GraphQLSettings (override directory with GRAPHQL_CONFIG_DIR)."""
    return _domain_source(settings_cls, "graphql", "GRAPHQL")


def create_logging_yaml_source(settings_cls: type[BaseSettings]) -> ConfDYamlConfigSettingsSource:
    """Create YAML source for LoggingSettings (override directory with LOG_CONFIG_DIR)."""
    return _domain_source(settings_cls, "logging", "LOG")


def create_redis_yaml_source(settings_cls: type[BaseSettings]) -> ConfDYamlConfigSettingsSource:
    """Create YAML source for RedisSettings (override directory with REDIS_CONFIG_DIR)."""
    return _domain_source(settings_cls, "redis", "REDIS")
