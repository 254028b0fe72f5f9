"""Resolved runtime settings for one CLI invocation.

Sources, highest priority first:

1. keyword arguments (the root command's flags)
2. ``BUCKETCTL_*`` environment variables, ``__`` for nested keys
   (``BUCKETCTL_QUERY__DEFAULT_LIMIT=25``)
3. the discovered ``bucketctl.toml``
4. defaults on the section models

The TOML file is read by pydantic-settings' own TOML source; which file
to read travels in the ``config_path`` init argument.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    InitSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from bucketctl.config.discovery import find_config
from bucketctl.config.models import DatabaseConfig, QueryConfig


class BucketSettings(BaseSettings):
    """Everything a command needs to know about its environment.

    Attributes:
        project_root: Where relative database paths are anchored: the
            directory holding ``bucketctl.toml``, or the CWD without one.
        config_path: The TOML file that was read, if any.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        env_prefix="BUCKETCTL_",
        env_nested_delimiter="__",
    )

    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    query: QueryConfig = Field(default_factory=QueryConfig)

    @property
    def database_path(self) -> Path:
        path = self.database.path
        return path if path.is_absolute() else self.project_root / path

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        toml_file = None
        if isinstance(init_settings, InitSettingsSource):
            toml_file = init_settings.init_kwargs.get("config_path")
        return (
            init_settings,
            env_settings,
            TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        project_root: Path | None = None,
        **flags: Any,
    ) -> BucketSettings:
        """Build settings for a CLI run.

        An explicit *config_path* that does not exist is ignored rather
        than replaced by discovery.
        """
        if config_path:
            explicit = Path(config_path)
            toml_path = explicit if explicit.is_file() else None
        else:
            toml_path = find_config(project_root)

        if project_root is None:
            project_root = toml_path.parent if toml_path else Path.cwd()

        try:
            return cls(project_root=project_root, config_path=toml_path, **flags)
        except tomllib.TOMLDecodeError as exc:
            raise click.ClickException(f"Invalid TOML in {toml_path}: {exc}") from exc
