"""ScoutSettings: one frozen object for everything an invocation is told.

Sources, strongest first:

- keyword arguments (the CLI flags or the server's own arguments),
- ``STACKSCOUT_*`` environment variables (``__`` separates nested keys),
- the config file found by walking up from the project root,
- the defaults of the section models.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from stackscout.config.discovery import find_config, load_config_data
from stackscout.config.models import (
    AppConfig,
    McpConfig,
    PluginsConfig,
    ProjectConfig,
    RulesConfig,
)

# pydantic-settings builds sources from the class, so the config file chosen
# by from_cli() reaches settings_customise_sources through here.
_pending = threading.local()


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Config-file values, one top-level table per settings field."""

    def __init__(self, settings_cls: type[BaseSettings], path: Path | None) -> None:
        super().__init__(settings_cls)
        self._tables: dict[str, Any] = self._read(path) if path and path.is_file() else {}

    @staticmethod
    def _read(path: Path) -> dict[str, Any]:
        try:
            return load_config_data(path)
        except tomllib.TOMLDecodeError as exc:
            raise click.ClickException(f"Invalid TOML in {path}: {exc}") from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        if field_name in self._tables:
            return self._tables[field_name], field_name, True
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        return self._tables


def _locate(config_path: str | None, project_root: Path | None) -> Path | None:
    """An explicit --config wins; otherwise search upward from the root."""
    if config_path is None:
        return find_config(project_root)
    explicit = Path(config_path)
    return explicit if explicit.is_file() else None


class ScoutSettings(BaseSettings):
    """Settings shared by the CLI and the MCP server.

    ``project_root`` anchors every relative path in the config. Unless given,
    it is the directory holding the config file, or the working directory
    when there is none. ``config_path`` records which file was read.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "STACKSCOUT_",
        "env_nested_delimiter": "__",
    }

    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    project: ProjectConfig = Field(default_factory=ProjectConfig)
    rules: RulesConfig = Field(default_factory=RulesConfig)
    apps: dict[str, AppConfig] = Field(default_factory=dict)
    mcp: McpConfig = Field(default_factory=McpConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        file_source = TomlSettingsSource(settings_cls, getattr(_pending, "path", None))
        return init_settings, env_settings, file_source

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        project_root: Path | None = None,
        **cli_flags: Any,
    ) -> ScoutSettings:
        """Find the config file, pick the project root and apply *cli_flags* on top."""
        path = _locate(config_path, project_root)
        if project_root is None:
            project_root = path.parent if path is not None else Path.cwd()
        _pending.path = path
        try:
            return cls(project_root=project_root, config_path=path, **cli_flags)
        finally:
            _pending.path = None
