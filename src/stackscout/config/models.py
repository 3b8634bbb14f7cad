"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, stackscout.toml only contains
overrides. A project with no config file still gets working discovery.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

RULES_FILENAME = "usage-rules.md"


class ProjectConfig(BaseModel):
    """[project] section."""

    model_config = {"frozen": True}

    # Application scope used by list_ash_resources when the caller gives none.
    app: str | None = None
    # Directories (relative to the project root) made importable so
    # configured domain paths resolve without installing the project.
    pythonpath: list[str] = Field(default_factory=lambda: ["."])


class RulesConfig(BaseModel):
    """[rules] section."""

    model_config = {"frozen": True}

    filename: str = RULES_FILENAME
    max_workers: int = Field(default=4, ge=1)
    # package name -> directory; wins over import-system discovery
    paths: dict[str, Path] = Field(default_factory=dict)


class AppConfig(BaseModel):
    """[apps.<scope>] section."""

    model_config = {"frozen": True}

    # "package.module:Object" import paths of declarative bases or MetaData
    domains: list[str] = Field(default_factory=list)


class McpConfig(BaseModel):
    """[mcp] section."""

    model_config = {"frozen": True}

    transport: str = "stdio"
    host: str = "127.0.0.1"
    port: int = 8000


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    local_dir: str = ".stackscout/plugins"
