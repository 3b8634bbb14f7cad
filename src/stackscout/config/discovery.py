"""Config file discovery and loading.

The walk-up finder locates ``stackscout.toml`` the way git finds ``.git/``.
A ``pyproject.toml`` carrying a ``[tool.stackscout]`` table counts as a
config file too, so projects can keep everything in one place.
STACKSCOUT_CONFIG and the ``--config`` CLI flag override discovery.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

CONFIG_FILENAME = "stackscout.toml"
PYPROJECT_FILENAME = "pyproject.toml"
CONFIG_ENV_VAR = "STACKSCOUT_CONFIG"


def _has_tool_table(pyproject: Path) -> bool:
    try:
        data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError):
        return False
    return isinstance(data.get("tool", {}).get("stackscout"), dict)


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for a config file.

    In each directory ``stackscout.toml`` wins over ``pyproject.toml``.
    Returns None if nothing is found before the filesystem root.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        pyproject = current / PYPROJECT_FILENAME
        if pyproject.is_file() and _has_tool_table(pyproject):
            return pyproject
        if current.parent == current:
            return None
        current = current.parent


def load_config_data(path: Path) -> dict[str, Any]:
    """Parse *path* and return the stackscout settings table.

    Raises ``tomllib.TOMLDecodeError`` on malformed files.
    """
    data = tomllib.loads(path.read_text(encoding="utf-8"))
    if path.name == PYPROJECT_FILENAME:
        table = data.get("tool", {}).get("stackscout", {})
        return table if isinstance(table, dict) else {}
    return data
