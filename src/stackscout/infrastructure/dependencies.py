"""Dependency path lookup and rules-document reads.

A package's root is the directory its import package lives in. Names are
tried as import names first, then as distribution names whose top-level
packages are looked up in turn. Configured overrides win over both.
"""

from __future__ import annotations

import importlib.metadata
import importlib.util
import logging
import re
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

_PACKAGE_NAME = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")


class DependencyPathProvider(Protocol):
    """Resolve a package name to its on-disk root, or None if unknown."""

    def root_for(self, name: str) -> Path | None: ...


def _normalize(name: str) -> str:
    return re.sub(r"[-_.]+", "-", name).lower()


def _import_root(import_name: str) -> Path | None:
    """Directory of the top-level package *import_name*, if it is a package."""
    try:
        spec = importlib.util.find_spec(import_name)
    except (ImportError, ValueError):
        return None
    if spec is None or not spec.submodule_search_locations:
        return None
    return Path(next(iter(spec.submodule_search_locations)))


class ImportlibDependencyPaths:
    """Dependency paths from the running interpreter's import system.

    Parameters:
        overrides: package name -> directory, checked before discovery.
            Keys match case- and separator-insensitively (PEP 503).
    """

    def __init__(self, overrides: dict[str, Path] | None = None) -> None:
        self._overrides = {_normalize(k): Path(v) for k, v in (overrides or {}).items()}

    def root_for(self, name: str) -> Path | None:
        if not _PACKAGE_NAME.match(name):
            logger.debug("Rejected package name %r", name)
            return None

        override = self._overrides.get(_normalize(name))
        if override is not None:
            return override

        # Dotted names would import parent packages; only top-level names count.
        if "." not in name:
            root = _import_root(name.replace("-", "_"))
            if root is not None:
                return root

        for import_name in self._top_level_packages(name):
            root = _import_root(import_name)
            if root is not None:
                return root
        return None

    @staticmethod
    def _top_level_packages(dist_name: str) -> list[str]:
        wanted = _normalize(dist_name)
        mapping = importlib.metadata.packages_distributions()
        return [
            top
            for top, dists in mapping.items()
            if "." not in top and any(_normalize(d) == wanted for d in dists)
        ]


def read_rules_file(root: Path, filename: str) -> str | None:
    """Read *filename* under *root*.

    Returns None when the file does not exist; every other I/O fault
    (permissions, a directory in the way, undecodable bytes) propagates.
    """
    path = root / filename
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
