"""Project — the single dependency handed to every service.

Owns the settings and builds the three registry providers from them:
dependency paths, the domain registry and the generator registry. Plugins
are discovered once, on first use of a registry that consults them.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

from stackscout.infrastructure.dependencies import ImportlibDependencyPaths
from stackscout.infrastructure.generators import GeneratorRegistry
from stackscout.infrastructure.resources import DomainRegistry
from stackscout.plugins.manager import PluginManager

if TYPE_CHECKING:
    from pathlib import Path

    from stackscout.config.settings import ScoutSettings

logger = logging.getLogger(__name__)


class Project:
    """A project directory plus the registries describing it.

    Parameters:
        settings: resolved settings (root, config sections, flags).
        plugin_manager: use this manager instead of discovering plugins.
        scope: application scope for resource listing; defaults to
            ``settings.project.app``.
    """

    def __init__(
        self,
        settings: ScoutSettings,
        *,
        plugin_manager: PluginManager | None = None,
        scope: str | None = None,
    ) -> None:
        self.settings = settings
        self.scope = scope if scope is not None else settings.project.app
        self._pm = plugin_manager
        self._extend_import_path()

    @property
    def root(self) -> Path:
        return self.settings.project_root

    @property
    def plugin_manager(self) -> PluginManager:
        """The plugin manager (plugins discovered lazily on first access)."""
        if self._pm is None:
            self._pm = PluginManager()
        if not self._pm.is_loaded:
            names = self._pm.discover_and_load(
                local_dir=self.root / self.settings.plugins.local_dir
            )
            logger.debug("Plugins loaded: %s", names)
        return self._pm

    @property
    def dependency_paths(self) -> ImportlibDependencyPaths:
        overrides = {
            name: path if path.is_absolute() else self.root / path
            for name, path in self.settings.rules.paths.items()
        }
        return ImportlibDependencyPaths(overrides)

    @property
    def resource_registry(self) -> DomainRegistry:
        configured = {scope: app.domains for scope, app in self.settings.apps.items()}
        return DomainRegistry(configured, plugin_manager=self.plugin_manager)

    @property
    def generator_registry(self) -> GeneratorRegistry:
        from stackscout.commands.gen import builtin_generators

        return GeneratorRegistry(builtin_generators(), plugin_manager=self.plugin_manager)

    def _extend_import_path(self) -> None:
        for entry in self.settings.project.pythonpath:
            path = str((self.root / entry).resolve())
            if path not in sys.path:
                sys.path.append(path)
