"""Plugin discovery and loading.

Plugins come from two places:

- installed distributions advertising the ``stackscout.plugins`` entry point,
- single-file plugins in the project's ``.stackscout/plugins/`` directory.

Either kind may hand over a class instead of an instance; classes are
instantiated before use. A plugin that cannot be loaded or instantiated is
logged and skipped so that one broken plugin never hides the others.
"""

from __future__ import annotations

import importlib.util
import inspect
import logging
import sys
from pathlib import Path
from types import ModuleType

import pluggy

from stackscout.plugins.hookspecs import StackscoutHookSpec

PROJECT_NAME = "stackscout"
ENTRY_POINT_GROUP = "stackscout.plugins"
LOCAL_MODULE_PREFIX = "stackscout_local_plugin_"

logger = logging.getLogger(__name__)


def _has_hook_impls(cls: type) -> bool:
    """Whether *cls* defines a method marked with ``@hookimpl``."""
    marker = f"{PROJECT_NAME}_impl"
    return any(
        getattr(getattr(cls, name, None), marker, None)
        for name in dir(cls)
        if not name.startswith("_")
    )


def _load_module(py_file: Path) -> ModuleType | None:
    module_name = f"{LOCAL_MODULE_PREFIX}{py_file.stem}"
    spec = importlib.util.spec_from_file_location(module_name, py_file)
    if spec is None or spec.loader is None:
        logger.warning("Cannot build a module spec for %s", py_file)
        return None
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception:
        logger.warning("Failed to load local plugin %s", py_file, exc_info=True)
        del sys.modules[module_name]
        return None
    return module


class PluginManager:
    """Wraps a pluggy manager carrying the stackscout hook specs."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(StackscoutHookSpec)
        self._loaded = False

    @property
    def hook(self) -> pluggy.HookRelay:
        return self._pm.hook

    @property
    def is_loaded(self) -> bool:
        """Whether :meth:`discover_and_load` has run."""
        return self._loaded

    def discover_and_load(self, *, local_dir: Path | None = None) -> list[str]:
        """Register entry-point plugins, then the local ones under *local_dir*.

        Returns the names of every registered plugin.
        """
        try:
            self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        except Exception:
            logger.warning("Failed to load %s entry points", ENTRY_POINT_GROUP, exc_info=True)
        self._replace_registered_classes()
        if local_dir is not None and local_dir.is_dir():
            for py_file in sorted(local_dir.glob("*.py")):
                if not py_file.name.startswith("_"):
                    self._register_local(py_file)
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register an already-built plugin object."""
        plugin_name = name or type(plugin).__name__
        self._pm.register(plugin, name=plugin_name)
        logger.debug("Registered plugin: %s", plugin_name)

    def list_plugin_names(self) -> list[str]:
        return [self._pm.get_name(p) or type(p).__name__ for p in self._pm.get_plugins()]

    def _register_local(self, py_file: Path) -> None:
        """Instantiate and register each hook-carrying class defined in *py_file*."""
        module = _load_module(py_file)
        if module is None:
            return
        for _, cls in inspect.getmembers(module, inspect.isclass):
            if cls.__module__ != module.__name__ or not _has_hook_impls(cls):
                continue
            try:
                instance = cls()
            except Exception:
                logger.warning("Cannot instantiate %s from %s", cls.__name__, py_file, exc_info=True)
                continue
            self.register_plugin(instance, name=f"{module.__name__}.{cls.__name__}")

    def _replace_registered_classes(self) -> None:
        """Swap plugin classes registered from entry points for instances.

        Hooks called on a class would receive no ``self``.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin) or not _has_hook_impls(plugin):
                continue
            name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)
            try:
                instance = plugin()
            except Exception:
                logger.warning("Cannot instantiate entry-point plugin %s", name, exc_info=True)
                continue
            self._pm.register(instance, name=name)
