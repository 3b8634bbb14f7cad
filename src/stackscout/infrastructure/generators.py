"""Generator registry — the code-generation commands a project can run.

Generators are click commands. They come from three places, in order:

1. the built-ins stackscout ships (``stackscout.install``, ``stackscout.gen.*``),
2. plugins implementing ``register_generators()``,
3. installed packages advertising commands in the ``stackscout.generators``
   entry-point group.

Each command's raw documentation is ``False`` when its author switched docs
off (``docs=False``), otherwise its click help text, which may be ``None``.
"""

from __future__ import annotations

import importlib.metadata
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Protocol

import click

from stackscout.infrastructure.resources import RegistryError

if TYPE_CHECKING:
    from stackscout.domain.records import RawDocs
    from stackscout.plugins.manager import PluginManager

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "stackscout.generators"


class GeneratorRegistryProvider(Protocol):
    """Return ``(command, raw_docs)`` pairs for every known generator."""

    def generators(self) -> list[tuple[str, RawDocs]]: ...


def command_name(cmd: click.Command) -> str:
    """Dotted name callers use for *cmd* (``generator=`` if set, else the click name)."""
    name = getattr(cmd, "generator", None) or cmd.name
    if not name:
        msg = f"Generator command {cmd!r} has no name"
        raise RegistryError(msg)
    return str(name)


def raw_docs(cmd: click.Command) -> RawDocs:
    if getattr(cmd, "docs", True) is False:
        return False
    return cmd.help


class GeneratorRegistry:
    """Generator registry over click commands.

    Parameters:
        builtins: host-provided commands, listed first.
        plugin_manager: optional manager whose ``register_generators`` hook
            contributes project commands.
        entry_point_group: entry-point group scanned for packaged commands;
            ``None`` disables the scan.
    """

    def __init__(
        self,
        builtins: Sequence[click.Command] = (),
        *,
        plugin_manager: PluginManager | None = None,
        entry_point_group: str | None = ENTRY_POINT_GROUP,
    ) -> None:
        self._builtins = list(builtins)
        self._pm = plugin_manager
        self._group = entry_point_group

    def commands(self) -> list[click.Command]:
        """All generator commands in discovery order, first registration wins."""
        found = [*self._builtins, *self._plugin_commands(), *self._entry_point_commands()]
        unique: dict[str, click.Command] = {}
        for cmd in found:
            name = command_name(cmd)
            if name in unique:
                logger.warning("Duplicate generator %s ignored", name)
                continue
            unique[name] = cmd
        return list(unique.values())

    def generators(self) -> list[tuple[str, RawDocs]]:
        return [(command_name(cmd), raw_docs(cmd)) for cmd in self.commands()]

    def _plugin_commands(self) -> list[click.Command]:
        if self._pm is None:
            return []
        try:
            contributions = self._pm.hook.register_generators()
        except Exception as exc:
            msg = f"Plugin failed while registering generators: {exc}"
            raise RegistryError(msg) from exc

        commands: list[click.Command] = []
        for contribution in contributions:
            for cmd in contribution:
                commands.append(_ensure_command(cmd, "register_generators"))
        return commands

    def _entry_point_commands(self) -> list[click.Command]:
        if self._group is None:
            return []
        commands: list[click.Command] = []
        for ep in importlib.metadata.entry_points(group=self._group):
            try:
                loaded = ep.load()
            except Exception as exc:
                msg = f"Cannot load generator entry point {ep.name!r}: {exc}"
                raise RegistryError(msg) from exc
            commands.append(_ensure_command(loaded, f"entry point {ep.name!r}"))
        return commands


def _ensure_command(obj: Any, source: str) -> click.Command:
    if not isinstance(obj, click.Command):
        msg = f"{source} returned {obj!r}, expected a click command"
        raise RegistryError(msg)
    return obj
