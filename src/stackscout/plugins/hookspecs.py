"""Pluggy hook specifications for stackscout registries.

Plugins extend what the discovery actions can see: extra generator
commands and extra resource domains for an application scope.
"""

from __future__ import annotations

from typing import Any

import click
import pluggy

hookspec = pluggy.HookspecMarker("stackscout")
hookimpl = pluggy.HookimplMarker("stackscout")


class StackscoutHookSpec:
    """Hook specifications for the stackscout plugin system."""

    @hookspec
    def register_generators(self) -> list[click.Command] | None:
        """Return click commands to list as generators."""

    @hookspec
    def register_domains(self, scope: str | None) -> list[Any] | None:
        """Return domains for *scope*.

        Each item is a declarative base class, or a ``(name, domain)`` pair
        where *domain* is a declarative base, ORM registry or MetaData.
        """
