"""Subcommand modules for stackscout.

register_commands() defers imports so ``stackscout --help`` stays fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the ``gen`` group and the standalone commands on the root group."""
    from stackscout.commands.discover import actions, generators, resources, rules
    from stackscout.commands.gen import gen
    from stackscout.commands.serve import serve

    cli.add_command(gen)

    cli.add_command(rules)
    cli.add_command(resources)
    cli.add_command(generators)
    cli.add_command(actions)
    cli.add_command(serve)
