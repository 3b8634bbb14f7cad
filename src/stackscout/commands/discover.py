"""rules / resources / generators / actions — run the discovery actions from a shell.

Each command goes through the same dispatcher the MCP server uses.
"""

from __future__ import annotations

import click

from stackscout.actions.dispatcher import Action, ActionDispatcher
from stackscout.commands._base import ScoutCommand
from stackscout.commands._context import AppContext


@click.command(
    cls=ScoutCommand,
    examples="""\
  # Rules shipped by two dependencies
  stackscout rules sqlalchemy pydantic

  # Full text, rendered as markdown
  stackscout -v rules stackscout

  # Raw JSON for scripting
  stackscout --json rules stackscout""",
)
@click.argument("packages", nargs=-1)
@click.pass_obj
def rules(app: AppContext, packages: tuple[str, ...]) -> None:
    """Show the usage-rules.md documents shipped by PACKAGES."""
    app.emit(app.dispatcher().dispatch(Action.GET_PACKAGE_RULES, {"packages": list(packages)}))


@click.command(cls=ScoutCommand)
@click.option("--app", "scope", default=None, help="Application scope (default: [project] app).")
@click.pass_obj
def resources(app: AppContext, scope: str | None) -> None:
    """List domain-modeled resources and their domains."""
    app.emit(app.dispatcher(scope=scope).dispatch(Action.LIST_ASH_RESOURCES))


@click.command(cls=ScoutCommand)
@click.pass_obj
def generators(app: AppContext) -> None:
    """List generator commands and their documentation."""
    app.emit(app.dispatcher().dispatch(Action.LIST_GENERATORS))


@click.command(cls=ScoutCommand)
def actions() -> None:
    """List the actions exposed to assistants."""
    for entry in ActionDispatcher.describe():
        click.echo(f"{entry['name']}\n  {entry['description']}\n")
