"""gen — the generators stackscout itself provides.

``stackscout gen install``      writes a starter stackscout.toml
``stackscout gen usage-rules``  collects dependency rules into one file
``stackscout gen mcp``          registers the MCP server in .mcp.json

These are also the host-provided entries of ``list_generators``.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

import click

from stackscout.actions.dispatcher import Action
from stackscout.commands._base import GeneratorCommand, ScoutGroup
from stackscout.commands._context import AppContext
from stackscout.config.discovery import CONFIG_FILENAME
from stackscout.services.result import ErrorKind, ServiceError, ServiceResult

RULES_START = "<!-- package-rules-start -->"
RULES_END = "<!-- package-rules-end -->"

_STARTER_CONFIG = """\
[project]
app = "{app}"

[rules]
filename = "usage-rules.md"
max_workers = 4

# [rules.paths]
# vendored_lib = "vendor/vendored_lib"

[apps.{app}]
# Declarative bases, ORM registries or MetaData objects, as "module:object".
domains = []
"""


@click.group(cls=ScoutGroup)
def gen() -> None:
    """Generators: project setup and assistant integration."""


@gen.command(cls=GeneratorCommand, generator="stackscout.install")
@click.option("--app", "app_name", default=None, help="Application scope name.")
@click.option("--force", is_flag=True, help="Overwrite an existing config.")
@click.pass_obj
def install(app: AppContext, app_name: str | None, force: bool) -> None:
    """Install stackscout into the project by writing a starter stackscout.toml.

    The application scope defaults to the project directory name.
    """
    root = app.settings.project_root
    target = root / CONFIG_FILENAME
    op = "install"
    if target.exists() and not force:
        app.emit(
            ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code=ErrorKind.VALIDATION_ERROR,
                    message=f"{target} already exists (use --force to overwrite)",
                ),
            )
        )
        return
    name = app_name or re.sub(r"\W+", "_", root.resolve().name).strip("_") or "app"
    target.write_text(_STARTER_CONFIG.format(app=name), encoding="utf-8")
    app.emit(ServiceResult(ok=True, op=op, data={"path": str(target), "app": name}))


def merge_rules_block(existing: str, entries: list[tuple[str, str]]) -> str:
    """Replace the marked rules block in *existing*, or append one."""
    sections = [
        f"<!-- {package}-start -->\n## {package} usage\n{rules.strip()}\n<!-- {package}-end -->"
        for package, rules in entries
    ]
    block = "\n".join([RULES_START, *sections, RULES_END])
    start = existing.find(RULES_START)
    end = existing.find(RULES_END)
    if start != -1 and end > start:
        return existing[:start] + block + existing[end + len(RULES_END) :]
    if existing and not existing.endswith("\n"):
        existing += "\n"
    return f"{existing}{block}\n"


@gen.command(
    "usage-rules",
    cls=GeneratorCommand,
    generator="stackscout.gen.usage_rules",
    examples="""\
  # Gather rules for an assistant's instruction file
  stackscout gen usage-rules CLAUDE.md sqlalchemy pydantic""",
)
@click.argument("file", type=click.Path(dir_okay=False, path_type=Path))
@click.argument("packages", nargs=-1, required=True)
@click.pass_obj
def usage_rules(app: AppContext, file: Path, packages: tuple[str, ...]) -> None:
    """Combine the usage-rules.md of PACKAGES into FILE.

    Rules go between marker comments; running again replaces that block
    and leaves the rest of FILE alone.
    """
    result = app.dispatcher().dispatch(Action.GET_PACKAGE_RULES, {"packages": list(packages)})
    if not result.ok:
        app.emit(result)
        return
    entries = [(entry.package, entry.rules) for entry in result.items]
    existing = file.read_text(encoding="utf-8") if file.exists() else ""
    file.write_text(merge_rules_block(existing, entries), encoding="utf-8")
    app.emit(
        ServiceResult(
            ok=True,
            op="gen.usage_rules",
            data={"path": str(file), "packages": [package for package, _ in entries]},
        )
    )


@gen.command("mcp", cls=GeneratorCommand, generator="stackscout.gen.mcp")
@click.option("--file", "target", default=".mcp.json", help="Client config file to update.")
@click.pass_obj
def mcp_config(app: AppContext, target: str) -> None:
    """Register the stackscout MCP server in an assistant's .mcp.json."""
    path = app.settings.project_root / target
    op = "gen.mcp"
    config: Any = {}
    if path.exists():
        try:
            config = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            config = exc
    if not isinstance(config, dict) or not isinstance(config.get("mcpServers", {}), dict):
        reason = config if isinstance(config, json.JSONDecodeError) else "unexpected structure"
        app.emit(
            ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code=ErrorKind.EXECUTION_ERROR,
                    message=f"Cannot update {path}: {reason}",
                ),
            )
        )
        return
    config.setdefault("mcpServers", {})["stackscout"] = {
        "command": "stackscout",
        "args": ["serve"],
    }
    path.write_text(json.dumps(config, indent=2) + "\n", encoding="utf-8")
    app.emit(ServiceResult(ok=True, op=op, data={"path": str(path)}))


def builtin_generators() -> list[click.Command]:
    """The host-provided generator commands, in listing order."""
    return [install, usage_rules, mcp_config]
