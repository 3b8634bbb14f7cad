"""Root CLI group for stackscout with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from stackscout import __version__
from stackscout.commands import register_commands
from stackscout.commands._base import ScoutGroup
from stackscout.commands._context import AppContext
from stackscout.config.settings import ScoutSettings


@click.group(cls=ScoutGroup, invoke_without_command=True)
@click.version_option(version=__version__, prog_name="stackscout")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output (one name per line).")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug logs and timing.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "--root",
    "project_root",
    default=None,
    type=click.Path(file_okay=False, path_type=Path),
    help="Project root (default: directory of the discovered config, else CWD).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    project_root: Path | None,
) -> None:
    """stackscout — package rules, domain resources and generators for AI assistants."""
    settings = ScoutSettings.from_cli(
        config_path=config_path,
        project_root=project_root,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
