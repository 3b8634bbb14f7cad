"""AppContext — shared Click context for all commands.

Created once by the root CLI group and handed to subcommands via
``@click.pass_obj``. The project and dispatcher are built lazily so
``--help`` and ``--version`` never load plugins or import domains.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from stackscout.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from stackscout.actions.dispatcher import ActionDispatcher
    from stackscout.config.settings import ScoutSettings
    from stackscout.infrastructure.project import Project
    from stackscout.services.result import ServiceResult


class AppContext:
    """Settings plus the lazily-built project shared by all commands."""

    def __init__(self, settings: ScoutSettings) -> None:
        self.settings = settings
        self._project: Project | None = None

        from stackscout.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from stackscout.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def project(self) -> Project:
        if self._project is None:
            from stackscout.infrastructure.project import Project

            self._project = Project(self.settings)
        return self._project

    def dispatcher(self, *, scope: str | None = None) -> ActionDispatcher:
        """A dispatcher over the project, optionally for another app scope."""
        from stackscout.actions.dispatcher import ActionDispatcher
        from stackscout.infrastructure.project import Project

        project = self.project
        if scope is not None and scope != project.scope:
            project = Project(
                self.settings,
                plugin_manager=project.plugin_manager,
                scope=scope,
            )
        return ActionDispatcher.from_project(project)

    def emit(self, result: ServiceResult) -> None:
        """Format and print *result*.

        * Success: stdout; warnings go to stderr unless in JSON mode.
        * Failure: stderr, then exit code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            if output:
                click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
