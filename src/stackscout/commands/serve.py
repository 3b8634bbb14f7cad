"""serve — start the MCP server (requires stackscout[mcp] extra)."""

from __future__ import annotations

import click

from stackscout.commands._base import ScoutCommand
from stackscout.commands._context import AppContext


@click.command(
    cls=ScoutCommand,
    examples="""\
  # stdio transport (what editors and assistants spawn)
  stackscout serve

  # Resources of a specific application scope
  stackscout serve --app billing

  # Streamable HTTP on a custom address
  stackscout serve --transport streamable-http --host 0.0.0.0 --port 9000""",
)
@click.option(
    "--transport",
    default=None,
    type=click.Choice(["stdio", "sse", "streamable-http"]),
    help="MCP transport protocol (default: [mcp] transport).",
)
@click.option("--host", default=None, help="Bind address (HTTP transports only).")
@click.option("--port", default=None, type=int, help="Listen port (HTTP transports only).")
@click.option("--app", "scope", default=None, help="Application scope for list_ash_resources.")
@click.pass_obj
def serve(
    app: AppContext,
    transport: str | None,
    host: str | None,
    port: int | None,
    scope: str | None,
) -> None:
    """Start the MCP server (requires stackscout[mcp] extra)."""
    from stackscout.mcp import server as mcp_server

    if not mcp_server.mcp_available:
        click.echo("MCP not installed. Install with: pip install stackscout[mcp]", err=True)
        raise SystemExit(1)

    settings = app.settings
    server = mcp_server.create_server(
        project_root=settings.project_root,
        config_path=str(settings.config_path) if settings.config_path else None,
        app=scope,
        host=host or settings.mcp.host,
        port=port or settings.mcp.port,
    )
    server.run(transport=transport or settings.mcp.transport)
