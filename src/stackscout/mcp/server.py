"""FastMCP server setup.

Optional extra — guarded behind try/except ImportError.
Transport: stdio by default, SSE or streamable HTTP on request.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

mcp_available = False
_FastMCP: Any = None

try:
    from mcp.server.fastmcp import FastMCP as _FastMCP  # type: ignore[no-redef,import-not-found]

    mcp_available = True
except ImportError:
    pass

__all__ = ["create_server", "mcp_available"]


def create_server(
    *,
    project_root: Path | None = None,
    config_path: str | None = None,
    app: str | None = None,
    host: str = "127.0.0.1",
    port: int = 8000,
) -> Any:
    """Create the MCP server for the project at *project_root* (or CWD).

    *app* sets the application scope used by ``list_ash_resources``;
    without it the ``[project] app`` setting applies. *host* and *port*
    only matter for HTTP transports.

    Raises RuntimeError if the mcp extra is not installed.
    """
    if not mcp_available or _FastMCP is None:
        msg = "MCP extra not installed. Install with: pip install stackscout[mcp]"
        raise RuntimeError(msg)

    from stackscout.actions.dispatcher import ActionDispatcher
    from stackscout.config.settings import ScoutSettings
    from stackscout.infrastructure.project import Project
    from stackscout.mcp.tools import register_tools

    settings = ScoutSettings.from_cli(config_path=config_path, project_root=project_root)
    project = Project(settings, scope=app)

    server = _FastMCP("stackscout", host=host, port=port)
    register_tools(server, ActionDispatcher.from_project(project))
    return server
