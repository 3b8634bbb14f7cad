"""Rich Console factory and theme for stackscout output.

Consoles render into a StringIO buffer so renderers keep a plain
``-> str`` contract. In non-TTY environments (tests, pipes) Rich drops
color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

SCOUT_THEME = Theme(
    {
        "scout.ok": "bold green",
        "scout.error": "bold red",
        "scout.warning": "bold yellow",
        "scout.op": "bold cyan",
        "scout.key": "dim",
        "scout.name": "bold",
        "scout.domain": "blue",
        "scout.command": "bold magenta",
        "scout.muted": "dim italic",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes.
        width: Override terminal width (consistent output in tests).
    """
    return Console(
        file=StringIO(),
        theme=SCOUT_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
