"""Format ServiceResult for humans (Rich) or machines (--json).

Human renderers are picked by ``result.op``; unknown ops fall back to a
generic key/value listing.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from stackscout.domain.records import (
    Documented,
    ExplicitlyEmpty,
    GeneratorDescriptor,
    PackageRuleEntry,
    ResourceDescriptor,
)
from stackscout.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from stackscout.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format *result* according to *settings* (defaults: human, normal)."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose)


def render_quiet(result: ServiceResult) -> str:
    """One identifier per line (package, resource or command), or the error."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"
    return "\n".join(_identifier(item) for item in result.items)


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    console = create_console()
    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose)
    else:
        _render_error(result, console)
    return get_output(console).rstrip("\n")


def generator_docs_summary(item: GeneratorDescriptor) -> Text:
    """First line of the docs, or a muted marker for the two no-docs cases."""
    if isinstance(item.docs, Documented):
        first = item.docs.text.strip().splitlines()[0] if item.docs.text.strip() else ""
        return Text(first)
    if isinstance(item.docs, ExplicitlyEmpty):
        return Text("(docs disabled)", style="scout.muted")
    return Text("(undocumented)", style="scout.muted")


def _identifier(item: Any) -> str:
    if isinstance(item, PackageRuleEntry):
        return item.package
    if isinstance(item, ResourceDescriptor):
        return item.name
    if isinstance(item, GeneratorDescriptor):
        return item.command
    return str(item)


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(
        Text("OK", style="scout.ok"),
        Text(f"  {result.op}", style="scout.op"),
        Text(f"  ({result.data.get('count', 0)})", style="scout.key"),
    )


def _render_rules(result: ServiceResult, console: Console, verbose: bool) -> None:
    _status_line(console, result)
    for entry in result.items:
        if verbose:
            console.print(Panel(Markdown(entry.rules), title=entry.package, title_align="left"))
        else:
            lines = len(entry.rules.splitlines())
            console.print(
                Text(f"  {entry.package}", style="scout.name"),
                Text(f"  {lines} lines", style="scout.key"),
            )


def _render_resources(result: ServiceResult, console: Console, verbose: bool) -> None:
    _status_line(console, result)
    if not result.items:
        return
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("Resource", style="scout.name")
    table.add_column("Domain", style="scout.domain")
    for item in result.items:
        table.add_row(item.name, item.domain)
    console.print(table)


def _render_generators(result: ServiceResult, console: Console, verbose: bool) -> None:
    _status_line(console, result)
    if not result.items:
        return
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("Command", style="scout.command", no_wrap=True)
    table.add_column("Docs")
    for item in result.items:
        table.add_row(item.command, generator_docs_summary(item))
    console.print(table)


def _render_generic(result: ServiceResult, console: Console, verbose: bool) -> None:
    console.print(Text("OK", style="scout.ok"), Text(f"  {result.op}", style="scout.op"))
    for key, value in result.data.items():
        console.print(Text(f"  {key}: ", style="scout.key"), Text(str(value)))


def _render_error(result: ServiceResult, console: Console) -> None:
    msg = result.error.message if result.error else "Unknown error"
    code = result.error.code if result.error else "ERROR"
    console.print(
        Text("ERROR", style="scout.error"),
        Text(f"  {result.op}", style="scout.op"),
        Text(f"  [{code}] {msg}"),
    )


_OP_RENDERERS: dict[str, Callable[[ServiceResult, Console, bool], None]] = {
    "get_package_rules": _render_rules,
    "list_ash_resources": _render_resources,
    "list_generators": _render_generators,
}
