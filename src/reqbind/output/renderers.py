"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from reqbind.output.console import create_console, get_output, style_for_kind

if TYPE_CHECKING:
    from rich.console import Console

    from reqbind.services.result import ServiceResult


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="rb.ok"), Text(f"  {result.op}", style="rb.op"))


def _field(console: Console, key: str, value: Any) -> None:
    if isinstance(value, (dict, list)):
        value = json.dumps(value, separators=(",", ":"))
    style = style_for_kind(str(value)) if key == "kind" else ""
    console.print(Text.assemble((f"  {key}: ", "rb.key"), (str(value), style)))


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="rb.error"),
        Text(f"  {result.op}", style="rb.op"),
        Text(" — "),
        Text(msg),
    )
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


def _render_layouts(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("Name", no_wrap=True)
    table.add_column("Example")
    if verbose:
        table.add_column("Pattern", style="dim")
    for item in result.data.get("items", []):
        name = Text(item["name"], style="rb.default" if item.get("default") else "")
        row: list[Any] = [name, item["example"]]
        if verbose:
            row.append(item["pattern"])
        table.add_row(*row)
    console.print(table)


def _render_record(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "record", result.data.get("record", ""))
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("Field", no_wrap=True)
    table.add_column("Kind")
    table.add_column("Source")
    if verbose:
        table.add_column("Directive", style="dim")
    for row in result.data.get("fields", []):
        kind = row.get("kind") or ("skip" if row.get("directive") == "-" else "")
        cells: list[Any] = [
            Text(row["name"]),
            Text(kind, style=style_for_kind(kind)),
            Text(row.get("source", "")),
        ]
        if verbose:
            cells.append(Text(row.get("directive") or ""))
        table.add_row(*cells)
    console.print(table)


_OP_RENDERERS: dict[str, Any] = {
    "list_layouts": _render_layouts,
    "describe_record": _render_record,
}
