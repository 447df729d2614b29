"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.table import Table
from rich.text import Text

from forcemap.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from forcemap.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()
    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Minimal output for ``--quiet``: node ids where the op lists nodes."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    if result.op == "neighborhood":
        return "\n".join(n["id"] for n in result.data.get("nodes", []))
    if result.op == "groups":
        return "\n".join(m for g in result.data.get("groups", []) for m in g["members"])
    if result.op == "export" and "content" in result.data:
        return str(result.data["content"]).rstrip("\n")
    items = result.data.get("items")
    if items:
        return "\n".join(str(item["id"]) for item in items)
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="fm.ok"), Text(f"  {result.op}", style="fm.op"))


def _field(console: Console, key: str, value: Any) -> None:
    style = "fm.id" if key in ("id", "center", "source", "target") else ""
    console.print(Text(f"  {key}: ", style="fm.key"), Text(str(value), style=style))


def _render_meta(console: Console, result: ServiceResult) -> None:
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for key, value in result.meta.items():
        console.print(Text(f"    {key}: {value}"))


def _center_line(console: Console, result: ServiceResult) -> None:
    center = result.data.get("center")
    scope = f"neighborhood of [fm.id]{escape(center)}[/fm.id]" if center else "full graph"
    console.print(f"[bold]{scope}[/bold]")


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="fm.error"), Text(f"  {result.op}", style="fm.op"), " — ", Text(msg)
    )
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for key, value in err.detail.items():
            console.print(Text(f"    {key}: {value}"))


# ── Graph renderers ───────────────────────────────────────────────────


def _render_neighborhood(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    d = result.data
    _center_line(console, result)
    console.print(f"{d.get('node_count', 0)} nodes, {d.get('edge_count', 0)} edges")
    if not d.get("nodes"):
        return

    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("ID", style="fm.id", no_wrap=True)
    table.add_column("Group", style="fm.group", justify="right")
    table.add_column("Label")
    for node in d["nodes"]:
        table.add_row(escape(node["id"]), str(node["group"]), escape(node.get("label", "")))
    console.print(table)

    if verbose:
        for edge in d.get("edges", []):
            console.print(
                Text.assemble(
                    "  ",
                    (edge["source"], "fm.id"),
                    " — ",
                    (edge["target"], "fm.id"),
                    (f"  weight={edge['weight']}", "dim"),
                )
            )


def _render_groups(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _center_line(console, result)
    for group in result.data.get("groups", []):
        console.print()
        console.print(
            Text.assemble(
                (group["label"], "bold"),
                " ",
                (f"(group {group['group']})", "fm.group"),
                f" — {group['count']}",
            )
        )
        for member in group["members"]:
            console.print(Text(f"  {member}", style="fm.id"))


def _render_summary(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    for key in ("nodes", "edges", "distinct_edges", "components", "isolated"):
        if key in d:
            _field(console, key, d[key])
    items = d.get("items", [])
    if not items:
        return
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("ID", style="fm.id", no_wrap=True)
    table.add_column("Group", style="fm.group", justify="right")
    table.add_column("Degree", style="fm.number", justify="right")
    for item in items:
        table.add_row(escape(item["id"]), str(item["group"]), str(item["degree"]))
    console.print(table)


def _render_layout(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    meta = result.meta or {}
    _center_line(console, result)
    state = "settled" if meta.get("settled") else "not settled"
    console.print(f"{d.get('count', 0)} nodes, {meta.get('ticks', 0)} steps, {state}")
    items = d.get("items", [])
    if items:
        table = Table(show_header=True, pad_edge=False, expand=False)
        table.add_column("ID", style="fm.id", no_wrap=True)
        table.add_column("Group", style="fm.group", justify="right")
        table.add_column("X", style="fm.number", justify="right")
        table.add_column("Y", style="fm.number", justify="right")
        for item in items:
            table.add_row(
                escape(item["id"]), str(item["group"]), f"{item['x']:.2f}", f"{item['y']:.2f}"
            )
        console.print(table)
    if verbose:
        _render_meta(console, result)


def _render_export(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    if "content" in d:
        # Inline exports are meant to be piped; print the document untouched.
        console.file.write(d["content"])
        return
    _status_line(console, result)
    for key in ("format", "path", "center", "nodes", "edges"):
        if d.get(key) is not None:
            _field(console, key, d[key])


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            value = json.dumps(value, separators=(",", ":"))
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "neighborhood": _render_neighborhood,
    "groups": _render_groups,
    "summary": _render_summary,
    "layout": _render_layout,
    "export": _render_export,
}
