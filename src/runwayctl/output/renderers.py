"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from runwayctl.output.console import create_console, get_output, style_for_cash
from runwayctl.services.runway import format_currency

if TYPE_CHECKING:
    from rich.console import Console

    from runwayctl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


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


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    d = result.data
    if result.op == "simulate":
        return str(d.get("months_of_runway", ""))
    if result.op == "templates":
        return "\n".join(t["id"] for t in d.get("templates", []))
    if result.op == "timeline":
        return "\n".join(b["entity_id"] for b in d.get("bars", []))
    if "id" in d:
        return str(d["id"])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="rw.ok")
    op = Text(f"  {result.op}", style="rw.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="rw.key")
    if key == "id" or key.endswith("_id"):
        v = Text(str(value), style="rw.id")
    elif key == "path":
        v = Text(str(value), style="rw.path")
    elif value is None:
        v = Text("—", style="dim")
    else:
        v = Text(str(value))
    console.print(k, v, end="")
    console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        console.print(f"    {k}: {v}")


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="rw.error")
    op = Text(f"  {result.op}", style="rw.op")
    sep = Text(" — ")
    console.print(label, op, sep, msg)
    if err is not None:
        console.print(Text(f"  code: {err.code}", style="dim"))
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Mutation renderers ────────────────────────────────────────────────


def _render_mutation(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render assign/move/resize/init results."""
    _status_line(console, result)
    for key in ("id", "name", "position", "edge", "start", "end", "salary", "path"):
        if key in result.data:
            value = result.data[key]
            if key == "salary" and value is not None:
                value = format_currency(value)
            _field(console, key, value)
    if "starting_cash" in result.data:
        _field(console, "starting_cash", format_currency(result.data["starting_cash"]))
    if "starting_month" in result.data:
        _field(console, "starting_month", result.data["starting_month"])
    if "fields_changed" in result.data:
        _field(console, "fields_changed", ", ".join(result.data["fields_changed"]))
    if verbose:
        _render_meta(console, result)


# ── Runway renderer ───────────────────────────────────────────────────


def _render_simulate(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Summary fields, then one row per simulated month.

    Long projections collapse to quarter-start rows unless verbose.
    """
    d = result.data
    starting_cash = float(d.get("starting_cash") or 0)
    _status_line(console, result)
    _field(console, "scenario", d.get("scenario"))
    _field(console, "starting_cash", format_currency(starting_cash))
    _field(console, "months_of_runway", d.get("months_of_runway"))
    _field(console, "monthly_burn", format_currency(d.get("total_burn_rate", 0)))
    _field(console, "active_employees", d.get("active_employee_count"))
    _field(console, "runs_out", d.get("runout_month"))

    points: list[dict[str, Any]] = d.get("points", [])
    if not points:
        return
    indices = list(range(len(points)))
    if d.get("use_quarterly_labels") and not verbose:
        indices = list(d.get("quarter_ticks") or indices)
        if indices[-1] != len(points) - 1:
            indices.append(len(points) - 1)

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Month", no_wrap=True)
    table.add_column("Quarter", style="dim")
    table.add_column("Burn", justify="right")
    table.add_column("Cash", justify="right")
    for i in indices:
        p = points[i]
        balance = float(p["cash_balance"])
        table.add_row(
            p["label"],
            p["quarter_label"],
            format_currency(p["monthly_burn"]),
            Text(format_currency(balance), style=style_for_cash(balance, starting_cash)),
        )
    console.print()
    console.print(table)


# ── Timeline renderer ─────────────────────────────────────────────────


def _span_cells(start: int, end: int, count: int) -> Text:
    text = Text()
    text.append("·" * start, style="rw.gap")
    text.append("█" * (end - start + 1), style="rw.bar")
    text.append("·" * (count - end - 1), style="rw.gap")
    return text


def _render_timeline(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """One row per drawn bar, with a one-character-per-month span strip."""
    d = result.data
    columns = d.get("columns", [])
    window = d.get("window", {})
    _status_line(console, result)
    _field(console, "scenario", d.get("scenario"))
    _field(console, "window", f"{window.get('first')} .. {window.get('last')}")
    _field(console, "granularity", d.get("granularity"))

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Row", justify="right", style="dim")
    table.add_column("ID", style="rw.id", no_wrap=True)
    table.add_column("Name")
    table.add_column("Start")
    table.add_column("End")
    table.add_column("Span", no_wrap=True)
    if verbose:
        table.add_column("Left", justify="right", style="dim")
        table.add_column("Width", justify="right", style="dim")

    for bar in d.get("bars", []):
        row: list[Any] = [
            str(bar["row"]),
            bar["entity_id"],
            bar["label"],
            bar["start"],
            bar["end"],
            _span_cells(bar["start_index"], bar["end_index"], len(columns)),
        ]
        if verbose:
            row.extend([f"{bar['left']:.0f}", f"{bar['width']:.0f}"])
        table.add_row(*row)
    console.print()
    console.print(table)
    if verbose:
        _render_meta(console, result)


# ── Catalog renderer ──────────────────────────────────────────────────


def _render_templates(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("ID", style="rw.id", no_wrap=True)
    table.add_column("Role")
    table.add_column("Monthly salary", justify="right", style="rw.money")
    if verbose:
        table.add_column("Color", style="dim")
    for t in result.data.get("templates", []):
        row = [t["id"], t["name"], format_currency(t["default_salary"])]
        if verbose:
            row.append(t["color"])
        table.add_row(*row)
    console.print(table)


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "init": _render_mutation,
    "assign": _render_mutation,
    "move": _render_mutation,
    "resize": _render_mutation,
    "simulate": _render_simulate,
    "timeline": _render_timeline,
    "templates": _render_templates,
}
