"""Rich Console factory and theme for runwayctl output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

RUNWAY_THEME = Theme(
    {
        "rw.ok": "bold green",
        "rw.error": "bold red",
        "rw.warning": "bold yellow",
        "rw.op": "bold cyan",
        "rw.key": "dim",
        "rw.id": "bold blue",
        "rw.path": "dim",
        "rw.money": "green",
        "rw.money.low": "yellow",
        "rw.money.out": "bold red",
        "rw.bar": "blue",
        "rw.gap": "dim",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=RUNWAY_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_cash(balance: float, starting_cash: float) -> str:
    """Style for a cash figure relative to where the projection started."""
    if balance <= 0:
        return "rw.money.out"
    if starting_cash > 0 and balance < starting_cash * 0.25:
        return "rw.money.low"
    return "rw.money"
