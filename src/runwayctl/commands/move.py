"""Command: relocate an employee, preserving duration."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from runwayctl.commands._base import RunwayCommand

if TYPE_CHECKING:
    from runwayctl.commands._context import AppContext


@click.command(
    cls=RunwayCommand,
    examples="""\
  runwayctl move emp_1a2b3c4d 2025-09
  runwayctl -q move emp_1a2b3c4d 2026-01""",
)
@click.argument("entity_id")
@click.argument("month")
@click.pass_obj
def move(app: AppContext, entity_id: str, month: str) -> None:
    """Move ENTITY_ID so it starts in MONTH (YYYY-MM)."""
    from runwayctl.services.scenario import ScenarioService

    app.emit(ScenarioService(app.store, app.plugins).move(entity_id, month))
