"""Command: move one edge of an employee's date range."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from runwayctl.commands._base import RunwayCommand
from runwayctl.domain.types import Edge

if TYPE_CHECKING:
    from runwayctl.commands._context import AppContext


@click.command(
    cls=RunwayCommand,
    examples="""\
  runwayctl resize emp_1a2b3c4d end 2026-06
  runwayctl resize emp_1a2b3c4d start 2025-01
  runwayctl resize emp_1a2b3c4d end          # clear the end date""",
)
@click.argument("entity_id")
@click.argument("edge", type=click.Choice([e.value for e in Edge]))
@click.argument("month", required=False, default=None)
@click.pass_obj
def resize(app: AppContext, entity_id: str, edge: str, month: str | None) -> None:
    """Set EDGE of ENTITY_ID to MONTH; omit MONTH to clear the end date."""
    from runwayctl.services.scenario import ScenarioService

    app.emit(ScenarioService(app.store, app.plugins).resize(entity_id, edge, month))
