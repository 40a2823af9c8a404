"""Command: place a role template on the timeline."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from runwayctl.commands._base import RunwayCommand

if TYPE_CHECKING:
    from runwayctl.commands._context import AppContext


@click.command(
    cls=RunwayCommand,
    examples="""\
  runwayctl assign sr-swe 2025-03
  runwayctl --json assign ux-designer 2026-01""",
)
@click.argument("template_id")
@click.argument("month")
@click.pass_obj
def assign(app: AppContext, template_id: str, month: str) -> None:
    """Add a new hire from TEMPLATE_ID starting in MONTH (YYYY-MM)."""
    from runwayctl.services.scenario import ScenarioService

    app.emit(ScenarioService(app.store, app.plugins).assign(template_id, month))
