"""Command: list the built-in role catalog."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from runwayctl.commands._base import RunwayCommand

if TYPE_CHECKING:
    from runwayctl.commands._context import AppContext


@click.command(
    cls=RunwayCommand,
    examples="""\
  runwayctl templates
  runwayctl -q templates""",
)
@click.pass_obj
def templates(app: AppContext) -> None:
    """List role templates that can be assigned to the timeline."""
    from runwayctl.services.scenario import ScenarioService

    app.emit(ScenarioService.list_templates())
