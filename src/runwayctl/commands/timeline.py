"""Command: lay out the scenario on the month grid."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from runwayctl.commands._base import RunwayCommand
from runwayctl.domain.types import Granularity

if TYPE_CHECKING:
    from runwayctl.commands._context import AppContext


@click.command(
    cls=RunwayCommand,
    examples="""\
  runwayctl timeline
  runwayctl timeline --granularity yearly
  runwayctl --now 2025-06 -v timeline""",
)
@click.option(
    "--granularity",
    type=click.Choice([g.value for g in Granularity], case_sensitive=False),
    default=None,
    help="Zoom preset (default from config).",
)
@click.pass_obj
def timeline(app: AppContext, granularity: str | None) -> None:
    """Show each employee's bar across the visible window around now."""
    from runwayctl.services.timeline import TimelineService

    result = TimelineService(app.store).render(
        today=app.today(),
        granularity=Granularity(granularity.lower()) if granularity else None,
        config=app.settings.timeline,
    )
    app.emit(result)
