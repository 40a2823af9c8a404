"""Command: project the cash runway of the stored scenario."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from runwayctl.commands._base import RunwayCommand

if TYPE_CHECKING:
    from runwayctl.commands._context import AppContext


@click.command(
    cls=RunwayCommand,
    examples="""\
  runwayctl simulate
  runwayctl simulate --cash 750000
  runwayctl -v simulate --month 1 --year 2026
  runwayctl --json simulate""",
)
@click.option("--cash", type=float, default=None, help="Override starting cash.")
@click.option("--month", type=int, default=None, help="Override starting month (1-12).")
@click.option("--year", type=int, default=None, help="Override starting year.")
@click.pass_obj
def simulate(app: AppContext, cash: float | None, month: int | None, year: int | None) -> None:
    """Simulate month-by-month cash depletion under the scheduled payroll."""
    from runwayctl.services.runway import RunwayService

    cfg = app.settings.runway
    result = RunwayService(app.store, app.plugins).project(
        starting_cash=cash,
        starting_month=month,
        starting_year=year,
        max_months=cfg.max_months,
        quarterly_label_threshold=cfg.quarterly_label_threshold,
        min_year=cfg.min_year,
        max_year=cfg.max_year,
    )
    app.emit(result)
