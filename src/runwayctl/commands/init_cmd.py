"""Command: scenario initialization (named init_cmd to avoid shadowing builtins)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from runwayctl.commands._base import RunwayCommand

if TYPE_CHECKING:
    from runwayctl.commands._context import AppContext

_INIT_EXAMPLES = """\
  runwayctl init --cash 500000
  runwayctl init --name "Seed plan" --cash 1200000 --month 7 --year 2025
  runwayctl --scenario plans/a.yaml init --cash 250000 --force"""


@click.command("init", cls=RunwayCommand, examples=_INIT_EXAMPLES)
@click.option("--name", default="Untitled scenario", show_default=True, help="Scenario name.")
@click.option("--cash", type=float, required=True, help="Starting cash balance.")
@click.option("--month", type=int, default=None, help="Starting month (1-12). Default: now.")
@click.option("--year", type=int, default=None, help="Starting year. Default: now.")
@click.option("--force", is_flag=True, help="Overwrite an existing scenario file.")
@click.pass_obj
def init_cmd(
    app: AppContext,
    name: str,
    cash: float,
    month: int | None,
    year: int | None,
    force: bool,
) -> None:
    """Create an empty scenario file."""
    from runwayctl.services.scenario import ScenarioService

    if month is None or year is None:
        today = app.today()
        month = month if month is not None else today.month
        year = year if year is not None else today.year

    result = ScenarioService(app.store).init(
        name=name,
        starting_cash=cash,
        starting_month=month,
        starting_year=year,
        force=force,
    )
    app.emit(result)
