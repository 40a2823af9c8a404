"""Cash-runway projection.

Month-by-month depletion of a starting cash balance under the payroll
of the scheduled entities.  :func:`simulate_runway` is pure and assumes
validated input; :func:`validate_runway_inputs` is the caller-side
check and :class:`RunwayService` wires both to a scenario file.

An entity burns ``salary`` in every month on or after its start.  End
dates are deliberately not consulted: an entity whose end date has
passed keeps burning.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from pydantic import BaseModel

from runwayctl.domain.calendar import (
    CalendarMonth,
    add_months,
    month_label,
    quarter_label,
    to_key,
)
from runwayctl.domain.models import Entity
from runwayctl.services.base import BaseService
from runwayctl.services.result import ServiceResult

logger = logging.getLogger(__name__)

MAX_MONTHS = 120
QUARTERLY_LABEL_THRESHOLD = 24


class RunwayPoint(BaseModel):
    """Cash position at the start of one simulated month."""

    model_config = {"frozen": True}

    label: str
    sort_key: str
    quarter_label: str
    cash_balance: float
    monthly_burn: float


class RunwayProjection(BaseModel):
    """Full simulation output: the point series plus summary fields."""

    model_config = {"frozen": True}

    points: list[RunwayPoint]
    months_of_runway: int
    total_burn_rate: float
    active_employee_count: int
    use_quarterly_labels: bool

    @property
    def runout_point(self) -> RunwayPoint | None:
        """First point where cash is exhausted, or None."""
        for point in self.points:
            if point.cash_balance <= 0:
                return point
        return None


def monthly_burn(entities: Iterable[Entity], month: CalendarMonth) -> tuple[float, int]:
    """Return ``(burn, active_count)`` for *month*.

    Entities missing a salary or a start date contribute nothing.  A
    salary of 0 is a present salary: the entity counts as active while
    adding nothing to burn.  This departs from treating any falsy salary
    as missing, which would leave unpaid placeholders out of the headcount.
    """
    burn = 0.0
    active = 0
    for entity in entities:
        if entity.salary is None or entity.start is None:
            continue
        if entity.start <= month:
            burn += entity.salary
            active += 1
    return burn, active


def _point(month: CalendarMonth, cash: float, burn: float) -> RunwayPoint:
    return RunwayPoint(
        label=month_label(month),
        sort_key=to_key(month),
        quarter_label=quarter_label(month),
        cash_balance=cash,
        monthly_burn=burn,
    )


def simulate_runway(
    starting_cash: float,
    starting_month: int,
    starting_year: int,
    entities: Sequence[Entity],
    *,
    max_months: int = MAX_MONTHS,
    quarterly_label_threshold: int = QUARTERLY_LABEL_THRESHOLD,
) -> RunwayProjection:
    """Project cash month by month until it runs out or *max_months* pass.

    The first point is the starting month itself and is not counted as
    elapsed runway.  Iteration stops in the same step that cash first
    reaches zero, so at most one zero-cash point is emitted.
    """
    month = CalendarMonth(year=starting_year, month=starting_month)
    cash = starting_cash
    burn, active = monthly_burn(entities, month)
    points = [_point(month, cash, burn)]

    elapsed = 0
    while cash > 0 and elapsed < max_months:
        month = add_months(month, 1)
        elapsed += 1
        burn, active = monthly_burn(entities, month)
        cash = max(0.0, cash - burn)
        points.append(_point(month, cash, burn))
        if cash == 0:
            break

    logger.debug(
        "Simulated %d months from %s: final cash %.2f",
        len(points) - 1,
        points[0].sort_key,
        cash,
    )
    return RunwayProjection(
        points=points,
        months_of_runway=len(points) - 1,
        total_burn_rate=points[-1].monthly_burn,
        active_employee_count=active,
        use_quarterly_labels=len(points) >= quarterly_label_threshold,
    )


def validate_runway_inputs(
    starting_cash: float | None,
    starting_month: int | None,
    starting_year: int | None,
    *,
    min_year: int = 2000,
    max_year: int = 2100,
) -> str | None:
    """Return an error message for unusable inputs, or None if valid."""
    if starting_cash is None:
        return "Starting cash is required"
    if starting_cash < 0:
        return "Starting cash must be positive"
    if not starting_month or not 1 <= starting_month <= 12:
        return "Valid starting month is required (1-12)"
    if not starting_year or not min_year <= starting_year <= max_year:
        return "Valid starting year is required"
    return None


def quarter_ticks(points: Sequence[RunwayPoint]) -> list[int]:
    """Indices of the first point of each quarter (chart axis ticks)."""
    ticks: list[int] = []
    seen: set[str] = set()
    for i, point in enumerate(points):
        if point.quarter_label not in seen:
            seen.add(point.quarter_label)
            ticks.append(i)
    return ticks


def format_currency(amount: float) -> str:
    """US-dollar display with no decimals, e.g. ``$100,000``."""
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.0f}"


class RunwayService(BaseService):
    """Runs the projection against the stored scenario."""

    def project(
        self,
        *,
        starting_cash: float | None = None,
        starting_month: int | None = None,
        starting_year: int | None = None,
        max_months: int = MAX_MONTHS,
        quarterly_label_threshold: int = QUARTERLY_LABEL_THRESHOLD,
        min_year: int = 2000,
        max_year: int = 2100,
    ) -> ServiceResult:
        """Simulate the scenario; explicit arguments override stored values."""
        op = "simulate"
        scenario, failure = self._load_scenario(op)
        if failure is not None:
            return failure
        assert scenario is not None

        cash = starting_cash if starting_cash is not None else scenario.starting_cash
        month = starting_month if starting_month is not None else scenario.starting_month
        year = starting_year if starting_year is not None else scenario.starting_year

        problem = validate_runway_inputs(cash, month, year, min_year=min_year, max_year=max_year)
        if problem is not None:
            return ServiceResult.failure(
                op,
                "INVALID_INPUT",
                problem,
                starting_cash=cash,
                starting_month=month,
                starting_year=year,
            )
        assert cash is not None and month is not None and year is not None

        projection = simulate_runway(
            cash,
            month,
            year,
            scenario.employees,
            max_months=max_months,
            quarterly_label_threshold=quarterly_label_threshold,
        )

        warnings: list[str] = []
        for entity in scenario.employees:
            if entity.has_inverted_range:
                warnings.append(
                    f"{entity.id} ends before it starts; it is still counted in burn"
                )
        if scenario.employees and projection.active_employee_count == 0:
            warnings.append("No employee with a salary and start date is active")

        runout = projection.runout_point
        data = {
            "scenario": scenario.name,
            "starting_cash": cash,
            "starting_month": to_key(CalendarMonth(year=year, month=month)),
            "months_of_runway": projection.months_of_runway,
            "total_burn_rate": projection.total_burn_rate,
            "active_employee_count": projection.active_employee_count,
            "use_quarterly_labels": projection.use_quarterly_labels,
            "runout_month": runout.sort_key if runout is not None else None,
            "quarter_ticks": quarter_ticks(projection.points)
            if projection.use_quarterly_labels
            else [],
            "points": [p.model_dump() for p in projection.points],
        }
        self._dispatch_event(
            "post_simulate",
            {
                "scenario": scenario.name,
                "months_of_runway": projection.months_of_runway,
                "total_burn_rate": projection.total_burn_rate,
            },
            warnings,
        )
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)
