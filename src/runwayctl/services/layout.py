"""Entity bar layout — entities to rectangles on the month grid.

Each entity gets exactly one row, taken from its position in the
caller-ordered list.  Overlapping date ranges are never packed into a
shared lane.

Month sequences passed here must be contiguous (as produced by
:meth:`ViewportWindowManager.visible_months`); indices are resolved by
month arithmetic against the first element.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from runwayctl.domain.calendar import (
    CalendarMonth,
    ParseError,
    from_key,
    is_quarter_start,
    is_year_start,
    month_label,
    months_between,
    quarter_label,
    to_key,
)
from runwayctl.domain.models import Entity
from runwayctl.domain.types import Granularity

BAR_PADDING = 4
ROW_HEIGHT = 40
BAR_INSET = 4  # vertical gap above and below a bar inside its row


@dataclass(frozen=True)
class BarRect:
    """Render rectangle for one entity, in content pixels."""

    entity_id: str
    row: int
    left: float
    width: float
    top: float
    height: float
    start_index: int
    end_index: int
    label: str
    color: str


@dataclass(frozen=True)
class MonthColumn:
    """One column of the month grid (header cell and drop zone)."""

    month: CalendarMonth
    key: str
    left: float
    width: float
    label: str
    emphasized: bool
    group_label: str | None


def resolve_span(entity: Entity, months: Sequence[CalendarMonth]) -> tuple[int, int] | None:
    """Return ``(start_index, end_index)`` of *entity* within *months*.

    Returns None when the entity has no start, lies entirely outside the
    window, or its clamped start falls after its clamped end.
    """
    if not months or entity.start is None:
        return None
    first = months[0]
    last_index = len(months) - 1

    start_index = months_between(first, entity.start)
    if start_index > last_index:
        return None
    start_index = max(start_index, 0)

    if entity.end is None:
        end_index = last_index
    else:
        end_index = months_between(first, entity.end)
        if end_index < 0:
            return None
        end_index = min(end_index, last_index)

    if start_index > end_index:
        return None
    return start_index, end_index


def layout_bar(
    entity: Entity,
    months: Sequence[CalendarMonth],
    month_width: float,
    row: int,
    *,
    padding: float = BAR_PADDING,
    row_height: float = ROW_HEIGHT,
) -> BarRect | None:
    """Lay out a single entity on *row*, or None if it is not visible."""
    span = resolve_span(entity, months)
    if span is None:
        return None
    start_index, end_index = span
    return BarRect(
        entity_id=entity.id,
        row=row,
        left=start_index * month_width,
        width=(end_index - start_index + 1) * month_width - padding,
        top=row * row_height + BAR_INSET,
        height=row_height - 2 * BAR_INSET,
        start_index=start_index,
        end_index=end_index,
        label=entity.display_name,
        color=entity.bar_color,
    )


def layout_bars(
    entities: Sequence[Entity],
    months: Sequence[CalendarMonth],
    month_width: float,
    *,
    padding: float = BAR_PADDING,
    row_height: float = ROW_HEIGHT,
) -> list[BarRect]:
    """Lay out every visible entity; row = position in *entities*."""
    bars: list[BarRect] = []
    for row, entity in enumerate(entities):
        bar = layout_bar(
            entity, months, month_width, row, padding=padding, row_height=row_height
        )
        if bar is not None:
            bars.append(bar)
    return bars


def month_columns(
    months: Sequence[CalendarMonth],
    month_width: float,
    granularity: Granularity,
) -> list[MonthColumn]:
    """Header/grid columns.

    Quarterly view labels each month "Jan 2025" and emphasises quarter
    starts; yearly view labels "Jan" and emphasises year starts.  The
    group label sits on emphasised columns.
    """
    yearly = granularity == Granularity.YEARLY
    columns: list[MonthColumn] = []
    for i, month in enumerate(months):
        emphasized = is_year_start(month) if yearly else is_quarter_start(month)
        group = None
        if emphasized:
            group = str(month.year) if yearly else quarter_label(month)
        columns.append(
            MonthColumn(
                month=month,
                key=to_key(month),
                left=i * month_width,
                width=month_width,
                label=month_label(month, with_year=not yearly),
                emphasized=emphasized,
                group_label=group,
            )
        )
    return columns


def canvas_height(entity_count: int, row_height: float = ROW_HEIGHT) -> float:
    """Height of the bar area: room for every row, never under 200px."""
    return max(entity_count * row_height + 20, 200)


def drop_indicator(
    over_id: str | None,
    months: Sequence[CalendarMonth],
    month_width: float,
) -> tuple[float, float] | None:
    """``(left, width)`` of the highlight under the hovered drop target."""
    if not over_id or not months:
        return None
    try:
        month = from_key(over_id)
    except ParseError:
        return None
    index = months_between(months[0], month)
    if not 0 <= index < len(months):
        return None
    return index * month_width, month_width
