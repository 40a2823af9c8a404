"""Tests for entity bar layout and grid columns."""

from __future__ import annotations

import pytest

from runwayctl.domain.calendar import CalendarMonth, month_range
from runwayctl.domain.models import Entity
from runwayctl.domain.types import Granularity
from runwayctl.services.layout import (
    canvas_height,
    drop_indicator,
    layout_bar,
    layout_bars,
    month_columns,
    resolve_span,
)

MONTHS = list(month_range(CalendarMonth(2025, 1), 12))  # 2025-01 .. 2025-12
W = 100


def _entity(start: str | None, end: str | None = None, id: str = "e") -> Entity:
    return Entity(id=id, start=start, end=end)


class TestResolveSpan:
    def test_inside_window(self) -> None:
        assert resolve_span(_entity("2025-03", "2025-05"), MONTHS) == (2, 4)

    def test_start_before_window_clamps_to_zero(self) -> None:
        assert resolve_span(_entity("2024-06", "2025-02"), MONTHS) == (0, 1)

    def test_start_after_window(self) -> None:
        assert resolve_span(_entity("2026-01"), MONTHS) is None

    def test_end_before_window(self) -> None:
        assert resolve_span(_entity("2024-01", "2024-12"), MONTHS) is None

    def test_end_after_window_clamps(self) -> None:
        assert resolve_span(_entity("2025-10", "2027-01"), MONTHS) == (9, 11)

    def test_open_ended_runs_to_last(self) -> None:
        assert resolve_span(_entity("2025-10"), MONTHS) == (9, 11)

    def test_no_start(self) -> None:
        assert resolve_span(_entity(None, "2025-05"), MONTHS) is None

    def test_inverted_range(self) -> None:
        assert resolve_span(_entity("2025-06", "2025-03"), MONTHS) is None

    def test_empty_window(self) -> None:
        assert resolve_span(_entity("2025-06"), []) is None


class TestLayoutBar:
    def test_geometry(self) -> None:
        bar = layout_bar(_entity("2025-03", "2025-05"), MONTHS, W, row=2)
        assert bar is not None
        assert bar.left == 200
        assert bar.width == 3 * W - 4
        assert bar.top == 2 * 40 + 4
        assert bar.height == 32

    def test_spans_whole_window(self) -> None:
        bar = layout_bar(_entity("2020-01"), MONTHS, W, row=0)
        assert bar is not None
        assert bar.left == 0
        assert bar.width == len(MONTHS) * W - 4

    def test_single_month(self) -> None:
        bar = layout_bar(_entity("2025-07", "2025-07"), MONTHS, 30, row=0)
        assert bar is not None
        assert (bar.left, bar.width) == (180, 26)

    def test_label_and_color(self) -> None:
        entity = Entity(id="e", first_name="Ada", position="UX Designer", start="2025-01")
        bar = layout_bar(entity, MONTHS, W, row=0)
        assert bar is not None
        assert bar.label == "Ada"
        assert bar.color == "#EC4899"


class TestLayoutBars:
    def test_row_is_list_position(self) -> None:
        entities = [
            _entity("2025-01", "2025-06", id="a"),
            _entity(None, id="hidden"),
            _entity("2025-03", "2025-09", id="b"),
        ]
        bars = layout_bars(entities, MONTHS, W)
        assert [(b.entity_id, b.row) for b in bars] == [("a", 0), ("b", 2)]

    def test_overlaps_never_share_a_row(self) -> None:
        entities = [_entity("2025-01", "2025-02", id="a"), _entity("2025-06", id="b")]
        rows = [b.row for b in layout_bars(entities, MONTHS, W)]
        assert rows == [0, 1]

    def test_custom_padding(self) -> None:
        bars = layout_bars([_entity("2025-01", "2025-01")], MONTHS, W, padding=0)
        assert bars[0].width == W


class TestMonthColumns:
    def test_quarterly(self) -> None:
        columns = month_columns(MONTHS, W, Granularity.QUARTERLY)
        assert columns[0].label == "Jan 2025"
        assert columns[0].group_label == "Q1 2025"
        assert [c.key for c in columns if c.emphasized] == [
            "2025-01",
            "2025-04",
            "2025-07",
            "2025-10",
        ]
        assert columns[4].left == 400
        assert columns[4].group_label is None

    def test_yearly(self) -> None:
        months = list(month_range(CalendarMonth(2024, 11), 4))
        columns = month_columns(months, 30, Granularity.YEARLY)
        assert [c.label for c in columns] == ["Nov", "Dec", "Jan", "Feb"]
        assert [c.group_label for c in columns] == [None, None, "2025", None]


class TestCanvasHeight:
    @pytest.mark.parametrize(("count", "height"), [(0, 200), (4, 200), (5, 220), (10, 420)])
    def test_height(self, count: int, height: float) -> None:
        assert canvas_height(count) == height


class TestDropIndicator:
    def test_highlights_hovered_month(self) -> None:
        assert drop_indicator("2025-04", MONTHS, W) == (300, 100)

    def test_none_without_target(self) -> None:
        assert drop_indicator(None, MONTHS, W) is None

    def test_none_outside_window(self) -> None:
        assert drop_indicator("2026-04", MONTHS, W) is None

    def test_none_for_foreign_id(self) -> None:
        assert drop_indicator("sidebar", MONTHS, W) is None
