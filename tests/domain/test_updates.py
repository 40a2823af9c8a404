"""Tests for the semantic update rules applied on drop."""

from __future__ import annotations

import pytest

from runwayctl.domain.calendar import CalendarMonth, from_key
from runwayctl.domain.models import Entity, get_template
from runwayctl.domain.types import Edge
from runwayctl.domain.updates import (
    EntityUpdate,
    apply_update,
    assignment_entity,
    parse_target,
    relocate_update,
    resize_update,
)


class TestRelocate:
    def test_preserves_six_month_duration(self) -> None:
        entity = Entity(id="e", start="2025-01", end="2025-07")
        moved = apply_update(entity, relocate_update(entity, from_key("2025-03")))
        assert moved.start == CalendarMonth(2025, 3)
        assert moved.end == CalendarMonth(2025, 9)

    def test_backwards_across_year(self) -> None:
        entity = Entity(id="e", start="2025-02", end="2025-04")
        moved = apply_update(entity, relocate_update(entity, from_key("2024-12")))
        assert (moved.start, moved.end) == (CalendarMonth(2024, 12), CalendarMonth(2025, 2))

    def test_open_ended_moves_start_only(self) -> None:
        entity = Entity(id="e", start="2025-01")
        update = relocate_update(entity, from_key("2025-05"))
        assert update.changed_fields == ["start"]
        assert apply_update(entity, update).end is None

    def test_no_start_gains_start(self) -> None:
        entity = Entity(id="e", end="2025-12")
        moved = apply_update(entity, relocate_update(entity, from_key("2025-05")))
        assert moved.start == CalendarMonth(2025, 5)
        assert moved.end == CalendarMonth(2025, 12)


class TestResize:
    def test_start_edge_leaves_end(self) -> None:
        entity = Entity(id="e", start="2025-01", end="2025-07")
        resized = apply_update(entity, resize_update(entity, Edge.START, from_key("2025-04")))
        assert resized.start == CalendarMonth(2025, 4)
        assert resized.end == CalendarMonth(2025, 7)

    def test_end_edge_leaves_start(self) -> None:
        entity = Entity(id="e", start="2025-01", end="2025-07")
        resized = apply_update(entity, resize_update(entity, Edge.END, from_key("2026-01")))
        assert resized.start == CalendarMonth(2025, 1)
        assert resized.end == CalendarMonth(2026, 1)

    def test_clearing_end_makes_open_ended(self) -> None:
        entity = Entity(id="e", start="2025-01", end="2025-07")
        update = resize_update(entity, Edge.END, None)
        assert update.changed_fields == ["end"]
        assert apply_update(entity, update).end is None

    def test_clearing_start_rejected(self) -> None:
        with pytest.raises(ValueError, match="start"):
            resize_update(Entity(id="e", start="2025-01"), Edge.START, None)


class TestEntityUpdate:
    def test_empty_update_changes_nothing(self) -> None:
        entity = Entity(id="e", start="2025-01", end="2025-07")
        assert apply_update(entity, EntityUpdate()) == entity


class TestParseTarget:
    def test_blank_is_none(self) -> None:
        assert parse_target(None) is None
        assert parse_target("  ") is None

    def test_parses_key(self) -> None:
        assert parse_target("2025-02") == CalendarMonth(2025, 2)


class TestAssignment:
    def test_placeholder_from_template(self) -> None:
        template = get_template("ux-designer")
        assert template is not None
        entity = assignment_entity(template, CalendarMonth(2025, 3), "emp_12345678")
        assert entity.position == "UX Designer"
        assert entity.salary == 11000
        assert entity.start == CalendarMonth(2025, 3)
        assert entity.end is None
