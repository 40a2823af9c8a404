"""Tests for the Timeline composition and TimelineService."""

from __future__ import annotations

from typing import Any

import pytest

from runwayctl.domain.calendar import CalendarMonth
from runwayctl.domain.models import Entity, RoleTemplate, Scenario
from runwayctl.domain.payload import Relocate
from runwayctl.domain.types import DragPhase, Edge, Granularity
from runwayctl.infrastructure.store import ScenarioStore
from runwayctl.services.timeline import Timeline, TimelineService

TODAY = CalendarMonth(2025, 1)


class _Handlers:
    def __init__(self) -> None:
        self.calls: list[tuple[Any, ...]] = []

    def on_new_assignment(self, template: RoleTemplate, month_key: str) -> None:
        self.calls.append(("assign", template.id, month_key))

    def on_relocate(self, entity_id: str, month_key: str) -> None:
        self.calls.append(("relocate", entity_id, month_key))

    def on_resize_edge(self, entity_id: str, edge: Edge, month_key: str) -> None:
        self.calls.append(("resize", entity_id, edge, month_key))


@pytest.fixture
def handlers() -> _Handlers:
    return _Handlers()


@pytest.fixture
def timeline(handlers: _Handlers, clock: Any) -> Timeline:
    return Timeline(handlers, today=TODAY, clock=clock)


class TestTimeline:
    def test_starts_scrolled_to_today(self, timeline: Timeline) -> None:
        assert timeline.scroll_left == 1100

    def test_render_frame(self, timeline: Timeline) -> None:
        entities = [
            Entity(id="a", position="PM", start="2025-01", end="2025-03"),
            Entity(id="b", position="Sr. SWE"),
        ]
        frame = timeline.render(entities)
        assert frame.granularity is Granularity.QUARTERLY
        assert frame.month_width == 100
        assert len(frame.columns) == 36
        assert [bar.entity_id for bar in frame.bars] == ["a"]
        assert frame.bars[0].left == 1200
        assert frame.canvas_height == 200
        assert frame.drop_indicator is None
        assert frame.overlay_label is None

    def test_drag_to_month_under_pointer(self, timeline: Timeline, handlers: _Handlers) -> None:
        timeline.drag.press(Relocate("a"), 50, 50)
        timeline.drag.move(80, 50)
        # content x = 1100 + 80 -> column 11 -> 2024-12
        assert timeline.drag.over_id == "2024-12"
        frame = timeline.render([])
        assert frame.drop_indicator == (1100, 100)
        assert frame.overlay_label == "Moving..."
        timeline.drag.release()
        assert handlers.calls == [("relocate", "a", "2024-12")]
        assert timeline.drag.phase is DragPhase.IDLE

    def test_header_strip_is_not_a_target(self, timeline: Timeline) -> None:
        assert timeline.target_at(80, 10) is None
        assert timeline.target_at(80, 40) == "2024-12"

    def test_scroll_near_left_edge_compensates(self, timeline: Timeline, clock: Any) -> None:
        timeline.on_scroll(50, 1000)
        timeline.tick()
        assert timeline.scroll_left == 50
        clock.advance(0.2)
        timeline.tick()
        assert timeline.viewport.state.start_offset == -24
        assert timeline.scroll_left == 1250

    def test_set_granularity_keeps_centre(self, timeline: Timeline) -> None:
        timeline.on_scroll(1100, 600)
        assert timeline.set_granularity(Granularity.YEARLY, 600) == 135
        assert timeline.viewport.month_width == 30
        assert not timeline.viewport.scroll_pending

    def test_same_granularity_is_noop(self, timeline: Timeline) -> None:
        assert timeline.set_granularity(Granularity.QUARTERLY, 600) == 1100

    def test_instances_do_not_share_state(self, handlers: _Handlers, clock: Any) -> None:
        first = Timeline(handlers, today=TODAY, clock=clock)
        second = Timeline(handlers, today=TODAY, clock=clock)
        first.drag.press(Relocate("a"), 0, 0)
        first.drag.move(30, 0)
        assert second.drag.phase is DragPhase.IDLE
        first.viewport.evaluate_scroll(0, 3600, 1000)
        assert second.viewport.state.start_offset == -12


class TestTimelineService:
    def test_render(self, store: ScenarioStore) -> None:
        result = TimelineService(store).render(today=TODAY)
        assert result.ok
        assert result.op == "timeline"
        assert result.data["window"] == {"first": "2024-01", "last": "2026-12"}
        bars = {bar["entity_id"]: bar for bar in result.data["bars"]}
        assert set(bars) == {"emp_00000001", "emp_00000002"}
        assert bars["emp_00000001"]["start"] == "2025-01"
        assert bars["emp_00000001"]["end"] == "2025-07"
        assert bars["emp_00000002"]["end"] == "2026-12"
        assert bars["emp_00000002"]["row"] == 1
        assert any("emp_00000003 has no start date" in w for w in result.warnings)
        assert result.meta == {"entities": 3, "drawn": 2}

    def test_yearly(self, store: ScenarioStore) -> None:
        result = TimelineService(store).render(today=TODAY, granularity=Granularity.YEARLY)
        assert result.data["month_width"] == 30
        assert result.data["columns"][0]["label"] == "Jan"

    def test_inverted_range_warning(self, empty_store: ScenarioStore) -> None:
        empty_store.save(Scenario(employees=[Entity(id="x", start="2025-06", end="2025-01")]))
        result = TimelineService(empty_store).render(today=TODAY)
        assert result.data["bars"] == []
        assert any("x ends before it starts" in w for w in result.warnings)

    def test_missing_scenario(self, empty_store: ScenarioStore) -> None:
        result = TimelineService(empty_store).render(today=TODAY)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "SCENARIO_MISSING"
