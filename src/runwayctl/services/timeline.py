"""Timeline composition — one viewport, one drag controller, one layout pass.

:class:`Timeline` is built once per on-screen timeline.  It owns its
:class:`ViewportWindowManager` and :class:`DragInteractionController`
and passes them explicitly into layout, so two timelines side by side
never share scroll or drag state.

:class:`TimelineService` is the CLI's read-only view of the same
composition: it lays out the stored scenario and reports the result.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from runwayctl.config.models import DragConfig, TimelineConfig
from runwayctl.domain.calendar import CalendarMonth, to_key
from runwayctl.domain.models import Entity
from runwayctl.domain.types import Granularity
from runwayctl.services.base import BaseService
from runwayctl.services.drag import DragInteractionController, DropHandlers, hit_test_month
from runwayctl.services.layout import (
    BarRect,
    MonthColumn,
    canvas_height,
    drop_indicator,
    layout_bars,
    month_columns,
)
from runwayctl.services.result import ServiceResult
from runwayctl.services.viewport import ViewportWindowManager

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimelineFrame:
    """Everything the host needs to paint one frame."""

    granularity: Granularity
    month_width: int
    total_width: float
    canvas_height: float
    columns: list[MonthColumn]
    bars: list[BarRect]
    drop_indicator: tuple[float, float] | None
    overlay_label: str | None
    scroll_compensation: float


class Timeline:
    """A single interactive timeline instance.

    The host forwards scroll and pointer events here and calls
    :meth:`tick` once per frame; :meth:`render` re-derives the frame
    from the entity list it is given.
    """

    def __init__(
        self,
        handlers: DropHandlers,
        *,
        today: CalendarMonth,
        config: TimelineConfig | None = None,
        drag_config: DragConfig | None = None,
        granularity: Granularity | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._config = config or TimelineConfig()
        self.viewport = ViewportWindowManager(
            today=today, config=self._config, granularity=granularity, clock=clock
        )
        self.drag = DragInteractionController(
            handlers,
            resolve_target=self.target_at,
            config=drag_config,
            clock=clock,
        )
        self._scroll_left = self.viewport.initial_scroll_left()
        self._client_width = 0.0

    @property
    def scroll_left(self) -> float:
        return self._scroll_left

    # --- host events --------------------------------------------------------

    def on_scroll(self, scroll_left: float, client_width: float) -> None:
        """The grid container scrolled."""
        self._scroll_left = scroll_left
        self._client_width = client_width
        self.viewport.report_scroll(scroll_left, self.viewport.total_width, client_width)

    def tick(self) -> None:
        """Advance timers: the scroll debounce and any pending touch hold."""
        self.viewport.poll()
        self.drag.tick()
        compensation = self.viewport.take_scroll_compensation()
        if compensation:
            self._scroll_left += compensation

    def set_granularity(self, granularity: Granularity, client_width: float) -> float:
        """Switch zoom preset, keeping the centre month centred.

        Returns the new scroll position.
        """
        if granularity == self.viewport.granularity:
            return self._scroll_left
        self.viewport.begin_granularity_change(
            granularity, scroll_left=self._scroll_left, client_width=client_width
        )
        resolved = self.viewport.resolve_anchor_scroll(client_width)
        if resolved is not None:
            self._scroll_left = resolved
        self._client_width = client_width
        return self._scroll_left

    def target_at(self, x: float, y: float) -> str | None:
        """Drop-target id under a point in scroll-container coordinates.

        The month header strip along the top is not a drop target.
        """
        return hit_test_month(
            x,
            y,
            self.viewport.visible_months(),
            self.viewport.month_width,
            scroll_left=self._scroll_left,
            top=self._config.header_height,
        )

    # --- rendering ----------------------------------------------------------

    def render(self, entities: Sequence[Entity]) -> TimelineFrame:
        months = self.viewport.visible_months()
        width = self.viewport.month_width
        return TimelineFrame(
            granularity=self.viewport.granularity,
            month_width=width,
            total_width=self.viewport.total_width,
            canvas_height=canvas_height(len(entities), self._config.row_height),
            columns=month_columns(months, width, self.viewport.granularity),
            bars=layout_bars(
                entities,
                months,
                width,
                padding=self._config.bar_padding,
                row_height=self._config.row_height,
            ),
            drop_indicator=drop_indicator(self.drag.over_id, months, width),
            overlay_label=self.drag.overlay_label,
            scroll_compensation=self.viewport.state.pending_scroll_compensation,
        )


def _bar_record(bar: BarRect, columns: Sequence[MonthColumn]) -> dict[str, object]:
    return {
        "entity_id": bar.entity_id,
        "label": bar.label,
        "row": bar.row,
        "start": columns[bar.start_index].key,
        "end": columns[bar.end_index].key,
        "start_index": bar.start_index,
        "end_index": bar.end_index,
        "left": bar.left,
        "width": bar.width,
        "color": bar.color,
    }


class TimelineService(BaseService):
    """Lays out the stored scenario on a fresh viewport."""

    def render(
        self,
        *,
        today: CalendarMonth,
        granularity: Granularity | None = None,
        config: TimelineConfig | None = None,
    ) -> ServiceResult:
        op = "timeline"
        scenario, failure = self._load_scenario(op)
        if failure is not None:
            return failure
        assert scenario is not None

        viewport = ViewportWindowManager(today=today, config=config, granularity=granularity)
        months = viewport.visible_months()
        width = viewport.month_width
        cfg = config or TimelineConfig()
        columns = month_columns(months, width, viewport.granularity)
        bars = layout_bars(
            scenario.employees,
            months,
            width,
            padding=cfg.bar_padding,
            row_height=cfg.row_height,
        )

        warnings: list[str] = []
        placed = {bar.entity_id for bar in bars}
        for entity in scenario.employees:
            if entity.has_inverted_range:
                warnings.append(f"{entity.id} ends before it starts; not drawn")
            elif entity.start is None:
                warnings.append(f"{entity.id} has no start date; not drawn")
            elif entity.id not in placed:
                logger.debug("%s falls outside the visible window", entity.id)

        data = {
            "scenario": scenario.name,
            "today": to_key(today),
            "granularity": str(viewport.granularity),
            "month_width": width,
            "window": {"first": to_key(months[0]), "last": to_key(months[-1])},
            "total_width": viewport.total_width,
            "canvas_height": canvas_height(len(scenario.employees), cfg.row_height),
            "initial_scroll_left": viewport.initial_scroll_left(),
            "columns": [
                {"key": c.key, "label": c.label, "group": c.group_label} for c in columns
            ],
            "bars": [_bar_record(bar, columns) for bar in bars],
        }
        return ServiceResult(
            ok=True,
            op=op,
            data=data,
            warnings=warnings,
            meta={"entities": len(scenario.employees), "drawn": len(bars)},
        )
