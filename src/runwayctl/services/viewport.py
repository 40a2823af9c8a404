"""Viewport window manager — the virtualized month range of the timeline.

The timeline renders a finite window of months around "now" and grows
it as the user scrolls towards either edge, so the grid behaves as if
it were infinite in both directions.

Prepending months shifts everything already on screen to the right; the
manager records a pixel compensation the host must add to its scroll
position in the same frame.  Appending is visually transparent.

A granularity (zoom) change keeps the month at the viewport centre in
place: the centre month is captured with the old width, and after the
host re-renders with the new width :meth:`resolve_anchor_scroll` gives
the scroll position that brings it back to the centre.
"""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Callable
from dataclasses import dataclass

from pydantic import BaseModel

from runwayctl.config.models import TimelineConfig
from runwayctl.domain.calendar import CalendarMonth, add_months, month_range, months_between
from runwayctl.domain.models import MonthField
from runwayctl.domain.types import Granularity
from runwayctl.services.debounce import Debouncer

logger = logging.getLogger(__name__)


class ViewportState(BaseModel):
    """Snapshot of the window manager's state."""

    model_config = {"frozen": True}

    start_offset: int
    end_offset: int
    pending_scroll_compensation: float = 0.0
    anchor_month: MonthField | None = None
    granularity: Granularity = Granularity.QUARTERLY


@dataclass(frozen=True)
class ScrollExpansion:
    """What one settled scroll report did to the window."""

    prepended: int = 0
    appended: int = 0
    scroll_compensation: float = 0.0

    @property
    def changed(self) -> bool:
        return bool(self.prepended or self.appended)


class ViewportWindowManager:
    """Owns the rendered month range ``[start_offset, end_offset)`` around *today*.

    Parameters:
        today: The month offsets are relative to.
        config: Timeline geometry and scroll tuning.
        granularity: Initial zoom preset (defaults to the config's).
        clock: Monotonic time source for the scroll debounce.
        on_expand: Called after a settled scroll report grew the window.
    """

    def __init__(
        self,
        *,
        today: CalendarMonth,
        config: TimelineConfig | None = None,
        granularity: Granularity | None = None,
        clock: Callable[[], float] = time.monotonic,
        on_expand: Callable[[ScrollExpansion], None] | None = None,
    ) -> None:
        self._config = config or TimelineConfig()
        self._today = today
        self._granularity = granularity or self._config.default_granularity
        self._start_offset = self._config.initial_start_offset
        self._end_offset = self._config.initial_end_offset
        self._pending_compensation = 0.0
        self._anchor_month: CalendarMonth | None = None
        self._debouncer = Debouncer(self._config.debounce_ms / 1000, clock=clock)
        self._on_expand = on_expand

    # ------------------------------------------------------------------
    # Window
    # ------------------------------------------------------------------

    @property
    def today(self) -> CalendarMonth:
        return self._today

    @property
    def granularity(self) -> Granularity:
        return self._granularity

    @property
    def month_width(self) -> int:
        return self._config.month_width(self._granularity)

    @property
    def first_month(self) -> CalendarMonth:
        return add_months(self._today, self._start_offset)

    @property
    def state(self) -> ViewportState:
        return ViewportState(
            start_offset=self._start_offset,
            end_offset=self._end_offset,
            pending_scroll_compensation=self._pending_compensation,
            anchor_month=self._anchor_month,
            granularity=self._granularity,
        )

    def visible_months(self) -> list[CalendarMonth]:
        """Ordered, contiguous months currently rendered."""
        count = self._end_offset - self._start_offset
        return list(month_range(self.first_month, count))

    @property
    def total_width(self) -> int:
        return (self._end_offset - self._start_offset) * self.month_width

    def index_of(self, month: CalendarMonth) -> int | None:
        """Column index of *month*, or None if it is not rendered."""
        index = months_between(self.first_month, month)
        if 0 <= index < self._end_offset - self._start_offset:
            return index
        return None

    def month_at(self, x: float) -> CalendarMonth | None:
        """Month under content x-coordinate *x*, or None outside the grid."""
        if x < 0:
            return None
        index = math.floor(x / self.month_width)
        if index >= self._end_offset - self._start_offset:
            return None
        return add_months(self.first_month, index)

    def initial_scroll_left(self) -> float:
        """Scroll position that shows the current month near the left edge."""
        index = self.index_of(self._today)
        if index is None:
            return 0.0
        return float(max(0, index * self.month_width - self._config.initial_scroll_padding))

    # ------------------------------------------------------------------
    # Scroll-driven expansion
    # ------------------------------------------------------------------

    def report_scroll(self, scroll_left: float, scroll_width: float, client_width: float) -> None:
        """Record a scroll position; evaluated once scrolling settles."""
        self._debouncer.call(self.evaluate_scroll, scroll_left, scroll_width, client_width)

    def poll(self) -> bool:
        """Run the debounced evaluation if due. Returns True if it ran."""
        return self._debouncer.poll()

    @property
    def scroll_pending(self) -> bool:
        return self._debouncer.pending

    def evaluate_scroll(
        self, scroll_left: float, scroll_width: float, client_width: float
    ) -> ScrollExpansion:
        """Grow the window if the viewport is within the threshold of an edge."""
        threshold = self._config.scroll_threshold
        buffer = self._config.scroll_buffer
        prepended = appended = 0
        compensation = 0.0

        if scroll_left < threshold:
            self._start_offset -= buffer
            compensation = float(buffer * self.month_width)
            self._pending_compensation += compensation
            prepended = buffer

        if scroll_width - scroll_left - client_width < threshold:
            self._end_offset += buffer
            appended = buffer

        expansion = ScrollExpansion(
            prepended=prepended, appended=appended, scroll_compensation=compensation
        )
        if expansion.changed:
            logger.debug(
                "Viewport expanded: prepended=%d appended=%d window=[%d, %d)",
                prepended,
                appended,
                self._start_offset,
                self._end_offset,
            )
            if self._on_expand is not None:
                self._on_expand(expansion)
        return expansion

    def take_scroll_compensation(self) -> float:
        """Return and clear the pixel delta owed to the scroll position."""
        compensation = self._pending_compensation
        self._pending_compensation = 0.0
        return compensation

    # ------------------------------------------------------------------
    # Granularity change
    # ------------------------------------------------------------------

    def begin_granularity_change(
        self,
        granularity: Granularity,
        *,
        scroll_left: float,
        client_width: float,
    ) -> CalendarMonth:
        """Capture the centre month at the current width, then switch width.

        A pending scroll evaluation is dropped: its metrics were measured
        at the old width and the re-centre produces a fresh report.
        """
        months = self.visible_months()
        centre_x = scroll_left + client_width / 2
        index = math.floor(centre_x / self.month_width)
        anchor = months[max(0, min(index, len(months) - 1))]

        self._anchor_month = anchor
        self._granularity = granularity
        self._debouncer.cancel()
        logger.debug("Granularity -> %s, anchored on %s", granularity, anchor)
        return anchor

    def resolve_anchor_scroll(self, client_width: float) -> float | None:
        """Scroll position centring the anchor month at the new width.

        Consumes the anchor; returns None if there was none or it is no
        longer rendered.
        """
        anchor = self._anchor_month
        self._anchor_month = None
        if anchor is None:
            return None
        index = self.index_of(anchor)
        if index is None:
            return None
        target = (index + 0.5) * self.month_width - client_width / 2
        return max(0.0, target)
