"""Drag interaction controller — gestures in, semantic drop callbacks out.

Lifecycle of one gesture::

    IDLE --press--> PENDING --sensor activates--> DRAGGING --release--> IDLE
                       |                              |
                       +--release / sensor aborts-----+--cancel--> IDLE

Two sensors decide activation: a pointer must travel ``pointer_distance``
pixels (so clicks stay clicks); a touch must be held ``touch_delay_ms``
without drifting more than ``touch_tolerance`` pixels (so page scrolls
stay scrolls).

INVARIANT: at most one payload is live, and it is cleared before any
drop callback runs, whatever the callback does.
"""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol, assert_never

from runwayctl.config.models import DragConfig
from runwayctl.domain.calendar import CalendarMonth, ParseError, from_key, to_key
from runwayctl.domain.models import RoleTemplate
from runwayctl.domain.payload import (
    DragPayload,
    NewAssignment,
    Relocate,
    Resize,
    overlay_label,
    source_id,
)
from runwayctl.domain.types import DragPhase, Edge, InputKind

logger = logging.getLogger(__name__)

TargetResolver = Callable[[float, float], str | None]


class DropHandlers(Protocol):
    """Host callbacks, each invoked at most once per completed drag.

    ``month_key`` is always the canonical ``YYYY-MM`` string.  Return
    values are ignored.
    """

    def on_new_assignment(self, template: RoleTemplate, month_key: str) -> object: ...

    def on_relocate(self, entity_id: str, month_key: str) -> object: ...

    def on_resize_edge(self, entity_id: str, edge: Edge, month_key: str) -> object: ...


# ---------------------------------------------------------------------------
# Sensors
# ---------------------------------------------------------------------------


class SensorDecision(StrEnum):
    WAIT = "wait"
    ACTIVATE = "activate"
    ABORT = "abort"


@dataclass(frozen=True)
class PointerSensor:
    """Activates once the pointer has moved *distance* pixels."""

    distance: float = 10.0

    def decide(self, dx: float, dy: float, elapsed: float) -> SensorDecision:
        if math.hypot(dx, dy) >= self.distance:
            return SensorDecision.ACTIVATE
        return SensorDecision.WAIT


@dataclass(frozen=True)
class TouchSensor:
    """Activates after a *delay*-second hold within *tolerance* pixels."""

    delay: float = 0.25
    tolerance: float = 5.0

    def decide(self, dx: float, dy: float, elapsed: float) -> SensorDecision:
        if elapsed >= self.delay:
            return SensorDecision.ACTIVATE
        if math.hypot(dx, dy) > self.tolerance:
            return SensorDecision.ABORT
        return SensorDecision.WAIT


@dataclass
class _Gesture:
    payload: DragPayload
    kind: InputKind
    origin_x: float
    origin_y: float
    started_at: float
    x: float
    y: float


# ---------------------------------------------------------------------------
# Hit testing
# ---------------------------------------------------------------------------


def hit_test_month(
    x: float,
    y: float,
    months: Sequence[CalendarMonth],
    month_width: float,
    *,
    scroll_left: float = 0.0,
    top: float = 0.0,
    height: float | None = None,
) -> str | None:
    """Drop-target key under viewport point ``(x, y)``, or None.

    *x* is measured from the left edge of the scroll container, so the
    current *scroll_left* is added to reach content coordinates.
    """
    if y < top or (height is not None and y > top + height):
        return None
    content_x = x + scroll_left
    if content_x < 0:
        return None
    index = math.floor(content_x / month_width)
    if index >= len(months):
        return None
    return to_key(months[index])


# ---------------------------------------------------------------------------
# Controller
# ---------------------------------------------------------------------------


class DragInteractionController:
    """Tracks the in-flight gesture and resolves drops to host callbacks.

    Parameters:
        handlers: The host's drop callbacks.
        resolve_target: Maps a pointer position to a drop-target id.
            Without one, the host reports hovers through :meth:`drag_over`.
        config: Sensor thresholds.
        clock: Monotonic time source (seconds).
    """

    def __init__(
        self,
        handlers: DropHandlers,
        *,
        resolve_target: TargetResolver | None = None,
        config: DragConfig | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        cfg = config or DragConfig()
        self._handlers = handlers
        self._resolve_target = resolve_target
        self._clock = clock
        self._sensors: dict[InputKind, PointerSensor | TouchSensor] = {
            InputKind.POINTER: PointerSensor(distance=cfg.pointer_distance),
            InputKind.TOUCH: TouchSensor(
                delay=cfg.touch_delay_ms / 1000, tolerance=cfg.touch_tolerance
            ),
        }
        self._phase = DragPhase.IDLE
        self._gesture: _Gesture | None = None
        self._over_id: str | None = None

    # --- observable state -------------------------------------------------

    @property
    def phase(self) -> DragPhase:
        return self._phase

    @property
    def active_payload(self) -> DragPayload | None:
        """The payload being dragged, once the gesture has activated."""
        if self._phase is DragPhase.DRAGGING and self._gesture is not None:
            return self._gesture.payload
        return None

    @property
    def over_id(self) -> str | None:
        """Drop-target id currently under the pointer while dragging."""
        return self._over_id

    @property
    def pointer(self) -> tuple[float, float] | None:
        if self._phase is DragPhase.DRAGGING and self._gesture is not None:
            return self._gesture.x, self._gesture.y
        return None

    @property
    def overlay_label(self) -> str | None:
        payload = self.active_payload
        return overlay_label(payload) if payload is not None else None

    # --- gesture input ----------------------------------------------------

    def press(
        self,
        payload: DragPayload,
        x: float,
        y: float,
        *,
        kind: InputKind = InputKind.POINTER,
    ) -> None:
        """Start tracking a press on a draggable element."""
        if self._phase is not DragPhase.IDLE:
            logger.debug("Ignoring %s press during %s gesture", kind, self._phase)
            return
        self._gesture = _Gesture(
            payload=payload,
            kind=kind,
            origin_x=x,
            origin_y=y,
            started_at=self._clock(),
            x=x,
            y=y,
        )
        self._phase = DragPhase.PENDING
        logger.debug("%s press on %s", kind, source_id(payload))

    def move(self, x: float, y: float) -> None:
        """Pointer moved: maybe activate, and track the hovered target."""
        if self._gesture is None:
            return
        self._gesture.x, self._gesture.y = x, y
        if self._phase is DragPhase.PENDING:
            self._check_activation()
        if self._phase is DragPhase.DRAGGING and self._resolve_target is not None:
            self._over_id = self._resolve_target(x, y)

    def tick(self) -> None:
        """Re-check activation without movement (touch hold timer)."""
        if self._phase is DragPhase.PENDING:
            self._check_activation()
            if self._phase is DragPhase.DRAGGING and self._resolve_target is not None:
                assert self._gesture is not None
                self._over_id = self._resolve_target(self._gesture.x, self._gesture.y)

    def drag_over(self, target_id: str | None) -> None:
        """Host-reported hover, for hosts doing their own hit testing."""
        if self._phase is DragPhase.DRAGGING:
            self._over_id = target_id

    def release(self, x: float | None = None, y: float | None = None) -> bool:
        """End the gesture, dispatching a callback for a valid drop.

        Returns True if a drop callback was invoked.  Callback errors
        propagate to the caller; the controller is already idle by then.
        """
        if self._phase is not DragPhase.DRAGGING or self._gesture is None:
            self._reset()
            return False

        if x is not None and y is not None:
            self.move(x, y)
        payload = self._gesture.payload
        over_id = self._over_id
        self._reset()

        target = self._recognize_target(over_id)
        if target is None:
            logger.debug("Drop of %s discarded (target=%r)", payload.kind, over_id)
            return False

        self._dispatch(payload, to_key(target))
        return True

    def cancel(self) -> None:
        """Abort the gesture without a drop."""
        self._reset()

    # --- internals --------------------------------------------------------

    def _check_activation(self) -> None:
        gesture = self._gesture
        assert gesture is not None
        sensor = self._sensors[gesture.kind]
        decision = sensor.decide(
            gesture.x - gesture.origin_x,
            gesture.y - gesture.origin_y,
            self._clock() - gesture.started_at,
        )
        if decision is SensorDecision.ACTIVATE:
            self._phase = DragPhase.DRAGGING
            logger.debug("Drag started: %s via %s", gesture.payload.kind, gesture.kind)
        elif decision is SensorDecision.ABORT:
            logger.debug("Touch moved before hold completed; treating as scroll")
            self._reset()

    def _recognize_target(self, over_id: str | None) -> CalendarMonth | None:
        if not over_id:
            return None
        try:
            return from_key(over_id)
        except ParseError:
            return None

    def _dispatch(self, payload: DragPayload, month_key: str) -> None:
        match payload:
            case NewAssignment(template=template):
                self._handlers.on_new_assignment(template, month_key)
            case Relocate(entity_id=entity_id):
                self._handlers.on_relocate(entity_id, month_key)
            case Resize(entity_id=entity_id, edge=edge):
                self._handlers.on_resize_edge(entity_id, edge, month_key)
            case _:
                assert_never(payload)

    def _reset(self) -> None:
        self._phase = DragPhase.IDLE
        self._gesture = None
        self._over_id = None
