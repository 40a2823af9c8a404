"""Classification enums shared across the timeline components."""

from __future__ import annotations

from enum import StrEnum


class Edge(StrEnum):
    """Which end of an entity's date range a resize drag moves."""

    START = "start"
    END = "end"


class Granularity(StrEnum):
    """Timeline zoom presets (per-month pixel width)."""

    QUARTERLY = "quarterly"
    YEARLY = "yearly"


class InputKind(StrEnum):
    """Source device of a gesture."""

    POINTER = "pointer"
    TOUCH = "touch"


class DragPhase(StrEnum):
    """Drag controller states.

    PENDING means a press was seen but the sensor has not activated yet.
    """

    IDLE = "idle"
    PENDING = "pending"
    DRAGGING = "dragging"
