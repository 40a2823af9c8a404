"""Drag payloads — the closed set of things a timeline drag can carry.

A payload is captured from the source element when a gesture activates
and consumed exactly once when it ends.  The three variants are matched
exhaustively at the controller's single dispatch point.
"""

from __future__ import annotations

from dataclasses import dataclass

from runwayctl.domain.models import RoleTemplate
from runwayctl.domain.types import Edge


@dataclass(frozen=True)
class NewAssignment:
    """A catalog role dragged from the sidebar onto a month."""

    template: RoleTemplate

    @property
    def kind(self) -> str:
        return "new-assignment"


@dataclass(frozen=True)
class Relocate:
    """An existing bar dragged by its body."""

    entity_id: str

    @property
    def kind(self) -> str:
        return "relocate"


@dataclass(frozen=True)
class Resize:
    """An existing bar dragged by one of its edge handles."""

    entity_id: str
    edge: Edge

    @property
    def kind(self) -> str:
        return "resize"


DragPayload = NewAssignment | Relocate | Resize


def overlay_label(payload: DragPayload) -> str:
    """Text for the lightweight preview that follows the pointer."""
    if isinstance(payload, NewAssignment):
        return payload.template.name
    return "Moving..."


def source_id(payload: DragPayload) -> str:
    """Stable id of the draggable element that produced *payload*."""
    match payload:
        case NewAssignment(template=template):
            return f"role-{template.id}"
        case Relocate(entity_id=entity_id):
            return f"employee-{entity_id}"
        case Resize(entity_id=entity_id, edge=edge):
            return f"resize-{edge}-{entity_id}"
