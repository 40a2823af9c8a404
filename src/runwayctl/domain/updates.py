"""Semantic date updates produced by timeline drops.

The drag controller never mutates an entity.  It hands the host a month
key; the host turns that into an :class:`EntityUpdate` with the rules
below and decides how to persist it.

Rules:
- Relocate shifts start and end by the same delta (duration preserved).
- Resize touches exactly the dragged edge; the other edge is untouched.
- Resizing the end edge to an empty value clears it (open-ended again).
"""

from __future__ import annotations

from pydantic import BaseModel

from runwayctl.domain.calendar import CalendarMonth, add_months, from_key, months_between
from runwayctl.domain.models import Entity, MonthField, RoleTemplate
from runwayctl.domain.types import Edge


class EntityUpdate(BaseModel):
    """Partial date change.  Only explicitly-set fields are applied.

    ``EntityUpdate(end=None)`` clears the end date; ``EntityUpdate()``
    changes nothing.
    """

    model_config = {"frozen": True}

    start: MonthField | None = None
    end: MonthField | None = None

    @property
    def changed_fields(self) -> list[str]:
        return sorted(self.model_fields_set)


def apply_update(entity: Entity, update: EntityUpdate) -> Entity:
    """Return a copy of *entity* with the update's set fields applied."""
    changes = {name: getattr(update, name) for name in update.model_fields_set}
    return entity.model_copy(update=changes)


def parse_target(month_key: str | None) -> CalendarMonth | None:
    """Parse a drop-target key; ``None`` or blank means "no month"."""
    if month_key is None or not month_key.strip():
        return None
    return from_key(month_key)


def relocate_update(entity: Entity, target: CalendarMonth) -> EntityUpdate:
    """Move *entity* so it starts at *target*, keeping its duration."""
    if entity.start is None or entity.end is None:
        return EntityUpdate(start=target)
    delta = months_between(entity.start, target)
    return EntityUpdate(start=target, end=add_months(entity.end, delta))


def resize_update(entity: Entity, edge: Edge, target: CalendarMonth | None) -> EntityUpdate:
    """Move one edge of *entity* to *target*.

    Raises:
        ValueError: if asked to clear the start edge.
    """
    match edge:
        case Edge.START:
            if target is None:
                msg = f"Cannot clear the start date of {entity.id}"
                raise ValueError(msg)
            return EntityUpdate(start=target)
        case Edge.END:
            return EntityUpdate(end=target)
    msg = f"Unknown edge: {edge!r}"
    raise ValueError(msg)


def assignment_entity(template: RoleTemplate, target: CalendarMonth, entity_id: str) -> Entity:
    """Build the placeholder hire created by dropping *template* on *target*."""
    return Entity(
        id=entity_id,
        position=template.name,
        salary=template.default_salary,
        start=target,
    )
