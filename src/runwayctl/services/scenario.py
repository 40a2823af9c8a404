"""ScenarioService — the host side of timeline drops.

Implements the :class:`~runwayctl.services.drag.DropHandlers` callbacks
against the scenario file: each drop becomes a semantic
:class:`EntityUpdate`, the updated scenario is written through the
store, and plugins are notified.

Pipeline: VALIDATE → APPLY → PERSIST → NOTIFY → RESPOND

The drag controller never sees the returned :class:`ServiceResult`; it
is there for the CLI and for hosts that want to surface failures.
"""

from __future__ import annotations

import logging

from runwayctl.domain.calendar import CalendarMonth, ParseError, from_key, to_key
from runwayctl.domain.ids import generate_entity_id
from runwayctl.domain.models import ROLE_TEMPLATES, RoleTemplate, Scenario, get_template
from runwayctl.domain.types import Edge
from runwayctl.domain.updates import (
    apply_update,
    assignment_entity,
    parse_target,
    relocate_update,
    resize_update,
)
from runwayctl.services.base import BaseService
from runwayctl.services.result import ServiceResult
from runwayctl.services.runway import validate_runway_inputs

logger = logging.getLogger(__name__)


def _month_or_none(value: CalendarMonth | None) -> str | None:
    return to_key(value) if value is not None else None


class ScenarioService(BaseService):
    """Creates, moves and resizes scenario entities."""

    # ------------------------------------------------------------------
    # DropHandlers
    # ------------------------------------------------------------------

    def on_new_assignment(self, template: RoleTemplate, month_key: str) -> ServiceResult:
        return self.assign(template.id, month_key)

    def on_relocate(self, entity_id: str, month_key: str) -> ServiceResult:
        return self.move(entity_id, month_key)

    def on_resize_edge(self, entity_id: str, edge: Edge, month_key: str) -> ServiceResult:
        return self.resize(entity_id, edge, month_key)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def assign(self, template_id: str, month_key: str) -> ServiceResult:
        """Add a placeholder hire from a catalog role, starting at *month_key*."""
        op = "assign"
        warnings: list[str] = []

        # ── VALIDATE ─────────────────────────────────────────
        template = get_template(template_id)
        if template is None:
            return ServiceResult.failure(
                op,
                "UNKNOWN_TEMPLATE",
                f"No role template with id: {template_id}",
                available=[t.id for t in ROLE_TEMPLATES],
            )
        try:
            target = from_key(month_key)
        except ParseError as exc:
            return ServiceResult.failure(op, "INVALID_MONTH", str(exc), value=month_key)

        scenario, failure = self._load_scenario(op)
        if failure is not None:
            return failure
        assert scenario is not None

        # ── APPLY ────────────────────────────────────────────
        entity = assignment_entity(template, target, generate_entity_id(scenario.entity_ids()))

        # ── PERSIST ──────────────────────────────────────────
        self._store.save(scenario.with_entity(entity))
        logger.info("Assigned %s as %s from %s", template.id, entity.id, to_key(target))

        # ── NOTIFY ───────────────────────────────────────────
        self._dispatch_event(
            "post_assign",
            {
                "entity_id": entity.id,
                "template_id": template.id,
                "position": template.name,
                "start": to_key(target),
                "salary": template.default_salary,
            },
            warnings,
        )

        # ── RESPOND ──────────────────────────────────────────
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "id": entity.id,
                "position": entity.position,
                "salary": entity.salary,
                "start": to_key(target),
                "end": None,
                "path": str(self._store.path),
            },
            warnings=warnings,
        )

    def move(self, entity_id: str, month_key: str) -> ServiceResult:
        """Relocate an entity so it starts at *month_key*, keeping its duration."""
        op = "move"
        warnings: list[str] = []

        try:
            target = from_key(month_key)
        except ParseError as exc:
            return ServiceResult.failure(op, "INVALID_MONTH", str(exc), value=month_key)

        scenario, failure = self._load_scenario(op)
        if failure is not None:
            return failure
        assert scenario is not None

        entity = scenario.find(entity_id)
        if entity is None:
            return self._not_found(op, entity_id)

        update = relocate_update(entity, target)
        updated = apply_update(entity, update)
        self._store.save(scenario.with_entity(updated))
        logger.info("Moved %s to %s", entity_id, to_key(target))

        self._dispatch_event(
            "post_relocate",
            {
                "entity_id": entity_id,
                "start": to_key(target),
                "end": _month_or_none(updated.end),
                "fields_changed": update.changed_fields,
            },
            warnings,
        )
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "id": entity_id,
                "start": _month_or_none(updated.start),
                "end": _month_or_none(updated.end),
                "previous_start": _month_or_none(entity.start),
                "previous_end": _month_or_none(entity.end),
                "fields_changed": update.changed_fields,
            },
            warnings=warnings,
        )

    def resize(self, entity_id: str, edge: Edge | str, month_key: str | None) -> ServiceResult:
        """Move one edge of an entity; an empty *month_key* clears the end."""
        op = "resize"
        warnings: list[str] = []

        try:
            edge = Edge(edge)
        except ValueError:
            return ServiceResult.failure(
                op, "INVALID_INPUT", f"Edge must be 'start' or 'end', got {edge!r}"
            )
        try:
            target = parse_target(month_key)
        except ParseError as exc:
            return ServiceResult.failure(op, "INVALID_MONTH", str(exc), value=month_key)

        scenario, failure = self._load_scenario(op)
        if failure is not None:
            return failure
        assert scenario is not None

        entity = scenario.find(entity_id)
        if entity is None:
            return self._not_found(op, entity_id)

        try:
            update = resize_update(entity, edge, target)
        except ValueError as exc:
            return ServiceResult.failure(op, "INVALID_INPUT", str(exc), id=entity_id)

        updated = apply_update(entity, update)
        if updated.has_inverted_range:
            warnings.append(f"{entity_id} now ends before it starts")
        self._store.save(scenario.with_entity(updated))
        logger.info("Resized %s %s to %s", entity_id, edge, month_key or "open")

        self._dispatch_event(
            "post_resize",
            {
                "entity_id": entity_id,
                "edge": str(edge),
                "start": _month_or_none(updated.start),
                "end": _month_or_none(updated.end),
            },
            warnings,
        )
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "id": entity_id,
                "edge": str(edge),
                "start": _month_or_none(updated.start),
                "end": _month_or_none(updated.end),
            },
            warnings=warnings,
        )

    def init(
        self,
        *,
        name: str,
        starting_cash: float,
        starting_month: int,
        starting_year: int,
        force: bool = False,
    ) -> ServiceResult:
        """Write an empty scenario file."""
        op = "init"
        if self._store.exists() and not force:
            return ServiceResult.failure(
                op,
                "SCENARIO_EXISTS",
                f"Scenario file already exists: {self._store.path} (use --force)",
                path=str(self._store.path),
            )
        problem = validate_runway_inputs(starting_cash, starting_month, starting_year)
        if problem is not None:
            return ServiceResult.failure(op, "INVALID_INPUT", problem)

        scenario = Scenario(
            name=name,
            starting_cash=starting_cash,
            starting_month=starting_month,
            starting_year=starting_year,
        )
        self._store.save(scenario)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "path": str(self._store.path),
                "name": name,
                "starting_cash": starting_cash,
                "starting_month": to_key(
                    CalendarMonth(year=starting_year, month=starting_month)
                ),
            },
        )

    @staticmethod
    def list_templates() -> ServiceResult:
        """The built-in role catalog."""
        return ServiceResult(
            ok=True,
            op="templates",
            data={"templates": [t.model_dump() for t in ROLE_TEMPLATES]},
        )

    @staticmethod
    def _not_found(op: str, entity_id: str) -> ServiceResult:
        return ServiceResult.failure(
            op, "NOT_FOUND", f"No employee with id: {entity_id}", id=entity_id
        )
