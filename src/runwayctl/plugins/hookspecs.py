"""Pluggy hook specifications for runwayctl scenario events.

Hooks fire synchronously after the scenario store has written the
change (or, for ``post_simulate``, after a projection completes).
Month arguments are canonical ``YYYY-MM`` keys.
"""

from __future__ import annotations

import pluggy

hookspec = pluggy.HookspecMarker("runwayctl")
hookimpl = pluggy.HookimplMarker("runwayctl")


class RunwayctlHookSpec:
    """Hook specifications for the runwayctl plugin system."""

    @hookspec
    def post_assign(
        self,
        entity_id: str,
        template_id: str,
        position: str,
        start: str,
        salary: float,
    ) -> None:
        """Called after a role template is placed on the timeline."""

    @hookspec
    def post_relocate(
        self,
        entity_id: str,
        start: str,
        end: str | None,
        fields_changed: list[str],
    ) -> None:
        """Called after an entity is moved, duration preserved."""

    @hookspec
    def post_resize(
        self,
        entity_id: str,
        edge: str,
        start: str | None,
        end: str | None,
    ) -> None:
        """Called after one edge of an entity is moved or cleared."""

    @hookspec
    def post_simulate(
        self,
        scenario: str,
        months_of_runway: int,
        total_burn_rate: float,
    ) -> None:
        """Called after a runway projection."""
