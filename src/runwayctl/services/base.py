"""BaseService — shared foundation for scenario-backed services.

Every service receives a :class:`ScenarioStore` at construction time and,
optionally, a loaded :class:`PluginManager` for lifecycle hooks.  The
store is the persistence collaborator; services never write files
themselves.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from runwayctl.infrastructure.store import ScenarioNotFoundError
from runwayctl.services.result import ServiceResult

if TYPE_CHECKING:
    from runwayctl.domain.models import Scenario
    from runwayctl.infrastructure.store import ScenarioStore
    from runwayctl.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes.

    Usage::

        class RunwayService(BaseService):
            def project(self) -> ServiceResult:
                scenario, failure = self._load_scenario("simulate")
                if failure is not None:
                    return failure
                ...
    """

    def __init__(self, store: ScenarioStore, plugins: PluginManager | None = None) -> None:
        self._store = store
        self._plugins = plugins

    def _load_scenario(self, op: str) -> tuple[Scenario | None, ServiceResult | None]:
        """Read the scenario, converting store errors into a failed result."""
        try:
            return self._store.load(), None
        except ScenarioNotFoundError as exc:
            return None, ServiceResult.failure(
                op, "SCENARIO_MISSING", str(exc), path=str(self._store.path)
            )
        except ValueError as exc:
            return None, ServiceResult.failure(
                op, "SCENARIO_INVALID", str(exc), path=str(self._store.path)
            )

    def _dispatch_event(
        self,
        hook_name: str,
        payload: dict[str, Any],
        warnings: list[str],
    ) -> None:
        """Call a plugin hook. No-op without a plugin manager.

        INVARIANT: Plugin failures are warnings, never errors.
        """
        if self._plugins is None:
            return
        try:
            getattr(self._plugins.hook, hook_name)(**payload)
        except Exception:
            logger.debug("Plugin hook %s failed", hook_name, exc_info=True)
            warnings.append(f"Plugin hook {hook_name} failed")
