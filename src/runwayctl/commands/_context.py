"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides the lazily-built scenario store and
plugin manager, and centralized result emission (stdout/stderr routing
plus exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from runwayctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from runwayctl.config.settings import RunwaySettings
    from runwayctl.domain.calendar import CalendarMonth
    from runwayctl.infrastructure.store import ScenarioStore
    from runwayctl.plugins.manager import PluginManager
    from runwayctl.services.result import ServiceResult

PLUGIN_DIR = ".runwayctl/plugins"


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The store and plugins are built on first use so ``--help`` and
    ``--version`` never touch the filesystem beyond config discovery.
    """

    def __init__(self, settings: RunwaySettings, *, command: str | None = None) -> None:
        self.settings = settings
        self._store: ScenarioStore | None = None
        self._plugins: PluginManager | None = None

        from runwayctl.config.logging import bind_invocation, configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)
        bind_invocation(command=command, scenario=settings.scenario_path())

    @property
    def store(self) -> ScenarioStore:
        """The scenario store (created lazily on first access)."""
        if self._store is None:
            from runwayctl.infrastructure.store import ScenarioStore

            self._store = ScenarioStore(self.settings.scenario_path())
        return self._store

    @property
    def plugins(self) -> PluginManager:
        """Loaded plugin manager (entry points plus project-local plugins)."""
        if self._plugins is None:
            from runwayctl.plugins.manager import PluginManager

            self._plugins = PluginManager()
            self._plugins.discover_and_load(local_dir=self.settings.project_root / PLUGIN_DIR)
        return self._plugins

    def today(self) -> CalendarMonth:
        """The current month, honouring ``--now``.

        An unparseable override is reported as an INVALID_MONTH error.
        """
        from runwayctl.domain.calendar import ParseError
        from runwayctl.services.result import ServiceResult

        try:
            return self.settings.current_month()
        except ParseError as exc:
            self.emit(
                ServiceResult.failure("now", "INVALID_MONTH", str(exc), value=self.settings.now)
            )
            raise  # unreachable: emit exits on failure

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
