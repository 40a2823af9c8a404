"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``RUNWAYCTL_*`` prefix
  3. TOML file    — ``runwayctl.toml`` discovered via walk-up
  4. Code defaults — baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` that
reuses the ``find_config`` walk-up discovery from
:mod:`runwayctl.config.discovery`.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from runwayctl.config.discovery import find_config, project_root_for
from runwayctl.config.models import DragConfig, RunwayConfig, ScenarioConfig, TimelineConfig
from runwayctl.domain.calendar import CalendarMonth, current_month, from_key


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``runwayctl.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class RunwaySettings(BaseSettings):
    """Unified settings for the runwayctl CLI.

    Attributes:
        project_root: Directory holding ``runwayctl.toml`` (or CWD if no
            config was found).  Relative scenario paths resolve here.
        config_path: The TOML file actually loaded, if any.
        scenario_file: Explicit ``--scenario`` override.
        now: ``YYYY-MM`` override for "the current month".
    """

    model_config = {
        "frozen": True,
        "env_prefix": "RUNWAYCTL_",
        "env_nested_delimiter": "__",
    }

    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    scenario_file: Path | None = None
    now: str | None = None

    # --- TOML sections ---
    timeline: TimelineConfig = Field(default_factory=TimelineConfig)
    drag: DragConfig = Field(default_factory=DragConfig)
    runway: RunwayConfig = Field(default_factory=RunwayConfig)
    scenario: ScenarioConfig = Field(default_factory=ScenarioConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        project_root: Path | None = None,
        **cli_flags: Any,
    ) -> RunwaySettings:
        """Construct settings from CLI invocation.

        Discovers ``runwayctl.toml`` via walk-up (or explicit *config_path*),
        resolves *project_root* from the config file's parent directory,
        and merges CLI flags as highest-priority overrides.  Flags left at
        ``None`` are dropped so env vars and TOML can still supply them.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(project_root)

        resolved_root = project_root or project_root_for(toml_path)

        flags = {k: v for k, v in cli_flags.items() if v is not None}

        _tls.toml_path = toml_path
        try:
            return cls(
                project_root=resolved_root,
                config_path=toml_path,
                **flags,
            )
        finally:
            _tls.toml_path = None

    def scenario_path(self) -> Path:
        """Resolved path of the scenario file to read and write."""
        path = self.scenario_file or Path(self.scenario.file)
        if not path.is_absolute():
            path = self.project_root / path
        return path

    def current_month(self) -> CalendarMonth:
        """The month treated as "now" (``--now`` override or today).

        Raises:
            ParseError: if the override is not a ``YYYY-MM`` key.
        """
        if self.now:
            return from_key(self.now)
        return current_month()
