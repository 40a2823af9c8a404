"""Scenario file persistence.

A scenario lives in a single YAML file::

    name: Seed plan
    starting_cash: 500000
    starting_month: 1
    starting_year: 2025
    employees:
      - id: emp_1a2b3c4d
        position: Sr. SWE
        salary: 16000
        start: 2025-03
        end: 2026-02

Month values are written as quoted ``"YYYY-MM"`` keys so YAML never
reads them as dates or integers.  The store is the only component that
touches the file; services hand it whole :class:`Scenario` values.
"""

from __future__ import annotations

import logging
from io import StringIO
from pathlib import Path
from typing import Any

from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError
from ruamel.yaml.scalarstring import DoubleQuotedScalarString

from runwayctl.domain.models import Scenario

logger = logging.getLogger(__name__)

_MONTH_KEYS = frozenset({"start", "end"})


class ScenarioNotFoundError(FileNotFoundError):
    """Raised when the scenario file does not exist."""


class ScenarioFormatError(ValueError):
    """Raised when the scenario file cannot be parsed or validated."""


def _new_yaml() -> YAML:
    """Create a fresh YAML instance (ruamel's YAML object is stateful)."""
    y = YAML()
    y.default_flow_style = False
    y.indent(mapping=2, sequence=4, offset=2)
    return y


def _quote_months(data: dict[str, Any]) -> dict[str, Any]:
    employees = []
    for employee in data.get("employees", []):
        row = {k: v for k, v in employee.items() if v is not None}
        for key in _MONTH_KEYS & row.keys():
            row[key] = DoubleQuotedScalarString(row[key])
        employees.append(row)
    return {**data, "employees": employees}


def dump_scenario(scenario: Scenario) -> str:
    """Render *scenario* as YAML text."""
    data = _quote_months(scenario.model_dump(mode="json"))
    buf = StringIO()
    _new_yaml().dump(data, buf)
    return buf.getvalue()


def parse_scenario(text: str) -> Scenario:
    """Parse YAML text into a validated :class:`Scenario`.

    Raises:
        ScenarioFormatError: on malformed YAML or invalid fields.
    """
    try:
        raw = _new_yaml().load(text)
    except YAMLError as exc:
        msg = f"Malformed scenario YAML: {exc}"
        raise ScenarioFormatError(msg) from exc
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        msg = "Scenario file must contain a mapping at the top level"
        raise ScenarioFormatError(msg)
    try:
        return Scenario.model_validate(_plain(raw))
    except ValidationError as exc:
        msg = f"Invalid scenario: {exc}"
        raise ScenarioFormatError(msg) from exc


def _plain(value: Any) -> Any:
    """Convert ruamel's commented containers into plain dicts/lists."""
    if isinstance(value, dict):
        return {str(k): _plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_plain(v) for v in value]
    return value


class ScenarioStore:
    """Load and save one scenario file."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.is_file()

    def load(self) -> Scenario:
        """Read the scenario.

        Raises:
            ScenarioNotFoundError: if the file does not exist.
            ScenarioFormatError: if it cannot be parsed.
        """
        if not self._path.is_file():
            msg = f"No scenario file at {self._path} (run 'runwayctl init')"
            raise ScenarioNotFoundError(msg)
        return parse_scenario(self._path.read_text(encoding="utf-8"))

    def save(self, scenario: Scenario) -> None:
        """Write *scenario*, creating parent directories as needed."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(dump_scenario(scenario), encoding="utf-8")
        logger.debug("Saved scenario to %s (%d employees)", self._path, len(scenario.employees))
