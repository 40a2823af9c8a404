"""Shared pytest fixtures for runwayctl tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from runwayctl.domain.calendar import CalendarMonth
from runwayctl.domain.models import Entity, Scenario
from runwayctl.infrastructure.store import ScenarioStore


class FakeClock:
    """Manually advanced monotonic clock (seconds)."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's RUNWAYCTL_* environment out of the tests."""
    import os

    for name in list(os.environ):
        if name.startswith("RUNWAYCTL_"):
            monkeypatch.delenv(name)


@pytest.fixture
def sample_scenario() -> Scenario:
    """Three employees: bounded, open-ended, and unscheduled."""
    return Scenario(
        name="Seed plan",
        starting_cash=500_000,
        starting_month=1,
        starting_year=2025,
        employees=[
            Entity(
                id="emp_00000001",
                first_name="Ada",
                last_name="Lovelace",
                position="Sr. SWE",
                salary=16_000,
                start=CalendarMonth(2025, 1),
                end=CalendarMonth(2025, 7),
            ),
            Entity(
                id="emp_00000002",
                position="Product Designer",
                salary=11_000,
                start=CalendarMonth(2025, 6),
            ),
            Entity(id="emp_00000003", position="Account Executive", salary=8_000),
        ],
    )


@pytest.fixture
def store(tmp_path: Path, sample_scenario: Scenario) -> ScenarioStore:
    """Scenario store on a temp file, seeded with :func:`sample_scenario`."""
    s = ScenarioStore(tmp_path / "scenario.yaml")
    s.save(sample_scenario)
    return s


@pytest.fixture
def empty_store(tmp_path: Path) -> ScenarioStore:
    """Store whose file does not exist yet."""
    return ScenarioStore(tmp_path / "scenario.yaml")


@pytest.fixture
def _isolated_project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run CLI commands from an empty temp directory.

    Use via ``@pytest.mark.usefixtures("_isolated_project")``.
    """
    monkeypatch.chdir(tmp_path)
