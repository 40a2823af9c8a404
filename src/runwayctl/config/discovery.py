"""Locating ``runwayctl.toml`` and the project root it defines.

A scenario project is the directory holding ``runwayctl.toml``: relative
scenario paths and ``.runwayctl/plugins`` resolve against it.  Without a
config file the working directory is the project.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

CONFIG_FILENAME = "runwayctl.toml"
CONFIG_ENV_VAR = "RUNWAYCTL_CONFIG"


def _search_dirs(start: Path) -> Iterator[Path]:
    start = start.resolve()
    yield start
    yield from start.parents


def find_config(start: Path | None = None) -> Path | None:
    """Nearest ``runwayctl.toml`` at or above *start* (default: cwd).

    ``RUNWAYCTL_CONFIG`` short-circuits the search; if it names a file
    that does not exist, no config is used rather than falling back.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    for directory in _search_dirs(start or Path.cwd()):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def project_root_for(config_path: Path | None) -> Path:
    """Directory relative scenario and plugin paths resolve against."""
    if config_path is None:
        return Path.cwd()
    return config_path.resolve().parent
