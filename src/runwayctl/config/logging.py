"""Log routing for runwayctl.

Everything logs through stdlib ``logging.getLogger(__name__)``; structlog
only formats.  Records go to stderr so stdout stays reserved for command
results, either as a console line or, with ``--log-json``, as one JSON
object per line.

Each invocation binds its command name and scenario file into structlog's
context, so every record of a run can be attributed to the scenario it
touched.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import IO

import structlog

APP_LOGGER = "runwayctl"
# Third-party loggers that stay at WARNING even under --verbose.
_QUIET_LIBRARIES = ("ruamel", "pluggy")


def _pre_chain() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]


def _renderer(log_json: bool, stream: IO[str]) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer(sort_keys=True)
    return structlog.dev.ConsoleRenderer(colors=stream.isatty())


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    stream: IO[str] | None = None,
) -> None:
    """Install a single stderr handler formatted by structlog.

    Args:
        verbose: ``runwayctl.*`` loggers emit DEBUG; otherwise WARNING.
        log_json: JSON lines instead of the console renderer.
        stream: Destination (default: the current ``sys.stderr``).
    """
    out = stream or sys.stderr
    pre_chain = _pre_chain()

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(out)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json, out),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger(APP_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in _QUIET_LIBRARIES:
        logging.getLogger(name).setLevel(logging.WARNING)


def bind_invocation(*, command: str | None = None, scenario: Path | None = None) -> None:
    """Replace the per-run log context with *command* and *scenario*."""
    structlog.contextvars.clear_contextvars()
    context: dict[str, str] = {}
    if command:
        context["command"] = command
    if scenario is not None:
        context["scenario"] = str(scenario)
    if context:
        structlog.contextvars.bind_contextvars(**context)
