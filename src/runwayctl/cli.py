"""Root CLI group for runwayctl with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from runwayctl import __version__
from runwayctl.commands import register_commands
from runwayctl.commands._base import RunwayGroup
from runwayctl.commands._context import AppContext
from runwayctl.config.settings import RunwaySettings


@click.group(cls=RunwayGroup, invoke_without_command=True)
@click.version_option(version=__version__, prog_name="runwayctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "--scenario",
    "scenario_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Scenario file (default from config: scenario.yaml).",
)
@click.option("--now", default=None, metavar="YYYY-MM", help="Treat this month as today.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    scenario_file: Path | None,
    now: str | None,
) -> None:
    """runwayctl — hiring timeline and cash-runway planner."""
    ctx.ensure_object(dict)
    settings = RunwaySettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        scenario_file=scenario_file,
        now=now,
    )
    ctx.obj = AppContext(settings, command=ctx.invoked_subcommand)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
