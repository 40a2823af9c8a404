"""Click base classes shared by every runwayctl command.

:class:`RunwayCommand` adds an eager ``--examples`` flag and, for commands
that take a ``MONTH`` argument, a help footer describing the month key
format.  :class:`RunwayGroup` lists subcommands in the order they were
registered (setup first, then read-only views, then schedule edits)
rather than alphabetically.
"""

from __future__ import annotations

import textwrap
from typing import Any

import click

MONTH_HELP = "MONTH is a YYYY-MM key such as 2025-09; an unpadded month (2025-9) is accepted."


def _print_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    command = ctx.command
    assert isinstance(command, RunwayCommand)
    click.echo(f"Examples for '{ctx.command_path}':\n")
    for line in command.examples.splitlines():
        click.echo(f"  {line}")
    ctx.exit(0)


class RunwayCommand(click.Command):
    """Command with ``--examples`` and a month-format footer."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = textwrap.dedent(examples).strip() if examples else ""
        if self.examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=_print_examples,
                    help="Show usage examples.",
                )
            )

    @property
    def takes_month(self) -> bool:
        return any(isinstance(p, click.Argument) and p.name == "month" for p in self.params)

    def format_epilog(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        super().format_epilog(ctx, formatter)
        if self.takes_month:
            formatter.write_paragraph()
            formatter.write_text(MONTH_HELP)


class RunwayGroup(click.Group):
    """Group whose subcommands default to :class:`RunwayCommand`."""

    command_class = RunwayCommand

    def list_commands(self, ctx: click.Context) -> list[str]:
        return list(self.commands)
