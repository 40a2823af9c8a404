"""Subcommand modules for runwayctl.

Provides register_commands() which uses deferred imports to keep
``runwayctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register every standalone command on the root CLI group."""
    from runwayctl.commands.assign import assign
    from runwayctl.commands.init_cmd import init_cmd
    from runwayctl.commands.move import move
    from runwayctl.commands.resize import resize
    from runwayctl.commands.simulate import simulate
    from runwayctl.commands.templates import templates
    from runwayctl.commands.timeline import timeline

    cli.add_command(init_cmd)
    cli.add_command(simulate)
    cli.add_command(timeline)
    cli.add_command(templates)
    cli.add_command(assign)
    cli.add_command(move)
    cli.add_command(resize)
