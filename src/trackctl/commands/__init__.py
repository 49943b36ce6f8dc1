"""Subcommand modules for trackctl.

Provides register_commands(), which builds the command table for a CLI
group from the command modules.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register every trackctl command on the root CLI group."""
    from trackctl.commands.interval import begin, end, next_cmd
    from trackctl.commands.report import list_cmd, status, total, verify
    from trackctl.commands.wait import fork, run, wait

    for command in (begin, end, next_cmd, fork, run, wait, list_cmd, status, total, verify):
        cli.add_command(command)
