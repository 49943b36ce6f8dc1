"""Commands: total, list, status, and verify."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from trackctl.commands._base import FILE_ARGUMENT, TrackCommand

if TYPE_CHECKING:
    from trackctl.commands._context import AppContext


@click.command(
    cls=TrackCommand,
    examples="""\
  trackctl total
  trackctl -q total
  trackctl --fail total project/TIMES.csv""",
)
@FILE_ARGUMENT
@click.pass_obj
def total(app: AppContext, file: str | None) -> None:
    """Print the sum of all the times."""
    app.emit(app.reports.total(file))


@click.command("list", cls=TrackCommand, examples="  trackctl list\n  trackctl -v list")
@FILE_ARGUMENT
@click.pass_obj
def list_cmd(app: AppContext, file: str | None) -> None:
    """List all the times."""
    app.emit(app.reports.list_intervals(file))


@click.command(cls=TrackCommand, examples="  trackctl\n  trackctl status project/TIMES.csv")
@FILE_ARGUMENT
@click.pass_obj
def status(app: AppContext, file: str | None) -> None:
    """Show the current status of the times."""
    app.emit(app.reports.status(file))


@click.command(cls=TrackCommand, examples="  trackctl verify\n  trackctl --fail verify")
@FILE_ARGUMENT
@click.pass_obj
def verify(app: AppContext, file: str | None) -> None:
    """Verify the validity of the times."""
    app.emit(app.reports.verify(file))
