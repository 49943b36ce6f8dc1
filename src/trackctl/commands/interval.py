"""Commands: begin, end, and next."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from trackctl.commands._base import FILE_ARGUMENT, TrackCommand

if TYPE_CHECKING:
    from trackctl.commands._context import AppContext


@click.command(
    cls=TrackCommand,
    examples="""\
  trackctl begin
  trackctl begin project/TIMES.csv
  trackctl --fail begin""",
)
@FILE_ARGUMENT
@click.pass_obj
def begin(app: AppContext, file: str | None) -> None:
    """Begin a new time entry."""
    app.emit(app.intervals.begin(file))


@click.command(
    cls=TrackCommand,
    examples="""\
  trackctl end
  trackctl -q end project/TIMES.csv""",
)
@FILE_ARGUMENT
@click.pass_obj
def end(app: AppContext, file: str | None) -> None:
    """Complete the begun time entry."""
    app.emit(app.intervals.end(file))


@click.command(
    "next",
    cls=TrackCommand,
    examples="""\
  trackctl next
  trackctl --json next""",
)
@FILE_ARGUMENT
@click.pass_obj
def next_cmd(app: AppContext, file: str | None) -> None:
    """Begin or end the entry depending on the contents."""
    app.emit(app.intervals.next(file))
