"""Commands: wait, run, and fork.

These complete an interval when the process is asked to terminate.
A SIGKILL cannot be intercepted and leaves the interval open.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from trackctl.commands._base import FILE_ARGUMENT, TrackCommand

if TYPE_CHECKING:
    from trackctl.commands._context import AppContext


def _wait_and_end(app: AppContext, file: str | None) -> None:
    app.emit(app.waiter.wait(file, on_waiting=lambda: app.inform("WAIT")))


@click.command(
    cls=TrackCommand,
    examples="""\
  trackctl wait
  kill -TERM <pid>   # completes the entry""",
)
@FILE_ARGUMENT
@click.pass_obj
def wait(app: AppContext, file: str | None) -> None:
    """Upon termination, complete the begun time entry."""
    _wait_and_end(app, file)


@click.command(cls=TrackCommand, examples="  trackctl run\n  # press Ctrl-C to end the entry")
@FILE_ARGUMENT
@click.pass_obj
def run(app: AppContext, file: str | None) -> None:
    """Begin a new time entry and complete upon termination."""
    app.emit(app.intervals.begin(file))
    _wait_and_end(app, file)


@click.command(cls=TrackCommand, examples="  trackctl fork\n  trackctl --json fork")
@FILE_ARGUMENT
@click.pass_obj
def fork(app: AppContext, file: str | None) -> None:
    """Begin a new time entry and fork to terminate later."""
    app.emit(app.waiter.fork(file))
