"""Custom Click base class with --examples support.

``TrackCommand`` accepts an ``examples`` parameter.  When ``--examples``
is passed, the command prints usage examples and exits, keeping
``--help`` concise.
"""

from __future__ import annotations

from typing import Any

import click

FILE_ARGUMENT = click.argument(
    "file",
    required=False,
    type=click.Path(dir_okay=False),
)


def _show_examples(examples: str) -> Any:
    def callback(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    return callback


class TrackCommand(click.Command):
    """Click Command subclass that supports an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=_show_examples(examples),
                    help="Show usage examples.",
                )
            )
