"""Rich console used to render results into a string.

Results are rendered into an in-memory buffer and then printed by click,
so the same text can be routed to stdout or stderr.  Rich leaves out
color codes when the buffer is not a terminal, which keeps CliRunner and
piped output plain.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

DEFAULT_WIDTH = 120

TRACK_STYLES: dict[str, str] = {
    "track.ok": "bold green",
    "track.error": "bold red",
    "track.begin": "bold green",
    "track.end": "bold blue",
    "track.op": "bold cyan",
    "track.key": "dim",
    "track.time": "bold",
    "track.duration": "magenta",
    "track.open": "bold yellow",
}

TRACK_THEME = Theme(TRACK_STYLES)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Return a buffered Console using the trackctl theme."""
    return Console(
        file=StringIO(),
        theme=TRACK_THEME,
        no_color=no_color,
        highlight=False,
        width=width or DEFAULT_WIDTH,
    )


def get_output(console: Console) -> str:
    """Return everything rendered so far on a console from :func:`create_console`."""
    buffer = console.file
    if not isinstance(buffer, StringIO):
        msg = "console does not render to an in-memory buffer"
        raise TypeError(msg)
    return buffer.getvalue()
