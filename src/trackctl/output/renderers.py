"""Human-readable rendering of ServiceResult, one renderer per operation.

Mutations print a single word (``BEGIN``, ``END``, ``FORK``) so scripts
can match on it; reports print their value first and details below.
``--verbose`` adds the fields and metadata behind each line.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from trackctl.output.console import create_console, get_output

if TYPE_CHECKING:
    from collections.abc import Callable

    from rich.console import Console

    from trackctl.services.result import ServiceResult

    Renderer = Callable[[ServiceResult, Console, bool], None]

_WORDS: dict[str, tuple[str, str]] = {
    "begin": ("BEGIN", "track.begin"),
    "end": ("END", "track.end"),
    "fork": ("FORK", "track.begin"),
}

_TIME_KEYS = frozenset({"start", "end", "since"})
_DURATION_KEYS = frozenset({"elapsed", "total", "running"})


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render *result* as text; plain when not attached to a terminal."""
    console = create_console()
    if not result.ok:
        _render_error(result, console, verbose)
    else:
        _RENDERERS.get(result.op, _render_fields)(result, console, verbose)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render the bare minimum for ``--quiet``.

    Mutations print nothing; reports print only their value; errors keep
    their one-line form.
    """
    if not result.ok:
        return _error_line(result).plain
    data = result.data
    if result.op in _WORDS:
        return ""
    if result.op == "total":
        return str(data.get("total", ""))
    if result.op == "status":
        return str(data.get("state", ""))
    if result.op == "list":
        return "\n".join(f"{item['start']},{item['end']}" for item in data.get("items", []))
    return f"OK: {result.op}"


def _error_line(result: ServiceResult) -> Text:
    message = result.error.message if result.error else "Unknown error"
    return Text.assemble(("ERROR", "track.error"), ": ", (result.op, "track.op"), " — ", message)


def _value_style(key: str) -> str:
    if key in _TIME_KEYS:
        return "track.time"
    if key in _DURATION_KEYS:
        return "track.duration"
    return ""


def _kv(console: Console, key: str, value: Any, *, indent: int = 2) -> None:
    console.print(
        Text.assemble((f"{' ' * indent}{key}: ", "track.key"), (str(value), _value_style(key)))
    )


def _section(console: Console, title: str, values: Mapping[str, Any] | None) -> None:
    if not values:
        return
    console.print(Text(f"  {title}:", style="dim"))
    for key, value in values.items():
        _kv(console, key, value, indent=4)


def _render_error(result: ServiceResult, console: Console, verbose: bool) -> None:
    console.print(_error_line(result))
    if verbose and result.error:
        _section(console, "detail", result.error.detail)


def _render_word(result: ServiceResult, console: Console, verbose: bool) -> None:
    word, style = _WORDS[result.op]
    console.print(Text(word, style=style))
    if not verbose:
        return
    for key in ("start", "end", "elapsed", "pid"):
        if key in result.data:
            _kv(console, key, result.data[key])
    _section(console, "meta", result.meta)


def _render_total(result: ServiceResult, console: Console, verbose: bool) -> None:
    console.print(Text(str(result.data.get("total", "0s")), style="track.duration"))
    if verbose:
        _kv(console, "intervals", result.data.get("intervals", 0))
        _kv(console, "seconds", result.data.get("seconds", 0))
        _section(console, "meta", result.meta)


def _render_list(result: ServiceResult, console: Console, verbose: bool) -> None:
    items = result.data.get("items", [])
    table = Table(pad_edge=False)
    if verbose:
        table.add_column("Line", style="dim", justify="right")
    table.add_column("Start", style="track.time", no_wrap=True)
    table.add_column("End", no_wrap=True)
    table.add_column("Elapsed", style="track.duration", justify="right")

    for item in items:
        end = str(item.get("end", ""))
        cells: list[str | Text] = [
            str(item.get("start", "")),
            Text(end, style="track.open") if end == "open" else end,
            str(item.get("elapsed", "")),
        ]
        if verbose:
            cells.insert(0, str(item.get("line", "")))
        table.add_row(*cells)

    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} intervals")


def _render_status(result: ServiceResult, console: Console, verbose: bool) -> None:
    data = result.data
    state = str(data.get("state", ""))
    if state == "open":
        console.print(Text.assemble(("OPEN", "track.open"), f" since {data.get('since', '')}"))
        _kv(console, "running", data.get("running", ""))
    else:
        console.print(Text(state.upper(), style="track.ok"))
    _kv(console, "intervals", data.get("intervals", 0))
    _kv(console, "total", data.get("total", "0s"))
    if verbose:
        _section(console, "meta", result.meta)


def _render_fields(result: ServiceResult, console: Console, verbose: bool) -> None:
    """Any other operation: ``OK <op>`` followed by its data."""
    console.print(Text.assemble(("OK", "track.ok"), " ", (result.op, "track.op")))
    for key, value in result.data.items():
        _kv(console, key, value)
    if verbose:
        _section(console, "meta", result.meta)


_RENDERERS: dict[str, Renderer] = {
    "begin": _render_word,
    "end": _render_word,
    "fork": _render_word,
    "total": _render_total,
    "list": _render_list,
    "status": _render_status,
}
