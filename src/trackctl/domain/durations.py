"""Duration aggregation over closed records."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta

from trackctl.domain.errors import InvalidTimestampError
from trackctl.domain.records import Record, Row
from trackctl.domain.timestamps import DEFAULT_TIME_FORMAT, parse_timestamp


def _parse(value: str, line: int, fmt: str) -> datetime:
    try:
        return parse_timestamp(value, fmt)
    except ValueError as exc:
        raise InvalidTimestampError(line, value) from exc


def record_elapsed(
    record: Record,
    fmt: str = DEFAULT_TIME_FORMAT,
    *,
    line: int = 0,
    now: datetime | None = None,
) -> timedelta:
    """Return ``end - start`` for *record*.

    An open record measures up to *now*; without *now* it is an error.

    Raises:
        InvalidTimestampError: If a field does not parse.
    """
    start = _parse(record.start, line, fmt)
    if record.end is not None:
        return _parse(record.end, line, fmt) - start
    if now is None:
        msg = f"line {line} is still open"
        raise ValueError(msg)
    return now - start


def row_elapsed(row: Row, fmt: str = DEFAULT_TIME_FORMAT) -> timedelta:
    """Return ``end - start`` for a closed row."""
    record = row.record
    if record is None or record.end is None:
        msg = f"line {row.number} is not a closed record"
        raise ValueError(msg)
    return record_elapsed(record, fmt, line=row.number)


def total_elapsed(rows: Iterable[Row], fmt: str = DEFAULT_TIME_FORMAT) -> timedelta:
    """Sum the elapsed time of every closed row in *rows*."""
    return sum((row_elapsed(row, fmt) for row in rows), timedelta())
