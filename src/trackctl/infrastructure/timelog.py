"""Interval log engine — scan, begin, end, and total over a byte stream.

The four entry points take an open, seekable binary stream:

- :func:`read_records` — scan and validate, optionally dropping bad rows.
- :func:`begin_interval` — append a new open record.
- :func:`end_interval` — close the trailing open record in place.
- :func:`total_duration` — sum the closed records.

Tolerated anomalies are appended to the caller's *warnings* list and
logged; everything else raises a
:class:`~trackctl.domain.errors.TimeLogError`.

INVARIANT: ``end_interval`` rewrites only the bytes of the trailing open
record.  The rewrite starts at the byte offset captured while scanning,
and only after the bytes found there re-encode identically.
"""

from __future__ import annotations

import csv
import logging
import os
from datetime import timedelta
from typing import BinaryIO

from trackctl.domain.durations import total_elapsed
from trackctl.domain.errors import LogIOError, NoOpenIntervalError, StructuralFormatError
from trackctl.domain.records import (
    ENCODING,
    LINE_TERMINATOR,
    Record,
    Row,
    encode_record,
    split_line,
)
from trackctl.domain.timestamps import DEFAULT_TIME_FORMAT, current_timestamp
from trackctl.domain.validation import filter_rows, validate_rows

logger = logging.getLogger(__name__)

_TERMINATOR = LINE_TERMINATOR.encode(ENCODING)


def _tolerate(err: StructuralFormatError, warnings: list[str] | None) -> None:
    logger.info("Proceeding despite malformed log: %s", err)
    if warnings is not None:
        warnings.append(str(err))


def _is_blank(data: bytes) -> bool:
    """Whitespace-only lines are not records, wherever they appear."""
    try:
        return not data.decode(ENCODING).strip()
    except UnicodeDecodeError:
        return False


def scan_rows(stream: BinaryIO) -> list[Row]:
    """Read every non-blank line of *stream* with its byte offset.

    Raises:
        LogIOError: On read failure, invalid UTF-8, or invalid CSV.
    """
    try:
        stream.seek(0)
        data = stream.read()
    except OSError as exc:
        raise LogIOError(f"cannot read log: {exc}") from exc

    rows: list[Row] = []
    offset = 0
    for number, raw in enumerate(data.splitlines(keepends=True), start=1):
        line_offset = offset
        offset += len(raw)
        try:
            text = raw.decode(ENCODING)
        except UnicodeDecodeError as exc:
            raise LogIOError(f"line {number} is not valid UTF-8") from exc
        if _is_blank(raw):
            continue
        try:
            fields = split_line(text)
        except csv.Error as exc:
            raise LogIOError(f"line {number}: {exc}") from exc
        rows.append(Row(number, line_offset, raw, fields))

    logger.debug("Scanned log: %d records in %d bytes", len(rows), len(data))
    return rows


def read_records(
    stream: BinaryIO,
    *,
    filter: bool = True,  # noqa: A002
) -> tuple[list[Row], StructuralFormatError | None]:
    """Scan and validate *stream*.

    Returns the rows and the structural error (or None).  With *filter*
    only closed records are returned; without it every row is returned,
    including a malformed tail.
    """
    rows = scan_rows(stream)
    err = validate_rows(rows)
    if filter:
        rows = filter_rows(rows)
    return rows, err


def begin_interval(
    stream: BinaryIO,
    *,
    strict: bool = False,
    timestamp: str | None = None,
    warnings: list[str] | None = None,
) -> Record:
    """Append a new open record stamped with *timestamp* (default: now).

    An open trailing record is overridden with a warning unless *strict*.
    Any other anomaly fails without writing.
    """
    _, err = read_records(stream, filter=False)
    if err is not None:
        if strict or not err.just_incomplete:
            raise err
        _tolerate(err, warnings)

    record = Record(timestamp or current_timestamp(DEFAULT_TIME_FORMAT))
    data = (encode_record(record) + LINE_TERMINATOR).encode(ENCODING)
    try:
        size = stream.seek(0, os.SEEK_END)
        if size > 0:
            stream.seek(size - 1)
            if stream.read(1) not in (b"\n", b"\r"):
                stream.write(_TERMINATOR)
        stream.write(data)
        stream.flush()
    except OSError as exc:
        raise LogIOError(f"cannot append to log: {exc}") from exc

    logger.debug("Began interval at %s", record.start)
    return record


def end_interval(
    stream: BinaryIO,
    *,
    strict: bool = False,
    timestamp: str | None = None,
    warnings: list[str] | None = None,
) -> Record:
    """Close the trailing open record with *timestamp* (default: now).

    Raises:
        NoOpenIntervalError: The log is empty or already ends closed.
        StructuralFormatError: The tail is not an open record, or other
            records are malformed and *strict* is set.
        LogIOError: The tail could not be rewritten exactly.
    """
    rows, err = read_records(stream, filter=False)
    if err is None:
        raise NoOpenIntervalError()
    if not err.last_is_bad:
        raise err

    tail = rows[-1]
    record = tail.record
    if record is None or not record.is_open:
        raise err
    if len(err.bad_lines) > 1:
        if strict:
            raise err
        _tolerate(err, warnings)

    closed = record.close(timestamp or current_timestamp(DEFAULT_TIME_FORMAT))
    _rewrite_tail(stream, tail, record, closed)
    logger.debug("Ended interval on line %d at %s", tail.number, closed.end)
    return closed


def _rewrite_tail(stream: BinaryIO, tail: Row, current: Record, closed: Record) -> None:
    """Replace the bytes of *tail* with the encoding of *closed*."""
    if encode_record(current).encode(ENCODING) != tail.content:
        msg = f"line {tail.number} does not re-encode identically; refusing to rewrite it"
        raise LogIOError(msg)

    data = (encode_record(closed) + LINE_TERMINATOR).encode(ENCODING)
    try:
        stream.seek(tail.offset)
        current = stream.read(len(tail.raw))
        stream.seek(tail.end_offset)
        rest = stream.read()
        if current != tail.raw or not _is_blank(rest):
            msg = f"log changed after line {tail.number} was read; refusing to rewrite it"
            raise LogIOError(msg)

        stream.seek(tail.offset)
        stream.write(data)
        stream.truncate()
        stream.flush()
        position = stream.tell()
    except OSError as exc:
        raise LogIOError(f"cannot rewrite line {tail.number}: {exc}") from exc

    expected = tail.offset + len(data)
    if position != expected:
        msg = f"rewrite of line {tail.number} ended at byte {position}, expected {expected}"
        raise LogIOError(msg)


def total_duration(
    stream: BinaryIO,
    *,
    strict: bool = False,
    fmt: str = DEFAULT_TIME_FORMAT,
    warnings: list[str] | None = None,
) -> tuple[timedelta, int]:
    """Sum the closed records of *stream*.

    Returns ``(elapsed, count)``.  Bad rows are skipped with a warning; in
    *strict* mode anything other than an open trailing record fails.
    """
    rows, err = read_records(stream, filter=True)
    if err is not None:
        if strict and not err.just_incomplete:
            raise err
        _tolerate(err, warnings)
    return total_elapsed(rows, fmt), len(rows)
