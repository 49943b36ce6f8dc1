"""Record codec — one interval per comma-separated line.

A line with one field is an *open* record (start only); a line with two
fields is a *closed* record (start and end).  Any other field count is
malformed.

INVARIANT: ``encode_record`` never quotes or escapes.  The encoded text of
a record is exactly its fields joined by ``,`` so that the byte length of
a persisted line is recoverable from its field values.
"""

from __future__ import annotations

import csv
from dataclasses import dataclass

FIELD_SEPARATOR = ","
LINE_TERMINATOR = "\n"
ENCODING = "utf-8"

_FORBIDDEN = frozenset({FIELD_SEPARATOR, '"', "\r", "\n"})


@dataclass(frozen=True)
class Record:
    """One time interval; ``end`` is None while the interval is open."""

    start: str
    end: str | None = None

    @property
    def is_open(self) -> bool:
        return self.end is None

    def close(self, end: str) -> Record:
        """Return the closed counterpart of this open record."""
        if not self.is_open:
            msg = "record is already closed"
            raise ValueError(msg)
        return Record(self.start, end)

    @property
    def fields(self) -> tuple[str, ...]:
        return (self.start,) if self.end is None else (self.start, self.end)


@dataclass(frozen=True)
class Row:
    """A physical, non-blank line of the log as found on disk.

    Attributes:
        number: 1-based physical line number.
        offset: Byte offset of the first byte of the line.
        raw: The line's bytes, including its terminator (if any).
        fields: Decoded comma-separated fields.
    """

    number: int
    offset: int
    raw: bytes
    fields: tuple[str, ...]

    @property
    def content(self) -> bytes:
        """The line's bytes without its terminator."""
        return self.raw.rstrip(b"\r\n")

    @property
    def end_offset(self) -> int:
        return self.offset + len(self.raw)

    @property
    def record(self) -> Record | None:
        return decode_fields(self.fields)


def encode_record(record: Record) -> str:
    """Serialize *record* to a single line without terminator.

    Raises:
        ValueError: If a field contains the separator, a quote, or a newline.
    """
    for value in record.fields:
        if not value or _FORBIDDEN.intersection(value):
            msg = f"cannot encode field {value!r}"
            raise ValueError(msg)
    return FIELD_SEPARATOR.join(record.fields)


def decode_fields(fields: tuple[str, ...] | list[str]) -> Record | None:
    """Build a Record from decoded fields, or None if the count is wrong."""
    if len(fields) == 1:
        return Record(fields[0])
    if len(fields) == 2:
        return Record(fields[0], fields[1])
    return None


def split_line(line: str) -> tuple[str, ...]:
    """Split one line into its comma-separated fields.

    Raises:
        csv.Error: If the line is not valid CSV (e.g. an unbalanced quote).
    """
    reader = csv.reader([line.rstrip("\r\n")], strict=True)
    return tuple(next(reader, []))


def decode_record(line: str) -> Record | None:
    """Decode one line; None means the line is malformed."""
    return decode_fields(split_line(line))
