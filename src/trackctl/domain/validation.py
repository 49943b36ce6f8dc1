"""Structural validation of a scanned log.

A row is *good* when it holds a closed record (exactly two fields).
Every other row, including an open record, is *bad*.  The one bad row
that is legitimate is an open record at the very end of the log: the
"just incomplete" case that ``end`` exists to complete.
"""

from __future__ import annotations

from collections.abc import Sequence

from trackctl.domain.errors import StructuralFormatError
from trackctl.domain.records import Row


def is_closed_row(row: Row) -> bool:
    return len(row.fields) == 2


def validate_rows(rows: Sequence[Row]) -> StructuralFormatError | None:
    """Return a StructuralFormatError describing every bad row, or None."""
    bad_lines = [row.number for row in rows if not is_closed_row(row)]
    if not bad_lines:
        return None
    last_is_bad = not is_closed_row(rows[-1])
    return StructuralFormatError(bad_lines, last_is_bad)


def filter_rows(rows: Sequence[Row]) -> list[Row]:
    """Keep only the rows holding closed records."""
    return [row for row in rows if is_closed_row(row)]
