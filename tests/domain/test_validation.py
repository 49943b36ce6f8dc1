"""Tests for structural validation of scanned rows."""

from trackctl.domain.records import Row
from trackctl.domain.validation import filter_rows, is_closed_row, validate_rows


def _rows(*lines: str) -> list[Row]:
    rows: list[Row] = []
    offset = 0
    for number, line in enumerate(lines, start=1):
        raw = f"{line}\n".encode()
        rows.append(Row(number, offset, raw, tuple(line.split(","))))
        offset += len(raw)
    return rows


class TestValidateRows:
    def test_empty_log_is_valid(self) -> None:
        assert validate_rows([]) is None

    def test_closed_log_is_valid(self) -> None:
        assert validate_rows(_rows("a,b", "c,d")) is None

    def test_open_tail_is_just_incomplete(self) -> None:
        err = validate_rows(_rows("a,b", "c"))
        assert err is not None
        assert err.bad_lines == [2]
        assert err.last_is_bad is True
        assert err.just_incomplete

    def test_interior_bad_line(self) -> None:
        err = validate_rows(_rows("a,b", "c", "d,e"))
        assert err is not None
        assert err.bad_lines == [2]
        assert err.last_is_bad is False
        assert not err.just_incomplete

    def test_interior_and_tail(self) -> None:
        err = validate_rows(_rows("x", "a,b", "c"))
        assert err is not None
        assert err.bad_lines == [1, 3]
        assert err.last_is_bad is True
        assert not err.just_incomplete

    def test_three_fields_is_bad(self) -> None:
        err = validate_rows(_rows("a,b,c"))
        assert err is not None
        assert err.bad_lines == [1]


class TestFilterRows:
    def test_keeps_only_closed(self) -> None:
        rows = _rows("a,b", "c", "d,e,f", "g,h")
        kept = filter_rows(rows)
        assert [row.number for row in kept] == [1, 4]
        assert all(is_closed_row(row) for row in kept)
