"""Tests for scoped log file acquisition."""

from pathlib import Path

import pytest

from trackctl.domain.errors import LogIOError
from trackctl.infrastructure.logfile import open_log


class TestOpenLog:
    def test_writable_creates_missing_file(self, tmp_path: Path) -> None:
        path = tmp_path / "sub" / "TIMES.csv"
        with open_log(path, writable=True) as stream:
            stream.write(b"x\n")
        assert path.read_bytes() == b"x\n"

    def test_writable_does_not_truncate(self, tmp_path: Path) -> None:
        path = tmp_path / "TIMES.csv"
        path.write_bytes(b"a,b\n")
        with open_log(path, writable=True) as stream:
            assert stream.read() == b"a,b\n"
        assert path.read_bytes() == b"a,b\n"

    def test_read_only_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(LogIOError) as exc_info:
            with open_log(tmp_path / "missing.csv"):
                pass
        assert exc_info.value.path == str(tmp_path / "missing.csv")

    def test_closed_after_block(self, tmp_path: Path) -> None:
        path = tmp_path / "TIMES.csv"
        path.write_bytes(b"")
        with open_log(path) as stream:
            pass
        assert stream.closed

    def test_closed_after_error(self, tmp_path: Path) -> None:
        path = tmp_path / "TIMES.csv"
        path.write_bytes(b"")
        with pytest.raises(RuntimeError):
            with open_log(path) as stream:
                raise RuntimeError("boom")
        assert stream.closed

    def test_os_error_inside_block_is_wrapped(self, tmp_path: Path) -> None:
        path = tmp_path / "TIMES.csv"
        path.write_bytes(b"")
        with pytest.raises(LogIOError):
            with open_log(path) as stream:
                stream.write(b"not writable")
