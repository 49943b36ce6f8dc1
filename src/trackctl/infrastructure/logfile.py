"""Scoped acquisition of the log file.

The log is opened, used, and closed within a single command invocation.
Any ``OSError`` raised while the file is held surfaces as a
:class:`~trackctl.domain.errors.LogIOError`.
"""

from __future__ import annotations

import os
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO

from trackctl.domain.errors import LogIOError


def _io_error(path: Path, exc: OSError) -> LogIOError:
    reason = exc.strerror or str(exc)
    return LogIOError(f"{path}: {reason}", path=str(path))


@contextmanager
def open_log(path: Path, *, writable: bool = False) -> Generator[BinaryIO]:
    """Open the log at *path* in binary mode.

    Writable logs are created (with parent directories) when missing and
    opened for in-place update; read-only logs must exist.
    """
    try:
        if writable:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd = os.open(path, os.O_RDWR | os.O_CREAT, 0o666)
            stream: BinaryIO = os.fdopen(fd, "r+b")
        else:
            stream = open(path, "rb")  # noqa: SIM115
    except OSError as exc:
        raise _io_error(path, exc) from exc

    with stream:
        try:
            yield stream
        except OSError as exc:
            raise _io_error(path, exc) from exc
