"""Error kinds raised by the interval log engine.

Every failure the engine can report is a :class:`TimeLogError` subclass
carrying a stable ``code``.  The service layer turns them into
``ServiceError`` payloads without inspecting anything but ``code``,
``str(exc)`` and :meth:`TimeLogError.detail`.
"""

from __future__ import annotations

from typing import Any, ClassVar

from trackctl.domain.spoken import spoken_list


class TimeLogError(Exception):
    """Base class for all interval log errors."""

    code: ClassVar[str] = "TIME_LOG_ERROR"

    def detail(self) -> dict[str, Any]:
        return {}


class StructuralFormatError(TimeLogError):
    """The log contains one or more records that are not closed.

    Attributes:
        bad_lines: 1-based line numbers of the offending records.
        last_is_bad: Whether the final record of the log is one of them.
    """

    code: ClassVar[str] = "STRUCTURAL_FORMAT"

    def __init__(self, bad_lines: list[int], last_is_bad: bool) -> None:
        self.bad_lines = list(bad_lines)
        self.last_is_bad = last_is_bad
        super().__init__(self.message)

    @property
    def just_incomplete(self) -> bool:
        """True when the only anomaly is an open trailing record."""
        return len(self.bad_lines) == 1 and self.last_is_bad

    @property
    def message(self) -> str:
        if self.just_incomplete:
            return "last entry is incomplete"
        if len(self.bad_lines) == 1:
            return f"incomplete or invalid entry on line {self.bad_lines[0]}"
        return f"incomplete or invalid entries on lines {spoken_list(self.bad_lines)}"

    def detail(self) -> dict[str, Any]:
        return {
            "bad_lines": self.bad_lines,
            "last_is_bad": self.last_is_bad,
            "just_incomplete": self.just_incomplete,
        }


class NoOpenIntervalError(TimeLogError):
    """``end`` was requested but the log has no open trailing record."""

    code: ClassVar[str] = "NO_OPEN_INTERVAL"

    def __init__(self, message: str = "no incomplete entry to end") -> None:
        super().__init__(message)


class LogIOError(TimeLogError):
    """Reading, writing, or seeking the log stream failed.

    Wraps ``OSError``, decoding failures, and rewrite byte-accounting
    mismatches.  The original exception, if any, is chained as ``__cause__``.
    """

    code: ClassVar[str] = "IO_ERROR"

    def __init__(self, message: str, *, path: str | None = None) -> None:
        self.path = path
        super().__init__(message)

    def detail(self) -> dict[str, Any]:
        return {"path": self.path} if self.path else {}


class InvalidTimestampError(TimeLogError):
    """A closed record holds a field that does not parse as a timestamp."""

    code: ClassVar[str] = "INVALID_TIMESTAMP"

    def __init__(self, line: int, value: str) -> None:
        self.line = line
        self.value = value
        super().__init__(f"invalid timestamp {value!r} on line {line}")

    def detail(self) -> dict[str, Any]:
        return {"line": self.line, "value": self.value}
