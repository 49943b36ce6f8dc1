"""IntervalService — begin, end, and next.

Each operation acquires the log for writing, runs one engine mutation,
and releases the file on every exit path.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any, BinaryIO

from trackctl.domain.durations import record_elapsed
from trackctl.domain.errors import InvalidTimestampError, TimeLogError
from trackctl.domain.records import Record
from trackctl.domain.timestamps import format_duration
from trackctl.infrastructure.logfile import open_log
from trackctl.infrastructure.timelog import begin_interval, end_interval, read_records
from trackctl.services.base import BaseService
from trackctl.services.result import ServiceResult


class IntervalService(BaseService):
    """Opens and closes intervals in the log."""

    def begin(self, path: str | Path | None = None) -> ServiceResult:
        """Append a new open interval stamped now."""
        return self._mutate("begin", path, choose=lambda _stream: "begin")

    def end(self, path: str | Path | None = None) -> ServiceResult:
        """Close the trailing open interval, stamping it now."""
        return self._mutate("end", path, choose=lambda _stream: "end")

    def next(self, path: str | Path | None = None) -> ServiceResult:
        """End the open interval if the log ends with one, else begin."""
        return self._mutate("next", path, choose=self._next_action)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _next_action(stream: BinaryIO) -> str:
        _, err = read_records(stream, filter=False)
        return "end" if err is not None and err.last_is_bad else "begin"

    def _mutate(
        self, op: str, path: str | Path | None, *, choose: Callable[[BinaryIO], str]
    ) -> ServiceResult:
        log_path = self._log_path(path)
        warnings: list[str] = []
        try:
            with open_log(log_path, writable=True) as stream:
                op = choose(stream)
                mutate = begin_interval if op == "begin" else end_interval
                record = mutate(
                    stream,
                    strict=self.strict,
                    timestamp=self._timestamp(),
                    warnings=warnings,
                )
        except TimeLogError as exc:
            return self._failure(op, exc, log_path, warnings)

        return ServiceResult(
            ok=True,
            op=op,
            data=self._record_data(record, warnings),
            warnings=warnings,
            meta=self._meta(log_path),
        )

    def _record_data(self, record: Record, warnings: list[str]) -> dict[str, Any]:
        data: dict[str, Any] = {"start": record.start}
        if record.end is None:
            return data
        data["end"] = record.end
        try:
            elapsed = record_elapsed(record, self.time_format)
        except InvalidTimestampError as exc:
            warnings.append(f"elapsed time unknown: invalid timestamp {exc.value!r}")
        else:
            data["elapsed"] = format_duration(elapsed)
            data["seconds"] = int(elapsed.total_seconds())
        return data
