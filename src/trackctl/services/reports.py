"""ReportService — read-only views of the log: total, list, status, verify."""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path
from typing import Any, BinaryIO

from trackctl.domain.durations import record_elapsed, total_elapsed
from trackctl.domain.errors import TimeLogError
from trackctl.domain.records import Row
from trackctl.domain.timestamps import format_duration
from trackctl.domain.validation import filter_rows
from trackctl.infrastructure.logfile import open_log
from trackctl.infrastructure.timelog import read_records, total_duration
from trackctl.services.base import BaseService
from trackctl.services.result import ServiceResult


def _duration_fields(elapsed: timedelta, key: str = "elapsed") -> dict[str, Any]:
    return {key: format_duration(elapsed), "seconds": int(elapsed.total_seconds())}


class ReportService(BaseService):
    """Summaries of the log that never modify it."""

    def total(self, path: str | Path | None = None) -> ServiceResult:
        """Sum the durations of all closed intervals."""
        op = "total"
        log_path = self._log_path(path)
        warnings: list[str] = []
        try:
            with open_log(log_path) as stream:
                elapsed, count = total_duration(
                    stream,
                    strict=self.strict,
                    fmt=self.time_format,
                    warnings=warnings,
                )
        except TimeLogError as exc:
            return self._failure(op, exc, log_path, warnings)

        return ServiceResult(
            ok=True,
            op=op,
            data={**_duration_fields(elapsed, "total"), "intervals": count},
            warnings=warnings,
            meta=self._meta(log_path),
        )

    def list_intervals(self, path: str | Path | None = None) -> ServiceResult:
        """List every well-formed interval, including an open tail."""
        op = "list"
        log_path = self._log_path(path)
        warnings: list[str] = []
        now = self._clock()
        items: list[dict[str, Any]] = []
        try:
            with open_log(log_path) as stream:
                rows = self._scan(stream, warnings)
            for row in rows:
                record = row.record
                if record is None or (record.is_open and row is not rows[-1]):
                    continue
                elapsed = record_elapsed(record, self.time_format, line=row.number, now=now)
                items.append(
                    {
                        "line": row.number,
                        "start": record.start,
                        "end": record.end or "open",
                        **_duration_fields(elapsed),
                    }
                )
        except TimeLogError as exc:
            return self._failure(op, exc, log_path, warnings)

        return ServiceResult(
            ok=True,
            op=op,
            data={"items": items, "count": len(items)},
            warnings=warnings,
            meta=self._meta(log_path),
        )

    def status(self, path: str | Path | None = None) -> ServiceResult:
        """Report whether an interval is open and the running total."""
        op = "status"
        log_path = self._log_path(path)
        warnings: list[str] = []
        if not log_path.exists():
            data: dict[str, Any] = {"state": "empty", "intervals": 0}
            data.update(_duration_fields(timedelta(), "total"))
            return ServiceResult(ok=True, op=op, data=data, meta=self._meta(log_path))

        try:
            with open_log(log_path) as stream:
                rows = self._scan(stream, warnings)
            closed = filter_rows(rows)
            data = {"state": "empty" if not rows else "closed", "intervals": len(closed)}
            data.update(_duration_fields(total_elapsed(closed, self.time_format), "total"))

            tail = rows[-1].record if rows else None
            if tail is not None and tail.is_open:
                running = record_elapsed(
                    tail, self.time_format, line=rows[-1].number, now=self._clock()
                )
                data["state"] = "open"
                data["since"] = tail.start
                data["running"] = format_duration(running)
        except TimeLogError as exc:
            return self._failure(op, exc, log_path, warnings)

        return ServiceResult(
            ok=True, op=op, data=data, warnings=warnings, meta=self._meta(log_path)
        )

    def verify(self, path: str | Path | None = None) -> ServiceResult:
        """Check structure and timestamps of every record.

        An open trailing record is a warning, or an error in strict mode.
        """
        op = "verify"
        log_path = self._log_path(path)
        warnings: list[str] = []
        try:
            with open_log(log_path) as stream:
                rows, err = read_records(stream, filter=False)
            now = self._clock()
            for row in rows:
                if row.record is not None:
                    record_elapsed(row.record, self.time_format, line=row.number, now=now)
            if err is not None:
                if self.strict or not err.just_incomplete:
                    raise err
                warnings.append(str(err))
        except TimeLogError as exc:
            return self._failure(op, exc, log_path, warnings)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "records": len(rows),
                "closed": len(filter_rows(rows)),
                "open": err is not None,
            },
            warnings=warnings,
            meta=self._meta(log_path),
        )

    def _scan(self, stream: BinaryIO, warnings: list[str]) -> list[Row]:
        """Read all rows, tolerating anomalies unless strict forbids them."""
        rows, err = read_records(stream, filter=False)
        if err is not None:
            if self.strict and not err.just_incomplete:
                raise err
            if not err.just_incomplete:
                warnings.append(str(err))
        return rows
