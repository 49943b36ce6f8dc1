"""BaseService — shared plumbing for trackctl services.

Every service receives the resolved :class:`TrackSettings` and a clock.
Services open the log themselves, one scoped acquisition per operation,
and convert engine errors into failed ServiceResults.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from trackctl.domain.timestamps import Clock, format_timestamp, local_now
from trackctl.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from trackctl.config.settings import TrackSettings
    from trackctl.domain.errors import TimeLogError

logger = logging.getLogger(__name__)


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class IntervalService(BaseService):
            def begin(self, path=None) -> ServiceResult:
                log_path = self._log_path(path)
                with open_log(log_path, writable=True) as stream:
                    ...
    """

    def __init__(self, settings: TrackSettings, *, clock: Clock = local_now) -> None:
        self._settings = settings
        self._clock = clock

    @property
    def strict(self) -> bool:
        return self._settings.fail

    @property
    def time_format(self) -> str:
        return self._settings.log.timestamp_format

    def _log_path(self, path: str | Path | None) -> Path:
        return self._settings.log_path(path)

    def _timestamp(self) -> str:
        return format_timestamp(self._clock(), self.time_format)

    def _meta(self, log_path: Path) -> dict[str, Any]:
        return {"path": str(log_path), "strict": self.strict}

    def _failure(
        self,
        op: str,
        exc: TimeLogError,
        log_path: Path,
        warnings: list[str] | None = None,
    ) -> ServiceResult:
        """Build a failed ServiceResult from an engine error."""
        logger.debug("%s failed on %s: %s", op, log_path, exc)
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError.from_exception(exc),
            warnings=warnings or [],
            meta=self._meta(log_path),
        )
