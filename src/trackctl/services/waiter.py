"""WaitService — complete an interval when the process is told to stop.

``wait`` blocks until one of the configured termination signals arrives
and then ends the open interval.  ``fork`` begins an interval and hands
the waiting to a detached ``trackctl wait`` process.

SIGKILL cannot be caught: a waiter killed that way exits without ending
its interval, which stays open in the log.
"""

from __future__ import annotations

import logging
import signal
import subprocess
import sys
import threading
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from trackctl.domain.timestamps import Clock, local_now
from trackctl.services.base import BaseService
from trackctl.services.intervals import IntervalService
from trackctl.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from trackctl.config.settings import TrackSettings

logger = logging.getLogger(__name__)

Waiter = Callable[[Iterable[str]], str]
Spawner = Callable[[list[str]], int]

_POLL_SECONDS = 0.5


def resolve_signals(names: Iterable[str]) -> list[signal.Signals]:
    """Map signal names to signals available on this platform."""
    resolved: list[signal.Signals] = []
    for name in names:
        sig = getattr(signal, name.upper(), None)
        if isinstance(sig, signal.Signals) and sig is not getattr(signal, "SIGKILL", None):
            resolved.append(sig)
        else:
            logger.debug("Ignoring unavailable signal %s", name)
    return resolved


def wait_for_signal(names: Iterable[str]) -> str:
    """Block until one of *names* is delivered; return its name.

    Must be called from the main thread.  Previous handlers are restored
    before returning.
    """
    received: list[signal.Signals] = []
    done = threading.Event()

    def _handler(signum: int, _frame: object) -> None:
        received.append(signal.Signals(signum))
        done.set()

    signals = resolve_signals(names)
    if not signals:
        msg = "no catchable termination signals configured"
        raise ValueError(msg)

    previous = {sig: signal.signal(sig, _handler) for sig in signals}
    try:
        while not done.wait(_POLL_SECONDS):
            pass
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)

    logger.debug("Received %s", received[0].name)
    return received[0].name


def spawn_detached(argv: list[str]) -> int:
    """Start *argv* in a new session with stdio detached; return its pid."""
    proc = subprocess.Popen(
        argv,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        start_new_session=True,
    )
    return proc.pid


class WaitService(BaseService):
    """Deferred completion of intervals on termination."""

    def __init__(
        self,
        settings: TrackSettings,
        *,
        clock: Clock = local_now,
        waiter: Waiter | None = None,
        spawner: Spawner | None = None,
    ) -> None:
        super().__init__(settings, clock=clock)
        self._intervals = IntervalService(settings, clock=clock)
        self._waiter = waiter or wait_for_signal
        self._spawner = spawner or spawn_detached

    def wait(
        self,
        path: str | Path | None = None,
        *,
        on_waiting: Callable[[], None] | None = None,
    ) -> ServiceResult:
        """Block until a termination signal, then end the open interval."""
        if on_waiting is not None:
            on_waiting()
        try:
            received = self._waiter(self._settings.wait.signals)
        except ValueError as exc:
            return ServiceResult(
                ok=False,
                op="wait",
                error=ServiceError(code="NO_SIGNALS", message=str(exc)),
                meta=self._meta(self._log_path(path)),
            )

        result = self._intervals.end(path)
        meta = {**(result.meta or {}), "signal": received}
        return result.model_copy(update={"meta": meta})

    def fork(self, path: str | Path | None = None) -> ServiceResult:
        """Begin an interval and spawn a detached waiter to end it."""
        op = "fork"
        begun = self._intervals.begin(path)
        if not begun.ok:
            return begun

        log_path = self._log_path(path).resolve()
        argv = [sys.executable, "-m", "trackctl", *self._global_flags(), "wait", str(log_path)]
        try:
            pid = self._spawner(argv)
        except OSError as exc:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code="SPAWN_FAILED",
                    message=f"cannot start waiter: {exc}",
                    detail={"argv": argv},
                ),
                warnings=begun.warnings,
                meta=self._meta(log_path),
            )

        logger.debug("Spawned waiter pid=%d for %s", pid, log_path)
        return ServiceResult(
            ok=True,
            op=op,
            data={**begun.data, "pid": pid},
            warnings=begun.warnings,
            meta=self._meta(log_path),
        )

    def _global_flags(self) -> list[str]:
        flags = ["--quiet"]
        if self.strict:
            flags.append("--fail")
        if self._settings.config_path is not None:
            flags.extend(["--config", str(self._settings.config_path)])
        return flags
