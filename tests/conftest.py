"""Shared pytest fixtures and test helpers for trackctl tests."""

from __future__ import annotations

from collections.abc import Iterator
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from click.testing import CliRunner

from trackctl.config.settings import TrackSettings

T0 = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)
T1 = "2024-01-01 09:00:00 UTC"
T2 = "2024-01-01 10:30:00 UTC"
T3 = "2024-01-01 11:00:00 UTC"
T4 = "2024-01-01 11:45:00 UTC"


class StepClock:
    """Deterministic clock: each call advances by *step* from *start*."""

    def __init__(self, start: datetime = T0, step: timedelta = timedelta(minutes=90)) -> None:
        self._times: Iterator[datetime] = (start + step * i for i in range(10_000))
        self.calls = 0

    def __call__(self) -> datetime:
        self.calls += 1
        return next(self._times)


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's TRACKCTL_* environment out of the tests."""
    monkeypatch.delenv("TRACKCTL_CONFIG", raising=False)
    for name in ("LOG__PATH", "FAIL", "QUIET", "VERBOSE", "JSON_OUTPUT", "LOG_JSON"):
        monkeypatch.delenv(f"TRACKCTL_{name}", raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def log_path(tmp_path: Path) -> Path:
    """Path of the default log inside the temp project root."""
    return tmp_path / "TIMES.csv"


@pytest.fixture
def settings(tmp_path: Path) -> TrackSettings:
    """Settings rooted at a temp directory, non-strict."""
    return TrackSettings.from_cli(root=tmp_path)


@pytest.fixture
def strict_settings(tmp_path: Path) -> TrackSettings:
    """Settings rooted at a temp directory, strict (--fail)."""
    return TrackSettings.from_cli(root=tmp_path, fail=True)


@pytest.fixture
def clock() -> StepClock:
    return StepClock()


@pytest.fixture
def _isolated_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp project root so the CLI writes an isolated log.

    Use via ``@pytest.mark.usefixtures("_isolated_root")`` on command test
    classes.
    """
    monkeypatch.chdir(tmp_path)
