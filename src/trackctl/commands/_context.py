"""AppContext — the object every trackctl command receives.

The root group builds it from the resolved settings and hands it down
with ``@click.pass_obj``.  Services are built on first use so ``--help``
and ``--version`` never touch them.
"""

from __future__ import annotations

from functools import cached_property
from typing import TYPE_CHECKING

import click

from trackctl.config.logging import configure_logging
from trackctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from trackctl.config.settings import TrackSettings
    from trackctl.services.intervals import IntervalService
    from trackctl.services.reports import ReportService
    from trackctl.services.result import ServiceResult
    from trackctl.services.waiter import WaitService


class AppContext:
    """Settings, services and output routing for one CLI invocation."""

    def __init__(self, settings: TrackSettings) -> None:
        self.settings = settings
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @cached_property
    def intervals(self) -> IntervalService:
        from trackctl.services.intervals import IntervalService

        return IntervalService(self.settings)

    @cached_property
    def reports(self) -> ReportService:
        from trackctl.services.reports import ReportService

        return ReportService(self.settings)

    @cached_property
    def waiter(self) -> WaitService:
        from trackctl.services.waiter import WaitService

        return WaitService(self.settings)

    @property
    def output_settings(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )

    @property
    def _chatty(self) -> bool:
        return not (self.settings.quiet or self.settings.json_output)

    def inform(self, message: str) -> None:
        """Print an informational line such as ``WAIT``; --quiet and --json drop it."""
        if self._chatty:
            click.echo(message)

    def emit(self, result: ServiceResult) -> None:
        """Print *result* and exit non-zero when it failed.

        Output goes to stdout on success and stderr on failure.  Tolerated
        anomalies are printed to stderr as ``WARNING:`` lines, except in
        JSON mode where they are part of the payload.
        """
        output = format_result(result, settings=self.output_settings)
        if not self.settings.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)
        if result.ok:
            if output:
                click.echo(output)
            return
        click.echo(output, err=True)
        raise SystemExit(result.exit_code)
