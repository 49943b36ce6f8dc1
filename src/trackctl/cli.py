"""Root CLI group for trackctl with global flags and command registration."""

from __future__ import annotations

import click

from trackctl import __version__
from trackctl.commands import register_commands
from trackctl.commands._context import AppContext
from trackctl.config.settings import TrackSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="trackctl")
@click.option("--fail", is_flag=True, help="Fail if there are any invalid time entries.")
@click.option("-q", "--quiet", is_flag=True, help="Do not print any informative messages.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug logging.")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    fail: bool,
    quiet: bool,
    verbose: bool,
    json_output: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """trackctl — track the time you spend on a project.

    Start and end times are stored in a CSV file (TIMES.csv by default).
    Without a command, shows the status of the times.
    """
    flags = {
        "fail": fail,
        "quiet": quiet,
        "verbose": verbose,
        "json_output": json_output,
        "log_json": log_json,
    }
    # Unset flags fall through to env vars and trackctl.toml.
    settings = TrackSettings.from_cli(
        config_path=config_path,
        **{name: value for name, value in flags.items() if value},
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        from trackctl.commands.report import status

        ctx.invoke(status)


register_commands(cli)
