"""TrackSettings — one frozen object holding every setting.

Sources, first match wins:

1. command-line flags passed to :meth:`TrackSettings.from_cli`
2. ``TRACKCTL_*`` environment variables (``__`` between nested keys,
   e.g. ``TRACKCTL_LOG__PATH``)
3. ``trackctl.toml``, found by :func:`~trackctl.config.discovery.find_config`
4. defaults in :mod:`trackctl.config.models`
"""

from __future__ import annotations

import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from trackctl.config.discovery import find_config
from trackctl.config.models import LogConfig, WaitConfig

# Config file chosen by from_cli() for the settings object being built.
_active_toml: ContextVar[Path | None] = ContextVar("trackctl_toml", default=None)


class TrackSettings(BaseSettings):
    """Resolved configuration for one trackctl invocation.

    Stored on the :class:`~trackctl.commands._context.AppContext` built by
    the root CLI group.

    Attributes:
        root: Directory relative log paths resolve against: the directory
            holding the config file, otherwise the working directory.
        config_path: The config file in effect, or None.
        fail: Strict mode; every log anomaly is an error.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        env_prefix="TRACKCTL_",
        env_nested_delimiter="__",
    )

    root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    fail: bool = False
    quiet: bool = False
    verbose: bool = False
    json_output: bool = False
    log_json: bool = False

    log: LogConfig = Field(default_factory=LogConfig)
    wait: WaitConfig = Field(default_factory=WaitConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources = [init_settings, env_settings]
        toml_path = _active_toml.get()
        if toml_path is not None:
            sources.append(TomlConfigSettingsSource(settings_cls, toml_file=toml_path))
        return tuple(sources)

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        root: Path | None = None,
        **flags: Any,
    ) -> TrackSettings:
        """Resolve settings for one CLI invocation.

        An explicit *config_path* that is not a file is ignored, and so is
        a project without ``trackctl.toml``; defaults apply then.

        Raises:
            click.ClickException: If the config file is not valid TOML.
        """
        if config_path:
            candidate = Path(config_path)
            toml_path = candidate if candidate.is_file() else None
        else:
            toml_path = find_config(root)

        if root is None:
            root = toml_path.parent if toml_path else Path.cwd()

        token = _active_toml.set(toml_path)
        try:
            return cls(root=root, config_path=toml_path, **flags)
        except tomllib.TOMLDecodeError as exc:
            msg = f"Invalid TOML in {toml_path}: {exc}"
            raise click.ClickException(msg) from exc
        finally:
            _active_toml.reset(token)

    def log_path(self, override: str | Path | None = None) -> Path:
        """Resolve the log file: an explicit *override* wins as given."""
        if override is not None:
            return Path(override)
        path = Path(self.log.path).expanduser()
        return path if path.is_absolute() else self.root / path
