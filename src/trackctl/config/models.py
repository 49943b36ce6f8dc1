"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, trackctl.toml only contains
overrides.  A project needs no config file at all.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from trackctl.domain.records import FIELD_SEPARATOR
from trackctl.domain.timestamps import DEFAULT_TIME_FORMAT


class LogConfig(BaseModel):
    """[log] section."""

    model_config = {"frozen": True}

    path: str = "TIMES.csv"
    timestamp_format: str = DEFAULT_TIME_FORMAT

    @field_validator("timestamp_format")
    @classmethod
    def _no_separator(cls, value: str) -> str:
        if FIELD_SEPARATOR in value or '"' in value:
            msg = "timestamp_format must not contain ',' or '\"'"
            raise ValueError(msg)
        return value


class WaitConfig(BaseModel):
    """[wait] section."""

    model_config = {"frozen": True}

    signals: list[str] = Field(default_factory=lambda: ["SIGINT", "SIGTERM", "SIGHUP", "SIGQUIT"])
