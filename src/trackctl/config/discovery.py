"""Locate ``trackctl.toml``.

``TRACKCTL_CONFIG`` names the file directly.  Otherwise the search walks
from the starting directory towards the filesystem root and stops at the
first ``trackctl.toml``, the way git finds ``.git``.
"""

from __future__ import annotations

import os
from collections.abc import Iterator, Mapping
from pathlib import Path

CONFIG_FILENAME = "trackctl.toml"
CONFIG_ENV_VAR = "TRACKCTL_CONFIG"


def _ancestors(start: Path) -> Iterator[Path]:
    here = start.resolve()
    yield here
    yield from here.parents


def find_config(
    start: Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> Path | None:
    """Return the config file in effect, or None.

    A ``TRACKCTL_CONFIG`` that does not name an existing file disables the
    walk-up search instead of falling back to it.
    """
    env = os.environ if environ is None else environ
    named = env.get(CONFIG_ENV_VAR)
    if named:
        path = Path(named).expanduser()
        return path if path.is_file() else None

    for directory in _ancestors(start or Path.cwd()):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
