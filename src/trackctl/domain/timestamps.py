"""Timestamp formatting, parsing, and duration rendering.

Timestamps are persisted as local wall-clock time with a trailing zone
token, e.g. ``2013-06-01 09:30:00 CEST``.  The zone token is either an
abbreviation or a numeric ``±HHMM`` offset; both parse back to an aware
``datetime`` so that durations can be computed across zones.
"""

from __future__ import annotations

import re
import time
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

DEFAULT_TIME_FORMAT = "%Y-%m-%d %H:%M:%S %Z"

_ZONE_DIRECTIVES = (" %Z", " %z")
_OFFSET_RE = re.compile(r"^([+-])(\d{2}):?(\d{2})?$")
_UTC_NAMES = frozenset({"UTC", "GMT", "Z"})

Clock = Callable[[], datetime]


def local_now() -> datetime:
    """Return the current local time, aware, truncated to the second."""
    return datetime.now().astimezone().replace(microsecond=0)


def format_timestamp(moment: datetime, fmt: str = DEFAULT_TIME_FORMAT) -> str:
    """Format *moment* for the log. Naive values are taken as local time."""
    if moment.tzinfo is None:
        moment = moment.astimezone()
    return moment.strftime(fmt)


def current_timestamp(fmt: str = DEFAULT_TIME_FORMAT, clock: Clock = local_now) -> str:
    return format_timestamp(clock(), fmt)


def _resolve_zone(naive: datetime, token: str) -> datetime:
    """Attach the timezone named by *token* to the wall time *naive*."""
    match = _OFFSET_RE.match(token)
    if match:
        sign, hours, minutes = match.groups()
        offset = timedelta(hours=int(hours), minutes=int(minutes or 0))
        return naive.replace(tzinfo=timezone(-offset if sign == "-" else offset))

    if token.upper() in _UTC_NAMES:
        return naive.replace(tzinfo=timezone.utc)

    # Local abbreviations (standard or daylight) resolve against the local
    # zone rules in force at that wall time.
    if token in time.tzname:
        for fold in (0, 1):
            local = naive.replace(fold=fold).astimezone()
            if local.tzname() == token:
                return local

    # Unknown abbreviation: keep the name, assume zero offset.
    return naive.replace(tzinfo=timezone(timedelta(0), token))


def parse_timestamp(value: str, fmt: str = DEFAULT_TIME_FORMAT) -> datetime:
    """Parse a persisted timestamp into an aware ``datetime``.

    Raises:
        ValueError: If *value* does not match *fmt*.
    """
    for directive in _ZONE_DIRECTIVES:
        if fmt.endswith(directive):
            base, sep, token = value.strip().rpartition(" ")
            if not sep or not token:
                msg = f"missing timezone in {value!r}"
                raise ValueError(msg)
            naive = datetime.strptime(base, fmt[: -len(directive)])
            return _resolve_zone(naive, token)

    parsed = datetime.strptime(value.strip(), fmt)
    if parsed.tzinfo is None:
        parsed = parsed.astimezone()
    return parsed


def format_duration(elapsed: timedelta) -> str:
    """Render *elapsed* as ``1h2m3s``, ``4m0s``, ``7s``, or ``0s``."""
    seconds = int(elapsed.total_seconds())
    sign = "-" if seconds < 0 else ""
    hours, rest = divmod(abs(seconds), 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{sign}{hours}h{minutes}m{secs}s"
    if minutes:
        return f"{sign}{minutes}m{secs}s"
    return f"{sign}{secs}s"
