"""Duration parsing utilities."""

import re
from datetime import timedelta

from tagstash.types import Duration

_DURATION_PATTERN = re.compile(r"^(\d+)(s|m|h|d|w)$")
_UNITS: dict[str, int] = {
    "s": 1,
    "m": 60,
    "h": 3_600,
    "d": 86_400,
    "w": 604_800,
}


def parse_duration(duration: Duration) -> int:
    """Parse a duration to whole seconds. Passthrough if already int."""
    if isinstance(duration, bool):
        raise ValueError(f"Invalid duration: {duration!r}")
    if isinstance(duration, int):
        return duration
    if isinstance(duration, timedelta):
        return int(duration.total_seconds())
    if not isinstance(duration, str):
        raise ValueError(f"Invalid duration: {duration!r}")

    match = _DURATION_PATTERN.match(duration)
    if not match:
        raise ValueError(f"Invalid duration: {duration!r}")

    value, unit = match.groups()
    return int(value) * _UNITS[unit]
