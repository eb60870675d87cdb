"""
Duration rendering.

The administrative API hands durations back as ``datetime.timedelta``. The
exported files keep the constant ("c") TimeSpan form used by the broker's own
tooling, e.g. ``14.00:00:00`` or ``00:01:00``.
"""
from __future__ import annotations

from datetime import timedelta
from typing import Optional, Union

_TICK = timedelta(microseconds=1)
_MICROS_PER_SECOND = 1_000_000
_MICROS_PER_MINUTE = 60 * _MICROS_PER_SECOND
_MICROS_PER_HOUR = 60 * _MICROS_PER_MINUTE
_MICROS_PER_DAY = 24 * _MICROS_PER_HOUR

# TimeSpan.MaxValue, the broker default for unset durations. The SDK parses it
# with microsecond precision and rounds past the real maximum.
MAX_TIMESPAN = timedelta(days=10675199, seconds=10085, microseconds=477580)
MAX_TIMESPAN_TEXT = "10675199.02:48:05.4775807"


def format_timespan(value: Optional[Union[timedelta, str]]) -> str:
    """
    Render a duration as ``[-][d.]hh:mm:ss[.fffffff]``.

    Args:
        value: A timedelta, an already rendered string, or None.

    Returns:
        The rendered duration; an empty string for None.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value

    if value >= MAX_TIMESPAN:
        return MAX_TIMESPAN_TEXT

    total = value // _TICK
    sign = "-" if total < 0 else ""
    total = abs(total)

    days, rest = divmod(total, _MICROS_PER_DAY)
    hours, rest = divmod(rest, _MICROS_PER_HOUR)
    minutes, rest = divmod(rest, _MICROS_PER_MINUTE)
    seconds, micros = divmod(rest, _MICROS_PER_SECOND)

    text = f"{hours:02d}:{minutes:02d}:{seconds:02d}"
    if days:
        text = f"{days}.{text}"
    if micros:
        # seven digits of 100ns ticks
        text = f"{text}.{micros * 10:07d}"
    return sign + text
