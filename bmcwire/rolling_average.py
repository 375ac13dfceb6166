"""Rolling average time periods of DCMI power statistics (Table 6-3)."""

from __future__ import annotations

from datetime import timedelta

_MINUTE = 60
_HOUR = 60 * 60
_DAY = 60 * 60 * 24


def seconds_multiplier(unit: int) -> int:
    """Seconds in the 2-bit duration unit: seconds, minutes, hours or days."""
    unit &= 0b11
    if unit == 0:
        return 1
    if unit == 1:
        return _MINUTE
    if unit == 2:
        return _HOUR
    return _DAY


def period_duration(b: int) -> timedelta:
    """Decode the wire byte of a rolling average period into a duration.

    The result is a whole number of seconds between 0 and 63 days.
    """
    value = b & 0x3F
    if value == 0:
        return timedelta(0)
    unit = (b >> 6) & 0b11
    return timedelta(seconds=value * seconds_multiplier(unit))


def period_byte(d: timedelta) -> int:
    """Encode a duration as a rolling average period byte, best-effort.

    A duration of at least one of the next larger unit is expressed in that
    unit, truncating; durations beyond 63 days give the maximum.
    """
    seconds = max(d.total_seconds(), 0.0)
    if seconds < _MINUTE:
        return int(seconds)
    if seconds < _HOUR:
        return int(seconds / _MINUTE) | 0x40
    if seconds < _DAY:
        return int(seconds / _HOUR) | 0x80
    days = min(int(seconds / _DAY), 63)
    return days | 0xC0