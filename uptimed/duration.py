# File: uptimed/duration.py
"""uptimed.duration: compact human durations such as ``"30s"``, ``"15m"``, ``"2h"``.

Grammar: ``^\\d+[smh]$``. The codec only deals with whole seconds.

``format_duration`` is canonical rather than bijective: ``"120s"`` parses to
two minutes and is formatted back as ``"2m"``.
"""
from __future__ import annotations

from datetime import timedelta
from typing import Final, Mapping

__all__ = ["InvalidDuration", "parse_duration", "format_duration"]

_UNITS: Final[Mapping[str, int]] = {"s": 1, "m": 60, "h": 3600}


class InvalidDuration(ValueError):
    """Raised for a malformed duration string or an unrepresentable duration."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Invalid duration format: {value!r}")
        self.value = value


def parse_duration(s: str) -> timedelta:
    """Parse ``"<n><unit>"`` into a :class:`~datetime.timedelta`.

    Raises :class:`InvalidDuration` if the string is empty, the unit suffix is
    missing or unknown, or the numeric prefix is absent, non-numeric or negative.
    """
    if not s:
        raise InvalidDuration(s)
    multiplier = _UNITS.get(s[-1])
    if multiplier is None:
        raise InvalidDuration(s)
    number = s[:-1]
    # str.isdigit() accepts superscripts and other non-ASCII digits
    if not number or not (number.isascii() and number.isdigit()):
        raise InvalidDuration(s)
    try:
        return timedelta(seconds=int(number) * multiplier)
    except OverflowError as exc:
        raise InvalidDuration(s) from exc


def format_duration(d: timedelta) -> str:
    """Render *d* using the largest unit that divides it evenly (h, then m, then s)."""
    if d < timedelta(0) or d.microseconds:
        raise InvalidDuration(d)
    seconds = int(d.total_seconds())
    if seconds % 3600 == 0:
        return f"{seconds // 3600}h"
    if seconds % 60 == 0:
        return f"{seconds // 60}m"
    return f"{seconds}s"
