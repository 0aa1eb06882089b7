"""Interval statistics over an event's occurrences.

All functions are pure. Durations come back as ``timedelta`` so averages keep
sub-day precision; rounding to whole days is left to the display layer.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, List, Optional

from .errors import InvalidInputError


def time_since_last(occurrences: Iterable[date], now: date) -> Optional[timedelta]:
    """Return ``now - max(occurrences)``, or ``None`` when there are none."""

    days = list(occurrences)
    if not days:
        return None

    future = [d for d in days if d > now]
    if future:
        raise InvalidInputError(f"Occurrence {max(future).isoformat()} is after {now.isoformat()}")

    return now - max(days)


def interval_gaps(occurrences: Iterable[date]) -> List[timedelta]:
    ordered = sorted(occurrences)
    return [later - earlier for earlier, later in zip(ordered, ordered[1:])]


def average_interval(occurrences: Iterable[date]) -> Optional[timedelta]:
    """Mean gap between consecutive occurrences, ``None`` below two occurrences."""

    gaps = interval_gaps(occurrences)
    if not gaps:
        return None
    return sum(gaps, timedelta()) / len(gaps)


def to_days(duration: timedelta) -> float:
    return duration.total_seconds() / 86400.0
