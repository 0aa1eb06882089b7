from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, List, Optional, Tuple

from .errors import InvalidInputError
from .models import Event
from .stats import average_interval, time_since_last, to_days


@dataclass(frozen=True)
class EventSummary:
    event_id: str
    name: str
    since: Optional[timedelta]
    average: Optional[timedelta]
    occurrence_count: int
    error: Optional[str] = None


def _summary_sort_key(s: EventSummary) -> Tuple[bool, timedelta, str]:
    # Shortest time since last first; rows without a time since go last.
    return (s.since is None, s.since or timedelta(), s.name.lower())


def _summarize_event(e: Event, now: date) -> EventSummary:
    since: Optional[timedelta] = None
    error: Optional[str] = None
    try:
        since = time_since_last(e.occurrences, now)
    except InvalidInputError as exc:
        error = f"{e.name}: {exc}"
    return EventSummary(
        event_id=e.id,
        name=e.name,
        since=since,
        average=average_interval(e.occurrences),
        occurrence_count=len(e.occurrences),
        error=error,
    )


def summarize(events: Iterable[Event], now: date) -> List[EventSummary]:
    """One row per event; a future-dated event carries its error instead of failing the whole list."""

    return sorted((_summarize_event(e, now) for e in events), key=_summary_sort_key)


def format_days(duration: Optional[timedelta], suffix: str = "") -> str:
    """Render a duration as whole days, e.g. ``"1 day ago"`` or ``"7 days avg"``."""

    if duration is None:
        return "-"
    days = int(round(to_days(duration)))
    text = f"{days} day{'' if days == 1 else 's'}"
    return f"{text} {suffix}" if suffix else text
