from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from datetime import date, datetime
from typing import Dict, List, Optional

from .errors import NotFoundError, ValidationError
from .models import Event
from .persistence import EventPersistence

log = logging.getLogger(__name__)


def _as_day(value: date) -> date:
    # Occurrences are calendar days; drop any time-of-day part.
    if isinstance(value, datetime):
        return value.date()
    return value


def _clean_name(name: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("Event name is required.")
    return cleaned


def _normalize_name(name: str) -> str:
    return " ".join(name.strip().lower().split())


class EventStore:
    """Authoritative collection of events, keyed by id in insertion order.

    Every effective mutation is applied to a copy, handed to the persistence
    collaborator and only then committed, so a failed save leaves the store
    as it was.
    """

    def __init__(self, persistence: EventPersistence) -> None:
        self.persistence = persistence
        self._events: Dict[str, Event] = {e.id: e for e in persistence.load_all()}
        log.info("Loaded %d events.", len(self._events))

    def list_events(self) -> List[Event]:
        return list(self._events.values())

    def get_event(self, event_id: str) -> Event:
        try:
            return self._events[event_id]
        except KeyError:
            raise NotFoundError(f"No event with id {event_id!r}.") from None

    def find_by_name(self, name: str) -> List[Event]:
        wanted = _normalize_name(name)
        return [e for e in self._events.values() if _normalize_name(e.name) == wanted]

    def add_event(self, name: str, initial_occurrence: Optional[date] = None) -> str:
        name = _clean_name(name)
        occurrences = frozenset() if initial_occurrence is None else frozenset({_as_day(initial_occurrence)})
        event = Event(id=uuid.uuid4().hex, name=name, occurrences=occurrences)

        events = dict(self._events)
        events[event.id] = event
        self._commit(events)
        log.info("Event added: %r (%s)", name, event.id)
        return event.id

    def delete_event(self, event_id: str) -> None:
        event = self.get_event(event_id)
        events = dict(self._events)
        del events[event_id]
        self._commit(events)
        log.info("Event deleted: %r with %d occurrences", event.name, len(event.occurrences))

    def rename_event(self, event_id: str, new_name: str) -> None:
        new_name = _clean_name(new_name)
        event = self.get_event(event_id)
        self._replace(replace(event, name=new_name))
        log.info("Event renamed: %r -> %r", event.name, new_name)

    def add_occurrence(self, event_id: str, day: date) -> None:
        event = self.get_event(event_id)
        day = _as_day(day)
        if day in event.occurrences:
            log.info("Occurrence already recorded: %r on %s", event.name, day.isoformat())
            return
        self._replace(replace(event, occurrences=event.occurrences | {day}))
        log.info("Occurrence added: %r on %s", event.name, day.isoformat())

    def remove_occurrence(self, event_id: str, day: date) -> None:
        event = self.get_event(event_id)
        day = _as_day(day)
        if day not in event.occurrences:
            raise NotFoundError(f"{event.name!r} has no occurrence on {day.isoformat()}.")
        self._replace(replace(event, occurrences=event.occurrences - {day}))
        log.info("Occurrence removed: %r on %s", event.name, day.isoformat())

    def events_by_month(self, year: int, month: int) -> Dict[int, List[str]]:
        """Map day of month to the names of events that occurred that day."""

        if not 1 <= month <= 12:
            raise ValidationError(f"Month must be between 1 and 12, got {month}.")

        by_day: Dict[int, List[str]] = {}
        for event in self._events.values():
            for day in event.sorted_occurrences():
                if day.year == year and day.month == month:
                    by_day.setdefault(day.day, []).append(event.name)
        return dict(sorted(by_day.items()))

    def _replace(self, event: Event) -> None:
        events = dict(self._events)
        events[event.id] = event
        self._commit(events)

    def _commit(self, events: Dict[str, Event]) -> None:
        self.persistence.save_all(list(events.values()))
        self._events = events
