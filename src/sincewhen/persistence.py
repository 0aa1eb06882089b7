from __future__ import annotations
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Protocol, Sequence
import json
import logging

from .errors import PersistenceError
from .models import Event

log = logging.getLogger(__name__)

FORMAT_VERSION = 1


class EventPersistence(Protocol):
    def load_all(self) -> List[Event]: ...

    def save_all(self, events: Sequence[Event]) -> None: ...


def _event_payload(e: Event) -> Dict[str, Any]:
    return {
        "id": e.id,
        "name": e.name,
        "occurrences": [d.isoformat() for d in e.sorted_occurrences()],
    }


def _parse_item(item: Any, index: int) -> Event:
    if not isinstance(item, dict):
        raise PersistenceError(f"Item {index}: expected an object")

    fields = {key: str(item.get(key) or "").strip() for key in ("id", "name")}
    missing = [key for key, value in fields.items() if not value]
    if missing:
        raise PersistenceError(f"Item {index}: missing required fields {missing}")

    raw_days = item.get("occurrences", [])
    if not isinstance(raw_days, list):
        raise PersistenceError(f"Item {index}: occurrences must be a list")
    try:
        days = frozenset(date.fromisoformat(str(d)) for d in raw_days)
    except ValueError as exc:
        raise PersistenceError(f"Item {index}: malformed occurrence date") from exc

    return Event(id=fields["id"], name=fields["name"], occurrences=days)


class JsonEventPersistence:
    """Stores all events in a single JSON document."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path).expanduser()

    def load_all(self) -> List[Event]:
        if not self.path.exists():
            log.info("No data file at %s; starting empty.", self.path)
            return []
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise PersistenceError(f"Could not read {self.path}: {exc}") from exc

        if not isinstance(data, dict) or not isinstance(data.get("events"), list):
            raise PersistenceError(f"{self.path}: expected an object with an 'events' list")

        events: List[Event] = []
        seen = set()
        for i, item in enumerate(data["events"], start=1):
            event = _parse_item(item, i)
            if event.id in seen:
                raise PersistenceError(f"Item {i}: duplicate id {event.id!r}")
            seen.add(event.id)
            events.append(event)
        return events

    def save_all(self, events: Sequence[Event]) -> None:
        payload = {
            "version": FORMAT_VERSION,
            "events": [_event_payload(e) for e in events],
        }
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
            tmp.replace(self.path)
        except OSError as exc:
            if tmp.exists():
                tmp.unlink()
            raise PersistenceError(f"Could not write {self.path}: {exc}") from exc
