from datetime import date, timedelta

from sincewhen.models import Event
from sincewhen.report import format_days, summarize


def _event(event_id: str, name: str, *days: date) -> Event:
    return Event(id=event_id, name=name, occurrences=frozenset(days))


def test_summarize_sorts_by_days_since_with_empty_events_last():
    now = date(2023, 4, 20)
    events = [
        _event("1", "Pooper empty", date(2023, 4, 1), date(2023, 4, 11)),
        _event("2", "Never done"),
        _event("3", "Propane tank full", date(2023, 4, 12), date(2023, 4, 18)),
    ]

    rows = summarize(events, now)

    assert [r.name for r in rows] == ["Propane tank full", "Pooper empty", "Never done"]
    assert rows[0].since == timedelta(days=2)
    assert rows[0].average == timedelta(days=6)
    assert rows[1].occurrence_count == 2
    assert rows[2].since is None and rows[2].average is None


def test_format_days_pluralizes_and_rounds():
    assert format_days(timedelta(days=1), "ago") == "1 day ago"
    assert format_days(timedelta(days=5), "ago") == "5 days ago"
    assert format_days(timedelta(days=6.6), "avg") == "7 days avg"
    assert format_days(timedelta(0)) == "0 days"
    assert format_days(None, "avg") == "-"


def test_summarize_reports_future_dated_event_on_its_row():
    now = date(2024, 1, 20)
    events = [
        _event("1", "Water plants", date(2024, 1, 1), date(2024, 1, 8), date(2024, 1, 15)),
        _event("2", "Dentist", date(2099, 1, 1)),
    ]

    rows = summarize(events, now)

    assert [r.name for r in rows] == ["Water plants", "Dentist"]
    assert rows[0].since == timedelta(days=5) and rows[0].error is None
    assert rows[1].since is None
    assert "Dentist" in rows[1].error and "2099-01-01" in rows[1].error
