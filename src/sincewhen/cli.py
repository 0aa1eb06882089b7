from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from datetime import date, datetime
from typing import List, Optional

from dotenv import load_dotenv

from .config import load_config
from .errors import NotFoundError, SinceWhenError, ValidationError
from .persistence import JsonEventPersistence
from .report import format_days, summarize
from .stats import to_days
from .store import EventStore

CONFIG_ENV_VAR = "SINCEWHEN_CONFIG"


def _parse_day(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid date {value!r}, expected YYYY-MM-DD") from exc


def _resolve_event_id(store: EventStore, ref: str) -> str:
    if ref in {e.id for e in store.list_events()}:
        return ref
    matches = store.find_by_name(ref)
    if not matches:
        raise NotFoundError(f"No event matching {ref!r}.")
    if len(matches) > 1:
        raise ValidationError(f"{ref!r} matches {len(matches)} events; use the event id.")
    return matches[0].id


def _check_not_future(day: Optional[date], today: date) -> Optional[date]:
    if day is not None and day > today:
        raise ValidationError(f"{day.isoformat()} is in the future (today is {today.isoformat()}).")
    return day


def _print_events(store: EventStore, today: date, as_json: bool) -> List[str]:
    """Print the event list and return the per-row errors."""

    summaries = summarize(store.list_events(), today)
    errors = [s.error for s in summaries if s.error]
    if as_json:
        payload = [
            {
                "id": s.event_id,
                "name": s.name,
                "days_since": to_days(s.since) if s.since is not None else None,
                "average_days": to_days(s.average) if s.average is not None else None,
                "occurrences": s.occurrence_count,
                "error": s.error,
            }
            for s in summaries
        ]
        print(json.dumps(payload, indent=2, ensure_ascii=False))
        return errors

    if not summaries:
        print("No events yet.")
        return errors

    width = max(len(s.name) for s in summaries)
    for s in summaries:
        print(f"{s.name:<{width}}  {format_days(s.since, 'ago'):>14}  {format_days(s.average, 'avg'):>14}  {s.event_id}")
    return errors


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="sincewhen", description="Track how long since recurring events last happened")
    ap.add_argument("--config", help=f"YAML config file (default: ${CONFIG_ENV_VAR})")
    ap.add_argument("--data", help="Override the JSON data file from the config")
    ap.add_argument("--json", action="store_true", help="Print machine-readable output")
    sub = ap.add_subparsers(dest="command", required=True)

    sub.add_parser("list")

    add = sub.add_parser("add")
    add.add_argument("name")
    add.add_argument("--date", type=_parse_day, help="Initial occurrence (YYYY-MM-DD)")

    rename = sub.add_parser("rename")
    rename.add_argument("event")
    rename.add_argument("name")

    delete = sub.add_parser("delete")
    delete.add_argument("event")

    occur = sub.add_parser("occur")
    occur.add_argument("event")
    occur.add_argument("--date", type=_parse_day, help="Day it happened (default: today)")

    unoccur = sub.add_parser("unoccur")
    unoccur.add_argument("event")
    unoccur.add_argument("date", type=_parse_day)

    month = sub.add_parser("month")
    month.add_argument("year", type=int)
    month.add_argument("month", type=int)

    return ap


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = _build_parser().parse_args(argv)

    try:
        cfg = load_config(args.config or os.environ.get(CONFIG_ENV_VAR))
        logging.basicConfig(level=cfg.log_level, format="%(levelname)s %(name)s: %(message)s")
        today = datetime.now(tz=cfg.tz).date()
        store = EventStore(JsonEventPersistence(args.data or cfg.data_path))

        if args.command == "list":
            row_errors = _print_events(store, today, args.json)
            for message in row_errors:
                print(f"error: {message}", file=sys.stderr)
            if row_errors:
                return 1
        elif args.command == "add":
            event_id = store.add_event(args.name, _check_not_future(args.date, today))
            print(json.dumps({"id": event_id}) if args.json else event_id)
        elif args.command == "rename":
            store.rename_event(_resolve_event_id(store, args.event), args.name)
        elif args.command == "delete":
            store.delete_event(_resolve_event_id(store, args.event))
        elif args.command == "occur":
            store.add_occurrence(_resolve_event_id(store, args.event), _check_not_future(args.date, today) or today)
        elif args.command == "unoccur":
            store.remove_occurrence(_resolve_event_id(store, args.event), args.date)
        elif args.command == "month":
            by_day = store.events_by_month(args.year, args.month)
            if args.json:
                print(json.dumps({str(day): names for day, names in by_day.items()}, indent=2, ensure_ascii=False))
            else:
                for day, names in by_day.items():
                    print(f"{day:>2}: {', '.join(names)}")
    except SinceWhenError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
