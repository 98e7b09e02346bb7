"""
COGNITIVE CALENDAR - Event Loader

Reads raw calendar events from a JSON file. Stand-in for a live
calendar source. The only caller-visible failure of the system is
not being able to read this list at all.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from cognitive_calendar.types import RawEvent

logger = logging.getLogger(__name__)

SAMPLE_EVENTS_PATH = Path(__file__).resolve().parents[3] / "data" / "sample_events.json"


class EventSourceError(Exception):
    """Raw event list could not be read."""


def parse_events(payload: object) -> list[RawEvent]:
    """
    Build RawEvents from a decoded JSON payload.

    Accepts a list of event records or {"events": [...]}.
    Non-object records are skipped with a warning.
    """
    if isinstance(payload, dict):
        payload = payload.get("events", [])
    if not isinstance(payload, list):
        raise EventSourceError(f"Expected a list of events, got {type(payload).__name__}")

    events = []
    for i, record in enumerate(payload):
        if not isinstance(record, dict):
            logger.warning(f"Skipping event #{i}: not an object")
            continue
        event = RawEvent.from_dict(record)
        if event.start is None or event.end is None:
            logger.warning(f"Event {event.id!r} has missing or invalid start/end")
        events.append(event)
    return events


def load_events(path: Path | str | None = None) -> list[RawEvent]:
    """Load events from a JSON file (default: bundled sample day)."""
    path = Path(path) if path else SAMPLE_EVENTS_PATH
    try:
        payload = json.loads(path.read_text())
    except FileNotFoundError as exc:
        raise EventSourceError(f"Event file not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise EventSourceError(f"Invalid JSON in {path}: {exc}") from exc

    events = parse_events(payload)
    logger.info(f"Loaded {len(events)} events from {path}")
    return events
