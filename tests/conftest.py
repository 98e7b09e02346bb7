"""Shared fixtures for COGNITIVE CALENDAR tests."""

import sys
from datetime import datetime
from pathlib import Path

import pytest

# Ensure cognitive_calendar is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from cognitive_calendar.config import CalendarConfig
from cognitive_calendar.types import Classification, ClassifiedEvent, RawEvent


def at(hour: int, minute: int = 0) -> datetime:
    return datetime(2026, 2, 10, hour, minute)


def make_event(
    event_id: str = "evt",
    start: datetime | None = None,
    end: datetime | None = None,
    attendees: int = 2,
    **hints,
) -> RawEvent:
    return RawEvent(
        id=event_id,
        title=f"Meeting {event_id}",
        start=start,
        end=end,
        attendee_count=attendees,
        **hints,
    )


def make_classified(
    event_id: str,
    start: datetime | None,
    end: datetime | None,
    meeting_type: str = "status",
    role: str = "contributor",
    emotional: str = "routine",
    tags: tuple[str, ...] = ("general",),
    attendees: int = 2,
) -> ClassifiedEvent:
    return ClassifiedEvent(
        event=make_event(event_id, start, end, attendees),
        classification=Classification(
            meeting_type=meeting_type,
            role=role,
            emotional_intensity=emotional,
            topic_tags=tags,
        ),
    )


@pytest.fixture
def config() -> CalendarConfig:
    return CalendarConfig()


@pytest.fixture
def back_to_back_pair() -> list[ClassifiedEvent]:
    """Light standup followed immediately by an unrelated high-stakes decision."""
    return [
        make_classified(
            "standup", at(9), at(10), "standup", "listener", "routine", ("infra",)
        ),
        make_classified(
            "decision", at(10), at(11), "decision", "decision_maker", "conflict", ("product",)
        ),
    ]


@pytest.fixture
def busy_day() -> list[ClassifiedEvent]:
    """Sorted day with overlapping tags, gaps of every size and an evening meeting."""
    return [
        make_classified("a", at(9), at(9, 15), "standup", "listener", "routine", ("infra",), 6),
        make_classified("b", at(9, 25), at(10, 25), "planning", "contributor", "routine", ("infra", "roadmap"), 8),
        make_classified("c", at(10, 45), at(11, 30), "decision", "decision_maker", "external", ("customer",), 4),
        make_classified("d", at(13), at(14, 30), "design_review", "contributor", "feedback", ("billing",), 12),
        make_classified("e", at(15), at(15, 30), "status", "decision_maker", "performance", ("people",), 2),
        make_classified("f", at(18), at(19), "conflict", "decision_maker", "conflict", ("vendor",), 25),
    ]
