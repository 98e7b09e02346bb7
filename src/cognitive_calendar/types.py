"""
COGNITIVE CALENDAR - Core Type Definitions

All dataclasses and enums used across the system.
No scoring logic, only data structures and their serialization.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional

import pandas as pd


class MeetingType(Enum):
    """Allowed meeting types, ordered by complexity."""

    STANDUP = "standup"
    STATUS = "status"
    DEMO = "demo"
    PLANNING = "planning"
    BRAINSTORMING = "brainstorming"
    DESIGN_REVIEW = "design_review"
    DECISION = "decision"
    CONFLICT = "conflict"


class Role(Enum):
    """User participation role."""

    LISTENER = "listener"
    OCCASIONAL_CONTRIBUTOR = "occasional_contributor"
    CONTRIBUTOR = "contributor"
    DECISION_MAKER = "decision_maker"


class EmotionalIntensity(Enum):
    """Emotional intensity of a meeting."""

    ROUTINE = "routine"
    EXTERNAL = "external"
    FEEDBACK = "feedback"
    PERFORMANCE = "performance"
    CONFLICT = "conflict"


class TimeOfDay(Enum):
    MORNING = "morning"
    MIDDAY = "midday"
    AFTERNOON = "afternoon"
    EVENING = "evening"


class ClassificationSource(Enum):
    CLASSIFIED = "classified"
    FALLBACK = "fallback"


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp. Returns None for missing or unparseable input."""
    if value is None or isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def _hint(value: Any) -> Optional[str]:
    """Categorical hints are plain strings; anything else is treated as absent."""
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _tags(value: Any) -> Optional[tuple[str, ...]]:
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        return tuple(str(v) for v in value)
    return (str(value),)


@dataclass(frozen=True)
class RawEvent:
    """Calendar event as read from the source. Immutable."""

    id: str
    title: str
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    description: Optional[str] = None
    attendee_count: int = 1
    user_role: Optional[str] = None
    # Pre-set hints, used only by the fallback classifier
    meeting_type: Optional[str] = None
    emotional_intensity: Optional[str] = None
    topic_tags: Optional[tuple[str, ...]] = None

    @classmethod
    def from_dict(cls, data: dict) -> RawEvent:
        """Build from a calendar JSON record (camelCase keys, snake_case accepted)."""

        def pick(camel: str, snake: str) -> Any:
            return data.get(camel, data.get(snake))

        attendees = pick("attendeeCount", "attendee_count")
        try:
            attendee_count = int(attendees) if attendees is not None else 1
        except (TypeError, ValueError):
            attendee_count = 1

        return cls(
            id=str(data.get("id", "")),
            title=str(data.get("title", "")),
            start=parse_timestamp(data.get("start")),
            end=parse_timestamp(data.get("end")),
            description=data.get("description"),
            attendee_count=attendee_count,
            user_role=_hint(pick("userRole", "user_role")),
            meeting_type=_hint(pick("meetingType", "meeting_type")),
            emotional_intensity=_hint(pick("emotionalIntensity", "emotional_intensity")),
            topic_tags=_tags(pick("topicTags", "topic_tags")),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "start": self.start.isoformat() if self.start else None,
            "end": self.end.isoformat() if self.end else None,
            "attendeeCount": self.attendee_count,
            "userRole": self.user_role,
        }


@dataclass(frozen=True)
class Classification:
    """Categorical description of one event. Never mutated after creation."""

    meeting_type: str
    role: str
    emotional_intensity: str
    topic_tags: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "meeting_type": self.meeting_type,
            "role": self.role,
            "emotional_intensity": self.emotional_intensity,
            "topic_tags": list(self.topic_tags),
        }


@dataclass(frozen=True)
class ClassificationOutcome:
    """Internal adapter result: Classified(c) or Fallback(c, reason)."""

    classification: Classification
    source: ClassificationSource
    reason: Optional[str] = None

    @classmethod
    def classified(cls, classification: Classification) -> ClassificationOutcome:
        return cls(classification, ClassificationSource.CLASSIFIED)

    @classmethod
    def fallback(cls, classification: Classification, reason: str) -> ClassificationOutcome:
        return cls(classification, ClassificationSource.FALLBACK, reason)


@dataclass(frozen=True)
class ClassifiedEvent:
    """Raw event paired with its classification, ready for scoring."""

    event: RawEvent
    classification: Classification


@dataclass(frozen=True)
class Explanation:
    """Every factor used to score an event."""

    complexity: float
    role_load: float
    emotional_load: float
    social_load: float
    mental_load: float
    context_switch_cost: float
    time_of_day_multiplier: float
    topic_tags: tuple[str, ...]

    def to_dict(self) -> dict:
        return {
            "complexity": self.complexity,
            "roleLoad": self.role_load,
            "emotionalLoad": self.emotional_load,
            "socialLoad": self.social_load,
            "mentalLoad": self.mental_load,
            "contextSwitchCost": self.context_switch_cost,
            "timeOfDayMultiplier": self.time_of_day_multiplier,
            "topicTags": list(self.topic_tags),
        }


@dataclass(frozen=True)
class EventLoad:
    """Single-event scorer output. Excludes the running capacity."""

    duration_minutes: float
    mental_load: float
    context_switch_cost: float
    total_load: float
    recovery_minutes: float
    time_of_day: TimeOfDay
    social_load: float
    capacity_cost: float
    explanation: Explanation


@dataclass(frozen=True)
class ScoredEvent:
    """Fully scored event, created once by the capacity sequencer."""

    event: RawEvent
    classification: Classification
    load: EventLoad
    capacity_remaining: float

    # Flat accessors for the commonly read metrics
    @property
    def start(self) -> Optional[datetime]:
        return self.event.start

    @property
    def end(self) -> Optional[datetime]:
        return self.event.end

    @property
    def total_load(self) -> float:
        return self.load.total_load

    @property
    def capacity_cost(self) -> float:
        return self.load.capacity_cost

    def to_dict(self) -> dict:
        """Serialize to the event payload read by the presentation layer."""
        load = self.load
        return {
            **self.event.to_dict(),
            "classification": self.classification.to_dict(),
            "durationMinutes": load.duration_minutes,
            "mentalLoad": load.mental_load,
            "contextSwitchCost": load.context_switch_cost,
            "totalLoad": load.total_load,
            "recoveryMinutes": load.recovery_minutes,
            "timeOfDay": load.time_of_day.value,
            "socialLoad": load.social_load,
            "capacityCost": load.capacity_cost,
            "capacityRemaining": self.capacity_remaining,
            "explanation": load.explanation.to_dict(),
        }


@dataclass(frozen=True)
class DailySummary:
    """Daily risk verdict."""

    total_load: float = 0.0
    capacity_remaining: float = 100.0
    high_risk: bool = False

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> DailySummary:
        """Lenient parse of a client-supplied summary; missing keys take empty-day values."""
        data = data or {}
        total_load = data.get("totalLoad")
        capacity = data.get("capacityRemaining")
        return cls(
            total_load=float(total_load) if total_load is not None else 0.0,
            capacity_remaining=float(capacity) if capacity is not None else 100.0,
            high_risk=bool(data.get("highRisk", False)),
        )

    def to_dict(self) -> dict:
        return {
            "totalLoad": self.total_load,
            "capacityRemaining": self.capacity_remaining,
            "highRisk": self.high_risk,
        }


@dataclass(frozen=True)
class DailySchedule:
    """Scored events (sorted by start) plus the daily summary."""

    events: list[ScoredEvent] = field(default_factory=list)
    summary: DailySummary = field(default_factory=DailySummary)

    def to_dict(self) -> dict:
        return {
            "events": [e.to_dict() for e in self.events],
            "summary": self.summary.to_dict(),
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    def to_frame(self) -> pd.DataFrame:
        """One row per scored event."""
        rows = [
            {
                "id": e.event.id,
                "title": e.event.title,
                "start": e.start,
                "end": e.end,
                "meeting_type": e.classification.meeting_type,
                "role": e.classification.role,
                "emotional_intensity": e.classification.emotional_intensity,
                "topic_tags": ", ".join(e.classification.topic_tags),
                "duration_minutes": e.load.duration_minutes,
                "mental_load": e.load.mental_load,
                "context_switch_cost": e.load.context_switch_cost,
                "total_load": e.load.total_load,
                "recovery_minutes": e.load.recovery_minutes,
                "time_of_day": e.load.time_of_day.value,
                "social_load": e.load.social_load,
                "capacity_cost": e.load.capacity_cost,
                "capacity_remaining": e.capacity_remaining,
            }
            for e in self.events
        ]
        return pd.DataFrame(rows, columns=_FRAME_COLUMNS)


_FRAME_COLUMNS = [
    "id",
    "title",
    "start",
    "end",
    "meeting_type",
    "role",
    "emotional_intensity",
    "topic_tags",
    "duration_minutes",
    "mental_load",
    "context_switch_cost",
    "total_load",
    "recovery_minutes",
    "time_of_day",
    "social_load",
    "capacity_cost",
    "capacity_remaining",
]
