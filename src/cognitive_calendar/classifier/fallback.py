"""
COGNITIVE CALENDAR - Deterministic Fallback Classifier

Pure function of the event's own hint fields. Total: every field is
always populated, whatever the event carries.
"""

from __future__ import annotations

from typing import Optional

import aiohttp

from cognitive_calendar.classifier.adapter import Classifier
from cognitive_calendar.types import (
    Classification,
    ClassificationOutcome,
    EmotionalIntensity,
    MeetingType,
    RawEvent,
    Role,
)

DEFAULT_MEETING_TYPE = MeetingType.STATUS.value
DEFAULT_ROLE = Role.CONTRIBUTOR.value
DEFAULT_EMOTIONAL_INTENSITY = EmotionalIntensity.ROUTINE.value
DEFAULT_TOPIC_TAGS = ("general",)
MAX_TOPIC_TAGS = 3


def fallback_classification(event: RawEvent) -> Classification:
    """
    Derive a classification from the event's pre-set hints.

    Defaults: status / contributor / routine / ("general",).
    """
    tags = event.topic_tags if event.topic_tags is not None else DEFAULT_TOPIC_TAGS
    return Classification(
        meeting_type=event.meeting_type or DEFAULT_MEETING_TYPE,
        role=event.user_role or DEFAULT_ROLE,
        emotional_intensity=event.emotional_intensity or DEFAULT_EMOTIONAL_INTENSITY,
        topic_tags=tuple(tags[:MAX_TOPIC_TAGS]),
    )


class FallbackClassifier(Classifier):
    """Deterministic-only adapter, used when no categorizer is configured."""

    name = "fallback"

    async def classify_outcome(
        self,
        event: RawEvent,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> ClassificationOutcome:
        return ClassificationOutcome.fallback(
            fallback_classification(event), "deterministic-only mode"
        )
