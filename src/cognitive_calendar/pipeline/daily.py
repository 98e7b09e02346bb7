"""
COGNITIVE CALENDAR - Daily Pipeline Orchestration

Flow: load -> classify (concurrent) -> sort -> sequence -> summarize

The pipeline.run() method is the single async entry point.
All processing after classification is synchronous.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Optional, Sequence

from cognitive_calendar.classifier.adapter import Classifier
from cognitive_calendar.classifier.fallback import FallbackClassifier
from cognitive_calendar.classifier.gemini import GeminiClassifier
from cognitive_calendar.config import CalendarConfig
from cognitive_calendar.ingest.loader import load_events
from cognitive_calendar.scoring.sequencer import sequence_events
from cognitive_calendar.scoring.summary import summarize
from cognitive_calendar.types import ClassifiedEvent, DailySchedule, DailySummary, RawEvent
from cognitive_calendar.voice.responder import build_voice_response

logger = logging.getLogger(__name__)


def default_classifier(config: CalendarConfig) -> Classifier:
    """Gemini when an API key is configured, deterministic fallback otherwise."""
    if config.classifier.enabled:
        return GeminiClassifier(config.classifier)
    logger.info("No classifier API key configured; using deterministic fallback")
    return FallbackClassifier()


def _start_key(item: ClassifiedEvent) -> tuple[int, float]:
    start: Optional[datetime] = item.event.start
    if start is None:
        return (1, 0.0)
    # naive timestamps are read as local time
    return (0, start.timestamp())


def sort_by_start(classified: Sequence[ClassifiedEvent]) -> list[ClassifiedEvent]:
    """Stable sort ascending by start; events without a start go last."""
    return sorted(classified, key=_start_key)


class DailyPipeline:
    """
    COGNITIVE CALENDAR daily pipeline.

    Orchestrates: classify -> sort -> sequence -> summarize
    """

    def __init__(
        self,
        config: CalendarConfig | None = None,
        classifier: Classifier | None = None,
    ) -> None:
        self.config = config or CalendarConfig()
        self.classifier = classifier or default_classifier(self.config)

    async def run(self, events: Sequence[RawEvent]) -> DailySchedule:
        """
        Score a day of raw events.

        This is the only async entry point. Classifies every event
        concurrently, then hands off to synchronous processing.

        Args:
            events: Raw events in any order.

        Returns:
            DailySchedule with events sorted by start and the summary.
        """
        logger.info(f"COGNITIVE CALENDAR pipeline starting for {len(events)} events")

        # Step 1: Classification (async, bounded fan-out)
        classified = await self.classifier.classify_all(
            events, max_concurrency=self.config.classifier.max_concurrency
        )
        logger.info("Classification complete")

        # Steps 2-4: Synchronous processing
        schedule = self.process(classified)

        logger.info(
            f"COGNITIVE CALENDAR: load={schedule.summary.total_load} "
            f"capacity={schedule.summary.capacity_remaining} "
            f"high_risk={schedule.summary.high_risk}"
        )
        return schedule

    def process(self, classified: Sequence[ClassifiedEvent]) -> DailySchedule:
        """
        Synchronous processing: sort -> sequence -> summarize.

        Can be called independently for testing without async/API calls.

        Args:
            classified: Classified events in any order.

        Returns:
            DailySchedule.
        """
        # Step 2: Order by start time
        ordered = sort_by_start(classified)

        # Step 3: Sequential capacity fold
        scored = sequence_events(ordered, self.config)

        # Step 4: Daily summary
        summary = summarize(scored, self.config)

        return DailySchedule(events=scored, summary=summary)

    def respond(self, query: str, summary: DailySummary | None = None) -> str:
        """Text reply for a voice query against the last known summary."""
        return build_voice_response(query, summary)


def run_sync(events: Sequence[RawEvent] | None = None) -> DailySchedule:
    """Synchronous convenience wrapper for CLI usage. Defaults to the sample day."""
    pipeline = DailyPipeline(CalendarConfig.from_env())
    return asyncio.run(pipeline.run(events if events is not None else load_events()))
