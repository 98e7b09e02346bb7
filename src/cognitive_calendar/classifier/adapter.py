"""
COGNITIVE CALENDAR - Classification Adapter Contract

classify(event) -> Classification never raises. Variants report an
internal ClassificationOutcome (classified or fallback with a reason)
which is logged and then reduced to the plain Classification.

classify_all() is the only concurrent phase of the system: each event is
classified independently under a bounded semaphore. Results are returned
in input order regardless of completion order.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional, Sequence

import aiohttp

from cognitive_calendar.types import (
    Classification,
    ClassificationOutcome,
    ClassificationSource,
    ClassifiedEvent,
    RawEvent,
)

logger = logging.getLogger(__name__)


class Classifier:
    """Base class for classification adapters."""

    name = "base"

    async def classify_outcome(
        self,
        event: RawEvent,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> ClassificationOutcome:
        raise NotImplementedError

    async def classify(
        self,
        event: RawEvent,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> Classification:
        """Classify one event. Always returns a Classification."""
        outcome = await self.classify_outcome(event, session)
        if outcome.source is ClassificationSource.FALLBACK:
            logger.info(f"Event {event.id!r} classified by fallback: {outcome.reason}")
        else:
            logger.debug(f"Event {event.id!r} classified by {self.name}")
        return outcome.classification

    async def classify_all(
        self,
        events: Sequence[RawEvent],
        max_concurrency: int = 4,
    ) -> list[ClassifiedEvent]:
        """
        Classify every event concurrently with bounded fan-out.

        Args:
            events: Raw events in any order.
            max_concurrency: Maximum in-flight classify calls.

        Returns:
            ClassifiedEvent per input event, same order as the input.
        """
        if not events:
            return []

        semaphore = asyncio.Semaphore(max(1, max_concurrency))

        async with self.open_session() as session:

            async def _one(event: RawEvent) -> ClassifiedEvent:
                async with semaphore:
                    classification = await self.classify(event, session)
                return ClassifiedEvent(event=event, classification=classification)

            return list(await asyncio.gather(*(_one(e) for e in events)))

    @asynccontextmanager
    async def open_session(self) -> AsyncIterator[Optional[aiohttp.ClientSession]]:
        """Shared HTTP session for a batch. Local classifiers need none."""
        yield None
