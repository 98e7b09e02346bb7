"""
COGNITIVE CALENDAR - Capacity Sequencer

Left fold of the single-event scorer over a start-ordered event list.
Each step reads the previous scored event (context switch) and the
running capacity (cumulative cost). Strictly sequential; never sorts.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from cognitive_calendar.config import CalendarConfig
from cognitive_calendar.scoring.scorer import score_event
from cognitive_calendar.types import ClassifiedEvent, ScoredEvent

logger = logging.getLogger(__name__)


def sequence_events(
    classified: Sequence[ClassifiedEvent],
    config: CalendarConfig | None = None,
) -> list[ScoredEvent]:
    """
    Score events in order, threading running capacity.

    Args:
        classified: Classified events, already sorted ascending by start.
        config: Baseline tables and capacity budget.

    Returns:
        ScoredEvent per input event; capacity_remaining is the value
        after that event's cost, floored at 0.
    """
    config = config or CalendarConfig()
    digits = config.scoring.rounding_digits

    running = config.capacity.starting_capacity
    previous: Optional[ScoredEvent] = None
    scored: list[ScoredEvent] = []

    for item in classified:
        load = score_event(item.event, item.classification, previous, config)
        running = round(max(0.0, running - load.capacity_cost), digits)

        current = ScoredEvent(
            event=item.event,
            classification=item.classification,
            load=load,
            capacity_remaining=running,
        )
        logger.debug(
            f"{item.event.id}: total_load={load.total_load} "
            f"cost={load.capacity_cost} remaining={running}"
        )
        scored.append(current)
        previous = current

    return scored
