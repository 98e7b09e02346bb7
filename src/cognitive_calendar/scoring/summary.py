"""
COGNITIVE CALENDAR - Daily Summary Aggregator

Reduces a scored sequence to a single risk verdict.
"""

from __future__ import annotations

from typing import Sequence

from cognitive_calendar.config import CalendarConfig
from cognitive_calendar.scoring.scorer import clamp01
from cognitive_calendar.types import DailySummary, ScoredEvent


def summarize(
    scored: Sequence[ScoredEvent],
    config: CalendarConfig | None = None,
) -> DailySummary:
    """
    Build the daily summary.

    total_load is the mean event load (0 for an empty day). Capacity is
    recomputed from the summed costs rather than read off the last event,
    and agrees with it. high_risk when capacity falls below the threshold.
    """
    config = config or CalendarConfig()
    digits = config.scoring.rounding_digits
    starting = config.capacity.starting_capacity

    if not scored:
        return DailySummary(
            total_load=0.0,
            capacity_remaining=starting,
            high_risk=starting < config.capacity.high_risk_threshold,
        )

    mean_load = sum(e.total_load for e in scored) / len(scored)
    total_cost = sum(e.capacity_cost for e in scored)
    capacity = round(max(0.0, starting - total_cost), digits)

    return DailySummary(
        total_load=clamp01(mean_load, digits),
        capacity_remaining=capacity,
        high_risk=capacity < config.capacity.high_risk_threshold,
    )
