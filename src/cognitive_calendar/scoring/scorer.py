"""
COGNITIVE CALENDAR - Single-Event Scorer

Computes one event's load metrics from its classification and the
immediately preceding already-scored event. Pure: no I/O, no state.

mental_load  = (duration / 60) * (0.4*complexity + 0.3*role + 0.3*emotional)
switch_cost  = topic_cost * gap_dampener         (0 for the first event)
total_load   = mental_load + switch_cost
recovery     = total_load * 20 * time_of_day_multiplier
capacity     = total_load * 100

Every normalized value is rounded to 3 decimals, then clamped to [0, 1].
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from cognitive_calendar.config import BaselineTables, CalendarConfig
from cognitive_calendar.types import (
    Classification,
    EventLoad,
    Explanation,
    RawEvent,
    ScoredEvent,
    TimeOfDay,
)


def clamp01(value: float, digits: int = 3) -> float:
    """Round to `digits` decimals, then clamp to [0, 1]."""
    return max(0.0, min(1.0, round(value, digits)))


def duration_minutes(event: RawEvent, floor: float = 15.0) -> float:
    """Scheduled duration, floored. Missing or inverted times give the floor."""
    if event.start is None or event.end is None:
        return floor
    minutes = _minutes_between(event.start, event.end)
    if minutes is None:
        return floor
    return max(floor, minutes)


def _minutes_between(start: datetime, end: datetime) -> Optional[float]:
    try:
        return (end - start).total_seconds() / 60.0
    except TypeError:
        # naive vs aware timestamps cannot be compared
        return None


def gap_minutes(previous: ScoredEvent, event: RawEvent) -> float:
    """Idle minutes between the previous event's end and this start, floored at 0."""
    if previous.end is None or event.start is None:
        return 0.0
    minutes = _minutes_between(previous.end, event.start)
    if minutes is None:
        return 0.0
    return max(0.0, minutes)


def gap_bucket(minutes: float) -> str:
    if minutes <= 5:
        return "0-5"
    if minutes <= 15:
        return "5-15"
    if minutes <= 30:
        return "15-30"
    return "30+"


def attendee_bucket(attendees: int) -> str:
    if attendees <= 2:
        return "1-2"
    if attendees <= 5:
        return "3-5"
    if attendees <= 10:
        return "6-10"
    if attendees <= 20:
        return "11-20"
    return "20+"


def time_of_day(start: Optional[datetime]) -> TimeOfDay:
    """Bucket by the wall-clock hour of start. Missing start counts as morning."""
    if start is None:
        return TimeOfDay.MORNING
    hour = start.hour
    if hour < 12:
        return TimeOfDay.MORNING
    if hour < 15:
        return TimeOfDay.MIDDAY
    if hour < 18:
        return TimeOfDay.AFTERNOON
    return TimeOfDay.EVENING


def topics_overlap(current: Classification, previous: Classification) -> bool:
    return bool(set(current.topic_tags) & set(previous.topic_tags))


def context_switch_cost(
    event: RawEvent,
    classification: Classification,
    previous: Optional[ScoredEvent],
    tables: BaselineTables,
) -> float:
    """
    Penalty for switching from the previous meeting into this one.

    Only related_domain (any tag overlap) and unrelated (no overlap)
    topic costs are selected.
    """
    if previous is None:
        return 0.0

    if topics_overlap(classification, previous.classification):
        topic_cost = tables.topic_change_cost["related_domain"]
    else:
        topic_cost = tables.topic_change_cost["unrelated"]

    dampener = tables.gap_dampener[gap_bucket(gap_minutes(previous, event))]
    return clamp01(topic_cost * dampener)


def score_event(
    event: RawEvent,
    classification: Classification,
    previous: Optional[ScoredEvent],
    config: CalendarConfig,
) -> EventLoad:
    """
    Score one event.

    Args:
        event: Raw calendar event.
        classification: Its classification (from adapter or fallback).
        previous: Immediately preceding scored event, or None for the first.
        config: Baseline tables and scoring constants.

    Returns:
        EventLoad with every metric except the running capacity.
    """
    tables = config.baselines
    consts = config.scoring
    digits = consts.rounding_digits

    duration = duration_minutes(event, consts.min_duration_minutes)

    complexity = tables.meeting_type.get(classification.meeting_type, consts.default_complexity)
    role_load = tables.role.get(classification.role, consts.default_role_load)
    emotional_load = tables.emotional_intensity.get(
        classification.emotional_intensity, consts.default_emotional_load
    )

    mental_load = clamp01(
        (duration / 60.0)
        * (
            consts.complexity_weight * complexity
            + consts.role_weight * role_load
            + consts.emotional_weight * emotional_load
        ),
        digits,
    )

    switch_cost = context_switch_cost(event, classification, previous, tables)
    total_load = clamp01(mental_load + switch_cost, digits)

    bucket = time_of_day(event.start)
    multiplier = tables.time_of_day_multiplier.get(
        bucket.value, consts.default_time_of_day_multiplier
    )
    # minutes, not normalized: rounded for reproducibility but never clamped
    recovery = round(total_load * consts.recovery_base_minutes * multiplier, digits)

    social_load = tables.social_load[attendee_bucket(max(1, event.attendee_count))]

    # total_load has 3 decimals, so one decimal keeps the product exact
    capacity_cost = round(total_load * consts.capacity_points_per_load, 1)

    return EventLoad(
        duration_minutes=duration,
        mental_load=mental_load,
        context_switch_cost=switch_cost,
        total_load=total_load,
        recovery_minutes=recovery,
        time_of_day=bucket,
        social_load=social_load,
        capacity_cost=capacity_cost,
        explanation=Explanation(
            complexity=complexity,
            role_load=role_load,
            emotional_load=emotional_load,
            social_load=social_load,
            mental_load=mental_load,
            context_switch_cost=switch_cost,
            time_of_day_multiplier=multiplier,
            topic_tags=classification.topic_tags,
        ),
    )
