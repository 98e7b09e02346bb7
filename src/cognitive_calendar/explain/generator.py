"""
COGNITIVE CALENDAR - Explanation Generator

Produces human-readable driver statements for a scored event.
Drivers are factual statements about which baseline factors dominate.
No advice, no rescheduling suggestions.
"""

from __future__ import annotations

from cognitive_calendar.types import ScoredEvent

HIGH_FACTOR = 0.7
ROUTINE_MESSAGE = "Routine load; no dominant factor"


def generate_explanation(scored: ScoredEvent, high_factor: float = HIGH_FACTOR) -> list[str]:
    """
    Generate the driver list for one scored event.

    Args:
        scored: Event produced by the capacity sequencer.
        high_factor: Factor level at or above which a factor is reported.

    Returns:
        Driver statements, most specific first.
    """
    c = scored.classification
    x = scored.load.explanation
    drivers: list[str] = []

    if x.complexity >= high_factor:
        drivers.append(f"Complex meeting type: {c.meeting_type} ({x.complexity:.1f})")

    if x.role_load >= high_factor:
        drivers.append(f"Demanding role: {c.role} ({x.role_load:.1f})")

    if x.emotional_load >= high_factor:
        drivers.append(
            f"High emotional intensity: {c.emotional_intensity} ({x.emotional_load:.1f})"
        )

    if x.social_load >= high_factor:
        drivers.append(
            f"Large audience: {scored.event.attendee_count} attendees ({x.social_load:.1f})"
        )

    if x.context_switch_cost > 0:
        tags = ", ".join(x.topic_tags) or "untagged"
        drivers.append(f"Context switch into [{tags}]: {x.context_switch_cost:.2f}")

    if scored.load.duration_minutes > 60:
        drivers.append(f"Long meeting: {scored.load.duration_minutes:.0f} min")

    if not drivers:
        drivers.append(ROUTINE_MESSAGE)

    drivers.append(
        f"Recovery {scored.load.recovery_minutes:.0f} min ({scored.load.time_of_day.value}, "
        f"x{x.time_of_day_multiplier:.1f}); capacity left {scored.capacity_remaining:.0f}"
    )
    return drivers
