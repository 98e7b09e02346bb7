"""
COGNITIVE CALENDAR - Voice Responder

Rule-based reply to a free-text question about the day.
Keyword match only, first match wins.
"""

from __future__ import annotations

from typing import Optional

from cognitive_calendar.types import DailySummary

MOVE_REPLY = (
    "Yes, moving a high-load meeting later can protect your recovery buffer. "
    "Look for a slot with more capacity."
)
WHY_REPLY = (
    "That meeting is expensive because the mental demand, emotional intensity, "
    "and context switching costs stack up. I can show the exact baseline factors "
    "in the explanation panel."
)
HIGH_RISK_REPLY = (
    "Today is a higher burnout risk. Consider adding recovery buffers "
    "or reducing context switches."
)
DEFAULT_REPLY = (
    "I'm here to help you protect your capacity. Ask about today's load, "
    "moving meetings, or why a meeting is costly."
)


def build_voice_response(query: str, summary: Optional[DailySummary] = None) -> str:
    """Pick a short reply for the query given the last known summary."""
    normalized = query.lower()
    summary = summary or DailySummary()

    if "how heavy" in normalized:
        return (
            f"Your day is at {round(summary.total_load * 100)} percent load. "
            f"You have {round(summary.capacity_remaining)} capacity units left. "
            "Remember, you don't have time, you have capacity."
        )

    if "move" in normalized:
        return MOVE_REPLY

    if "why" in normalized:
        return WHY_REPLY

    if summary.high_risk:
        return HIGH_RISK_REPLY

    return DEFAULT_REPLY
