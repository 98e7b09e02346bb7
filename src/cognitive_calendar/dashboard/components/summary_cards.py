"""
COGNITIVE CALENDAR - Summary Cards Component

Displays headline day metrics in a row of cards.
"""

import streamlit as st

from cognitive_calendar.types import DailySchedule


def _color(value: float, warn: float, alert: float) -> str:
    if value >= alert:
        return "#ef4444"
    if value >= warn:
        return "#eab308"
    return "#22c55e"


def render_summary_cards(schedule: DailySchedule) -> None:
    """Render meetings, day load, recovery needed and peak switch cost cards."""
    events = schedule.events
    recovery = sum(e.load.recovery_minutes for e in events)
    peak_switch = max((e.load.context_switch_cost for e in events), default=0.0)
    meeting_minutes = sum(e.load.duration_minutes for e in events)

    cards = [
        ("Meetings", f"{len(events)}", f"{meeting_minutes:.0f} min booked", "#6b7280"),
        (
            "Day Load",
            f"{schedule.summary.total_load:.0%}",
            "Mean of meeting loads",
            _color(schedule.summary.total_load, 0.5, 0.8),
        ),
        ("Recovery", f"{recovery:.0f} min", "Suggested downtime", _color(recovery, 60, 120)),
        ("Peak Switch", f"{peak_switch:.2f}", "Highest context switch", _color(peak_switch, 0.3, 0.8)),
    ]

    cols = st.columns(len(cards))
    for col, (name, value, note, color) in zip(cols, cards):
        with col:
            st.markdown(
                f"""
                <div style="
                    background: linear-gradient(135deg, {color}20, {color}10);
                    border-left: 4px solid {color};
                    padding: 1rem; border-radius: 0.5rem;
                ">
                    <div style="font-weight:bold; font-size:0.9rem;">{name}</div>
                    <div style="color:{color}; font-size:1.2rem; font-weight:bold;">{value}</div>
                    <div style="font-size:0.75rem; color:#6b7280;">{note}</div>
                </div>
                """,
                unsafe_allow_html=True,
            )
