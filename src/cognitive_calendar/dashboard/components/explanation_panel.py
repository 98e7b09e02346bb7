"""
COGNITIVE CALENDAR - Explanation Panel Component

Displays the factors behind one meeting's load.
"""

import streamlit as st

from cognitive_calendar.explain.generator import ROUTINE_MESSAGE, generate_explanation
from cognitive_calendar.types import ScoredEvent


def render_explanation_panel(scored: ScoredEvent) -> None:
    """Render drivers and the raw factor table for one event."""
    st.markdown(f"### {scored.event.title}")

    drivers = generate_explanation(scored)
    if drivers[0] == ROUTINE_MESSAGE:
        st.success(ROUTINE_MESSAGE)
        drivers = drivers[1:]
    for driver in drivers:
        st.markdown(f"- {driver}")

    st.json(scored.load.explanation.to_dict(), expanded=False)
