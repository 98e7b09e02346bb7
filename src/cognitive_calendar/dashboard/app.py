"""
COGNITIVE CALENDAR Streamlit Dashboard.

Run with: streamlit run src/cognitive_calendar/dashboard/app.py
"""

import sys
from pathlib import Path

# Ensure cognitive_calendar is importable when run via `streamlit run`
_SRC_DIR = str(Path(__file__).resolve().parents[2])
if _SRC_DIR not in sys.path:
    sys.path.insert(0, _SRC_DIR)

import asyncio

import streamlit as st

from cognitive_calendar.config import CalendarConfig
from cognitive_calendar.dashboard.components.capacity_indicator import render_capacity_indicator
from cognitive_calendar.dashboard.components.explanation_panel import render_explanation_panel
from cognitive_calendar.dashboard.components.load_chart import render_load_chart
from cognitive_calendar.dashboard.components.summary_cards import render_summary_cards
from cognitive_calendar.ingest.loader import EventSourceError, load_events
from cognitive_calendar.pipeline.daily import DailyPipeline


def main() -> None:
    st.set_page_config(
        page_title="COGNITIVE CALENDAR",
        layout="wide",
        initial_sidebar_state="expanded",
    )

    st.title("COGNITIVE CALENDAR")
    st.markdown("**You don't have time. You have capacity.**")

    config = CalendarConfig.from_env()

    # Sidebar
    with st.sidebar:
        st.header("About")
        st.markdown(
            """
            Every meeting costs capacity from a daily budget of 100.

            **Factors:**
            - Meeting type complexity
            - Your role
            - Emotional intensity
            - Context switch from the previous meeting
            - Time of day (recovery multiplier)

            **Design:**
            - Deterministic baseline tables
            - Explainable, factor by factor
            - Scores the day as booked; never reschedules
            """
        )
        st.divider()
        events_path = st.text_input("Events file", value="")
        mode = "Gemini" if config.classifier.enabled else "Deterministic fallback"
        st.caption(f"Classifier: {mode}")

    try:
        events = load_events(events_path or None)
    except EventSourceError as exc:
        st.error(str(exc))
        return

    pipeline = DailyPipeline(config)
    schedule = asyncio.run(pipeline.run(events))

    if not schedule.events:
        st.warning("No meetings to score.")
        return

    first = schedule.events[0].start
    date_str = first.date().isoformat() if first else "undated"

    # Row 1: Capacity gauge + summary cards
    col1, col2 = st.columns([1, 2])
    with col1:
        render_capacity_indicator(schedule.summary, date_str)
    with col2:
        st.markdown("### Day at a Glance")
        render_summary_cards(schedule)

    # Row 2: Load chart
    frame = schedule.to_frame()
    st.markdown("### Load by Meeting")
    render_load_chart(frame)

    # Row 3: Explanation for a selected meeting
    titles = [f"{i + 1}. {e.event.title}" for i, e in enumerate(schedule.events)]
    selected = st.selectbox("Explain meeting", range(len(titles)), format_func=lambda i: titles[i])
    render_explanation_panel(schedule.events[selected])

    # Voice-style query
    query = st.text_input("Ask about your day", placeholder="How heavy is my day?")
    if query:
        st.info(pipeline.respond(query, schedule.summary))

    with st.expander("Raw Data"):
        st.dataframe(frame)


if __name__ == "__main__":
    main()
