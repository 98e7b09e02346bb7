"""
COGNITIVE CALENDAR - Load Chart Component

Per-meeting load bars with the running capacity line.
"""

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

TIME_OF_DAY_COLORS = {
    "morning": "#38bdf8",
    "midday": "#a78bfa",
    "afternoon": "#f59e0b",
    "evening": "#ef4444",
}


def render_load_chart(frame: pd.DataFrame) -> None:
    """Render mental load, switch cost and remaining capacity per meeting."""
    labels = frame["title"]
    fig = go.Figure()

    fig.add_trace(
        go.Bar(
            x=labels,
            y=frame["mental_load"],
            name="Mental load",
            marker=dict(color=[TIME_OF_DAY_COLORS.get(t, "#6b7280") for t in frame["time_of_day"]]),
        )
    )
    fig.add_trace(
        go.Bar(
            x=labels,
            y=frame["context_switch_cost"],
            name="Context switch",
            marker=dict(color="#9ca3af"),
        )
    )
    fig.add_trace(
        go.Scatter(
            x=labels,
            y=frame["capacity_remaining"],
            name="Capacity remaining",
            mode="lines+markers",
            yaxis="y2",
            line=dict(color="#1f2937", width=3),
        )
    )

    fig.update_layout(
        barmode="stack",
        yaxis=dict(title="Load", range=[0, 2]),
        yaxis2=dict(title="Capacity", range=[0, 100], overlaying="y", side="right"),
        height=350,
        margin=dict(l=0, r=0, t=30, b=0),
        showlegend=True,
    )

    st.plotly_chart(fig, use_container_width=True)
