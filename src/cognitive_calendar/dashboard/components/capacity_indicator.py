"""
COGNITIVE CALENDAR - Capacity Indicator Component

Semicircular gauge showing remaining daily capacity.
"""

import plotly.graph_objects as go
import streamlit as st

from cognitive_calendar.types import DailySummary

RISK_COLORS = {"HIGH RISK": "#ef4444", "OK": "#22c55e"}


def render_capacity_indicator(summary: DailySummary, date_str: str) -> None:
    """Render gauge for remaining capacity with risk label."""
    label = "HIGH RISK" if summary.high_risk else "OK"
    color = RISK_COLORS[label]

    fig = go.Figure(
        go.Indicator(
            mode="gauge+number",
            value=summary.capacity_remaining,
            number={"suffix": " pts", "font": {"size": 28}},
            title={"text": f"Capacity - {date_str}", "font": {"size": 14}},
            gauge={
                "axis": {"range": [0, 100]},
                "bar": {"color": "#1f2937"},
                "bgcolor": "#f3f4f6",
                "steps": [
                    {"range": [0, 20], "color": "#ef4444"},
                    {"range": [20, 50], "color": "#eab308"},
                    {"range": [50, 100], "color": "#22c55e"},
                ],
            },
        )
    )

    fig.update_layout(
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        height=250,
        margin=dict(l=20, r=20, t=50, b=10),
    )

    st.plotly_chart(fig, use_container_width=True)

    st.markdown(
        f"<h2 style='text-align:center; color:{color};'>{label}</h2>"
        f"<p style='text-align:center; color:#6b7280;'>Day load: {summary.total_load:.0%}</p>",
        unsafe_allow_html=True,
    )
