"""
COGNITIVE CALENDAR - Meeting Cognitive Load Engine

Answers one question for a fixed day of meetings:
"How much cognitive capacity does this schedule cost, and where?"

Design Principles:
- Every number traces back to a named baseline factor
- Deterministic scoring; the categorizer is the only non-deterministic input
- Categorizer failure always degrades to a deterministic fallback
- Scoring is a strictly sequential fold (context switch, running capacity)
- Scores a given schedule; never reorders or suggests moves
"""

__version__ = "1.0.0"
