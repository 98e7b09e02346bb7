"""Tests for the explanation generator."""

from conftest import at, make_classified
from cognitive_calendar.explain.generator import ROUTINE_MESSAGE, generate_explanation
from cognitive_calendar.scoring.sequencer import sequence_events


class TestGenerateExplanation:
    def test_routine_meeting(self, config):
        [scored] = sequence_events(
            [make_classified("s", at(9), at(9, 15), "standup", "listener", "routine")], config
        )
        drivers = generate_explanation(scored)
        assert drivers[0] == ROUTINE_MESSAGE
        assert drivers[-1].startswith("Recovery")

    def test_heavy_meeting_drivers(self, config):
        [scored] = sequence_events(
            [make_classified("d", at(14), at(16), "conflict", "decision_maker", "conflict", attendees=15)],
            config,
        )
        drivers = generate_explanation(scored)
        assert any("Complex meeting type: conflict" in d for d in drivers)
        assert any("Demanding role: decision_maker" in d for d in drivers)
        assert any("High emotional intensity" in d for d in drivers)
        assert any("Large audience: 15 attendees" in d for d in drivers)
        assert any("Long meeting: 120 min" in d for d in drivers)
        assert ROUTINE_MESSAGE not in drivers

    def test_context_switch_driver(self, config, back_to_back_pair):
        _, second = sequence_events(back_to_back_pair, config)
        drivers = generate_explanation(second)
        assert any("Context switch into [product]: 1.00" in d for d in drivers)

    def test_first_event_has_no_switch_driver(self, config, back_to_back_pair):
        first, _ = sequence_events(back_to_back_pair, config)
        assert not any("Context switch" in d for d in generate_explanation(first))

    def test_recovery_line_reports_capacity(self, config, back_to_back_pair):
        first, _ = sequence_events(back_to_back_pair, config)
        assert generate_explanation(first)[-1].endswith("capacity left 77")
