"""Tests for the Gemini categorizer with stubbed transport."""

import asyncio
from contextlib import asynccontextmanager

import aiohttp
import pytest

from conftest import make_event
from cognitive_calendar.classifier.fallback import fallback_classification
from cognitive_calendar.classifier.gemini import (
    ClassifierResponseError,
    GeminiClassifier,
    build_prompt,
    parse_classifier_output,
)
from cognitive_calendar.config import ClassifierSettings
from cognitive_calendar.types import Classification, ClassificationSource

VALID_REPLY = (
    '{"meeting_type": "planning", "role": "contributor", '
    '"emotional_intensity": "feedback", "topic_tags": ["roadmap", "q2"]}'
)


class StubGemini(GeminiClassifier):
    """GeminiClassifier with the HTTP call replaced."""

    def __init__(self, reply="", error=None, delay=0.0, settings=None):
        super().__init__(settings or ClassifierSettings(api_key="test-key"))
        self.reply = reply
        self.error = error
        self.delay = delay
        self.calls = 0
        self.in_flight = 0
        self.max_in_flight = 0

    async def _request(self, session, prompt):
        self.calls += 1
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            if self.error is not None:
                raise self.error
            return self.reply
        finally:
            self.in_flight -= 1

    @asynccontextmanager
    async def open_session(self):
        yield None


class TestParseClassifierOutput:
    def test_valid_json(self):
        result = parse_classifier_output(VALID_REPLY)
        assert result == Classification("planning", "contributor", "feedback", ("roadmap", "q2"))

    def test_code_fenced_json(self):
        result = parse_classifier_output(f"```json\n{VALID_REPLY}\n```")
        assert result is not None
        assert result.meeting_type == "planning"

    def test_missing_scalar_rejected(self):
        assert parse_classifier_output('{"meeting_type": "demo", "role": "listener"}') is None

    def test_empty_scalar_rejected(self):
        text = '{"meeting_type": "", "role": "listener", "emotional_intensity": "routine"}'
        assert parse_classifier_output(text) is None

    def test_non_list_tags_rejected(self):
        text = (
            '{"meeting_type": "demo", "role": "listener", '
            '"emotional_intensity": "routine", "topic_tags": "infra"}'
        )
        assert parse_classifier_output(text) is None

    def test_absent_tags_become_empty(self):
        text = '{"meeting_type": "demo", "role": "listener", "emotional_intensity": "routine"}'
        assert parse_classifier_output(text).topic_tags == ()

    def test_tags_truncated(self):
        text = (
            '{"meeting_type": "demo", "role": "listener", '
            '"emotional_intensity": "routine", "topic_tags": ["a", "b", "c", "d"]}'
        )
        assert parse_classifier_output(text).topic_tags == ("a", "b", "c")

    @pytest.mark.parametrize("text", ["", "not json", "[1, 2]", "null", "{"])
    def test_unparseable_rejected(self, text):
        assert parse_classifier_output(text) is None


class TestGeminiClassifier:
    def test_prompt_contains_event_fields(self):
        event = make_event(attendees=7, user_role="listener")
        prompt = build_prompt(event)
        assert event.title in prompt
        assert "Attendees: 7" in prompt
        assert "User role: listener" in prompt
        assert "design_review" in prompt

    def test_url(self):
        classifier = GeminiClassifier(ClassifierSettings(api_key="k", model="gemini-x"))
        assert classifier.url.endswith("/models/gemini-x:generateContent")

    def test_valid_reply_is_classified(self):
        classifier = StubGemini(reply=VALID_REPLY)
        outcome = asyncio.run(classifier.classify_outcome(make_event()))
        assert outcome.source is ClassificationSource.CLASSIFIED
        assert outcome.classification.meeting_type == "planning"

    def test_not_configured_never_calls_service(self):
        classifier = StubGemini(reply=VALID_REPLY, settings=ClassifierSettings())
        event = make_event(meeting_type="demo")
        outcome = asyncio.run(classifier.classify_outcome(event))
        assert classifier.calls == 0
        assert outcome.source is ClassificationSource.FALLBACK
        assert outcome.classification == fallback_classification(event)

    @pytest.mark.parametrize(
        "error",
        [
            asyncio.TimeoutError(),
            aiohttp.ClientConnectionError("connection refused"),
            ClassifierResponseError("HTTP 500"),
            ValueError("bad body"),
        ],
    )
    def test_failures_fall_back(self, error):
        event = make_event(meeting_type="brainstorming", topic_tags=("ideas",))
        classification = asyncio.run(StubGemini(error=error).classify(event))
        assert classification == fallback_classification(event)

    def test_timeout_reason(self):
        outcome = asyncio.run(
            StubGemini(error=asyncio.TimeoutError()).classify_outcome(make_event())
        )
        assert outcome.reason.startswith("timeout")

    def test_malformed_reply_falls_back(self):
        outcome = asyncio.run(StubGemini(reply="I think it's a standup").classify_outcome(make_event()))
        assert outcome.source is ClassificationSource.FALLBACK
        assert outcome.reason == "malformed classifier output"
        assert outcome.classification.topic_tags == ("general",)

    def test_classify_all_bounded_fan_out(self):
        classifier = StubGemini(reply=VALID_REPLY, delay=0.01)
        events = [make_event(f"e{i}") for i in range(10)]
        classified = asyncio.run(classifier.classify_all(events, max_concurrency=3))
        assert classifier.calls == 10
        assert 1 <= classifier.max_in_flight <= 3
        assert [c.event.id for c in classified] == [e.id for e in events]

    def test_classify_all_mixed_failures(self):
        """One failing call does not affect the others."""

        class Flaky(StubGemini):
            async def _request(self, session, prompt):
                if "Meeting bad" in prompt:
                    raise aiohttp.ClientConnectionError("reset")
                return VALID_REPLY

        events = [make_event("good"), make_event("bad", meeting_type="demo")]
        classified = asyncio.run(Flaky().classify_all(events))
        assert classified[0].classification.meeting_type == "planning"
        assert classified[1].classification.meeting_type == "demo"


class FakeResponse:
    def __init__(self, status, body):
        self.status = status
        self.body = body

    async def json(self, content_type=None):
        return self.body


class FakeSession:
    """Minimal stand-in for aiohttp.ClientSession.post()."""

    def __init__(self, status=200, body=None):
        self.status = status
        self.body = body
        self.requests = []

    @asynccontextmanager
    async def post(self, url, params=None, json=None, timeout=None):
        self.requests.append({"url": url, "params": params, "json": json})
        yield FakeResponse(self.status, self.body)


def _reply(text):
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


class TestGeminiTransport:
    @pytest.fixture
    def classifier(self):
        return GeminiClassifier(ClassifierSettings(api_key="secret", model="gemini-x"))

    @pytest.fixture
    def event(self):
        return make_event("t", meeting_type="demo", topic_tags=("ui",))

    def test_valid_reply(self, classifier, event):
        session = FakeSession(body=_reply(VALID_REPLY))
        outcome = asyncio.run(classifier.classify_outcome(event, session))
        assert outcome.source is ClassificationSource.CLASSIFIED
        assert outcome.classification.topic_tags == ("roadmap", "q2")

    def test_request_shape(self, classifier, event):
        session = FakeSession(body=_reply(VALID_REPLY))
        asyncio.run(classifier.classify(event, session))
        [request] = session.requests
        assert request["url"].endswith("/models/gemini-x:generateContent")
        assert request["params"] == {"key": "secret"}
        assert request["json"]["generationConfig"] == {"temperature": 0.2, "maxOutputTokens": 256}
        assert event.title in request["json"]["contents"][0]["parts"][0]["text"]

    def test_server_error_falls_back(self, classifier, event):
        session = FakeSession(status=500, body={"error": "boom"})
        outcome = asyncio.run(classifier.classify_outcome(event, session))
        assert outcome.source is ClassificationSource.FALLBACK
        assert "HTTP 500" in outcome.reason
        assert outcome.classification == fallback_classification(event)

    def test_missing_candidates_falls_back(self, classifier, event):
        session = FakeSession(body={"promptFeedback": {"blockReason": "SAFETY"}})
        outcome = asyncio.run(classifier.classify_outcome(event, session))
        assert outcome.source is ClassificationSource.FALLBACK
        assert outcome.classification == fallback_classification(event)

    @pytest.mark.parametrize("text", [42, {"meeting_type": "demo"}, ["demo"], True, None])
    def test_non_string_text_falls_back(self, classifier, event, text):
        session = FakeSession(body=_reply(text))
        classification = asyncio.run(classifier.classify(event, session))
        assert classification == fallback_classification(event)

    def test_non_string_text_does_not_break_batch(self, classifier):
        session = FakeSession(body=_reply({"nested": "object"}))

        class SharedSession(GeminiClassifier):
            @asynccontextmanager
            async def open_session(self):
                yield session

        events = [make_event("a"), make_event("b", meeting_type="demo")]
        classified = asyncio.run(SharedSession(classifier.settings).classify_all(events))
        assert [c.classification.meeting_type for c in classified] == ["status", "demo"]

    def test_parse_rejects_non_string(self):
        assert parse_classifier_output(42) is None
        assert parse_classifier_output({"meeting_type": "demo"}) is None
