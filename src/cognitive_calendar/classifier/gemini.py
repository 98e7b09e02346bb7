"""
COGNITIVE CALENDAR - Gemini Meeting Categorizer

The only module in cognitive_calendar that talks to a language model.
Sends the event text to the Gemini generateContent REST endpoint and
parses a single JSON object out of the reply.

Any failure (no API key, transport error, timeout, non-2xx status,
unparseable or malformed reply) degrades to the deterministic fallback.
"""

from __future__ import annotations

import asyncio
import json
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

import aiohttp

from cognitive_calendar.classifier.adapter import Classifier
from cognitive_calendar.classifier.fallback import MAX_TOPIC_TAGS, fallback_classification
from cognitive_calendar.config import ClassifierSettings
from cognitive_calendar.types import (
    Classification,
    ClassificationOutcome,
    EmotionalIntensity,
    MeetingType,
    RawEvent,
    Role,
)

logger = logging.getLogger(__name__)


def _allowed(enum_cls: Any) -> str:
    return ", ".join(m.value for m in enum_cls)


CLASSIFIER_PROMPT = f"""You are classifying work meetings for cognitive load estimation.

Use ONLY the allowed values.

Meeting details:
Title: {{title}}
Description: {{description}}
Attendees: {{attendee_count}}
User role: {{user_role}}

Return JSON with:
- meeting_type: one of [{_allowed(MeetingType)}]
- role: one of [{_allowed(Role)}]
- emotional_intensity: one of [{_allowed(EmotionalIntensity)}]
- topic_tags: up to {MAX_TOPIC_TAGS} short tags

Respond with JSON only. No explanations."""


class ClassifierResponseError(Exception):
    """Categorizer answered, but not with something usable."""


def build_prompt(event: RawEvent) -> str:
    return CLASSIFIER_PROMPT.format(
        title=event.title,
        description=event.description or "",
        attendee_count=event.attendee_count,
        user_role=event.user_role or "contributor",
    )


def _strip_code_fence(text: str) -> str:
    text = text.strip()
    if text.startswith("```"):
        lines = text.splitlines()[1:]
        if lines and lines[-1].strip().startswith("```"):
            lines = lines[:-1]
        text = "\n".join(lines).strip()
    return text


def parse_classifier_output(text: str) -> Optional[Classification]:
    """
    Parse categorizer reply text into a Classification.

    Accepted only if meeting_type, role and emotional_intensity are all
    present and non-empty, and topic_tags (if present) is a list.

    Returns:
        Classification, or None if the reply has any other shape.
    """
    if not isinstance(text, str):
        return None
    try:
        parsed = json.loads(_strip_code_fence(text))
    except (json.JSONDecodeError, TypeError):
        return None

    if not isinstance(parsed, dict):
        return None

    scalars = [parsed.get(k) for k in ("meeting_type", "role", "emotional_intensity")]
    if not all(isinstance(v, str) and v.strip() for v in scalars):
        return None

    tags = parsed.get("topic_tags")
    if tags is None:
        tags = []
    elif not isinstance(tags, list):
        return None

    meeting_type, role, emotional_intensity = (v.strip() for v in scalars)
    return Classification(
        meeting_type=meeting_type,
        role=role,
        emotional_intensity=emotional_intensity,
        topic_tags=tuple(str(t) for t in tags[:MAX_TOPIC_TAGS]),
    )


def _extract_text(data: Any) -> str:
    """Pull candidates[0].content.parts[0].text out of a generateContent reply."""
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return ""
    return text if isinstance(text, str) else ""


class GeminiClassifier(Classifier):
    """External categorizer backed by Gemini generateContent."""

    name = "gemini"

    def __init__(self, settings: ClassifierSettings | None = None) -> None:
        self.settings = settings or ClassifierSettings()

    @property
    def url(self) -> str:
        endpoint = self.settings.endpoint.rstrip("/")
        return f"{endpoint}/models/{self.settings.model}:generateContent"

    async def classify_outcome(
        self,
        event: RawEvent,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> ClassificationOutcome:
        if not self.settings.enabled:
            return ClassificationOutcome.fallback(
                fallback_classification(event), "classifier not configured"
            )

        try:
            if session is None:
                async with self.open_session() as own_session:
                    text = await self._request(own_session, build_prompt(event))
            else:
                text = await self._request(session, build_prompt(event))
        except asyncio.TimeoutError:
            reason = f"timeout after {self.settings.timeout_seconds}s"
            logger.warning(f"Gemini classification of {event.id!r} failed: {reason}")
            return ClassificationOutcome.fallback(fallback_classification(event), reason)
        except Exception as exc:
            reason = f"{type(exc).__name__}: {exc}"
            logger.warning(f"Gemini classification of {event.id!r} failed: {reason}")
            return ClassificationOutcome.fallback(fallback_classification(event), reason)

        classification = parse_classifier_output(text)
        if classification is None:
            logger.warning(f"Gemini returned unusable output for {event.id!r}: {str(text)[:200]!r}")
            return ClassificationOutcome.fallback(
                fallback_classification(event), "malformed classifier output"
            )
        return ClassificationOutcome.classified(classification)

    async def _request(self, session: aiohttp.ClientSession, prompt: str) -> str:
        """POST one prompt. Raises on transport errors and non-2xx statuses."""
        payload = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": self.settings.temperature,
                "maxOutputTokens": self.settings.max_output_tokens,
            },
        }
        async with session.post(
            self.url,
            params={"key": self.settings.api_key},
            json=payload,
            timeout=aiohttp.ClientTimeout(total=self.settings.timeout_seconds),
        ) as response:
            if not 200 <= response.status < 300:
                raise ClassifierResponseError(f"HTTP {response.status}")
            data = await response.json(content_type=None)
        return _extract_text(data)

    @asynccontextmanager
    async def open_session(self) -> AsyncIterator[Optional[aiohttp.ClientSession]]:
        if not self.settings.enabled:
            yield None
            return
        timeout = aiohttp.ClientTimeout(total=self.settings.timeout_seconds)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            yield session
