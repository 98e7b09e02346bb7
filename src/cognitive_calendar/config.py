"""
COGNITIVE CALENDAR - Configuration & Baseline Tables

Single source of truth for all scoring constants.
All values are named, documented, and centralized.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

logger = logging.getLogger(__name__)


def _frozen(values: dict[str, float]) -> Mapping[str, float]:
    return MappingProxyType(dict(values))


@dataclass(frozen=True)
class BaselineTables:
    """Categorical factor tables. Values in [0, 1] except time-of-day multipliers (>= 1.0)."""

    meeting_type: Mapping[str, float] = field(
        default_factory=lambda: _frozen(
            {
                "standup": 0.2,
                "status": 0.3,
                "demo": 0.4,
                "planning": 0.6,
                "brainstorming": 0.7,
                "design_review": 0.8,
                "decision": 0.9,
                "conflict": 1.0,
            }
        )
    )
    role: Mapping[str, float] = field(
        default_factory=lambda: _frozen(
            {
                "listener": 0.3,
                "occasional_contributor": 0.5,
                "contributor": 0.8,
                "decision_maker": 1.0,
            }
        )
    )
    emotional_intensity: Mapping[str, float] = field(
        default_factory=lambda: _frozen(
            {
                "routine": 0.2,
                "external": 0.4,
                "feedback": 0.6,
                "performance": 0.8,
                "conflict": 1.0,
            }
        )
    )
    social_load: Mapping[str, float] = field(
        default_factory=lambda: _frozen(
            {"1-2": 0.2, "3-5": 0.4, "6-10": 0.6, "11-20": 0.8, "20+": 1.0}
        )
    )
    # same_project and different_domain are never selected by the binary overlap test
    topic_change_cost: Mapping[str, float] = field(
        default_factory=lambda: _frozen(
            {
                "same_project": 0.0,
                "related_domain": 0.3,
                "different_domain": 0.7,
                "unrelated": 1.0,
            }
        )
    )
    gap_dampener: Mapping[str, float] = field(
        default_factory=lambda: _frozen({"0-5": 1.0, "5-15": 0.8, "15-30": 0.5, "30+": 0.2})
    )
    time_of_day_multiplier: Mapping[str, float] = field(
        default_factory=lambda: _frozen(
            {"morning": 1.0, "midday": 1.1, "afternoon": 1.2, "evening": 1.4}
        )
    )

    def to_dict(self) -> dict:
        """Plain-dict view with the camelCase table names served to clients."""
        return {
            "meetingType": dict(self.meeting_type),
            "roleLoad": dict(self.role),
            "emotionalLoad": dict(self.emotional_intensity),
            "socialLoad": dict(self.social_load),
            "topicChangeCost": dict(self.topic_change_cost),
            "gapTimeDampener": dict(self.gap_dampener),
            "timeOfDayMultiplier": dict(self.time_of_day_multiplier),
        }


@dataclass(frozen=True)
class ScoringConstants:
    """Weights, defaults and limits for the single-event scorer."""

    min_duration_minutes: float = 15.0
    # Lookup defaults for values outside the enumerations
    default_complexity: float = 0.3
    default_role_load: float = 0.5
    default_emotional_load: float = 0.4
    default_time_of_day_multiplier: float = 1.0
    # Mental load weights
    complexity_weight: float = 0.4
    role_weight: float = 0.3
    emotional_weight: float = 0.3
    recovery_base_minutes: float = 20.0
    capacity_points_per_load: float = 100.0
    rounding_digits: int = 3


@dataclass(frozen=True)
class CapacityConfig:
    """Daily capacity budget."""

    starting_capacity: float = 100.0
    high_risk_threshold: float = 20.0  # remaining < 20 is high risk


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid {name}={raw!r}, using {default}")
        return default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid {name}={raw!r}, using {default}")
        return default


@dataclass(frozen=True)
class ClassifierSettings:
    """External categorizer settings. No api_key means deterministic-only operation."""

    api_key: str | None = None
    model: str = "gemini-1.5-flash"
    endpoint: str = "https://generativelanguage.googleapis.com/v1beta"
    timeout_seconds: float = 10.0
    max_concurrency: int = 4
    temperature: float = 0.2
    max_output_tokens: int = 256

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    @classmethod
    def from_env(cls) -> ClassifierSettings:
        defaults = cls()
        return cls(
            api_key=os.environ.get("GEMINI_API_KEY") or None,
            model=os.environ.get("GEMINI_MODEL") or defaults.model,
            endpoint=os.environ.get("GEMINI_ENDPOINT") or defaults.endpoint,
            timeout_seconds=_env_float("CLASSIFIER_TIMEOUT_SECONDS", defaults.timeout_seconds),
            max_concurrency=max(1, _env_int("CLASSIFIER_MAX_CONCURRENCY", defaults.max_concurrency)),
        )


@dataclass(frozen=True)
class VoiceSettings:
    """Text-to-speech settings. Missing credentials skip synthesis."""

    api_key: str | None = None
    voice_id: str | None = None
    endpoint: str = "https://api.elevenlabs.io/v1/text-to-speech"
    model_id: str = "eleven_monolingual_v1"
    stability: float = 0.5
    similarity_boost: float = 0.75
    timeout_seconds: float = 15.0

    @classmethod
    def from_env(cls) -> VoiceSettings:
        return cls(
            api_key=os.environ.get("ELEVENLABS_API_KEY") or None,
            voice_id=os.environ.get("ELEVENLABS_VOICE_ID") or None,
        )


@dataclass(frozen=True)
class CalendarConfig:
    """Master configuration for COGNITIVE CALENDAR."""

    baselines: BaselineTables = field(default_factory=BaselineTables)
    scoring: ScoringConstants = ScoringConstants()
    capacity: CapacityConfig = CapacityConfig()
    classifier: ClassifierSettings = ClassifierSettings()
    voice: VoiceSettings = VoiceSettings()

    @classmethod
    def from_env(cls) -> CalendarConfig:
        """Default tables with classifier and voice settings read from the environment."""
        return cls(classifier=ClassifierSettings.from_env(), voice=VoiceSettings.from_env())
