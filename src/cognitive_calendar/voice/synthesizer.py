"""
COGNITIVE CALENDAR - Text-to-Speech Synthesizer

Thin ElevenLabs wrapper. Never raises: missing credentials give a
"skipped" result, any request failure gives an "error" result.
"""

from __future__ import annotations

import asyncio
import base64
import logging
from dataclasses import dataclass
from typing import Optional

import aiohttp

from cognitive_calendar.config import VoiceSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SynthesisResult:
    status: str  # ok / skipped / error
    audio_base64: Optional[str] = None
    reason: Optional[str] = None

    def to_dict(self) -> dict:
        if self.status == "ok":
            return {"status": self.status, "audioBase64": self.audio_base64}
        return {"status": self.status, "reason": self.reason}


class VoiceSynthesizer:
    """Async ElevenLabs text-to-speech client."""

    def __init__(self, settings: VoiceSettings | None = None) -> None:
        self.settings = settings or VoiceSettings()

    async def synthesize(self, text: str) -> SynthesisResult:
        if not self.settings.api_key or not self.settings.voice_id:
            return SynthesisResult(status="skipped", reason="Missing ElevenLabs credentials.")

        try:
            audio = await self._request(text)
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            logger.warning(f"ElevenLabs request failed: {exc!r}")
            return SynthesisResult(status="error", reason="ElevenLabs request failed.")

        if audio is None:
            return SynthesisResult(status="error", reason="ElevenLabs request failed.")
        return SynthesisResult(status="ok", audio_base64=base64.b64encode(audio).decode("ascii"))

    async def _request(self, text: str) -> Optional[bytes]:
        """POST text, return MP3 bytes or None on a non-2xx status."""
        url = f"{self.settings.endpoint.rstrip('/')}/{self.settings.voice_id}"
        headers = {
            "xi-api-key": self.settings.api_key or "",
            "Content-Type": "application/json",
            "Accept": "audio/mpeg",
        }
        payload = {
            "text": text,
            "model_id": self.settings.model_id,
            "voice_settings": {
                "stability": self.settings.stability,
                "similarity_boost": self.settings.similarity_boost,
            },
        }
        timeout = aiohttp.ClientTimeout(total=self.settings.timeout_seconds)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.post(url, headers=headers, json=payload) as response:
                if not 200 <= response.status < 300:
                    logger.warning(f"ElevenLabs returned HTTP {response.status}")
                    return None
                return await response.read()
