"""
OpenAI speech synthesis adapter.

One request per reply against the audio speech endpoint; the full mp3 body
is returned to the caller. Persisting it is the processor's job.
"""
from __future__ import annotations

from typing import Any

from openai import OpenAIError

from adapters.tts.base import SynthesisService
from constants import TTS_RESPONSE_FORMAT
from orchestrator.errors import SynthesisServiceError


class OpenAISpeechAdapter(SynthesisService):
    """Text-to-speech over the OpenAI API (client injected)."""

    def __init__(self, *, client: Any, response_format: str = TTS_RESPONSE_FORMAT) -> None:
        self._client = client
        self._response_format = response_format

    async def synthesize(self, text: str, *, model: str, voice: str) -> bytes:
        try:
            response = await self._client.audio.speech.create(
                model=model,
                voice=voice,
                input=text,
                response_format=self._response_format,
            )
        except OpenAIError as exc:
            raise SynthesisServiceError(
                f"{type(exc).__name__}: {exc}"
            ) from exc

        audio = response.content
        if not audio:
            raise SynthesisServiceError("speech endpoint returned an empty body")
        return audio
