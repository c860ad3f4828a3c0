"""
OpenAI transcription adapter.

Sends one WAV container per call to the audio transcriptions endpoint.
No buffering, endpointing, or retries live here.
"""

from __future__ import annotations

from typing import Any

from openai import OpenAIError

from adapters.asr.base import TranscriptionService
from orchestrator.errors import TranscriptionServiceError


class OpenAITranscriptionAdapter(TranscriptionService):
    """
    Whisper transcription over the OpenAI API.

    The client is injected (one AsyncOpenAI per process) so tests can pass
    a fake exposing `audio.transcriptions.create`.
    """

    def __init__(self, *, client: Any, filename: str = "utterance.wav") -> None:
        self._client = client
        self._filename = filename

    async def transcribe(self, audio: bytes, *, model: str, language: str) -> str:
        try:
            transcript = await self._client.audio.transcriptions.create(
                model=model,
                file=(self._filename, audio, "audio/wav"),
                language=language,
            )
        except OpenAIError as exc:
            raise TranscriptionServiceError(
                f"{type(exc).__name__}: {exc}"
            ) from exc

        return transcript.text
