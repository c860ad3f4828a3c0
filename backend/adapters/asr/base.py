"""
Transcription service contract.

Interface only: no buffering, no segmentation, no retries.

- One call transcribes one complete utterance container.
- The caller always passes an explicit language hint.
- Failures surface as TranscriptionServiceError; the adapter MUST NOT retry.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class TranscriptionService(ABC):
    """Request/response speech-to-text collaborator."""

    @abstractmethod
    async def transcribe(self, audio: bytes, *, model: str, language: str) -> str:
        """
        Transcribe one encoded audio container.

        Args:
            audio: Complete WAV container bytes.
            model: Provider model identifier.
            language: ISO-639-1 language hint (e.g. "en").

        Returns:
            The recognized text (may be empty).

        Raises:
            TranscriptionServiceError on any provider failure.
        """
        raise NotImplementedError
