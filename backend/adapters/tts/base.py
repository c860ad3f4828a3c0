"""
Speech synthesis service contract.

Interface only: no chunking, no framing, no retries.

- One call synthesizes one complete reply.
- Voice and model are fixed per deployment and passed explicitly.
- Failures surface as SynthesisServiceError; the adapter MUST NOT retry.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class SynthesisService(ABC):
    """Request/response text-to-speech collaborator."""

    @abstractmethod
    async def synthesize(self, text: str, *, model: str, voice: str) -> bytes:
        """
        Synthesize text into an encoded audio byte stream (mp3).

        Raises:
            SynthesisServiceError on any provider failure or empty output.
        """
        raise NotImplementedError
