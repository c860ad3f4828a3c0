# pylint: disable=missing-module-docstring,missing-function-docstring,missing-class-docstring
"""In-memory collaborators for processor / gateway tests."""

from __future__ import annotations

import asyncio
from typing import Any

from adapters.asr.base import TranscriptionService
from adapters.tts.base import SynthesisService
from orchestrator.errors import ArtifactCleanupError
from storage.artifacts import ArtifactStore


class FakeTranscriber(TranscriptionService):
    def __init__(self, text: str = "hello there", error: Exception | None = None) -> None:
        self.text = text
        self.error = error
        self.calls: list[tuple[bytes, str, str]] = []
        # When set, transcribe() blocks until the event is released
        self.gate: asyncio.Event | None = None

    async def transcribe(self, audio: bytes, *, model: str, language: str) -> str:
        self.calls.append((audio, model, language))
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.text


class FakeSynthesizer(SynthesisService):
    def __init__(self, audio: bytes = b"ID3-fake-mp3", error: Exception | None = None) -> None:
        self.audio = audio
        self.error = error
        self.calls: list[tuple[str, str, str]] = []

    async def synthesize(self, text: str, *, model: str, voice: str) -> bytes:
        self.calls.append((text, model, voice))
        if self.error is not None:
            raise self.error
        return self.audio


class MemoryArtifactStore(ArtifactStore):
    def __init__(self, *, fail_persist_suffix: str | None = None) -> None:
        self.items: dict[str, bytes] = {}
        self.deleted: list[str] = []
        self.fail_persist_suffix = fail_persist_suffix
        self._n = 0

    async def persist(self, data: bytes, *, prefix: str, suffix: str) -> str:
        if suffix == self.fail_persist_suffix:
            raise OSError("disk full")
        self._n += 1
        reference = f"{prefix}_{self._n}{suffix}"
        self.items[reference] = data
        return reference

    async def delete(self, reference: str) -> None:
        if reference not in self.items:
            raise ArtifactCleanupError(f"{reference}: missing")
        del self.items[reference]
        self.deleted.append(reference)

    def url(self, reference: str) -> str:
        return f"http://relay.test/temp/{reference}"


class Outbox:
    """Collects messages passed to an outbound sink."""

    def __init__(self) -> None:
        self.messages: list[dict[str, Any]] = []

    async def __call__(self, msg: dict[str, Any]) -> None:
        self.messages.append(msg)

    def of_type(self, msg_type: str) -> list[dict[str, Any]]:
        return [m for m in self.messages if m.get("type") == msg_type]
