"""
Segmentation triggers and outbound payloads.

Rules:
- Data only, no behavior beyond wire serialization.
- Outbound payload shapes are fixed: a success payload is never partially
  populated, and a failure notice never looks like a success.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from orchestrator.enums.stage import ProcessorStage


class TriggerReason(str, Enum):
    """Why an utterance was flushed for processing."""

    SILENCE = "silence"
    STOP_SIGNAL = "stop_signal"


@dataclass(frozen=True)
class TriggerSignal:
    """
    An utterance is complete and ready for processing.

    sample_count:
        Buffered samples at the moment of the trigger.

    silence_ms:
        Elapsed silence that caused the trigger (None for STOP_SIGNAL).
    """
    reason: TriggerReason
    sample_count: int
    ts_ms: int
    silence_ms: int | None = None


@dataclass(frozen=True)
class OutboundResult:
    """Successful pass result delivered to the client as `receive_audio`."""
    audio_url: str
    transcription: str
    response: str

    def to_message(self) -> dict[str, Any]:
        return {
            "type": "receive_audio",
            "audioUrl": self.audio_url,
            "transcription": self.transcription,
            "response": self.response,
        }


@dataclass(frozen=True)
class FailureNotice:
    """
    Failed pass notification delivered to the client as `error`.

    error is a stable code (encoding_failed, transcription_failed,
    synthesis_failed, emit_failed, internal_error). Provider error text
    is logged server-side and never copied here.
    """
    stage: ProcessorStage
    error: str
    message: str = "Error processing audio"

    def to_message(self) -> dict[str, Any]:
        return {
            "type": "error",
            "stage": self.stage.value,
            "error": self.error,
            "message": self.message,
        }
