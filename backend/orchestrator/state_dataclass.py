"""
Per-connection utterance state.

Rules:
- Owned by exactly one connection (VoiceSession); never shared.
- Mutated only by UtteranceSegmenter (append / timer) and
  UtteranceProcessor (begin_pass / reset).
- Invariant: while is_processing is True, the buffer and silence timer
  are not touched by ingest.
"""
from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class UtteranceState:
    """Sample buffer, silence timer and processing flag for one connection."""

    buffer: list[float] = field(default_factory=list)

    # Monotonic seconds when continuous sub-threshold audio began.
    # None = currently sounding, or just reset.
    silence_started_at: float | None = None

    is_processing: bool = False

    def begin_pass(self) -> None:
        """Mark a processing pass as in flight. Ingest is gated from here on."""
        self.is_processing = True

    def reset(self) -> None:
        """Clear buffer, silence timer and processing flag together."""
        self.buffer = []
        self.silence_started_at = None
        self.is_processing = False

    def snapshot(self) -> list[float]:
        """Copy of the buffered samples."""
        return list(self.buffer)
