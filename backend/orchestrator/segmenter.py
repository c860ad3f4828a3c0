"""
Streaming utterance segmenter.

Decides, from an unbounded stream of sample chunks, when one utterance ends:
- after sustained silence (every chunk at or below the amplitude threshold
  for at least silence_duration_ms), or
- on an explicit stop signal (force_flush).

The segmenter only appends and tracks the silence timer. It never clears
the buffer: the processor's reset does that once the pass completes, so a
trigger and the buffer clear can't race. While a pass is in flight every
chunk is dropped, which also guarantees one trigger per silence episode.
"""

from __future__ import annotations

import time
from typing import Callable, Sequence

from audio.vad import is_sounding
from constants import SILENCE_DURATION_MS_DEFAULT, SILENCE_THRESHOLD_DEFAULT
from observability.logger import now_ms
from orchestrator.events import TriggerReason, TriggerSignal
from orchestrator.state_dataclass import UtteranceState


Clock = Callable[[], float]


class UtteranceSegmenter:
    """
    Per-connection silence detector.

    Args:
        state:
            The connection's UtteranceState (exclusively owned).
        silence_threshold:
            Peak amplitude at or below which a chunk counts as silent.
        silence_duration_ms:
            Continuous silence needed before a trigger fires.
        clock:
            Monotonic seconds; patchable for tests.
    """

    def __init__(
        self,
        state: UtteranceState,
        *,
        silence_threshold: float = SILENCE_THRESHOLD_DEFAULT,
        silence_duration_ms: int = SILENCE_DURATION_MS_DEFAULT,
        clock: Clock = time.monotonic,
    ) -> None:
        self._state = state
        self._threshold = silence_threshold
        self._duration_s = silence_duration_ms / 1000.0
        self._clock = clock

    @property
    def state(self) -> UtteranceState:
        return self._state

    def ingest(self, chunk: Sequence[float]) -> TriggerSignal | None:
        """
        Append a chunk and update the silence timer.

        Returns a TriggerSignal when sustained silence completes an
        utterance, else None. No-op while a pass is in flight.
        """
        state = self._state
        if state.is_processing:
            return None

        state.buffer.extend(chunk)

        if is_sounding(chunk, self._threshold):
            state.silence_started_at = None
            return None

        now = self._clock()
        if state.silence_started_at is None:
            state.silence_started_at = now
            return None

        elapsed_s = now - state.silence_started_at
        if elapsed_s < self._duration_s:
            return None

        return TriggerSignal(
            reason=TriggerReason.SILENCE,
            sample_count=len(state.buffer),
            ts_ms=now_ms(),
            silence_ms=int(elapsed_s * 1000),
        )

    def force_flush(self) -> TriggerSignal | None:
        """
        Trigger unconditionally (explicit stop signal).

        No-op when the buffer is empty or a pass is in flight.
        """
        state = self._state
        if state.is_processing or not state.buffer:
            return None

        return TriggerSignal(
            reason=TriggerReason.STOP_SIGNAL,
            sample_count=len(state.buffer),
            ts_ms=now_ms(),
        )
