"""
Utterance processor: one end-to-end pass per trigger.

    IDLE -> ENCODING -> TRANSCRIBING -> GENERATING -> SYNTHESIZING -> EMITTING -> IDLE
               any stage on error -> FAILED -> IDLE

Guarantees:
- Never re-entrant: at most one pass per processor (one per connection).
- Every exit path (success, service failure, unexpected error,
  cancellation) clears the buffer, the silence timer and the processing
  flag.
- A failed pass emits exactly one FailureNotice and no success payload.
- Artifacts persisted during the pass are always handed to the cleanup
  scheduler, even when the pass fails after persisting them.

Suspension points are the collaborator calls (store, transcription,
synthesis); the connection keeps receiving (and dropping) audio meanwhile.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Sequence

from adapters.asr.base import TranscriptionService
from adapters.tts.base import SynthesisService
from audio.wav import encode_wav
from constants import (
    TRANSCRIPTION_LANGUAGE_DEFAULT,
    TRANSCRIPTION_MODEL_DEFAULT,
    TTS_MODEL_DEFAULT,
    TTS_VOICE_DEFAULT,
    WAV_SAMPLE_RATE_HZ_DEFAULT,
)
from observability.logger import log_event, now_ms
from observability.metrics import timed
from orchestrator.cleanup import ArtifactCleanupScheduler
from orchestrator.enums.stage import ProcessorStage
from orchestrator.errors import EmitError, EncodingError, PipelineError
from orchestrator.events import FailureNotice, OutboundResult, TriggerSignal
from orchestrator.reply import compose_reply
from orchestrator.state_dataclass import UtteranceState
from storage.artifacts import ArtifactStore


OutboundSink = Callable[[dict[str, Any]], Awaitable[None]]
Encoder = Callable[[Sequence[float], int], bytes]


@dataclass(frozen=True)
class ProcessorSettings:
    """Fixed per-deployment parameters for the external calls."""
    sample_rate_hz: int = WAV_SAMPLE_RATE_HZ_DEFAULT
    transcription_model: str = TRANSCRIPTION_MODEL_DEFAULT
    transcription_language: str = TRANSCRIPTION_LANGUAGE_DEFAULT
    tts_model: str = TTS_MODEL_DEFAULT
    tts_voice: str = TTS_VOICE_DEFAULT


class UtteranceProcessor:
    """
    Runs encode -> transcribe -> reply -> synthesize -> emit for one connection.

    All collaborators are injected; nothing here is a process-wide singleton.
    """

    def __init__(
        self,
        *,
        session_id: str,
        transcriber: TranscriptionService,
        synthesizer: SynthesisService,
        store: ArtifactStore,
        cleanup: ArtifactCleanupScheduler,
        emit: OutboundSink,
        settings: ProcessorSettings | None = None,
        encoder: Encoder = encode_wav,
    ) -> None:
        self._session_id = session_id
        self._transcriber = transcriber
        self._synthesizer = synthesizer
        self._store = store
        self._cleanup = cleanup
        self._emit = emit
        self._settings = settings or ProcessorSettings()
        self._encoder = encoder

        self._stage = ProcessorStage.IDLE
        self._active = False

    @property
    def stage(self) -> ProcessorStage:
        return self._stage

    @property
    def active(self) -> bool:
        return self._active

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def run(
        self,
        state: UtteranceState,
        trigger: TriggerSignal | None = None,
    ) -> OutboundResult | None:
        """
        Process the buffered utterance once.

        Returns the OutboundResult that was emitted, or None when the buffer
        was empty, a pass was already running, or the pass failed.
        """
        if self._active:
            log_event({
                "ts_ms": now_ms(),
                "event_type": "PROCESSOR_REENTRY_REJECTED",
                "session_id": self._session_id,
                "stage": self._stage.value,
            })
            return None

        if not state.buffer:
            state.reset()
            return None

        self._active = True
        state.begin_pass()
        samples = state.snapshot()
        artifacts: list[str] = []
        result: OutboundResult | None = None

        log_event({
            "ts_ms": now_ms(),
            "event_type": "PROCESSOR_STARTED",
            "session_id": self._session_id,
            "sample_count": len(samples),
            "trigger": trigger.reason.value if trigger else None,
        })

        try:
            result = await self._run_stages(samples, artifacts)
        except PipelineError as exc:
            await self._fail(exc.code, exc)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            await self._fail("internal_error", exc)
        finally:
            for reference in artifacts:
                self._cleanup.schedule(reference, session_id=self._session_id)
            state.reset()
            self._stage = ProcessorStage.IDLE
            self._active = False

        return result

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    async def _run_stages(self, samples: list[float], artifacts: list[str]) -> OutboundResult:
        settings = self._settings

        # ---- ENCODING ----
        self._enter(ProcessorStage.ENCODING)
        try:
            wav_bytes = self._encoder(samples, settings.sample_rate_hz)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            raise EncodingError(f"{type(exc).__name__}: {exc}") from exc

        try:
            artifacts.append(
                await self._store.persist(wav_bytes, prefix="audio", suffix=".wav")
            )
        except OSError as exc:
            raise EncodingError(f"persist failed: {exc}") from exc

        # ---- TRANSCRIBING ----
        self._enter(ProcessorStage.TRANSCRIBING)
        with timed("transcription_latency", session_id=self._session_id, stage=self._stage.value):
            transcription = await self._transcriber.transcribe(
                wav_bytes,
                model=settings.transcription_model,
                language=settings.transcription_language,
            )

        log_event({
            "ts_ms": now_ms(),
            "event_type": "TRANSCRIPTION",
            "session_id": self._session_id,
            "text": transcription,
        })

        # ---- GENERATING ----
        self._enter(ProcessorStage.GENERATING)
        reply = compose_reply(transcription)

        # ---- SYNTHESIZING ----
        self._enter(ProcessorStage.SYNTHESIZING)
        with timed("synthesis_latency", session_id=self._session_id, stage=self._stage.value):
            speech = await self._synthesizer.synthesize(
                reply,
                model=settings.tts_model,
                voice=settings.tts_voice,
            )

        # ---- EMITTING ----
        self._enter(ProcessorStage.EMITTING)
        try:
            speech_ref = await self._store.persist(speech, prefix="speech", suffix=".mp3")
        except OSError as exc:
            raise EmitError(f"persist failed: {exc}") from exc
        artifacts.append(speech_ref)

        result = OutboundResult(
            audio_url=self._store.url(speech_ref),
            transcription=transcription,
            response=reply,
        )
        await self._emit(result.to_message())
        return result

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _enter(self, stage: ProcessorStage) -> None:
        self._stage = stage
        log_event({
            "ts_ms": now_ms(),
            "event_type": "PROCESSOR_STAGE",
            "session_id": self._session_id,
            "stage": stage.value,
        })

    async def _fail(self, code: str, exc: BaseException) -> None:
        failed_stage = self._stage
        self._stage = ProcessorStage.FAILED

        log_event({
            "ts_ms": now_ms(),
            "event_type": "PROCESSOR_FAILED",
            "session_id": self._session_id,
            "stage": failed_stage.value,
            "error": code,
            "exception": type(exc).__name__,
            "message": str(exc),
        })

        await self._emit(FailureNotice(stage=failed_stage, error=code).to_message())
