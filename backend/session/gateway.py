"""
Session gateway.

Responsibilities:
- Owns VoiceSession lifecycle (one gateway == one connection)
- Owns the connection's UtteranceSegmenter and UtteranceProcessor
- Routes inbound JSON / binary messages -> segmenter
- Starts a processing pass on each trigger (at most one in flight)
- Forwards processor output to the client via VoiceSession.deliver()

NOT responsible for:
- Silence detection policy (segmenter)
- Pipeline stages or error taxonomy (processor)
- Socket I/O (server.routes)
"""

from __future__ import annotations

import asyncio
import json
import time
from dataclasses import dataclass
from typing import Any, Callable, TYPE_CHECKING
from uuid import uuid4

from adapters.asr.base import TranscriptionService
from adapters.tts.base import SynthesisService
from audio.pcm import InvalidAudioPayload, float32le_to_samples, samples_from_json
from observability.logger import log_event, now_ms
from orchestrator.cleanup import ArtifactCleanupScheduler
from orchestrator.events import TriggerSignal
from orchestrator.processor import ProcessorSettings, UtteranceProcessor
from orchestrator.segmenter import UtteranceSegmenter
from session.connection_status import ConnectionStatus
from session.voice_session import OutboundSender, VoiceSession
from storage.artifacts import ArtifactStore

if TYPE_CHECKING:
    from config import AppConfig


def _new_session_id() -> str:
    return f"sess_{uuid4().hex[:12]}"


# ------------------------------------------------------------------
# Shared collaborators / gateway result
# ------------------------------------------------------------------

@dataclass(frozen=True)
class SessionServices:
    """
    Process-wide collaborators handed to every gateway.

    They are stateless with respect to connections (artifact names are
    unique), so sharing them creates no cross-connection state.
    """
    transcriber: TranscriptionService
    synthesizer: SynthesisService
    store: ArtifactStore
    cleanup: ArtifactCleanupScheduler


@dataclass(frozen=True)
class GatewayResult:
    """
    Messages to send immediately in reply to an inbound event.

    Processing results arrive later, through the session sender.
    """
    outbound_json: tuple[dict[str, Any], ...] = ()


# ------------------------------------------------------------------
# SessionGateway
# ------------------------------------------------------------------

class SessionGateway:
    """One gateway == one connection == one segmenter + one processor."""

    def __init__(
        self,
        *,
        config: AppConfig,
        services: SessionServices,
        sender: OutboundSender,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._config = config
        self._services = services
        self._sender = sender
        self._clock = clock

        self.session: VoiceSession | None = None
        self.segmenter: UtteranceSegmenter | None = None
        self.processor: UtteranceProcessor | None = None
        self._pass_task: asyncio.Task[Any] | None = None

    # ------------------------------------------------------------------
    # Connection lifecycle
    # ------------------------------------------------------------------

    async def on_ws_connect(self) -> GatewayResult:
        """Create the session, segmenter and processor for this connection."""
        session = VoiceSession(session_id=_new_session_id())
        session.attach_sender(self._sender)
        session.connection_status = ConnectionStatus.UP
        self.session = session

        self.segmenter = UtteranceSegmenter(
            session.utterance,
            silence_threshold=self._config.silence_threshold,
            silence_duration_ms=self._config.silence_duration_ms,
            clock=self._clock,
        )
        self.processor = UtteranceProcessor(
            session_id=session.session_id,
            transcriber=self._services.transcriber,
            synthesizer=self._services.synthesizer,
            store=self._services.store,
            cleanup=self._services.cleanup,
            emit=session.deliver,
            settings=ProcessorSettings(
                sample_rate_hz=self._config.sample_rate_hz,
                transcription_model=self._config.transcription_model,
                transcription_language=self._config.transcription_language,
                tts_model=self._config.tts_model,
                tts_voice=self._config.tts_voice,
            ),
        )

        log_event({
            "ts_ms": now_ms(),
            "event_type": "WS_CONNECTED",
            **session.log_context(),
        })

        init_msg: dict[str, Any] = {
            "type": "session_init",
            "session_id": session.session_id,
            "audio_format": {
                "sample_rate": self._config.sample_rate_hz,
                "channels": 1,
                "encoding": "float32",
            },
        }
        return GatewayResult(outbound_json=(init_msg,))

    async def on_ws_disconnect(self, reason: str | None = None) -> GatewayResult:
        """
        Mark the connection gone.

        An in-flight pass is NOT cancelled; it finishes on its own and its
        delivery becomes a no-op.
        """
        if self.session is None:
            log_event({
                "ts_ms": now_ms(),
                "event_type": "WS_DISCONNECT_WITHOUT_SESSION",
                "reason": reason,
            })
            return GatewayResult()

        self.session.connection_status = ConnectionStatus.DOWN
        log_event({
            "ts_ms": now_ms(),
            "event_type": "WS_DISCONNECTED",
            "reason": reason,
            "pass_in_flight": self.pass_in_flight,
            **self.session.log_context(),
        })
        return GatewayResult()

    # ------------------------------------------------------------------
    # Inbound messages
    # ------------------------------------------------------------------

    async def on_json_message(self, payload: str) -> GatewayResult:
        """Route an inbound JSON message (audio_data / stop_recording)."""
        if self.session is None:
            log_event({
                "ts_ms": now_ms(),
                "event_type": "MESSAGE_WITHOUT_SESSION",
                "payload_preview": payload[:100],
            })
            return GatewayResult()

        try:
            data = json.loads(payload)
        except json.JSONDecodeError as e:
            log_event({
                "ts_ms": now_ms(),
                "event_type": "JSON_DECODE_ERROR",
                "session_id": self.session.session_id,
                "error": str(e),
                "payload_preview": payload[:100],
            })
            return GatewayResult()

        msg_type = data.get("type") if isinstance(data, dict) else None

        if msg_type == "audio_data":
            try:
                samples = samples_from_json(data.get("samples"))
            except InvalidAudioPayload as e:
                log_event({
                    "ts_ms": now_ms(),
                    "event_type": "INVALID_AUDIO_PAYLOAD",
                    "session_id": self.session.session_id,
                    "error": str(e),
                })
                return GatewayResult()
            self._on_audio(samples)

        elif msg_type == "stop_recording":
            self._on_stop_recording()

        else:
            log_event({
                "ts_ms": now_ms(),
                "event_type": "UNKNOWN_MESSAGE_TYPE",
                "msg_type": msg_type,
                "session_id": self.session.session_id,
            })

        return GatewayResult()

    async def on_binary_message(self, payload: bytes) -> GatewayResult:
        """Inbound binary frames are raw float32 LE samples (audio_data)."""
        if self.session is None:
            log_event({
                "ts_ms": now_ms(),
                "event_type": "BINARY_WITHOUT_SESSION",
                "payload_len": len(payload),
            })
            return GatewayResult()

        self._on_audio(float32le_to_samples(payload))
        return GatewayResult()

    # ------------------------------------------------------------------
    # Processing passes
    # ------------------------------------------------------------------

    @property
    def pass_in_flight(self) -> bool:
        return self._pass_task is not None and not self._pass_task.done()

    async def wait_for_pass(self) -> None:
        """Wait until the current processing pass (if any) has finished."""
        task = self._pass_task
        if task is not None:
            await asyncio.gather(task, return_exceptions=True)

    def _on_audio(self, samples: list[float]) -> None:
        assert self.session is not None and self.segmenter is not None

        if self.session.utterance.is_processing:
            log_event({
                "ts_ms": now_ms(),
                "event_type": "AUDIO_CHUNK_DROPPED",
                "session_id": self.session.session_id,
                "samples": len(samples),
            })
            return

        trigger = self.segmenter.ingest(samples)
        if trigger is not None:
            self._start_pass(trigger)

    def _on_stop_recording(self) -> None:
        assert self.segmenter is not None

        trigger = self.segmenter.force_flush()
        if trigger is not None:
            self._start_pass(trigger)

    def _start_pass(self, trigger: TriggerSignal) -> None:
        """
        Gate ingest and schedule the processor.

        The flag is raised here, synchronously with the trigger, so no chunk
        received before the task first runs can reach the buffer.
        """
        assert self.session is not None and self.processor is not None

        state = self.session.utterance
        state.begin_pass()

        log_event({
            "ts_ms": now_ms(),
            "event_type": "UTTERANCE_TRIGGERED",
            "session_id": self.session.session_id,
            "reason": trigger.reason.value,
            "sample_count": trigger.sample_count,
            "silence_ms": trigger.silence_ms,
        })

        self._pass_task = asyncio.create_task(self.processor.run(state, trigger))
        self._pass_task.add_done_callback(self._on_pass_done)

    def _on_pass_done(self, task: asyncio.Task[Any]) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            log_event({
                "ts_ms": now_ms(),
                "event_type": "PROCESSOR_TASK_ERROR",
                "session_id": self.session.session_id if self.session else None,
                "exception": type(exc).__name__,
                "message": str(exc),
            })
