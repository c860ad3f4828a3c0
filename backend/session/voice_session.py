"""
Voice session container.

- Owns the connection's UtteranceState (buffer, silence timer, flag)
- Owns connection status and the outbound sender
- Owned and mutated by SessionGateway
- Contains no segmentation or processing logic
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable

from observability.logger import log_event, now_ms
from orchestrator.state_dataclass import UtteranceState
from session.connection_status import ConnectionStatus


OutboundSender = Callable[[dict[str, Any]], Awaitable[None]]


@dataclass
class VoiceSession:
    """Mutable runtime container for a single connection."""

    # ------------------------------------------------------------------
    # Identity / lifecycle
    # ------------------------------------------------------------------

    session_id: str
    created_at: float = field(default_factory=time.time)

    # ------------------------------------------------------------------
    # Connection / gateway-controlled state
    # ------------------------------------------------------------------

    connection_status: ConnectionStatus = ConnectionStatus.DOWN
    sender: OutboundSender | None = None

    # ------------------------------------------------------------------
    # Utterance state (exclusively owned by this connection)
    # ------------------------------------------------------------------

    utterance: UtteranceState = field(default_factory=UtteranceState)

    # ------------------------------------------------------------------
    # Outbound delivery
    # ------------------------------------------------------------------

    def attach_sender(self, sender: OutboundSender) -> None:
        """Attach the transport-level send function (called by SessionGateway)."""
        self.sender = sender

    async def deliver(self, msg: dict[str, Any]) -> bool:
        """
        Send one outbound message to the client.

        Never raises: if the connection is gone or the send fails, the
        message is logged and dropped. Returns True if it was sent.
        """
        if self.connection_status is not ConnectionStatus.UP or self.sender is None:
            log_event({
                "ts_ms": now_ms(),
                "event_type": "OUTBOUND_DROPPED_DISCONNECTED",
                "msg_type": msg.get("type"),
                **self.log_context(),
            })
            return False

        try:
            await self.sender(msg)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            log_event({
                "ts_ms": now_ms(),
                "event_type": "OUTBOUND_SEND_FAILED",
                "msg_type": msg.get("type"),
                "exception": type(exc).__name__,
                "message": str(exc),
                **self.log_context(),
            })
            return False

        return True

    # ------------------------------------------------------------------
    # Observability helpers (read-only)
    # ------------------------------------------------------------------

    def log_context(self) -> dict[str, Any]:
        """Standard logging context for this session."""
        return {
            "session_id": self.session_id,
            "connection_status": self.connection_status.value,
        }
