"""
Delayed artifact deletion.

Responsibilities:
- Start one fire-and-forget timer task per artifact reference
- Delete the artifact when the timer fires
- Log deletion failures (never raise them)
- Flush or cancel outstanding timers on shutdown

Non-responsibilities:
- No knowledge of connections or processing passes. A scheduled deletion
  is independent of any later utterance.
"""

from __future__ import annotations

import asyncio
from asyncio import Task

from constants import ARTIFACT_TTL_S_DEFAULT
from observability.logger import log_event, now_ms
from storage.artifacts import ArtifactStore


class ArtifactCleanupScheduler:
    """
    Process-wide scheduler keyed by artifact reference.

    References are unique per artifact, so sharing one scheduler across
    connections needs no locking.
    """

    def __init__(
        self,
        *,
        store: ArtifactStore,
        delay_s: float = ARTIFACT_TTL_S_DEFAULT,
    ) -> None:
        self._store = store
        self._delay_s = delay_s
        self._timers: dict[str, Task[None]] = {}
        # timers that already fired and are inside store.delete
        self._deleting: set[Task[None]] = set()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def schedule(self, reference: str, *, session_id: str | None = None) -> None:
        """
        Delete `reference` after the grace period.

        Idempotent: a reference that is already scheduled is ignored.
        """
        if reference in self._timers:
            return

        self._timers[reference] = asyncio.create_task(
            self._delete_after_delay(reference, session_id=session_id)
        )

    def cancel(self, reference: str) -> bool:
        """Cancel a pending deletion. Returns False if none was pending."""
        task = self._timers.pop(reference, None)
        if task is None:
            return False
        task.cancel()
        return True

    def pending(self) -> frozenset[str]:
        return frozenset(self._timers)

    async def shutdown(self, *, delete_pending: bool = True) -> None:
        """
        Stop all timers. With delete_pending, remove their artifacts now.
        Deletions already in progress are awaited either way.

        Used on application shutdown.
        """
        references = list(self._timers)
        for reference in references:
            self.cancel(reference)

        if delete_pending:
            for reference in references:
                await self._delete(reference, session_id=None)

        if self._deleting:
            await asyncio.gather(*self._deleting)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    async def _delete_after_delay(self, reference: str, *, session_id: str | None) -> None:
        try:
            await asyncio.sleep(self._delay_s)
        except asyncio.CancelledError:
            return

        task = self._timers.pop(reference, None)
        if task is not None:
            self._deleting.add(task)
        try:
            await self._delete(reference, session_id=session_id)
        finally:
            self._deleting.discard(task)

    async def _delete(self, reference: str, *, session_id: str | None) -> None:
        try:
            await self._store.delete(reference)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            log_event({
                "ts_ms": now_ms(),
                "event_type": "ARTIFACT_CLEANUP_FAILED",
                "session_id": session_id,
                "reference": reference,
                "exception": type(exc).__name__,
                "message": str(exc),
            })
            return

        log_event({
            "ts_ms": now_ms(),
            "event_type": "ARTIFACT_DELETED",
            "session_id": session_id,
            "reference": reference,
        })
