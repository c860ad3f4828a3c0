"""
Transient artifact storage.

Artifacts are the encoded input utterance and the synthesized reply. They
live briefly in a shared directory so the client can fetch them over HTTP.

Names are unique (wall-clock ns + random suffix), so concurrent
connections never collide and no locking is needed.
"""

from __future__ import annotations

import asyncio
import os
import time
from abc import ABC, abstractmethod
from pathlib import Path
from uuid import uuid4

from constants import ARTIFACT_URL_PREFIX
from orchestrator.errors import ArtifactCleanupError


class ArtifactStore(ABC):
    """persist(bytes) -> reference, delete(reference), url(reference)."""

    @abstractmethod
    async def persist(self, data: bytes, *, prefix: str, suffix: str) -> str:
        """Store bytes under a fresh unique reference and return it."""
        raise NotImplementedError

    @abstractmethod
    async def delete(self, reference: str) -> None:
        """
        Remove a stored artifact.

        Raises:
            ArtifactCleanupError if the artifact could not be removed.
        """
        raise NotImplementedError

    @abstractmethod
    def url(self, reference: str) -> str:
        """Public URL the client uses to fetch the artifact."""
        raise NotImplementedError


def new_artifact_name(prefix: str, suffix: str) -> str:
    return f"{prefix}_{time.time_ns()}_{uuid4().hex[:8]}{suffix}"


class LocalArtifactStore(ArtifactStore):
    """
    Filesystem-backed store served by the /temp static mount.

    File I/O runs in a worker thread so the event loop keeps serving
    other connections.
    """

    def __init__(self, *, directory: str | Path, public_base_url: str) -> None:
        self._directory = Path(directory)
        self._public_base_url = public_base_url.rstrip("/")

    @property
    def directory(self) -> Path:
        return self._directory

    def ensure_directory(self) -> None:
        self._directory.mkdir(parents=True, exist_ok=True)

    def path_for(self, reference: str) -> Path:
        if not reference or os.sep in reference or "/" in reference or reference in (".", ".."):
            raise ValueError(f"invalid artifact reference: {reference!r}")
        return self._directory / reference

    async def persist(self, data: bytes, *, prefix: str, suffix: str) -> str:
        reference = new_artifact_name(prefix, suffix)
        path = self.path_for(reference)
        await asyncio.to_thread(path.write_bytes, data)
        return reference

    async def delete(self, reference: str) -> None:
        try:
            path = self.path_for(reference)
            await asyncio.to_thread(os.remove, path)
        except (OSError, ValueError) as exc:
            raise ArtifactCleanupError(f"{reference}: {exc}") from exc

    def url(self, reference: str) -> str:
        return f"{self._public_base_url}{ARTIFACT_URL_PREFIX}/{reference}"
