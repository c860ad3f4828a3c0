"""
Processing pass error taxonomy.

PipelineError subclasses abort the current pass. ArtifactCleanupError is
never fatal: it is raised by artifact stores and caught by the cleanup
scheduler only.
"""

from __future__ import annotations


class PipelineError(Exception):
    """Base class for errors that abort one processing pass."""

    code: str = "internal_error"


class EncodingError(PipelineError):
    """The buffered samples could not be encoded or persisted as a container."""

    code = "encoding_failed"


class TranscriptionServiceError(PipelineError):
    """Network, auth, or quota failure from the transcription service."""

    code = "transcription_failed"


class SynthesisServiceError(PipelineError):
    """Network, auth, or quota failure from the speech synthesis service."""

    code = "synthesis_failed"


class EmitError(PipelineError):
    """The synthesized reply could not be persisted for retrieval."""

    code = "emit_failed"


class ArtifactCleanupError(Exception):
    """Deleting a transient artifact failed. Logged, never surfaced."""
