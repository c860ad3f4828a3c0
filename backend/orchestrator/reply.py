"""Deterministic reply composer (no external dependency, cannot fail)."""

from __future__ import annotations

from constants import REPLY_PREFIX


def compose_reply(transcription: str, *, prefix: str = REPLY_PREFIX) -> str:
    """Acknowledge the transcribed text by echoing it behind a fixed phrase."""
    return f"{prefix}{transcription}"
