"""
JSONL event logger.

- One JSON object per line
- Output to stdout
- No buffering, no batching
- Never raises into the caller
"""

from __future__ import annotations

import json
import sys
import time
from typing import Any, Callable, Mapping


# ------------------------------------------------------------------
# Explicit output sink (patchable in tests)
# ------------------------------------------------------------------

def _stdout_print(line: str) -> None:
    sys.stdout.write(line + "\n")
    sys.stdout.flush()

_print: Callable[[str], None] = _stdout_print


def now_ms() -> int:
    """Wall-clock milliseconds for event timestamps."""
    return time.time_ns() // 1_000_000


def log_event(event: Mapping[str, Any]) -> None:
    """
    Write a single JSONL event to stdout.

    The caller supplies a fully-formed event dict (ts_ms, event_type,
    session_id, ...). Values that are not JSON serializable are rendered
    with str(); if serialization still fails a LOGGER_SERIALIZATION_ERROR
    line is written instead.
    """
    try:
        line = json.dumps(event, ensure_ascii=False, separators=(",", ":"), default=str)
    except (TypeError, ValueError) as e:
        # Last-resort fallback: logging must never crash a connection
        fallback: dict[str, Any] = {
            "ts_ms": event.get("ts_ms"),
            "event_type": "LOGGER_SERIALIZATION_ERROR",
            "error": str(e),
            "original_event_repr": repr(event),
        }
        line = json.dumps(fallback, ensure_ascii=False, separators=(",", ":"))

    _print(line)
