# pylint: disable=missing-module-docstring,missing-function-docstring

import json
from typing import Any

import pytest

from observability import logger
from observability.metrics import timed


def test_log_event_emits_valid_jsonl(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """
    - log_event emits exactly one JSONL line
    - payload is serialized as-is
    - output sink is patchable
    """
    captured: list[str] = []

    def fake_print(line: str) -> None:
        captured.append(line)

    monkeypatch.setattr(logger, "_print", fake_print)

    payload: dict[str, Any] = {
        "event_type": "TEST",
        "value": 123,
    }

    logger.log_event(payload)

    assert len(captured) == 1
    assert "\n" not in captured[0]
    assert json.loads(captured[0]) == payload


def test_log_event_stringifies_unserializable_values(logged: list[dict[str, Any]]) -> None:
    logger.log_event({"event_type": "TEST", "blob": object()})

    assert len(logged) == 1
    assert logged[0]["event_type"] == "TEST"
    assert isinstance(logged[0]["blob"], str)


def test_timed_emits_metric_even_when_block_raises(logged: list[dict[str, Any]]) -> None:
    with pytest.raises(RuntimeError):
        with timed("transcription_latency", session_id="sess_x", stage="transcribing"):
            raise RuntimeError("boom")

    assert len(logged) == 1
    metric = logged[0]
    assert metric["event_type"] == "METRIC_TIMER"
    assert metric["metric"] == "transcription_latency"
    assert metric["session_id"] == "sess_x"
    assert metric["stage"] == "transcribing"
    assert metric["value_ms"] >= 0
