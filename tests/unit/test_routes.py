# pylint: disable=missing-module-docstring,missing-function-docstring

import json
from dataclasses import replace
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from config import AppConfig
from orchestrator.cleanup import ArtifactCleanupScheduler
from server.app import create_app
from session.gateway import SessionServices

from fakes import FakeSynthesizer, FakeTranscriber, MemoryArtifactStore


def make_config(tmp_path: Path) -> AppConfig:
    return AppConfig(
        env="test",
        log_level="INFO",
        host="127.0.0.1",
        port=5000,
        frontend_url="http://localhost:3000",
        backend_url="http://localhost:5000",
        openai_api_key=None,
        artifact_dir=str(tmp_path / "temp"),
    )


def make_services() -> SessionServices:
    store = MemoryArtifactStore()
    return SessionServices(
        transcriber=FakeTranscriber(text="ping"),
        synthesizer=FakeSynthesizer(),
        store=store,
        cleanup=ArtifactCleanupScheduler(store=store, delay_s=60.0),
    )


def test_health(tmp_path: Path, logged):  # pylint: disable=unused-argument
    app = create_app(make_config(tmp_path), services=make_services())

    with TestClient(app) as client:
        assert client.get("/health").json() == {"status": "ok"}


def test_artifacts_served_from_temp(tmp_path: Path, logged):  # pylint: disable=unused-argument
    app = create_app(make_config(tmp_path), services=make_services())
    (tmp_path / "temp" / "speech_1.mp3").write_bytes(b"ID3data")

    with TestClient(app) as client:
        response = client.get("/temp/speech_1.mp3")

    assert response.status_code == 200
    assert response.content == b"ID3data"


def test_websocket_round_trip(tmp_path: Path, logged):  # pylint: disable=unused-argument
    app = create_app(make_config(tmp_path), services=make_services())

    with TestClient(app) as client:
        with client.websocket_connect("/ws") as ws:
            init = ws.receive_json()
            assert init["type"] == "session_init"

            ws.send_text(json.dumps({"type": "audio_data", "samples": [0.5, 0.6, -0.5]}))
            ws.send_text(json.dumps({"type": "stop_recording"}))

            reply = ws.receive_json()

    assert reply == {
        "type": "receive_audio",
        "audioUrl": "http://relay.test/temp/speech_2.mp3",
        "transcription": "ping",
        "response": "You said: ping",
    }


def test_missing_api_key_fails_fast(tmp_path: Path):
    config = replace(make_config(tmp_path), openai_api_key=None)

    with pytest.raises(RuntimeError, match="OPENAI_API_KEY"):
        create_app(config)
