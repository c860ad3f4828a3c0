# pylint: disable=missing-module-docstring,missing-function-docstring

import pytest

from config import AppConfig

_VARS = (
    "ENV", "LOG_LEVEL", "HOST", "PORT", "FRONTEND_URL", "BACKEND_URL", "OPENAI_API_KEY",
    "SILENCE_THRESHOLD", "SILENCE_DURATION_MS", "SAMPLE_RATE_HZ", "ARTIFACT_DIR", "ARTIFACT_TTL_S",
    "TRANSCRIPTION_MODEL", "TRANSCRIPTION_LANGUAGE", "TTS_MODEL", "TTS_VOICE",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults_match_reference_behavior():
    config = AppConfig.load_from_env()

    assert config.port == 5000
    assert config.backend_url == "http://localhost:5000"
    assert config.silence_threshold == 0.01
    assert config.silence_duration_ms == 2000
    assert config.sample_rate_hz == 44100
    assert config.artifact_ttl_s == 60.0
    assert (config.transcription_model, config.transcription_language) == ("whisper-1", "en")
    assert (config.tts_model, config.tts_voice) == ("tts-1", "alloy")
    assert config.openai_api_key is None


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("SILENCE_DURATION_MS", "1500")
    monkeypatch.setenv("SILENCE_THRESHOLD", "0.05")
    monkeypatch.setenv("BACKEND_URL", "https://relay.example.com")
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")

    config = AppConfig.load_from_env()

    assert config.port == 8080
    assert config.silence_duration_ms == 1500
    assert config.silence_threshold == 0.05
    assert config.backend_url == "https://relay.example.com"
    assert config.openai_api_key == "sk-test"


def test_invalid_number_raises(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("SILENCE_DURATION_MS", "two seconds")

    with pytest.raises(ValueError):
        AppConfig.load_from_env()
