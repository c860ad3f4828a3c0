"""
Application configuration.

Responsibilities:
- Read environment variables
- Provide a typed, immutable config object

Non-responsibilities:
- No .env loading (done by the entry points)
- No segmentation or pipeline logic
- No runtime mutation
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from constants import (
    ARTIFACT_DIR_DEFAULT,
    ARTIFACT_TTL_S_DEFAULT,
    SILENCE_DURATION_MS_DEFAULT,
    SILENCE_THRESHOLD_DEFAULT,
    TRANSCRIPTION_LANGUAGE_DEFAULT,
    TRANSCRIPTION_MODEL_DEFAULT,
    TTS_MODEL_DEFAULT,
    TTS_VOICE_DEFAULT,
    WAV_SAMPLE_RATE_HZ_DEFAULT,
)


@dataclass(frozen=True)
class AppConfig:
    """
    Immutable application configuration.

    Constructed once at process startup and stored on app.state.
    """

    # ------------------------------------------------------------------
    # Environment
    # ------------------------------------------------------------------

    env: str
    log_level: str
    host: str
    port: int

    # ------------------------------------------------------------------
    # HTTP surface
    # ------------------------------------------------------------------

    frontend_url: str
    backend_url: str

    # ------------------------------------------------------------------
    # OpenAI (transcription + speech)
    # ------------------------------------------------------------------

    openai_api_key: str | None
    transcription_model: str = TRANSCRIPTION_MODEL_DEFAULT
    transcription_language: str = TRANSCRIPTION_LANGUAGE_DEFAULT
    tts_model: str = TTS_MODEL_DEFAULT
    tts_voice: str = TTS_VOICE_DEFAULT

    # ------------------------------------------------------------------
    # Segmentation
    # ------------------------------------------------------------------

    silence_threshold: float = SILENCE_THRESHOLD_DEFAULT
    silence_duration_ms: int = SILENCE_DURATION_MS_DEFAULT
    sample_rate_hz: int = WAV_SAMPLE_RATE_HZ_DEFAULT

    # ------------------------------------------------------------------
    # Artifacts
    # ------------------------------------------------------------------

    artifact_dir: str = ARTIFACT_DIR_DEFAULT
    artifact_ttl_s: float = ARTIFACT_TTL_S_DEFAULT

    # ------------------------------------------------------------------
    # Factory
    # ------------------------------------------------------------------

    @staticmethod
    def load_from_env() -> AppConfig:
        """
        Load configuration from environment variables.

        Raises:
            ValueError if a numeric variable cannot be parsed.
        """
        port = int(os.environ.get("PORT", "5000"))
        return AppConfig(
            env=os.environ.get("ENV", "dev"),
            log_level=os.environ.get("LOG_LEVEL", "INFO"),
            host=os.environ.get("HOST", "0.0.0.0"),
            port=port,

            frontend_url=os.environ.get("FRONTEND_URL", "http://localhost:3000"),
            backend_url=os.environ.get("BACKEND_URL", f"http://localhost:{port}"),

            openai_api_key=os.environ.get("OPENAI_API_KEY"),
            transcription_model=os.environ.get("TRANSCRIPTION_MODEL", TRANSCRIPTION_MODEL_DEFAULT),
            transcription_language=os.environ.get("TRANSCRIPTION_LANGUAGE", TRANSCRIPTION_LANGUAGE_DEFAULT),
            tts_model=os.environ.get("TTS_MODEL", TTS_MODEL_DEFAULT),
            tts_voice=os.environ.get("TTS_VOICE", TTS_VOICE_DEFAULT),

            silence_threshold=float(os.environ.get("SILENCE_THRESHOLD", SILENCE_THRESHOLD_DEFAULT)),
            silence_duration_ms=int(os.environ.get("SILENCE_DURATION_MS", SILENCE_DURATION_MS_DEFAULT)),
            sample_rate_hz=int(os.environ.get("SAMPLE_RATE_HZ", WAV_SAMPLE_RATE_HZ_DEFAULT)),

            artifact_dir=os.environ.get("ARTIFACT_DIR", ARTIFACT_DIR_DEFAULT),
            artifact_ttl_s=float(os.environ.get("ARTIFACT_TTL_S", ARTIFACT_TTL_S_DEFAULT)),
        )
