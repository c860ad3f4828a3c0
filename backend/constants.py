"""
BEHAVIOR-AS-CONSTANTS
---------------------
Single source of truth for the default behavioral values of the relay.

Rules:
- If changing a value changes runtime behavior, it belongs here.
- AppConfig may override these from the environment; nothing else should
  hard-code them.
"""

from __future__ import annotations

from typing import Final

# =============================================================================
# Audio container (16-bit PCM mono WAV)
# =============================================================================

WAV_SAMPLE_RATE_HZ_DEFAULT: Final[int] = 44_100
WAV_CHANNELS: Final[int] = 1
WAV_BITS_PER_SAMPLE: Final[int] = 16
WAV_BYTES_PER_SAMPLE: Final[int] = WAV_BITS_PER_SAMPLE // 8
WAV_HEADER_BYTES: Final[int] = 44
WAV_FMT_CHUNK_BYTES: Final[int] = 16
WAV_PCM_FORMAT_TAG: Final[int] = 1

# int16 scale factor for normalized float samples
PCM16_SCALE: Final[int] = 32767

# =============================================================================
# Utterance segmentation
# =============================================================================

SILENCE_THRESHOLD_DEFAULT: Final[float] = 0.01
SILENCE_DURATION_MS_DEFAULT: Final[int] = 2000

# =============================================================================
# External services
# =============================================================================

TRANSCRIPTION_MODEL_DEFAULT: Final[str] = "whisper-1"
TRANSCRIPTION_LANGUAGE_DEFAULT: Final[str] = "en"

TTS_MODEL_DEFAULT: Final[str] = "tts-1"
TTS_VOICE_DEFAULT: Final[str] = "alloy"
TTS_RESPONSE_FORMAT: Final[str] = "mp3"

# Reply template for the deterministic echo responder
REPLY_PREFIX: Final[str] = "You said: "

# =============================================================================
# Artifacts
# =============================================================================

ARTIFACT_TTL_S_DEFAULT: Final[float] = 60.0
ARTIFACT_DIR_DEFAULT: Final[str] = "temp"
ARTIFACT_URL_PREFIX: Final[str] = "/temp"
