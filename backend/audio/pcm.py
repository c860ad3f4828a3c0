"""Inbound sample decoding for the two audio_data encodings (JSON and binary)."""
from __future__ import annotations

import math
from typing import Any

import numpy as np


class InvalidAudioPayload(ValueError):
    """Raised when an audio_data payload cannot be read as a list of samples."""


def float32le_to_samples(payload: bytes) -> list[float]:
    """
    Decode a little-endian float32 buffer (a browser Float32Array) to samples.

    A trailing partial sample is dropped. No clipping, no resampling.
    """
    usable = len(payload) - (len(payload) % 4)
    audio_f32 = np.frombuffer(payload[:usable], dtype="<f4")
    return audio_f32.astype(np.float64).tolist()


def samples_from_json(value: Any) -> list[float]:
    """
    Validate the `samples` field of a JSON audio_data message.

    Raises:
        InvalidAudioPayload for anything that is not a list of finite numbers.
    """
    if not isinstance(value, list):
        raise InvalidAudioPayload(f"samples must be a list, got {type(value).__name__}")

    out: list[float] = []
    for item in value:
        # bool is an int subclass but never a sample
        if isinstance(item, bool) or not isinstance(item, (int, float)):
            raise InvalidAudioPayload(f"non-numeric sample: {item!r}")
        sample = float(item)
        if not math.isfinite(sample):
            raise InvalidAudioPayload(f"non-finite sample: {item!r}")
        out.append(sample)
    return out
