"""
Amplitude gate used for silence detection.

A chunk is "sounding" if any single sample's absolute value exceeds the
threshold. Classification is per chunk, not per sample, so one pass over
the chunk decides it.
"""
from __future__ import annotations

from typing import Sequence

import numpy as np


def peak_amplitude(chunk: Sequence[float] | np.ndarray) -> float:
    """Largest absolute sample value in the chunk (0.0 for an empty chunk)."""
    audio = np.asarray(chunk, dtype=np.float64)
    if audio.size == 0:
        return 0.0
    return float(np.max(np.abs(audio)))


def is_sounding(chunk: Sequence[float] | np.ndarray, threshold: float) -> bool:
    """
    True if any sample in the chunk is strictly louder than threshold.

    An empty chunk is silent.
    """
    return peak_amplitude(chunk) > threshold
