"""
Minimal WAV container encoder.

Layout (little-endian throughout, 44-byte header):

    0   "RIFF"
    4   u32  36 + data_bytes
    8   "WAVE"
    12  "fmt "
    16  u32  16          (fmt chunk size)
    20  u16  1           (PCM)
    22  u16  1           (mono)
    24  u32  sample_rate
    28  u32  sample_rate * 2
    32  u16  2           (block align)
    34  u16  16          (bits per sample)
    36  "data"
    40  u32  data_bytes
    44  i16[n] samples

Pure functions only. No I/O.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from constants import (
    PCM16_SCALE,
    WAV_BITS_PER_SAMPLE,
    WAV_BYTES_PER_SAMPLE,
    WAV_CHANNELS,
    WAV_FMT_CHUNK_BYTES,
    WAV_HEADER_BYTES,
    WAV_PCM_FORMAT_TAG,
    WAV_SAMPLE_RATE_HZ_DEFAULT,
)

_HEADER = struct.Struct("<4sI4s4sIHHIIHH4sI")


@dataclass(frozen=True)
class WavHeader:
    """Decoded header fields of a container produced by encode_wav()."""
    riff_size: int
    format_tag: int
    channels: int
    sample_rate: int
    byte_rate: int
    block_align: int
    bits_per_sample: int
    data_bytes: int

    @property
    def sample_count(self) -> int:
        return self.data_bytes // self.block_align if self.block_align else 0


def samples_to_pcm16le(samples: Sequence[float] | np.ndarray) -> bytes:
    """
    Scale normalized samples to signed 16-bit little-endian PCM.

    Each sample becomes round(sample * 32767), with exact halves rounded to
    even (-0.5 -> -16384, 0.5 -> 16384). Out-of-range input is NOT
    clipped: any finite value beyond int16 wraps around modulo 2**16.
    Callers that need clipping must do it before encoding.
    """
    audio = np.asarray(samples, dtype=np.float64)
    scaled = np.round(audio * PCM16_SCALE)
    # reduce in float first so huge magnitudes still fit int64
    scaled = np.fmod(scaled, 65536.0).astype(np.int64)
    # int64 -> int16 keeps the low 16 bits (two's complement wraparound)
    return scaled.astype("<i2").tobytes()


def encode_wav(
    samples: Sequence[float] | np.ndarray,
    sample_rate: int = WAV_SAMPLE_RATE_HZ_DEFAULT,
) -> bytes:
    """
    Encode normalized mono samples as a 16-bit PCM WAV container.

    Output length is always 44 + 2 * len(samples).
    """
    pcm = samples_to_pcm16le(samples)
    data_bytes = len(pcm)
    block_align = WAV_CHANNELS * WAV_BYTES_PER_SAMPLE

    header = _HEADER.pack(
        b"RIFF",
        36 + data_bytes,
        b"WAVE",
        b"fmt ",
        WAV_FMT_CHUNK_BYTES,
        WAV_PCM_FORMAT_TAG,
        WAV_CHANNELS,
        sample_rate,
        sample_rate * block_align,
        block_align,
        WAV_BITS_PER_SAMPLE,
        b"data",
        data_bytes,
    )
    return header + pcm


def describe_wav(data: bytes) -> WavHeader:
    """
    Read back the header of a container produced by encode_wav().

    Raises:
        ValueError if the buffer is too short or the magic tags don't match.
    """
    if len(data) < WAV_HEADER_BYTES:
        raise ValueError(f"WAV header needs {WAV_HEADER_BYTES} bytes, got {len(data)}")

    (
        riff, riff_size, wave, fmt, _fmt_size, format_tag, channels,
        sample_rate, byte_rate, block_align, bits, data_tag, data_bytes,
    ) = _HEADER.unpack_from(data, 0)

    if riff != b"RIFF" or wave != b"WAVE" or fmt != b"fmt " or data_tag != b"data":
        raise ValueError("not a RIFF/WAVE container")

    return WavHeader(
        riff_size=riff_size,
        format_tag=format_tag,
        channels=channels,
        sample_rate=sample_rate,
        byte_rate=byte_rate,
        block_align=block_align,
        bits_per_sample=bits,
        data_bytes=data_bytes,
    )
