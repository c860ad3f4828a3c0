# pylint: disable=missing-module-docstring,missing-function-docstring

import struct
import warnings

import pytest

from audio.wav import describe_wav, encode_wav, samples_to_pcm16le


def u32(data: bytes, offset: int) -> int:
    return struct.unpack_from("<I", data, offset)[0]


def u16(data: bytes, offset: int) -> int:
    return struct.unpack_from("<H", data, offset)[0]


# ---------------------------------------------------------------------
# Header layout
# ---------------------------------------------------------------------

@pytest.mark.parametrize("n, rate", [(0, 44100), (3, 44100), (160, 16000)])
def test_length_and_size_fields(n: int, rate: int):
    data = encode_wav([0.0] * n, rate)

    assert len(data) == 44 + 2 * n
    assert u32(data, 4) == 36 + 2 * n
    assert u32(data, 24) == rate
    assert u32(data, 40) == 2 * n


def test_header_is_byte_exact():
    data = encode_wav([0.5, 0.6, -0.5])

    assert data[0:4] == b"RIFF"
    assert data[8:12] == b"WAVE"
    assert data[12:16] == b"fmt "
    assert u32(data, 16) == 16
    assert u16(data, 20) == 1
    assert u16(data, 22) == 1
    assert u32(data, 24) == 44100
    assert u32(data, 28) == 88200
    assert u16(data, 32) == 2
    assert u16(data, 34) == 16
    assert data[36:40] == b"data"
    assert len(data) == 50


# ---------------------------------------------------------------------
# Sample scaling
# ---------------------------------------------------------------------

def test_samples_scaled_and_rounded():
    data = encode_wav([1.0, -1.0, 0.0, 0.25])

    values = struct.unpack_from("<4h", data, 44)
    assert values == (32767, -32767, 0, round(0.25 * 32767))


def test_out_of_range_samples_wrap_instead_of_clipping():
    # 2.0 * 32767 = 65534 -> low 16 bits as int16 = -2
    pcm = samples_to_pcm16le([2.0])

    assert struct.unpack("<h", pcm)[0] == -2


def test_exact_halves_round_to_even():
    # 0.5 * 32767 = 16383.5, -0.5 * 32767 = -16383.5
    pcm = samples_to_pcm16le([0.5, -0.5])

    assert struct.unpack("<2h", pcm) == (16384, -16384)


@pytest.mark.parametrize("sample", [1e15, -1e15, 3.5e17])
def test_huge_finite_samples_wrap_modulo_16_bits(sample: float):
    product = int(sample * 32767)
    expected = (product + 32768) % 65536 - 32768

    with warnings.catch_warnings():
        warnings.simplefilter("error")
        pcm = samples_to_pcm16le([sample])

    assert struct.unpack("<h", pcm)[0] == expected


# ---------------------------------------------------------------------
# Read-back
# ---------------------------------------------------------------------

def test_describe_wav_reads_back_encoded_header():
    header = describe_wav(encode_wav([0.1] * 10, 22050))

    assert header.sample_rate == 22050
    assert header.channels == 1
    assert header.bits_per_sample == 16
    assert header.sample_count == 10


def test_describe_wav_rejects_non_wav():
    with pytest.raises(ValueError):
        describe_wav(b"\x00" * 44)

    with pytest.raises(ValueError):
        describe_wav(b"RIFF")
