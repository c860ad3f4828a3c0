"""Print the header fields of a WAV artifact.

    python tools/wav_info.py temp/audio_1700000000000000000_ab12cd34.wav
"""
import argparse
from pathlib import Path

from audio.wav import describe_wav


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("path", type=Path)
    args = parser.parse_args()

    header = describe_wav(args.path.read_bytes())
    print("sample_rate:", header.sample_rate)
    print("channels:", header.channels)
    print("sample_width_bytes:", header.bits_per_sample // 8)
    print("samples:", header.sample_count)
    print("duration_s:", round(header.sample_count / header.sample_rate, 3) if header.sample_rate else 0)


if __name__ == "__main__":
    main()
