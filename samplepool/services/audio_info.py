"""Audio header probe.

Author: Michael Economou
Date: 2026-03-02

Reads channel count, bit depth and sample rate from WAV and AIFF headers
without decoding audio data. Other formats (MP3, FLAC, OGG, M4A) are listed
without audio properties.

Usage:
    from samplepool.services.audio_info import probe_audio_info

    info = probe_audio_info("/samples/kick.wav")
    if info:
        print(info.channels, info.bit_depth, info.sample_rate)
"""

from __future__ import annotations

import math
import struct
import wave
from dataclasses import dataclass
from typing import BinaryIO

from samplepool.models.file_entry import extension_of
from samplepool.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)


@dataclass(frozen=True, slots=True)
class AudioInfo:
    channels: int
    bit_depth: int
    sample_rate: int


def probe_audio_info(path: str) -> AudioInfo | None:
    """Return the audio properties of ``path``, or None if they cannot be read."""
    extension = extension_of(path)
    try:
        if extension == "wav":
            return _probe_wav(path)
        if extension in ("aif", "aiff"):
            with open(path, "rb") as f:
                return _read_aiff_comm(f)
    except (OSError, EOFError, OverflowError, ValueError, struct.error, wave.Error) as e:
        logger.debug(
            "[AudioInfo] Cannot read header of %s: %s", path, e, extra={"dev_only": True}
        )
    return None


def _probe_wav(path: str) -> AudioInfo | None:
    try:
        with wave.open(path, "rb") as w:
            return AudioInfo(w.getnchannels(), w.getsampwidth() * 8, w.getframerate())
    except wave.Error:
        # wave only handles integer PCM; float and other codecs still have a fmt chunk
        with open(path, "rb") as f:
            return _read_wav_fmt(f)


def _iter_chunks(f: BinaryIO, byteorder: str):
    """Yield (chunk_id, size) and leave the file positioned at the chunk data."""
    size_format = "<I" if byteorder == "little" else ">I"
    while True:
        header = f.read(8)
        if len(header) < 8:
            return
        chunk_id = header[:4]
        (size,) = struct.unpack(size_format, header[4:])
        start = f.tell()
        yield chunk_id, size
        # Chunks are word aligned
        f.seek(start + size + (size & 1))


def _read_wav_fmt(f: BinaryIO) -> AudioInfo | None:
    header = f.read(12)
    if len(header) < 12 or header[:4] != b"RIFF" or header[8:12] != b"WAVE":
        return None
    for chunk_id, size in _iter_chunks(f, "little"):
        if chunk_id == b"fmt " and size >= 16:
            _fmt, channels, rate, _byte_rate, _align, bits = struct.unpack("<HHIIHH", f.read(16))
            return AudioInfo(channels, bits, rate)
    return None


def _read_aiff_comm(f: BinaryIO) -> AudioInfo | None:
    header = f.read(12)
    if len(header) < 12 or header[:4] != b"FORM" or header[8:12] not in (b"AIFF", b"AIFC"):
        return None
    for chunk_id, size in _iter_chunks(f, "big"):
        if chunk_id == b"COMM" and size >= 18:
            channels, _frames, bits = struct.unpack(">hIh", f.read(8))
            rate = decode_extended(f.read(10))
            return AudioInfo(channels, bits, int(round(rate)))
    return None


def decode_extended(data: bytes) -> float:
    """Decode an 80-bit IEEE 754 extended float (AIFF sample rate).

    Raises:
        ValueError: the value is infinite, NaN or too large for a float.

    """
    if len(data) != 10:
        raise struct.error("extended float needs 10 bytes")
    exponent = ((data[0] & 0x7F) << 8) | data[1]
    mantissa = int.from_bytes(data[2:], "big")
    if exponent == 0 and mantissa == 0:
        return 0.0
    if exponent == 0x7FFF:
        raise ValueError("extended float is infinite or NaN")
    try:
        value = math.ldexp(mantissa, exponent - 16383 - 63)
    except OverflowError as e:
        raise ValueError(f"extended float exponent {exponent} out of range") from e
    return -value if data[0] & 0x80 else value
