"""
file_entry.py

Author: Michael Economou
Date: 2026-03-02

Immutable representation of one directory listing row.

Listings are produced by the filesystem service and are read-only for the
rest of the application. ``path`` is the unique key of an entry within
its listing; selections are sets of these paths.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from samplepool.config import AUDIO_EXTENSIONS, FORMAT_LABELS


def extension_of(name: str) -> str:
    """Return the lowercase extension of ``name`` without the dot."""
    return os.path.splitext(name)[1][1:].lower()


def is_audio_file(name: str) -> bool:
    return extension_of(name) in AUDIO_EXTENSIONS


@dataclass(frozen=True, slots=True)
class FileEntry:
    """One entry of a directory listing.

    Audio properties are ``None`` when the file is not audio, the header
    could not be read, or the entry is a directory.
    """

    name: str
    path: str
    is_directory: bool = False
    size: int = 0
    channels: int | None = None
    bit_rate: int | None = None
    sample_rate: int | None = None

    @property
    def extension(self) -> str:
        return "" if self.is_directory else extension_of(self.name)

    @property
    def format(self) -> str:
        """Display label of the audio format (WAV, AIF, MP3, ...), or empty."""
        return FORMAT_LABELS.get(self.extension, "")

    @property
    def is_audio(self) -> bool:
        return not self.is_directory and self.extension in AUDIO_EXTENSIONS
