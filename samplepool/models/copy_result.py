"""
copy_result.py

Author: Michael Economou
Date: 2026-03-02

Tagged outcome of one copy attempt.

The copy primitive reports a destination-name collision as CopyConflict,
distinct from every other I/O failure (CopyIoError), so the queue never
has to inspect error wording.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CopyOk:
    destination: str


@dataclass(frozen=True, slots=True)
class CopyConflict:
    """The target already exists and overwrite was not requested."""

    path: str
    message: str = ""

    def __post_init__(self):
        if not self.message:
            object.__setattr__(self, "message", f"File already exists: {self.path}")


@dataclass(frozen=True, slots=True)
class CopyIoError:
    message: str


CopyResult = CopyOk | CopyConflict | CopyIoError
