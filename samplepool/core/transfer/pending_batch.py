"""Module: pending_batch.py.

Author: Michael Economou
Date: 2026-03-02

PendingBatch - the continuation of a batch suspended on a conflict.

Captured when the batch stops at ``current_index`` and handed back with the
user's decision to resume it. The value is immutable: resuming never depends
on anything but this record and the controller's transfer list.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True)
class PendingBatch:
    source_paths: tuple[str, ...]
    current_index: int
    destination_dir: str
    item_id: str
    file_sizes: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))
    force_overwrite: bool = False

    def __post_init__(self):
        object.__setattr__(self, "source_paths", tuple(self.source_paths))
        object.__setattr__(self, "file_sizes", MappingProxyType(dict(self.file_sizes)))

    @property
    def conflicting_path(self) -> str:
        return self.source_paths[self.current_index]

    @property
    def file_name(self) -> str:
        return os.path.basename(os.path.normpath(self.conflicting_path))

    @property
    def remaining(self) -> int:
        """Paths left in the batch, the conflicting one included."""
        return len(self.source_paths) - self.current_index
