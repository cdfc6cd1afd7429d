"""Filesystem port consumed by the pane models and the transfer queue.

Author: Michael Economou
Date: 2026-03-02
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from samplepool.models.copy_result import CopyResult
    from samplepool.models.file_entry import FileEntry

# progress(stage, fraction) with fraction in [0, 1]
ProgressCallback = Callable[[str, float], None]


class FileSourcePort(Protocol):
    """Protocol for the filesystem collaborators used by the core."""

    def list_directory(self, path: str) -> list[FileEntry]:
        """List ``path``, directories first. Raises ListingError."""
        ...

    def copy_files(
        self,
        source_paths: Sequence[str],
        destination_dir: str,
        overwrite: bool,
        progress: ProgressCallback | None = None,
    ) -> CopyResult:
        """Copy files or directory trees into ``destination_dir``.

        Returns CopyConflict when a target exists and ``overwrite`` is False.
        """
        ...

    def rename_entry(self, old_path: str, new_name: str) -> str:
        """Rename in place and return the new path. Raises MutationError."""
        ...

    def delete_entry(self, path: str) -> None:
        """Delete a file or directory tree. Raises MutationError."""
        ...

    def create_directory(self, base_path: str, name: str) -> str:
        """Create ``base_path/name`` and return its path. Raises MutationError."""
        ...

    def get_home_directory(self) -> str:
        ...
