"""Filesystem operations service implementation.

Author: Michael Economou
Date: 2026-03-02

Local implementation of FileSourcePort: directory listings with audio
properties, chunked copies with progress and conflict detection, and the
rename / delete / create-folder primitives.

This is a Qt-free service that can be tested in isolation.

Usage:
    from samplepool.services.filesystem_service import LocalFilesystemService

    service = LocalFilesystemService()
    entries = service.list_directory("/samples")
    result = service.copy_files(["/samples/kick.wav"], "/pool", overwrite=False)
"""

from __future__ import annotations

import contextlib
import os
import shutil
from collections.abc import Sequence
from typing import TYPE_CHECKING

from samplepool.config import COPY_CHUNK_SIZE
from samplepool.core.exceptions import ListingError, MutationError
from samplepool.models.copy_result import CopyConflict, CopyIoError, CopyOk, CopyResult
from samplepool.models.file_entry import FileEntry
from samplepool.services.audio_info import probe_audio_info
from samplepool.utils.logging.logger_factory import get_cached_logger

if TYPE_CHECKING:
    from samplepool.app.ports.filesystem import ProgressCallback

logger = get_cached_logger(__name__)


def _is_hidden(name: str) -> bool:
    return name.startswith(".")


class LocalFilesystemService:
    """Filesystem collaborator backed by the local disk."""

    def __init__(self, chunk_size: int = COPY_CHUNK_SIZE, probe_audio: bool = True) -> None:
        self._chunk_size = chunk_size
        self._probe_audio = probe_audio

    # -------------------------------------------------------------------------
    # Listing
    # -------------------------------------------------------------------------

    def list_directory(self, path: str) -> list[FileEntry]:
        """List ``path`` without hidden entries, directories first then by name.

        Raises:
            ListingError: ``path`` cannot be read.

        """
        try:
            with os.scandir(path) as it:
                raw = [entry for entry in it if not _is_hidden(entry.name)]
        except OSError as e:
            raise ListingError(path, e.strerror or str(e)) from e

        entries = []
        for dir_entry in raw:
            try:
                entries.append(self._make_entry(dir_entry))
            except (OSError, ValueError) as e:
                # Broken symlink, entry removed while listing or unreadable header
                logger.debug(
                    "[FilesystemService] Skipping %s: %s",
                    dir_entry.path,
                    e,
                    extra={"dev_only": True},
                )

        entries.sort(key=lambda e: (not e.is_directory, e.name.casefold()))
        return entries

    def _make_entry(self, dir_entry: os.DirEntry) -> FileEntry:
        if dir_entry.is_dir():
            return FileEntry(name=dir_entry.name, path=dir_entry.path, is_directory=True)

        size = dir_entry.stat().st_size
        info = probe_audio_info(dir_entry.path) if self._probe_audio else None
        if info is None:
            return FileEntry(name=dir_entry.name, path=dir_entry.path, size=size)
        return FileEntry(
            name=dir_entry.name,
            path=dir_entry.path,
            size=size,
            channels=info.channels,
            bit_rate=info.bit_depth,
            sample_rate=info.sample_rate,
        )

    # -------------------------------------------------------------------------
    # Copy
    # -------------------------------------------------------------------------

    def copy_files(
        self,
        source_paths: Sequence[str],
        destination_dir: str,
        overwrite: bool,
        progress: ProgressCallback | None = None,
    ) -> CopyResult:
        """Copy files or directory trees into ``destination_dir``.

        Nothing is copied when one of the targets exists and ``overwrite`` is
        off: the first such target is reported as a CopyConflict.
        """
        if not os.path.isdir(destination_dir):
            return CopyIoError(f"Destination is not a directory: {destination_dir}")

        pairs = []
        for source in source_paths:
            source = os.path.normpath(source)
            target = os.path.join(destination_dir, os.path.basename(source))
            if os.path.normpath(target) == source:
                return CopyIoError(f"Source and destination are the same: {source}")
            if os.path.isdir(source) and _is_inside(destination_dir, source):
                return CopyIoError(f"Cannot copy a folder into itself: {source}")
            if os.path.lexists(target) and not overwrite:
                kind = "Directory" if os.path.isdir(target) else "File"
                return CopyConflict(target, f"{kind} already exists: {target}")
            pairs.append((source, target))

        target = destination_dir
        try:
            for source, target in pairs:
                if os.path.lexists(target):
                    self._remove(target)
                if os.path.isdir(source):
                    shutil.copytree(source, target)
                else:
                    self._copy_file(source, target, progress)
        except OSError as e:
            logger.warning("[FilesystemService] Copy failed: %s", e)
            return CopyIoError(str(e))

        if progress is not None:
            progress("complete", 1.0)
        return CopyOk(target)

    def _copy_file(self, source: str, target: str, progress: ProgressCallback | None) -> None:
        total = os.path.getsize(source)
        copied = 0
        try:
            with open(source, "rb") as src, open(target, "wb") as dst:
                while chunk := src.read(self._chunk_size):
                    dst.write(chunk)
                    copied += len(chunk)
                    if progress is not None and total:
                        progress("copying", copied / total)
            shutil.copystat(source, target)
        except OSError:
            with contextlib.suppress(OSError):
                os.remove(target)
            raise

    @staticmethod
    def _remove(path: str) -> None:
        if os.path.isdir(path) and not os.path.islink(path):
            shutil.rmtree(path)
        else:
            os.remove(path)

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def rename_entry(self, old_path: str, new_name: str) -> str:
        if not new_name or new_name in (".", "..") or os.sep in new_name or "/" in new_name:
            raise MutationError("rename", old_path, f"Invalid name: {new_name}")

        new_path = os.path.join(os.path.dirname(old_path), new_name)
        if os.path.lexists(new_path):
            raise MutationError("rename", old_path, f"File already exists: {new_path}")
        try:
            os.rename(old_path, new_path)
        except OSError as e:
            raise MutationError("rename", old_path, str(e)) from e
        return new_path

    def delete_entry(self, path: str) -> None:
        try:
            self._remove(path)
        except OSError as e:
            raise MutationError("delete", path, str(e)) from e

    def create_directory(self, base_path: str, name: str) -> str:
        if not name or name in (".", "..") or os.sep in name or "/" in name:
            raise MutationError("create_directory", base_path, f"Invalid name: {name}")

        path = os.path.join(base_path, name)
        try:
            os.mkdir(path)
        except FileExistsError as e:
            raise MutationError("create_directory", path, f"Directory already exists: {path}") from e
        except OSError as e:
            raise MutationError("create_directory", path, str(e)) from e
        return path

    def get_home_directory(self) -> str:
        return os.path.expanduser("~")


def _is_inside(path: str, folder: str) -> bool:
    path = os.path.abspath(path)
    folder = os.path.abspath(folder)
    try:
        return os.path.commonpath([path, folder]) == folder
    except ValueError:
        return False
