"""Module: ingestion.py

Author: Michael Economou
Date: 2026-03-02

Ingestion adapters: every way files enter the transfer queue.

- in-app drag between panes (JSON array of absolute paths)
- OS-level drop onto the destination pane
- "Copy" of the source pane selection (toolbar or keyboard)
- import dialogs (files, folder)

All of them normalize their input to an ordered list of absolute paths and
call TransferQueueController.start_batch, so every entry point goes through
the same conflict handling and the sticky overwrite mode is reset each time.
"""

from __future__ import annotations

import json
import os
from collections.abc import Iterable
from typing import TYPE_CHECKING

from samplepool.core.selection.selection_engine import clear_selection
from samplepool.utils.events import Observable, Signal
from samplepool.utils.logging.logger_factory import get_cached_logger

if TYPE_CHECKING:
    from samplepool.app.state.pane_model import PaneModel
    from samplepool.core.transfer.pending_batch import PendingBatch
    from samplepool.core.transfer.queue_controller import TransferQueueController

logger = get_cached_logger(__name__)


def encode_drag_payload(paths: Iterable[str]) -> bytes:
    """Serialize dragged paths as a UTF-8 JSON array."""
    return json.dumps(list(paths), ensure_ascii=False).encode("utf-8")


def decode_drag_payload(payload: bytes | str) -> list[str]:
    """Parse an in-app drag payload; malformed payloads yield no paths."""
    try:
        if isinstance(payload, bytes):
            payload = payload.decode("utf-8")
        data = json.loads(payload)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning("[Ingestion] Ignoring malformed drag payload: %s", e)
        return []

    if not isinstance(data, list) or not all(isinstance(p, str) for p in data):
        logger.warning("[Ingestion] Ignoring drag payload that is not a list of paths")
        return []
    return [p for p in data if p]


def normalize_paths(paths: Iterable[str]) -> list[str]:
    """Absolute, normalized, de-duplicated paths in first-seen order."""
    seen: set[str] = set()
    result = []
    for path in paths:
        if not path:
            continue
        normalized = os.path.normpath(os.path.abspath(path))
        if normalized not in seen:
            seen.add(normalized)
            result.append(normalized)
    return result


class DropZone(Observable):
    """Highlight state of the OS drop target.

    Hover/leave/drop only toggle the highlight; they never look at the queue.
    """

    highlight_changed = Signal(bool)
    dropped = Signal(list)

    def __init__(self) -> None:
        super().__init__()
        self.highlighted = False

    def _set_highlight(self, value: bool) -> None:
        if value != self.highlighted:
            self.highlighted = value
            self.highlight_changed.emit(value)

    def hover(self) -> None:
        self._set_highlight(True)

    def leave(self) -> None:
        self._set_highlight(False)

    def drop(self, paths: Iterable[str]) -> None:
        self._set_highlight(False)
        normalized = normalize_paths(paths)
        if normalized:
            self.dropped.emit(normalized)


class IngestionService(Observable):
    """Turns user gestures into transfer batches."""

    transfer_panel_requested = Signal()

    def __init__(
        self,
        controller: TransferQueueController,
        source: PaneModel,
        destination: PaneModel,
    ):
        super().__init__()
        self._controller = controller
        self._source = source
        self._destination = destination

    def _known_sizes(self, paths: Iterable[str]) -> dict[str, int]:
        """Sizes of the given paths as listed by either pane (files only)."""
        wanted = set(paths)
        sizes = {}
        for pane in (self._source, self._destination):
            for entry in pane.listing:
                if entry.path in wanted and not entry.is_directory:
                    sizes[entry.path] = entry.size
        return sizes

    def _submit(self, paths: list[str], destination_dir: str, origin: str) -> PendingBatch | None:
        if not paths:
            logger.debug("[Ingestion] Nothing to copy from %s", origin, extra={"dev_only": True})
            return None
        if not destination_dir:
            logger.warning("[Ingestion] No destination directory for %s", origin)
            return None

        logger.info("[Ingestion] %s: %d path(s) -> %s", origin, len(paths), destination_dir)
        self.transfer_panel_requested.emit()
        return self._controller.start_batch(
            paths, destination_dir, file_sizes=self._known_sizes(paths)
        )

    def ingest_internal_drag(
        self, payload: bytes | str, destination_dir: str | None = None
    ) -> PendingBatch | None:
        """Pane-to-pane drag; defaults to the destination pane's folder."""
        paths = normalize_paths(decode_drag_payload(payload))
        return self._submit(paths, destination_dir or self._destination.current_path, "drag")

    def ingest_external_drop(
        self, paths: Iterable[str], destination_dir: str | None = None
    ) -> PendingBatch | None:
        """OS drop onto the destination pane."""
        return self._submit(
            normalize_paths(paths), destination_dir or self._destination.current_path, "drop"
        )

    def copy_selection(self) -> PendingBatch | None:
        """Copy the source pane selection into the destination pane folder."""
        return self._copy_pane_selection(self._source, self._destination.current_path)

    def copy_back_to_source(self) -> PendingBatch | None:
        """Copy the destination pane selection into the source pane folder."""
        return self._copy_pane_selection(self._destination, self._source.current_path)

    def _copy_pane_selection(self, pane: PaneModel, destination_dir: str) -> PendingBatch | None:
        entries = pane.selected_entries()
        if not entries or not destination_dir:
            return None

        paths = [entry.path for entry in entries]
        pane.apply_state(clear_selection(pane.state))
        return self._submit(paths, destination_dir, f"{pane.role} selection")

    def import_files(
        self, paths: Iterable[str], destination_dir: str | None = None
    ) -> PendingBatch | None:
        return self._submit(
            normalize_paths(paths), destination_dir or self._destination.current_path, "import"
        )

    def import_folder(self, path: str, destination_dir: str | None = None) -> PendingBatch | None:
        return self.import_files([path], destination_dir)
