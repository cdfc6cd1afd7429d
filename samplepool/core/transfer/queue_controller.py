"""Module: queue_controller.py.

Author: Michael Economou
Date: 2026-03-02

TransferQueueController - sequential copy queue with conflict suspension.

A batch is an ordered list of source paths copied one at a time into a
destination directory. For each path a TransferItem is created in the
``copying`` state and the copy primitive is called; its tagged result
decides the item's terminal status:

- CopyOk: completed
- CopyIoError: failed with the message, the batch continues
- CopyConflict: depends on the sticky mode of the ConflictResolver
    - overwrite: one retry with overwrite forced
    - skip: cancelled as "Skipped (file exists)"
    - none: the batch is suspended as a PendingBatch and conflict_detected
      is emitted; resolve_conflict() continues it

When a batch ends (or is cancelled from the modal) the destination listing
refresh is requested exactly once. Batches never interleave: a batch started
while another one is suspended waits in a FIFO queue.

Each copy is handed to a TaskRunnerPort and the loop resumes from its result,
so with the Qt runner the copy runs on a worker thread while the UI keeps
repainting. Only one copy is ever in flight.

Cancelling an item only changes its status. A copy already in flight runs
to completion and its outcome is then ignored by the item.
"""

from __future__ import annotations

import os
from collections import deque
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from samplepool.app.ports.task_runner import InlineTaskRunner
from samplepool.config import (
    IMPORT_CANCELLED_MESSAGE,
    SKIPPED_FILE_EXISTS_MESSAGE,
    TRANSFER_CANCELLED_MESSAGE,
)
from samplepool.core.exceptions import StaleBatchError
from samplepool.core.transfer.conflict_resolver import ConflictDecision, ConflictResolver
from samplepool.core.transfer.pending_batch import PendingBatch
from samplepool.models.copy_result import CopyConflict, CopyIoError, CopyOk, CopyResult
from samplepool.models.transfer_item import TransferItem, TransferStatus
from samplepool.utils.events import Observable, Signal
from samplepool.utils.logging.logger_factory import get_cached_logger

if TYPE_CHECKING:
    from collections.abc import Callable

    from samplepool.app.ports.filesystem import FileSourcePort, ProgressCallback
    from samplepool.app.ports.task_runner import TaskRunnerPort

logger = get_cached_logger(__name__)


@dataclass(frozen=True)
class _BatchRequest:
    source_paths: tuple[str, ...]
    destination_dir: str
    file_sizes: dict[str, int] = field(default_factory=dict)
    force_overwrite: bool = False


class TransferQueueController(Observable):
    """Owns the transfer list and runs batches through the copy primitive."""

    transfer_added = Signal(object)  # TransferItem
    transfer_updated = Signal(object)  # TransferItem
    conflict_detected = Signal(object)  # PendingBatch
    refresh_requested = Signal(str)  # destination directory
    batch_finished = Signal(str)  # destination directory
    transfers_cleared = Signal()

    def __init__(
        self,
        filesystem: FileSourcePort,
        resolver: ConflictResolver | None = None,
        runner: TaskRunnerPort | None = None,
    ):
        super().__init__()
        self._filesystem = filesystem
        self._runner = runner or InlineTaskRunner()
        self.resolver = resolver or ConflictResolver()
        self.transfers: list[TransferItem] = []
        self._pending: PendingBatch | None = None
        self._queued: deque[_BatchRequest] = deque()
        self._active: _BatchRequest | None = None
        self._in_flight: TransferItem | None = None

        # Step scheduled by the loop below; copies finishing inline only set it
        self._next_step: tuple[_BatchRequest, int] | None = None
        self._stepping = False

    # -------------------------------------------------------------------------
    # Batch entry point
    # -------------------------------------------------------------------------

    @property
    def pending(self) -> PendingBatch | None:
        """The suspended batch waiting for a conflict decision, if any."""
        return self._pending

    @property
    def is_busy(self) -> bool:
        return self._active is not None

    @property
    def queued_batch_count(self) -> int:
        return len(self._queued)

    def start_batch(
        self,
        source_paths: Iterable[str],
        destination_dir: str,
        *,
        file_sizes: Mapping[str, int] | None = None,
        force_overwrite: bool = False,
    ) -> PendingBatch | None:
        """Copy ``source_paths`` into ``destination_dir``, in order.

        Returns the PendingBatch when the batch already stopped on a conflict,
        None when it ran to the end, is still copying in the background or was
        queued behind the active batch.
        """
        request = _BatchRequest(
            tuple(source_paths), destination_dir, dict(file_sizes or {}), force_overwrite
        )
        if not request.source_paths:
            logger.debug("[TransferQueue] Empty batch ignored", extra={"dev_only": True})
            return None

        if self.is_busy:
            self._queued.append(request)
            logger.info(
                "[TransferQueue] Batch of %d file(s) queued behind the active batch",
                len(request.source_paths),
            )
            return None

        self._begin(request)
        return self._pending_of(request)

    def _begin(self, request: _BatchRequest) -> None:
        self._active = request
        self.resolver.reset()
        logger.info(
            "[TransferQueue] Starting batch of %d file(s) into %s",
            len(request.source_paths),
            request.destination_dir,
        )
        self._step(request, 0)

    def _pending_of(self, request: _BatchRequest) -> PendingBatch | None:
        return self._pending if self._active is request else None

    # -------------------------------------------------------------------------
    # Sequential loop
    # -------------------------------------------------------------------------

    def _step(self, request: _BatchRequest, index: int) -> None:
        """Process ``request`` from ``index``, one copy at a time.

        A runner may finish a copy before returning from run(); the step is
        then picked up by the loop already running instead of recursing.
        """
        self._next_step = (request, index)
        if self._stepping:
            return

        self._stepping = True
        try:
            while self._next_step is not None:
                request, index = self._next_step
                self._next_step = None
                self._process(request, index)
        finally:
            self._stepping = False

    def _process(self, request: _BatchRequest, index: int) -> None:
        if index >= len(request.source_paths):
            self._finish_batch(request.destination_dir)
            return

        path = request.source_paths[index]
        item = TransferItem(
            file_name=os.path.basename(os.path.normpath(path)),
            file_size=request.file_sizes.get(path, 0),
            source_path=path,
        )
        item.start()
        self.transfers.append(item)
        self.transfer_added.emit(item)

        overwrite = self.resolver.should_overwrite(request.force_overwrite)
        self._copy(
            item,
            request.destination_dir,
            overwrite,
            lambda result: self._on_copied(request, index, item, overwrite, result),
        )

    def _on_copied(
        self,
        request: _BatchRequest,
        index: int,
        item: TransferItem,
        overwrite: bool,
        result: CopyResult,
    ) -> None:
        if not isinstance(result, CopyConflict):
            self._settle(item, result)
        elif item.is_terminal:
            logger.info("[TransferQueue] %s was cancelled, conflict ignored", item.file_name)
        elif overwrite:
            logger.info("[TransferQueue] Conflict on %s, retrying with overwrite", item.file_name)
            self._copy(
                item,
                request.destination_dir,
                True,
                lambda retry: self._settle_and_step(request, index, item, retry),
            )
            return
        elif not self.resolver.needs_decision:
            self._update(item, item.cancel(SKIPPED_FILE_EXISTS_MESSAGE))
        else:
            self._suspend(request, index, item)
            return

        self._step(request, index + 1)

    def _settle_and_step(
        self, request: _BatchRequest, index: int, item: TransferItem, result: CopyResult
    ) -> None:
        self._settle(item, result)
        self._step(request, index + 1)

    def _suspend(self, request: _BatchRequest, index: int, item: TransferItem) -> None:
        logger.info("[TransferQueue] Conflict on %s, waiting for a decision", item.file_name)
        self._pending = PendingBatch(
            source_paths=request.source_paths,
            current_index=index,
            destination_dir=request.destination_dir,
            item_id=item.id,
            file_sizes=request.file_sizes,
            force_overwrite=request.force_overwrite,
        )
        self.conflict_detected.emit(self._pending)

    def _copy(
        self,
        item: TransferItem,
        destination_dir: str,
        overwrite: bool,
        on_done: Callable[[CopyResult], None],
    ) -> None:
        """Hand one copy to the task runner; ``on_done`` gets its CopyResult."""
        filesystem = self._filesystem
        source_path = item.source_path

        def task(progress: ProgressCallback) -> CopyResult:
            try:
                return filesystem.copy_files([source_path], destination_dir, overwrite, progress)
            except Exception as e:
                logger.exception("[TransferQueue] Copy primitive raised for %s", source_path)
                return CopyIoError(str(e))

        def on_progress(stage: str, fraction: float) -> None:
            if item.update_progress(stage, fraction):
                self.transfer_updated.emit(item)

        def finished(result: CopyResult) -> None:
            self._in_flight = None
            on_done(result)

        self._in_flight = item
        self._runner.run(task, finished, on_progress)

    def _settle(self, item: TransferItem, result: CopyResult) -> None:
        if isinstance(result, CopyOk):
            self._update(item, item.complete())
        else:
            logger.warning("[TransferQueue] Failed to copy %s: %s", item.file_name, result.message)
            self._update(item, item.fail(result.message))

    def _update(self, item: TransferItem, changed: bool) -> None:
        if changed:
            self.transfer_updated.emit(item)

    def _finish_batch(self, destination_dir: str) -> None:
        self._active = None
        self.refresh_requested.emit(destination_dir)
        self.batch_finished.emit(destination_dir)

        if self._queued and not self.is_busy:
            self._begin(self._queued.popleft())

    # -------------------------------------------------------------------------
    # Conflict decisions
    # -------------------------------------------------------------------------

    def resolve_conflict(
        self, pending: PendingBatch, decision: ConflictDecision
    ) -> PendingBatch | None:
        """Continue a suspended batch with the user's decision.

        Returns the next PendingBatch if the batch already stopped on another
        conflict of the same batch.

        Raises:
            StaleBatchError: ``pending`` is not the batch currently suspended.

        """
        if pending is not self._pending or self._active is None:
            raise StaleBatchError(f"No suspended batch for {pending.file_name}")
        self._pending = None
        request = self._active

        item = self.find(pending.item_id)
        self.resolver.apply_decision(decision)
        logger.info("[TransferQueue] Decision for %s: %s", pending.file_name, decision.value)

        if decision is ConflictDecision.CANCEL:
            if item is not None:
                self._update(item, item.cancel(IMPORT_CANCELLED_MESSAGE))
            dropped = pending.remaining - 1
            if dropped:
                logger.info("[TransferQueue] Import cancelled, %d file(s) not enqueued", dropped)
            self._finish_batch(pending.destination_dir)
            return None

        index = pending.current_index
        if item is not None and decision.overwrites and not item.is_terminal:
            self._copy(
                item,
                pending.destination_dir,
                True,
                lambda result: self._settle_and_step(request, index, item, result),
            )
        else:
            if item is not None and item.is_terminal:
                logger.info(
                    "[TransferQueue] %s was cancelled while suspended, not copied", item.file_name
                )
            elif item is not None:
                self._update(item, item.cancel(SKIPPED_FILE_EXISTS_MESSAGE))
            self._step(request, index + 1)

        return self._pending_of(request)

    # -------------------------------------------------------------------------
    # Transfer list management
    # -------------------------------------------------------------------------

    def find(self, item_id: str) -> TransferItem | None:
        return next((item for item in self.transfers if item.id == item_id), None)

    def cancel_transfer(self, item_id: str) -> bool:
        """Mark a pending or copying item cancelled. Does not interrupt the copy."""
        item = self.find(item_id)
        if item is None or not item.cancel(TRANSFER_CANCELLED_MESSAGE):
            return False
        logger.info("[TransferQueue] Transfer %s marked cancelled", item.file_name)
        self.transfer_updated.emit(item)
        return True

    def clear_all(self) -> None:
        """Remove every item, except the one copying or awaiting a decision."""
        keep = set()
        if self._in_flight is not None:
            keep.add(self._in_flight.id)
        if self._pending is not None:
            keep.add(self._pending.item_id)
        self.transfers = [item for item in self.transfers if item.id in keep]
        self.transfers_cleared.emit()

    def clear_finished(self) -> None:
        """Remove items whose status is terminal."""
        self.transfers = [item for item in self.transfers if not item.is_terminal]
        self.transfers_cleared.emit()

    @property
    def active_count(self) -> int:
        return sum(1 for item in self.transfers if not item.is_terminal)

    @property
    def has_failed(self) -> bool:
        return any(item.status is TransferStatus.FAILED for item in self.transfers)

    @property
    def all_succeeded(self) -> bool:
        return bool(self.transfers) and all(
            item.status is TransferStatus.COMPLETED for item in self.transfers
        )


class TransferSortColumn(Enum):
    NUMBER = "num"
    PROGRESS = "progress"
    FILE = "file"
    SIZE = "size"
    STATUS = "status"


_STATUS_ORDER = {
    TransferStatus.COPYING: 0,
    TransferStatus.PENDING: 1,
    TransferStatus.COMPLETED: 2,
    TransferStatus.FAILED: 3,
    TransferStatus.CANCELLED: 4,
}


def _progress_key(item: TransferItem) -> float:
    return item.progress


def _file_key(item: TransferItem) -> str:
    return item.file_name.casefold()


def _size_key(item: TransferItem) -> int:
    return item.file_size


def _status_key(item: TransferItem) -> int:
    return _STATUS_ORDER[item.status]


_SORT_KEYS = {
    TransferSortColumn.PROGRESS: _progress_key,
    TransferSortColumn.FILE: _file_key,
    TransferSortColumn.SIZE: _size_key,
    TransferSortColumn.STATUS: _status_key,
}


def sort_transfers(
    items: Sequence[TransferItem],
    column: TransferSortColumn = TransferSortColumn.NUMBER,
    descending: bool = False,
) -> list[TransferItem]:
    """Display order of the transfer list; NUMBER is the enqueue order."""
    if column is TransferSortColumn.NUMBER:
        ordered = list(items)
        return ordered[::-1] if descending else ordered
    return sorted(items, key=_SORT_KEYS[column], reverse=descending)
