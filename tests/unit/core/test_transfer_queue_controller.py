"""
Tests for TransferQueueController.

Author: Michael Economou
Date: 2026-03-02

Covers sequential batches, conflict suspension and resumption, the sticky
overwrite/skip modes, queued batches, copies finishing on a background runner
and transfer list management.
"""

from __future__ import annotations

import os

import pytest

from samplepool.core.exceptions import StaleBatchError
from samplepool.core.transfer.conflict_resolver import ConflictDecision, OverwriteMode
from samplepool.core.transfer.pending_batch import PendingBatch
from samplepool.core.transfer.queue_controller import (
    TransferQueueController,
    TransferSortColumn,
    sort_transfers,
)
from samplepool.models.transfer_item import TransferItem, TransferStatus
from tests.mocks import POOL, SAMPLES, ManualTaskRunner


def src(*names: str) -> list[str]:
    return [os.path.join(SAMPLES, name) for name in names]


class Recorder:
    """Collects signal emissions of a controller."""

    def __init__(self, controller: TransferQueueController):
        self.refreshes: list[str] = []
        self.finished: list[str] = []
        self.conflicts: list[PendingBatch] = []
        self.added: list[TransferItem] = []
        controller.refresh_requested.connect(self.refreshes.append)
        controller.batch_finished.connect(self.finished.append)
        controller.conflict_detected.connect(self.conflicts.append)
        controller.transfer_added.connect(self.added.append)


def statuses(controller: TransferQueueController) -> list[tuple[str, TransferStatus]]:
    return [(item.file_name, item.status) for item in controller.transfers]


class TestSequentialBatch:
    """Batches without conflicts."""

    def test_three_files_complete_in_order(self, controller, fake_fs):
        """Every file is copied once, in order, and the destination refreshed once."""
        recorder = Recorder(controller)

        result = controller.start_batch(src("a.wav", "b.wav", "c.wav"), POOL)

        assert result is None
        assert statuses(controller) == [
            ("a.wav", TransferStatus.COMPLETED),
            ("b.wav", TransferStatus.COMPLETED),
            ("c.wav", TransferStatus.COMPLETED),
        ]
        assert recorder.refreshes == [POOL]
        assert recorder.finished == [POOL]
        expected = [(p,) for p in src("a.wav", "b.wav", "c.wav")]
        assert [call[0] for call in fake_fs.copy_calls] == expected
        assert all(call[2] is False for call in fake_fs.copy_calls)

    def test_empty_batch_is_ignored(self, controller, fake_fs):
        """An empty batch creates nothing and requests no refresh."""
        recorder = Recorder(controller)

        assert controller.start_batch([], POOL) is None
        assert controller.transfers == []
        assert recorder.refreshes == []
        assert fake_fs.copy_calls == []

    def test_io_failure_does_not_stop_batch(self, controller, fake_fs):
        """A failed copy is recorded with its message and the next file still runs."""
        fake_fs.io_failures["b.wav"] = "No space left on device"

        controller.start_batch(src("a.wav", "b.wav", "c.wav"), POOL)

        b = controller.transfers[1]
        assert b.status is TransferStatus.FAILED
        assert b.error == "No space left on device"
        assert controller.transfers[2].status is TransferStatus.COMPLETED
        assert controller.has_failed
        assert not controller.all_succeeded

    def test_raising_copy_primitive_becomes_failure(self, controller, fake_fs):
        """An exception from the copy primitive fails only that item."""
        fake_fs.raise_on_copy["a.wav"] = OSError("device unplugged")

        controller.start_batch(src("a.wav", "b.wav"), POOL)

        assert controller.transfers[0].status is TransferStatus.FAILED
        assert controller.transfers[0].error == "device unplugged"
        assert controller.transfers[1].status is TransferStatus.COMPLETED

    def test_progress_updates_bytes_transferred(self, controller):
        """Progress reports move bytes_transferred while the item is copying."""
        seen = []
        controller.transfer_updated.connect(
            lambda item: seen.append((item.status, item.bytes_transferred))
        )
        path = src("a.wav")[0]

        controller.start_batch([path], POOL, file_sizes={path: 2000})

        assert (TransferStatus.COPYING, 1000) in seen
        assert seen[-1] == (TransferStatus.COMPLETED, 2000)
        assert controller.transfers[0].progress == 1.0

    def test_force_overwrite_skips_conflict(self, controller, fake_fs):
        """A forced batch copies over existing files without asking."""
        fake_fs.add(POOL, "a.wav")
        recorder = Recorder(controller)

        result = controller.start_batch(src("a.wav"), POOL, force_overwrite=True)

        assert result is None
        assert recorder.conflicts == []
        assert fake_fs.copy_calls == [(tuple(src("a.wav")), POOL, True)]
        assert controller.transfers[0].status is TransferStatus.COMPLETED


class TestConflictSuspension:
    """Batches stopping on existing files."""

    def test_single_overwrite(self, controller, fake_fs):
        """Overwrite retries the conflicting file and leaves the mode unset."""
        fake_fs.add(POOL, "a.wav")
        recorder = Recorder(controller)

        pending = controller.start_batch(src("a.wav"), POOL)

        assert pending is not None
        assert pending.file_name == "a.wav"
        assert pending.remaining == 1
        assert recorder.conflicts == [pending]
        assert recorder.refreshes == []
        assert controller.transfers[0].status is TransferStatus.COPYING

        assert controller.resolve_conflict(pending, ConflictDecision.OVERWRITE) is None

        assert fake_fs.copy_calls[-1][2] is True
        assert controller.transfers[0].status is TransferStatus.COMPLETED
        assert controller.resolver.mode is OverwriteMode.NONE
        assert controller.pending is None
        assert recorder.refreshes == [POOL]

    def test_overwrite_all_is_sticky(self, controller, fake_fs):
        """Overwrite All handles the remaining conflicts without another prompt."""
        fake_fs.add(POOL, "a.wav")
        fake_fs.add(POOL, "b.wav")
        recorder = Recorder(controller)

        pending = controller.start_batch(src("a.wav", "b.wav"), POOL)
        assert pending.remaining == 2

        controller.resolve_conflict(pending, ConflictDecision.OVERWRITE_ALL)

        assert controller.resolver.mode is OverwriteMode.OVERWRITE
        assert len(recorder.conflicts) == 1
        assert statuses(controller) == [
            ("a.wav", TransferStatus.COMPLETED),
            ("b.wav", TransferStatus.COMPLETED),
        ]
        b_calls = [call for call in fake_fs.copy_calls if call[0] == tuple(src("b.wav"))]
        assert b_calls == [(tuple(src("b.wav")), POOL, True)]
        assert recorder.refreshes == [POOL]

    def test_failed_overwrite_retry_marks_item_failed(self, controller, fake_fs):
        """Under Overwrite All a retry that fails records its own error and the batch goes on."""
        fake_fs.add(POOL, "a.wav")
        fake_fs.add(POOL, "b.wav")
        fake_fs.overwrite_failures["a.wav"] = "Permission denied"
        fake_fs.overwrite_failures["b.wav"] = "Read-only file system"
        recorder = Recorder(controller)

        pending = controller.start_batch(src("a.wav", "b.wav", "c.wav"), POOL)
        assert controller.resolve_conflict(pending, ConflictDecision.OVERWRITE_ALL) is None

        assert statuses(controller) == [
            ("a.wav", TransferStatus.FAILED),
            ("b.wav", TransferStatus.FAILED),
            ("c.wav", TransferStatus.COMPLETED),
        ]
        assert controller.transfers[0].error == "Permission denied"
        assert controller.transfers[1].error == "Read-only file system"
        assert len(recorder.conflicts) == 1
        assert recorder.refreshes == [POOL]

    def test_cancelled_suspended_item_is_not_overwritten(self, controller, fake_fs):
        """Overwrite on an item cancelled while suspended copies nothing and moves on."""
        fake_fs.add(POOL, "a.wav")
        pending = controller.start_batch(src("a.wav", "b.wav"), POOL)

        assert controller.cancel_transfer(pending.item_id)
        controller.resolve_conflict(pending, ConflictDecision.OVERWRITE)

        item = controller.find(pending.item_id)
        assert item.status is TransferStatus.CANCELLED
        assert item.error == "Transfer cancelled"
        a_calls = [call for call in fake_fs.copy_calls if call[0] == tuple(src("a.wav"))]
        assert a_calls == [(tuple(src("a.wav")), POOL, False)]
        assert controller.transfers[1].status is TransferStatus.COMPLETED

    def test_cancel_import_drops_rest_of_batch(self, controller, fake_fs):
        """Cancel Import marks the conflicting item and never enqueues the rest."""
        fake_fs.add(POOL, "b.wav")
        recorder = Recorder(controller)

        pending = controller.start_batch(src("a.wav", "b.wav", "c.wav"), POOL)
        assert pending.file_name == "b.wav"
        assert pending.current_index == 1

        controller.resolve_conflict(pending, ConflictDecision.CANCEL)

        assert statuses(controller) == [
            ("a.wav", TransferStatus.COMPLETED),
            ("b.wav", TransferStatus.CANCELLED),
        ]
        assert controller.transfers[1].error == "Import cancelled"
        assert all(call[0] != tuple(src("c.wav")) for call in fake_fs.copy_calls)
        assert recorder.refreshes == [POOL]

    def test_skip_continues_with_next_file(self, controller, fake_fs):
        """Skip cancels the conflicting item and resumes after it."""
        fake_fs.add(POOL, "a.wav")

        pending = controller.start_batch(src("a.wav", "b.wav"), POOL)
        controller.resolve_conflict(pending, ConflictDecision.SKIP)

        a, b = controller.transfers
        assert a.status is TransferStatus.CANCELLED
        assert a.error == "Skipped (file exists)"
        assert b.status is TransferStatus.COMPLETED
        assert controller.resolver.mode is OverwriteMode.NONE

    def test_skip_all_skips_later_conflicts_silently(self, controller, fake_fs):
        """Skip All cancels later conflicts without another prompt."""
        fake_fs.add(POOL, "a.wav")
        fake_fs.add(POOL, "c.wav")
        recorder = Recorder(controller)

        pending = controller.start_batch(src("a.wav", "b.wav", "c.wav"), POOL)
        controller.resolve_conflict(pending, ConflictDecision.SKIP_ALL)

        assert len(recorder.conflicts) == 1
        assert statuses(controller) == [
            ("a.wav", TransferStatus.CANCELLED),
            ("b.wav", TransferStatus.COMPLETED),
            ("c.wav", TransferStatus.CANCELLED),
        ]
        assert controller.transfers[2].error == "Skipped (file exists)"

    def test_second_conflict_suspends_again(self, controller, fake_fs):
        """A one-off Overwrite does not answer the next conflict."""
        fake_fs.add(POOL, "a.wav")
        fake_fs.add(POOL, "b.wav")

        first = controller.start_batch(src("a.wav", "b.wav"), POOL)
        second = controller.resolve_conflict(first, ConflictDecision.OVERWRITE)

        assert second is not None
        assert second.file_name == "b.wav"
        assert second.remaining == 1
        assert controller.pending is second

    def test_sticky_mode_resets_for_next_batch(self, controller, fake_fs):
        """Every new batch starts asking again."""
        fake_fs.add(POOL, "a.wav")
        fake_fs.add(POOL, "b.wav")

        pending = controller.start_batch(src("a.wav"), POOL)
        controller.resolve_conflict(pending, ConflictDecision.OVERWRITE_ALL)

        assert controller.start_batch(src("b.wav"), POOL) is not None
        assert controller.resolver.mode is OverwriteMode.NONE

    def test_stale_decision_is_rejected(self, controller, fake_fs):
        """A decision for a batch that is no longer suspended raises."""
        fake_fs.add(POOL, "a.wav")
        pending = controller.start_batch(src("a.wav"), POOL)
        controller.resolve_conflict(pending, ConflictDecision.SKIP)

        with pytest.raises(StaleBatchError):
            controller.resolve_conflict(pending, ConflictDecision.OVERWRITE)

    def test_batch_started_while_suspended_is_queued(self, controller, fake_fs):
        """A second batch waits for the suspended one and then runs."""
        fake_fs.add(POOL, "a.wav")
        recorder = Recorder(controller)

        pending = controller.start_batch(src("a.wav"), POOL)
        assert controller.start_batch(src("c.wav"), POOL) is None
        assert controller.queued_batch_count == 1
        assert [item.file_name for item in controller.transfers] == ["a.wav"]

        controller.resolve_conflict(pending, ConflictDecision.SKIP)

        assert controller.queued_batch_count == 0
        assert statuses(controller)[-1] == ("c.wav", TransferStatus.COMPLETED)
        assert recorder.refreshes == [POOL, POOL]


class TestTransferListManagement:
    """Cancel and clear operations."""

    def test_cancel_finished_item_is_refused(self, controller):
        """Terminal items cannot be cancelled."""
        controller.start_batch(src("a.wav"), POOL)

        assert not controller.cancel_transfer(controller.transfers[0].id)
        assert not controller.cancel_transfer("missing")

    def test_clear_all_keeps_pending_item(self, controller, fake_fs):
        """Clearing while suspended keeps the item awaiting a decision."""
        fake_fs.add(POOL, "b.wav")
        pending = controller.start_batch(src("a.wav", "b.wav"), POOL)

        controller.clear_all()

        assert [item.id for item in controller.transfers] == [pending.item_id]
        controller.resolve_conflict(pending, ConflictDecision.OVERWRITE)
        assert controller.transfers[0].status is TransferStatus.COMPLETED

    def test_clear_finished_keeps_active_items(self, controller, fake_fs):
        """Only terminal items are removed."""
        fake_fs.add(POOL, "b.wav")
        cleared = []
        controller.transfers_cleared.connect(lambda: cleared.append(True))
        pending = controller.start_batch(src("a.wav", "b.wav"), POOL)

        controller.clear_finished()

        assert [item.id for item in controller.transfers] == [pending.item_id]
        assert controller.active_count == 1
        assert cleared == [True]

    def test_all_succeeded(self, controller):
        """all_succeeded needs at least one item and no failures."""
        assert not controller.all_succeeded
        controller.start_batch(src("a.wav", "b.wav"), POOL)
        assert controller.all_succeeded


class TestBackgroundCopies:
    """Copies handed to a task runner that finishes them later."""

    @pytest.fixture
    def runner(self):
        return ManualTaskRunner()

    @pytest.fixture
    def deferred(self, fake_fs, runner):
        return TransferQueueController(fake_fs, runner=runner)

    def test_one_copy_in_flight_at_a_time(self, deferred, fake_fs, runner):
        """The next file starts only when the previous copy reports back."""
        recorder = Recorder(deferred)

        assert deferred.start_batch(src("a.wav", "b.wav"), POOL) is None

        assert deferred.is_busy
        assert statuses(deferred) == [("a.wav", TransferStatus.COPYING)]
        assert len(runner.pending) == 1
        assert fake_fs.copy_calls == []

        runner.run_next()
        assert statuses(deferred) == [
            ("a.wav", TransferStatus.COMPLETED),
            ("b.wav", TransferStatus.COPYING),
        ]
        assert recorder.refreshes == []

        runner.run_all()
        assert deferred.all_succeeded
        assert not deferred.is_busy
        assert recorder.refreshes == [POOL]

    def test_cancel_during_copy_is_advisory(self, deferred, fake_fs, runner):
        """The copy still runs but the cancelled item keeps its status."""
        deferred.start_batch(src("a.wav", "b.wav"), POOL)
        a = deferred.transfers[0]

        assert deferred.cancel_transfer(a.id)
        runner.run_all()

        assert a.status is TransferStatus.CANCELLED
        assert a.error == "Transfer cancelled"
        assert fake_fs.copy_calls[0][0] == tuple(src("a.wav"))
        assert deferred.transfers[1].status is TransferStatus.COMPLETED

    def test_conflict_suspends_when_copy_reports_back(self, deferred, fake_fs, runner):
        fake_fs.add(POOL, "a.wav")
        recorder = Recorder(deferred)

        deferred.start_batch(src("a.wav"), POOL)
        assert deferred.pending is None
        runner.run_next()

        pending = deferred.pending
        assert recorder.conflicts == [pending]
        assert deferred.resolve_conflict(pending, ConflictDecision.OVERWRITE) is None
        assert deferred.transfers[0].status is TransferStatus.COPYING

        runner.run_all()
        assert deferred.transfers[0].status is TransferStatus.COMPLETED
        assert recorder.refreshes == [POOL]

    def test_batch_started_during_copy_is_queued(self, deferred, runner):
        recorder = Recorder(deferred)
        deferred.start_batch(src("a.wav"), POOL)

        assert deferred.start_batch(src("b.wav"), POOL) is None
        assert deferred.queued_batch_count == 1

        runner.run_all()
        assert [item.file_name for item in deferred.transfers] == ["a.wav", "b.wav"]
        assert deferred.all_succeeded
        assert recorder.refreshes == [POOL, POOL]

    def test_clear_all_keeps_copying_item(self, deferred, runner):
        deferred.start_batch(src("a.wav", "b.wav"), POOL)
        runner.run_next()

        deferred.clear_all()

        assert statuses(deferred) == [("b.wav", TransferStatus.COPYING)]
        runner.run_all()
        assert deferred.transfers[0].status is TransferStatus.COMPLETED

    def test_progress_is_delivered_through_the_runner(self, deferred, runner):
        path = src("a.wav")[0]
        deferred.start_batch([path], POOL, file_sizes={path: 2000})
        seen = []
        deferred.transfer_updated.connect(lambda item: seen.append(item.bytes_transferred))

        runner.run_all()

        assert seen == [1000, 2000, 2000]


class TestSortTransfers:
    """Display order of the transfer table."""

    def _items(self):
        done = TransferItem("b.wav", file_size=300)
        done.start()
        done.complete()
        failed = TransferItem("a.wav", file_size=100)
        failed.start()
        failed.fail("boom")
        copying = TransferItem("C.wav", file_size=200)
        copying.start()
        return [done, failed, copying]

    def test_number_keeps_enqueue_order(self):
        items = self._items()
        assert sort_transfers(items) == items
        assert sort_transfers(items, descending=True) == items[::-1]

    def test_status_order(self):
        """Copying first, then completed, then failed."""
        names = [i.file_name for i in sort_transfers(self._items(), TransferSortColumn.STATUS)]
        assert names == ["C.wav", "b.wav", "a.wav"]

    def test_file_name_is_case_insensitive(self):
        names = [i.file_name for i in sort_transfers(self._items(), TransferSortColumn.FILE)]
        assert names == ["a.wav", "b.wav", "C.wav"]

    def test_size_descending(self):
        items = sort_transfers(self._items(), TransferSortColumn.SIZE, descending=True)
        assert [i.file_size for i in items] == [300, 200, 100]

    def test_progress_ascending(self):
        """Ties keep enqueue order."""
        names = [i.file_name for i in sort_transfers(self._items(), TransferSortColumn.PROGRESS)]
        assert names == ["a.wav", "C.wav", "b.wav"]
