"""
Tests for ConflictResolver and PendingBatch.

Author: Michael Economou
Date: 2026-03-02
"""

from __future__ import annotations

import dataclasses

import pytest

from samplepool.core.transfer.conflict_resolver import (
    ConflictDecision,
    ConflictResolver,
    OverwriteMode,
)
from samplepool.core.transfer.pending_batch import PendingBatch


class TestConflictResolver:
    """Sticky overwrite mode."""

    def test_starts_without_mode(self):
        resolver = ConflictResolver()
        assert resolver.mode is OverwriteMode.NONE
        assert resolver.needs_decision
        assert not resolver.should_overwrite()

    def test_force_always_overwrites(self):
        """A forced batch overwrites regardless of the mode."""
        resolver = ConflictResolver()
        assert resolver.should_overwrite(force=True)

    @pytest.mark.parametrize(
        ("decision", "mode"),
        [
            (ConflictDecision.OVERWRITE_ALL, OverwriteMode.OVERWRITE),
            (ConflictDecision.SKIP_ALL, OverwriteMode.SKIP),
        ],
    )
    def test_all_decisions_are_sticky(self, decision, mode):
        resolver = ConflictResolver()
        resolver.apply_decision(decision)
        assert resolver.mode is mode
        assert not resolver.needs_decision

    @pytest.mark.parametrize(
        "decision", [ConflictDecision.OVERWRITE, ConflictDecision.SKIP, ConflictDecision.CANCEL]
    )
    def test_single_decisions_leave_mode(self, decision):
        """One-off decisions never change the mode."""
        resolver = ConflictResolver()
        resolver.apply_decision(decision)
        assert resolver.mode is OverwriteMode.NONE

    def test_overwrite_mode_overwrites(self):
        resolver = ConflictResolver()
        resolver.apply_decision(ConflictDecision.OVERWRITE_ALL)
        assert resolver.should_overwrite()

    def test_reset(self):
        resolver = ConflictResolver()
        resolver.apply_decision(ConflictDecision.SKIP_ALL)
        resolver.reset()
        assert resolver.mode is OverwriteMode.NONE

    def test_decision_flags(self):
        assert ConflictDecision.OVERWRITE_ALL.overwrites
        assert ConflictDecision.SKIP.skips
        assert not ConflictDecision.CANCEL.overwrites
        assert not ConflictDecision.CANCEL.skips


class TestPendingBatch:
    """Suspended batch value."""

    def _batch(self, index=1):
        return PendingBatch(
            source_paths=["/s/a.wav", "/s/b.wav", "/s/c.wav"],
            current_index=index,
            destination_dir="/pool",
            item_id="1-1-b.wav",
            file_sizes={"/s/b.wav": 10},
        )

    def test_conflicting_file(self):
        batch = self._batch()
        assert batch.conflicting_path == "/s/b.wav"
        assert batch.file_name == "b.wav"

    def test_remaining_counts_conflicting_path(self):
        assert self._batch(1).remaining == 2
        assert self._batch(2).remaining == 1

    def test_is_immutable(self):
        """Neither the fields nor the captured collections can be changed."""
        batch = self._batch()
        assert isinstance(batch.source_paths, tuple)
        with pytest.raises(dataclasses.FrozenInstanceError):
            batch.current_index = 0  # type: ignore[misc]
        with pytest.raises(TypeError):
            batch.file_sizes["/s/c.wav"] = 5  # type: ignore[index]

    def test_directory_source_name(self):
        """Trailing separators do not hide the folder name."""
        batch = PendingBatch(("/s/drums/",), 0, "/pool", "id")
        assert batch.file_name == "drums"
