"""
Tests for the selection engine.

Author: Michael Economou
Date: 2026-03-02

Click and keyboard selection rules on a listing of two folders and three
files (indices 0-1 are folders, 2-4 are files).
"""

from __future__ import annotations

import pytest

from samplepool.core.selection.selection_engine import (
    NO_ANCHOR,
    SelectionState,
    apply_click,
    clamp_cursor,
    clear_selection,
    move_cursor,
    prune_selection,
    select_all,
)
from samplepool.domain.keyboard import KeyboardModifier
from samplepool.models.file_entry import FileEntry


@pytest.fixture
def listing():
    return [
        FileEntry("bass", "/pool/bass", is_directory=True),
        FileEntry("drums", "/pool/drums", is_directory=True),
        FileEntry("a.wav", "/pool/a.wav", size=10),
        FileEntry("b.wav", "/pool/b.wav", size=20),
        FileEntry("c.wav", "/pool/c.wav", size=30),
    ]


class TestApplyClick:
    """Mouse clicks."""

    def test_plain_click_on_file_selects_only_it(self, listing):
        state = SelectionState(frozenset({"/pool/a.wav"}))
        outcome = apply_click(listing, state, 3)

        assert outcome.navigate_to is None
        assert outcome.state.selection == {"/pool/b.wav"}
        assert outcome.state.cursor_index == 3
        assert outcome.state.last_clicked_index == 3

    def test_plain_click_on_directory_navigates(self, listing):
        """Selection is untouched when a folder is opened."""
        state = SelectionState(frozenset({"/pool/a.wav"}), cursor_index=2)
        outcome = apply_click(listing, state, 1)

        assert outcome.navigate_to == "/pool/drums"
        assert outcome.state == state

    def test_command_click_toggles(self, listing):
        state = SelectionState(frozenset({"/pool/a.wav"}), last_clicked_index=2)

        added = apply_click(listing, state, 4, KeyboardModifier.CTRL).state
        assert added.selection == {"/pool/a.wav", "/pool/c.wav"}
        assert added.last_clicked_index == 4

        removed = apply_click(listing, added, 2, KeyboardModifier.META).state
        assert removed.selection == {"/pool/c.wav"}
        assert removed.cursor_index == 2

    def test_command_click_on_directory_selects_it(self, listing):
        outcome = apply_click(listing, SelectionState(), 0, KeyboardModifier.CTRL)
        assert outcome.navigate_to is None
        assert outcome.state.selection == {"/pool/bass"}

    def test_shift_click_adds_range_and_keeps_anchor(self, listing):
        state = SelectionState(frozenset({"/pool/c.wav"}), cursor_index=0, last_clicked_index=0)
        state = apply_click(listing, state, 3, KeyboardModifier.SHIFT).state

        assert state.selection == {
            "/pool/bass",
            "/pool/drums",
            "/pool/a.wav",
            "/pool/b.wav",
            "/pool/c.wav",
        }
        assert state.cursor_index == 3
        assert state.last_clicked_index == 0

    def test_destination_range_leaves_out_directories(self, listing):
        """The destination pane leaves folders out of ranges."""
        state = SelectionState(last_clicked_index=0)
        state = apply_click(listing, state, 4, KeyboardModifier.SHIFT, destination_pane=True).state

        assert state.selection == {"/pool/a.wav", "/pool/b.wav", "/pool/c.wav"}

    @pytest.mark.parametrize(
        "modifiers",
        [
            KeyboardModifier.NONE,
            KeyboardModifier.CTRL,
            KeyboardModifier.META,
            KeyboardModifier.SHIFT,
            KeyboardModifier.CTRL | KeyboardModifier.SHIFT,
        ],
    )
    def test_destination_directory_click_always_navigates(self, listing, modifiers):
        state = SelectionState(frozenset({"/pool/a.wav"}), cursor_index=2, last_clicked_index=2)
        outcome = apply_click(listing, state, 0, modifiers, destination_pane=True)

        assert outcome.navigate_to == "/pool/bass"
        assert outcome.state == state

    @pytest.mark.parametrize(
        "modifiers",
        [KeyboardModifier.CTRL, KeyboardModifier.META, KeyboardModifier.SHIFT],
    )
    def test_source_directory_click_with_modifier_selects(self, listing, modifiers):
        state = SelectionState(last_clicked_index=2)
        outcome = apply_click(listing, state, 1, modifiers)

        assert outcome.navigate_to is None
        assert "/pool/drums" in outcome.state.selection
        assert outcome.state.cursor_index == 1

    def test_shift_click_on_directory_without_anchor_selects_it(self, listing):
        outcome = apply_click(listing, SelectionState(), 0, KeyboardModifier.SHIFT)
        assert outcome.navigate_to is None
        assert outcome.state.selection == {"/pool/bass"}

    def test_shift_click_without_anchor_is_plain_click(self, listing):
        state = apply_click(listing, SelectionState(), 3, KeyboardModifier.SHIFT).state
        assert state.selection == {"/pool/b.wav"}
        assert state.last_clicked_index == 3

    def test_out_of_range_click_is_ignored(self, listing):
        state = SelectionState(frozenset({"/pool/a.wav"}))
        assert apply_click(listing, state, 9).state is state
        assert apply_click(listing, state, -1).state is state


class TestKeyboardSelection:
    """Arrow keys, select all and escape."""

    def test_shift_arrow_down_extends_selection(self, listing):
        """Cursor at 2, Shift+Down: cursor 3 and the selection grows."""
        state = SelectionState(frozenset({"/pool/a.wav"}), cursor_index=2)
        state = move_cursor(listing, state, 1, extend=True)

        assert state.cursor_index == 3
        assert state.selection == {"/pool/a.wav", "/pool/b.wav"}

    def test_arrow_replaces_selection(self, listing):
        state = SelectionState(frozenset({"/pool/a.wav", "/pool/b.wav"}), cursor_index=3)
        state = move_cursor(listing, state, -1)

        assert state.cursor_index == 2
        assert state.selection == {"/pool/a.wav"}

    def test_shift_arrow_includes_directories(self, listing):
        state = move_cursor(listing, SelectionState(cursor_index=2), -1, extend=True)
        assert "/pool/drums" in state.selection

    def test_cursor_stops_at_bounds(self, listing):
        assert move_cursor(listing, SelectionState(cursor_index=4), 1).cursor_index == 4
        assert move_cursor(listing, SelectionState(cursor_index=0), -1).cursor_index == 0

    def test_empty_listing_is_a_no_op(self):
        state = SelectionState()
        assert move_cursor([], state, 1) is state

    def test_select_all_includes_directories(self, listing):
        state = select_all(listing, SelectionState())
        assert len(state.selection) == 5

    def test_clear_selection_keeps_cursor(self, listing):
        state = SelectionState(frozenset({"/pool/a.wav"}), cursor_index=2)
        cleared = clear_selection(state)
        assert cleared.selection == frozenset()
        assert cleared.cursor_index == 2


class TestPruneSelection:
    """State after a listing refresh."""

    def test_drops_vanished_paths(self, listing):
        state = SelectionState(frozenset({"/pool/a.wav", "/pool/gone.wav"}), last_clicked_index=3)
        state = prune_selection(listing, state)

        assert state.selection == {"/pool/a.wav"}
        assert state.last_clicked_index == NO_ANCHOR

    def test_clamps_cursor(self, listing):
        state = prune_selection(listing[:2], SelectionState(cursor_index=4))
        assert state.cursor_index == 1

    def test_empty_listing_resets_cursor(self):
        assert prune_selection([], SelectionState(cursor_index=3)).cursor_index == 0

    @pytest.mark.parametrize(
        ("index", "length", "expected"), [(5, 3, 2), (-2, 3, 0), (1, 3, 1), (4, 0, 0)]
    )
    def test_clamp_cursor(self, index, length, expected):
        assert clamp_cursor(index, length) == expected
