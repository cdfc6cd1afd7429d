"""Module: selection_engine.py

Author: Michael Economou
Date: 2026-03-02

Selection engine: pure functions computing the next selection/cursor state
of a pane from a click or keyboard event.

Nothing here touches a pane model; callers pass the listing and the current
SelectionState and apply the returned state. All indices refer to the
unfiltered listing order.

Click rules (entry ``e`` at index ``i``):
- click on a directory navigates into it, selection unchanged; in the source
  pane only a click without modifiers does, in the destination pane any click
- plain click on a file selects only ``e``
- Ctrl/Cmd-click toggles ``e``
- Shift-click with an anchor adds the inclusive range to the selection
  (the destination pane leaves directories out); the anchor does not move
Every selection click also moves the cursor to ``i``.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace

from samplepool.domain.keyboard import KeyboardModifier
from samplepool.models.file_entry import FileEntry

NO_ANCHOR = -1


@dataclass(frozen=True, slots=True)
class SelectionState:
    selection: frozenset[str] = frozenset()
    cursor_index: int = 0
    last_clicked_index: int = NO_ANCHOR


@dataclass(frozen=True, slots=True)
class ClickOutcome:
    """Result of a click: the new state, and a directory to enter (or None)."""

    state: SelectionState
    navigate_to: str | None = None


def clamp_cursor(index: int, length: int) -> int:
    if length <= 0:
        return 0
    return min(max(index, 0), length - 1)


def apply_click(
    listing: Sequence[FileEntry],
    state: SelectionState,
    index: int,
    modifiers: KeyboardModifier = KeyboardModifier.NONE,
    destination_pane: bool = False,
) -> ClickOutcome:
    """Apply a mouse click on ``listing[index]``.

    ``destination_pane`` selects the pool pane rules: every click on a
    directory navigates, whatever the modifiers, and Shift ranges leave
    directories out.
    """
    if not 0 <= index < len(listing):
        return ClickOutcome(state)

    entry = listing[index]
    command = modifiers.has_command
    shift = modifiers.has_shift

    if entry.is_directory and (destination_pane or not (command or shift)):
        return ClickOutcome(state, navigate_to=entry.path)

    if shift and 0 <= state.last_clicked_index < len(listing):
        low = min(state.last_clicked_index, index)
        high = max(state.last_clicked_index, index)
        added = {
            item.path
            for item in listing[low : high + 1]
            if not (destination_pane and item.is_directory)
        }
        return ClickOutcome(
            replace(state, selection=state.selection | added, cursor_index=index)
        )

    if command:
        if entry.path in state.selection:
            selection = state.selection - {entry.path}
        else:
            selection = state.selection | {entry.path}
        return ClickOutcome(
            SelectionState(selection, cursor_index=index, last_clicked_index=index)
        )

    return ClickOutcome(
        SelectionState(frozenset({entry.path}), cursor_index=index, last_clicked_index=index)
    )


def move_cursor(
    listing: Sequence[FileEntry],
    state: SelectionState,
    delta: int,
    extend: bool = False,
) -> SelectionState:
    """ArrowUp/ArrowDown: move the cursor and select the entry under it.

    With ``extend`` (Shift) the new entry is added to the selection,
    directories included; otherwise it replaces the selection.
    """
    if not listing:
        return state

    cursor = clamp_cursor(state.cursor_index + delta, len(listing))
    path = listing[cursor].path
    selection = state.selection | {path} if extend else frozenset({path})
    return replace(state, selection=selection, cursor_index=cursor)


def select_all(listing: Sequence[FileEntry], state: SelectionState) -> SelectionState:
    return replace(state, selection=frozenset(entry.path for entry in listing))


def clear_selection(state: SelectionState) -> SelectionState:
    return replace(state, selection=frozenset())


def prune_selection(listing: Sequence[FileEntry], state: SelectionState) -> SelectionState:
    """Drop paths no longer listed, clamp the cursor and forget the anchor.

    Used after every listing refresh.
    """
    listed = {entry.path for entry in listing}
    return SelectionState(
        selection=frozenset(path for path in state.selection if path in listed),
        cursor_index=clamp_cursor(state.cursor_index, len(listing)),
        last_clicked_index=NO_ANCHOR,
    )
