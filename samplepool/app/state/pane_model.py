"""Module: pane_model.py

Author: Michael Economou
Date: 2026-03-02

PaneModel - observable state of one browser pane (source or destination).

Owns the current path, the listing, the selection state (cursor, selected
paths, last-clicked anchor) and the view settings (sort + filter). Changes
are published through pure-Python signals so widgets can follow them.

Listing refreshes are scheduled through the UiSchedulerPort and always read
``current_path`` when they run. The directory read itself (audio headers
included) goes through the TaskRunnerPort, off the UI thread with Qt. While
a load is in flight further refresh requests are suppressed; a path change
during a load is picked up by one follow-up load once the current one
finishes. The loading flag is always cleared, whatever the load ran into.

Invariants kept after every change:
- cursor_index is within the listing bounds (0 for an empty listing)
- every selected path is present in the listing
- a root-bound pane never leaves its root
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from samplepool.app.ports.task_runner import InlineTaskRunner
from samplepool.core.exceptions import ListingError
from samplepool.core.listing_view import ListingFilter, SortSpec, build_view
from samplepool.core.selection.selection_engine import (
    SelectionState,
    clamp_cursor,
    prune_selection,
)
from samplepool.utils.events import Observable, Signal
from samplepool.utils.logging.logger_factory import get_cached_logger

if TYPE_CHECKING:
    from samplepool.app.ports.filesystem import FileSourcePort
    from samplepool.app.ports.task_runner import TaskRunnerPort
    from samplepool.app.ports.ui_scheduler import UiSchedulerPort
    from samplepool.models.file_entry import FileEntry

logger = get_cached_logger(__name__)


def normalize_path(path: str) -> str:
    return os.path.normpath(os.path.abspath(os.path.expanduser(path)))


def is_within(path: str, root: str) -> bool:
    """True if ``path`` is ``root`` or one of its descendants."""
    try:
        return os.path.commonpath([path, root]) == root
    except ValueError:
        # Different drives on Windows
        return False


class PaneModel(Observable):
    """State of one file pane."""

    listing_changed = Signal(list)
    path_changed = Signal(str)
    selection_changed = Signal(frozenset)
    cursor_changed = Signal(int)
    loading_changed = Signal(bool)
    view_changed = Signal()

    def __init__(
        self,
        role: str,
        filesystem: FileSourcePort,
        scheduler: UiSchedulerPort,
        root_bound: str | None = None,
        runner: TaskRunnerPort | None = None,
    ):
        super().__init__()
        self.role = role
        self._filesystem = filesystem
        self._scheduler = scheduler
        self._runner = runner or InlineTaskRunner()
        self.root_bound = normalize_path(root_bound) if root_bound else None

        self.current_path = ""
        self.listing: list[FileEntry] = []
        self.state = SelectionState()
        self.is_loading = False
        self._loaded_path = ""

        self.sort = SortSpec()
        self.listing_filter = ListingFilter()

    # -------------------------------------------------------------------------
    # Selection state accessors
    # -------------------------------------------------------------------------

    @property
    def cursor_index(self) -> int:
        return self.state.cursor_index

    @property
    def selection(self) -> frozenset[str]:
        return self.state.selection

    @property
    def last_clicked_index(self) -> int:
        return self.state.last_clicked_index

    def apply_state(self, state: SelectionState) -> None:
        """Replace the selection state, emitting only what changed."""
        previous = self.state
        self.state = SelectionState(
            selection=state.selection,
            cursor_index=clamp_cursor(state.cursor_index, len(self.listing)),
            last_clicked_index=state.last_clicked_index,
        )
        if self.state.selection != previous.selection:
            self.selection_changed.emit(self.state.selection)
        if self.state.cursor_index != previous.cursor_index:
            self.cursor_changed.emit(self.state.cursor_index)

    def entry_at_cursor(self) -> FileEntry | None:
        if not self.listing:
            return None
        return self.listing[self.state.cursor_index]

    def selected_entries(self) -> list[FileEntry]:
        """Selected entries in listing order."""
        return [entry for entry in self.listing if entry.path in self.state.selection]

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def can_visit(self, path: str) -> bool:
        return self.root_bound is None or is_within(normalize_path(path), self.root_bound)

    def set_path(self, path: str) -> bool:
        """Point the pane at ``path`` and refresh its listing.

        Returns False (and changes nothing) when ``path`` is outside the root.
        """
        target = normalize_path(path)
        if not self.can_visit(target):
            logger.warning(
                "[PaneModel:%s] Refusing to leave root %s for %s",
                self.role,
                self.root_bound,
                target,
            )
            return False

        if target != self.current_path:
            self.current_path = target
            self.path_changed.emit(target)
        self.refresh()
        return True

    def enter_directory(self, path: str) -> bool:
        """Navigate into ``path`` with the cursor on the first row."""
        if not self.set_path(path):
            return False
        self.apply_state(SelectionState(self.state.selection, cursor_index=0))
        return True

    def navigate_to_parent(self) -> bool:
        if not self.current_path:
            return False
        if self.root_bound is not None and self.current_path == self.root_bound:
            logger.debug(
                "[PaneModel:%s] Already at root, parent navigation refused",
                self.role,
                extra={"dev_only": True},
            )
            return False

        parent = os.path.dirname(self.current_path)
        if parent == self.current_path:
            return False
        if self.root_bound is not None and len(parent) < len(self.root_bound):
            parent = self.root_bound
        return self.set_path(parent)

    def reset_to_root(self) -> bool:
        if self.root_bound is None:
            return False
        return self.set_path(self.root_bound)

    def clear(self) -> None:
        """Forget path, listing and selection (source pane toggled closed)."""
        self.current_path = ""
        self._loaded_path = ""
        self.listing = []
        self.apply_state(SelectionState())
        self.path_changed.emit("")
        self.listing_changed.emit(self.listing)

    # -------------------------------------------------------------------------
    # Listing refresh
    # -------------------------------------------------------------------------

    def refresh(self) -> None:
        """Schedule a listing reload of the current path."""
        if not self.current_path:
            return
        if self.is_loading:
            logger.debug(
                "[PaneModel:%s] Refresh suppressed, load in progress",
                self.role,
                extra={"dev_only": True},
            )
            return
        self._set_loading(True)
        self._scheduler.schedule(self._load)

    def _set_loading(self, loading: bool) -> None:
        self.is_loading = loading
        self.loading_changed.emit(loading)

    def _load(self) -> None:
        path = self.current_path
        if not path:
            self._set_loading(False)
            return

        self._runner.run(
            lambda progress: self._read_listing(path),
            lambda listing: self._apply_listing(path, listing),
        )

    def _read_listing(self, path: str) -> list[FileEntry]:
        """Runs on the task runner; never raises so the pane always leaves loading."""
        try:
            return list(self._filesystem.list_directory(path))
        except (ListingError, OSError) as e:
            logger.error("[PaneModel:%s] Failed to list %s: %s", self.role, path, e)
        except Exception:
            logger.exception("[PaneModel:%s] Unexpected error listing %s", self.role, path)
        return []

    def _apply_listing(self, path: str, listing: list[FileEntry]) -> None:
        if not self.current_path:
            # Pane cleared while the load was running
            path, listing = "", []

        try:
            self._loaded_path = path
            self.listing = listing
            self.apply_state(prune_selection(listing, self.state))
        finally:
            self._set_loading(False)
        self.listing_changed.emit(self.listing)

        logger.debug(
            "[PaneModel:%s] Listed %d entries in %s",
            self.role,
            len(listing),
            path,
            extra={"dev_only": True},
        )

        # Path moved while the load was running
        if self.current_path and self.current_path != self._loaded_path:
            self.refresh()

    # -------------------------------------------------------------------------
    # View settings
    # -------------------------------------------------------------------------

    def set_sort(self, sort: SortSpec) -> None:
        if sort != self.sort:
            self.sort = sort
            self.view_changed.emit()

    def set_filter(self, listing_filter: ListingFilter) -> None:
        if listing_filter != self.listing_filter:
            self.listing_filter = listing_filter
            self.view_changed.emit()

    def visible_rows(self) -> list[tuple[int, FileEntry]]:
        """Rows to display as ``(listing_index, entry)`` pairs."""
        return build_view(self.listing, self.sort, self.listing_filter)
