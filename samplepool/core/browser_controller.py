"""Module: browser_controller.py

Author: Michael Economou
Date: 2026-03-02

DualPaneBrowser - coordinator of the source and destination panes.

Owns both PaneModels, the transfer queue, the ingestion adapters and the
pane operations, and translates clicks and key presses into selection
changes, navigation and batch copies. Keyboard input always goes to the
active pane and is ignored while a batch waits for a conflict decision.

The destination pane is bound to the audio pool root; the source pane can be
toggled closed, which clears its state and moves focus to the destination.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from samplepool.app.state.pane_model import PaneModel, normalize_path
from samplepool.config import DESTINATION_PANE, SOURCE_PANE
from samplepool.core.ingestion import DropZone, IngestionService
from samplepool.core.listing_view import SortColumn, SortDirection, SortSpec
from samplepool.core.pane_operations import PaneOperations
from samplepool.core.selection.selection_engine import (
    apply_click,
    clear_selection,
    move_cursor,
    select_all,
)
from samplepool.core.transfer.queue_controller import TransferQueueController
from samplepool.domain.keyboard import Key, KeyboardModifier, KeyPress
from samplepool.utils.events import Observable, Signal
from samplepool.utils.logging.logger_factory import get_cached_logger

if TYPE_CHECKING:
    from samplepool.app.ports.filesystem import FileSourcePort
    from samplepool.app.ports.task_runner import TaskRunnerPort
    from samplepool.app.ports.ui_scheduler import UiSchedulerPort
    from samplepool.app.ports.user_interaction import UserDialogPort
    from samplepool.utils.shared.json_config_manager import JSONConfigManager

logger = get_cached_logger(__name__)


class DualPaneBrowser(Observable):
    """Coordinates the two panes, the queue and the user gestures."""

    active_pane_changed = Signal(str)
    source_pane_toggled = Signal(bool)

    def __init__(
        self,
        filesystem: FileSourcePort,
        scheduler: UiSchedulerPort,
        user_dialogs: UserDialogPort,
        pool_root: str,
        config_manager: JSONConfigManager | None = None,
        runner: TaskRunnerPort | None = None,
    ):
        super().__init__()
        self._filesystem = filesystem
        self._config = config_manager

        self.source = PaneModel(SOURCE_PANE, filesystem, scheduler, runner=runner)
        self.destination = PaneModel(
            DESTINATION_PANE, filesystem, scheduler, root_bound=pool_root, runner=runner
        )
        self.controller = TransferQueueController(filesystem, runner=runner)
        self.ingestion = IngestionService(self.controller, self.source, self.destination)
        self.operations = PaneOperations(filesystem, user_dialogs)
        self.drop_zone = DropZone()

        self.active_role = SOURCE_PANE
        self.source_open = True

        self.controller.refresh_requested.connect(self._on_refresh_requested)
        self.drop_zone.dropped.connect(self.ingestion.ingest_external_drop)

    # -------------------------------------------------------------------------
    # Setup and persistence
    # -------------------------------------------------------------------------

    def _browser_config(self):
        if self._config is None:
            return None
        return self._config.get_category("browser", create_if_not_exists=True)

    def initialize(self, initial_source: str | None = None) -> None:
        """Seed the source pane and point the destination at the pool root."""
        config = self._browser_config()
        if config is not None:
            self.source_open = bool(config.get("source_pane_open", True))
            for pane, key in ((self.source, "source_sort"), (self.destination, "destination_sort")):
                pane.set_sort(_sort_from_config(config.get(key)))

        self.destination.reset_to_root()

        if self.source_open:
            self.source.set_path(initial_source or self._initial_source_path())
        else:
            self.active_role = DESTINATION_PANE

        logger.info(
            "[DualPaneBrowser] Initialized (source: %s, pool: %s)",
            self.source.current_path or "<closed>",
            self.destination.root_bound,
        )

    def _initial_source_path(self) -> str:
        config = self._browser_config()
        last = config.get("last_source_folder", "") if config is not None else ""
        if last and os.path.isdir(last):
            return last
        return self._filesystem.get_home_directory()

    def save_settings(self) -> None:
        config = self._browser_config()
        if config is None:
            return
        config.set("source_pane_open", self.source_open)
        if self.source.current_path:
            config.set("last_source_folder", self.source.current_path)
        for pane, key in ((self.source, "source_sort"), (self.destination, "destination_sort")):
            config.set(key, {"column": pane.sort.column.value, "direction": pane.sort.direction.value})
        self._config.save()

    # -------------------------------------------------------------------------
    # Panes
    # -------------------------------------------------------------------------

    def pane(self, role: str) -> PaneModel:
        return self.source if role == SOURCE_PANE else self.destination

    @property
    def active_pane(self) -> PaneModel:
        return self.pane(self.active_role)

    def set_active_pane(self, role: str) -> bool:
        if role == SOURCE_PANE and not self.source_open:
            return False
        if role != self.active_role:
            self.active_role = role
            self.active_pane_changed.emit(role)
        return True

    def toggle_source_pane(self) -> bool:
        """Open or close the source pane; returns the new open state."""
        self.source_open = not self.source_open
        if self.source_open:
            self.source.set_path(self._initial_source_path())
        else:
            config = self._browser_config()
            if config is not None and self.source.current_path:
                config.set("last_source_folder", self.source.current_path)
            self.source.clear()
            self.set_active_pane(DESTINATION_PANE)
        self.source_pane_toggled.emit(self.source_open)
        return self.source_open

    def reset_destination_to_root(self) -> bool:
        return self.destination.reset_to_root()

    def _on_refresh_requested(self, directory: str) -> None:
        target = normalize_path(directory)
        for pane in (self.source, self.destination):
            if pane.current_path == target:
                pane.refresh()

    # -------------------------------------------------------------------------
    # Mouse
    # -------------------------------------------------------------------------

    def handle_click(
        self, role: str, index: int, modifiers: KeyboardModifier = KeyboardModifier.NONE
    ) -> None:
        """Click on row ``index`` (listing order) of a pane."""
        self.set_active_pane(role)
        pane = self.pane(role)
        outcome = apply_click(
            pane.listing,
            pane.state,
            index,
            modifiers,
            destination_pane=role == DESTINATION_PANE,
        )
        if outcome.navigate_to is not None:
            pane.set_path(outcome.navigate_to)
        else:
            pane.apply_state(outcome.state)

    # -------------------------------------------------------------------------
    # Keyboard
    # -------------------------------------------------------------------------

    def handle_key(self, press: KeyPress) -> bool:
        """Apply a key press to the active pane. Returns True if it was used."""
        if self.controller.pending is not None:
            logger.debug(
                "[DualPaneBrowser] Key ignored while a conflict is pending",
                extra={"dev_only": True},
            )
            return False

        pane = self.active_pane
        key = press.key

        if key in (Key.UP, Key.DOWN):
            delta = -1 if key is Key.UP else 1
            pane.apply_state(move_cursor(pane.listing, pane.state, delta, extend=press.has_shift))
            return True

        if key is Key.LEFT:
            if press.has_command:
                pane.navigate_to_parent()
                return True
            return self.set_active_pane(SOURCE_PANE)

        if key is Key.RIGHT:
            if press.has_command:
                return self._enter_cursor_directory(pane)
            return self.set_active_pane(DESTINATION_PANE)

        if key is Key.ENTER:
            # Ctrl/Cmd+Enter with nothing to copy acts as a plain Enter
            if press.has_command and self._copy_active_selection():
                return True
            if self._enter_cursor_directory(pane):
                return True
            if pane is self.source and pane.selection:
                self.ingestion.copy_selection()
                return True
            return False

        if key is Key.SPACE:
            return self._enter_cursor_directory(pane)

        if key is Key.A and press.has_command:
            pane.apply_state(select_all(pane.listing, pane.state))
            return True

        if key is Key.ESCAPE:
            pane.apply_state(clear_selection(pane.state))
            return True

        if key is Key.BACKSPACE:
            pane.navigate_to_parent()
            return True

        return False

    def _enter_cursor_directory(self, pane: PaneModel) -> bool:
        entry = pane.entry_at_cursor()
        if entry is None or not entry.is_directory:
            return False
        return pane.enter_directory(entry.path)

    def _copy_active_selection(self) -> bool:
        """Ctrl/Cmd+Enter: copy the active pane selection to the other pane."""
        if self.active_pane is self.source:
            if not self.source.selection:
                return False
            self.ingestion.copy_selection()
            return True

        if not self.destination.selection or not self.source_open or not self.source.current_path:
            return False
        self.ingestion.copy_back_to_source()
        return True


def _sort_from_config(value) -> SortSpec:
    if not isinstance(value, dict):
        return SortSpec()
    try:
        return SortSpec(
            SortColumn(value.get("column", "name")),
            SortDirection(value.get("direction", "asc")),
        )
    except ValueError:
        logger.warning("[DualPaneBrowser] Ignoring invalid sort setting: %s", value)
        return SortSpec()
