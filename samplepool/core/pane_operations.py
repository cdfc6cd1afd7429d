"""Module: pane_operations.py

Author: Michael Economou
Date: 2026-03-02

Rename, delete and create-folder actions on a pane.

Each action calls the filesystem port, shows a blocking notice with the raw
error text when it fails, and refreshes the pane in every case.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from samplepool.core.exceptions import MutationError
from samplepool.core.selection.selection_engine import clear_selection
from samplepool.utils.logging.logger_factory import get_cached_logger

if TYPE_CHECKING:
    from samplepool.app.ports.filesystem import FileSourcePort
    from samplepool.app.ports.user_interaction import UserDialogPort
    from samplepool.app.state.pane_model import PaneModel

logger = get_cached_logger(__name__)


class PaneOperations:
    """Mutating actions shared by both panes."""

    def __init__(self, filesystem: FileSourcePort, user_dialogs: UserDialogPort):
        self._filesystem = filesystem
        self._dialogs = user_dialogs

    def _report(self, title: str, error: MutationError) -> None:
        logger.warning("[PaneOperations] %s failed for %s: %s", error.operation, error.path, error)
        self._dialogs.show_error(title, str(error))

    def rename(self, pane: PaneModel, old_path: str, new_name: str) -> bool:
        new_name = new_name.strip()
        if not new_name or new_name == os.path.basename(old_path):
            return False
        try:
            new_path = self._filesystem.rename_entry(old_path, new_name)
        except MutationError as e:
            self._report("Rename Failed", e)
            return False
        else:
            logger.info("[PaneOperations] Renamed %s -> %s", old_path, new_path)
            return True
        finally:
            pane.refresh()

    def delete(self, pane: PaneModel, paths: list[str]) -> bool:
        """Delete ``paths``; stops at the first failure."""
        try:
            for path in paths:
                self._filesystem.delete_entry(path)
                logger.info("[PaneOperations] Deleted %s", path)
        except MutationError as e:
            self._report("Delete Failed", e)
            return False
        else:
            pane.apply_state(clear_selection(pane.state))
            return True
        finally:
            pane.refresh()

    def delete_selection(self, pane: PaneModel, confirm: bool = True) -> bool:
        paths = [entry.path for entry in pane.selected_entries()]
        if not paths:
            return False
        if confirm:
            question = (
                f"Delete '{os.path.basename(paths[0])}'?"
                if len(paths) == 1
                else f"Delete {len(paths)} items?"
            )
            if not self._dialogs.ask_yes_no("Delete", question):
                return False
        return self.delete(pane, paths)

    def create_directory(self, pane: PaneModel, name: str) -> bool:
        name = name.strip()
        if not name or not pane.current_path:
            return False
        try:
            created = self._filesystem.create_directory(pane.current_path, name)
        except MutationError as e:
            self._report("Create Folder Failed", e)
            return False
        else:
            logger.info("[PaneOperations] Created folder %s", created)
            return True
        finally:
            pane.refresh()
