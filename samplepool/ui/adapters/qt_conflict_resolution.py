"""Qt adapter for ConflictResolutionPort - shows the overwrite dialog.

Author: Michael Economou
Date: 2026-03-02
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from samplepool.ui.dialogs.overwrite_dialog import OverwriteDialog

if TYPE_CHECKING:
    from PyQt5.QtWidgets import QWidget

    from samplepool.core.transfer.conflict_resolver import ConflictDecision


class QtConflictResolutionAdapter:
    """Qt implementation of ConflictResolutionPort using OverwriteDialog."""

    def __init__(self, parent: QWidget | None = None) -> None:
        self._parent = parent

    def ask_decision(self, file_name: str, remaining: int) -> ConflictDecision:
        return OverwriteDialog.ask(file_name, remaining, self._parent)
