"""Module: overwrite_dialog.py

Author: Michael Economou
Date: 2026-03-02

Dialog shown when a transfer batch stops on a file that already exists at
the destination.

Buttons:
- more than one path left: Overwrite, Overwrite All, Skip, Skip All, Cancel Import
- last path: Overwrite, Skip, Cancel Import

Escape or closing the window means Cancel Import.
"""

from PyQt5.QtWidgets import QDialog, QWidget

from samplepool.core.transfer.conflict_resolver import ConflictDecision
from samplepool.ui.dialogs.message_dialog import CustomMessageDialog
from samplepool.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)

BUTTON_DECISIONS = {
    "Overwrite": ConflictDecision.OVERWRITE,
    "Overwrite All": ConflictDecision.OVERWRITE_ALL,
    "Skip": ConflictDecision.SKIP,
    "Skip All": ConflictDecision.SKIP_ALL,
    "Cancel Import": ConflictDecision.CANCEL,
}


class OverwriteDialog(CustomMessageDialog):
    """Ask how to handle one existing file."""

    def __init__(self, file_name: str, remaining: int, parent: QWidget | None = None):
        message = f'"{file_name}" already exists in the pool.\nDo you want to overwrite it?'
        if remaining > 1:
            message += f"\n\n{remaining - 1} more file(s) remaining in this import."
            buttons = ["Overwrite", "Overwrite All", "Skip", "Skip All", "Cancel Import"]
        else:
            buttons = ["Overwrite", "Skip", "Cancel Import"]

        super().__init__(
            title="File Already Exists",
            message=message,
            buttons=buttons,
            parent=parent,
        )

        self._buttons["Skip"].setDefault(True)
        self._buttons["Skip"].setFocus()
        self._buttons["Overwrite"].setStyleSheet(
            "QPushButton { background-color: #d32f2f; color: white; }"
            "QPushButton:hover { background-color: #f44336; }"
        )

    def decision(self) -> ConflictDecision:
        """Decision of a finished dialog; anything but a button click is Cancel Import."""
        if self.result() == QDialog.Rejected or self.selected is None:
            return ConflictDecision.CANCEL
        return BUTTON_DECISIONS.get(self.selected, ConflictDecision.CANCEL)

    def get_decision(self) -> ConflictDecision:
        self.exec_()
        decision = self.decision()
        logger.info("[OverwriteDialog] User chose: %s", decision.value)
        return decision

    @staticmethod
    def ask(file_name: str, remaining: int, parent: QWidget | None = None) -> ConflictDecision:
        return OverwriteDialog(file_name, remaining, parent).get_decision()
