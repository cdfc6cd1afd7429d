"""Qt adapters for user interaction ports.

Concrete implementation of UserDialogPort using CustomMessageDialog.

Author: Michael Economou
Date: 2026-03-02
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from samplepool.ui.dialogs.message_dialog import CustomMessageDialog

if TYPE_CHECKING:
    from PyQt5.QtWidgets import QWidget


class QtUserDialogAdapter:
    """Qt implementation of UserDialogPort."""

    def __init__(self, parent: QWidget | None = None) -> None:
        self._parent = parent

    def set_parent(self, parent: QWidget | None) -> None:
        self._parent = parent

    def show_info(self, title: str, message: str) -> None:
        CustomMessageDialog.information(self._parent, title, message)

    def show_error(self, title: str, message: str) -> None:
        CustomMessageDialog.critical(self._parent, title, message)

    def ask_yes_no(self, title: str, message: str) -> bool:
        return CustomMessageDialog.question(self._parent, title, message)

    def ask_text(self, title: str, label: str, default: str = "") -> str | None:
        return CustomMessageDialog.get_text(self._parent, title, label, default)
