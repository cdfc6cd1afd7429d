"""
Module: message_dialog.py

Author: Michael Economou
Date: 2026-03-02

This module defines the CustomMessageDialog class, a compact alternative to
QMessageBox for the samplepool browser.
It provides:
- Question dialogs with custom button labels
- Informational and error notices with an OK button
- A single-line text prompt (rename, new folder)
The button text is the key of the button in ``_buttons`` and the value of
``selected`` once the dialog closes; closing or Escape leaves ``selected``
at None.
"""

from PyQt5.QtCore import Qt
from PyQt5.QtWidgets import (
    QDialog,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from samplepool.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)


class CustomMessageDialog(QDialog):
    """
    A message dialog with a label, an optional line edit and a row of buttons.
    """

    def __init__(
        self,
        title: str,
        message: str,
        buttons: list[str] | None = None,
        parent: QWidget | None = None,
        text_value: str | None = None,
    ):
        """
        Initialize a CustomMessageDialog.

        Parameters
        ----------
        title : str
            Dialog title
        message : str
            Dialog message
        buttons : list[str]
            List of button texts, left to right
        parent : QWidget, optional
            Parent widget
        text_value : str, optional
            When given, a line edit pre-filled with this text is shown
        """
        super().__init__(parent)
        self.setWindowTitle(title)
        self.setModal(True)
        self.setWindowFlags(self.windowFlags() & ~Qt.WindowContextHelpButtonHint)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(10)

        self.label = QLabel(message)
        self.label.setWordWrap(True)
        layout.addWidget(self.label)

        self.line_edit = None
        if text_value is not None:
            self.line_edit = QLineEdit(text_value)
            self.line_edit.selectAll()
            layout.addWidget(self.line_edit)

        btn_layout = QHBoxLayout()
        btn_layout.addStretch()
        self._buttons: dict[str, QPushButton] = {}
        for btn_text in buttons or []:
            btn = QPushButton(btn_text)
            btn.setMinimumWidth(100)
            btn.clicked.connect(lambda _, b=btn_text: self._on_button(b))
            btn_layout.addWidget(btn)
            self._buttons[btn_text] = btn

        layout.addLayout(btn_layout)
        self.selected: str | None = None

    def _on_button(self, btn_text: str) -> None:
        self.selected = btn_text
        self.accept()

    def button(self, text: str) -> QPushButton | None:
        return self._buttons.get(text)

    def button_texts(self) -> list[str]:
        return list(self._buttons)

    def text_value(self) -> str:
        return self.line_edit.text() if self.line_edit is not None else ""

    @staticmethod
    def question(
        parent: QWidget | None, title: str, message: str, yes_text: str = "Yes", no_text: str = "No"
    ) -> bool:
        """Return True if the "Yes" button was clicked."""
        dlg = CustomMessageDialog(title, message, [yes_text, no_text], parent)
        dlg.exec_()
        return dlg.selected == yes_text

    @staticmethod
    def information(parent: QWidget | None, title: str, message: str, ok_text: str = "OK") -> None:
        dlg = CustomMessageDialog(title, message, [ok_text], parent)
        dlg.exec_()

    @staticmethod
    def critical(parent: QWidget | None, title: str, message: str, ok_text: str = "OK") -> None:
        """Blocking error notice showing the raw error text."""
        logger.debug("[CustomMessageDialog] Error notice: %s", message, extra={"dev_only": True})
        dlg = CustomMessageDialog(title, message, [ok_text], parent)
        dlg.label.setTextInteractionFlags(Qt.TextSelectableByMouse)
        dlg.exec_()

    @staticmethod
    def get_text(
        parent: QWidget | None, title: str, label: str, default: str = ""
    ) -> str | None:
        """Ask for one line of text; None when cancelled."""
        dlg = CustomMessageDialog(title, label, ["OK", "Cancel"], parent, text_value=default)
        dlg._buttons["OK"].setDefault(True)
        dlg.exec_()
        if dlg.selected != "OK":
            return None
        return dlg.text_value()
