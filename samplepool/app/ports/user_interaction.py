"""User interaction port.

Blocking notices shown without a Qt dependency in the core.

Author: Michael Economou
Date: 2026-03-02
"""

from __future__ import annotations

from typing import Protocol


class UserDialogPort(Protocol):
    """Protocol for showing dialogs to user without Qt dependencies."""

    def show_info(self, title: str, message: str) -> None:
        """Show information message."""
        ...

    def show_error(self, title: str, message: str) -> None:
        """Show a blocking error notice with the raw error text."""
        ...

    def ask_yes_no(self, title: str, message: str) -> bool:
        """Ask yes/no question. Returns True for yes, False for no."""
        ...

    def ask_text(self, title: str, label: str, default: str = "") -> str | None:
        """Ask for a line of text. Returns None when cancelled."""
        ...
