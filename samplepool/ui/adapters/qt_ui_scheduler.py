"""Qt UI scheduler adapter.

Author: Michael Economou
Date: 2026-03-02
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from PyQt5.QtCore import QTimer

if TYPE_CHECKING:
    from collections.abc import Callable


class QtUiSchedulerAdapter:
    """Runs callbacks on the Qt event loop via QTimer.singleShot."""

    def schedule(self, callback: Callable[[], None], delay: int = 0) -> None:
        QTimer.singleShot(max(delay, 0), callback)
