"""UI scheduler port for Qt-free core operations.

Author: Michael Economou
Date: 2026-03-02
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Callable


class UiSchedulerPort(Protocol):
    """Protocol for scheduling callbacks without Qt dependencies."""

    def schedule(self, callback: Callable[[], None], delay: int = 0) -> None:
        """Run ``callback`` later on the UI event loop, after ``delay`` ms."""
        ...


class ImmediateScheduler:
    """Scheduler running callbacks inline (tests and headless use)."""

    def schedule(self, callback: Callable[[], None], delay: int = 0) -> None:
        callback()
