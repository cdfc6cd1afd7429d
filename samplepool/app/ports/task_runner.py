"""Background task port for long filesystem work.

Author: Michael Economou
Date: 2026-03-02

Copies and directory listings (with their audio header probes) are handed to
a TaskRunnerPort so they do not block the UI event loop. The Qt adapter runs
each task on a QThread worker and delivers progress and the result back on
the UI thread. InlineTaskRunner runs the task on the spot (tests and headless
use).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from collections.abc import Callable

    from samplepool.app.ports.filesystem import ProgressCallback


class TaskRunnerPort(Protocol):
    """Protocol for running a task away from the UI thread."""

    def run(
        self,
        task: Callable[[ProgressCallback], Any],
        on_done: Callable[[Any], None],
        on_progress: ProgressCallback | None = None,
    ) -> None:
        """Run ``task(progress)`` and pass its return value to ``on_done``.

        ``task`` must report failures in its return value instead of raising.
        ``on_progress`` and ``on_done`` are always called on the UI thread.
        """
        ...


def _ignore_progress(stage: str, fraction: float) -> None:
    pass


class InlineTaskRunner:
    """Task runner calling the task and its callbacks immediately."""

    def run(
        self,
        task: Callable[[ProgressCallback], Any],
        on_done: Callable[[Any], None],
        on_progress: ProgressCallback | None = None,
    ) -> None:
        on_done(task(on_progress or _ignore_progress))
