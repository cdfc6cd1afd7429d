"""Module: qt_task_runner.py

Author: Michael Economou
Date: 2026-03-02

Qt adapter for TaskRunnerPort.

Each task runs in its own TaskWorker (QThread). The worker reports progress
and its result through signals; the adapter is a QObject living on the UI
thread, so those signals reach it as queued connections and the callbacks
of the core run on the UI thread.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from PyQt5.QtCore import QObject, QThread, pyqtSignal, pyqtSlot

from samplepool.utils.logging.logger_factory import get_cached_logger

if TYPE_CHECKING:
    from collections.abc import Callable

    from samplepool.app.ports.filesystem import ProgressCallback

logger = get_cached_logger(__name__)


class TaskWorker(QThread):
    """
    Background worker running a single task.

    The task receives ``progress_updated.emit`` as its progress callback.
    """

    # Signals
    progress_updated = pyqtSignal(str, float)  # stage, fraction
    task_finished = pyqtSignal(object)  # task result
    error_occurred = pyqtSignal(str)  # error message

    def __init__(self, task: Callable[[ProgressCallback], Any], parent=None):
        super().__init__(parent)
        self._task = task

    def run(self):
        """Main thread execution - run the task."""
        try:
            result = self._task(self.progress_updated.emit)
        except Exception as e:
            logger.exception("[TaskWorker] Task raised")
            self.error_occurred.emit(str(e))
            return
        self.task_finished.emit(result)


class QtTaskRunnerAdapter(QObject):
    """Qt implementation of TaskRunnerPort using one TaskWorker per task."""

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._callbacks: dict[TaskWorker, tuple] = {}  # worker -> (on_done, on_progress)

    @property
    def active_count(self) -> int:
        return len(self._callbacks)

    def run(
        self,
        task: Callable[[ProgressCallback], Any],
        on_done: Callable[[Any], None],
        on_progress: ProgressCallback | None = None,
    ) -> None:
        worker = TaskWorker(task)
        self._callbacks[worker] = (on_done, on_progress)

        worker.progress_updated.connect(self._on_progress)
        worker.task_finished.connect(self._on_task_finished)
        worker.finished.connect(self._on_worker_finished)

        logger.debug(
            "[QtTaskRunner] Starting worker (%d active)",
            len(self._callbacks),
            extra={"dev_only": True},
        )
        worker.start()

    @pyqtSlot(str, float)
    def _on_progress(self, stage: str, fraction: float) -> None:
        callbacks = self._callbacks.get(self.sender())
        if callbacks is not None and callbacks[1] is not None:
            callbacks[1](stage, fraction)

    @pyqtSlot(object)
    def _on_task_finished(self, result: Any) -> None:
        callbacks = self._callbacks.get(self.sender())
        if callbacks is not None:
            callbacks[0](result)

    @pyqtSlot()
    def _on_worker_finished(self) -> None:
        worker = self.sender()
        self._callbacks.pop(worker, None)
        worker.deleteLater()

    def wait_for_all(self, timeout_ms: int | None = None) -> bool:
        """Block until running workers end (application shutdown).

        Returns False if a worker was still running after ``timeout_ms``.
        """
        all_done = True
        for worker in list(self._callbacks):
            done = worker.wait() if timeout_ms is None else worker.wait(timeout_ms)
            if not done:
                logger.warning("[QtTaskRunner] Worker still running after %s ms", timeout_ms)
                all_done = False
        return all_done
