"""Ports - Protocol interfaces for the collaborators the core depends on.

- FileSourcePort: directory listing, copy, rename, delete, mkdir, home dir
- UserDialogPort: blocking notices
- ConflictResolutionPort: overwrite/skip decision for a suspended batch
- UiSchedulerPort: run a callback later on the event loop
- TaskRunnerPort: run long filesystem work off the UI thread

Author: Michael Economou
Date: 2026-03-02
"""

from samplepool.app.ports.conflict_resolution import ConflictResolutionPort
from samplepool.app.ports.filesystem import FileSourcePort, ProgressCallback
from samplepool.app.ports.task_runner import InlineTaskRunner, TaskRunnerPort
from samplepool.app.ports.ui_scheduler import ImmediateScheduler, UiSchedulerPort
from samplepool.app.ports.user_interaction import UserDialogPort

__all__ = [
    "ConflictResolutionPort",
    "FileSourcePort",
    "ImmediateScheduler",
    "InlineTaskRunner",
    "ProgressCallback",
    "TaskRunnerPort",
    "UiSchedulerPort",
    "UserDialogPort",
]
