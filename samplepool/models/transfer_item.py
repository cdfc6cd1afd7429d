"""
transfer_item.py

Author: Michael Economou
Date: 2026-03-02

Transfer queue records and their status state machine.

    pending -> copying -> completed | failed | cancelled
    pending -> cancelled

Terminal statuses never change again. Every transition goes through a named
method that returns False (and logs) when the move is not allowed, so the
item is never left in an inconsistent state.
"""

from __future__ import annotations

import itertools
import time
from dataclasses import dataclass, field
from enum import Enum

from samplepool.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)

_id_sequence = itertools.count(1)


class TransferStatus(Enum):
    PENDING = "pending"
    COPYING = "copying"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in _TERMINAL


_TERMINAL = frozenset({TransferStatus.COMPLETED, TransferStatus.FAILED, TransferStatus.CANCELLED})

_ALLOWED = {
    TransferStatus.PENDING: {TransferStatus.COPYING, TransferStatus.CANCELLED},
    TransferStatus.COPYING: {
        TransferStatus.COMPLETED,
        TransferStatus.FAILED,
        TransferStatus.CANCELLED,
    },
}


def new_transfer_id(file_name: str) -> str:
    """Return an id unique for the lifetime of the process."""
    return f"{int(time.time() * 1000)}-{next(_id_sequence)}-{file_name}"


@dataclass(slots=True)
class TransferItem:
    """One file travelling through the transfer queue."""

    file_name: str
    file_size: int = 0
    source_path: str | None = None
    status: TransferStatus = TransferStatus.PENDING
    bytes_transferred: int = 0
    error: str | None = None
    stage: str = ""
    start_time: float = field(default_factory=time.time)
    id: str = ""

    def __post_init__(self):
        if not self.id:
            self.id = new_transfer_id(self.file_name)

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def _move_to(self, target: TransferStatus) -> bool:
        if target not in _ALLOWED.get(self.status, ()):
            logger.debug(
                "[TransferItem] Refused %s -> %s for %s",
                self.status.value,
                target.value,
                self.file_name,
                extra={"dev_only": True},
            )
            return False
        self.status = target
        return True

    def start(self) -> bool:
        return self._move_to(TransferStatus.COPYING)

    def complete(self) -> bool:
        """Mark completed; progress jumps to the full size (1 when unknown)."""
        if not self._move_to(TransferStatus.COMPLETED):
            return False
        self.bytes_transferred = self.file_size if self.file_size > 0 else 1
        self.error = None
        return True

    def fail(self, message: str) -> bool:
        if not self._move_to(TransferStatus.FAILED):
            return False
        self.error = message
        return True

    def cancel(self, message: str) -> bool:
        if not self._move_to(TransferStatus.CANCELLED):
            return False
        self.error = message
        return True

    def update_progress(self, stage: str, fraction: float) -> bool:
        """Apply a progress report; ignored unless the item is copying."""
        if self.status is not TransferStatus.COPYING:
            return False
        fraction = min(max(fraction, 0.0), 1.0)
        self.stage = stage
        if self.file_size > 0:
            self.bytes_transferred = min(int(fraction * self.file_size), self.file_size)
        return True

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal

    @property
    def progress(self) -> float:
        """Fraction in [0, 1] used by the progress column."""
        if self.status is TransferStatus.COMPLETED:
            return 1.0
        if self.file_size <= 0:
            return 0.0
        return self.bytes_transferred / self.file_size
