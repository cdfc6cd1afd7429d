"""Module: conflict_resolver.py.

Author: Michael Economou
Date: 2026-03-02

Conflict Resolver - sticky overwrite/skip policy for one transfer batch.

The mode starts at NONE for every batch. While it is NONE, every conflict
suspends the batch and asks the user; an "... All" decision makes the mode
stick for the rest of the batch.
"""

from __future__ import annotations

from enum import Enum

from samplepool.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)


class OverwriteMode(Enum):
    NONE = "none"
    OVERWRITE = "overwrite"
    SKIP = "skip"


class ConflictDecision(Enum):
    """User answer to the conflict modal."""

    OVERWRITE = "overwrite"
    OVERWRITE_ALL = "overwrite_all"
    SKIP = "skip"
    SKIP_ALL = "skip_all"
    CANCEL = "cancel"

    @property
    def overwrites(self) -> bool:
        return self in (ConflictDecision.OVERWRITE, ConflictDecision.OVERWRITE_ALL)

    @property
    def skips(self) -> bool:
        return self in (ConflictDecision.SKIP, ConflictDecision.SKIP_ALL)


class ConflictResolver:
    """Holds the overwrite mode of the running batch."""

    def __init__(self) -> None:
        self.mode = OverwriteMode.NONE

    def reset(self) -> None:
        """Called at the start of every new batch."""
        self.mode = OverwriteMode.NONE

    def should_overwrite(self, force: bool = False) -> bool:
        return force or self.mode is OverwriteMode.OVERWRITE

    @property
    def needs_decision(self) -> bool:
        """True while conflicts must be brought to the user."""
        return self.mode is OverwriteMode.NONE

    def apply_decision(self, decision: ConflictDecision) -> None:
        """Make the "... All" decisions sticky; the others leave the mode alone."""
        if decision is ConflictDecision.OVERWRITE_ALL:
            self.mode = OverwriteMode.OVERWRITE
        elif decision is ConflictDecision.SKIP_ALL:
            self.mode = OverwriteMode.SKIP
        else:
            return
        logger.info("[ConflictResolver] Mode set to %s for the rest of the batch", self.mode.value)
