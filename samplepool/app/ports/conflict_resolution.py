"""Conflict resolution port for a batch suspended on an existing file.

This port decouples the transfer queue from the modal dialog.

Author: Michael Economou
Date: 2026-03-02
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from samplepool.core.transfer.conflict_resolver import ConflictDecision


class ConflictResolutionPort(Protocol):
    """Protocol for asking the user how to handle one conflicting file."""

    def ask_decision(self, file_name: str, remaining: int) -> ConflictDecision:
        """Show the conflict modal and return the user's decision.

        Args:
            file_name: Name of the file that already exists at the destination
            remaining: Paths left in the batch, the conflicting one included.
                The "... All" choices are offered only when this is above 1.

        Returns:
            The decision; closing the modal counts as CANCEL.

        """
        ...
