"""Module: exceptions.py

Author: Michael Economou
Date: 2026-03-02

Exception hierarchy for the samplepool core.

Copy outcomes are not exceptions (see models.copy_result). These exceptions
cover the collaborator failures that the core converts at its boundary:
listing failures become empty listings, mutation failures become blocking
notices. StaleBatchError is the only one that reaches callers, when a
conflict decision is delivered for a batch that is no longer suspended.
"""

from __future__ import annotations


class SamplePoolError(Exception):
    """Base class for samplepool errors."""


class ListingError(SamplePoolError):
    """A directory could not be listed."""

    def __init__(self, path: str, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path
        self.message = message


class MutationError(SamplePoolError):
    """A rename, delete or create-folder operation failed.

    ``str(error)`` is the raw text shown to the user.
    """

    def __init__(self, operation: str, path: str, message: str):
        super().__init__(message)
        self.operation = operation
        self.path = path
        self.message = message


class StaleBatchError(SamplePoolError):
    """A conflict decision targeted a batch that is not the suspended one."""
