"""Data models for the samplepool application.

This package contains:
- FileEntry: One row of a directory listing
- TransferItem: One file in the transfer queue
- CopyResult: Outcome of a single copy attempt
"""
