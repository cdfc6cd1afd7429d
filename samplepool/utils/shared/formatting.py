"""
Module: formatting.py

Author: Michael Economou
Date: 2026-03-02

Display formatting for the pane and transfer tables.
Sizes use binary (1024) steps with the familiar KB/MB labels.
"""

from __future__ import annotations

SIZE_UNITS = ["B", "KB", "MB", "GB", "TB"]


def format_size(size: int) -> str:
    """Human readable size, e.g. ``1.5 MB``."""
    if size < 1024:
        return f"{size} B"
    value = float(size)
    unit = 0
    while value >= 1024 and unit < len(SIZE_UNITS) - 1:
        value /= 1024
        unit += 1
    return f"{value:.1f} {SIZE_UNITS[unit]}"


def format_sample_rate(rate: int | None) -> str:
    if not rate:
        return ""
    khz = rate / 1000
    return f"{khz:g} kHz"


def format_optional(value: int | None) -> str:
    return "" if value is None else str(value)
