"""Module: logger_helper.py

Author: Michael Economou
Date: 2026-03-02

Helpers for creating loggers that never fail on console encoding problems.

Functions:
    safe_text: Replace problematic Unicode characters with ASCII equivalents.
    safe_log: Log a message, falling back to ASCII on UnicodeEncodeError.
    get_logger: Return a named logger that propagates to the root handlers.

DevOnlyFilter:
    Hides records tagged ``extra={"dev_only": True}`` from the console while
    letting file handlers keep them.
"""

from __future__ import annotations

import logging
import re
from functools import partial

from samplepool.config import SHOW_DEV_ONLY_IN_CONSOLE

_REPLACEMENTS = {
    "→": "->",
    "—": "--",
    "–": "-",
    "…": "...",
}
_REPLACEMENT_PATTERN = re.compile("|".join(map(re.escape, _REPLACEMENTS)))


def safe_text(text: str) -> str:
    """Replace unsupported Unicode characters with ASCII-safe alternatives."""
    return _REPLACEMENT_PATTERN.sub(lambda m: _REPLACEMENTS[m.group(0)], text)


def safe_log(logger_func, message, *args, **kwargs):
    """Log through ``logger_func``, retrying with ASCII text on encoding errors."""
    try:
        if not isinstance(message, str):
            message = repr(message)
        logger_func(message, *args, **kwargs)
    except UnicodeEncodeError:
        logger_func(safe_text(str(message)), *args, **kwargs)


def _patch_logger_safe_methods(logger: logging.Logger) -> None:
    for method_name in ("debug", "info", "warning", "error", "critical"):
        setattr(logger, method_name, partial(safe_log, getattr(logger, method_name)))


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger delegating its output to the root logger handlers.

    Args:
        name: Logger name (defaults to this module)

    Returns:
        Patched logger instance

    """
    logger = logging.getLogger(name or __name__)
    logger.propagate = True

    if not getattr(logger, "_patched_for_safe_log", False):
        _patch_logger_safe_methods(logger)
        logger._patched_for_safe_log = True  # type: ignore[attr-defined]

    return logger


class DevOnlyFilter(logging.Filter):
    """Drop dev-only records unless SHOW_DEV_ONLY_IN_CONSOLE is enabled."""

    def filter(self, record: logging.LogRecord) -> bool:
        if SHOW_DEV_ONLY_IN_CONSOLE:
            return True
        return not getattr(record, "dev_only", False)
