"""Module: logger_factory.py

Author: Michael Economou
Date: 2026-03-02

Logger factory with caching.
Keeps a single logger instance per module name, patched for UTF-8 safe output.
"""

from __future__ import annotations

import inspect
import logging
import threading

from samplepool.utils.logging.logger_helper import get_logger


class LoggerFactory:
    """Thread-safe logger cache keyed by logger name."""

    _loggers: dict[str, logging.Logger] = {}
    _lock = threading.Lock()
    _global_level: int | None = None

    @classmethod
    def get_logger(cls, name: str | None = None) -> logging.Logger:
        """Get or create a cached logger.

        Args:
            name: Logger name, typically ``__name__`` of the calling module.
                Falls back to the caller's module name when omitted.

        Returns:
            Cached logger instance

        """
        if name is None:
            frame = inspect.currentframe()
            caller = frame.f_back if frame is not None else None
            name = caller.f_globals.get("__name__", "samplepool") if caller else "samplepool"

        with cls._lock:
            logger = cls._loggers.get(name)
            if logger is None:
                logger = get_logger(name)
                if cls._global_level is not None:
                    logger.setLevel(cls._global_level)
                cls._loggers[name] = logger
            return logger

    @classmethod
    def set_global_level(cls, level: int) -> None:
        """Apply a logging level to every cached logger (and future ones)."""
        with cls._lock:
            cls._global_level = level
            for logger in cls._loggers.values():
                logger.setLevel(level)

    @classmethod
    def clear_cache(cls) -> None:
        """Forget all cached loggers."""
        with cls._lock:
            cls._loggers.clear()


def get_cached_logger(name: str | None = None) -> logging.Logger:
    """Convenience wrapper around :meth:`LoggerFactory.get_logger`."""
    return LoggerFactory.get_logger(name)
