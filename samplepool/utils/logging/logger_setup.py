"""Module: logger_setup.py

Author: Michael Economou
Date: 2026-03-02

Application-wide logging configuration.

ConfigureLogger attaches handlers to the root logger:
- console handler (INFO+ by default, dev-only records filtered out)
- rotating file handler for the session log
- optional rotating DEBUG file for dev-only diagnostics

add_file_handler is exposed separately so that tools and tests can attach
an extra rotating log to any logger.
"""

from __future__ import annotations

import contextlib
import logging
import os
import sys
from datetime import datetime
from logging.handlers import RotatingFileHandler

from samplepool.config import (
    LOG_DEBUG_FILE_BACKUP_COUNT,
    LOG_DEBUG_FILE_ENABLED,
    LOG_DEBUG_FILE_MAX_BYTES,
    LOG_FILE_BACKUP_COUNT,
    LOG_FILE_MAX_BYTES,
    LOG_TO_CONSOLE,
    LOG_TO_FILE,
)
from samplepool.utils.logging.logger_helper import DevOnlyFilter

FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
CONSOLE_FORMAT = "[%(levelname)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def add_file_handler(
    logger: logging.Logger,
    log_path: str,
    level: int = logging.ERROR,
    max_bytes: int = LOG_FILE_MAX_BYTES,
    backup_count: int = LOG_FILE_BACKUP_COUNT,
    filter_by_name: str | None = None,
) -> RotatingFileHandler:
    """Attach a rotating file handler to ``logger``.

    Args:
        logger: Logger receiving the handler
        log_path: Target file (parent directory is created)
        level: Minimum level written to the file
        max_bytes: Rotation threshold
        backup_count: Number of rotated files kept
        filter_by_name: Only records from this logger name (and children) are kept

    Returns:
        The created handler

    """
    directory = os.path.dirname(log_path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    handler = RotatingFileHandler(
        log_path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))

    if filter_by_name:
        handler.addFilter(logging.Filter(filter_by_name))

    logger.addHandler(handler)
    return handler


class ConfigureLogger:
    """Configures the root logger for a samplepool session."""

    def __init__(
        self,
        log_name: str = "samplepool",
        log_dir: str = "logs",
        console_level: int = logging.INFO,
        file_level: int = logging.INFO,
        max_bytes: int = LOG_FILE_MAX_BYTES,
        backup_count: int = LOG_FILE_BACKUP_COUNT,
    ):
        self.logger = logging.getLogger()
        self.logger.setLevel(logging.DEBUG)  # handlers filter levels
        self.log_file_path: str | None = None

        if self.logger.hasHandlers():
            return

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

        if LOG_TO_CONSOLE:
            self._setup_console_handler(console_level)

        if LOG_TO_FILE:
            self.log_file_path = os.path.join(log_dir, f"{log_name}_{timestamp}.log")
            add_file_handler(self.logger, self.log_file_path, file_level, max_bytes, backup_count)

        if LOG_DEBUG_FILE_ENABLED:
            add_file_handler(
                self.logger,
                os.path.join(log_dir, f"{log_name}_debug_{timestamp}.log"),
                logging.DEBUG,
                LOG_DEBUG_FILE_MAX_BYTES,
                LOG_DEBUG_FILE_BACKUP_COUNT,
            )

    def _setup_console_handler(self, level: int) -> None:
        console_handler = logging.StreamHandler(sys.stdout)

        # Not every stream supports reconfigure (pytest capture, pythonw)
        with contextlib.suppress(AttributeError, ValueError):
            console_handler.stream.reconfigure(encoding="utf-8")

        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        console_handler.addFilter(DevOnlyFilter())
        self.logger.addHandler(console_handler)
