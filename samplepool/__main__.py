#!/usr/bin/env python3
"""
Module: samplepool.__main__

Author: Michael Economou
Date: 2026-03-02

Entry point of the samplepool browser:
    python -m samplepool [--pool DIR] [--source DIR]

Sets up logging, loads the JSON configuration, creates the Qt application
and the main window, and runs the event loop.
"""

import argparse
import logging
import os
import platform
import sys

from PyQt5.QtWidgets import QApplication

from samplepool.config import APP_NAME, APP_VERSION, LOG_CONSOLE_LEVEL, LOG_FILE_LEVEL
from samplepool.core.browser_controller import DualPaneBrowser
from samplepool.services.filesystem_service import LocalFilesystemService
from samplepool.ui.adapters.qt_task_runner import QtTaskRunnerAdapter
from samplepool.ui.adapters.qt_ui_scheduler import QtUiSchedulerAdapter
from samplepool.ui.adapters.qt_user_interaction import QtUserDialogAdapter
from samplepool.ui.main_window import MainWindow
from samplepool.utils.logging.logger_setup import ConfigureLogger
from samplepool.utils.paths import AppPaths
from samplepool.utils.shared.json_config_manager import create_app_config_manager


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog=APP_NAME, description="Audio sample pool browser")
    parser.add_argument(
        "--pool",
        help="Audio pool root folder (default: the pool folder in the user data directory)",
    )
    parser.add_argument("--source", help="Folder opened in the source pane")
    parser.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    ConfigureLogger(
        log_name=APP_NAME,
        log_dir=str(AppPaths.get_logs_dir()),
        console_level=logging.getLevelName(LOG_CONSOLE_LEVEL),
        file_level=logging.getLevelName(LOG_FILE_LEVEL),
    )
    logger = logging.getLogger(APP_NAME)
    logger.info("%s %s starting", APP_NAME, APP_VERSION)
    logger.info("Platform: %s %s", platform.system(), platform.release())
    logger.debug("Python version: %s", sys.version, extra={"dev_only": True})

    pool_root = os.path.abspath(args.pool) if args.pool else str(AppPaths.get_default_pool_dir())
    if not os.path.isdir(pool_root):
        logger.error("Pool folder does not exist: %s", pool_root)
        return 2

    config_manager = create_app_config_manager()
    config_manager.load()

    app = QApplication(sys.argv[:1])
    app.setApplicationName(APP_NAME)
    app.setStyle("Fusion")

    user_dialogs = QtUserDialogAdapter()
    task_runner = QtTaskRunnerAdapter()
    browser = DualPaneBrowser(
        filesystem=LocalFilesystemService(),
        scheduler=QtUiSchedulerAdapter(),
        user_dialogs=user_dialogs,
        pool_root=pool_root,
        config_manager=config_manager,
        runner=task_runner,
    )
    window = MainWindow(browser, user_dialogs, config_manager)
    user_dialogs.set_parent(window)

    browser.initialize(args.source)
    window.show()

    exit_code = app.exec_()
    # A copy still running finishes before the process goes away
    task_runner.wait_for_all()
    config_manager.save()
    logger.info("Application exited with code %d", exit_code)
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
