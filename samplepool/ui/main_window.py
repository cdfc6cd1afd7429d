"""Module: main_window.py

Author: Michael Economou
Date: 2026-03-02

MainWindow - dual-pane sample pool browser.

Layout: toolbar, source and destination panes side by side, transfer panel
underneath. The window wires the Qt widgets to the DualPaneBrowser and shows
the overwrite dialog when the transfer queue suspends on a conflict.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from PyQt5.QtCore import QByteArray, Qt, QTimer
from PyQt5.QtWidgets import QAction, QFileDialog, QMainWindow, QSplitter, QToolBar, QWidget

from samplepool.config import (
    DESTINATION_PANE,
    IMPORT_EXTENSIONS,
    SOURCE_PANE,
    WINDOW_TITLE,
)
from samplepool.core.exceptions import StaleBatchError
from samplepool.ui.adapters.qt_conflict_resolution import QtConflictResolutionAdapter
from samplepool.ui.widgets.file_pane_view import FilePaneView
from samplepool.ui.widgets.transfer_panel import TransferPanel
from samplepool.utils.logging.logger_factory import get_cached_logger

if TYPE_CHECKING:
    from samplepool.app.ports.conflict_resolution import ConflictResolutionPort
    from samplepool.app.ports.user_interaction import UserDialogPort
    from samplepool.core.browser_controller import DualPaneBrowser
    from samplepool.core.transfer.pending_batch import PendingBatch
    from samplepool.utils.shared.json_config_manager import JSONConfigManager

logger = get_cached_logger(__name__)


class MainWindow(QMainWindow):
    """Top-level window of the browser."""

    def __init__(
        self,
        browser: DualPaneBrowser,
        user_dialogs: UserDialogPort,
        config_manager: JSONConfigManager | None = None,
        conflict_port: ConflictResolutionPort | None = None,
        parent: QWidget | None = None,
    ):
        super().__init__(parent)
        self.browser = browser
        self._dialogs = user_dialogs
        self._config = config_manager
        self._conflict_port = conflict_port or QtConflictResolutionAdapter(self)

        self.setWindowTitle(WINDOW_TITLE)
        self.resize(1200, 760)

        self._setup_ui()
        self._setup_toolbar()
        self._connect_signals()
        self._restore_window_state()

    def _setup_ui(self) -> None:
        self.source_view = FilePaneView(self.browser.source, self.browser, self._dialogs, self)
        self.destination_view = FilePaneView(
            self.browser.destination, self.browser, self._dialogs, self
        )
        self.transfer_panel = TransferPanel(self.browser.controller, self)
        self.transfer_panel.hide()

        self.pane_splitter = QSplitter(Qt.Horizontal)
        self.pane_splitter.addWidget(self.source_view)
        self.pane_splitter.addWidget(self.destination_view)

        self.vertical_splitter = QSplitter(Qt.Vertical)
        self.vertical_splitter.addWidget(self.pane_splitter)
        self.vertical_splitter.addWidget(self.transfer_panel)
        self.vertical_splitter.setStretchFactor(0, 3)
        self.vertical_splitter.setStretchFactor(1, 1)

        self.setCentralWidget(self.vertical_splitter)
        self.source_view.setVisible(self.browser.source_open)

    def _setup_toolbar(self) -> None:
        toolbar = QToolBar("Main", self)
        toolbar.setMovable(False)
        self.addToolBar(toolbar)

        def add(text: str, slot, shortcut: str | None = None) -> QAction:
            action = QAction(text, self)
            if shortcut:
                action.setShortcut(shortcut)
            action.triggered.connect(slot)
            toolbar.addAction(action)
            return action

        self.toggle_source_action = add("Source", self.browser.toggle_source_pane, "Ctrl+1")
        self.toggle_source_action.setCheckable(True)
        self.toggle_source_action.setChecked(self.browser.source_open)
        add("Pool Root", self.browser.reset_destination_to_root, "Ctrl+Home")
        toolbar.addSeparator()
        add("Copy", self._copy_selection)
        add("Import Files...", self._import_files, "Ctrl+I")
        add("Import Folder...", self._import_folder, "Ctrl+Shift+I")
        toolbar.addSeparator()
        add("New Folder...", self._new_folder, "Ctrl+Shift+N")
        add("Refresh", self._refresh_panes, "F5")
        add("Transfers", self._toggle_transfer_panel, "Ctrl+T")

    def _connect_signals(self) -> None:
        self.browser.controller.conflict_detected.connect(self._on_conflict_detected)
        self.browser.ingestion.transfer_panel_requested.connect(self.transfer_panel.show)
        self.browser.source_pane_toggled.connect(self._on_source_toggled)
        self.browser.active_pane_changed.connect(self._on_active_pane_changed)

    # -------------------------------------------------------------------------
    # Conflicts
    # -------------------------------------------------------------------------

    def _on_conflict_detected(self, pending: PendingBatch) -> None:
        # Show the modal from the event loop, not from inside the queue call
        QTimer.singleShot(0, lambda: self._ask_conflict_decision(pending))

    def _ask_conflict_decision(self, pending: PendingBatch) -> None:
        if self.browser.controller.pending is not pending:
            return
        decision = self._conflict_port.ask_decision(pending.file_name, pending.remaining)
        try:
            self.browser.controller.resolve_conflict(pending, decision)
        except StaleBatchError as e:
            logger.warning("[MainWindow] Ignoring decision: %s", e)

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    def _copy_selection(self) -> None:
        self.browser.ingestion.copy_selection()

    def _import_files(self) -> None:
        patterns = " ".join(f"*.{ext}" for ext in IMPORT_EXTENSIONS)
        paths, _ = QFileDialog.getOpenFileNames(
            self, "Import Audio Files", "", f"Audio Files ({patterns})"
        )
        if paths:
            self.browser.ingestion.import_files(paths)

    def _import_folder(self) -> None:
        path = QFileDialog.getExistingDirectory(self, "Import Folder")
        if path:
            self.browser.ingestion.import_folder(path)

    def _new_folder(self) -> None:
        view = self.source_view if self.browser.active_role == SOURCE_PANE else self.destination_view
        view.create_folder()

    def _refresh_panes(self) -> None:
        self.browser.source.refresh()
        self.browser.destination.refresh()

    def _toggle_transfer_panel(self) -> None:
        self.transfer_panel.setVisible(not self.transfer_panel.isVisible())

    def _on_source_toggled(self, is_open: bool) -> None:
        self.source_view.setVisible(is_open)
        self.toggle_source_action.setChecked(is_open)

    def _on_active_pane_changed(self, role: str) -> None:
        view = self.destination_view if role == DESTINATION_PANE else self.source_view
        view.table.setFocus()

    # -------------------------------------------------------------------------
    # Window state
    # -------------------------------------------------------------------------

    def _window_config(self):
        if self._config is None:
            return None
        return self._config.get_category("window", create_if_not_exists=True)

    def _restore_window_state(self) -> None:
        config = self._window_config()
        if config is None:
            return
        geometry = config.get("geometry")
        if geometry:
            self.restoreGeometry(QByteArray.fromBase64(geometry.encode("ascii")))
        sizes = config.get("splitter_sizes")
        if isinstance(sizes, list) and len(sizes) == 2:
            self.pane_splitter.setSizes([int(s) for s in sizes])
        if config.get("window_state") == "maximized":
            self.setWindowState(self.windowState() | Qt.WindowMaximized)

    def closeEvent(self, event):
        config = self._window_config()
        if config is not None:
            config.set("geometry", bytes(self.saveGeometry().toBase64()).decode("ascii"))
            config.set("splitter_sizes", self.pane_splitter.sizes())
            config.set("window_state", "maximized" if self.isMaximized() else "normal")
        self.browser.save_settings()
        logger.info("[MainWindow] Closing, settings saved")
        super().closeEvent(event)
