"""Module: file_pane_view.py

Author: Michael Economou
Date: 2026-03-02

FilePaneView - table view of one PaneModel with its filter bar.

The widget renders ``pane.visible_rows()`` and keeps the listing index of
each row in Qt.UserRole of its first cell. Mouse clicks and key presses are
forwarded to the DualPaneBrowser, which owns the selection rules; Qt's own
selection handling is bypassed and the table only mirrors the model.

Drag & drop:
- dragging selected rows starts an in-app drag with a JSON path payload
- the destination pane accepts in-app drags and file manager drops
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from PyQt5.QtCore import QItemSelection, QItemSelectionModel, QPoint, Qt
from PyQt5.QtGui import QDrag
from PyQt5.QtWidgets import (
    QAbstractItemView,
    QApplication,
    QCheckBox,
    QComboBox,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QLineEdit,
    QMenu,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from samplepool.config import DESTINATION_PANE, FORMAT_LABELS, PANE_COLUMNS
from samplepool.core.listing_view import ListingFilter, SortColumn, SortDirection, distinct_values
from samplepool.ui.adapters.qt_drop import (
    accepts_drop,
    build_internal_mime_data,
    external_paths,
    internal_payload,
    is_internal_drag,
)
from samplepool.ui.adapters.qt_keyboard import key_event_to_press, qt_modifiers_to_domain
from samplepool.utils.logging.logger_factory import get_cached_logger
from samplepool.utils.shared.formatting import format_optional, format_sample_rate, format_size

if TYPE_CHECKING:
    from samplepool.app.ports.user_interaction import UserDialogPort
    from samplepool.app.state.pane_model import PaneModel
    from samplepool.core.browser_controller import DualPaneBrowser
    from samplepool.models.file_entry import FileEntry

logger = get_cached_logger(__name__)

COLUMN_SORT = [
    SortColumn.NAME,
    SortColumn.SIZE,
    SortColumn.FORMAT,
    SortColumn.BIT_RATE,
    SortColumn.SAMPLE_RATE,
    SortColumn.CHANNELS,
]

ALL_CHOICE = "All"


class PaneTable(QTableWidget):
    """Table forwarding input to the browser instead of Qt's selection model."""

    def __init__(self, view: FilePaneView):
        super().__init__(0, len(PANE_COLUMNS), view)
        self._view = view
        self._press_pos: QPoint | None = None

        self.setHorizontalHeaderLabels(PANE_COLUMNS)
        self.setSelectionBehavior(QAbstractItemView.SelectRows)
        self.setSelectionMode(QAbstractItemView.MultiSelection)
        self.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.setShowGrid(False)
        self.setAlternatingRowColors(True)
        self.verticalHeader().setVisible(False)
        self.horizontalHeader().setSectionResizeMode(0, QHeaderView.Stretch)
        self.horizontalHeader().setSectionsClickable(True)
        self.setContextMenuPolicy(Qt.CustomContextMenu)
        self.setAcceptDrops(view.accepts_drops)
        self.viewport().setAcceptDrops(view.accepts_drops)

    def listing_index_at(self, row: int) -> int | None:
        item = self.item(row, 0)
        return None if item is None else item.data(Qt.UserRole)

    # Mouse ------------------------------------------------------------------

    def mousePressEvent(self, event):
        self.setFocus()
        if event.button() != Qt.LeftButton:
            return
        row = self.rowAt(event.pos().y())
        index = self.listing_index_at(row) if row >= 0 else None
        self._press_pos = event.pos()
        if index is not None:
            self._view.on_row_clicked(index, qt_modifiers_to_domain(event.modifiers()))

    def mouseMoveEvent(self, event):
        if self._press_pos is None or not event.buttons() & Qt.LeftButton:
            return
        distance = (event.pos() - self._press_pos).manhattanLength()
        if distance >= QApplication.startDragDistance():
            self._press_pos = None
            self._view.start_drag()

    def mouseReleaseEvent(self, event):
        self._press_pos = None

    def mouseDoubleClickEvent(self, event):
        # Directory clicks already navigate on press
        event.accept()

    # Keyboard ---------------------------------------------------------------

    def keyPressEvent(self, event):
        if not self._view.on_key(event):
            super().keyPressEvent(event)

    # Drops ------------------------------------------------------------------

    def dragEnterEvent(self, event):
        if self._view.accepts_drops and accepts_drop(event.mimeData()):
            self._view.drop_hover()
            event.acceptProposedAction()
        else:
            event.ignore()

    def dragMoveEvent(self, event):
        if self._view.accepts_drops and accepts_drop(event.mimeData()):
            event.acceptProposedAction()
        else:
            event.ignore()

    def dragLeaveEvent(self, event):
        self._view.drop_leave()
        super().dragLeaveEvent(event)

    def dropEvent(self, event):
        if self._view.accepts_drops and self._view.handle_drop(event.mimeData()):
            event.acceptProposedAction()
        else:
            event.ignore()


class FilePaneView(QWidget):
    """Path header, filter bar and table of one pane."""

    def __init__(
        self,
        pane: PaneModel,
        browser: DualPaneBrowser,
        user_dialogs: UserDialogPort,
        parent: QWidget | None = None,
    ):
        super().__init__(parent)
        self.pane = pane
        self.browser = browser
        self._dialogs = user_dialogs
        self.accepts_drops = pane.role == DESTINATION_PANE
        self._rows: list[tuple[int, FileEntry]] = []

        self._setup_ui()
        self._connect_signals()
        self.refresh_view()

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(4)

        self.path_label = QLabel()
        self.path_label.setTextInteractionFlags(Qt.TextSelectableByMouse)
        layout.addWidget(self.path_label)

        filter_bar = QHBoxLayout()
        self.search_edit = QLineEdit()
        self.search_edit.setPlaceholderText("Search...")
        self.search_edit.setClearButtonEnabled(True)
        filter_bar.addWidget(self.search_edit, 1)

        self.hide_dirs_check = QCheckBox("Hide folders")
        filter_bar.addWidget(self.hide_dirs_check)

        self.format_combo = QComboBox()
        self.bit_combo = QComboBox()
        self.rate_combo = QComboBox()
        self.channels_combo = QComboBox()
        for combo, tip in (
            (self.format_combo, "Format"),
            (self.bit_combo, "Bit depth"),
            (self.rate_combo, "Sample rate"),
            (self.channels_combo, "Channels"),
        ):
            combo.setToolTip(tip)
            combo.addItem(ALL_CHOICE, None)
            filter_bar.addWidget(combo)
        for label in sorted(set(FORMAT_LABELS.values())):
            self.format_combo.addItem(label, label)
        layout.addLayout(filter_bar)

        self.table = PaneTable(self)
        layout.addWidget(self.table, 1)

        self.status_label = QLabel()
        layout.addWidget(self.status_label)

    def _connect_signals(self) -> None:
        self.pane.listing_changed.connect(self._on_listing_changed)
        self.pane.view_changed.connect(self.refresh_view)
        self.pane.selection_changed.connect(self._on_selection_changed)
        self.pane.cursor_changed.connect(self._on_cursor_changed)
        self.pane.path_changed.connect(self._on_path_changed)
        self.pane.loading_changed.connect(self._on_loading_changed)

        self.search_edit.textChanged.connect(self._apply_filter)
        self.hide_dirs_check.toggled.connect(self._apply_filter)
        for combo in (self.format_combo, self.bit_combo, self.rate_combo, self.channels_combo):
            combo.currentIndexChanged.connect(self._apply_filter)

        self.table.horizontalHeader().sectionClicked.connect(self._on_header_clicked)
        self.table.customContextMenuRequested.connect(self._show_context_menu)

    # -------------------------------------------------------------------------
    # Model -> view
    # -------------------------------------------------------------------------

    def _on_path_changed(self, path: str) -> None:
        self.path_label.setText(path)
        self.path_label.setToolTip(path)

    def _on_loading_changed(self, loading: bool) -> None:
        self.status_label.setText("Loading..." if loading else self._summary())

    def _on_listing_changed(self, _listing) -> None:
        self._refill_filter_choices()
        self.refresh_view()

    def _on_selection_changed(self, _selection) -> None:
        self._sync_selection()
        self.status_label.setText(self._summary())

    def _on_cursor_changed(self, _cursor: int) -> None:
        self._scroll_to_cursor()

    def _summary(self) -> str:
        selected = len(self.pane.selection)
        total = len(self.pane.listing)
        return f"{selected} of {total} selected" if selected else f"{total} items"

    def refresh_view(self) -> None:
        self._rows = self.pane.visible_rows()
        self.table.setRowCount(len(self._rows))
        for row, (index, entry) in enumerate(self._rows):
            self._fill_row(row, index, entry)

        header = self.table.horizontalHeader()
        header.setSortIndicatorShown(True)
        header.setSortIndicator(
            COLUMN_SORT.index(self.pane.sort.column),
            Qt.AscendingOrder
            if self.pane.sort.direction is SortDirection.ASC
            else Qt.DescendingOrder,
        )
        self.path_label.setText(self.pane.current_path)
        self.status_label.setText(self._summary())
        self._sync_selection()
        self._scroll_to_cursor()

    def _fill_row(self, row: int, index: int, entry: FileEntry) -> None:
        name = f"{entry.name}/" if entry.is_directory else entry.name
        values = [
            name,
            "" if entry.is_directory else format_size(entry.size),
            entry.format,
            format_optional(entry.bit_rate),
            format_sample_rate(entry.sample_rate),
            format_optional(entry.channels),
        ]
        for column, value in enumerate(values):
            item = QTableWidgetItem(value)
            if column == 0:
                item.setData(Qt.UserRole, index)
                item.setToolTip(entry.path)
            self.table.setItem(row, column, item)

    def _sync_selection(self) -> None:
        selection_model = self.table.selectionModel()
        if selection_model is None:
            return
        qt_selection = QItemSelection()
        last_column = self.table.columnCount() - 1
        for row, (_index, entry) in enumerate(self._rows):
            if entry.path in self.pane.selection:
                qt_selection.select(
                    self.table.model().index(row, 0), self.table.model().index(row, last_column)
                )
        self.table.blockSignals(True)
        selection_model.select(
            qt_selection, QItemSelectionModel.ClearAndSelect | QItemSelectionModel.Rows
        )
        self.table.blockSignals(False)

    def _scroll_to_cursor(self) -> None:
        for row, (index, _entry) in enumerate(self._rows):
            if index == self.pane.cursor_index:
                item = self.table.item(row, 0)
                if item is not None:
                    self.table.scrollToItem(item)
                return

    def _refill_filter_choices(self) -> None:
        listing = self.pane.listing
        for combo, attribute, render in (
            (self.bit_combo, "bit_rate", lambda v: f"{v}-bit"),
            (self.rate_combo, "sample_rate", format_sample_rate),
            (self.channels_combo, "channels", str),
        ):
            current = combo.currentData()
            combo.blockSignals(True)
            combo.clear()
            combo.addItem(ALL_CHOICE, None)
            for value in distinct_values(listing, attribute):
                combo.addItem(render(value), value)
            position = combo.findData(current)
            combo.setCurrentIndex(max(position, 0))
            combo.blockSignals(False)
        self._apply_filter()

    # -------------------------------------------------------------------------
    # View -> model
    # -------------------------------------------------------------------------

    def _apply_filter(self, *_args) -> None:
        self.pane.set_filter(
            ListingFilter(
                search_text=self.search_edit.text(),
                hide_directories=self.hide_dirs_check.isChecked(),
                channels=self.channels_combo.currentData(),
                sample_rate=self.rate_combo.currentData(),
                bit_rate=self.bit_combo.currentData(),
                file_format=self.format_combo.currentData(),
            )
        )

    def _on_header_clicked(self, column: int) -> None:
        if 0 <= column < len(COLUMN_SORT):
            self.pane.set_sort(self.pane.sort.clicked(COLUMN_SORT[column]))

    def on_row_clicked(self, index: int, modifiers) -> None:
        self.browser.handle_click(self.pane.role, index, modifiers)

    def on_key(self, event) -> bool:
        self.browser.set_active_pane(self.pane.role)
        return self.browser.handle_key(key_event_to_press(event))

    # -------------------------------------------------------------------------
    # Drag & drop
    # -------------------------------------------------------------------------

    def start_drag(self) -> None:
        paths = [entry.path for entry in self.pane.selected_entries()]
        if not paths:
            return
        drag = QDrag(self.table)
        drag.setMimeData(build_internal_mime_data(paths))
        logger.debug(
            "[FilePaneView:%s] Dragging %d path(s)",
            self.pane.role,
            len(paths),
            extra={"dev_only": True},
        )
        drag.exec_(Qt.CopyAction)

    def drop_hover(self) -> None:
        self.browser.drop_zone.hover()
        self.table.setStyleSheet("QTableWidget { border: 2px dashed #4a90d9; }")

    def drop_leave(self) -> None:
        self.browser.drop_zone.leave()
        self.table.setStyleSheet("")

    def handle_drop(self, mime) -> bool:
        self.table.setStyleSheet("")
        if is_internal_drag(mime):
            self.browser.drop_zone.leave()
            self.browser.ingestion.ingest_internal_drag(internal_payload(mime), self.pane.current_path)
            return True
        paths = external_paths(mime)
        if not paths:
            self.browser.drop_zone.leave()
            return False
        self.browser.drop_zone.drop(paths)
        return True

    # -------------------------------------------------------------------------
    # Context menu
    # -------------------------------------------------------------------------

    def _show_context_menu(self, pos: QPoint) -> None:
        if not self.pane.current_path:
            return
        menu = QMenu(self)
        selected = self.pane.selected_entries()
        rename_action = menu.addAction("Rename...")
        rename_action.setEnabled(len(selected) == 1)
        delete_action = menu.addAction("Delete")
        delete_action.setEnabled(bool(selected))
        menu.addSeparator()
        folder_action = menu.addAction("New Folder...")

        chosen = menu.exec_(self.table.viewport().mapToGlobal(pos))
        if chosen is rename_action:
            self.rename_selected()
        elif chosen is delete_action:
            self.browser.operations.delete_selection(self.pane)
        elif chosen is folder_action:
            self.create_folder()

    def rename_selected(self) -> None:
        selected = self.pane.selected_entries()
        if len(selected) != 1:
            return
        entry = selected[0]
        new_name = self._dialogs.ask_text("Rename", "New name:", entry.name)
        if new_name is not None:
            self.browser.operations.rename(self.pane, entry.path, new_name)

    def create_folder(self) -> None:
        name = self._dialogs.ask_text("New Folder", "Folder name:", "New Folder")
        if name is not None:
            self.browser.operations.create_directory(self.pane, name)
