"""Module: transfer_panel.py

Author: Michael Economou
Date: 2026-03-02

TransferPanel - live view of the transfer queue.

Shows one row per TransferItem (number, progress bar, file, size, status)
with the raw error text as the status tooltip. The panel hides itself
TRANSFER_PANEL_AUTOCLOSE_MS after a batch in which every transfer completed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from PyQt5.QtCore import Qt, QTimer
from PyQt5.QtGui import QBrush, QColor
from PyQt5.QtWidgets import (
    QAbstractItemView,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QProgressBar,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from samplepool.config import TRANSFER_COLUMNS, TRANSFER_PANEL_AUTOCLOSE_MS
from samplepool.core.transfer.queue_controller import TransferSortColumn, sort_transfers
from samplepool.utils.logging.logger_factory import get_cached_logger
from samplepool.utils.shared.formatting import format_size

if TYPE_CHECKING:
    from samplepool.core.transfer.queue_controller import TransferQueueController
    from samplepool.models.transfer_item import TransferItem

logger = get_cached_logger(__name__)

COLUMN_SORT = [
    TransferSortColumn.NUMBER,
    TransferSortColumn.PROGRESS,
    TransferSortColumn.FILE,
    TransferSortColumn.SIZE,
    TransferSortColumn.STATUS,
]

STATUS_COLORS = {
    "completed": "#2e7d32",
    "failed": "#c62828",
    "cancelled": "#757575",
}


class TransferPanel(QWidget):
    """Table of transfers with clear/cancel actions."""

    def __init__(self, controller: TransferQueueController, parent: QWidget | None = None):
        super().__init__(parent)
        self.controller = controller
        self._sort_column = TransferSortColumn.NUMBER
        self._descending = False
        self._numbers: dict[str, int] = {}

        self._setup_ui()
        self._connect_signals()
        self.refresh()

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 4, 0, 0)

        header = QHBoxLayout()
        self.summary_label = QLabel()
        header.addWidget(self.summary_label, 1)
        self.cancel_button = QPushButton("Cancel")
        self.clear_finished_button = QPushButton("Clear Finished")
        self.clear_all_button = QPushButton("Clear All")
        self.close_button = QPushButton("Close")
        for button in (
            self.cancel_button,
            self.clear_finished_button,
            self.clear_all_button,
            self.close_button,
        ):
            header.addWidget(button)
        layout.addLayout(header)

        self.table = QTableWidget(0, len(TRANSFER_COLUMNS), self)
        self.table.setHorizontalHeaderLabels(TRANSFER_COLUMNS)
        self.table.setSelectionBehavior(QAbstractItemView.SelectRows)
        self.table.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.table.verticalHeader().setVisible(False)
        self.table.horizontalHeader().setSectionResizeMode(2, QHeaderView.Stretch)
        self.table.horizontalHeader().setSectionsClickable(True)
        layout.addWidget(self.table, 1)

    def _connect_signals(self) -> None:
        self.controller.transfer_added.connect(self._on_transfer_added)
        self.controller.transfer_updated.connect(self._on_transfer_updated)
        self.controller.transfers_cleared.connect(self.refresh)
        self.controller.batch_finished.connect(self._on_batch_finished)

        self.cancel_button.clicked.connect(self._cancel_selected)
        self.clear_finished_button.clicked.connect(self.controller.clear_finished)
        self.clear_all_button.clicked.connect(self.controller.clear_all)
        self.close_button.clicked.connect(self.hide)
        self.table.horizontalHeader().sectionClicked.connect(self._on_header_clicked)

    # -------------------------------------------------------------------------
    # Controller -> view
    # -------------------------------------------------------------------------

    def _on_transfer_added(self, item: TransferItem) -> None:
        self._numbers[item.id] = len(self._numbers) + 1
        self.refresh()

    def _on_transfer_updated(self, item: TransferItem) -> None:
        for row in range(self.table.rowCount()):
            cell = self.table.item(row, 0)
            if cell is not None and cell.data(Qt.UserRole) == item.id:
                self._fill_row(row, item)
                break
        self._update_summary()

    def _on_batch_finished(self, _destination: str) -> None:
        self._update_summary()
        if self.controller.all_succeeded:
            QTimer.singleShot(TRANSFER_PANEL_AUTOCLOSE_MS, self._auto_close)

    def _auto_close(self) -> None:
        # A new batch may have started in the meantime
        if self.controller.all_succeeded and not self.controller.is_busy:
            logger.debug("[TransferPanel] Auto-closing", extra={"dev_only": True})
            self.hide()

    def refresh(self) -> None:
        items = sort_transfers(self.controller.transfers, self._sort_column, self._descending)
        self.table.setRowCount(len(items))
        for row, item in enumerate(items):
            self._fill_row(row, item)
        self._update_summary()

    def _fill_row(self, row: int, item: TransferItem) -> None:
        number = QTableWidgetItem(str(self._numbers.get(item.id, row + 1)))
        number.setData(Qt.UserRole, item.id)
        self.table.setItem(row, 0, number)

        bar = self.table.cellWidget(row, 1)
        if not isinstance(bar, QProgressBar):
            bar = QProgressBar()
            bar.setRange(0, 100)
            bar.setTextVisible(False)
            self.table.setCellWidget(row, 1, bar)
        bar.setValue(int(item.progress * 100))

        self.table.setItem(row, 2, QTableWidgetItem(item.file_name))
        self.table.setItem(
            row, 3, QTableWidgetItem(format_size(item.file_size) if item.file_size else "")
        )

        status = QTableWidgetItem(item.status.value.capitalize())
        color = STATUS_COLORS.get(item.status.value)
        if color:
            status.setForeground(_brush(color))
        if item.error:
            status.setToolTip(item.error)
        self.table.setItem(row, 4, status)

    def _update_summary(self) -> None:
        total = len(self.controller.transfers)
        active = self.controller.active_count
        text = f"{total} transfer(s)"
        if active:
            text += f", {active} active"
        if self.controller.has_failed:
            text += ", some failed"
        self.summary_label.setText(text)

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    def _on_header_clicked(self, column: int) -> None:
        chosen = COLUMN_SORT[column]
        if chosen is self._sort_column:
            self._descending = not self._descending
        else:
            self._sort_column = chosen
            self._descending = False
        self.refresh()

    def _cancel_selected(self) -> None:
        for index in self.table.selectionModel().selectedRows():
            cell = self.table.item(index.row(), 0)
            if cell is not None:
                self.controller.cancel_transfer(cell.data(Qt.UserRole))


def _brush(color: str) -> QBrush:
    return QBrush(QColor(color))
