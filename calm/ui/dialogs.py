"""Dialogs for Calm: interval selection and the abandon-timer query."""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QDialog, QVBoxLayout, QLabel, QListWidget, QListWidgetItem,
    QMessageBox, QWidget,
)

MINUTE_MS = 60 * 1000

INTERVAL_PRESETS: tuple[int, ...] = tuple(
    minutes * MINUTE_MS for minutes in (5, 15, 20, 30, 45, 60)
)


def interval_label(interval_ms: int) -> str:
    minutes = interval_ms // MINUTE_MS
    return f"{minutes} minute" if minutes == 1 else f"{minutes} minutes"


class IntervalDialog(QDialog):
    """Modal list of preset intervals.  A single click picks one."""

    def __init__(
        self,
        parent: QWidget | None = None,
        *,
        presets: tuple[int, ...] = INTERVAL_PRESETS,
        current: int | None = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Select interval")
        self.setModal(True)
        self.setMinimumWidth(260)

        self._selected: int | None = None

        layout = QVBoxLayout(self)
        layout.setContentsMargins(20, 16, 20, 16)
        layout.setSpacing(10)

        title = QLabel("Meditate for…", self)
        title.setObjectName("sectionLabel")
        layout.addWidget(title)

        self._list = QListWidget(self)
        for interval in presets:
            item = QListWidgetItem(interval_label(interval))
            item.setData(Qt.ItemDataRole.UserRole, interval)
            self._list.addItem(item)
            if interval == current:
                self._list.setCurrentItem(item)
        self._list.itemClicked.connect(self._on_item_clicked)
        layout.addWidget(self._list)

    @property
    def selected_interval(self) -> int | None:
        return self._selected

    def choose(self, row: int) -> None:
        """Pick the preset at *row* and accept the dialog."""
        self._on_item_clicked(self._list.item(row))

    def _on_item_clicked(self, item: QListWidgetItem) -> None:
        self._selected = item.data(Qt.ItemDataRole.UserRole)
        self.accept()


def select_interval(parent: QWidget | None = None, current: int | None = None) -> int | None:
    """Show the interval dialog; return the chosen interval or None if cancelled."""
    dialog = IntervalDialog(parent, current=current)
    dialog.exec()
    return dialog.selected_interval


def confirm_abandon(parent: QWidget | None = None) -> bool:
    """Ask whether to abandon the running timer."""
    reply = QMessageBox.question(
        parent,
        "Abandon timer?",
        "The timer is still running. Abandon it and start over?",
        QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
        QMessageBox.StandardButton.No,
    )
    return reply == QMessageBox.StandardButton.Yes
