"""Main application window for Calm.

The window is the host controller: it owns the :class:`TimerEngine`,
listens to it as a ``TimerListener``, feeds the progress view and time
label, plays the alarm, and saves/restores state around a restart.
"""

from __future__ import annotations

import logging
from pathlib import Path

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QStatusBar, QMessageBox,
)

from . import __version__
from .timer.engine import TimerEngine
from .ui.progress_view import ProgressView, TimeLabel, completion_percentage
from .ui.dialogs import select_interval, confirm_abandon
from .database.instance_state import save_instance_state, restore_instance_state
from .settings import Settings, load_settings, save_settings
from .audio.sounds import SoundManager

LOGGER = logging.getLogger(__name__)

MESSAGE_RUNNING = "Press to stop"
MESSAGE_ELAPSED = "Press to reset"
MESSAGE_IDLE = "Press to start"

ALARM_NOTICE = "Time's up. Your meditation has ended."

_STYLESHEET = """
QMainWindow, QWidget#central { background: #101018; }
QLabel#timeLabel { color: #E2E2F0; }
QStatusBar { color: #7A7A9A; }
"""


class CalmWindow(QMainWindow):
    """Main application window."""

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        sounds_dir: Path | None = None,
        restore_state: bool = True,
    ) -> None:
        super().__init__()
        self.setWindowTitle("Calm")
        self.setMinimumSize(320, 440)
        self.setStyleSheet(_STYLESHEET)

        # ── settings ──────────────────────────────────────────────────
        self._settings: Settings = settings or load_settings()
        self.resize(self._settings.window_width, self._settings.window_height)

        # ── engine ────────────────────────────────────────────────────
        self._timer = TimerEngine(self._settings.interval, self)
        self._timer.add_listener(self)

        # ── audio ─────────────────────────────────────────────────────
        self._sound_manager = SoundManager(parent=self, sounds_dir=sounds_dir)
        self._sound_manager.set_enabled(self._settings.sound_enabled)
        self._sound_manager.set_volume(self._settings.sound_volume)

        self._build_ui()
        self._build_menu_bar()

        if restore_state:
            restore_instance_state(self._timer)
        self._render(self._timer.get_remaining())

    # ══════════════════════════════════════════════════════════════════
    #  BUILD
    # ══════════════════════════════════════════════════════════════════

    def _build_ui(self) -> None:
        central = QWidget(self)
        central.setObjectName("central")
        self.setCentralWidget(central)

        layout = QVBoxLayout(central)
        layout.setContentsMargins(24, 24, 24, 16)
        layout.setSpacing(12)

        self._progress_view = ProgressView(central)
        self._progress_view.clicked.connect(self.switch_timer_state)
        layout.addWidget(self._progress_view, stretch=1)

        self._time_label = TimeLabel(central)
        self._time_label.clicked.connect(self._on_time_label_clicked)
        layout.addWidget(self._time_label)

        self._status_bar = QStatusBar(self)
        self.setStatusBar(self._status_bar)

    def _build_menu_bar(self) -> None:
        menu = self.menuBar().addMenu("&Timer")

        interval_action = QAction("Select &Interval…", self)
        interval_action.setShortcut(QKeySequence("Ctrl+I"))
        interval_action.triggered.connect(self._show_interval_dialog)
        menu.addAction(interval_action)

        reset_action = QAction("&Reset", self)
        reset_action.setShortcut(QKeySequence("Ctrl+R"))
        reset_action.triggered.connect(self.query_reset_timer)
        menu.addAction(reset_action)

        menu.addSeparator()

        about_action = QAction("&About Calm", self)
        about_action.triggered.connect(self._show_about)
        menu.addAction(about_action)

        quit_action = QAction("&Quit", self)
        quit_action.setShortcut(QKeySequence.StandardKey.Quit)
        quit_action.triggered.connect(self.close)
        menu.addAction(quit_action)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC
    # ══════════════════════════════════════════════════════════════════

    @property
    def timer(self) -> TimerEngine:
        return self._timer

    @property
    def progress_view(self) -> ProgressView:
        return self._progress_view

    @property
    def time_label(self) -> TimeLabel:
        return self._time_label

    def status_message(self) -> str:
        if self._timer.is_running():
            return MESSAGE_RUNNING
        if self._timer.is_elapsed():
            return MESSAGE_ELAPSED
        return MESSAGE_IDLE

    def switch_timer_state(self) -> None:
        """Stop a running timer, reset an elapsed one, otherwise start."""
        if self._timer.is_running():
            self.stop_timer()
        elif self._timer.is_elapsed():
            self.reset_timer()
        else:
            self.start_timer()

    def start_timer(self) -> None:
        self._timer.start()
        self._sound_manager.play("click")
        # Views update via on_tick; refresh the message right away.
        self._update_progress(self._timer.get_remaining())

    def stop_timer(self) -> None:
        self._timer.stop()
        self._update_progress(self._timer.get_remaining())

    def reset_timer(self) -> None:
        self._timer.reset()
        self._render(self._timer.get_interval())

    def query_reset_timer(self) -> None:
        """Reset, asking first if a timer is running."""
        if self._timer.is_running():
            if not confirm_abandon(self):
                return
            self.stop_timer()
        self.reset_timer()

    def update_interval(self, interval: int) -> None:
        """Reconfigure the timer and remember *interval* as the preference."""
        self._timer.set_interval(interval)
        self._settings.interval = interval
        save_settings(self._settings)
        LOGGER.info("interval preference set to %d ms", interval)
        self._render(self._timer.get_interval())

    # ══════════════════════════════════════════════════════════════════
    #  TIMER LISTENER
    # ══════════════════════════════════════════════════════════════════

    def on_tick(self, remaining: int) -> None:
        self._render(remaining)

    def on_elapsed(self) -> None:
        self._update_progress(self._timer.get_remaining())
        if not self._sound_manager.play("bowl"):
            self._status_bar.showMessage(ALARM_NOTICE, 10_000)

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _render(self, remaining: int) -> None:
        self._update_progress(remaining)
        self._time_label.set_remaining(remaining)

    def _update_progress(self, remaining: int) -> None:
        self._progress_view.update_progress(
            completion_percentage(self._timer.get_interval(), remaining),
            self.status_message(),
        )

    def _on_time_label_clicked(self) -> None:
        if self._timer.is_running():
            self.switch_timer_state()
        else:
            self._show_interval_dialog()

    def _show_interval_dialog(self) -> None:
        if self._timer.is_running():
            return
        interval = select_interval(self, current=self._timer.get_interval())
        if interval is not None:
            self.update_interval(interval)

    def _show_about(self) -> None:
        QMessageBox.about(
            self,
            "About Calm",
            f"Calm {__version__}\n\nA quiet countdown for meditation.",
        )

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW EVENTS
    # ══════════════════════════════════════════════════════════════════

    def closeEvent(self, event) -> None:  # type: ignore[override]
        """Persist the preference and the timer before the window goes."""
        self._settings.window_width = self.width()
        self._settings.window_height = self.height()
        save_settings(self._settings)
        save_instance_state(self._timer)
        event.accept()

    def keyPressEvent(self, event) -> None:  # type: ignore[override]
        """Space switches the timer state, Escape asks to reset."""
        key = event.key()
        if key == Qt.Key.Key_Space and not event.modifiers():
            self.switch_timer_state()
            event.accept()
            return
        if key == Qt.Key.Key_Escape:
            self.query_reset_timer()
            event.accept()
            return
        super().keyPressEvent(event)
