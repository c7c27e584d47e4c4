"""Circular progress view rendered with QPainter.

- Dashed track circle.
- Solid arc filling clockwise from 12 o'clock as the countdown progresses.
- A marker dot riding the circumference at the end of the arc.
- The instructional message ("Press to start", ...) below the circle.

The view holds no timing logic; the host feeds it a completion
percentage computed from the engine's tick values.
"""

from __future__ import annotations

import math

from PyQt6.QtCore import Qt, QRectF, QPointF, pyqtSignal
from PyQt6.QtGui import QPainter, QPen, QColor, QFont, QMouseEvent
from PyQt6.QtWidgets import QWidget, QLabel


TRACK_COLOR = "#6E6E80"
ARC_COLOR = "#33B5E5"
MARKER_COLOR = "#0099CC"
MESSAGE_COLOR = "#33B5E5"


# ── helpers ──────────────────────────────────────────────────────────────────


def completion_percentage(interval: int, remaining: int) -> float:
    """Fraction of *interval* already counted down, clamped to 0..1."""
    if interval <= 0:
        return 0.0
    return max(0.0, min(1.0, (interval - remaining) / interval))


def format_remaining(remaining_ms: int) -> str:
    """Milliseconds as ``MM:SS`` (minutes are not wrapped at 60)."""
    minutes, seconds = divmod(max(0, remaining_ms) // 1000, 60)
    return f"{minutes:02d}:{seconds:02d}"


def marker_position(
    cx: float, cy: float, radius: float, percentage: float,
) -> tuple[float, float]:
    """Point on the circle at the end of an arc drawn clockwise from 12 o'clock."""
    radians = math.radians(percentage * 360.0)
    return cx + math.sin(radians) * radius, cy - math.cos(radians) * radius


# ── widgets ──────────────────────────────────────────────────────────────────


class ProgressView(QWidget):
    """Custom-painted countdown circle.  Emits ``clicked`` on a left click."""

    clicked = pyqtSignal()

    TRACK_THICKNESS = 6
    ARC_THICKNESS = 8
    MARKER_RADIUS = 7
    MESSAGE_SIZE = 20

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setMinimumSize(260, 300)
        self.setCursor(Qt.CursorShape.PointingHandCursor)

        self._percentage: float = 0.0
        self._message: str = ""

    # ── public API ────────────────────────────────────────────────────────

    @property
    def percentage(self) -> float:
        return self._percentage

    @property
    def message(self) -> str:
        return self._message

    def update_progress(self, percentage: float, message: str) -> None:
        if not 0.0 <= percentage <= 1.0:
            raise ValueError(f"percentage must be within 0..1, got {percentage}")
        self._percentage = percentage
        self._message = message
        self.update()

    # ── events ────────────────────────────────────────────────────────────

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:  # type: ignore[override]
        if event.button() == Qt.MouseButton.LeftButton:
            self.clicked.emit()
            event.accept()
            return
        super().mouseReleaseEvent(event)

    def paintEvent(self, event) -> None:  # type: ignore[override]
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        w = self.width()
        h = self.height()
        message_band = self.MESSAGE_SIZE * 2
        diameter = max(40, min(w, h - message_band) - 2 * self.ARC_THICKNESS)
        radius = diameter / 2
        cx = w / 2
        cy = (h - message_band) / 2

        ring_rect = QRectF(cx - radius, cy - radius, diameter, diameter)

        # ── dashed track ─────────────────────────────────────────────
        track_pen = QPen(QColor(TRACK_COLOR), self.TRACK_THICKNESS)
        track_pen.setDashPattern([3.0, 1.5])
        painter.setPen(track_pen)
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawEllipse(ring_rect)

        # ── progress arc ─────────────────────────────────────────────
        if self._percentage > 0.0:
            arc_pen = QPen(QColor(ARC_COLOR), self.ARC_THICKNESS)
            arc_pen.setCapStyle(Qt.PenCapStyle.RoundCap)
            painter.setPen(arc_pen)
            # Qt arcs: start at 12 o'clock (90*16), go clockwise (negative)
            painter.drawArc(ring_rect, 90 * 16, -int(self._percentage * 360 * 16))

        # ── marker ───────────────────────────────────────────────────
        mx, my = marker_position(cx, cy, radius, self._percentage)
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QColor(MARKER_COLOR))
        painter.drawEllipse(QPointF(mx, my), self.MARKER_RADIUS, self.MARKER_RADIUS)

        # ── message ──────────────────────────────────────────────────
        font = QFont()
        font.setPixelSize(self.MESSAGE_SIZE)
        painter.setFont(font)
        painter.setPen(QColor(MESSAGE_COLOR))
        message_rect = QRectF(0, h - message_band, w, message_band)
        painter.drawText(message_rect, Qt.AlignmentFlag.AlignCenter, self._message)

        painter.end()


class TimeLabel(QLabel):
    """Large ``MM:SS`` readout.  Emits ``clicked`` on a left click."""

    clicked = pyqtSignal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__("00:00", parent)
        self.setObjectName("timeLabel")
        self.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.setCursor(Qt.CursorShape.PointingHandCursor)
        font = QFont()
        font.setPixelSize(56)
        font.setWeight(QFont.Weight.Light)
        self.setFont(font)

    def set_remaining(self, remaining_ms: int) -> None:
        self.setText(format_remaining(remaining_ms))

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:  # type: ignore[override]
        if event.button() == Qt.MouseButton.LeftButton:
            self.clicked.emit()
            event.accept()
            return
        super().mouseReleaseEvent(event)
