"""Countdown engine for Calm.

States
------
FRESH       Stopped with the full interval remaining.
PARTIAL     Stopped part way through (0 < remaining < interval).
RUNNING     Counting down.
ELAPSED     Remaining reached zero.  Terminal until ``reset()``.

Transitions
-----------
FRESH | PARTIAL → RUNNING           (start)
RUNNING → PARTIAL | FRESH           (stop)
RUNNING → ELAPSED                   (tick reaches 0, auto-stop)
PARTIAL | ELAPSED → FRESH           (reset, only while stopped)
Any → FRESH                         (set_interval, stops first)

Remaining time is always recomputed from the wall-clock start timestamp,
never accumulated tick by tick, so late, dropped or coalesced ticks do
not corrupt the countdown.  All durations are integer milliseconds.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Protocol

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

LOGGER = logging.getLogger(__name__)


# ── constants ─────────────────────────────────────────────────────────────

DEFAULT_INTERVAL = 15 * 60 * 1000  # 15 minutes
TICK_DELAY_MS = 200


# ── types ─────────────────────────────────────────────────────────────────


class TimerState(Enum):
    FRESH = "fresh"
    PARTIAL = "partial"
    RUNNING = "running"
    ELAPSED = "elapsed"


class IntervalError(ValueError):
    """Raised for a non-positive interval.  The engine is left unchanged."""


class TimerListener(Protocol):
    def on_tick(self, remaining: int) -> None: ...

    def on_elapsed(self) -> None: ...


@dataclass(frozen=True)
class TimerSnapshot:
    """Persistable engine state.  Running flag and start time are excluded."""

    interval: int
    adjusted_interval: int
    remaining_interval: int

    def as_dict(self) -> dict[str, int]:
        return asdict(self)


def wall_clock_ms() -> int:
    return int(time.time() * 1000)


def _check_interval(interval: object) -> int:
    if isinstance(interval, bool) or not isinstance(interval, int):
        raise IntervalError(f"interval must be an int of milliseconds, got {interval!r}")
    if interval <= 0:
        raise IntervalError(f"interval must be > 0, got {interval}")
    return interval


def _stored_int(state: Mapping, key: str) -> int | None:
    value = state.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


# ── engine ────────────────────────────────────────────────────────────────


class TimerEngine(QObject):
    """Pausable wall-clock countdown with listener broadcast.

    Signals
    -------
    tick(remaining_ms: int)
        Emitted on every cadence step while running, after listeners.
    elapsed()
        Emitted once when a run reaches zero, after listeners.
    state_changed(new_state: TimerState)
        Emitted when a public operation changes the derived state.
    """

    tick = pyqtSignal(object)
    elapsed = pyqtSignal()
    state_changed = pyqtSignal(object)

    def __init__(
        self,
        interval: int = DEFAULT_INTERVAL,
        parent: QObject | None = None,
        *,
        clock: Callable[[], int] = wall_clock_ms,
    ) -> None:
        super().__init__(parent)
        interval = _check_interval(interval)

        self._clock = clock

        # ── countdown state ───────────────────────────────────────────
        self._interval: int = interval
        self._adjusted_interval: int = interval  # resume point of this run
        self._remaining: int = interval
        self._start_time: int | None = None

        self._listeners: list[TimerListener] = []

        # ── Qt timer ──────────────────────────────────────────────────
        # Single-shot and re-armed by _on_timeout, so a slow tick never
        # queues a backlog of firings.
        self._qt_timer = QTimer(self)
        self._qt_timer.setSingleShot(True)
        self._qt_timer.setInterval(TICK_DELAY_MS)
        self._qt_timer.timeout.connect(self._on_timeout)

    # ══════════════════════════════════════════════════════════════════
    #  LISTENERS
    # ══════════════════════════════════════════════════════════════════

    def add_listener(self, listener: TimerListener) -> None:
        """Register *listener*.  Adding the same object twice is ignored."""
        if not any(known is listener for known in self._listeners):
            self._listeners.append(listener)

    def remove_listener(self, listener: TimerListener) -> None:
        self._listeners = [
            known for known in self._listeners if known is not listener
        ]

    # ══════════════════════════════════════════════════════════════════
    #  ACCESSORS
    # ══════════════════════════════════════════════════════════════════

    def get_interval(self) -> int:
        return self._interval

    def get_remaining(self) -> int:
        return self._remaining

    def is_running(self) -> bool:
        return self._start_time is not None

    def is_elapsed(self) -> bool:
        return self._remaining == 0

    @property
    def adjusted_interval(self) -> int:
        return self._adjusted_interval

    @property
    def state(self) -> TimerState:
        if self.is_running():
            return TimerState.RUNNING
        if self.is_elapsed():
            return TimerState.ELAPSED
        if self._remaining == self._interval:
            return TimerState.FRESH
        return TimerState.PARTIAL

    @property
    def percent_complete(self) -> float:
        """0.0 → 1.0 progress through the configured interval."""
        done = (self._interval - self._remaining) / self._interval
        return max(0.0, min(1.0, done))

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def set_interval(self, interval: int) -> None:
        """Hard reconfiguration: stop, then make *interval* the full length.

        No tick is emitted; callers re-render from the accessors.
        """
        interval = _check_interval(interval)
        before = self.state
        self._halt()
        self._interval = interval
        self._adjusted_interval = interval
        self._remaining = interval
        LOGGER.debug("interval set to %d ms", interval)
        self._announce(before)

    def start(self) -> None:
        """Start counting down.  No-op when running or elapsed."""
        if self.is_running():
            return
        if self.is_elapsed():
            LOGGER.debug("start ignored: timer has elapsed, reset first")
            return
        before = self.state
        self._adjusted_interval = self._remaining
        self._start_time = self._clock()
        self._qt_timer.start()
        LOGGER.debug("started with %d ms remaining", self._remaining)
        self._announce(before)

    def stop(self) -> None:
        """Pause, freezing the remaining time as the next resume point."""
        if not self.is_running():
            return
        before = self.state
        self._halt()
        LOGGER.debug("stopped with %d ms remaining", self._remaining)
        self._announce(before)

    def reset(self) -> None:
        """Return to the full configured interval.  No-op while running."""
        if self.is_running():
            LOGGER.debug("reset ignored: timer is running, stop first")
            return
        before = self.state
        self._qt_timer.stop()
        self._remaining = self._adjusted_interval = self._interval
        self._start_time = None
        self._announce(before)

    # ══════════════════════════════════════════════════════════════════
    #  SNAPSHOT / RESTORE
    # ══════════════════════════════════════════════════════════════════

    def snapshot(self) -> TimerSnapshot:
        return TimerSnapshot(
            interval=self._interval,
            adjusted_interval=self._adjusted_interval,
            remaining_interval=self._remaining,
        )

    def restore(self, state: TimerSnapshot | Mapping | None) -> None:
        """Load persisted state, falling back to defaults for bad fields.

        The engine is always stopped afterwards; the host decides whether
        to ``start()`` again.  Never raises on corrupted state.
        """
        if isinstance(state, TimerSnapshot):
            state = state.as_dict()
        elif not isinstance(state, Mapping):
            LOGGER.warning("stored state %r is not a mapping, using defaults", state)
            state = {}

        interval = _stored_int(state, "interval")
        if interval is None or interval <= 0:
            if "interval" in state:
                LOGGER.warning(
                    "stored interval %r is invalid, using default",
                    state.get("interval"),
                )
            interval = DEFAULT_INTERVAL

        def _within(key: str) -> int:
            value = _stored_int(state, key)
            if value is None:
                return interval
            return max(0, min(value, interval))

        before = self.state
        self._halt()
        self._interval = interval
        self._adjusted_interval = _within("adjusted_interval")
        self._remaining = _within("remaining_interval")
        LOGGER.debug(
            "restored interval=%d adjusted=%d remaining=%d",
            self._interval, self._adjusted_interval, self._remaining,
        )
        self._announce(before)

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL: timer mechanics
    # ══════════════════════════════════════════════════════════════════

    def _halt(self) -> None:
        # Cancel before mutating so a pending firing cannot revive the run.
        self._qt_timer.stop()
        if self._start_time is not None:
            self._adjusted_interval = self._remaining
            self._start_time = None

    def _on_timeout(self) -> None:
        if not self.is_running():
            return  # late firing after stop()
        if self._tick() and self.is_running():
            self._qt_timer.start()

    def _tick(self) -> bool:
        """Recompute remaining time and notify.  Returns True to re-arm."""
        since_start = self._clock() - self._start_time
        remaining = max(self._adjusted_interval - since_start, 0)
        # A wall clock stepped backwards must not give time back.
        self._remaining = min(remaining, self._remaining)

        for listener in tuple(self._listeners):
            listener.on_tick(self._remaining)
        self.tick.emit(self._remaining)

        if not self.is_elapsed():
            return True

        self.stop()
        for listener in tuple(self._listeners):
            listener.on_elapsed()
        self.elapsed.emit()
        return False

    def _announce(self, before: TimerState) -> None:
        after = self.state
        if after != before:
            self.state_changed.emit(after)
