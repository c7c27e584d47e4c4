"""Timer package."""

from .engine import (
    TimerEngine,
    TimerListener,
    TimerSnapshot,
    TimerState,
    IntervalError,
    DEFAULT_INTERVAL,
    TICK_DELAY_MS,
)

__all__ = [
    "TimerEngine",
    "TimerListener",
    "TimerSnapshot",
    "TimerState",
    "IntervalError",
    "DEFAULT_INTERVAL",
    "TICK_DELAY_MS",
]
