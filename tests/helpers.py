"""Shared test helpers for Calm."""

from calm.timer.engine import TimerEngine


class FakeClock:
    """Settable wall clock in milliseconds."""

    def __init__(self, now: int = 1_700_000_000_000) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None


class RecordingListener:
    """TimerListener that records every notification, optionally into a shared log."""

    def __init__(self, name: str = "", log: list | None = None):
        self.name = name
        self.ticks: list[int] = []
        self.elapsed_count = 0
        self._log = log

    def on_tick(self, remaining: int) -> None:
        self.ticks.append(remaining)
        if self._log is not None:
            self._log.append((self.name, "tick", remaining))

    def on_elapsed(self) -> None:
        self.elapsed_count += 1
        if self._log is not None:
            self._log.append((self.name, "elapsed"))


def advance_and_fire(engine: TimerEngine, clock: FakeClock, ms: int) -> None:
    """Move the wall clock forward and deliver one periodic callback."""
    clock.advance(ms)
    engine._on_timeout()
