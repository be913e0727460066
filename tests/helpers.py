"""Shared test helpers for BreakBank."""

from datetime import datetime, timedelta

from breakbank.timer.engine import TimerEngine


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

    def clear(self):
        self.items.clear()


class FakeClock:
    """Callable wall clock that only moves when told to."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float = 0, *, ms: int = 0) -> None:
        self.now += timedelta(seconds=seconds, milliseconds=ms)

    def set(self, when: datetime) -> None:
        self.now = when


def run_ticks(engine: TimerEngine, clock: FakeClock, intervals_ms) -> None:
    """Fire the tick handler after each interval, like a late QTimer would."""
    for ms in intervals_ms:
        clock.advance(ms=ms)
        engine._on_tick()


def work_for(engine: TimerEngine, clock: FakeClock, seconds: int) -> None:
    """Run and commit one work session of *seconds*."""
    engine.start_work()
    clock.advance(seconds)
    engine.pause()
