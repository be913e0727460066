"""Timer package."""

from .engine import TimerEngine, TimerState, TICK_INTERVAL_MS
from .ledger import (
    Ledger,
    CYCLE_THRESHOLD,
    CYCLE_BONUS_SECONDS,
    WORK_TO_BREAK_RATIO,
)
from .day import RESET_HOUR

__all__ = [
    "TimerEngine",
    "TimerState",
    "TICK_INTERVAL_MS",
    "Ledger",
    "CYCLE_THRESHOLD",
    "CYCLE_BONUS_SECONDS",
    "WORK_TO_BREAK_RATIO",
    "RESET_HOUR",
]
