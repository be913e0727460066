"""Timer state machine for BreakBank.

States
------
IDLE      Nothing running.  The ledger is at rest.
WORKING   Work session; break time accrues (shown live, committed on pause).
BREAK     Break session; spends the bank, ends on its own when it runs out.

Transitions
-----------
IDLE → WORKING          (start_work)
IDLE → BREAK            (start_break, only with a non-empty bank)
WORKING → IDLE          (pause — commits the work session)
BREAK → IDLE            (pause — debits the break actually taken)
BREAK → IDLE            (bank exhausted — emits ``break_expired``)
WORKING | BREAK → IDLE  (reset — abandons the session, ledger untouched)

Timekeeping
-----------
Elapsed time is always ``now - session_start``, never a running sum of
ticks.  A tick that fires late, or not at all, is corrected by the next
one, and a committed session depends only on its two timestamps.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from enum import Enum
from typing import Callable

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from .day import day_boundary
from .ledger import Ledger, commit_work, debit_break, project_break, reset_day

log = logging.getLogger(__name__)


class TimerState(Enum):
    IDLE = "idle"
    WORKING = "working"
    BREAK = "break"


TICK_INTERVAL_MS = 1000


class TimerEngine(QObject):
    """Qt-driven work/break timer with a persisted break-time ledger.

    Signals
    -------
    tick(elapsed_seconds: int)
        Emitted every second while a session is running.
    state_changed(new_state: TimerState)
        Emitted on every state transition.
    ledger_changed(ledger: Ledger)
        Emitted after the ledger is loaded, committed or rolled over.
    break_expired()
        The bank ran out during a break and the engine stopped itself.
    break_rejected()
        ``start_break`` was called with an empty bank.
    entered_active_session() / exited_active_session()
        Leaving or returning to IDLE.  Presentation uses these for the
        dark display mode and the screen wake lock.
    """

    tick = pyqtSignal(int)
    state_changed = pyqtSignal(object)
    ledger_changed = pyqtSignal(object)
    break_expired = pyqtSignal()
    break_rejected = pyqtSignal()
    entered_active_session = pyqtSignal()
    exited_active_session = pyqtSignal()

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        db_enabled: bool = True,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        super().__init__(parent)

        self._clock: Callable[[], datetime] = clock or datetime.now
        self._db_enabled: bool = db_enabled

        # ── session state ─────────────────────────────────────────────
        self._state: TimerState = TimerState.IDLE
        self._session_start: datetime | None = None
        self._initial_break: int = 0  # bank when the work session began

        # ── ledger ────────────────────────────────────────────────────
        self._ledger: Ledger = Ledger()
        self._day_start: datetime = day_boundary(self._clock())

        # ── Qt timer ──────────────────────────────────────────────────
        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(TICK_INTERVAL_MS)
        self._qt_timer.timeout.connect(self._on_tick)

        if self._db_enabled:
            self.load()

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def ledger(self) -> Ledger:
        return self._ledger

    @property
    def session_start(self) -> datetime | None:
        return self._session_start

    @property
    def is_active(self) -> bool:
        return self._state is not TimerState.IDLE

    @property
    def elapsed(self) -> int:
        """Whole seconds since the session started (0 when IDLE)."""
        return self._elapsed_at(self._clock())

    @property
    def display_break(self) -> int:
        """Break seconds to show right now.

        While working this is a projection of the bank including what the
        running session has earned so far; nothing is committed.
        """
        if self._state is TimerState.WORKING:
            return project_break(self._initial_break, self._ledger, self.elapsed)
        if self._state is TimerState.BREAK:
            return self.break_remaining
        return self._ledger.break_time

    @property
    def break_remaining(self) -> int:
        if self._state is not TimerState.BREAK:
            return self._ledger.break_time
        return max(0, self._ledger.break_time - self.elapsed)

    @property
    def percent_complete(self) -> float:
        """0.0 → 1.0 progress through the current break."""
        if self._state is not TimerState.BREAK or self._ledger.break_time <= 0:
            return 0.0
        return max(0.0, min(1.0, self.elapsed / self._ledger.break_time))

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start_work(self) -> None:
        """Begin a work session.  Only valid from IDLE."""
        if self._state is not TimerState.IDLE:
            return
        now = self._clock()
        self._roll_over_if_new_day(now)
        self._initial_break = self._ledger.break_time
        self._begin_session(TimerState.WORKING, now)

    def start_break(self) -> bool:
        """Begin spending the bank.  Returns ``False`` when there is none."""
        if self._state is not TimerState.IDLE:
            return False
        now = self._clock()
        self._roll_over_if_new_day(now)
        if self._ledger.break_time <= 0:
            log.info("Break requested with an empty bank")
            self.break_rejected.emit()
            return False
        self._begin_session(TimerState.BREAK, now)
        return True

    def pause(self) -> None:
        """Stop the running session and commit it to the ledger."""
        if self._state is TimerState.IDLE:
            return
        now = self._clock()
        elapsed = self._elapsed_at(now)

        if self._state is TimerState.WORKING:
            result = commit_work(self._ledger, elapsed)
            log.info(
                "Work session committed: %ds worked, +%ds passive, %d bonus cycle(s)",
                elapsed, result.passive_earned, result.bonus_cycles,
            )
            self._commit(result.ledger, now)
        else:
            log.info("Break session committed: %ds taken", elapsed)
            self._commit(debit_break(self._ledger, elapsed), now)

        self._end_session()

    def reset(self) -> None:
        """Abandon the running session.  The ledger is not touched."""
        if self._state is TimerState.IDLE:
            return
        log.info("%s session abandoned after %ds", self._state.value, self.elapsed)
        self._end_session()

    def toggle(self) -> None:
        """Start working when idle, otherwise pause and commit."""
        if self._state is TimerState.IDLE:
            self.start_work()
        else:
            self.pause()

    def load(self) -> None:
        """Replace the ledger with the stored one.  Ignored mid-session."""
        if self._state is not TimerState.IDLE:
            return
        from ..storage.store import load_ledger

        now = self._clock()
        self._ledger = load_ledger(now)
        self._day_start = day_boundary(now)
        self._persist(now)
        self.ledger_changed.emit(self._ledger)

    def shutdown(self) -> None:
        """Stop ticking.  A running session is left uncommitted."""
        self._qt_timer.stop()

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL — timer mechanics
    # ══════════════════════════════════════════════════════════════════

    def _elapsed_at(self, now: datetime) -> int:
        if self._session_start is None:
            return 0
        return max(0, int((now - self._session_start).total_seconds()))

    def _begin_session(self, state: TimerState, now: datetime) -> None:
        self._session_start = now
        self._set_state(state)
        self.entered_active_session.emit()
        self._qt_timer.start()

    def _end_session(self) -> None:
        self._qt_timer.stop()
        self._session_start = None
        self._initial_break = 0
        self._set_state(TimerState.IDLE)
        self.exited_active_session.emit()

    def _on_tick(self) -> None:
        if self._state is TimerState.IDLE:
            return
        now = self._clock()
        elapsed = self._elapsed_at(now)
        self.tick.emit(elapsed)

        if self._state is TimerState.BREAK and elapsed >= self._ledger.break_time:
            log.info("Break finished after %ds", elapsed)
            self._commit(replace(self._ledger, break_time=0), now)
            self._end_session()
            self.break_expired.emit()

    def _set_state(self, new_state: TimerState) -> None:
        self._state = new_state
        self.state_changed.emit(new_state)

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL — ledger persistence
    # ══════════════════════════════════════════════════════════════════

    def _roll_over_if_new_day(self, now: datetime) -> None:
        """Reset the daily counters when the app stayed open past the
        reset hour.  Only called from IDLE."""
        boundary = day_boundary(now)
        if boundary <= self._day_start:
            return
        log.info("New day since %s, resetting daily counters", self._day_start)
        self._day_start = boundary
        self._commit(reset_day(self._ledger), now)

    def _commit(self, ledger: Ledger, now: datetime) -> None:
        """Store *ledger* on the day it already belongs to.

        A session that ran past the reset hour still counts toward the
        day it started in; the next session from IDLE rolls it over.
        """
        self._ledger = ledger
        self._persist(now)
        self.ledger_changed.emit(ledger)

    def _marker_for(self, now: datetime) -> datetime:
        """Save time to record: *now*, unless that already lies in a
        later day than the ledger, in which case the ledger's own day."""
        if day_boundary(now) > self._day_start:
            return self._day_start
        return now

    def _persist(self, now: datetime) -> None:
        if not self._db_enabled:
            return
        from ..storage.store import save_ledger

        save_ledger(self._ledger, self._marker_for(now))
