"""Break-time ledger and the accrual arithmetic that mutates it.

Work earns break time two ways:

- passively, ``WORK_TO_BREAK_RATIO`` of every worked second, and
- a ``CYCLE_BONUS_SECONDS`` award each time today's total work crosses
  a multiple of ``CYCLE_THRESHOLD``.

Bonuses come from the *delta* of crossed thresholds, so one long session
that spans several hour marks earns every crossing once and only once.
"""

from __future__ import annotations

from dataclasses import dataclass, replace


# ── constants ─────────────────────────────────────────────────────────────

CYCLE_THRESHOLD = 60 * 60        # one bonus per hour of work
CYCLE_BONUS_SECONDS = 15 * 60
WORK_TO_BREAK_RATIO = 0.25


@dataclass(frozen=True)
class Ledger:
    """The persisted part of the timer.  All values are whole seconds."""

    break_time: int = 0          # spendable bank
    total_work_today: int = 0
    cycle_count: int = 0         # hour marks crossed today
    work_time: int = 0           # lifetime work, survives day rollover


@dataclass(frozen=True)
class WorkCommit:
    ledger: Ledger
    passive_earned: int
    bonus_cycles: int

    @property
    def bonus_earned(self) -> int:
        return self.bonus_cycles * CYCLE_BONUS_SECONDS


def cycles_for(total_work: int) -> int:
    return total_work // CYCLE_THRESHOLD


def passive_break(elapsed: int) -> int:
    return int(max(0, elapsed) * WORK_TO_BREAK_RATIO)


def commit_work(ledger: Ledger, elapsed: int) -> WorkCommit:
    """Apply a finished work session of *elapsed* seconds."""
    elapsed = max(0, elapsed)
    new_total = ledger.total_work_today + elapsed
    new_cycles = cycles_for(new_total)
    # A ledger restored from a hand-edited record may already be ahead.
    bonus_cycles = max(0, new_cycles - ledger.cycle_count)
    earned = passive_break(elapsed)

    updated = replace(
        ledger,
        break_time=ledger.break_time + earned + bonus_cycles * CYCLE_BONUS_SECONDS,
        total_work_today=new_total,
        cycle_count=new_cycles,
        work_time=ledger.work_time + elapsed,
    )
    return WorkCommit(updated, earned, bonus_cycles)


def debit_break(ledger: Ledger, elapsed: int) -> Ledger:
    """Spend *elapsed* seconds of break.  The bank clamps at zero."""
    return replace(ledger, break_time=max(0, ledger.break_time - max(0, elapsed)))


def project_break(initial_break: int, ledger: Ledger, elapsed: int) -> int:
    """Bank value to show while a work session is still running.

    *initial_break* is the bank frozen when the session started.  Nothing
    is committed; the result is recomputed from *elapsed* every tick.
    """
    crossed = max(0, cycles_for(ledger.total_work_today + max(0, elapsed)) - ledger.cycle_count)
    return initial_break + passive_break(elapsed) + crossed * CYCLE_BONUS_SECONDS


def reset_day(ledger: Ledger) -> Ledger:
    """Start a fresh day.  Lifetime ``work_time`` is kept."""
    return Ledger(work_time=ledger.work_time)
