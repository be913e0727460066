"""Tests for the break-time accrual arithmetic."""

import pytest

from breakbank.timer.ledger import (
    Ledger,
    CYCLE_BONUS_SECONDS,
    CYCLE_THRESHOLD,
    commit_work,
    cycles_for,
    debit_break,
    passive_break,
    project_break,
    reset_day,
)


class TestPassiveAccrual:

    def test_quarter_of_work(self):
        assert passive_break(400) == 100

    def test_rounds_down(self):
        assert passive_break(7) == 1
        assert passive_break(3) == 0

    def test_negative_elapsed_earns_nothing(self):
        assert passive_break(-60) == 0

    def test_cycles_for(self):
        assert cycles_for(0) == 0
        assert cycles_for(CYCLE_THRESHOLD - 1) == 0
        assert cycles_for(CYCLE_THRESHOLD) == 1
        assert cycles_for(2 * CYCLE_THRESHOLD + 100) == 2


class TestCommitWork:

    def test_short_session_no_bonus(self):
        result = commit_work(Ledger(), 600)
        assert result.bonus_cycles == 0
        assert result.passive_earned == 150
        assert result.ledger == Ledger(
            break_time=150, total_work_today=600, cycle_count=0, work_time=600,
        )

    def test_bonus_awarded_exactly_once(self):
        before = Ledger(break_time=10, total_work_today=3500)
        result = commit_work(before, 200)
        assert result.bonus_cycles == 1
        assert result.ledger.cycle_count == 1
        assert result.ledger.break_time == 10 + 50 + CYCLE_BONUS_SECONDS
        assert result.bonus_earned == CYCLE_BONUS_SECONDS

    def test_no_second_bonus_for_same_crossing(self):
        first = commit_work(Ledger(total_work_today=3500), 200).ledger
        second = commit_work(first, 100)
        assert second.bonus_cycles == 0
        assert second.ledger.cycle_count == 1
        assert second.ledger.break_time == first.break_time + 25

    def test_multi_crossing_session(self):
        result = commit_work(Ledger(), 7300)
        assert result.bonus_cycles == 2
        assert result.ledger.cycle_count == 2
        assert result.ledger.break_time == 1825 + 2 * CYCLE_BONUS_SECONDS

    def test_crossing_split_across_sessions(self):
        ledger = commit_work(Ledger(), 3000).ledger
        assert ledger.cycle_count == 0
        result = commit_work(ledger, 1000)
        assert result.bonus_cycles == 1
        assert result.ledger.total_work_today == 4000

    def test_zero_elapsed_is_harmless(self):
        ledger = Ledger(break_time=42, total_work_today=100, work_time=100)
        assert commit_work(ledger, 0).ledger == ledger

    def test_lifetime_work_accumulates(self):
        ledger = Ledger(work_time=10_000)
        assert commit_work(ledger, 60).ledger.work_time == 10_060

    def test_cycle_count_tracks_total(self):
        ledger = Ledger()
        for elapsed in (1234, 2345, 3456, 17, 4000):
            ledger = commit_work(ledger, elapsed).ledger
            assert ledger.cycle_count == cycles_for(ledger.total_work_today)


class TestDebitBreak:

    def test_spends_bank(self):
        assert debit_break(Ledger(break_time=300), 120).break_time == 180

    def test_clamps_at_zero(self):
        assert debit_break(Ledger(break_time=100), 250).break_time == 0

    def test_leaves_work_totals_alone(self):
        ledger = Ledger(break_time=100, total_work_today=900, cycle_count=0)
        after = debit_break(ledger, 50)
        assert after.total_work_today == 900
        assert after.cycle_count == 0


class TestProjection:

    def test_projection_without_crossing(self):
        ledger = Ledger(break_time=500, total_work_today=100)
        assert project_break(500, ledger, 400) == 600

    def test_projection_includes_pending_bonus(self):
        ledger = Ledger(break_time=500, total_work_today=3500)
        assert project_break(500, ledger, 200) == 500 + 50 + CYCLE_BONUS_SECONDS

    def test_projection_matches_commit(self):
        ledger = Ledger(break_time=75, total_work_today=3300, cycle_count=0)
        projected = project_break(ledger.break_time, ledger, 4200)
        assert projected == commit_work(ledger, 4200).ledger.break_time

    def test_projection_is_idempotent(self):
        ledger = Ledger(break_time=30, total_work_today=3000)
        assert project_break(30, ledger, 900) == project_break(30, ledger, 900)

    @pytest.mark.parametrize("elapsed", [0, -5])
    def test_nothing_elapsed(self, elapsed):
        assert project_break(500, Ledger(break_time=500), elapsed) == 500


class TestResetDay:

    def test_clears_daily_fields(self):
        ledger = Ledger(break_time=900, total_work_today=5000, cycle_count=1, work_time=80_000)
        assert reset_day(ledger) == Ledger(work_time=80_000)
