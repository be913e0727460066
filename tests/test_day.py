"""Tests for the 05:00 day boundary."""

from datetime import datetime

import pytest

from breakbank.timer.day import RESET_HOUR, day_boundary, is_new_day


class TestDayBoundary:

    def test_after_reset_hour_is_same_morning(self):
        assert day_boundary(datetime(2026, 6, 10, 9, 30)) == datetime(2026, 6, 10, RESET_HOUR)

    def test_before_reset_hour_is_previous_morning(self):
        assert day_boundary(datetime(2026, 6, 10, 4, 59, 59)) == datetime(2026, 6, 9, RESET_HOUR)

    def test_exactly_reset_hour(self):
        assert day_boundary(datetime(2026, 6, 10, 5, 0)) == datetime(2026, 6, 10, 5, 0)

    def test_month_edge(self):
        assert day_boundary(datetime(2026, 7, 1, 2, 0)) == datetime(2026, 6, 30, 5, 0)


class TestIsNewDay:

    @pytest.mark.parametrize("saved, now, expected", [
        # saved before this morning's reset
        (datetime(2026, 6, 10, 4, 0), datetime(2026, 6, 10, 9, 0), True),
        (datetime(2026, 6, 9, 22, 0), datetime(2026, 6, 10, 9, 0), True),
        # saved after this morning's reset
        (datetime(2026, 6, 10, 6, 0), datetime(2026, 6, 10, 9, 0), False),
        # late night and small hours belong to the same day
        (datetime(2026, 6, 9, 23, 0), datetime(2026, 6, 10, 3, 0), False),
        (datetime(2026, 6, 10, 1, 0), datetime(2026, 6, 10, 4, 0), False),
        # days apart
        (datetime(2026, 6, 1, 12, 0), datetime(2026, 6, 10, 12, 0), True),
    ])
    def test_cases(self, saved, now, expected):
        assert is_new_day(saved, now) is expected

    def test_unknown_save_time_is_stale(self):
        assert is_new_day(None, datetime(2026, 6, 10, 9, 0)) is True
