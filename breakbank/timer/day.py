"""Day semantics: a day starts at ``RESET_HOUR`` local time, not midnight."""

from __future__ import annotations

from datetime import datetime, timedelta

RESET_HOUR = 5


def day_boundary(now: datetime) -> datetime:
    """The most recent ``RESET_HOUR:00`` at or before *now*."""
    boundary = now.replace(hour=RESET_HOUR, minute=0, second=0, microsecond=0)
    if now < boundary:
        boundary -= timedelta(days=1)
    return boundary


def is_new_day(last_saved: datetime | None, now: datetime) -> bool:
    """True when *last_saved* belongs to an earlier day than *now*.

    An unknown save time is treated as stale.
    """
    if last_saved is None:
        return True
    return last_saved < day_boundary(now)
