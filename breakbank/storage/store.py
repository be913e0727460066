"""Load and save the timer ledger as a single JSON record.

The record lives under ``STORAGE_KEY`` and looks like::

    {"workTime": 5400, "breakTime": 1350, "totalWorkToday": 5400,
     "cycleCount": 1, "lastTimestamp": 1760770800000}

``lastTimestamp`` is epoch milliseconds.  Saving always rewrites the whole
document.  Loading never raises: a missing, unreadable or malformed record
yields a fresh ledger, and a record saved before today's reset hour is
rolled over to a new day.
"""

from __future__ import annotations

import json
import logging
import math
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError

from ..timer.day import is_new_day
from ..timer.ledger import Ledger, reset_day
from .db import get_session
from .models import Record

log = logging.getLogger(__name__)

STORAGE_KEY = "pomodoroData"

# record field → Ledger attribute
_FIELDS = {
    "workTime": "work_time",
    "breakTime": "break_time",
    "totalWorkToday": "total_work_today",
    "cycleCount": "cycle_count",
}


class RecordError(ValueError):
    """The stored record cannot be interpreted as a ledger."""


def encode_record(ledger: Ledger, now: datetime) -> dict:
    data = {key: getattr(ledger, attr) for key, attr in _FIELDS.items()}
    data["lastTimestamp"] = int(now.timestamp() * 1000)
    return data


def _number(data: dict, key: str) -> int:
    value = data.get(key, 0)
    # bool is an int subclass; a stray true/false is still malformed
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise RecordError(f"{key} is not a number: {value!r}")
    if isinstance(value, float) and not math.isfinite(value):
        raise RecordError(f"{key} is not finite: {value!r}")
    if value < 0:
        raise RecordError(f"{key} is negative: {value!r}")
    return int(value)


def decode_record(data: object) -> tuple[Ledger, datetime | None]:
    """Parse a stored document into ``(ledger, last_saved)``."""
    if not isinstance(data, dict):
        raise RecordError(f"expected an object, got {type(data).__name__}")

    values = {attr: _number(data, key) for key, attr in _FIELDS.items()}
    # Older records counted bonuses under a different name.
    if "cycleCount" not in data and "bonusCount" in data:
        values["cycle_count"] = _number(data, "bonusCount")

    last_saved = None
    if "lastTimestamp" in data:
        millis = _number(data, "lastTimestamp")
        try:
            last_saved = datetime.fromtimestamp(millis / 1000)
        except (OverflowError, OSError, ValueError) as exc:
            raise RecordError(f"lastTimestamp out of range: {millis}") from exc

    return Ledger(**values), last_saved


def read_record(key: str = STORAGE_KEY) -> str | None:
    """Raw JSON text stored under *key*, or ``None``."""
    with get_session() as db:
        row = db.get(Record, key)
        return row.value if row else None


def write_record(text: str, key: str = STORAGE_KEY) -> None:
    with get_session() as db:
        row = db.get(Record, key)
        if row is None:
            db.add(Record(key=key, value=text, updated_at=datetime.now()))
        else:
            row.value = text
            row.updated_at = datetime.now()


def load_ledger(now: datetime) -> Ledger:
    """Restore the ledger for the day containing *now*."""
    try:
        text = read_record()
    except (SQLAlchemyError, OSError):
        log.warning("Ledger storage unavailable, starting fresh", exc_info=True)
        return Ledger()

    if text is None:
        log.info("No saved ledger, starting fresh")
        return Ledger()

    try:
        ledger, last_saved = decode_record(json.loads(text))
    except (ValueError, RecordError) as exc:
        log.warning("Ignoring malformed ledger record: %s", exc)
        return Ledger()

    if is_new_day(last_saved, now):
        log.info("Ledger last saved %s, before today's reset; starting a new day", last_saved)
        return reset_day(ledger)
    return ledger


def save_ledger(ledger: Ledger, now: datetime) -> bool:
    """Overwrite the stored record.  Returns ``False`` if the write failed."""
    try:
        write_record(json.dumps(encode_record(ledger, now)))
    except (SQLAlchemyError, OSError):
        log.warning("Could not save ledger", exc_info=True)
        return False
    return True
