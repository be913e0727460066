"""Storage package."""

from .db import get_session, init_db, configure_engine
from .models import Record
from .store import STORAGE_KEY, load_ledger, save_ledger

__all__ = [
    "get_session",
    "init_db",
    "configure_engine",
    "Record",
    "STORAGE_KEY",
    "load_ledger",
    "save_ledger",
]
