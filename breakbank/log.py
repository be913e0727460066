"""Logging setup: a size-capped log file next to the database, plus stdout."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from .storage.db import APP_SUPPORT_DIR

LOG_FILE = APP_SUPPORT_DIR / "breakbank.log"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
MAX_LOG_BYTES = 1_000_000


def setup_logging(level: str = "INFO", log_file: Path | None = None) -> logging.Logger:
    """Configure the ``breakbank`` logger once and return it."""
    log_file = log_file or LOG_FILE
    logger = logging.getLogger("breakbank")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    if logger.handlers:
        return logger

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(formatter)
    logger.addHandler(console)

    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        if log_file.exists() and log_file.stat().st_size > MAX_LOG_BYTES:
            log_file.write_text("")
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
    except OSError as exc:
        logger.warning("Logging to console only, cannot open %s: %s", log_file, exc)
    else:
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
