"""Allow running BreakBank as a module: python -m breakbank."""

import logging
import sys

from PyQt6.QtWidgets import QApplication
from sqlalchemy.exc import SQLAlchemyError

from .log import setup_logging
from .settings import load_settings
from .storage.db import init_db
from .app import BreakBankApp


def init_storage(log: logging.Logger) -> bool:
    """Create the database, or carry on without it if that fails.

    The engine already falls back to an unsaved ledger when storage is
    unreachable, so a broken data directory only costs persistence.
    """
    try:
        init_db()
    except (SQLAlchemyError, OSError):
        log.warning("Database unavailable, progress will not be saved", exc_info=True)
        return False
    return True


def main() -> None:
    settings = load_settings()
    log = setup_logging(settings.log_level)
    init_storage(log)
    log.info("BreakBank ready")

    app = QApplication(sys.argv)
    app.setApplicationName("BreakBank")
    app.setOrganizationName("BreakBank")
    app.setQuitOnLastWindowClosed(False)

    window = BreakBankApp()
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
