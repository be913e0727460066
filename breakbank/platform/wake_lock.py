"""Keep the display awake while a session is running.

On macOS this holds a ``caffeinate -d`` child process for as long as the
lock is held.  Elsewhere, or when the command is missing, acquiring is a
logged no-op; the timer never depends on it.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import sys

log = logging.getLogger(__name__)

CAFFEINATE = "caffeinate"


class WakeLock:
    def __init__(self, command: list[str] | None = None) -> None:
        self._command = command or [CAFFEINATE, "-d"]
        self._proc: subprocess.Popen | None = None

    @property
    def held(self) -> bool:
        return self._proc is not None and self._proc.poll() is None

    @staticmethod
    def supported() -> bool:
        return sys.platform == "darwin" and shutil.which(CAFFEINATE) is not None

    def acquire(self) -> bool:
        """Start holding the lock.  Returns whether it is now held."""
        if self.held:
            return True
        if not self.supported():
            log.debug("No wake lock on %s", sys.platform)
            return False
        try:
            self._proc = subprocess.Popen(
                self._command,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as exc:
            log.warning("Wake lock unavailable: %s", exc)
            self._proc = None
            return False
        log.info("Wake lock acquired")
        return True

    def release(self) -> None:
        if self._proc is None:
            return
        proc, self._proc = self._proc, None
        if proc.poll() is not None:
            return
        proc.terminate()
        try:
            proc.wait(timeout=2)
        except subprocess.TimeoutExpired:
            proc.kill()
        log.info("Wake lock released")
