"""Optional platform capabilities."""

from .wake_lock import WakeLock

__all__ = ["WakeLock"]
