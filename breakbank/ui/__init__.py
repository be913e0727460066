"""UI package."""

from .timer_widget import TimerWidget, format_time
from .styles import build_stylesheet, palette_for

__all__ = [
    "TimerWidget",
    "format_time",
    "build_stylesheet",
    "palette_for",
]
