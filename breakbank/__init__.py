"""BreakBank: work now, earn break time."""

__version__ = "0.1.0"
