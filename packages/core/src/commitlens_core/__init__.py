"""AI code review of staged files, appended to the commit message."""

__version__ = "0.1.0"
