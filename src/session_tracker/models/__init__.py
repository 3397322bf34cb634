"""Data models for the session change tracker."""

from .command import GitOutput
from .result import DiffStatus, DiffUpdate
from .session import TrackerSession

__all__ = ["DiffStatus", "DiffUpdate", "GitOutput", "TrackerSession"]
