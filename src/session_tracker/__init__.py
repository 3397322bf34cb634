"""Session-scoped working tree change tracking."""

from session_tracker.core.tracker import ChangeTracker
from session_tracker.models import DiffStatus, DiffUpdate, GitOutput, TrackerSession

__all__ = ["ChangeTracker", "DiffStatus", "DiffUpdate", "GitOutput", "TrackerSession"]
