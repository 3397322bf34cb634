"""Snapshot of a tracking session."""

from datetime import datetime
from pathlib import Path
from typing import Optional

from pydantic import BaseModel


class TrackerSession(BaseModel):
    """Read-only view of a ChangeTracker's state."""

    enabled: bool
    working_directory: Optional[Path] = None
    baseline_revision: Optional[str] = None
    session_start_time: datetime
    last_diff_digest: Optional[str] = None

    @property
    def short_baseline(self) -> Optional[str]:
        """Get the abbreviated baseline revision."""
        if self.baseline_revision is None:
            return None
        return self.baseline_revision[:8]
