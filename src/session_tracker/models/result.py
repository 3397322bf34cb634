"""Result of asking the tracker whether anything changed."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class DiffStatus(str, Enum):
    """Outcome of a deduplicated diff request."""

    UNAVAILABLE = "unavailable"  # tracking disabled
    UNCHANGED = "unchanged"
    CHANGED = "changed"


class DiffUpdate(BaseModel):
    """Tri-state answer of ``ChangeTracker.get_diff_if_changed``."""

    status: DiffStatus
    text: Optional[str] = None

    @property
    def has_changes(self) -> bool:
        return self.status == DiffStatus.CHANGED

    @classmethod
    def unavailable(cls) -> "DiffUpdate":
        return cls(status=DiffStatus.UNAVAILABLE)

    @classmethod
    def unchanged(cls) -> "DiffUpdate":
        return cls(status=DiffStatus.UNCHANGED)

    @classmethod
    def changed(cls, text: str) -> "DiffUpdate":
        return cls(status=DiffStatus.CHANGED, text=text)
