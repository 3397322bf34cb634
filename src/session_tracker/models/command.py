"""Result of a single git invocation."""

from typing import List, Optional

from pydantic import BaseModel


class GitOutput(BaseModel):
    """Outcome of running git with an argument list.

    A failed invocation (launch error, non-zero exit) has ``ok`` set to
    False; callers decide what a failure means at each call site.
    """

    args: List[str]
    returncode: Optional[int] = None
    stdout: str = ""
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        """Check if git ran and exited with status 0."""
        return self.returncode == 0 and self.error is None

    @classmethod
    def success(cls, args: List[str], stdout: str) -> "GitOutput":
        return cls(args=list(args), returncode=0, stdout=stdout)

    @classmethod
    def failure(
        cls, args: List[str], error: str, returncode: Optional[int] = None
    ) -> "GitOutput":
        return cls(args=list(args), returncode=returncode, error=error)
