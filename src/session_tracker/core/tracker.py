"""Session-scoped tracking of working tree changes."""

import hashlib
import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from session_tracker.core.git_runner import GitPythonRunner, GitRunner
from session_tracker.core.untracked import created_during_session, render_new_file_diff
from session_tracker.core.worktrees import exclusion_patterns, parse_worktree_paths
from session_tracker.models.result import DiffUpdate
from session_tracker.models.session import TrackerSession

logger = logging.getLogger(__name__)


class ChangeTracker:
    """Tracks changes in a git working tree since the session started.

    On construction the current HEAD is recorded as the baseline. Later
    calls to ``get_diff`` combine committed and uncommitted changes since
    that baseline with synthesized diffs for files created during the
    session. Changes belonging to linked worktrees nested inside the
    working directory are excluded.

    If the baseline cannot be captured (not a repository, no commits, git
    missing) the tracker disables itself for good and every diff request
    reports unavailable.
    """

    def __init__(
        self,
        enabled: bool = True,
        working_directory: Optional[Path] = None,
        runner: Optional[GitRunner] = None,
        session_start_time: Optional[datetime] = None,
        include_untracked: bool = True,
    ):
        self.enabled = enabled
        self.working_directory = (
            Path(working_directory) if working_directory is not None else None
        )
        self.runner = runner or GitPythonRunner(self.working_directory)
        self.include_untracked = include_untracked
        self.baseline_revision: Optional[str] = None
        self.session_start_time = session_start_time or datetime.now()
        self.last_diff_digest: Optional[str] = None

        if self.enabled:
            self._capture_baseline()

    def _capture_baseline(self) -> None:
        output = self.runner.run(["rev-parse", "HEAD"])
        revision = output.stdout.strip() if output.ok else ""
        if not revision:
            # Not a repository, git missing, or no commits yet
            logger.info(
                "Change tracking disabled for %s: cannot resolve HEAD",
                self.working_directory or Path.cwd(),
            )
            self.enabled = False
            return

        self.baseline_revision = revision
        logger.debug("Captured baseline %s", revision)

    def _current_directory(self) -> Path:
        if self.working_directory is not None:
            return self.working_directory
        try:
            return Path.cwd()
        except OSError:
            return Path(".")

    def worktree_exclusions(self) -> List[str]:
        """Get pathspecs excluding linked worktrees nested in this one."""
        output = self.runner.run(["worktree", "list", "--porcelain"])
        porcelain = output.stdout if output.ok else ""
        return exclusion_patterns(
            parse_worktree_paths(porcelain), self._current_directory()
        )

    def get_diff(self) -> Optional[str]:
        """Get the combined diff since the session started.

        Returns:
            None if tracking is disabled, otherwise the diff text, which is
            empty when nothing changed.
        """
        if not self.enabled:
            return None

        exclusions = self.worktree_exclusions()

        args = ["diff", self.baseline_revision or "HEAD"]
        if exclusions:
            args += ["--", *exclusions]
        output = self.runner.run(args)
        tracked = output.stdout.strip() if output.ok else ""

        untracked = ""
        if self.include_untracked:
            untracked = self._untracked_diff(exclusions).strip()

        return "\n".join(part for part in (tracked, untracked) if part)

    def get_diff_if_changed(self) -> DiffUpdate:
        """Get the diff only if it differs from the last one returned here.

        The trimmed diff text is fingerprinted with SHA-1; a repeated
        fingerprint yields UNCHANGED, even when the diff is empty.
        """
        diff = self.get_diff()
        if diff is None:
            return DiffUpdate.unavailable()

        trimmed = diff.strip()
        digest = hashlib.sha1(trimmed.encode("utf-8")).hexdigest()
        if digest == self.last_diff_digest:
            return DiffUpdate.unchanged()

        self.last_diff_digest = digest
        return DiffUpdate.changed(trimmed)

    def _untracked_diff(self, exclusions: List[str]) -> str:
        # NUL-separated output keeps non-ASCII and odd paths unquoted
        args = ["ls-files", "--others", "--exclude-standard", "-z"]
        if exclusions:
            args += ["--", *exclusions]
        output = self.runner.run(args)
        listing = output.stdout if output.ok else ""

        files = [entry for entry in listing.split("\0") if entry.strip()]
        if not files:
            return ""

        base = self._current_directory()
        blocks = []
        for relpath in files:
            path = base / relpath
            if not created_during_session(path, self.session_start_time):
                logger.debug("Skipping %s: predates the session", relpath)
                continue
            blocks.append(render_new_file_diff(relpath, path))
        return "".join(blocks)

    def snapshot(self) -> TrackerSession:
        """Get a read-only view of the tracker state."""
        return TrackerSession(
            enabled=self.enabled,
            working_directory=self.working_directory,
            baseline_revision=self.baseline_revision,
            session_start_time=self.session_start_time,
            last_diff_digest=self.last_diff_digest,
        )
