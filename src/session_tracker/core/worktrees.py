"""Linked worktree discovery and pathspec exclusions."""

from pathlib import Path
from typing import List

WORKTREE_PREFIX = "worktree "
EXCLUDE_MAGIC = ":(exclude)"


def parse_worktree_paths(porcelain: str) -> List[Path]:
    """Extract worktree paths from ``git worktree list --porcelain`` output."""
    paths = []
    for line in porcelain.splitlines():
        if not line.startswith(WORKTREE_PREFIX):
            continue
        path = line[len(WORKTREE_PREFIX) :].strip()
        if path:
            paths.append(Path(path))
    return paths


def exclusion_patterns(worktrees: List[Path], current_dir: Path) -> List[str]:
    """Build ``:(exclude)`` pathspecs for worktrees nested under ``current_dir``.

    The current worktree itself and worktrees outside of ``current_dir``
    produce no pattern. Paths are emitted relative to ``current_dir`` in
    POSIX form, which is what git expects in a pathspec.
    """
    current = current_dir.resolve()
    patterns = []
    for worktree in worktrees:
        worktree = worktree.resolve()
        if worktree == current:
            continue
        try:
            relative = worktree.relative_to(current)
        except ValueError:
            continue
        rel = relative.as_posix()
        if rel and rel != ".":
            patterns.append(f"{EXCLUDE_MAGIC}{rel}")
    return patterns
