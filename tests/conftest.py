"""Shared fixtures for session tracker tests."""

import os
import tempfile
import time
from pathlib import Path
from typing import Dict, List, Sequence, Tuple, Union

import pytest
from git import Repo

from session_tracker.core.git_runner import GitRunner
from session_tracker.models.command import GitOutput


class FakeGitRunner(GitRunner):
    """Deterministic git stand-in returning scripted output per argument list.

    Unscripted commands fail with exit status 128, like git does for an
    unknown revision or a directory outside a repository.
    """

    def __init__(self, responses: Dict[Tuple[str, ...], Union[str, GitOutput]] = None):
        self.responses = dict(responses or {})
        self.calls: List[Tuple[str, ...]] = []

    def set(self, args: Sequence[str], output: Union[str, GitOutput]) -> None:
        self.responses[tuple(args)] = output

    def run(self, args: Sequence[str]) -> GitOutput:
        key = tuple(args)
        self.calls.append(key)
        response = self.responses.get(key)
        if response is None:
            return GitOutput.failure(list(args), "fatal: not scripted", returncode=128)
        if isinstance(response, GitOutput):
            return response
        return GitOutput.success(list(args), response)


BASELINE = "3f2a9c1d0b8e7f6a5d4c3b2a1f0e9d8c7b6a5f4e"


@pytest.fixture
def fake_runner():
    """A fake runner scripted for a clean repository with one worktree."""
    runner = FakeGitRunner()
    runner.set(["rev-parse", "HEAD"], BASELINE + "\n")
    runner.set(["worktree", "list", "--porcelain"], "")
    runner.set(["diff", BASELINE], "")
    runner.set(["ls-files", "--others", "--exclude-standard", "-z"], "")
    return runner


@pytest.fixture
def temp_dir(monkeypatch):
    """Create a temporary directory git will not treat as part of a repository."""
    with tempfile.TemporaryDirectory() as temp:
        path = Path(temp).resolve()
        monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(path.parent))
        yield path


@pytest.fixture
def temp_git_repo(temp_dir):
    """Create a temporary git repository with a single commit."""
    repo_path = temp_dir / "repo"
    repo_path.mkdir()
    repo = Repo.init(repo_path)

    readme = repo_path / "README.md"
    readme.write_text("# Project\n\nInitial content\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")

    yield repo_path, repo
    repo.close()


def make_old(path: Path, age: float = 3600) -> None:
    """Backdate a file so it predates any session started now."""
    past = time.time() - age
    os.utime(path, (past, past))


def write_session_file(path: Path, content: str, tracker) -> Path:
    """Write a file stamped as created after the tracker's session start."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    stamp = tracker.session_start_time.timestamp() + 1
    os.utime(path, (stamp, stamp))
    return path
