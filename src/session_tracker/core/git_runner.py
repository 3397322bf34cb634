"""Git invocation primitive used by the change tracker."""

import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Sequence

# A missing git binary must surface as a failed invocation, not an ImportError.
os.environ.setdefault("GIT_PYTHON_REFRESH", "quiet")

import git  # noqa: E402

from session_tracker.models.command import GitOutput  # noqa: E402

logger = logging.getLogger(__name__)


class GitRunner(ABC):
    """Runs git with an argument list and reports the outcome.

    Implementations never raise for git failures; they return a failed
    ``GitOutput`` instead.
    """

    @abstractmethod
    def run(self, args: Sequence[str]) -> GitOutput:
        """Run ``git <args>`` and return its output."""


class GitPythonRunner(GitRunner):
    """Runs git through GitPython's command wrapper."""

    def __init__(self, working_directory: Optional[Path] = None):
        self.working_directory = (
            Path(working_directory) if working_directory is not None else None
        )

    def run(self, args: Sequence[str]) -> GitOutput:
        args = list(args)
        cwd = str(self.working_directory) if self.working_directory else None
        try:
            status, stdout, stderr = git.Git(cwd).execute(
                ["git", *args],
                with_extended_output=True,
                with_exceptions=False,
                strip_newline_in_stdout=False,
                stdout_as_string=False,
            )
        except git.exc.GitCommandNotFound as e:
            logger.debug("git %s could not be launched: %s", " ".join(args), e)
            return GitOutput.failure(args, str(e))
        except git.exc.GitCommandError as e:
            logger.debug("git %s failed: %s", " ".join(args), e)
            status = e.status if isinstance(e.status, int) else None
            return GitOutput.failure(args, str(e), returncode=status)
        except OSError as e:
            logger.debug("git %s could not be launched: %s", " ".join(args), e)
            return GitOutput.failure(args, str(e))

        stdout = _decode(stdout)
        stderr = _decode(stderr)
        if status != 0:
            logger.debug(
                "git %s exited with %s: %s", " ".join(args), status, stderr.strip()
            )
            return GitOutput.failure(args, stderr.strip(), returncode=status)

        return GitOutput.success(args, stdout)


def _decode(output) -> str:
    """Decode git output as UTF-8, replacing invalid bytes."""
    if isinstance(output, bytes):
        return output.decode("utf-8", errors="replace")
    return output or ""
