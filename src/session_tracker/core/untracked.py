"""Synthesized diffs for files git has no history for."""

import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

BINARY_PLACEHOLDER = "[Binary or unreadable file]"
NO_NEWLINE_MARKER = "\\ No newline at end of file"


def file_timestamp(path: Path) -> Optional[float]:
    """Get a file's creation time, falling back to its modification time.

    Returns None if the file cannot be stat'ed.
    """
    try:
        stat = os.stat(path)
    except OSError as e:
        logger.debug("Cannot stat %s: %s", path, e)
        return None

    birthtime = getattr(stat, "st_birthtime", None)
    if birthtime:
        return birthtime
    return stat.st_mtime


def created_during_session(path: Path, session_start_time: datetime) -> bool:
    """Check if a file was created at or after the session start."""
    timestamp = file_timestamp(path)
    if timestamp is None:
        logger.debug("Skipping %s: no usable timestamp", path)
        return False
    return timestamp >= session_start_time.timestamp()


def read_text(path: Path) -> Optional[str]:
    """Read a file as UTF-8 text.

    Returns None for binary content (NUL bytes or invalid UTF-8) and for
    anything that cannot be read, directories included.
    """
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        logger.debug("Cannot read %s: %s", path, e)
        return None

    if b"\0" in data:
        return None
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return None


def render_new_file_diff(relpath: str, path: Path) -> str:
    """Render an untracked file as a git-style "new file" diff block.

    The block ends with a blank line separating it from whatever follows.
    """
    out = [
        f"diff --git a/{relpath} b/{relpath}",
        "new file mode 100644",
        "index 0000000..0000000",
        "--- /dev/null",
        f"+++ b/{relpath}",
    ]

    content = read_text(path)
    if content is None:
        logger.debug("Using placeholder for binary or unreadable %s", relpath)
        out.append("@@ -0,0 +1,1 @@")
        out.append(f"+{BINARY_PLACEHOLDER}")
    else:
        lines = content.split("\n") if content else []
        missing_newline = bool(lines) and lines[-1] != ""
        if not missing_newline and lines:
            lines.pop()

        out.append(f"@@ -0,0 +1,{len(lines)} @@")
        out.extend(f"+{line}" for line in lines)
        if missing_newline:
            out.append(NO_NEWLINE_MARKER)

    return "\n".join(out) + "\n\n"
