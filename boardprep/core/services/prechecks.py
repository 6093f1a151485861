"""
Prechecks — read-only tests of current system state.

Each predicate answers "is this effect already present?" so the plan
builder can skip steps that were applied by an earlier run. Nothing
here is cached: a previous cycle in the same process may have changed
the answer.
"""

from __future__ import annotations

import logging
import os
import shutil

logger = logging.getLogger(__name__)


def path_exists(path: str) -> bool:
    """True if anything exists at *path* (a dangling symlink does not count)."""
    return os.path.exists(path)


def dir_exists(path: str) -> bool:
    return os.path.isdir(path)


def symlink_exists(path: str) -> bool:
    """True if *path* is a symbolic link, whether or not its target exists.

    A regular file at *path* is NOT a symlink and returns False.
    """
    return os.path.islink(path)


def line_in_file(path: str, line: str) -> bool:
    """True if *line* appears as a whole line in the file at *path*.

    Comparison ignores surrounding whitespace. A missing or unreadable
    file counts as "line absent".
    """
    wanted = line.strip()
    try:
        with open(path, encoding="utf-8") as f:
            return any(existing.strip() == wanted for existing in f)
    except OSError as e:
        logger.debug("Cannot read %s: %s", path, e)
        return False


def command_resolvable(name: str) -> bool:
    """True if *name* resolves to an executable on PATH."""
    return shutil.which(name) is not None


def describe(check: str, subject: str, satisfied: bool) -> str:
    """One-line log message for a precheck outcome."""
    verdict = "already satisfied, skipping" if satisfied else "needed"
    return f"precheck {check}({subject}): {verdict}"
