"""
Logging configuration — diagnostic output for the provisioning run.

Set up once by main.py before the menu starts. Modules log through
``logging.getLogger(__name__)`` and never configure handlers themselves.

Level precedence:
    --debug / --verbose / --quiet  >  BOARDPREP_LOG_LEVEL  >  WARNING

BOARDPREP_LOG_FILE adds a file handler (its own level via
BOARDPREP_LOG_FILE_LEVEL) once the privilege check has passed. Useful
when a package install fails on a machine you can't watch: the file
keeps every precheck decision.

None of this is the audit report. The report is written by
``core.persistence.audit`` whatever the log level.
"""

from __future__ import annotations

import logging
import sys

# Console: quiet by default, richer as the level drops
_CONSOLE_FORMATS: dict[int, tuple[str, str | None]] = {
    logging.DEBUG: ("%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s", "%H:%M:%S"),
    logging.INFO: ("%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
}
_FMT_MINIMAL = "%(message)s"

# File: always full detail with the date
_FMT_FILE = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "WARNING") -> None:
    """Configure the root logger's console output for the whole process.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    console_level = _parse_level(level)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(_console_formatter(console_level))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root.setLevel(console_level)

    # A broken stderr must never abort an install
    logging.raiseExceptions = False


def attach_log_file(log_file: str, log_file_level: str | None = None) -> None:
    """Add a file handler to the root logger configured by setup_logging.

    Called only once the privilege check has passed, so an unprivileged
    run never creates the file.

    Args:
        log_file: Path of the extra log file.
        log_file_level: Level for the file. Defaults to the root level.
    """
    root = logging.getLogger()
    file_level = _parse_level(log_file_level) if log_file_level else root.level

    fh = logging.FileHandler(log_file, encoding="utf-8")
    fh.setLevel(file_level)
    fh.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
    root.addHandler(fh)
    root.setLevel(min(root.level, file_level))


def _console_formatter(level: int) -> logging.Formatter:
    for threshold in (logging.DEBUG, logging.INFO):
        if level <= threshold:
            fmt, datefmt = _CONSOLE_FORMATS[threshold]
            return logging.Formatter(fmt, datefmt=datefmt)
    return logging.Formatter(_FMT_MINIMAL)


def _parse_level(level: str | None) -> int:
    """Convert a level name string to its numeric constant."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
