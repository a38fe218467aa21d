# DAYLOG
# PER-DAY FILE LOGGING SERVICE

# COMPONENT: LOG PATH RESOLUTION
# REQUIREMENTS SATISFIED: one log file per calendar day, log listing and retrieval
"""
daylog/utils/paths.py

Resolves where per-day log files live and gives read access to them.

Layout:
    <base_dir>/logs/YYYY-MM-DD.log

`base_dir` defaults to the process working directory at call time. The
logs directory is created on demand with owner-only permissions (0700)
before any file inside it is opened.

Key responsibilities:
    - Create and return the log directory
    - Compute today's file name from the local clock
    - List existing per-day log files (strict name pattern, no date check)
    - Read a named log file in full

Failures surface as daylog.errors.LogIOError / LogNotFoundError with the
original OSError chained. Directory entries that do not look like per-day
log files are skipped silently during listing.
"""
from __future__ import annotations

import errno
import logging
import os
import re
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union

from daylog.errors import LogIOError, LogNotFoundError
from daylog.utils.logging import DIAGNOSTICS_LOGGER

logger = logging.getLogger(DIAGNOSTICS_LOGGER)

LOG_DIR_NAME = "logs"
LOG_FILE_EXTENSION = ".log"
LOG_FILE_DATE_FORMAT = "%Y-%m-%d"
LOG_FILE_NAME_RE = re.compile(r"^\d{4}-\d{2}-\d{2}\.log$")
LOG_DIR_MODE = 0o700

PathLike = Union[str, os.PathLike]


def resolve_log_directory(base_dir: Optional[PathLike] = None) -> Path:
    """
    Return <base_dir>/logs, creating it (and missing parents, each with
    mode 0700) if needed.

    Calling this repeatedly is safe; an existing directory is returned
    as-is. A regular file occupying the path, or a permission problem,
    raises LogIOError.
    """
    base = Path(base_dir) if base_dir is not None else Path(os.getcwd())
    log_dir = base / LOG_DIR_NAME
    if log_dir.is_dir():
        return log_dir

    # os.makedirs() only applies `mode` to the leaf, so each missing
    # parent is created here with LOG_DIR_MODE as well
    missing = []
    path = log_dir
    while not path.exists() and path != path.parent:
        missing.append(path)
        path = path.parent

    try:
        for path in reversed(missing):
            try:
                os.mkdir(path, LOG_DIR_MODE)
            except FileExistsError:
                if not path.is_dir():
                    raise
        if not log_dir.is_dir():
            raise NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), str(log_dir))
    except OSError as e:
        raise LogIOError(f"Error creating log directory {log_dir}: {e}") from e

    logger.info("Created log directory %s", log_dir)
    return log_dir


def today_file_name(now: Optional[datetime] = None) -> str:
    """Name of the log file for the local calendar day, e.g. 2016-09-11.log."""
    now = now or datetime.now()
    return now.strftime(LOG_FILE_DATE_FORMAT) + LOG_FILE_EXTENSION


def resolve_path(file_name: str, base_dir: Optional[PathLike] = None) -> Path:
    return resolve_log_directory(base_dir) / file_name


def resolve_today_path(base_dir: Optional[PathLike] = None, now: Optional[datetime] = None) -> Path:
    return resolve_path(today_file_name(now), base_dir)


def is_log_file_name(name: str) -> bool:
    # shape only: 2016-13-40.log passes
    return LOG_FILE_NAME_RE.fullmatch(name) is not None


def list_log_files(subdirectory: str = "", base_dir: Optional[PathLike] = None) -> List[str]:
    """
    List per-day log file names in <logdir>/<subdirectory>.

    Only names matching LOG_FILE_NAME_RE are returned, in directory
    listing order (not sorted). Anything else in the directory is
    skipped without error.
    """
    try:
        log_dir = resolve_log_directory(base_dir)
    except LogIOError as e:
        raise LogIOError(f"Error getting log directory: {e}") from e

    target = log_dir / subdirectory if subdirectory else log_dir
    try:
        entries = os.listdir(target)
    except OSError as e:
        raise LogIOError(f"Error reading log directory {target}: {e}") from e

    names = []
    for entry in entries:
        if not is_log_file_name(entry):
            logger.debug("Skipping %s: not a log file name", entry)
            continue
        names.append(entry)
    return names


def read_log_file(name: str, base_dir: Optional[PathLike] = None) -> str:
    """
    Return the full text of the log file `name`.

    The file is decoded as strict UTF-8; content that is not valid UTF-8
    raises LogIOError rather than being altered.
    """
    try:
        log_path = resolve_path(name, base_dir)
    except LogIOError as e:
        raise LogIOError(f"Error getting path to log file {name}: {e}") from e

    try:
        with open(log_path, "r", encoding="utf-8", newline="") as f:
            return f.read()
    except FileNotFoundError as e:
        raise LogNotFoundError(f"Log file {name} does not exist") from e
    except UnicodeDecodeError as e:
        raise LogIOError(f"Log file {name} is not valid UTF-8: {e}") from e
    except OSError as e:
        raise LogIOError(f"Error reading log file {name}: {e}") from e
