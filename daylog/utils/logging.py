# DAYLOG
# PER-DAY FILE LOGGING SERVICE

# COMPONENT: INTERNAL DIAGNOSTICS LOGGING
# REQUIREMENTS SATISFIED: Deterministic diagnostics, environment-controlled verbosity
"""
daylog/utils/logging.py

Configures the "daylog" diagnostics logger used by the library itself.

This is not the per-day log file. The per-day file is owned by
daylog.services.writer.Logger and receives application log lines. The
logger configured here reports what the library does internally
(directory creation, files opened, listing entries skipped).

Verbosity and destination come from explicit arguments to setup_logger()
(the application passes the values held in Settings) and fall back to
the environment when an argument is None:

    LOG_LEVEL:
        0 → Silent (no diagnostics emitted)
        1 → INFO level diagnostics
        2 → DEBUG level diagnostics
        Anything else that is not a number counts as 0.

    LOG_FILE:
        Optional path to a diagnostics file, appended to. An unusable
        path falls back to standard error (stderr).

The logger does not propagate to the root logger, so a host application
with its own logging setup sees no duplicate output. Each call replaces
(and closes) the handlers of the previous one. A silent setup is applied
at import time; other modules fetch the logger with
logging.getLogger(DIAGNOSTICS_LOGGER).
"""
import os
import sys
import logging
from typing import Optional, Union

DIAGNOSTICS_LOGGER = "daylog"
DIAGNOSTICS_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

# verbosity -> stdlib level; 0 (or below) silences the logger
_VERBOSITY_LEVELS = {1: logging.INFO, 2: logging.DEBUG}
_SILENT = logging.CRITICAL + 1


def parse_verbosity(value: Union[int, str, None]) -> int:
    """LOG_LEVEL-style verbosity as an int in 0..2; unparsable input is 0."""
    try:
        verbosity = int(value)
    except (TypeError, ValueError):
        return 0
    return max(0, min(verbosity, 2))


def _open_handler(log_file: Optional[str]) -> logging.Handler:
    if log_file:
        try:
            return logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError:
            pass
    return logging.StreamHandler(sys.stderr)


def setup_logger(level: Union[int, str, None] = None, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure and return the diagnostics logger.

    `level` is a verbosity (0, 1, 2) and `log_file` a diagnostics file
    path; either one left as None is read from LOG_LEVEL / LOG_FILE.
    """
    if level is None:
        level = os.environ.get("LOG_LEVEL")
    if log_file is None:
        log_file = os.environ.get("LOG_FILE")
    verbosity = parse_verbosity(level)

    diagnostics = logging.getLogger(DIAGNOSTICS_LOGGER)
    diagnostics.propagate = False
    diagnostics.setLevel(_VERBOSITY_LEVELS.get(verbosity, _SILENT))

    for old in list(diagnostics.handlers):
        diagnostics.removeHandler(old)
        old.close()

    if verbosity:
        handler = _open_handler(log_file)
        handler.setFormatter(logging.Formatter(DIAGNOSTICS_FORMAT))
        diagnostics.addHandler(handler)

    return diagnostics


logger = setup_logger()
