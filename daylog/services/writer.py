# DAYLOG
# PER-DAY FILE LOGGING SERVICE

# COMPONENT: SERIALIZED LOG WRITER
# REQUIREMENTS SATISFIED: per-day log file, mutually exclusive writes, optional stack traces
"""
daylog/services/writer.py

Defines Logger, the object that owns today's log file.

A Logger is constructed once by the application (see daylog.main) and
passed explicitly to whatever needs to log. On construction it resolves
<base_dir>/logs/<today>.log, opens it in append mode through a stdlib
logging.FileHandler, and binds a minimum severity threshold.

Key characteristics:
    - Composition, not inheritance: the Logger holds the file handler, a
      threading.Lock and the one-shot stack flag as plain fields, and every
      public method delegates explicitly.
    - Formatting and writing happen under the lock, so concurrent threads
      never interleave partial lines. Ordering between threads is whatever
      order they acquire the lock in.
    - Lines below the threshold are dropped silently by the handler level.
    - No buffering and no retries: every accepted line is written and
      flushed before the call returns, and an I/O failure is raised to the
      caller as LogIOError.

Day rollover:
    The file opened at construction stays the target for the lifetime of
    the Logger, even when the process runs past midnight. Build a new
    Logger to start writing to the next day's file.

One-shot stack flag:
    arm_stack() makes the next log call on this Logger include a stack
    snapshot. The flag is read and cleared under the same lock as the
    write, so exactly one call consumes it, even when that call is
    dropped by the threshold.
"""
from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Optional, Union

from daylog.errors import LogIOError
from daylog.services.formatter import Level, format_line, parse_level
from daylog.utils.logging import DIAGNOSTICS_LOGGER
from daylog.utils.paths import PathLike, resolve_today_path
from daylog.utils.stack import capture_stack

logger = logging.getLogger(DIAGNOSTICS_LOGGER)


class _DayFileHandler(logging.FileHandler):
    """FileHandler that raises write failures instead of printing them."""

    def handleError(self, record):
        # called from inside emit()'s except block
        raise


class Logger:
    def __init__(
        self,
        base_dir: Optional[PathLike] = None,
        threshold: Union[Level, int, str] = Level.INFO,
        colors: bool = True,
        name: str = "daylog",
    ):
        self.name = name
        self.colors = colors
        self.threshold = parse_level(threshold)
        self.path: Path = resolve_today_path(base_dir)

        try:
            self._handler = _DayFileHandler(self.path, mode="a", encoding="utf-8")
        except OSError as e:
            raise LogIOError(f"Error opening log file {self.path}: {e}") from e
        self._handler.setFormatter(logging.Formatter("%(message)s"))
        self._handler.setLevel(int(self.threshold))

        self._lock = threading.Lock()
        self._stack_armed = False
        self._closed = False

        logger.info("Opened log file %s (threshold %s)", self.path, self.threshold.name)

    # ------------------------------------------------------------------
    # Core write path
    # ------------------------------------------------------------------

    def is_enabled_for(self, level: Union[Level, int]) -> bool:
        return int(level) >= self._handler.level

    def arm_stack(self) -> None:
        """Include a stack snapshot in the next log call only."""
        with self._lock:
            self._stack_armed = True

    def write(self, level: Union[Level, int], line: str) -> None:
        """
        Append one already formatted line (level tag and timestamp
        embedded) to the log file.
        """
        with self._lock:
            self._emit(Level(level), line)

    def _emit(self, level: Level, line: str) -> None:
        # caller holds self._lock
        if self._closed:
            raise LogIOError(f"Log file {self.path} is closed")
        if not self.is_enabled_for(level):
            return

        record = logging.LogRecord(self.name, int(level), str(self.path), 0, line, None, None)
        record.levelname = level.name
        try:
            self._handler.handle(record)
        except OSError as e:
            raise LogIOError(f"Error writing log file {self.path}: {e}") from e

    def _logf(self, show_stack: bool, level: Level, template: str, *args) -> None:
        # Public methods must call this directly: capture_stack() drops a
        # fixed number of frames (itself, _logf, the public method).
        with self._lock:
            armed, self._stack_armed = self._stack_armed, False
            if not self.is_enabled_for(level):
                return
            stack = capture_stack() if (show_stack or armed) else None
            line = format_line(level, template, args, stack=stack, colors=self.colors)
            self._emit(level, line)

    # ------------------------------------------------------------------
    # Severity helpers
    # ------------------------------------------------------------------

    def log(self, level: Union[Level, int, str], template: str, *args) -> None:
        self._logf(False, parse_level(level), template, *args)

    def log_stack(self, level: Union[Level, int, str], template: str, *args) -> None:
        self._logf(True, parse_level(level), template, *args)

    def notsetf(self, template: str, *args) -> None:
        self._logf(False, Level.NOTSET, template, *args)

    def notsetf_stack(self, template: str, *args) -> None:
        self._logf(True, Level.NOTSET, template, *args)

    def debugf(self, template: str, *args) -> None:
        self._logf(False, Level.DEBUG, template, *args)

    def debugf_stack(self, template: str, *args) -> None:
        self._logf(True, Level.DEBUG, template, *args)

    def infof(self, template: str, *args) -> None:
        self._logf(False, Level.INFO, template, *args)

    def infof_stack(self, template: str, *args) -> None:
        self._logf(True, Level.INFO, template, *args)

    def warnf(self, template: str, *args) -> None:
        self._logf(False, Level.WARN, template, *args)

    def warnf_stack(self, template: str, *args) -> None:
        self._logf(True, Level.WARN, template, *args)

    def warningf(self, template: str, *args) -> None:
        self._logf(False, Level.WARNING, template, *args)

    def warningf_stack(self, template: str, *args) -> None:
        self._logf(True, Level.WARNING, template, *args)

    def errorf(self, template: str, *args) -> None:
        self._logf(False, Level.ERROR, template, *args)

    def errorf_stack(self, template: str, *args) -> None:
        self._logf(True, Level.ERROR, template, *args)

    def criticalf(self, template: str, *args) -> None:
        self._logf(False, Level.CRITICAL, template, *args)

    def criticalf_stack(self, template: str, *args) -> None:
        self._logf(True, Level.CRITICAL, template, *args)

    def fatalf(self, template: str, *args) -> None:
        """Log at FATAL. Does not terminate the process."""
        self._logf(False, Level.FATAL, template, *args)

    def fatalf_stack(self, template: str, *args) -> None:
        self._logf(True, Level.FATAL, template, *args)

    def log_prefixed_error(self, prefix: str, msg: str) -> None:
        self.errorf("[%s ERROR] %s", prefix, msg)

    def log_prefixed_success(self, prefix: str, msg: str) -> None:
        self.infof("[%s SUCCESS] %s", prefix, msg)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._handler.close()
        logger.info("Closed log file %s", self.path)

    def __enter__(self) -> "Logger":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"Logger(path={str(self.path)!r}, threshold={self.threshold.name})"
