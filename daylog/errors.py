# DAYLOG
# PER-DAY FILE LOGGING SERVICE

# COMPONENT: ERROR TYPES
# REQUIREMENTS SATISFIED: explicit failure reporting for log directory and file access
"""
daylog/errors.py

Exception types raised by the log path resolver and the log writer.

Both types derive from OSError so that callers which already handle
filesystem failures keep working. The original OSError is always chained
as __cause__ so the errno and filename stay available for diagnostics.

    LogIOError:
        Creating the log directory, opening, reading or writing a log
        file failed.

    LogNotFoundError:
        A named log file does not exist. Also a FileNotFoundError, so
        `except FileNotFoundError` catches it.
"""


class LogIOError(OSError):
    pass


class LogNotFoundError(LogIOError, FileNotFoundError):
    pass
