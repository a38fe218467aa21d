# DAYLOG
# PER-DAY FILE LOGGING SERVICE

# COMPONENT: SEVERITY FORMATTER
# REQUIREMENTS SATISFIED: ordered severity levels, printf-style templates, timestamped log lines
"""
daylog/services/formatter.py

Turns a severity level, a printf-style template and its arguments into the
text of one log record.

Line layout:
    [   ERROR] [19.10.2026 14:03:27] :: value=42

    - level tag, right-aligned to 8 characters
    - local timestamp as DD.MM.YYYY HH:MM:SS
    - rendered message, optionally followed by a stack block

Severity order:
    NOTSET < DEBUG < INFO < WARNING (= WARN) < ERROR < CRITICAL < FATAL

Numeric values match the stdlib logging module, with FATAL given its own
rank above CRITICAL.

Everything in this module is pure: no file access and no locking. The
Logger in daylog.services.writer owns those concerns.
"""
from __future__ import annotations

from datetime import datetime
from enum import IntEnum
from typing import Optional, Sequence, Union

from daylog.utils.colors import strip_color_tokens, translate_color_tokens

TIMESTAMP_FORMAT = "%d.%m.%Y %H:%M:%S"
LINE_FORMAT = "[%(levelname)8s] [%(asctime)s] :: %(message)s"

STACK_HEAD = "\n{RStacktrace follows: \n{A"
STACK_TAIL = "{REnd of stacktrace. {0"


class Level(IntEnum):
    NOTSET = 0
    DEBUG = 10
    INFO = 20
    WARNING = 30
    WARN = 30
    ERROR = 40
    CRITICAL = 50
    FATAL = 60


def parse_level(value: Union[Level, int, str]) -> Level:
    """
    Accept a Level, an int, or a level name ("warn", "ERROR", "20").

    Raises ValueError for anything that does not name a known level.
    """
    if isinstance(value, Level):
        return value
    if isinstance(value, int):
        return Level(value)

    text = str(value).strip()
    if text.lstrip("-").isdigit():
        return Level(int(text))
    try:
        return Level[text.upper()]
    except KeyError:
        raise ValueError(f"Unknown log level: {value!r}") from None


def render(template: str, args: Sequence = ()) -> str:
    """
    printf-style substitution of `args` into `template`.

    Like stdlib logging, a template without args is returned untouched.
    A template that does not fit its args (wrong count, wrong type, bad
    conversion) raises ValueError naming the template; nothing is written.
    """
    if not args:
        return template
    try:
        return template % tuple(args)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Cannot render log template {template!r} with {len(args)} args: {e}") from e


def build_message(
    template: str,
    args: Sequence = (),
    stack: Optional[str] = None,
    colors: bool = True,
) -> str:
    """
    Render `template` with `args` and append the stack block if given.

    Color tokens in the template and in the stack markers are translated
    to escape codes (colors=True) or removed (colors=False). The captured
    trace text itself is inserted verbatim.
    """
    convert = translate_color_tokens if colors else strip_color_tokens
    message = render(convert(template), args)
    if stack is not None:
        message += convert(STACK_HEAD) + stack + convert(STACK_TAIL)
    return message


def format_line(
    level: Level,
    template: str,
    args: Sequence = (),
    now: Optional[datetime] = None,
    stack: Optional[str] = None,
    colors: bool = True,
) -> str:
    """Full text of one log record, without the trailing newline."""
    now = now or datetime.now()
    return LINE_FORMAT % {
        "levelname": Level(level).name,
        "asctime": now.strftime(TIMESTAMP_FORMAT),
        "message": build_message(template, args, stack=stack, colors=colors),
    }
