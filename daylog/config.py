# DAYLOG
# PER-DAY FILE LOGGING SERVICE

# COMPONENT: APPLICATION SETTINGS
# REQUIREMENTS SATISFIED: environment-driven configuration of the log service
"""
daylog/config.py

Reads application settings from the environment (after loading .env).

Environment Variables:
    DAYLOG_BASE_DIR:
        Directory that contains the "logs" folder. Defaults to the
        process working directory at startup.

    DAYLOG_LEVEL:
        Minimum severity written to the log file. Level name
        (DEBUG, INFO, WARN, ...) or number. Defaults to INFO.

    DAYLOG_COLORS:
        1/true/yes/on keeps terminal escape codes in log lines,
        0/false/no/off strips the color tokens instead. Defaults to 1.

    LOG_LEVEL, LOG_FILE:
        Verbosity (0-2) and destination of the internal diagnostics
        logger, see daylog.utils.logging. Unset means the diagnostics
        setup reads the environment itself.

Only the application layer (daylog.main) reads these; the Logger and the
path helpers take everything as explicit arguments.
"""
import os
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

from daylog.services.formatter import Level, parse_level
from daylog.utils.logging import parse_verbosity

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


class Settings(BaseModel):
    base_dir: str
    level: Level = Level.INFO
    colors: bool = True
    diagnostics_level: Optional[int] = None
    diagnostics_file: Optional[str] = None

    @field_validator("level", mode="before")
    @classmethod
    def _parse_level(cls, value):
        return parse_level(value)

    @field_validator("colors", mode="before")
    @classmethod
    def _parse_colors(cls, value):
        if isinstance(value, str):
            text = value.strip().lower()
            if text in _TRUTHY:
                return True
            if text in _FALSY:
                return False
            raise ValueError(f"DAYLOG_COLORS must be a boolean flag, got {value!r}")
        return value

    @field_validator("diagnostics_level", mode="before")
    @classmethod
    def _parse_diagnostics_level(cls, value):
        return None if value is None else parse_verbosity(value)


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from `environ` (default: os.environ after loading .env).

    Invalid values raise pydantic.ValidationError.
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    data = {"base_dir": environ.get("DAYLOG_BASE_DIR") or os.getcwd()}
    if environ.get("DAYLOG_LEVEL"):
        data["level"] = environ["DAYLOG_LEVEL"]
    if environ.get("DAYLOG_COLORS"):
        data["colors"] = environ["DAYLOG_COLORS"]
    if environ.get("LOG_LEVEL"):
        data["diagnostics_level"] = environ["LOG_LEVEL"]
    if environ.get("LOG_FILE"):
        data["diagnostics_file"] = environ["LOG_FILE"]
    return Settings(**data)
