# DAYLOG
# PER-DAY FILE LOGGING SERVICE

# COMPONENT: API SCHEMAS AND ERROR CODES
# REQUIREMENTS SATISFIED: JSON error payloads, log browsing responses
"""
daylog/schemas/logs.py

Pydantic models returned by the HTTP layer, plus the application-level
error codes carried in error payloads.

Error payload shape:
    {"code": <application error code>, "error": "<human message>"}

CODE_SUCCESS is the sentinel logged for successful requests; it never
appears in an error payload.
"""
from __future__ import annotations
from typing import List
from pydantic import BaseModel, Field

# ----------------------------------------------------------------------
# Application error codes
# ----------------------------------------------------------------------

CODE_SUCCESS = 0
CODE_LOG_NOT_FOUND = 1001
CODE_INVALID_LOG_NAME = 1002
CODE_LOG_IO = 1003


class ErrorPayload(BaseModel):
    code: int = Field(..., examples=[CODE_LOG_NOT_FOUND])
    error: str = Field(..., examples=["Log file 2016-09-11.log does not exist"])


class LogFileList(BaseModel):
    files: List[str] = Field(default_factory=list, examples=[["2016-09-12.log", "2016-09-11.log"]])


class TodayLog(BaseModel):
    name: str = Field(..., examples=["2016-09-11.log"])
