# DAYLOG
# PER-DAY FILE LOGGING SERVICE

# COMPONENT: HTTP REQUEST LOGGING HELPERS
# REQUIREMENTS SATISFIED: success/error log entries for API requests, JSON error responses
"""
daylog/api/http_log.py

Bridges a FastAPI/Starlette request to entries in the per-day log.

Each helper writes up to three lines through the given Logger:

    [<http code>][<error code>] <timestamp> [<url>] <message>
    Body: <request body>            (only when a body is passed)
    Request: <request description>  (only when a request is passed)

Errors are written at ERROR, successes at INFO with CODE_SUCCESS in the
error-code slot. `request` may be None when logging outside a request
context; the URL is then empty and the request line is left out.

URL and body text are URL-unescaped for readability. Unescaping is
lenient: undecodable bytes are replaced and malformed escapes are kept
as-is, so these helpers never fail because of odd input.

Credential headers (REDACTED_HEADERS) are written as "***" in the request
line; the log files are readable through the log browsing routes.
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional, Union
from urllib.parse import unquote_plus

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse

from daylog.schemas.logs import CODE_SUCCESS, ErrorPayload
from daylog.services.formatter import TIMESTAMP_FORMAT
from daylog.services.writer import Logger

Body = Union[bytes, str, None]

# header values never written to the log
REDACTED_HEADERS = frozenset({
    "authorization",
    "proxy-authorization",
    "cookie",
    "set-cookie",
    "x-api-key",
    "x-auth-token",
})
REDACTED = "***"


def get_log(request: Request) -> Logger:
    """
    FastAPI dependency: the Logger built by the app lifespan.

    Answers 503 when the lifespan has not run (no Logger on app.state).
    """
    log = getattr(request.app.state, "log", None)
    if log is None:
        raise HTTPException(status_code=503, detail="log service not started")
    return log


def _unescape(value: Union[bytes, str]) -> str:
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="replace")
    return unquote_plus(value, errors="replace")


def describe_request(request: Request) -> str:
    client = f"{request.client.host}:{request.client.port}" if request.client else "-"
    headers = {
        name: REDACTED if name.lower() in REDACTED_HEADERS else value
        for name, value in request.headers.items()
    }
    return f"<Request {request.method} {request.url} client={client} headers={headers}>"


def _log_request(log_line, request: Optional[Request], http_code: int, code: int, msg: str, request_body: Body):
    url = _unescape(str(request.url)) if request is not None else ""

    log_line("[%d][%d] %s [%s] %s", http_code, code,
             datetime.now().strftime(TIMESTAMP_FORMAT), url, msg)
    if request_body is not None:
        log_line("Body: %s", _unescape(request_body))
    if request is not None:
        log_line("Request: %s", _unescape(describe_request(request)))


def log_error(log: Logger, request: Optional[Request], http_code: int, error_code: int,
              msg: str, request_body: Body = None) -> None:
    """Write an error entry for the current request."""
    _log_request(log.errorf, request, http_code, error_code, msg, request_body)


def return_error(log: Logger, request: Optional[Request], http_code: int, error_code: int,
                 msg: str, request_body: Body = None) -> Optional[JSONResponse]:
    """
    Write an error entry and build the JSON error response for it.

    Returns None when there is no request to answer.
    """
    log_error(log, request, http_code, error_code, msg, request_body)
    if request is None:
        return None
    payload = ErrorPayload(code=error_code, error=msg)
    return JSONResponse(status_code=http_code, content=payload.model_dump())


def log_success(log: Logger, request: Optional[Request], http_code: int,
                msg: str, request_body: Body = None) -> None:
    """Write a success entry for the current request."""
    _log_request(log.infof, request, http_code, CODE_SUCCESS, msg, request_body)
