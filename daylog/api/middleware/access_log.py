# DAYLOG
# PER-DAY FILE LOGGING SERVICE

# COMPONENT: API ACCESS LOGGING MIDDLEWARE
# REQUIREMENTS SATISFIED: one success/error log entry per HTTP request
"""
daylog/api/middleware/access_log.py

ASGI middleware that records every HTTP request in the per-day log.

The middleware wraps `receive` and `send` to capture the request body and
the response status, lets the application run, then hands the result to
the helpers in daylog.api.http_log:

    - status < 400  → log_success (INFO)
    - status >= 400 → log_error   (ERROR, error code = HTTP status)
    - unhandled exception → log_error with status 500, then re-raised

The Logger is looked up on the application state at request time, since
it only exists once the lifespan has started. Requests that arrive
without one (no lifespan) pass through unlogged. Non-HTTP ASGI events
always pass through untouched.

Log writes take the Logger lock and touch the disk, so they run in the
threadpool rather than on the event loop.
"""
import time

from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from daylog.api.http_log import log_error, log_success


class AccessLogMiddleware:
    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        log = getattr(scope["app"].state, "log", None) if "app" in scope else None
        if log is None:
            await self.app(scope, receive, send)
            return

        # ------------------------------
        # Capture request body
        # ------------------------------
        body_bytes = b""

        async def recv_wrapper() -> Message:
            nonlocal body_bytes
            msg = await receive()
            if msg["type"] == "http.request":
                body_bytes += msg.get("body", b"")
            return msg

        # ------------------------------
        # Capture response status
        # ------------------------------
        status_code = 500

        async def send_wrapper(message: Message):
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
            await send(message)

        start = time.perf_counter()
        request = Request(scope)
        try:
            await self.app(scope, recv_wrapper, send_wrapper)
        except Exception as e:
            await run_in_threadpool(log_error, log, request, 500, 500,
                                    f"{request.method} {scope.get('path')} failed: {e!r}",
                                    body_bytes or None)
            raise

        duration_ms = round((time.perf_counter() - start) * 1000, 2)
        msg = f"{request.method} {scope.get('path')} ({duration_ms} ms)"
        if status_code >= 400:
            await run_in_threadpool(log_error, log, request, status_code, status_code, msg, body_bytes or None)
        else:
            await run_in_threadpool(log_success, log, request, status_code, msg, body_bytes or None)
