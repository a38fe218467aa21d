# DAYLOG
# PER-DAY FILE LOGGING SERVICE

# COMPONENT: FASTAPI APPLICATION ENTRY POINT
# REQUIREMENTS SATISFIED:
#   - Logger lifecycle tied to the application lifespan
#   - Access logging middleware
#   - Log browsing routes
#   - AWS Lambda compatibility via Mangum
"""
daylog/main.py

Assembles the FastAPI application around one per-day Logger.

Execution Order (Intentional):
    1. FastAPI app is created with a lifespan handler
    2. Access logging middleware is attached
    3. Exception handlers map log access failures to JSON errors
    4. The log browsing router is mounted under the /api prefix
    5. The Mangum handler is created for AWS Lambda deployment

On startup the lifespan loads Settings (environment + .env), configures
the diagnostics logger from them, opens <base_dir>/logs/<today>.log
through a Logger and stores both on app.state; on shutdown the Logger is closed. Route handlers receive the
Logger through Depends(get_log) instead of a module-level global.

The log file is picked once per process start. A process that keeps
running past midnight continues writing to the previous day's file.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from mangum import Mangum

from daylog.api.http_log import return_error
from daylog.api.middleware.access_log import AccessLogMiddleware
from daylog.api.routers.logs import router as logs_router
from daylog.config import Settings, load_settings
from daylog.errors import LogIOError, LogNotFoundError
from daylog.schemas.logs import CODE_LOG_IO, CODE_LOG_NOT_FOUND
from daylog.services.writer import Logger
from daylog.utils.logging import DIAGNOSTICS_LOGGER, setup_logger

logger = logging.getLogger(DIAGNOSTICS_LOGGER)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.settings = settings or load_settings()
        setup_logger(app.state.settings.diagnostics_level, app.state.settings.diagnostics_file)
        app.state.log = Logger(
            base_dir=app.state.settings.base_dir,
            threshold=app.state.settings.level,
            colors=app.state.settings.colors,
        )
        logger.info("daylog started, writing to %s", app.state.log.path)
        try:
            yield
        finally:
            app.state.log.close()

    # -------------------------------------------------------------
    # Create the FastAPI app FIRST
    # -------------------------------------------------------------
    app = FastAPI(title="daylog API", lifespan=lifespan)

    # -------------------------------------------------------------
    # Add middleware SECOND
    # -------------------------------------------------------------
    app.add_middleware(AccessLogMiddleware)

    # -------------------------------------------------------------
    # Map log access failures to logged JSON errors
    # -------------------------------------------------------------
    @app.exception_handler(LogNotFoundError)
    async def log_not_found_handler(request: Request, exc: LogNotFoundError):
        return return_error(request.app.state.log, request, 404, CODE_LOG_NOT_FOUND, str(exc))

    @app.exception_handler(LogIOError)
    async def log_io_error_handler(request: Request, exc: LogIOError):
        return return_error(request.app.state.log, request, 500, CODE_LOG_IO, str(exc))

    # -------------------------------------------------------------
    # Include Routers THIRD
    # -------------------------------------------------------------
    app.include_router(logs_router, prefix="/api")

    return app


app = create_app()

# -------------------------------------------------------------
# Create Lambda handler LAST
# -------------------------------------------------------------
handler = Mangum(app)
