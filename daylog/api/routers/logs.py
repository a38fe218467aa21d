# DAYLOG
# PER-DAY FILE LOGGING SERVICE

# COMPONENT: LOG BROWSING API ROUTES
# REQUIREMENTS SATISFIED: listing and reading per-day log files over HTTP
"""
daylog/api/routers/logs.py

Read-only endpoints over the per-day log directory.

Endpoints:
    - GET /api/logs         : names of per-day log files, newest first
    - GET /api/logs/today   : name of today's log file
    - GET /api/logs/{name}  : raw text of one log file

Only names shaped like YYYY-MM-DD.log are served; anything else is
answered with a logged 404 before the filesystem is touched. Missing
files and I/O failures are turned into JSON errors by the exception
handlers installed in daylog.main. Before the app lifespan has started
(no Settings or Logger on app.state) the file routes answer 503.
"""
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import PlainTextResponse

from daylog.api.http_log import get_log, return_error
from daylog.config import Settings
from daylog.schemas.logs import CODE_INVALID_LOG_NAME, LogFileList, TodayLog
from daylog.services.writer import Logger
from daylog.utils.paths import is_log_file_name, list_log_files, read_log_file, today_file_name

router = APIRouter(prefix="/logs", tags=["logs"])


def get_settings(request: Request) -> Settings:
    settings = getattr(request.app.state, "settings", None)
    if settings is None:
        raise HTTPException(status_code=503, detail="log service not started")
    return settings


@router.get("", response_model=LogFileList)
def get_log_files(settings: Settings = Depends(get_settings)):
    names = list_log_files(base_dir=settings.base_dir)
    return LogFileList(files=sorted(names, reverse=True))


@router.get("/today", response_model=TodayLog)
def get_today_log():
    return TodayLog(name=today_file_name())


@router.get("/{name}", response_class=PlainTextResponse)
def get_log_file(name: str, request: Request,
                 log: Logger = Depends(get_log),
                 settings: Settings = Depends(get_settings)):
    if not is_log_file_name(name):
        return return_error(log, request, 404, CODE_INVALID_LOG_NAME,
                            f"Invalid log file name: {name}")
    return PlainTextResponse(read_log_file(name, base_dir=settings.base_dir))
