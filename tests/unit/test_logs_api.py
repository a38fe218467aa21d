# ---------------------------------------------------------------------------
# Unit Tests: Application, Log Browsing Routes and Access Logging
#
# Runs the real application built by create_app() against a temporary
# base directory, with the lifespan active (TestClient as a context
# manager). Covers:
#   - The Logger is opened on startup and closed on shutdown
#   - Listing, today's name and file retrieval endpoints
#   - Invalid names and missing files answer with logged JSON 404s
#   - Every request is recorded by the access logging middleware, with
#     credential headers masked
#   - Without the lifespan the file routes answer 503
# ---------------------------------------------------------------------------
import pytest
from fastapi import Request
from fastapi.testclient import TestClient

from daylog.config import Settings
from daylog.errors import LogIOError
from daylog.main import create_app
from daylog.schemas.logs import CODE_INVALID_LOG_NAME, CODE_LOG_IO, CODE_LOG_NOT_FOUND
from daylog.services.formatter import Level
from daylog.utils.paths import today_file_name


@pytest.fixture
def base_dir(tmp_path):
    log_dir = tmp_path / "logs"
    log_dir.mkdir(mode=0o700)
    (log_dir / "2016-09-11.log").write_text("old entry\n", encoding="utf-8")
    (log_dir / "notes.txt").write_text("not a log\n", encoding="utf-8")
    return tmp_path


@pytest.fixture
def app(base_dir):
    return create_app(Settings(base_dir=str(base_dir), level=Level.DEBUG, colors=False))


def today_content(base_dir):
    return (base_dir / "logs" / today_file_name()).read_text(encoding="utf-8")


def test_lifespan_opens_and_closes_logger(app, base_dir):
    with TestClient(app):
        log = app.state.log
        assert log.path == base_dir / "logs" / today_file_name()

    with pytest.raises(LogIOError):
        log.infof("after shutdown")


def test_list_logs(app):
    with TestClient(app) as client:
        resp = client.get("/api/logs")

    assert resp.status_code == 200
    assert resp.json() == {"files": [today_file_name(), "2016-09-11.log"]}


def test_today_log(app):
    with TestClient(app) as client:
        resp = client.get("/api/logs/today")
    assert resp.json() == {"name": today_file_name()}


def test_read_log(app):
    with TestClient(app) as client:
        resp = client.get("/api/logs/2016-09-11.log")

    assert resp.status_code == 200
    assert resp.text == "old entry\n"
    assert resp.headers["content-type"].startswith("text/plain")


def test_read_missing_log(app, base_dir):
    with TestClient(app) as client:
        resp = client.get("/api/logs/2016-09-12.log")

    assert resp.status_code == 404
    body = resp.json()
    assert body["code"] == CODE_LOG_NOT_FOUND
    assert "2016-09-12.log" in body["error"]
    assert f"[404][{CODE_LOG_NOT_FOUND}]" in today_content(base_dir)


def test_read_invalid_name(app, base_dir):
    with TestClient(app) as client:
        resp = client.get("/api/logs/notes.txt")

    assert resp.status_code == 404
    assert resp.json() == {"code": CODE_INVALID_LOG_NAME, "error": "Invalid log file name: notes.txt"}
    assert f"[404][{CODE_INVALID_LOG_NAME}]" in today_content(base_dir)


def test_read_log_io_failure(app, mocker):
    mocker.patch(
        "daylog.api.routers.logs.read_log_file",
        side_effect=LogIOError("Error reading log file 2016-09-11.log: denied"),
    )
    with TestClient(app) as client:
        resp = client.get("/api/logs/2016-09-11.log")

    assert resp.status_code == 500
    assert resp.json()["code"] == CODE_LOG_IO


def test_access_log_records_requests(app, base_dir):
    with TestClient(app) as client:
        client.get("/api/logs/today")
        client.get("/api/logs/notes.txt")

    content = today_content(base_dir)
    assert "[200][0]" in content
    assert "GET /api/logs/today" in content
    assert "[404][404]" in content
    assert "GET /api/logs/notes.txt" in content


def test_access_log_records_request_body(app, base_dir):
    @app.post("/echo")
    async def echo(request: Request):
        return {"size": len(await request.body())}

    with TestClient(app) as client:
        resp = client.post("/echo", content=b"item=1")

    assert resp.json() == {"size": 6}
    content = today_content(base_dir)
    assert "POST /echo" in content
    assert "Body: item=1" in content


def test_access_log_records_unhandled_errors(app, base_dir):
    @app.get("/boom")
    def boom():
        raise RuntimeError("kaboom")

    with TestClient(app, raise_server_exceptions=False) as client:
        resp = client.get("/boom")

    assert resp.status_code == 500
    content = today_content(base_dir)
    assert "[500][500]" in content
    assert "RuntimeError('kaboom')" in content


def test_without_lifespan_requests_pass_through(app):
    client = TestClient(app)
    resp = client.get("/api/logs/today")
    assert resp.status_code == 200


@pytest.mark.parametrize("path", ["/api/logs", "/api/logs/2016-09-11.log"])
def test_without_lifespan_file_routes_are_unavailable(app, path):
    client = TestClient(app)
    resp = client.get(path)

    assert resp.status_code == 503
    assert resp.json() == {"detail": "log service not started"}


def test_access_log_writes_in_threadpool(app, base_dir, mocker):
    from daylog.api.middleware import access_log

    spy = mocker.patch.object(access_log, "run_in_threadpool",
                              mocker.AsyncMock(wraps=access_log.run_in_threadpool))

    with TestClient(app) as client:
        client.get("/api/logs/today")

    spy.assert_awaited_once()
    assert spy.await_args.args[0] is access_log.log_success
    assert "GET /api/logs/today" in today_content(base_dir)


def test_access_log_redacts_credentials(app, base_dir):
    with TestClient(app) as client:
        client.get("/api/logs/today", headers={"Authorization": "Bearer SECRET-TOKEN"})
        resp = client.get(f"/api/logs/{today_file_name()}")

    assert "SECRET" not in resp.text
    assert "'authorization': '***'" in resp.text
