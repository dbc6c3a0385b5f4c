# src/reqlog/tests/test_middleware/test_asgi.py
import pytest
from fastapi import FastAPI, HTTPException
from starlette.requests import Request
from starlette.testclient import TestClient

from reqlog.core.request_filter import REDACTED, redacting_request_filter
from reqlog.exceptions import ConfigurationError, MissingOptionsError, MissingTransportsError
from reqlog.middleware.asgi import ErrorLoggerMiddleware, RequestLoggerMiddleware, request_record
from reqlog.middleware.factories import ERROR_MESSAGE

from ..test_fixtures.transport_fixtures import FailingTransport, RecordingTransport

BOOM = RuntimeError("boom")


def make_app(transport, *, request_options=None, error_options=None) -> FastAPI:
    app = FastAPI()

    @app.get("/items/{item_id}")
    def read_item(item_id: int):
        return {"item_id": item_id}

    @app.get("/missing")
    def missing():
        raise HTTPException(status_code=404, detail="nope")

    @app.get("/boom")
    def boom():
        raise BOOM

    app.add_middleware(ErrorLoggerMiddleware, **(error_options or {"transports": [transport]}))
    app.add_middleware(RequestLoggerMiddleware, **(request_options or {"transports": [transport]}))
    return app


def make_scope(**overrides) -> dict:
    scope = {
        "type": "http",
        "http_version": "1.1",
        "method": "GET",
        "scheme": "http",
        "server": ("testserver", 80),
        "client": ("127.0.0.1", 50000),
        "root_path": "",
        "path": "/items/1",
        "query_string": b"q=shoes&token=abc",
        "headers": [
            (b"host", b"testserver"),
            (b"authorization", b"Bearer secret"),
            (b"cookie", b"sid=42"),
        ],
        "path_params": {"item_id": "1"},
    }
    scope.update(overrides)
    return scope


def test_request_record_snapshot():
    record = request_record(Request(make_scope()))

    assert record["url"] == "/items/1?q=shoes&token=abc"
    assert record["originalUrl"] == "http://testserver/items/1?q=shoes&token=abc"
    assert record["method"] == "GET"
    assert record["httpVersion"] == "1.1"
    assert record["headers"]["authorization"] == "Bearer secret"
    assert record["query"] == {"q": "shoes", "token": "abc"}
    assert record["path_params"] == {"item_id": "1"}
    assert record["client"] == ["127.0.0.1", 50000]
    assert record["cookies"] == {"sid": "42"}


def test_request_record_without_query_or_client():
    record = request_record(Request(make_scope(query_string=b"", client=None)))
    assert record["url"] == "/items/1"
    assert record["query"] == {}
    assert record["client"] is None


def test_request_record_containers_are_independent():
    request = Request(make_scope())
    first = request_record(request)
    first["headers"]["authorization"] = "changed"
    first["query"]["q"] = "changed"

    second = request_record(request)
    assert second["headers"]["authorization"] == "Bearer secret"
    assert second["query"]["q"] == "shoes"


def test_request_is_logged_and_response_unchanged():
    transport = RecordingTransport()
    client = TestClient(make_app(transport))

    resp = client.get("/items/7?verbose=1", headers={"X-Trace": "t1"})

    assert resp.status_code == 200
    assert resp.json() == {"item_id": 7}
    assert len(transport.calls) == 1
    method, level, msg, meta, _ = transport.calls[0]
    assert (method, level, msg) == ("log", "info", "HTTP GET /items/7?verbose=1")
    req = meta["req"]
    assert set(req) == {"url", "originalUrl", "method", "httpVersion", "headers", "query"}
    assert req["query"] == {"verbose": "1"}
    assert req["headers"]["x-trace"] == "t1"


def test_http_exceptions_are_not_logged_as_errors():
    transport = RecordingTransport()
    client = TestClient(make_app(transport))

    resp = client.get("/missing")

    assert resp.status_code == 404
    assert [call[0] for call in transport.calls] == ["log"]


def test_unhandled_error_is_logged_and_reraised_unchanged():
    transport = RecordingTransport()
    client = TestClient(make_app(transport))

    with pytest.raises(RuntimeError) as excinfo:
        client.get("/boom")

    assert excinfo.value is BOOM
    kinds = [call[0] for call in transport.calls]
    # the request logger sits outside the error logger, so it runs first
    assert kinds == ["log", "log_exception"]
    _, msg, meta, _ = transport.calls[1]
    assert msg == ERROR_MESSAGE
    assert meta["req"]["url"] == "/boom"
    assert meta["stack"][-1] == "RuntimeError: boom"


def test_unhandled_error_becomes_500_when_server_does_not_raise():
    transport = RecordingTransport()
    client = TestClient(make_app(transport), raise_server_exceptions=False)

    resp = client.get("/boom")

    assert resp.status_code == 500
    assert transport.calls[-1][0] == "log_exception"


def test_failing_transport_does_not_break_requests():
    client = TestClient(make_app(FailingTransport()), raise_server_exceptions=False)

    assert client.get("/items/1").status_code == 200
    assert client.get("/boom").status_code == 500


def test_redacting_selector_through_the_stack():
    transport = RecordingTransport()
    options = {"transports": [transport], "request_filter": redacting_request_filter()}
    client = TestClient(make_app(transport, request_options=options))

    client.get("/items/1?token=abc", headers={"Authorization": "Bearer secret"})

    req = transport.calls[0][3]["req"]
    assert req["headers"]["authorization"] == REDACTED
    assert req["query"]["token"] == REDACTED


def test_options_object_form_is_accepted():
    transport = RecordingTransport()
    app = FastAPI()
    app.add_middleware(RequestLoggerMiddleware, options={"transports": [transport], "level": "debug"})

    TestClient(app).get("/")

    assert transport.calls[0][1] == "debug"


@pytest.mark.parametrize("middleware_cls", [RequestLoggerMiddleware, ErrorLoggerMiddleware])
def test_middleware_construction_fails_fast(middleware_cls):
    app = FastAPI()
    with pytest.raises(MissingOptionsError):
        middleware_cls(app)
    with pytest.raises(MissingTransportsError):
        middleware_cls(app, transports=[])


@pytest.mark.parametrize("middleware_cls", [RequestLoggerMiddleware, ErrorLoggerMiddleware])
def test_options_and_keywords_together_are_rejected(middleware_cls):
    transport = RecordingTransport()
    with pytest.raises(ConfigurationError) as excinfo:
        middleware_cls(FastAPI(), options={"transports": [transport]}, level="debug")
    assert excinfo.value.fields == ["level"]
