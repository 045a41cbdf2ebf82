"""
Tests for the WSGI middleware.
"""

from unittest.mock import MagicMock, Mock

import pytest

from correlate.core.config.models import HttpListenerOptions
from correlate.core.correlation.utils import get_correlation_id
from correlate.http.server import DefaultHttpListener
from correlate.http.wsgi import ENVIRON_CONTEXT_KEY, CorrelateMiddleware, WsgiListenerContext


def make_environ(**headers):
    environ = {"REQUEST_METHOD": "GET", "PATH_INFO": "/"}
    for name, value in headers.items():
        environ[f"HTTP_{name.upper()}"] = value
    return environ


class Recorder:
    """Captures what the server would receive."""

    def __init__(self):
        self.status = None
        self.headers = None

    def start_response(self, status, headers, exc_info=None):
        self.status = status
        self.headers = headers


def run(app, environ):
    recorder = Recorder()
    result = app(environ, recorder.start_response)
    try:
        body = b"".join(result)
    finally:
        result.close()
    return recorder, body


def echo_app(environ, start_response):
    start_response("200 OK", [("Content-Type", "text/plain")])
    return [(get_correlation_id() or "").encode()]


@pytest.fixture
def listener(manager):
    id_factory = Mock()
    id_factory.create.return_value = "generated-id"
    return DefaultHttpListener(id_factory, manager)


@pytest.mark.unit
class TestWsgiListenerContext:
    """Test the environ adapter."""

    def test_request_header_lookup(self):
        context = WsgiListenerContext(make_environ(X_CORRELATION_ID="abc"))

        assert context.try_get_request_header("X-Correlation-ID") == ["abc"]
        assert context.try_get_request_header("X-Request-ID") is None

    def test_content_type_lookup(self):
        context = WsgiListenerContext({"CONTENT_TYPE": "text/plain"})

        assert context.try_get_request_header("Content-Type") == ["text/plain"]

    def test_response_header_before_start(self):
        assert WsgiListenerContext({}).try_add_response_header("X-A", ["1"]) is False

    def test_response_header_added_once(self):
        context = WsgiListenerContext({})
        headers = [("x-a", "app")]
        context.start_response(headers)

        assert context.try_add_response_header("X-A", ["1"]) is False
        assert context.try_add_response_header("X-B", ["2"]) is True
        assert headers == [("x-a", "app"), ("X-B", "2")]

    def test_callbacks_run_once(self):
        context = WsgiListenerContext({})
        callback = Mock()
        context.on_starting_response(callback)

        context.start_response([])
        context.start_response([])

        callback.assert_called_once()


@pytest.mark.unit
class TestCorrelateMiddleware:
    """Test correlating WSGI requests."""

    def test_app_runs_with_generated_id(self, listener, accessor):
        recorder, body = run(CorrelateMiddleware(echo_app, listener), make_environ())

        assert body == b"generated-id"
        assert ("X-Correlation-ID", "generated-id") in recorder.headers
        assert accessor.correlation_context is None

    def test_inbound_header_reused(self, listener):
        recorder, body = run(
            CorrelateMiddleware(echo_app, listener), make_environ(X_CORRELATION_ID="inbound")
        )

        assert body == b"inbound"
        assert ("X-Correlation-ID", "inbound") in recorder.headers

    def test_app_header_not_overwritten(self, listener):
        def app(environ, start_response):
            start_response("200 OK", [("X-Correlation-ID", "from-app")])
            return [b""]

        recorder, _ = run(CorrelateMiddleware(app, listener), make_environ())

        assert [v for k, v in recorder.headers if k.lower() == "x-correlation-id"] == ["from-app"]

    def test_context_active_until_close(self, listener, accessor):
        """Test that the correlation stays active while the body is streamed."""
        def app(environ, start_response):
            start_response("200 OK", [])
            yield b"first"
            yield get_correlation_id().encode()

        result = CorrelateMiddleware(app, listener)(make_environ(), Recorder().start_response)

        assert list(result) == [b"first", b"generated-id"]
        assert accessor.correlation_id == "generated-id"
        result.close()
        assert accessor.correlation_context is None

    def test_close_is_forwarded(self, listener):
        inner = MagicMock()
        inner.__iter__.return_value = iter([b"x"])

        def app(environ, start_response):
            start_response("200 OK", [])
            return inner

        result = CorrelateMiddleware(app, listener)(make_environ(), Recorder().start_response)
        result.close()
        result.close()

        inner.close.assert_called_once()

    def test_app_error_ends_request(self, listener, accessor):
        def app(environ, start_response):
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError) as exc_info:
            CorrelateMiddleware(app, listener)(make_environ(), Recorder().start_response)

        assert str(exc_info.value) == "boom"
        assert accessor.correlation_context is None

    def test_listener_context_in_environ(self, listener):
        environ = make_environ()

        run(CorrelateMiddleware(echo_app, listener), environ)

        assert environ[ENVIRON_CONTEXT_KEY].correlation_id == "generated-id"

    def test_default_listener(self, accessor):
        options = HttpListenerOptions(request_headers=["X-Request-ID"])
        recorder, body = run(
            CorrelateMiddleware(echo_app, options=options), make_environ(X_REQUEST_ID="req-1")
        )

        assert body == b"req-1"
        assert ("X-Request-ID", "req-1") in recorder.headers
