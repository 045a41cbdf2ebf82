"""
WSGI middleware that correlates every request.

Usage:
    from correlate.http.wsgi import CorrelateMiddleware

    app = CorrelateMiddleware(app)
"""

from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from ..core.config.models import HttpListenerOptions
from ..core.correlation.ids import GuidCorrelationIdFactory
from ..core.correlation.manager import create_correlation_manager
from .server import REQUEST_ACTIVITY_KEY, DefaultHttpListener

ENVIRON_CONTEXT_KEY = "correlate.listener_context"


class WsgiListenerContext:
    """HttpListenerContext over a WSGI environ and its response headers."""

    def __init__(self, environ: Dict[str, Any]):
        self.environ = environ
        self.items: Dict[str, Any] = {}
        self.response_headers: Optional[List[Tuple[str, str]]] = None
        self._callbacks: List[Callable[[], None]] = []
        self._response_started = False

    @property
    def correlation_id(self) -> Optional[str]:
        activity = self.items.get(REQUEST_ACTIVITY_KEY)
        return getattr(activity, "correlation_id", None)

    def on_starting_response(self, callback: Callable[[], None]) -> None:
        self._callbacks.append(callback)

    def try_get_request_header(self, name: str) -> Optional[List[str]]:
        key = name.upper().replace("-", "_")
        if key not in ("CONTENT_TYPE", "CONTENT_LENGTH"):
            key = f"HTTP_{key}"
        value = self.environ.get(key)
        if value is None:
            return None
        return [value]

    def try_add_response_header(self, name: str, values: List[str]) -> bool:
        if self.response_headers is None:
            return False
        lowered = name.lower()
        if any(key.lower() == lowered for key, _ in self.response_headers):
            return False
        for value in values:
            self.response_headers.append((name, value))
        return True

    def start_response(self, headers: List[Tuple[str, str]]) -> None:
        """Run the registered callbacks against ``headers``, once."""
        self.response_headers = headers
        if self._response_started:
            return
        self._response_started = True
        for callback in self._callbacks:
            callback()


class ClosingIterator:
    """Response iterable that runs ``on_close`` after the inner one closes."""

    def __init__(self, iterable: Iterable[bytes], on_close: Callable[[], None]):
        self._iterable = iterable
        self._iterator = iter(iterable)
        self._on_close = on_close
        self._closed = False

    def __iter__(self):
        return self

    def __next__(self) -> bytes:
        return next(self._iterator)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            close = getattr(self._iterable, "close", None)
            if close is not None:
                close()
        finally:
            self._on_close()


class CorrelateMiddleware:
    """
    WSGI middleware running each request inside a correlation context.

    The request activity starts before the wrapped application is called and
    stops when the server closes the response iterable, or immediately if the
    application raises.
    """

    def __init__(
        self,
        app: Callable,
        listener: Optional[DefaultHttpListener] = None,
        options: Optional[HttpListenerOptions] = None,
    ):
        self.app = app
        if listener is None:
            options = options or HttpListenerOptions()
            listener = DefaultHttpListener(
                GuidCorrelationIdFactory(),
                create_correlation_manager(options=options),
                options,
            )
        self.listener = listener

    def __call__(self, environ: Dict[str, Any], start_response: Callable):
        context = WsgiListenerContext(environ)
        environ[ENVIRON_CONTEXT_KEY] = context

        def correlating_start_response(status, headers, exc_info=None):
            headers = list(headers)
            context.start_response(headers)
            return start_response(status, headers, exc_info)

        self.listener.handle_begin_request(context)
        try:
            result = self.app(environ, correlating_start_response)
        except Exception:
            self.listener.handle_end_request(context)
            raise

        return ClosingIterator(result, lambda: self.listener.handle_end_request(context))
