"""
HTTP integrations for Correlate.

- headers: correlation header names and lookup
- client: ``requests`` adapter/session stamping outgoing requests
- server: framework-independent incoming request listener
- wsgi: WSGI middleware built on the listener
"""

from .client import CorrelatingHTTPAdapter, HttpClient, create_session
from .headers import CorrelationHttpHeaders, get_correlation_id_header
from .server import (
    REQUEST_ACTIVITY_KEY,
    DefaultHttpListener,
    HttpListenerContext,
    HttpRequestActivity,
)
from .wsgi import CorrelateMiddleware, WsgiListenerContext

__all__ = [
    "CorrelationHttpHeaders",
    "get_correlation_id_header",
    "CorrelatingHTTPAdapter",
    "HttpClient",
    "create_session",
    "HttpListenerContext",
    "HttpRequestActivity",
    "DefaultHttpListener",
    "REQUEST_ACTIVITY_KEY",
    "CorrelateMiddleware",
    "WsgiListenerContext",
]
