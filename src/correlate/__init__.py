"""
Correlate: correlation id propagation for Python services.

Runs units of work under a correlation id that follows the logical flow of
execution (threads, ``await`` and asyncio tasks), so every log entry and
outgoing HTTP request made on behalf of one operation can be tied together.

Architecture Overview:
- Core: ambient context, activities, correlation manager, id generation
- Config: pydantic option models, TOML/environment loading
- Logging: scopes, formatters and handler setup carrying the correlation id
- HTTP: outgoing (requests) and incoming (listener, WSGI) header propagation
- Exceptions: error hierarchy and correlation id tagging
"""

__version__ = "0.1.0"

from .core.config import CorrelationManagerOptions, HttpListenerOptions
from .core.correlation import (
    CorrelationContext,
    CorrelationContextAccessor,
    CorrelationContextFactory,
    CorrelationManager,
    DiagnosticListener,
    ErrorContext,
    ExceptionContext,
    GuidCorrelationIdFactory,
    RequestIdentifierCorrelationIdFactory,
    RootActivity,
    correlated,
    create_correlation_manager,
    get_correlation_id,
    get_correlation_manager,
)
from .exceptions import CorrelateError, get_exception_correlation_id

__all__ = [
    "CorrelationContext",
    "CorrelationContextAccessor",
    "CorrelationContextFactory",
    "CorrelationManager",
    "CorrelationManagerOptions",
    "HttpListenerOptions",
    "DiagnosticListener",
    "ErrorContext",
    "ExceptionContext",
    "GuidCorrelationIdFactory",
    "RequestIdentifierCorrelationIdFactory",
    "RootActivity",
    "correlated",
    "create_correlation_manager",
    "get_correlation_id",
    "get_correlation_manager",
    "CorrelateError",
    "get_exception_correlation_id",
]
