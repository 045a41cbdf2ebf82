"""
Structured logging scopes.

A scope attaches key/value pairs to every log record emitted while it is open.
Open scopes are kept as an immutable tuple in a ContextVar, so they follow the
same propagation rules as the correlation context: they survive ``await`` and
are isolated between asyncio tasks.

Attach ``CorrelationScopeFilter`` to a handler to copy the merged scope values
onto each record.
"""

import logging
from contextvars import ContextVar
from typing import Any, Dict, Optional, Tuple

_open_scopes: ContextVar[Tuple["LogScope", ...]] = ContextVar(
    "correlate_log_scopes", default=()
)


class LogScope:
    """Handle for one open logging scope."""

    def __init__(self, values: Dict[str, Any], logger: Optional[logging.Logger] = None):
        self.values = dict(values)
        self.logger = logger
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Close the scope. Closing twice is a no-op."""
        if self._closed:
            return
        self._closed = True
        # Removed by identity, so it also works if closed from another context.
        scopes = _open_scopes.get()
        if self in scopes:
            _open_scopes.set(tuple(s for s in scopes if s is not self))

    def __enter__(self) -> "LogScope":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __str__(self) -> str:
        return format_scope(self.values)

    def __repr__(self) -> str:
        return f"LogScope({self.values!r}, closed={self._closed})"


def begin_scope(logger: Optional[logging.Logger] = None, **values) -> LogScope:
    """Open a new logging scope holding ``values``."""
    scope = LogScope(values, logger)
    _open_scopes.set(_open_scopes.get() + (scope,))
    return scope


def current_scope() -> Dict[str, Any]:
    """Merge all open scopes, innermost values winning."""
    merged: Dict[str, Any] = {}
    for scope in _open_scopes.get():
        merged.update(scope.values)
    return merged


def format_scope(values: Dict[str, Any]) -> str:
    """Render scope values as ``Key:Value, Key:Value``."""
    return ", ".join(f"{k}:{v}" for k, v in values.items())


class CorrelationScopeFilter(logging.Filter):
    """Copies the open scope values onto each log record.

    The merged values are stored as ``record.scope`` and also set as individual
    record attributes (without overwriting standard ones), so they can be used
    in format strings like ``%(CorrelationId)s``.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        values = current_scope()
        record.scope = values
        record.scope_text = format_scope(values)
        for key, value in values.items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True
