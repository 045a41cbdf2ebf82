"""
Logger wrapper that stamps entries with the ambient correlation id.

Provides CorrelatedLogger with correlation tracking and context management.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Optional

from ..core.correlation.accessor import CorrelationContextAccessor


class CorrelatedLogger:
    """
    Logger with structured context and correlation ids.

    Unless a fixed ``correlation_id`` is given, the id is read from the
    ambient correlation context at the time of each call, so one instance
    can be shared across requests and tasks.
    """

    def __init__(
        self,
        name: str,
        correlation_id: Optional[str] = None,
        accessor: Optional[CorrelationContextAccessor] = None,
    ):
        self.logger = logging.getLogger(name)
        self._correlation_id = correlation_id
        self._accessor = accessor or CorrelationContextAccessor()
        self.extra_context: Dict[str, Any] = {}

    @property
    def correlation_id(self) -> Optional[str]:
        if self._correlation_id is not None:
            return self._correlation_id
        return self._accessor.correlation_id

    def _log(self, level: int, msg: str, exc_info: Any = None, **kwargs):
        """Internal logging method with correlation ID and context."""
        if not self.logger.isEnabledFor(level):
            return

        extra: Dict[str, Any] = {}
        correlation_id = self.correlation_id
        if correlation_id is not None:
            extra["correlation_id"] = correlation_id

        context = self.extra_context.copy()
        context.update(kwargs)
        if context:
            extra["extra_context"] = context

        self.logger.log(level, msg, exc_info=exc_info, extra=extra, stacklevel=3)

    def debug(self, msg: str, **kwargs):
        self._log(logging.DEBUG, msg, **kwargs)

    def info(self, msg: str, **kwargs):
        self._log(logging.INFO, msg, **kwargs)

    def warning(self, msg: str, **kwargs):
        self._log(logging.WARNING, msg, **kwargs)

    def error(self, msg: str, **kwargs):
        self._log(logging.ERROR, msg, **kwargs)

    def exception(self, msg: str, **kwargs):
        """Log exception with traceback."""
        self._log(logging.ERROR, msg, exc_info=True, **kwargs)

    def critical(self, msg: str, **kwargs):
        self._log(logging.CRITICAL, msg, **kwargs)

    def add_context(self, **kwargs):
        """Add persistent context to this logger."""
        self.extra_context.update(kwargs)

    def clear_context(self):
        """Clear persistent context."""
        self.extra_context.clear()

    def with_context(self, **kwargs) -> "CorrelatedLogger":
        """Create a copy of this logger with additional context."""
        new_logger = CorrelatedLogger(self.logger.name, self._correlation_id, self._accessor)
        new_logger.extra_context = self.extra_context.copy()
        new_logger.extra_context.update(kwargs)
        return new_logger

    @contextmanager
    def temp_context(self, **kwargs):
        """Context manager for temporary context addition."""
        original_context = self.extra_context.copy()
        self.extra_context.update(kwargs)
        try:
            yield self
        finally:
            self.extra_context = original_context


def get_logger(name: str, correlation_id: Optional[str] = None) -> CorrelatedLogger:
    """Get a CorrelatedLogger instance."""
    return CorrelatedLogger(name, correlation_id)
