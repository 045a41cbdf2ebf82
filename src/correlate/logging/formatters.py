"""
Log formatters for different output formats.

Provides structured JSON formatting, console formatting with the open logging
scope appended, and Rich terminal output.
"""

import json
import logging
import traceback
from datetime import datetime, timezone

from rich.console import Console
from rich.logging import RichHandler

from ..constants import CORRELATION_ID_KEY, DEFAULT_SERVICE_NAME
from ..exceptions.base import get_exception_correlation_id

CONSOLE_FORMAT = "%(asctime)s [%(levelname)8s] %(name)s: %(message)s"
CONSOLE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def __init__(
        self,
        service_name: str = DEFAULT_SERVICE_NAME,
        version: str = "unknown",
        scope_key: str = CORRELATION_ID_KEY,
    ):
        super().__init__()
        self.service_name = service_name
        self.version = version
        self.scope_key = scope_key

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "service": self.service_name,
            "version": self.version,
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "thread": record.thread,
            "thread_name": record.threadName,
        }

        scope = getattr(record, "scope", None)
        if scope:
            log_entry["scope"] = scope

        # Explicit id on the record first, then the one from the open scope
        correlation_id = getattr(record, "correlation_id", None)
        if correlation_id is None and scope:
            correlation_id = scope.get(self.scope_key)
        if correlation_id is not None:
            log_entry["correlation_id"] = correlation_id

        if hasattr(record, "extra_context"):
            log_entry.update(record.extra_context)

        if record.exc_info:
            log_entry["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": traceback.format_exception(*record.exc_info),
            }
            exc_correlation_id = get_exception_correlation_id(record.exc_info[1])
            if exc_correlation_id is not None:
                log_entry["exception"]["correlation_id"] = exc_correlation_id

        return json.dumps(log_entry, default=str)


class ScopeFormatter(logging.Formatter):
    """Human-readable formatter that appends the open scope as ``[Key:Value]``."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        scope_text = getattr(record, "scope_text", "")
        if not scope_text:
            return message

        # Keep tracebacks below the scope suffix
        first_line, sep, rest = message.partition("\n")
        return f"{first_line} [{scope_text}]{sep}{rest}"


def create_console_formatter(fmt: str = CONSOLE_FORMAT) -> logging.Formatter:
    """Create a console formatter for human-readable output."""
    return ScopeFormatter(fmt, datefmt=CONSOLE_DATE_FORMAT)


def create_rich_handler() -> logging.Handler:
    """Create a Rich handler for enhanced terminal output."""
    return RichHandler(
        console=Console(stderr=True),
        show_time=True,
        show_level=True,
        show_path=True,
        markup=False,
        rich_tracebacks=True,
    )


def create_structured_formatter(
    service_name: str = DEFAULT_SERVICE_NAME, version: str = "unknown"
) -> StructuredFormatter:
    """Create a structured JSON formatter."""
    return StructuredFormatter(service_name, version)
