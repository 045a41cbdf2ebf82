"""
Correlate Logging Package

Logging integration for correlated operations:
- scope: structured logging scopes and the record filter that applies them
- formatters: log formatting (JSON, console, rich)
- loggers: logger wrapper stamping the ambient correlation id
- config: logging configuration
- manager: centralized handler setup
"""

from .config import LoggingConfig
from .formatters import ScopeFormatter, StructuredFormatter
from .loggers import CorrelatedLogger
from .manager import LoggingManager, configure_logging, logging_manager
from .scope import CorrelationScopeFilter, LogScope, begin_scope, current_scope

get_logger = logging_manager.get_logger

__all__ = [
    # Core interfaces
    "LoggingConfig",
    "LoggingManager",
    "configure_logging",
    "CorrelatedLogger",
    "get_logger",
    # Scopes
    "LogScope",
    "begin_scope",
    "current_scope",
    "CorrelationScopeFilter",
    # Formatters
    "StructuredFormatter",
    "ScopeFormatter",
]
