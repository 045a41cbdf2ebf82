"""
Correlation context management for Correlate.

Key Features:
- Ambient correlation context that follows await and asyncio tasks
- Nested correlated scopes that restore their parent on exit
- Error handling with correlation id tagging
- Logging scope and diagnostics integration
- Decorators for sync and async functions

Usage:
    from correlate.core.correlation import (
        create_correlation_manager, correlated, get_correlation_id
    )

    manager = create_correlation_manager()

    # Run work with a new (or inherited) correlation id
    manager.correlate(lambda: process_order(order))

    # Decorator usage
    @correlated()
    async def handle_message(message):
        logger.info(f"Handling {message.id} under {get_correlation_id()}")
"""

from .accessor import CorrelationContextAccessor
from .activity import Activity, ActivityFactory, RootActivity
from .context import CorrelationContext, ErrorContext, ExceptionContext, OnError
from .decorators import correlated
from .diagnostics import DiagnosticListener, Subscription
from .factory import CorrelationContextFactory
from .ids import (
    CorrelationIdFactory,
    GuidCorrelationIdFactory,
    RequestIdentifierCorrelationIdFactory,
)
from .manager import (
    CorrelationManager,
    create_correlation_manager,
    get_correlation_manager,
    set_correlation_manager,
)
from .utils import generate_correlation_id, get_correlation_context, get_correlation_id

__all__ = [
    # Core classes
    "CorrelationContext",
    "CorrelationContextAccessor",
    "CorrelationContextFactory",
    "CorrelationManager",
    "ErrorContext",
    "ExceptionContext",
    "OnError",

    # Activities
    "Activity",
    "ActivityFactory",
    "RootActivity",

    # Id factories
    "CorrelationIdFactory",
    "GuidCorrelationIdFactory",
    "RequestIdentifierCorrelationIdFactory",

    # Diagnostics
    "DiagnosticListener",
    "Subscription",

    # Decorators
    "correlated",

    # Utilities
    "create_correlation_manager",
    "get_correlation_manager",
    "set_correlation_manager",
    "get_correlation_context",
    "get_correlation_id",
    "generate_correlation_id",
]
