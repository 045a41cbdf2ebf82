"""
Correlation decorators.

Wrap a sync or async function so that each call runs inside a correlation
context created by a CorrelationManager.
"""

import functools
import inspect
from typing import Callable, Optional

from .context import OnError
from .manager import CorrelationManager, get_correlation_manager


def correlated(
    correlation_id: Optional[str] = None,
    on_error: Optional[OnError] = None,
    manager: Optional[CorrelationManager] = None,
):
    """
    Decorator to run each call of a function in its own correlation context.

    Works for both plain and ``async def`` functions. Nested calls continue the
    ambient correlation id unless ``correlation_id`` is given.

    Args:
        correlation_id: Fixed correlation id to use, or None to inherit/generate
        on_error: Error handler invoked with an ExceptionContext
        manager: Manager to use, defaults to the process-wide manager
    """

    def decorator(func: Callable) -> Callable:
        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args, **kwargs):
                active_manager = manager or get_correlation_manager()
                return await active_manager.correlate_async(
                    lambda: func(*args, **kwargs),
                    correlation_id=correlation_id,
                    on_error=on_error,
                )

            return async_wrapper

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            active_manager = manager or get_correlation_manager()
            return active_manager.correlate(
                lambda: func(*args, **kwargs),
                correlation_id=correlation_id,
                on_error=on_error,
            )

        return wrapper

    return decorator
