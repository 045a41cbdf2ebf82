"""
Creation and clean-up of correlation contexts.
"""

import logging
from typing import Optional

from .accessor import CorrelationContextAccessor
from .context import CorrelationContext

logger = logging.getLogger(__name__)


class CorrelationContextFactory:
    """
    Creates CorrelationContext instances and, when bound to an accessor,
    publishes them as the ambient context.

    ``dispose()`` clears the accessor, which restores the context that was
    current before the matching ``create()``.
    """

    def __init__(self, accessor: Optional[CorrelationContextAccessor] = None):
        self._accessor = accessor

    @property
    def accessor(self) -> Optional[CorrelationContextAccessor]:
        return self._accessor

    def new_context(self, correlation_id: str) -> CorrelationContext:
        """Build a context without publishing it. Override to customise."""
        return CorrelationContext(correlation_id=correlation_id)

    def create(self, correlation_id: str) -> CorrelationContext:
        """Create a context and publish it as current (if bound)."""
        context = self.new_context(correlation_id)
        if self._accessor is not None:
            self._accessor.correlation_context = context
            logger.debug(f"Correlation context set (correlation_id={correlation_id})")
        return context

    def dispose(self) -> None:
        """Pop the current context from the bound accessor (if any)."""
        if self._accessor is not None:
            self._accessor.correlation_context = None
