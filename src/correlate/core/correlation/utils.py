"""
Utility functions for reading the ambient correlation context.
"""

from typing import Optional

from .accessor import CorrelationContextAccessor
from .context import CorrelationContext
from .ids import GuidCorrelationIdFactory

_accessor = CorrelationContextAccessor()
_id_factory = GuidCorrelationIdFactory()


def get_correlation_context() -> Optional[CorrelationContext]:
    """Get the correlation context of the current task or thread."""
    return _accessor.correlation_context


def get_correlation_id() -> Optional[str]:
    """Get the current correlation ID, or None outside a correlated scope."""
    return _accessor.correlation_id


def generate_correlation_id() -> str:
    """Generate a new correlation ID."""
    return _id_factory.create()
