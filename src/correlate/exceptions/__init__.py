"""
Correlate Exception Hierarchy

Exception Hierarchy:
    CorrelateError (base)
    ├── ActivityStateError
    └── ConfigurationError
        ├── InvalidConfigurationError
        ├── MissingConfigurationError
        └── ConfigurationValidationError

Errors raised by correlated work are never wrapped in these types; they are
propagated unchanged and only tagged with their correlation id, readable
through ``get_exception_correlation_id``.
"""

from .base import (
    ActivityStateError,
    CorrelateError,
    ErrorDetails,
    get_exception_correlation_id,
    tag_exception,
)
from .config import (
    ConfigurationError,
    ConfigurationValidationError,
    InvalidConfigurationError,
    MissingConfigurationError,
)

__all__ = [
    # Base
    "CorrelateError",
    "ErrorDetails",
    "ActivityStateError",
    "get_exception_correlation_id",
    "tag_exception",
    # Configuration
    "ConfigurationError",
    "InvalidConfigurationError",
    "MissingConfigurationError",
    "ConfigurationValidationError",
]
