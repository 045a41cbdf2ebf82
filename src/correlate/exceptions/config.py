"""
Configuration-related exceptions.

Raised while constructing core components or loading option files.
"""

from typing import Any, List, Optional

from .base import CorrelateError, ErrorDetails


class ConfigurationError(CorrelateError):
    """Base class for configuration-related errors."""

    def __init__(self, message: str, help_text: Optional[str] = None,
                 error_code: Optional[str] = None):
        super().__init__(message, ErrorDetails(help_text=help_text, error_code=error_code))


class InvalidConfigurationError(ConfigurationError):
    """Raised when configuration contains invalid values."""

    def __init__(self, field: str, value: Any, expected: str):
        self.field = field
        self.value = value
        self.expected = expected
        message = f"Invalid configuration for '{field}': got {repr(value)}, expected {expected}"
        help_text = f"Please check the configuration for '{field}' and ensure it matches the expected format: {expected}"
        super().__init__(message, help_text=help_text, error_code="CONFIG_INVALID")


class MissingConfigurationError(ConfigurationError):
    """Raised when a required collaborator or setting is missing."""

    def __init__(self, field: str, owner: Optional[str] = None):
        self.field = field
        self.owner = owner
        message = f"Missing required configuration: '{field}'"
        if owner:
            message += f" for {owner}"
        help_text = f"Pass a '{field}' instance when constructing the component"
        super().__init__(message, help_text=help_text, error_code="CONFIG_MISSING")


class ConfigurationValidationError(ConfigurationError):
    """Raised when configuration fails validation."""

    def __init__(self, errors: List[str]):
        self.errors = errors
        message = "Configuration validation failed:"
        for error in errors:
            message += f"\n  - {error}"

        help_text = "Please check your configuration file and fix the validation errors listed above"
        super().__init__(message, help_text=help_text, error_code="CONFIG_VALIDATION")
