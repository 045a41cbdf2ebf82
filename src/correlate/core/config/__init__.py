"""
Configuration for Correlate.

Usage:
    from correlate.core.config import ConfigManager

    config = ConfigManager().load_config()
    manager = create_correlation_manager(options=config.manager)
"""

from ...exceptions.config import (
    ConfigurationError,
    ConfigurationValidationError,
    InvalidConfigurationError,
    MissingConfigurationError,
)
from .manager import ConfigManager
from .models import (
    CorrelateClientOptions,
    CorrelateConfig,
    CorrelateSettings,
    CorrelationManagerOptions,
    HttpListenerOptions,
    LoggingSettings,
    LogLevel,
)

__all__ = [
    "ConfigManager",
    "CorrelateConfig",
    "CorrelateSettings",
    "CorrelationManagerOptions",
    "CorrelateClientOptions",
    "HttpListenerOptions",
    "LoggingSettings",
    "LogLevel",
    "ConfigurationError",
    "ConfigurationValidationError",
    "InvalidConfigurationError",
    "MissingConfigurationError",
]
