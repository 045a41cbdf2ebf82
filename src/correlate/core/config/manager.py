"""
Configuration manager for Correlate.

Loads options from a TOML file (sections ``[manager]``, ``[client]``,
``[server]`` and ``[logging]``), applies ``CORRELATE_*`` environment variable
overrides and validates the result into a CorrelateConfig.
"""

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from pydantic import ValidationError

from ...constants import DEFAULT_CONFIG_FILENAME
from ...exceptions.config import (
    ConfigurationValidationError,
    InvalidConfigurationError,
)
from .models import CorrelateConfig, CorrelateSettings


@dataclass
class EnvironmentOverride:
    """Helper for applying environment variable overrides."""
    config_section: Dict[str, Any]
    settings: CorrelateSettings

    def apply_if_set(self, setting_name: str, config_key: str) -> None:
        """Apply setting if it's set in environment."""
        value = getattr(self.settings, setting_name, None)
        if value is not None:
            self.config_section[config_key] = value

    def apply_list_if_set(self, setting_name: str, config_key: str) -> None:
        """Apply a comma-separated setting as a list."""
        value = getattr(self.settings, setting_name, None)
        if value is not None:
            self.config_section[config_key] = [v.strip() for v in value.split(",") if v.strip()]


class ConfigManager:
    """Loads and caches the Correlate configuration."""

    SECTIONS = ("manager", "client", "server", "logging")

    def __init__(self, config_file: Optional[Path] = None):
        """Initialize configuration manager.

        Args:
            config_file: Path to a TOML file. Defaults to ``correlate.toml`` in
                the current directory; a missing file means defaults.
        """
        self.config_file = Path(config_file) if config_file else Path.cwd() / DEFAULT_CONFIG_FILENAME
        self._config: Optional[CorrelateConfig] = None

    def load_config(self) -> CorrelateConfig:
        """Load and validate configuration from file and environment."""
        if self._config is not None:
            return self._config

        config_data: Dict[str, Any] = {}
        if self.config_file.exists():
            config_data = self._load_toml_file()

        config_data = self._apply_env_overrides(config_data)

        try:
            self._config = CorrelateConfig(**config_data)
        except ValidationError as e:
            raise ConfigurationValidationError(
                [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()]
            ) from e
        except TypeError as e:
            raise ConfigurationValidationError([f"Configuration validation failed: {e}"]) from e

        return self._config

    def reload(self) -> CorrelateConfig:
        """Drop the cached configuration and load it again."""
        self._config = None
        return self.load_config()

    def _load_toml_file(self) -> Dict[str, Any]:
        """Load configuration from TOML file."""
        try:
            with open(self.config_file, "rb") as f:
                return tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise InvalidConfigurationError(
                str(self.config_file),
                f"Invalid TOML syntax: {e}",
                "valid TOML format"
            ) from e

    def _apply_env_overrides(self, config_data: Dict[str, Any]) -> Dict[str, Any]:
        """Apply environment variable overrides to configuration."""
        settings = CorrelateSettings()

        for section in self.SECTIONS:
            config_data.setdefault(section, {})

        EnvironmentOverride(config_data["manager"], settings).apply_if_set(
            "correlate_logging_scope_key", "logging_scope_key"
        )
        EnvironmentOverride(config_data["client"], settings).apply_if_set(
            "correlate_request_header", "request_header"
        )

        server = EnvironmentOverride(config_data["server"], settings)
        server.apply_if_set("correlate_logging_scope_key", "logging_scope_key")
        server.apply_list_if_set("correlate_request_headers", "request_headers")
        server.apply_if_set("correlate_include_in_response", "include_in_response")

        logging_override = EnvironmentOverride(config_data["logging"], settings)
        logging_override.apply_if_set("correlate_log_level", "level")
        logging_override.apply_if_set("correlate_log_format", "format")
        logging_override.apply_list_if_set("correlate_log_output", "output")
        logging_override.apply_if_set("correlate_log_file_path", "file_path")

        return config_data
