"""
Configuration models for Correlate.

Pydantic models for the options recognised by the manager, the HTTP adapters
and the logging setup, plus environment variable overrides via
pydantic-settings.
"""

from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ...constants import (
    CORRELATION_ID_HEADER,
    CORRELATION_ID_KEY,
    DEFAULT_LOG_BACKUP_COUNT,
    DEFAULT_LOG_FILE_SIZE_BYTES,
    MIN_LOG_FILE_SIZE_BYTES,
)


class LogLevel(str, Enum):
    """Valid logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class CorrelationManagerOptions(BaseModel):
    """Options for the correlation manager and its activities."""

    logging_scope_key: str = Field(
        CORRELATION_ID_KEY,
        description="Key under which the correlation id is added to log scopes",
    )

    @field_validator("logging_scope_key")
    @classmethod
    def validate_scope_key(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("logging_scope_key must not be blank")
        return v.strip()


class CorrelateClientOptions(BaseModel):
    """Options for stamping outgoing HTTP requests."""

    request_header: str = Field(
        CORRELATION_ID_HEADER,
        description="Request header to set the correlation id in",
    )

    @field_validator("request_header")
    @classmethod
    def validate_header(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("request_header must not be blank")
        return v.strip()


class HttpListenerOptions(CorrelationManagerOptions):
    """Options for handling the correlation id of incoming requests."""

    request_headers: Optional[List[str]] = Field(
        None,
        description=(
            "Request headers to read the correlation id from, first match wins. "
            "None means the default header, an empty list disables reading."
        ),
    )
    include_in_response: bool = Field(
        True, description="Echo the correlation id in a response header"
    )

    @property
    def accepted_headers(self) -> List[str]:
        if self.request_headers is None:
            return [CORRELATION_ID_HEADER]
        return list(self.request_headers)


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Logging level")
    format: str = Field("console", description="Log format: console, json, rich")
    output: List[str] = Field(["console"], description="Log outputs: console, file")
    file_path: Optional[Path] = Field(None, description="Log file path")
    max_file_size: int = Field(
        DEFAULT_LOG_FILE_SIZE_BYTES,
        ge=MIN_LOG_FILE_SIZE_BYTES,
        description="Maximum log file size in bytes",
    )
    backup_count: int = Field(
        DEFAULT_LOG_BACKUP_COUNT,
        ge=1,
        le=20,
        description="Number of backup log files to keep",
    )

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        if v not in ["console", "json", "rich"]:
            raise ValueError("format must be one of: console, json, rich")
        return v

    @field_validator("output")
    @classmethod
    def validate_output(cls, v: List[str]) -> List[str]:
        valid_outputs = {"console", "file"}
        for output in v:
            if output not in valid_outputs:
                raise ValueError(
                    f"output must contain only: {', '.join(sorted(valid_outputs))}"
                )
        return v


class CorrelateConfig(BaseModel):
    """Main Correlate configuration model."""

    manager: CorrelationManagerOptions = Field(default_factory=CorrelationManagerOptions)
    client: CorrelateClientOptions = Field(default_factory=CorrelateClientOptions)
    server: HttpListenerOptions = Field(default_factory=HttpListenerOptions)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = {
        "extra": "forbid",
        "validate_assignment": True,
        "str_strip_whitespace": True,
    }


class CorrelateSettings(BaseSettings):
    """Settings that can be overridden by environment variables."""

    correlate_logging_scope_key: Optional[str] = Field(
        None, alias="CORRELATE_LOGGING_SCOPE_KEY"
    )
    correlate_request_header: Optional[str] = Field(None, alias="CORRELATE_REQUEST_HEADER")
    correlate_request_headers: Optional[str] = Field(
        None, alias="CORRELATE_REQUEST_HEADERS"
    )
    correlate_include_in_response: Optional[bool] = Field(
        None, alias="CORRELATE_INCLUDE_IN_RESPONSE"
    )

    # Logging settings
    correlate_log_level: Optional[str] = Field(None, alias="CORRELATE_LOG_LEVEL")
    correlate_log_format: Optional[str] = Field(None, alias="CORRELATE_LOG_FORMAT")
    correlate_log_output: Optional[str] = Field(None, alias="CORRELATE_LOG_OUTPUT")
    correlate_log_file_path: Optional[str] = Field(None, alias="CORRELATE_LOG_FILE_PATH")

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )
