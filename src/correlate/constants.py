"""
Library-wide constants for Correlate.

Keys, header names and defaults shared by the core, the logging layer and
the HTTP adapters.
"""

# Scope / metadata keys
CORRELATION_ID_KEY = "CorrelationId"
EXCEPTION_CORRELATION_ID_ATTR = "__correlate_correlation_id__"

# HTTP header names
CORRELATION_ID_HEADER = "X-Correlation-ID"
REQUEST_ID_HEADER = "X-Request-ID"

# Diagnostics
DIAGNOSTIC_LISTENER_NAME = "Correlate"
ACTIVITY_START_EVENT = "Correlate.Activity.Start"
ACTIVITY_STOP_EVENT = "Correlate.Activity.Stop"

# Request identifier generation (base32, 13 chars for a 64-bit value)
REQUEST_ID_ENCODE_CHARS = "0123456789ABCDEFGHIJKLMNOPQRSTUV"
REQUEST_ID_LENGTH = 13

# Logging defaults
DEFAULT_SERVICE_NAME = "correlate"
DEFAULT_LOG_FILE = "logs/correlate.log"
DEFAULT_LOG_FILE_SIZE_BYTES = 10 * 1024 * 1024
MIN_LOG_FILE_SIZE_BYTES = 1024
DEFAULT_LOG_BACKUP_COUNT = 5

# Configuration
DEFAULT_CONFIG_FILENAME = "correlate.toml"
ENV_PREFIX = "CORRELATE_"
