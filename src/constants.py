"""
Centralized configuration constants for the CSDL Example Generator.

This module provides a single source of truth for all configuration constants,
default values, and limits used throughout the application.
"""

from enum import IntEnum
from typing import Final

# ============================================================================
# Exit Codes
# ============================================================================

class ExitCode(IntEnum):
    """Standard exit codes for CLI commands.

    Following Unix conventions:
    - 0: Success
    - 1: General error
    - 2: Validation/syntax error
    - 3+: Specific error categories
    """
    SUCCESS = 0
    ERROR = 1
    VALIDATION_ERROR = 2
    CONFIG_ERROR = 3
    API_ERROR = 4
    FILE_NOT_FOUND = 5


# ============================================================================
# Metadata Retrieval
# ============================================================================

class FetchConfig:
    """Metadata retrieval constants."""

    DEFAULT_TIMEOUT_SECONDS: Final[int] = 30
    """Default HTTP request timeout."""

    DEFAULT_MAX_RETRIES: Final[int] = 3
    """Attempts for transient failures before giving up."""

    RETRY_MIN_WAIT_SECONDS: Final[int] = 1
    """Lower bound for exponential backoff."""

    RETRY_MAX_WAIT_SECONDS: Final[int] = 30
    """Upper bound for exponential backoff."""

    TRANSIENT_STATUS_CODES: Final[tuple[int, ...]] = (429, 502, 503, 504)
    """HTTP status codes that are retried."""

    DEFAULT_ALLOWED_SCHEMES: Final[tuple[str, ...]] = ("https", "http")
    """URL schemes accepted for metadata documents."""

    ACCEPT_HEADER: Final[str] = "application/xml"
    """Accept header sent with metadata requests."""


# ============================================================================
# Example Generation
# ============================================================================

class ExampleConfig:
    """Example generation constants."""

    FALLBACK_KEY: Final[str] = "datatype"
    """Key of the diagnostic object returned for unresolved types."""

    COLLECTION_PREFIX: Final[str] = "Collection("
    """Opening of a CSDL collection type identifier."""

    COLLECTION_SUFFIX: Final[str] = ")"
    """Closing of a CSDL collection type identifier."""

    STREAM_TYPE: Final[str] = "Edm.Stream"
    """Primitive omitted from generated examples."""

    RESOURCE_LANGUAGE: Final[str] = "json"
    """Code block language recorded on resource definitions."""

    PROGRESS_THRESHOLD: Final[int] = 10
    """Type count below which progress bars are hidden."""

    MAX_EXPANSION_DEPTH: Final[int] = 6
    """Nested object levels expanded before the fallback object is emitted."""


# ============================================================================
# Logging
# ============================================================================

class LoggingConfig:
    """Logging configuration."""

    DEFAULT_LOG_LEVEL: Final[str] = "INFO"
    """Default logging level."""

    LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    """Default log format string."""

    DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"
    """Default date format for logs."""

    DEFAULT_FORMAT_STYLE: Final[str] = "text"
    """Human-readable formatter style."""

    JSON_DATE_FORMAT: Final[str] = "%Y-%m-%dT%H:%M:%S.%fZ"
    """ISO-8601 timestamp format for structured logs."""

    SUPPORTED_FORMATS: Final[tuple[str, ...]] = ("text", "json")
    """Supported formatter styles."""

    MAX_LOG_FILE_MB: Final[int] = 10
    """Maximum log file size before rotation (MB)."""

    LOG_BACKUP_COUNT: Final[int] = 5
    """Number of backup log files to keep."""

    ROTATION_ENABLED: Final[bool] = True
    """Enable log rotation by default when a file handler is configured."""
