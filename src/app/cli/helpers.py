"""
CLI helper utilities.

This module provides shared utilities for CLI commands:
- Configuration loading
- Logging setup
"""

import json
import logging
import sys
from datetime import datetime, timezone
from logging import Handler
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

from constants import LoggingConfig

# Type alias for log levels
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

logger = logging.getLogger(__name__)

# Attributes every LogRecord carries; anything else arrived via extra=
_STANDARD_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """Render each record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).strftime(
                LoggingConfig.JSON_DATE_FORMAT
            ),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        extras = {
            key: value for key, value in vars(record).items()
            if key not in _STANDARD_RECORD_ATTRS and not key.startswith("_")
        }
        payload.update({key: value for key, value in extras.items() if key not in payload})

        return json.dumps(payload, ensure_ascii=False, default=str)


# Handlers installed by setup_logging, replaced on every call
_MANAGED_HANDLERS: List[Handler] = []


def _clear_managed_handlers() -> None:
    """Detach and close the handlers installed by setup_logging."""
    root_logger = logging.getLogger()
    while _MANAGED_HANDLERS:
        handler = _MANAGED_HANDLERS.pop()
        root_logger.removeHandler(handler)
        handler.close()


def _build_formatter(config: Dict[str, Any]) -> logging.Formatter:
    style = str(config.get('format', LoggingConfig.DEFAULT_FORMAT_STYLE)).lower()
    if style not in LoggingConfig.SUPPORTED_FORMATS:
        raise ValueError(
            f"Unsupported logging.format '{style}'. "
            f"Supported: {', '.join(LoggingConfig.SUPPORTED_FORMATS)}"
        )
    if style == 'json':
        return JSONFormatter()
    return logging.Formatter(
        fmt=config.get('pattern') or LoggingConfig.LOG_FORMAT,
        datefmt=config.get('date_format', LoggingConfig.DATE_FORMAT),
    )


def _open_log_file(path: str, rotation: Dict[str, Any]) -> Handler:
    """Open ``path`` for logging, rotating by size unless rotation is disabled."""
    Path(path).parent.mkdir(parents=True, exist_ok=True)

    if not rotation.get('enabled', LoggingConfig.ROTATION_ENABLED):
        return logging.FileHandler(path, encoding='utf-8')

    max_mb = int(rotation.get('max_mb', LoggingConfig.MAX_LOG_FILE_MB))
    backup_count = int(rotation.get('backup_count', LoggingConfig.LOG_BACKUP_COUNT))
    if max_mb < 1 or backup_count < 1:
        raise ValueError("logging.rotation max_mb and backup_count must be at least 1")

    return RotatingFileHandler(
        path,
        maxBytes=max_mb * 1024 * 1024,
        backupCount=backup_count,
        encoding='utf-8',
    )


def setup_logging(
    level: LogLevel = LoggingConfig.DEFAULT_LOG_LEVEL,
    log_file: Optional[str] = None,
    *,
    config: Optional[Dict[str, Any]] = None,
    include_console: bool = True,
) -> Optional[str]:
    """
    Configure the root logger for a CLI run.

    Console output goes to stderr so stdout carries only generated JSON.
    Calling this again replaces the handlers from the previous call. If the
    log file cannot be opened, a warning is printed and logging continues
    on the console.

    Args:
        level: Log level, used when ``config`` has no ``level``.
        log_file: Log file path, overrides ``config['file']``.
        config: Optional ``logging`` section of the configuration file.
        include_console: If False, skip adding a console handler.

    Returns:
        The log file path in use, or None if logging to console only.

    Raises:
        ValueError: If the format or rotation settings are invalid.
    """
    config = dict(config or {})

    level_name = str(config.get('level') or level).upper()
    log_level = getattr(logging, level_name, logging.INFO)
    formatter = _build_formatter(config)

    handlers: List[Handler] = []
    file_path = log_file if log_file is not None else config.get('file')
    actual_log_file = None

    if file_path:
        rotation = config.get('rotation') if isinstance(config.get('rotation'), dict) else {}
        try:
            handlers.append(_open_log_file(file_path, rotation))
            actual_log_file = file_path
        except OSError as exc:
            print(f"Warning: Could not open log file {file_path}: {exc}; logging to console only", file=sys.stderr)

    if include_console or not handlers:
        handlers.append(logging.StreamHandler(sys.stderr))

    _clear_managed_handlers()
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    logging.captureWarnings(True)

    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)
        _MANAGED_HANDLERS.append(handler)

    if actual_log_file:
        logger.info(f"Logging to: {actual_log_file}")

    return actual_log_file


def load_config(config_path: str) -> Dict[str, Any]:
    """
    Read the JSON configuration file given with ``--config``.

    Raises:
        ValueError: If config_path is empty, the file is not UTF-8 JSON, or
            the top-level value is not an object.
        FileNotFoundError: If the file does not exist.
    """
    if not config_path:
        raise ValueError("config_path cannot be empty")

    path = Path(config_path)
    if not path.is_file():
        raise FileNotFoundError(f"Configuration file not found: {config_path} (see config.sample.json)")

    try:
        config = json.loads(path.read_text(encoding='utf-8'))
    except UnicodeDecodeError as e:
        raise ValueError(f"Configuration file {config_path} is not UTF-8: {e}") from e
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {config_path} at line {e.lineno}, column {e.colno}: {e.msg}") from e

    if not isinstance(config, dict):
        raise ValueError(f"Configuration in {config_path} must be a JSON object, got {type(config).__name__}")

    logger.debug(f"Loaded configuration from {config_path}")
    return config
