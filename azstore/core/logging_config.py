"""
Logging infrastructure for azstore.

Provides structured logging with JSON formatting and redaction of credentials
that can show up in request URIs and headers (SAS signatures, account keys).
Handlers are attached to the ``azstore`` logger so that applications keep
control of the root logger.
"""

import logging
import logging.handlers
import json
import sys
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Optional
from contextvars import ContextVar

if TYPE_CHECKING:
    from .config_manager import LoggingConfig

LIBRARY_LOGGER = "azstore"

# Client request id of the request currently in flight
correlation_id: ContextVar[Optional[str]] = ContextVar('correlation_id', default=None)


class SensitiveDataFilter(logging.Filter):
    """Filter to redact credentials from log messages."""

    PATTERNS = [
        (re.compile(r'(Authorization:\s+)(?:SharedKey\s+|Bearer\s+)?\S+', re.IGNORECASE), r'\1***REDACTED***'),
        (re.compile(r'(x-ms-encryption-key:\s+)\S+', re.IGNORECASE), r'\1***REDACTED***'),
        (re.compile(r'(AccountKey=)[^;]+', re.IGNORECASE), r'\1***REDACTED***'),
        (re.compile(r'(SharedAccessSignature=)[^;&]+', re.IGNORECASE), r'\1***REDACTED***'),
        (re.compile(r'([?&]sig=)[^;&\s]+', re.IGNORECASE), r'\1***REDACTED***'),
    ]

    def filter(self, record: logging.LogRecord) -> bool:
        """Redact sensitive data from log record."""
        if isinstance(record.msg, str):
            for pattern, replacement in self.PATTERNS:
                record.msg = pattern.sub(replacement, record.msg)
        return True


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "module": record.name,
            "message": record.getMessage(),
        }

        if corr_id := correlation_id.get():
            log_data["client_request_id"] = corr_id

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "context"):
            log_data["context"] = record.context

        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable text formatter."""

    def __init__(self):
        fmt = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
        super().__init__(fmt=fmt, datefmt="%Y-%m-%d %H:%M:%S")


def setup_logging(
    level: str = "WARNING",
    format_type: str = "text",
    log_file: Optional[str] = None,
    rotation_size: str = "10MB",
    rotation_count: int = 5,
    module_levels: Optional[Dict[str, str]] = None
) -> logging.Logger:
    """
    Configure the ``azstore`` logger.

    Args:
        level: Level of the azstore logger (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_type: Log format ("json" or "text")
        log_file: Optional file path for log output
        rotation_size: Size limit for log rotation (e.g., "10MB")
        rotation_count: Number of rotated log files to keep
        module_levels: Optional dict of module-specific log levels
                      e.g., {"azstore.core.transport": "DEBUG"}

    Returns:
        The configured library logger
    """
    library_logger = logging.getLogger(LIBRARY_LOGGER)
    library_logger.setLevel(getattr(logging, level.upper()))
    library_logger.handlers.clear()
    library_logger.propagate = False

    formatter: logging.Formatter = JSONFormatter() if format_type == "json" else TextFormatter()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(SensitiveDataFilter())
    library_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            filename=log_file,
            maxBytes=_parse_size(rotation_size),
            backupCount=rotation_count,
            encoding='utf-8'
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        file_handler.addFilter(SensitiveDataFilter())
        library_logger.addHandler(file_handler)

    if module_levels:
        for module_name, module_level in module_levels.items():
            logging.getLogger(module_name).setLevel(getattr(logging, module_level.upper()))

    library_logger.debug(f"Logging configured: level={level}, format={format_type}")
    return library_logger


def configure_logging(config: "LoggingConfig") -> logging.Logger:
    """Apply a validated ``LoggingConfig``."""
    level = config.level.value if hasattr(config.level, "value") else str(config.level)
    return setup_logging(
        level=level,
        format_type=config.format,
        log_file=config.file,
        rotation_size=config.rotation_size,
        rotation_count=config.rotation_count,
        module_levels=config.module_levels,
    )


def _parse_size(size_str: str) -> int:
    """
    Parse size string to bytes.

    Args:
        size_str: Size string (e.g., "10MB", "1GB")

    Returns:
        Size in bytes
    """
    size_str = size_str.upper().strip()

    # Longer suffixes first so 'B' does not match 'MB'
    multipliers = [
        ('GB', 1024 ** 3),
        ('MB', 1024 ** 2),
        ('KB', 1024),
        ('B', 1),
    ]

    for suffix, multiplier in multipliers:
        if size_str.endswith(suffix):
            number = size_str[:-len(suffix)].strip()
            return int(float(number) * multiplier)

    return int(size_str)


def set_correlation_id(corr_id: str) -> None:
    """Set correlation ID for current context."""
    correlation_id.set(corr_id)


def clear_correlation_id() -> None:
    """Clear correlation ID from current context."""
    correlation_id.set(None)


def log_with_context(logger: logging.Logger, level: int, message: str, **context: Any) -> None:
    """
    Log a message with additional context.

    Args:
        logger: Logger instance
        level: Log level
        message: Log message
        **context: Additional context to include in log
    """
    extra = {"context": context} if context else {}
    logger.log(level, message, extra=extra)
