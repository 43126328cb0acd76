"""Structured logging for bulk-db.

Events are rendered as JSON by structlog and handed to the standard library
``bulk_db`` logger hierarchy. Nothing global is touched: structlog is not
configured process-wide, and handlers are only ever attached to the
``bulk_db`` logger, never to the root logger.

The ``bulk_db`` logger is set up on the first emitted event, from
bulk_db.config.settings:
- LOG_LEVEL: level of the ``bulk_db`` logger, unless the host application
  already set one. Default: INFO
- LOG_TO_FILE: also write to a daily rotated file. Default: disabled
- LOG_FILE_DIR: directory for log files. Default: logs/

A stdout handler is attached only when the root logger has no handlers, so an
application that configures logging itself gets the events through its own
handlers and without duplicates.

Usage:
    >>> from bulk_db.utils.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("bulk.operator.flushed", table='"users"', operations=12)
"""

import logging
import os
import re
import sys
from datetime import datetime
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any, Dict, List, MutableMapping

import structlog
from pydantic import ValidationError
from structlog.types import EventDict, Processor

from bulk_db.config import get_settings

PACKAGE_LOGGER = "bulk_db"

# Sensitive key patterns for sanitization
SENSITIVE_PATTERNS = [
    re.compile(r".*password.*", re.IGNORECASE),
    re.compile(r".*token.*", re.IGNORECASE),
    re.compile(r".*secret.*", re.IGNORECASE),
    re.compile(r"^DATABASE_URL$", re.IGNORECASE),
]

REDACTED_VALUE = "[REDACTED]"

_configured = False


def sanitize_for_logging(data: Dict[str, Any]) -> Dict[str, Any]:
    """Redact sensitive values from a dictionary before logging.

    Args:
        data: Dictionary that may contain sensitive data

    Returns:
        New dictionary with sensitive values replaced by [REDACTED]

    Example:
        >>> sanitize_for_logging({"password": "secret123", "user": "admin"})
        {'password': '[REDACTED]', 'user': 'admin'}
    """
    sanitized: Dict[str, Any] = {}
    for key, value in data.items():
        if any(pattern.match(key) for pattern in SENSITIVE_PATTERNS):
            sanitized[key] = REDACTED_VALUE
        elif isinstance(value, dict):
            sanitized[key] = sanitize_for_logging(value)
        else:
            sanitized[key] = value
    return sanitized


def sanitization_processor(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> MutableMapping[str, Any]:
    """Structlog processor that redacts sensitive fields in event_dict."""
    return sanitize_for_logging(dict(event_dict))


def _ensure_configured(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Set up the ``bulk_db`` logger before the first event is delivered."""
    if not _configured:
        configure_logging()
    return event_dict


def _get_log_level() -> int:
    """Get log level from settings, falling back to the environment."""
    try:
        level_name = get_settings().LOG_LEVEL
    except ValidationError:
        level_name = os.getenv("LOG_LEVEL", "INFO")

    return getattr(logging, level_name.upper(), logging.INFO)


def _should_log_to_file() -> bool:
    """Check if file logging is enabled in settings."""
    try:
        return get_settings().LOG_TO_FILE
    except ValidationError:
        return os.getenv("LOG_TO_FILE", "").lower() in ("1", "true", "yes")


def _get_log_file_path() -> Path:
    """Get the log file path with date-based naming."""
    try:
        log_dir = Path(get_settings().LOG_FILE_DIR)
    except ValidationError:
        log_dir = Path(os.getenv("LOG_FILE_DIR", "logs"))
    log_dir.mkdir(parents=True, exist_ok=True)

    # Format: bulk-db-YYYYMMDD.log
    date_str = datetime.now().strftime("%Y%m%d")
    return log_dir / f"bulk-db-{date_str}.log"


def _attach(package_logger: logging.Logger, handler: logging.Handler) -> None:
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler._bulk_db_handler = True  # type: ignore[attr-defined]
    package_logger.addHandler(handler)


def _detach_handlers(package_logger: logging.Logger) -> None:
    for handler in list(package_logger.handlers):
        if getattr(handler, "_bulk_db_handler", False):
            package_logger.removeHandler(handler)
            handler.close()


def configure_logging(force: bool = False) -> logging.Logger:
    """Attach handlers and a level to the ``bulk_db`` logger.

    Runs once; later calls are no-ops unless ``force`` is set, in which case
    the handlers added by a previous call are replaced.

    Returns:
        The ``bulk_db`` stdlib logger
    """
    global _configured

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if _configured and not force:
        return package_logger

    _detach_handlers(package_logger)

    if package_logger.level == logging.NOTSET:
        package_logger.setLevel(_get_log_level())

    if not logging.getLogger().handlers:
        _attach(package_logger, logging.StreamHandler(sys.stdout))

    if _should_log_to_file():
        _attach(
            package_logger,
            TimedRotatingFileHandler(
                filename=str(_get_log_file_path()),
                when="midnight",
                interval=1,
                backupCount=30,  # 30-day retention
                encoding="utf-8",
            ),
        )

    _configured = True
    return package_logger


_PROCESSORS: List[Processor] = [
    _ensure_configured,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    sanitization_processor,
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.JSONRenderer(),
]


def get_logger(name: str) -> Any:
    """Get a structlog BoundLogger over the stdlib logger ``name``.

    Args:
        name: Logger name (typically __name__ of the calling module)

    Returns:
        A structlog BoundLogger configured with JSON rendering and sanitization
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
    )


def bind_context(name: str = PACKAGE_LOGGER, /, **kwargs: Any) -> Any:
    """Create a logger with bound context fields.

    Example:
        >>> logger = bind_context(__name__, table='"users"', operation="insert")
        >>> logger.info("bulk.operator.flushed", operations=3)
    """
    return get_logger(name).bind(**kwargs)
