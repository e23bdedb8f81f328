"""Logging configuration module for environment-aware setup.

Sets up the root logger from application settings:
- Development / local: detailed colored console output
- Staging: structured console output, optional rotating file
- Production: JSON console output, quieter third-party loggers

A ``CorrelationIdFilter`` is attached to every handler when
``LOG_CORRELATION_ID`` is enabled; the request middleware feeds it through
``set_correlation_id``.
"""

import contextvars
import logging
import uuid
from typing import List

from ..config.settings import EnvironmentOption, get_settings
from .handlers import (
    create_console_handler,
    create_file_handler,
    create_null_handler,
)

correlation_id_var: contextvars.ContextVar[str] = contextvars.ContextVar("correlation_id")


def setup_logging_configuration() -> None:
    """Set up logging configuration based on application settings.

    Clears any handlers already on the root logger, installs the handlers
    for the current environment and applies the configured level. Called
    once, lazily, by the logger factory.
    """
    settings = get_settings()

    logging.getLogger().handlers.clear()

    if settings.ENVIRONMENT == EnvironmentOption.STAGING:
        handlers = _staging_handlers(settings)
    elif settings.ENVIRONMENT == EnvironmentOption.PRODUCTION:
        handlers = _production_handlers(settings)
    else:
        handlers = _development_handlers(settings)

    root_logger = logging.getLogger()
    for handler in handlers:
        if settings.LOG_CORRELATION_ID:
            handler.addFilter(CorrelationIdFilter())
        root_logger.addHandler(handler)

    root_logger.setLevel(settings.LOG_LEVEL_INT)

    if settings.ENVIRONMENT == EnvironmentOption.PRODUCTION:
        _configure_noisy_loggers()


def _file_handler(settings) -> logging.Handler:
    return create_file_handler(
        filepath=settings.LOG_FILE_PATH,
        format_type="structured",
        level=logging.DEBUG,
        max_bytes=settings.LOG_FILE_MAX_SIZE,
        backup_count=settings.LOG_FILE_BACKUP_COUNT,
    )


def _development_handlers(settings) -> List[logging.Handler]:
    """Colored, detailed console output; DEBUG when verbose mode is on."""
    handlers: List[logging.Handler] = []

    if settings.LOG_CONSOLE_ENABLED:
        console_level = logging.DEBUG if settings.LOG_DEVELOPMENT_VERBOSE else settings.LOG_LEVEL_INT
        handlers.append(create_console_handler(format_type="detailed", level=console_level, use_colors=True))

    if settings.LOG_FILE_ENABLED:
        handlers.append(_file_handler(settings))

    return handlers


def _staging_handlers(settings) -> List[logging.Handler]:
    """Structured console output for machine parsing."""
    handlers: List[logging.Handler] = []

    if settings.LOG_CONSOLE_ENABLED:
        handlers.append(
            create_console_handler(format_type=settings.LOG_FORMAT, level=settings.LOG_LEVEL_INT, use_colors=False)
        )

    if settings.LOG_FILE_ENABLED:
        handlers.append(_file_handler(settings))

    return handlers


def _production_handlers(settings) -> List[logging.Handler]:
    """JSON console output for log aggregation."""
    handlers: List[logging.Handler] = []

    if settings.LOG_CONSOLE_ENABLED:
        console_level = logging.WARNING if settings.LOG_PRODUCTION_OPTIMIZE else settings.LOG_LEVEL_INT
        handlers.append(create_console_handler(format_type="json", level=console_level, use_colors=False))

    if settings.LOG_FILE_ENABLED:
        handlers.append(_file_handler(settings))

    return handlers


def _configure_noisy_loggers() -> None:
    """Quiet third-party loggers that are verbose at INFO."""
    noisy_loggers = {
        "asyncpg": logging.WARNING,
        "aiosqlite": logging.WARNING,
        "sqlalchemy.engine": logging.WARNING,
        "sqlalchemy.dialects": logging.WARNING,
        "sqlalchemy.pool": logging.WARNING,
        "uvicorn.access": logging.WARNING,
    }

    for logger_name, level in noisy_loggers.items():
        logging.getLogger(logger_name).setLevel(level)


def configure_testing_logging() -> None:
    """Discard log output below ERROR; used by the test suite."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(create_null_handler())
    root_logger.setLevel(logging.ERROR)

    for logger_name in ("sqlalchemy.engine", "aiosqlite"):
        logging.getLogger(logger_name).setLevel(logging.ERROR)


def get_configured_logger(name: str) -> logging.Logger:
    """Get a logger that inherits the configured root handlers.

    Args:
        name: The name for the logger, typically __name__

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)


class CorrelationIdFilter(logging.Filter):
    """Logging filter that stamps each record with the current correlation ID."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Add correlation ID to log record.

        Args:
            record: Log record to modify

        Returns:
            True to allow the record to be processed
        """
        record.correlation_id = get_correlation_id() or "no-correlation"
        return True


def set_correlation_id(correlation_id: str) -> contextvars.Token:
    """Set correlation ID in context for current request.

    Args:
        correlation_id: Unique identifier for request tracing

    Returns:
        Token that restores the previous value via ``reset_correlation_id``
    """
    return correlation_id_var.set(correlation_id)


def reset_correlation_id(token: contextvars.Token) -> None:
    """Restore the correlation ID that was active before ``set_correlation_id``."""
    correlation_id_var.reset(token)


def get_correlation_id() -> str | None:
    """Get current correlation ID from context.

    Returns:
        Current correlation ID or None if not set
    """
    try:
        return correlation_id_var.get()
    except LookupError:
        return None


def generate_correlation_id() -> str:
    """Generate a new UUID-based correlation ID."""
    return str(uuid.uuid4())
