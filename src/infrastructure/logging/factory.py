"""Logger factory with lazy, settings-driven configuration.

``get_logger`` is the single entry point for obtaining loggers. The first
call configures the root logger from the application settings; later calls
just hand out named loggers that inherit that setup.
"""

import logging
from threading import Lock
from typing import Optional, Union

from ..config.settings import get_settings
from .config import get_configured_logger, setup_logging_configuration

_logging_configured = False
_configuration_lock = Lock()


def get_logger(name: Optional[str] = None, **extra_context) -> Union[logging.Logger, logging.LoggerAdapter]:
    """Get a properly configured logger.

    Args:
        name: Logger name, typically ``__name__``. Defaults to the package root.
        **extra_context: Additional context to include in every record.

    Returns:
        Configured logger instance ready for use.

    Example:
        ```python
        logger = get_logger(__name__)
        logger.info("AuthorService - list: Attempted Call")

        logger = get_logger(__name__, component="auth")
        logger.warning("alice failed to log in")  # record carries component=auth
        ```
    """
    _ensure_logging_configured()

    base_logger = get_configured_logger(name or "src")

    if extra_context:
        return logging.LoggerAdapter(base_logger, extra_context)
    return base_logger


def configure_logging() -> None:
    """Configure logging now instead of on the first ``get_logger`` call."""
    global _logging_configured

    with _configuration_lock:
        if not _logging_configured:
            setup_logging_configuration()
            _logging_configured = True

            settings = get_settings()
            logging.getLogger(__name__).debug(
                f"Logging configured for {settings.ENVIRONMENT.value} environment",
                extra={
                    "log_level": settings.LOG_LEVEL,
                    "log_format": settings.LOG_FORMAT,
                    "console_enabled": settings.LOG_CONSOLE_ENABLED,
                    "file_enabled": settings.LOG_FILE_ENABLED,
                },
            )


def _ensure_logging_configured() -> None:
    """Ensure logging is configured, calling setup if needed."""
    if not _logging_configured:
        configure_logging()
