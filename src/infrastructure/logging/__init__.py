"""Centralized logging infrastructure for the Bookstore API.

Usage:
    ```python
    from src.infrastructure.logging import get_logger

    logger = get_logger(__name__)
    logger.info("Application started")
    ```
"""

from .config import (
    configure_testing_logging,
    generate_correlation_id,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
    setup_logging_configuration,
)
from .factory import configure_logging, get_logger

__all__ = [
    "get_logger",
    "configure_logging",
    "configure_testing_logging",
    "setup_logging_configuration",
    "generate_correlation_id",
    "get_correlation_id",
    "reset_correlation_id",
    "set_correlation_id",
]
