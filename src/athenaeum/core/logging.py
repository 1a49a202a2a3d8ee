"""
Loguru configuration for the application.

This module configures loguru with:
- Automatic operation id in each log
- Configurable format from settings
"""

import sys
from typing import Any

from loguru import logger

from athenaeum.config import settings
from athenaeum.core.operation_context import operation_id_context


def add_operation_id(record: dict[str, Any]) -> bool:
    """
    Adds the operation_id to the log record.

    The operation_id is obtained from the current service call context,
    allowing tracking of logs from the same borrowing request.

    Args:
        record: Loguru record

    Returns:
        True to indicate that the filter passed
    """
    operation_id = operation_id_context.get()
    record["extra"]["operation_id"] = operation_id if operation_id else "N/A"
    return True


def configure_logger() -> None:
    """
    Configures loguru with application settings.

    This function:
    1. Removes default loguru handlers
    2. Adds handler to stderr with custom configuration
    3. Configures level, format, colorization, etc.
    """
    # Remove default configuration
    logger.remove()

    logger.add(
        sink=sys.stderr,
        level=settings.log_level.upper(),
        format=settings.log_format,
        filter=add_operation_id,
        colorize=settings.log_colorize,
        serialize=False,
        backtrace=True,
        diagnose=settings.debug,
        enqueue=settings.logger_enqueue,
    )


# Configure logger when importing the module
configure_logger()


__all__ = ["logger"]
