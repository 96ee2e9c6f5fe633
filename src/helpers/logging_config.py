"""Centralized logging configuration for SQLGrid.

Every logger gets:
- a database handler (app_logs table of the app-state store)
- optional console output
SQLGRID_DEBUG=1 switches the default level to DEBUG.
"""

import logging
import os
from typing import Set

from db.logs import DatabaseHandler


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Names of loggers configured through setup_logger
_configured: Set[str] = set()


def setup_logger(
    name: str,
    level: int = logging.INFO,
    console_output: bool = True,
) -> logging.Logger:
    """Set up a logger with database and optional console handlers.

    Args:
        name: Logger name (typically __name__ from calling module)
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        console_output: Whether to also log to console

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Avoid duplicate handlers if logger already configured
    if logger.handlers:
        return logger

    logger.setLevel(level)
    logger.addHandler(DatabaseHandler(level))

    if console_output:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(console_handler)

    _configured.add(name)
    return logger


def debug_enabled() -> bool:
    return os.getenv("SQLGRID_DEBUG", "").lower() in {"1", "true", "yes", "on"}


def get_logger(name: str) -> logging.Logger:
    """Get or create a logger with default configuration."""
    level = logging.DEBUG if debug_enabled() else logging.INFO
    return setup_logger(name, level=level)


# Main application logger
app_logger = get_logger("sqlgrid")


def set_global_log_level(level: int):
    """Set log level for every logger configured through setup_logger."""
    for logger_name in _configured:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)
