"""Logging configuration for the application."""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from .config import get_config

LOGGER_NAMES = ("dashboard", "api", "error")


def setup_logger(
    name: str,
    log_file: Optional[str] = None,
    level: Optional[str] = None
) -> logging.Logger:
    """
    Setup a logger with a stderr handler and an optional rotating file.

    Args:
        name: Logger name
        log_file: Optional log file path (ignored in production)
        level: Optional log level (overrides config)

    Returns:
        Configured logger instance
    """
    config = get_config()

    logger = logging.getLogger(name)
    logger.setLevel((level or config.logging.level).upper())

    # Already configured by an earlier call
    if logger.handlers:
        return logger

    formatter = logging.Formatter(config.logging.format)

    # stderr keeps log lines out of the CLI's stdout tables.
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(config.logging.console_level.upper())
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file and not config.is_production:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=config.logging.max_bytes,
            backupCount=config.logging.backup_count
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def enable_verbose():
    """Send DEBUG output of every application logger to stderr."""
    config = get_config()
    config.logging.level = "DEBUG"
    config.logging.console_level = "DEBUG"

    # Loggers created before this call keep their handlers; lower them too.
    for name in LOGGER_NAMES:
        logger = logging.getLogger(name)
        if name != "error":
            logger.setLevel(logging.DEBUG)
        for handler in logger.handlers:
            if not isinstance(handler, RotatingFileHandler):
                handler.setLevel(logging.DEBUG)


def get_dashboard_logger() -> logging.Logger:
    """Get logger for dashboard queries and alerts."""
    return setup_logger("dashboard", get_config().logging.files.dashboard)


def get_api_logger() -> logging.Logger:
    """Get logger for backend HTTP calls."""
    return setup_logger("api", get_config().logging.files.api)


def get_error_logger() -> logging.Logger:
    return setup_logger("error", get_config().logging.files.error, "ERROR")
