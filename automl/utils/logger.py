"""
Logging Utility Module.

Provides centralized logging configuration for the whole package. Every
module asks for its logger through ``get_logger(__name__)`` so handlers and
formats stay consistent.
"""

import logging
import sys
from datetime import datetime

from automl.config.config import logging_config, LOGS_DIR

PACKAGE_LOGGER = "automl"


def setup_logger(
    name: str,
    level: str = None,
    log_to_file: bool = True,
    log_to_console: bool = True
) -> logging.Logger:
    """
    Set up and return a logger with file and/or console handlers.

    Args:
        name: Logger name (typically __name__ of the calling module)
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_to_file: Whether to log to file
        log_to_console: Whether to log to console

    Returns:
        Configured logger instance
    """
    level = level or logging_config.level

    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))

    # Prevent duplicate handlers
    if logger.handlers:
        return logger

    formatter = logging.Formatter(
        fmt=logging_config.format,
        datefmt=logging_config.date_format
    )

    if log_to_file:
        LOGS_DIR.mkdir(parents=True, exist_ok=True)
        log_file = LOGS_DIR / f"{datetime.now().strftime('%Y%m%d')}_{logging_config.log_file}"
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(getattr(logging, level.upper()))
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if log_to_console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(getattr(logging, level.upper()))
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get or create a module logger.

    Module loggers carry no console handler of their own; records propagate
    to the ``automl`` package logger, which ``enable_console_logging``
    configures. File output follows ``logging_config.log_to_file``.
    """
    return setup_logger(name, log_to_file=logging_config.log_to_file, log_to_console=False)


def enable_console_logging(level: str = None) -> logging.Logger:
    """Attach a stderr handler to the package logger (once)."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    level = level or logging_config.level
    logger.setLevel(getattr(logging, level.upper()))
    if not any(getattr(handler, "_automl_console", False) for handler in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(
            fmt=logging_config.format,
            datefmt=logging_config.date_format
        ))
        handler._automl_console = True
        logger.addHandler(handler)
    return logger
