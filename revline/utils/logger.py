"""Logging utility."""

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

# All module loggers live under this name (revline.core.reverse_reader, ...)
ROOT_LOGGER_NAME = "revline"

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logger(
    name: str = ROOT_LOGGER_NAME,
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 3
) -> logging.Logger:
    """
    Set up a logger with console and optional rotating file output.

    Calling it again for the same name only updates the level; handlers
    are attached once.

    Args:
        name: Logger name
        log_level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file
        max_bytes: Size at which the log file is rotated
        backup_count: Number of rotated files to keep

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    level = getattr(logging, log_level.upper(), logging.INFO)
    logger.setLevel(level)

    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(level)
        return logger

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8"
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a child of the package logger, e.g. ``get_logger("api")``."""
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


# Application logger instance
app_logger: Optional[logging.Logger] = None


def init_app_logger(settings) -> logging.Logger:
    """
    Initialize the package logger from settings.

    Module loggers propagate to it, so this configures the reader, the
    service and the API at once.
    """
    global app_logger

    app_logger = setup_logger(
        name=ROOT_LOGGER_NAME,
        log_level=settings.log_level,
        log_file=settings.log_file
    )

    return app_logger


def get_app_logger() -> logging.Logger:
    """Get the application logger, creating a default one if needed."""
    if app_logger is None:
        return setup_logger(ROOT_LOGGER_NAME)

    return app_logger
