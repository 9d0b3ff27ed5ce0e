"""Logging setup with verbosity levels"""

import logging
from typing import Optional


LOGGER_NAME = "roampub"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
ALLOWED_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def resolve_level(verbosity: int = 0, level: Optional[str] = None) -> int:
    """Map an explicit level name, or a -v count (0=WARNING, 1=INFO, 2+=DEBUG), to a level."""
    if level:
        level_upper = level.upper()
        if level_upper not in ALLOWED_LEVELS:
            raise ValueError(f"Invalid log level '{level}'. Must be one of: {sorted(ALLOWED_LEVELS)}")
        return getattr(logging, level_upper)
    if verbosity >= 2:
        return logging.DEBUG
    if verbosity >= 1:
        return logging.INFO
    return logging.WARNING


def setup_logging(verbosity: int = 0, level: Optional[str] = None) -> logging.Logger:
    """
    Configure the package logger with a single stderr handler.

    Args:
        verbosity: Number of -v flags given on the command line
        level: Optional explicit log level name; wins over verbosity

    Returns:
        The configured 'roampub' logger
    """
    log_level = resolve_level(verbosity, level)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(log_level)
    logger.handlers.clear()

    handler = logging.StreamHandler()
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)

    logger.debug(f"Log level: {logging.getLevelName(log_level)}")
    return logger
