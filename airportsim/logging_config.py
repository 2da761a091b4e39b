"""Logging setup for the airportsim command line.

The package is silent by default (NullHandler on the ``airportsim`` logger).
``run_simulation.py`` attaches one handler, either from ``--log-level`` /
``--log-file`` or from the environment:

    AIRPORTSIM_LOGGING: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    AIRPORTSIM_LOG_FILE: Path to log file (enables rotating file logging)
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Union

__all__ = [
    "configure_from_env",
    "enable_console_logging",
    "enable_file_logging",
]

LOGGER_NAME = "airportsim"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"

MAX_LOG_BYTES = 5 * 1024 * 1024
LOG_BACKUPS = 3


def _install_handler(handler: logging.Handler, level: Union[str, int]) -> logging.Handler:
    """Make ``handler`` the only active handler of the package logger."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger(LOGGER_NAME)
    for old in list(logger.handlers):
        if not isinstance(old, logging.NullHandler):
            logger.removeHandler(old)
            old.close()

    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level)
    return handler


def enable_console_logging(level: Union[str, int] = "INFO") -> logging.StreamHandler:
    """Log to stderr, replacing any handler set up earlier."""
    return _install_handler(logging.StreamHandler(), level)


def enable_file_logging(path: Union[str, Path], level: Union[str, int] = "INFO") -> RotatingFileHandler:
    """
    Log to a size-rotated file, replacing any handler set up earlier.

    Args:
        path: Log file; missing parent directories are created
        level: Level name or logging constant

    Returns:
        The installed handler
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(path, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS)
    return _install_handler(handler, level)


def configure_from_env() -> None:
    """Apply AIRPORTSIM_LOGGING / AIRPORTSIM_LOG_FILE; no-op when unset."""
    level = os.environ.get("AIRPORTSIM_LOGGING")
    if not level:
        return

    log_file = os.environ.get("AIRPORTSIM_LOG_FILE")
    if log_file:
        enable_file_logging(log_file, level=level)
    else:
        enable_console_logging(level=level)
