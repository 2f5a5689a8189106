"""Logging setup for applications that drive the physics engine."""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

LOGGER_NAME = "avatar_physics"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%H:%M:%S"


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """Attach console (and optionally file) handlers to the package logger.

    Calling this again replaces the handlers from the previous call.

    Args:
        level: Logging level for the logger and its handlers
        log_file: Optional path of a log file (overwritten)

    Returns:
        The configured package logger
    """
    package_logger = logging.getLogger(LOGGER_NAME)
    package_logger.setLevel(level)

    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)

    return package_logger
