"""Logging setup for the cabletray command line tool.

Library modules only create module loggers with logging.getLogger(__name__).
The CLI calls setup_logging() once per invocation to attach a stderr
handler to the package logger, so JSON written to stdout stays parseable.
"""

from __future__ import annotations

import logging
import sys

PACKAGE_LOGGER = "cabletray"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%H:%M:%S"


def setup_logging(level: int = logging.WARNING) -> logging.Logger:
    """Attach a stderr handler to the package logger.

    Calling this again replaces the previous handler instead of adding a
    second one.

    Args:
        level: Threshold for the logger and its handler.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)

    logger.debug(f"Logging initialized at {logging.getLevelName(level)}")
    return logger
