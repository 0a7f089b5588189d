"""Universal debug/logging utility for musicsync.

Provides debug(), info(), warn() and error() functions for consistent logging.
Debug output is controlled by the MUSICSYNC_DEBUG environment variable.
Logs to stderr; can be extended to log to file if needed.
"""

import logging
import os
import sys
from typing import Optional

DEBUG_ON = os.getenv("MUSICSYNC_DEBUG", "0") == "1"

_logger: Optional[logging.Logger] = None


def setup_logger(level: Optional[int] = None) -> logging.Logger:
    """Configure and return the ``musicsync`` package logger.

    Args:
        level: Explicit level. Defaults to DEBUG when MUSICSYNC_DEBUG=1,
            ERROR otherwise so per-file logs stay out of interactive output.
    """
    global _logger
    logger = logging.getLogger("musicsync")
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("[%(levelname)s] %(asctime)s %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    for handler in logger.handlers:
        # stderr may have been swapped (CliRunner, pytest capture) since the last
        # call; setStream would flush the old, possibly closed, stream first
        if type(handler) is logging.StreamHandler:
            handler.stream = sys.stderr
    if level is None:
        level = logging.DEBUG if DEBUG_ON else logging.ERROR
    logger.setLevel(level)
    _logger = logger
    return logger


def _get_logger() -> logging.Logger:
    return _logger if _logger is not None else setup_logger()


def debug(msg: str) -> None:
    """Log a debug message (shown with MUSICSYNC_DEBUG=1 or --verbose)."""
    _get_logger().debug(msg)


def info(msg: str) -> None:
    """Log an info message."""
    _get_logger().info(msg)


def warn(msg: str) -> None:
    """Log a warning message."""
    _get_logger().warning(msg)


def error(msg: str) -> None:
    """Log an error message."""
    _get_logger().error(msg)
