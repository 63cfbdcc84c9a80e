"""Logging configuration for the Clockify client."""

import logging
import sys
from typing import TextIO

PACKAGE_LOGGER = "clockify_client"
LOG_PREFIX = "[clockify] "

_trace_handler: logging.Handler | None = None


def setup_logging(log_level: int = logging.INFO, stream: TextIO | None = None) -> None:
    """Configure logging for the command-line tool.

    Args:
        log_level: Logging level (e.g., logging.INFO, logging.DEBUG).
        stream: Stream for the console handler. Defaults to stderr.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove any existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(stream or sys.stderr)
    console_handler.setLevel(log_level)
    console_formatter = logging.Formatter(
        "%(name)s - %(levelname)s - %(message)s",
    )
    console_handler.setFormatter(console_formatter)
    root_logger.addHandler(console_handler)


def enable_log(stream: TextIO | None = None) -> None:
    """Write the client's diagnostic trace to ``stream`` (stderr by default).

    Affects every session that logs through the package logger. Calling it
    again replaces the previous stream.
    """
    global _trace_handler

    logger = logging.getLogger(PACKAGE_LOGGER)
    if _trace_handler is not None:
        logger.removeHandler(_trace_handler)

    _trace_handler = logging.StreamHandler(stream or sys.stderr)
    _trace_handler.setFormatter(
        logging.Formatter(LOG_PREFIX + "%(asctime)s %(message)s", datefmt="%Y/%m/%d %H:%M:%S")
    )
    logger.addHandler(_trace_handler)
    logger.setLevel(logging.DEBUG)


def disable_log() -> None:
    """Silence the client's diagnostic trace."""
    global _trace_handler

    logger = logging.getLogger(PACKAGE_LOGGER)
    if _trace_handler is not None:
        logger.removeHandler(_trace_handler)
        _trace_handler = None
    logger.setLevel(logging.CRITICAL + 1)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Logger name (typically __name__).

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)
