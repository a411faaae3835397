"""Centralized logging configuration for the application."""

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-30s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Configure and return the application logger.

    Every record under the ``craftfunds`` namespace goes to stdout with a
    timestamp, level and module name.  Calling this more than once only
    updates the level.

    Args:
        level: The log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).

    Returns:
        The configured root application logger.
    """
    logger = logging.getLogger("craftfunds")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)

    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a child logger under the craftfunds namespace.

    Usage:
        from craftfunds.core.logging import get_logger
        logger = get_logger(__name__)
        logger.info("Building funding report")

    Args:
        name: Usually __name__ of the calling module.

    Returns:
        A child logger with the given name.
    """
    if name.startswith("craftfunds."):
        return logging.getLogger(name)
    return logging.getLogger(f"craftfunds.{name}")
