"""Logging configuration for seamcarve."""

import logging
import sys

from .config import Config


def setup_logging(level: str = Config.LOG_LEVEL) -> logging.Logger:
    """Configure logging for the package.

    Args:
        level: Log level string (DEBUG, INFO, WARNING, ERROR).

    Returns:
        The root seamcarve logger.
    """
    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)-30s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger("seamcarve")
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Repeated calls must not stack handlers
    if not root_logger.handlers:
        root_logger.addHandler(handler)

    return root_logger
