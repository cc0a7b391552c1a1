"""Minimal logging utilities for orgstream.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from orgstream.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Implicitly closing drawer")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "orgstream." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("machine")
        >>> logger.name
        'orgstream.machine'
    """
    if not (name == "orgstream" or name.startswith("orgstream.")):
        name = f"orgstream.{name}"
    return logging.getLogger(name)
