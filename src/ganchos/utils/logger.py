"""Minimal logging utilities for Ganchos.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from ganchos.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Scanning references")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "ganchos." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'ganchos.mymodule'
    """
    if not (name == "ganchos" or name.startswith("ganchos.")):
        name = f"ganchos.{name}"
    return logging.getLogger(name)
