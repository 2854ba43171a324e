"""Minimal logging utilities for Spoonmark.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from spoonmark.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Parsing document")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "spoonmark." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'spoonmark.mymodule'
    """
    if not (name == "spoonmark" or name.startswith("spoonmark.")):
        name = f"spoonmark.{name}"
    return logging.getLogger(name)
