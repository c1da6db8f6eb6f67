"""Minimal logging utilities for fsmatch.

Provides a simple get_logger function that wraps the standard library logging.
The library never installs handlers; configure logging in the application.

Example:
    >>> from fsmatch.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Built machine with %d states", 3)
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "fsmatch." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'fsmatch.mymodule'
    """
    # Ensure fsmatch prefix for consistent namespacing
    if not (name == "fsmatch" or name.startswith("fsmatch.")):
        name = f"fsmatch.{name}"
    return logging.getLogger(name)
