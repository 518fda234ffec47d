"""Minimal logging utilities for ubbparse.

Provides a simple get_logger function that wraps the standard library logging.
The library never installs handlers; applications decide where records go.

Example:
    >>> from ubbparse.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Recovered from unclosed tag")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "ubbparse." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'ubbparse.mymodule'
    """
    if not (name == "ubbparse" or name.startswith("ubbparse.")):
        name = f"ubbparse.{name}"
    return logging.getLogger(name)
