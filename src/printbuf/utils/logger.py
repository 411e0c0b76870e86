"""Minimal logging utilities for printbuf.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from printbuf.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("printbuf grew from %d to %d bytes", 64, 128)
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "printbuf." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("core")
        >>> logger.name
        'printbuf.core'
    """
    if not (name == "printbuf" or name.startswith("printbuf.")):
        name = f"printbuf.{name}"
    return logging.getLogger(name)
