"""Utility modules for printbuf.

Provides:
- logger: get_logger for namespaced logging
"""

from printbuf.utils.logger import get_logger

__all__ = [
    "get_logger",
]
