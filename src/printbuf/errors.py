"""Exception classes for printbuf.

Write operations never raise for truncation or allocation failure; those
degrade to observable buffer state. The exceptions here cover caller
programming errors only.
"""

from __future__ import annotations


class PrintbufError(Exception):
    """Base exception for all printbuf errors.
    
    Subclass this for specific error categories.
    """

    pass


class TabstopError(PrintbufError):
    """A tabstop push was rejected.
    
    Raised only when the buffer's config has ``strict_tabstops`` set;
    otherwise ``tabstop_push()`` reports the rejection by returning False.
    """

    def __init__(self, column: int, reason: str) -> None:
        """Initialize tabstop error.
        
        Args:
            column: The column that was pushed
            reason: Why the push was rejected
        """
        self.column = column
        self.reason = reason
        super().__init__(f"Tabstop at column {column} rejected: {reason}")


class PrintbufClosedError(PrintbufError):
    """Write attempted on a buffer whose owned storage was released."""

    def __init__(self) -> None:
        super().__init__("printbuf is closed; construct a new one to keep writing")
