"""
printbuf: text composition buffers with controlled truncation

Compose formatted text incrementally into a fixed caller-supplied buffer
or one that grows on demand, without pre-sizing output or unwinding on
allocation failure. Supports indentation, tab-aligned and right-justified
columns, hex digits and human-readable quantities.

Quick Start:
    >>> from printbuf import Printbuf
    >>> buf = Printbuf()
    >>> buf.tabstop_push(12)
    True
    >>> buf.write_string("capacity")
    >>> buf.tab()
    >>> buf.human_readable_u64(3 << 20)
    >>> str(buf)
    'capacity    3.0 MiB'

    >>> # Fixed storage: output is truncated, the true length is still known
    >>> storage = bytearray(8)
    >>> buf = Printbuf.extern(storage)
    >>> buf.write_string("hello, world")
    >>> bytes(storage)
    b'hello, \\x00'
    >>> buf.pos, buf.overflowed()
    (12, True)

Installation:
    pip install printbuf              # Zero runtime dependencies
    pip install printbuf[test]        # + pytest and hypothesis
"""

from printbuf.allocator import HeapAllocator
from printbuf.config import (
    PrintbufConfig,
    get_printbuf_config,
    printbuf_config_context,
    reset_printbuf_config,
    set_printbuf_config,
)
from printbuf.errors import PrintbufClosedError, PrintbufError, TabstopError
from printbuf.printbuf import Printbuf
from printbuf.protocols import Allocator
from printbuf.units import Units, human_readable, human_readable_signed

__version__ = "0.1.0"

__all__ = [
    "Allocator",
    "HeapAllocator",
    "Printbuf",
    "PrintbufClosedError",
    "PrintbufConfig",
    "PrintbufError",
    "TabstopError",
    "Units",
    "get_printbuf_config",
    "human_readable",
    "human_readable_signed",
    "printbuf_config_context",
    "reset_printbuf_config",
    "set_printbuf_config",
]
