"""The Printbuf class: a text-composition buffer.

Composes the three layers into one object:
- `BufferCoreMixin`: capacity, truncation, termination, growth
- `IndentTabstopMixin`: indent depth, tabstops, newline/tab/tab_rjust
- `FormattingMixin`: string, hex and numeric writers

Two ownership modes, fixed at construction:
- Owning (``Printbuf()``): starts with no storage and grows on demand
  through its Allocator.
- Borrowing (``Printbuf.extern(storage)``): writes into caller storage,
  never reallocates, and only truncates when full.

Writes never raise for lack of space. Truncation shows up as
``overflowed()``; failed growth sets the sticky ``allocation_failure``
flag, which callers may check once at the end of a sequence of writes.

Example:
    >>> with Printbuf() as buf:
    ...     buf.write_string("foo=")
    ...     buf.units_u64(42)
    ...     print(buf)
    foo=42

"""

from __future__ import annotations

from typing import TYPE_CHECKING

from printbuf.allocator import HeapAllocator
from printbuf.config import PrintbufConfig, get_printbuf_config
from printbuf.errors import PrintbufError
from printbuf.writers import FormattingMixin

if TYPE_CHECKING:
    from printbuf.protocols import Allocator


class Printbuf(FormattingMixin):
    """Text buffer with controlled truncation, indent and tabstops.

    Attributes:
        storage: Backing bytes; None until an owning buffer first grows
        size: Capacity in bytes, terminator slot included
        pos: Logical length written so far; may exceed size
        allocation_failure: Sticky; set when the buffer could not get room
        heap_allocated: True for owning buffers
        atomic: Nesting depth of atomic sections
        si_units: Scaling base for human-readable numbers
        human_readable_units: Whether units_*() scale their output
        suppress_indent_tabstop_handling: Treat newline/indented writes as plain bytes

    """

    def __init__(
        self,
        *,
        allocator: Allocator | None = None,
        config: PrintbufConfig | None = None,
    ) -> None:
        self.config = config or get_printbuf_config()
        self.allocator = allocator or HeapAllocator()
        self.storage: bytearray | memoryview | None = None
        self.size = 0
        self.heap_allocated = True
        self._closed = False

        self.pos = 0
        self.last_newline = 0
        self.last_field = 0
        self.allocation_failure = False
        self.atomic = 0

        self.indent = 0
        self._tabstops: list[int] = []
        self.cur_tabstop = 0
        self.has_indent_or_tabstops = False
        self.suppress_indent_tabstop_handling = False

        self.si_units = self.config.si_units
        self.human_readable_units = self.config.human_readable_units

    @classmethod
    def extern(
        cls,
        storage: bytearray | memoryview,
        size: int | None = None,
        *,
        config: PrintbufConfig | None = None,
    ) -> Printbuf:
        """Create a buffer that writes into caller-owned storage.

        Args:
            storage: Writable bytes to fill; never reallocated or released
            size: Capacity to use (defaults to ``len(storage)``)
            config: Overrides the context config

        Raises:
            PrintbufError: If storage is read-only or shorter than size
        """
        if isinstance(storage, memoryview) and storage.readonly:
            raise PrintbufError("external storage must be writable")
        if size is None:
            size = len(storage)
        if not 0 <= size <= len(storage):
            raise PrintbufError(
                f"size {size} does not fit external storage of {len(storage)} bytes"
            )
        buf = cls(config=config)
        buf.storage = storage
        buf.size = size
        buf.heap_allocated = False
        if size:
            storage[0] = 0
        return buf

    def __enter__(self) -> Printbuf:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        mode = "heap" if self.heap_allocated else "extern"
        return (
            f"Printbuf({mode}, pos={self.pos}, size={self.size}, "
            f"allocation_failure={self.allocation_failure})"
        )


__all__ = ["Printbuf"]
