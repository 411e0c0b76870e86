"""Protocols defining the printbuf mixin contracts.

These protocols formalize the implicit contracts between the layers that
make up Printbuf. Each mixin documents the host attributes it relies on;
this module turns those requirements into type-checkable Protocol classes.

Usage:
    Helpers that work across layer boundaries annotate the buffer
    argument as the protocol they require::

        def _shift_field(buf: PrintbufHost, pad: int) -> None:
            limit = buf.size - 1  # type-checked via PrintbufHost
            ...

Thread Safety:
    Protocols are purely structural, with no runtime overhead.
"""

from typing import Protocol, runtime_checkable

from printbuf.config import PrintbufConfig
from printbuf.units import Units


@runtime_checkable
class Allocator(Protocol):
    """Contract for the memory source behind an owning buffer.

    ``realloc`` returns a new bytearray of exactly ``new_size`` bytes whose
    prefix holds the contents of ``old`` (when given), or None when the
    allocation cannot be satisfied. ``atomic`` is True while the buffer is
    inside an atomic section, where the allocation must not block.
    """

    def realloc(
        self, old: bytearray | None, new_size: int, *, atomic: bool = False
    ) -> bytearray | None: ...


@runtime_checkable
class BufferCoreHost(Protocol):
    """Contract for capacity, position and termination.

    Provided by: BufferCoreMixin
    Required by: IndentTabstopMixin, FormattingMixin
    """

    storage: bytearray | memoryview | None
    size: int
    pos: int
    allocation_failure: bool
    heap_allocated: bool
    config: PrintbufConfig

    def ensure_room(self, n: int) -> bool: ...
    def remaining_for_terminator(self) -> int: ...
    def finalize_terminator(self) -> None: ...
    def write_bytes(self, data: bytes | bytearray | memoryview) -> None: ...
    def write_char(self, c: str | int) -> None: ...
    def write_repeated_char(self, c: str | int, n: int) -> None: ...


@runtime_checkable
class PrintbufHost(BufferCoreHost, Protocol):
    """Contract for the full buffer, as seen by the formatting helpers.

    Provided by: IndentTabstopMixin on top of BufferCoreMixin
    Required by: FormattingMixin
    """

    last_newline: int
    last_field: int
    indent: int
    cur_tabstop: int
    si_units: Units
    human_readable_units: bool
    has_indent_or_tabstops: bool
    suppress_indent_tabstop_handling: bool

    def tabstop_pending(self) -> bool: ...
    def newline(self) -> None: ...
    def tab(self) -> None: ...
    def tab_rjust(self) -> None: ...
