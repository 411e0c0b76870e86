"""Buffer core: capacity, position, truncation, termination and growth.

Every writer in printbuf funnels through the primitives here, which share
one truncation policy: a write first asks for room, stores as many bytes
as fit before the terminator slot, then advances ``pos`` by the full
logical length. ``pos`` therefore always equals the length the output
would have had with unlimited space, and ``overflowed()`` reports whether
anything was dropped.

Required Host Attributes:
    storage, size, pos, allocation_failure, heap_allocated, atomic,
    allocator, config, _closed (all initialized by Printbuf.__init__)

Thread Safety:
    None. A buffer has a single logical writer.

"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from printbuf.errors import PrintbufClosedError, PrintbufError
from printbuf.utils.logger import get_logger

if TYPE_CHECKING:
    from printbuf.config import PrintbufConfig
    from printbuf.protocols import Allocator

logger = get_logger(__name__)


def roundup_pow_of_two(n: int) -> int:
    """Smallest power of two >= n (1 for n <= 1)."""
    return 1 << max(n - 1, 0).bit_length()


def as_byte(c: str | int) -> int:
    """Coerce a single ASCII character or an int 0..255 to a byte value."""
    if isinstance(c, str):
        if len(c) != 1 or ord(c) > 0x7F:
            raise ValueError(f"expected a single ASCII character, got {c!r}")
        return ord(c)
    if not 0 <= c <= 0xFF:
        raise ValueError(f"byte value {c} out of range 0..255")
    return c


class BufferCoreMixin:
    """Capacity tracking, controlled truncation and on-demand growth."""

    storage: bytearray | memoryview | None
    size: int
    pos: int
    allocation_failure: bool
    heap_allocated: bool
    atomic: int
    allocator: Allocator
    config: PrintbufConfig
    _closed: bool

    # =========================================================================
    # Capacity queries
    # =========================================================================

    def remaining_capacity(self) -> int:
        """Bytes left in the buffer, terminator slot included."""
        return self.size - self.pos if self.pos < self.size else 0

    def remaining_for_terminator(self) -> int:
        """Bytes that can still be stored, excluding the terminator slot."""
        return self.size - self.pos - 1 if self.pos < self.size else 0

    def overflowed(self) -> bool:
        """True if output was truncated."""
        return self.pos >= self.size

    def written_length(self) -> int:
        """Length of the stored content, excluding the terminator."""
        return min(self.pos, self.size - 1) if self.size else 0

    # =========================================================================
    # Growth
    # =========================================================================

    def ensure_room(self, n: int) -> bool:
        """Make sure ``n`` bytes fit before the terminator slot.

        Owning buffers grow to the next power of two above the required
        size (never below ``config.min_alloc``). Borrowing buffers cannot
        grow; a shortfall only marks ``allocation_failure``.

        Args:
            n: Bytes the caller is about to write

        Returns:
            True if the room is available. False means the write that follows
            will be truncated; the caller proceeds anyway.

        Raises:
            PrintbufClosedError: If the owned storage was released by close()
        """
        if self._closed:
            raise PrintbufClosedError()

        needed = self.pos + n + 1
        if needed <= self.size:
            return True

        if not self.heap_allocated:
            if n > 0:
                self.allocation_failure = True
            return False

        # No retries after a failure: content past the old size would have gaps
        if self.allocation_failure:
            return False

        new_size = roundup_pow_of_two(max(needed, self.config.min_alloc))
        storage = self.storage if isinstance(self.storage, bytearray) else None
        new = self.allocator.realloc(storage, new_size, atomic=self.atomic > 0)
        if new is None:
            self.allocation_failure = True
            logger.warning(
                "printbuf allocation of %d bytes failed (atomic=%s); output will be truncated",
                new_size,
                self.atomic > 0,
            )
            return False

        logger.debug("printbuf grew from %d to %d bytes", self.size, new_size)
        self.storage = new
        self.size = new_size
        return True

    # =========================================================================
    # Write primitives
    # =========================================================================

    def finalize_terminator(self) -> None:
        """Place the NUL terminator at its in-bounds offset.

        Idempotent. Grows an owning buffer if the terminator has no slot yet.
        """
        self.ensure_room(0)
        if self.pos < self.size:
            self.storage[self.pos] = 0
        elif self.size:
            self.storage[self.size - 1] = 0

    def _store(self, data: bytes | bytearray | memoryview) -> None:
        """Copy what fits and advance pos by the full length. No terminator."""
        n = len(data)
        fit = min(n, self.remaining_for_terminator())
        if fit:
            self.storage[self.pos : self.pos + fit] = data[:fit]
        self.pos += n

    def write_bytes(self, data: bytes | bytearray | memoryview) -> None:
        """Write raw bytes, truncating at capacity.

        ``pos`` always advances by ``len(data)``, whether or not the bytes
        were stored.
        """
        self.ensure_room(len(data))
        self._store(data)
        self.finalize_terminator()

    def write_char(self, c: str | int) -> None:
        """Write a single byte (ASCII character or int 0..255)."""
        byte = as_byte(c)
        self.ensure_room(1)
        if self.remaining_for_terminator():
            self.storage[self.pos] = byte
        self.pos += 1
        self.finalize_terminator()

    def write_repeated_char(self, c: str | int, n: int) -> None:
        """Write the same byte ``n`` times."""
        if n < 0:
            raise ValueError(f"repeat count must be non-negative, got {n}")
        byte = as_byte(c)
        self.ensure_room(n)
        self._store(bytes((byte,)) * n)
        self.finalize_terminator()

    # =========================================================================
    # Consumption
    # =========================================================================

    def as_bytes(self) -> bytes:
        """Copy of the stored content, without the terminator."""
        if self.storage is None:
            return b""
        return bytes(self.storage[: self.written_length()])

    def __str__(self) -> str:
        return self.as_bytes().decode("utf-8", errors="replace")

    def __len__(self) -> int:
        return self.written_length()

    def detach(self) -> bytearray:
        """Take ownership of the storage and return the buffer to empty.

        The returned bytearray holds the content followed by its terminator.
        The buffer forgets it; the next write allocates afresh.

        Raises:
            PrintbufError: If the storage is borrowed from the caller
        """
        if not self.heap_allocated:
            raise PrintbufError("cannot detach external storage; it belongs to the caller")
        if self._closed:
            raise PrintbufClosedError()

        self.finalize_terminator()
        if self.storage is None:
            storage = bytearray(1)
        else:
            storage = self.storage[: self.written_length() + 1]
        self.storage = None
        self.size = 0
        self.reset()
        return storage

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def reset(self) -> None:
        """Rewind to empty, keeping the allocation.

        Also clears ``allocation_failure``.
        """
        self.pos = 0
        self.allocation_failure = False
        if self.size:
            self.storage[0] = 0

    def close(self) -> None:
        """Release owned storage. Safe to call repeatedly; no-op when borrowing."""
        if not self.heap_allocated or self._closed:
            return
        self.storage = None
        self.size = 0
        self.pos = 0
        self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    # =========================================================================
    # Atomic sections
    # =========================================================================

    def atomic_inc(self) -> None:
        """Mark entry into a section where allocation must not block."""
        self.atomic += 1

    def atomic_dec(self) -> None:
        """Mark exit from an atomic section."""
        if self.atomic == 0:
            raise PrintbufError("atomic_dec() without matching atomic_inc()")
        self.atomic -= 1

    @contextmanager
    def atomic_section(self) -> Iterator[None]:
        """Context manager pairing atomic_inc() and atomic_dec()."""
        self.atomic_inc()
        try:
            yield
        finally:
            self.atomic_dec()
