"""Default allocator for owning buffers.

HeapAllocator hands out plain bytearrays. It can be capped, separately for
atomic sections, which lets callers bound how much memory diagnostic
output may consume and exercise the allocation-failure path.

Example:
    >>> buf = Printbuf(allocator=HeapAllocator(max_size=128))
    >>> buf.write_string("x" * 500)
    >>> buf.allocation_failure
    True

"""

from __future__ import annotations

from printbuf.utils.logger import get_logger

logger = get_logger(__name__)


class HeapAllocator:
    """Allocator backed by fresh bytearrays.

    Each realloc copies into a new bytearray rather than resizing in place,
    so memoryviews taken from the previous storage remain valid (but stale)
    and never block growth.

    Attributes:
        max_size: Largest allocation granted outside atomic sections (None = unbounded)
        atomic_max_size: Largest allocation granted inside atomic sections
            (None = same as max_size)

    """

    __slots__ = ("max_size", "atomic_max_size")

    def __init__(
        self, max_size: int | None = None, atomic_max_size: int | None = None
    ) -> None:
        self.max_size = max_size
        self.atomic_max_size = atomic_max_size

    def limit(self, *, atomic: bool = False) -> int | None:
        """Return the size cap that applies in the given mode."""
        if atomic and self.atomic_max_size is not None:
            return self.atomic_max_size
        return self.max_size

    def realloc(
        self, old: bytearray | None, new_size: int, *, atomic: bool = False
    ) -> bytearray | None:
        cap = self.limit(atomic=atomic)
        if cap is not None and new_size > cap:
            logger.debug(
                "Refusing %d-byte allocation (limit %d, atomic=%s)", new_size, cap, atomic
            )
            return None
        try:
            new = bytearray(new_size)
        except MemoryError:
            return None
        if old:
            keep = min(len(old), new_size)
            new[:keep] = old[:keep]
        return new

    def __repr__(self) -> str:
        return f"HeapAllocator(max_size={self.max_size}, atomic_max_size={self.atomic_max_size})"


__all__ = ["HeapAllocator"]
