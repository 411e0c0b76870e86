"""Indent and tabstop engine.

Tracks the structure of the current output line on top of the buffer
core, so that pretty-printers spread across several functions can produce
aligned, indented multi-line output.

Model:
- ``indent``: spaces emitted after every newline(). A line uses the
  indent in force when its first character is written: changing it while
  the line holds nothing but its indent resizes that indent in place.
- ``tabstops``: increasing columns, relative to the indent. tab() and
  tab_rjust() satisfy them in order; newline() rewinds the cursor.
- ``last_field``: where the current field began. tab_rjust() shifts the
  bytes written since then so the field ends on the tabstop.

Columns are measured in bytes from ``last_newline``.

Example:
    >>> buf = Printbuf()
    >>> buf.tabstop_push(8)
    True
    >>> buf.write_string("name")
    >>> buf.tab()
    >>> buf.write_string("42")
    >>> str(buf)
    'name    42'

"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from printbuf.core import BufferCoreMixin
from printbuf.errors import TabstopError
from printbuf.utils.logger import get_logger

if TYPE_CHECKING:
    from printbuf.protocols import PrintbufHost

logger = get_logger(__name__)


class IndentTabstopMixin(BufferCoreMixin):
    """Line-structure bookkeeping: indent depth and tabstop table.

    Required Host Attributes:
        last_newline, last_field, indent, _tabstops, cur_tabstop,
        has_indent_or_tabstops, suppress_indent_tabstop_handling
    """

    last_newline: int
    last_field: int
    indent: int
    _tabstops: list[int]
    cur_tabstop: int
    has_indent_or_tabstops: bool
    suppress_indent_tabstop_handling: bool

    def _update_tracking(self) -> None:
        self.has_indent_or_tabstops = bool(self.indent or self._tabstops)

    @property
    def column(self) -> int:
        """Current column on the line being written."""
        return self.pos - self.last_newline

    # =========================================================================
    # Indent
    # =========================================================================

    def _line_is_indent_only(self) -> bool:
        # The first line never carries an indent, so only lines after a break count
        return (
            self.last_newline > 0
            and not self.suppress_indent_tabstop_handling
            and self.pos == self.last_field == self.last_newline + self.indent
        )

    def indent_add(self, n: int) -> None:
        """Deepen the indent by ``n`` spaces.

        Applies from the next line on, or to the current line if nothing
        but its indent has been written yet.
        """
        if n < 0:
            raise ValueError(f"indent must be non-negative, got {n}")
        pad_current = self._line_is_indent_only()
        self.indent += n
        self._update_tracking()
        if pad_current and n:
            self.write_repeated_char(" ", n)
            self.last_field = self.pos

    def indent_sub(self, n: int) -> None:
        """Reduce the indent, clamping at zero.

        A line holding only its indent is shortened to the new depth.
        """
        if n < 0:
            raise ValueError(f"indent must be non-negative, got {n}")
        if n > self.indent:
            logger.warning("indent_sub(%d) exceeds current indent %d", n, self.indent)
            n = self.indent
        if n and self._line_is_indent_only():
            self.pos -= n
            self.last_field = self.pos
            self.finalize_terminator()
        self.indent -= n
        self._update_tracking()

    @contextmanager
    def indent_section(self, n: int) -> Iterator[None]:
        """Indent lines started inside the block by ``n`` extra spaces."""
        self.indent_add(n)
        try:
            yield
        finally:
            self.indent_sub(n)

    # =========================================================================
    # Tabstop table
    # =========================================================================

    @property
    def tabstops(self) -> tuple[int, ...]:
        """Registered tabstop columns, relative to the indent."""
        return tuple(self._tabstops)

    def _reject_tabstop(self, column: int, reason: str) -> bool:
        if self.config.strict_tabstops:
            raise TabstopError(column, reason)
        logger.warning("Tabstop at column %d rejected: %s", column, reason)
        return False

    def tabstop_push(self, column: int) -> bool:
        """Register the next tabstop.

        Args:
            column: Column relative to the indent; must exceed the last tabstop

        Returns:
            True if registered. False if the table is full or the column does
            not increase; state is left unchanged.

        Raises:
            TabstopError: Instead of returning False, when config.strict_tabstops
        """
        if len(self._tabstops) >= self.config.max_tabstops:
            return self._reject_tabstop(
                column, f"limit of {self.config.max_tabstops} tabstops reached"
            )
        if column < 0:
            return self._reject_tabstop(column, "column must be non-negative")
        if self._tabstops and column <= self._tabstops[-1]:
            return self._reject_tabstop(
                column, f"not greater than previous tabstop {self._tabstops[-1]}"
            )
        self._tabstops.append(column)
        self._update_tracking()
        return True

    def tabstop_pop(self) -> None:
        """Drop the most recently pushed tabstop, if any."""
        if self._tabstops:
            self._tabstops.pop()
        self.cur_tabstop = min(self.cur_tabstop, len(self._tabstops))
        self._update_tracking()

    def tabstops_reset(self) -> None:
        """Forget all tabstops, e.g. when starting a new section of output."""
        self._tabstops.clear()
        self.cur_tabstop = 0
        self._update_tracking()

    def tabstop_get(self, i: int) -> int:
        """Absolute column of tabstop ``i`` (indent included).

        Raises:
            IndexError: If fewer than ``i + 1`` tabstops are registered
        """
        if not 0 <= i < len(self._tabstops):
            raise IndexError(f"tabstop {i} not registered ({len(self._tabstops)} set)")
        return self.indent + self._tabstops[i]

    def tabstop_pending(self) -> bool:
        """True while the cursor has a tabstop left to satisfy on this line."""
        return self.cur_tabstop < len(self._tabstops)

    # =========================================================================
    # Line structure
    # =========================================================================

    def _tracking(self) -> bool:
        return self.has_indent_or_tabstops and not self.suppress_indent_tabstop_handling

    def newline(self) -> None:
        """End the line; the next one starts at the current indent."""
        indent = self.indent if self._tracking() else 0
        self.ensure_room(1 + indent)
        self._store(b"\n")
        self.last_newline = self.pos
        if indent:
            self._store(b" " * indent)
        self.finalize_terminator()
        self.last_field = self.pos
        self.cur_tabstop = 0

    def tab(self) -> None:
        """Pad with spaces up to the next tabstop.

        Never moves backwards: if the line is already past the tabstop,
        nothing is written, but the cursor still advances.
        """
        if not self.tabstop_pending():
            return
        pad = self.tabstop_get(self.cur_tabstop) - self.column
        if pad > 0:
            self.write_repeated_char(" ", pad)
        self.last_field = self.pos
        self.cur_tabstop += 1

    def tab_rjust(self) -> None:
        """Right-justify the current field against the next tabstop.

        Shifts the bytes written since the last field boundary forward so
        the field ends exactly on the tabstop, filling the gap with spaces.
        A field already past the tabstop is left as is.
        """
        if not self.tabstop_pending():
            return
        pad = self.tabstop_get(self.cur_tabstop) - self.column
        if pad > 0:
            self.ensure_room(pad)
            _shift_field(self, pad)
            self.pos += pad
            self.finalize_terminator()
        self.last_field = self.pos
        self.cur_tabstop += 1

    def reset(self) -> None:
        """Rewind to empty, clearing indent and tabstops as well."""
        super().reset()
        self.last_newline = 0
        self.last_field = 0
        self.indent = 0
        self._tabstops.clear()
        self.cur_tabstop = 0
        self._update_tracking()


def _shift_field(buf: PrintbufHost, pad: int) -> None:
    """Move the stored part of the current field ``pad`` bytes later.

    Only bytes below the terminator slot are touched. The source range is
    snapshotted before it is written back, so the overlapping move cannot
    clobber bytes it has yet to copy.
    """
    limit = buf.size - 1  # first byte that must stay free for the terminator
    start = buf.last_field
    if start >= limit:
        return
    end = min(buf.pos, limit)
    dest = start + pad
    if dest < limit:
        count = min(end - start, limit - dest)
        if count > 0:
            buf.storage[dest : dest + count] = bytes(buf.storage[start : start + count])
    fill_end = min(dest, limit)
    buf.storage[start:fill_end] = b" " * (fill_end - start)
