"""Formatting helpers: strings, indented text, hex digits and units.

Built on the buffer core and the indent/tabstop engine. The indented
writers scan their input for control characters and route them through
the engine:

- ``\\n`` -> newline(), so every line picks up the current indent
- ``\\t`` -> tab(), while a tabstop is pending on the line
- ``\\r`` -> tab_rjust(), while a tabstop is pending on the line

Tabs and carriage returns with no pending tabstop are written literally.

Example:
    >>> buf = Printbuf()
    >>> buf.indent_add(2)
    >>> buf.write_string_indented("a\\nb")
    >>> str(buf)
    'a\\n  b'

"""

from __future__ import annotations

from typing import TYPE_CHECKING

from printbuf.tabstops import IndentTabstopMixin
from printbuf.units import check_s64, check_u64, human_readable, human_readable_signed

if TYPE_CHECKING:
    from printbuf.units import Units

_HEX_LOWER = b"0123456789abcdef"
_HEX_UPPER = b"0123456789ABCDEF"

# Bytes that the indented writers hand to the indent/tabstop engine
_CONTROL = frozenset(b"\n\t\r")


class FormattingMixin(IndentTabstopMixin):
    """Text, hex and numeric writers."""

    si_units: Units
    human_readable_units: bool

    def write_string(self, s: str) -> None:
        """Write ``s`` encoded as UTF-8."""
        self.write_bytes(s.encode("utf-8"))

    def write_bytes_indented(self, data: bytes | bytearray | memoryview) -> None:
        """Write bytes, honouring indent and tabstops at embedded control bytes.

        Line breaks always go through newline() so column tracking stays
        right for tabstops pushed later. Falls back to write_bytes() when
        indent/tabstop handling is suppressed, or when nothing is in effect
        and the input has no line break.
        """
        data = bytes(data)
        if self.suppress_indent_tabstop_handling or (
            not self.has_indent_or_tabstops and b"\n" not in data
        ):
            self.write_bytes(data)
            return

        start = 0
        for i, byte in enumerate(data):
            if byte not in _CONTROL:
                continue
            if byte == 0x0A:
                self.write_bytes(data[start:i])
                self.newline()
            elif self.tabstop_pending():
                self.write_bytes(data[start:i])
                if byte == 0x09:
                    self.tab()
                else:
                    self.tab_rjust()
            else:
                continue
            start = i + 1
        self.write_bytes(data[start:])

    def write_string_indented(self, s: str) -> None:
        """UTF-8 counterpart of write_bytes_indented()."""
        self.write_bytes_indented(s.encode("utf-8"))

    def printf(self, fmt: str, *args: object) -> None:
        """Write ``fmt % args``, with embedded newlines honouring the indent.

        Example:
            >>> buf.printf("%s=%d\\n", "count", 3)
        """
        self.write_string_indented(fmt % args if args else fmt)

    # =========================================================================
    # Hex
    # =========================================================================

    def _hex(self, byte: int, table: bytes) -> None:
        if not 0 <= byte <= 0xFF:
            raise ValueError(f"byte value {byte} out of range 0..255")
        self.write_bytes(bytes((table[byte >> 4], table[byte & 0x0F])))

    def hex_byte(self, byte: int) -> None:
        """Write ``byte`` as two lowercase hex digits."""
        self._hex(byte, _HEX_LOWER)

    def hex_byte_upper(self, byte: int) -> None:
        """Write ``byte`` as two uppercase hex digits."""
        self._hex(byte, _HEX_UPPER)

    # =========================================================================
    # Numbers
    # =========================================================================

    def human_readable_u64(self, value: int) -> None:
        """Write ``value`` scaled with a magnitude suffix, e.g. ``1.5 MiB``."""
        self.write_string(human_readable(value, self.si_units))

    def human_readable_s64(self, value: int) -> None:
        """Signed variant of human_readable_u64()."""
        self.write_string(human_readable_signed(value, self.si_units))

    def units_u64(self, value: int) -> None:
        """Write an unsigned quantity, scaled or raw per ``human_readable_units``.

        Raises:
            ValueError: If value does not fit in 64 unsigned bits
        """
        if self.human_readable_units:
            self.human_readable_u64(value)
        else:
            self.write_string(str(check_u64(value)))

    def units_s64(self, value: int) -> None:
        """Signed variant of units_u64()."""
        if self.human_readable_units:
            self.human_readable_s64(value)
        else:
            self.write_string(str(check_s64(value)))
