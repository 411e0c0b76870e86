"""Compose a line of text in 3 calls, without pre-sizing or error handling."""

from printbuf import Printbuf

with Printbuf() as buf:
    buf.write_string("hello=")
    buf.hex_byte(0x2a)
    print(buf)
