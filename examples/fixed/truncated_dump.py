"""Write into a fixed buffer, then size a second pass from the first."""

from printbuf import Printbuf

payload = bytes(range(0, 256, 7))

storage = bytearray(16)
buf = Printbuf.extern(storage)
for byte in payload:
    buf.hex_byte(byte)

print(f"stored {buf.written_length()} of {buf.pos} bytes, truncated={buf.overflowed()}")

exact = bytearray(buf.pos + 1)
buf = Printbuf.extern(exact)
for byte in payload:
    buf.hex_byte(byte)
print(buf)
