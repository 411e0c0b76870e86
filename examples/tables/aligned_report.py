"""Tab-aligned, right-justified report with indentation and human-readable sizes."""

from printbuf import Printbuf, PrintbufConfig

devices = [
    ("sda", 512 * 1024**3, 31_457_280),
    ("nvme0n1", 2 * 1024**4, 1_932_735_283),
    ("loop0", 64 * 1024**2, 4096),
]

with Printbuf(config=PrintbufConfig(human_readable_units=True)) as buf:
    buf.write_string("devices:")
    with buf.indent_section(2):
        buf.tabstop_push(10)
        buf.tabstop_push(22)
        buf.tabstop_push(34)
        buf.newline()
        buf.write_string_indented("name\tcapacity\rused\r")
        for name, capacity, used in devices:
            buf.newline()
            buf.write_string(name)
            buf.tab()
            buf.units_u64(capacity)
            buf.tab_rjust()
            buf.units_u64(used)
            buf.tab_rjust()
        buf.tabstops_reset()
    buf.newline()
    print(buf)
