"""Tests for the indent/tabstop engine."""

import logging

import pytest

from printbuf import Printbuf, PrintbufConfig, TabstopError


class TestIndent:
    """A line is indented by the depth in force at its first character."""

    def test_indent_after_newline(self) -> None:
        buf = Printbuf()
        buf.indent_add(2)
        buf.write_string("a")
        buf.newline()
        buf.write_string("b")
        assert str(buf) == "a\n  b"

    def test_indent_sub(self) -> None:
        buf = Printbuf()
        buf.indent_add(4)
        buf.write_string("a")
        buf.newline()
        buf.indent_sub(2)
        buf.write_string("b")
        buf.newline()
        buf.write_string("c")
        assert str(buf) == "a\n  b\n  c"

    def test_indent_sub_before_first_char(self) -> None:
        buf = Printbuf()
        buf.indent_add(2)
        buf.write_string("a")
        buf.newline()
        buf.write_string("b")
        buf.newline()
        buf.indent_sub(2)
        buf.write_string("c")
        assert str(buf) == "a\n  b\nc"
        assert buf.column == 1

    def test_indent_sub_rewind_reterminates(self) -> None:
        storage = bytearray(8)
        buf = Printbuf.extern(storage)
        buf.indent_add(4)
        buf.write_string("a")
        buf.newline()
        buf.indent_sub(4)
        assert buf.pos == 2
        assert buf.last_field == 2
        assert bytes(storage[:3]) == b"a\n\x00"

    def test_indent_add_before_first_char(self) -> None:
        buf = Printbuf()
        buf.write_string("x")
        buf.newline()
        buf.indent_add(2)
        assert buf.last_field == buf.pos == 4
        buf.write_string("y")
        assert str(buf) == "x\n  y"

    def test_indent_add_mid_line_waits(self) -> None:
        buf = Printbuf()
        buf.write_string("a")
        buf.newline()
        buf.write_string("b")
        buf.indent_add(2)
        buf.write_string("c")
        buf.newline()
        buf.write_string("d")
        assert str(buf) == "a\nbc\n  d"

    def test_first_line_never_indented(self) -> None:
        buf = Printbuf()
        buf.indent_add(2)
        buf.write_string("a")
        assert str(buf) == "a"

    def test_indent_sub_clamps(self, caplog: pytest.LogCaptureFixture) -> None:
        buf = Printbuf()
        buf.indent_add(2)
        with caplog.at_level(logging.WARNING, logger="printbuf"):
            buf.indent_sub(5)
        assert buf.indent == 0
        assert any("exceeds" in r.getMessage() for r in caplog.records)

    def test_negative_rejected(self) -> None:
        buf = Printbuf()
        with pytest.raises(ValueError):
            buf.indent_add(-1)
        with pytest.raises(ValueError):
            buf.indent_sub(-1)

    def test_indent_section(self) -> None:
        buf = Printbuf()
        buf.write_string("root:")
        with buf.indent_section(2):
            buf.newline()
            buf.write_string("child")
        buf.newline()
        buf.write_string("end")
        assert str(buf) == "root:\n  child\nend"
        assert buf.indent == 0

    def test_indent_section_trailing_newline(self) -> None:
        buf = Printbuf()
        buf.write_string("root:")
        with buf.indent_section(2):
            buf.newline()
            buf.write_string("child")
            buf.newline()
        buf.write_string("end")
        assert str(buf) == "root:\n  child\nend"

    def test_nested_sections_close_on_blank_line(self) -> None:
        buf = Printbuf()
        buf.write_string("a")
        with buf.indent_section(2):
            buf.newline()
            buf.write_string("b")
            with buf.indent_section(2):
                buf.newline()
                buf.write_string("c")
                buf.newline()
            buf.write_string("d")
            buf.newline()
        buf.write_string("e")
        assert str(buf) == "a\n  b\n    c\n  d\ne"

    def test_tracking_flag(self) -> None:
        buf = Printbuf()
        assert buf.has_indent_or_tabstops is False
        buf.indent_add(2)
        assert buf.has_indent_or_tabstops is True
        buf.indent_sub(2)
        assert buf.has_indent_or_tabstops is False

    def test_suppressed(self) -> None:
        buf = Printbuf()
        buf.indent_add(2)
        buf.suppress_indent_tabstop_handling = True
        buf.newline()
        buf.write_string("b")
        assert str(buf) == "\nb"

    def test_suppressed_newline_asks_only_for_break(self) -> None:
        storage = bytearray(4)
        buf = Printbuf.extern(storage)
        buf.indent_add(8)
        buf.suppress_indent_tabstop_handling = True
        buf.write_string("a")
        buf.newline()
        assert bytes(storage[:3]) == b"a\n\x00"
        assert not buf.overflowed()
        assert buf.allocation_failure is False

    def test_untracked_newline_fits_exactly(self) -> None:
        buf = Printbuf.extern(bytearray(3))
        buf.write_string("a")
        buf.newline()
        assert buf.as_bytes() == b"a\n"
        assert buf.allocation_failure is False

    def test_newline_indent_overflow_is_flagged(self) -> None:
        buf = Printbuf.extern(bytearray(4))
        buf.indent_add(8)
        buf.write_string("a")
        buf.newline()
        assert buf.overflowed()
        assert buf.allocation_failure is True

    def test_newline_markers(self) -> None:
        buf = Printbuf()
        buf.indent_add(3)
        buf.write_string("ab")
        buf.newline()
        assert buf.last_newline == 3
        assert buf.last_field == 6
        assert buf.column == 3


class TestTabstopTable:
    """tabstop_push / pop / reset / get."""

    def test_push_increasing(self) -> None:
        buf = Printbuf()
        assert buf.tabstop_push(5) is True
        assert buf.tabstop_push(9) is True
        assert buf.tabstops == (5, 9)

    def test_push_non_increasing_rejected(self) -> None:
        buf = Printbuf()
        buf.tabstop_push(5)
        assert buf.tabstop_push(3) is False
        assert buf.tabstop_push(5) is False
        assert buf.tabstops == (5,)
        assert buf.tabstop_push(6) is True

    def test_push_negative_rejected(self) -> None:
        buf = Printbuf()
        assert buf.tabstop_push(-1) is False
        assert buf.tabstops == ()

    def test_push_limit(self) -> None:
        buf = Printbuf()
        for col in (4, 8, 12, 16):
            assert buf.tabstop_push(col) is True
        assert buf.tabstop_push(20) is False
        assert buf.tabstops == (4, 8, 12, 16)

    def test_push_limit_configurable(self) -> None:
        buf = Printbuf(config=PrintbufConfig(max_tabstops=2))
        assert buf.tabstop_push(4)
        assert buf.tabstop_push(8)
        assert not buf.tabstop_push(12)

    def test_rejection_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        buf = Printbuf()
        buf.tabstop_push(5)
        with caplog.at_level(logging.WARNING, logger="printbuf"):
            buf.tabstop_push(2)
        assert any("rejected" in r.getMessage() for r in caplog.records)

    def test_strict_raises(self) -> None:
        buf = Printbuf(config=PrintbufConfig(strict_tabstops=True))
        buf.tabstop_push(5)
        with pytest.raises(TabstopError) as exc_info:
            buf.tabstop_push(5)
        assert exc_info.value.column == 5
        assert buf.tabstops == (5,)

    def test_rejected_push_leaves_content(self) -> None:
        buf = Printbuf()
        buf.write_string("abc")
        buf.tabstop_push(4)
        buf.tabstop_push(1)
        assert str(buf) == "abc"
        assert buf.pos == 3

    def test_pop(self) -> None:
        buf = Printbuf()
        buf.tabstop_push(2)
        buf.tabstop_push(4)
        buf.tabstop_pop()
        assert buf.tabstops == (2,)
        buf.tabstop_pop()
        buf.tabstop_pop()
        assert buf.tabstops == ()
        assert buf.has_indent_or_tabstops is False

    def test_pop_clamps_cursor(self) -> None:
        buf = Printbuf()
        buf.tabstop_push(2)
        buf.tabstop_push(4)
        buf.tab()
        buf.tab()
        assert buf.cur_tabstop == 2
        buf.tabstop_pop()
        assert buf.cur_tabstop == 1

    def test_reset(self) -> None:
        buf = Printbuf()
        buf.tabstop_push(2)
        buf.tab()
        buf.tabstops_reset()
        assert buf.tabstops == ()
        assert buf.cur_tabstop == 0
        assert buf.has_indent_or_tabstops is False

    def test_get_includes_indent(self) -> None:
        buf = Printbuf()
        buf.indent_add(4)
        buf.tabstop_push(6)
        assert buf.tabstop_get(0) == 10
        with pytest.raises(IndexError):
            buf.tabstop_get(1)


class TestTab:
    """tab() pads forward to the next tabstop."""

    def test_basic(self) -> None:
        buf = Printbuf()
        buf.tabstop_push(8)
        buf.write_string("name")
        buf.tab()
        buf.write_string("42")
        assert str(buf) == "name    42"

    def test_columns(self) -> None:
        buf = Printbuf()
        buf.tabstop_push(6)
        buf.tabstop_push(12)
        buf.write_string("a")
        buf.tab()
        buf.write_string("b")
        buf.tab()
        buf.write_string("c")
        assert str(buf) == "a     b     c"

    def test_never_backwards(self) -> None:
        buf = Printbuf()
        buf.tabstop_push(3)
        buf.write_string("abcdef")
        buf.tab()
        buf.write_string("x")
        assert str(buf) == "abcdefx"
        assert buf.cur_tabstop == 1

    def test_exhausted_is_noop(self) -> None:
        buf = Printbuf()
        buf.tabstop_push(2)
        buf.write_string("a")
        buf.tab()
        buf.tab()
        buf.write_string("b")
        assert str(buf) == "a b"
        assert buf.cur_tabstop == 1

    def test_no_tabstops_is_noop(self) -> None:
        buf = Printbuf()
        buf.write_string("a")
        buf.tab()
        assert str(buf) == "a"

    def test_newline_rewinds_cursor(self) -> None:
        buf = Printbuf()
        buf.tabstop_push(4)
        buf.write_string("a")
        buf.tab()
        buf.newline()
        buf.write_string("b")
        buf.tab()
        buf.write_string("c")
        assert str(buf) == "a   \nb   c"

    def test_tab_under_indent(self) -> None:
        buf = Printbuf()
        buf.indent_add(2)
        buf.tabstop_push(4)
        buf.newline()
        buf.write_string("k")
        buf.tab()
        buf.write_string("v")
        assert str(buf) == "\n  k   v"


class TestTabRjust:
    """tab_rjust() shifts the current field so it ends on the tabstop."""

    def test_basic(self) -> None:
        buf = Printbuf()
        buf.tabstop_push(10)
        buf.write_string("ab")
        buf.tab_rjust()
        assert str(buf) == " " * 8 + "ab"
        assert buf.column == 10
        assert buf.last_field == 10
        assert buf.cur_tabstop == 1

    def test_two_columns(self) -> None:
        buf = Printbuf()
        buf.tabstop_push(5)
        buf.tabstop_push(10)
        buf.write_string("1")
        buf.tab_rjust()
        buf.write_string("22")
        buf.tab_rjust()
        assert str(buf) == "    1   22"

    def test_after_tab(self) -> None:
        buf = Printbuf()
        buf.tabstop_push(4)
        buf.tabstop_push(10)
        buf.write_string("ab")
        buf.tab()
        buf.write_string("xyz")
        buf.tab_rjust()
        assert str(buf) == "ab     xyz"

    def test_field_past_tabstop(self) -> None:
        buf = Printbuf()
        buf.tabstop_push(2)
        buf.write_string("abcd")
        buf.tab_rjust()
        assert str(buf) == "abcd"
        assert buf.cur_tabstop == 1
        assert buf.last_field == 4

    def test_exhausted_is_noop(self) -> None:
        buf = Printbuf()
        buf.write_string("ab")
        buf.tab_rjust()
        assert str(buf) == "ab"
        assert buf.last_field == 0

    def test_under_indent(self) -> None:
        buf = Printbuf()
        buf.indent_add(2)
        buf.tabstop_push(6)
        buf.newline()
        buf.write_string("ab")
        buf.tab_rjust()
        assert str(buf) == "\n      ab"

    def test_second_line(self) -> None:
        buf = Printbuf()
        buf.tabstop_push(6)
        buf.write_string("a")
        buf.tab_rjust()
        buf.newline()
        buf.write_string("bcd")
        buf.tab_rjust()
        assert str(buf) == "     a\n   bcd"

    def test_extern_with_room(self) -> None:
        storage = bytearray(8)
        buf = Printbuf.extern(storage)
        buf.tabstop_push(6)
        buf.write_string("abc")
        buf.tab_rjust()
        assert bytes(storage[:7]) == b"   abc\x00"
        assert buf.pos == 6
        assert buf.allocation_failure is False

    def test_truncated_field_keeps_leading_bytes(self) -> None:
        storage = bytearray(5)
        buf = Printbuf.extern(storage)
        buf.tabstop_push(5)
        buf.write_string("abc")
        buf.tab_rjust()
        assert bytes(storage) == b"  ab\x00"
        assert buf.pos == 5
        assert buf.overflowed()

    def test_field_pushed_out_entirely(self) -> None:
        storage = bytearray(8)
        buf = Printbuf.extern(storage)
        buf.tabstop_push(10)
        buf.write_string("ab")
        buf.tab_rjust()
        assert bytes(storage) == b" " * 7 + b"\x00"
        assert buf.pos == 10

    def test_reset_clears_line_state(self) -> None:
        buf = Printbuf()
        buf.indent_add(2)
        buf.tabstop_push(4)
        buf.write_string("x")
        buf.newline()
        buf.reset()
        assert buf.indent == 0
        assert buf.tabstops == ()
        assert buf.last_newline == 0
        assert buf.last_field == 0
        assert buf.has_indent_or_tabstops is False
