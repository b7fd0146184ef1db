"""Tests for cutting a window of lines out of a source file."""

from __future__ import annotations

import pytest

from blockcheck.extract import AdditionalLines, extract_lines_from_source
from blockcheck.source import Position, Range
from tests.helpers import write_block

TEN_LINES = "".join(f"line {n}\n" for n in range(1, 11))


@pytest.fixture
def ten(tmp_path):
    return str(write_block(tmp_path, "ten.block", TEN_LINES))


class TestExtractLines:
    def test_window_in_middle_of_file(self, ten):
        result = extract_lines_from_source(Range(ten, Position(5, 1), Position(6, 3)))
        assert result.lines == ("line 3", "line 4", "line 5", "line 6", "line 7", "line 8")
        assert result.additional_lines == AdditionalLines(before=2, after=2)

    def test_single_point(self, ten):
        result = extract_lines_from_source(Range(ten, Position(5, 4)))
        assert result.lines == ("line 3", "line 4", "line 5", "line 6", "line 7")
        assert result.additional_lines == AdditionalLines(2, 2)

    def test_clamped_at_start_of_file(self, ten):
        result = extract_lines_from_source(Range(ten, Position(1, 1)))
        assert result.lines[0] == "line 1"
        assert result.additional_lines == AdditionalLines(before=0, after=2)

    def test_clamped_at_end_of_file(self, ten):
        result = extract_lines_from_source(Range(ten, Position(9, 1), Position(10, 2)))
        assert result.lines == ("line 7", "line 8", "line 9", "line 10")
        assert result.additional_lines == AdditionalLines(before=2, after=0)

    def test_first_line_number(self, ten):
        loc = Range(ten, Position(5, 1))
        result = extract_lines_from_source(loc)
        assert result.first_line_number(loc) == 3

    def test_custom_context(self, ten):
        result = extract_lines_from_source(Range(ten, Position(5, 1)), context_lines=0)
        assert result.lines == ("line 5",)
        assert result.additional_lines == AdditionalLines(0, 0)

    def test_whole_three_line_file(self, tmp_path):
        path = write_block(tmp_path, "three.block", ".a {\n  color: red;\n}\n")
        result = extract_lines_from_source(Range(str(path), Position(1, 1), Position(3, 1)))
        assert result.lines == (".a {", "  color: red;", "}")
        assert result.additional_lines == AdditionalLines(before=0, after=0)

    def test_preserves_whitespace_and_strips_crlf(self, tmp_path):
        path = tmp_path / "crlf.block"
        path.write_bytes(b"\t.a {  \r\n  color: red;\r\n")
        result = extract_lines_from_source(Range(str(path), Position(2, 3)))
        assert result.lines == ("\t.a {  ", "  color: red;")

    def test_end_past_eof_pads_with_empty_lines(self, tmp_path):
        path = write_block(tmp_path, "short.block", "one\ntwo\n")
        result = extract_lines_from_source(Range(str(path), Position(2, 1), Position(4, 1)))
        assert result.lines == ("one", "two", "", "")
        assert result.additional_lines == AdditionalLines(before=1, after=0)

    def test_inverted_range_treated_as_point(self, ten):
        result = extract_lines_from_source(Range(ten, Position(5, 1), Position(2, 1)))
        assert result.lines == ("line 3", "line 4", "line 5", "line 6", "line 7")

    @pytest.mark.parametrize("start_line", [1, 2, 5, 9, 10])
    def test_some_line_is_always_in_range(self, ten, start_line):
        result = extract_lines_from_source(Range(ten, Position(start_line, 1)))
        extra = result.additional_lines
        assert extra.before + extra.after < len(result.lines)


class TestUnreadable:
    def test_missing_file(self, tmp_path):
        missing = str(tmp_path / "nope.block")
        assert extract_lines_from_source(Range(missing, Position(1, 1))) is None

    def test_directory(self, tmp_path):
        assert extract_lines_from_source(Range(str(tmp_path), Position(1, 1))) is None

    @pytest.mark.parametrize("line", [0, 11, 50])
    def test_start_line_out_of_bounds(self, ten, line):
        assert extract_lines_from_source(Range(ten, Position(line, 1))) is None

    def test_empty_file(self, tmp_path):
        path = write_block(tmp_path, "empty.block", "")
        assert extract_lines_from_source(Range(str(path), Position(1, 1))) is None

    def test_embedded_null_byte(self):
        assert extract_lines_from_source(Range("a\x00.block", Position(1, 1))) is None

    def test_empty_filename(self):
        assert extract_lines_from_source(Range("", Position(1, 1))) is None


class TestLineBreaks:
    def test_form_feed_is_not_a_line_break(self, tmp_path):
        path = write_block(tmp_path, "ff.block", "/* a\x0cb */\n.x { colr: red; }\n")
        result = extract_lines_from_source(Range(str(path), Position(2, 6), Position(2, 9)))
        assert result.lines == ("/* a\x0cb */", ".x { colr: red; }")
        assert result.additional_lines == AdditionalLines(before=1, after=0)

    @pytest.mark.parametrize("char", ["\x0b", "\x1c", "\x1d", "\x1e", "\x85", "\u2028", "\u2029"])
    def test_unicode_separators_stay_on_their_line(self, tmp_path, char):
        path = write_block(tmp_path, "sep.block", f"one{char}two\nthree\n")
        result = extract_lines_from_source(Range(str(path), Position(2, 1)))
        assert result.lines == (f"one{char}two", "three")

    def test_lone_carriage_return_is_not_a_line_break(self, tmp_path):
        path = tmp_path / "cr.block"
        path.write_bytes(b"one\rtwo\nthree\n")
        result = extract_lines_from_source(Range(str(path), Position(2, 1)))
        assert result.lines == ("one\rtwo", "three")

    def test_no_trailing_newline(self, tmp_path):
        path = write_block(tmp_path, "nonl.block", "one\ntwo")
        result = extract_lines_from_source(Range(str(path), Position(2, 1)))
        assert result.lines == ("one", "two")


class TestPastEndOfFile:
    def test_padding_is_capped(self, tmp_path):
        path = write_block(tmp_path, "three.block", "a\nb\nc\n")
        result = extract_lines_from_source(Range(str(path), Position(1, 1), Position(10**8, 1)))
        assert result.lines == ("a", "b", "c", "", "")
        assert result.additional_lines == AdditionalLines(before=0, after=0)

    def test_padding_capped_without_context(self, tmp_path):
        path = write_block(tmp_path, "three.block", "a\nb\nc\n")
        loc = Range(str(path), Position(2, 1), Position(9, 1))
        result = extract_lines_from_source(loc, context_lines=0)
        assert result.lines == ("b", "c")
        extra = result.additional_lines
        assert extra.before + extra.after < len(result.lines)
