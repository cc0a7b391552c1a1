"""Tests for line classification in the Scanner."""

from __future__ import annotations

import pytest

from orgstream.scanner import Line, LineKind, Scanner, ScannerMode


def classify(source: str) -> list[Line]:
    return list(Scanner(source).lines())


def kinds(source: str) -> list[LineKind]:
    return [line.kind for line in classify(source)]


class TestHeadlines:
    """Headline classification."""

    def test_simple_headline(self) -> None:
        [line] = classify("* Hello")
        assert line.kind == LineKind.HEADLINE
        assert line.level == 1
        assert line.text == "Hello"

    def test_deep_headline(self) -> None:
        [line] = classify("**** TODO Deep  :tag:")
        assert line.level == 4
        assert line.text == "TODO Deep  :tag:"

    def test_stars_alone(self) -> None:
        """Stars followed by end of line still form an (empty) headline."""
        [line] = classify("***")
        assert line.kind == LineKind.HEADLINE
        assert line.level == 3
        assert line.text == ""

    def test_bold_at_column_zero_is_not_headline(self) -> None:
        assert kinds("*bold* text") == [LineKind.TEXT]

    def test_indented_stars_are_not_headline(self) -> None:
        """Indented stars form a list item, never a headline."""
        [line] = classify("  * item")
        assert line.kind == LineKind.LIST_ITEM
        assert line.name == "*"

    def test_tab_after_stars(self) -> None:
        [line] = classify("**\tTabbed")
        assert line.kind == LineKind.HEADLINE
        assert line.level == 2
        assert line.text == "Tabbed"


class TestBlankAndText:
    """Blank lines and the text fallback."""

    def test_blank_lines(self) -> None:
        assert kinds("a\n\n   \n\t\nb") == [
            LineKind.TEXT,
            LineKind.BLANK,
            LineKind.BLANK,
            LineKind.BLANK,
            LineKind.TEXT,
        ]

    def test_text_is_stripped(self) -> None:
        [line] = classify("   some text   ")
        assert line.text == "some text"
        assert line.indent == 3
        assert line.raw == "   some text   "

    def test_hashtag_is_text(self) -> None:
        assert kinds("#hashtag") == [LineKind.TEXT]

    def test_empty_source(self) -> None:
        assert classify("") == []

    def test_trailing_newline_adds_no_line(self) -> None:
        assert kinds("a\n") == [LineKind.TEXT]

    def test_crlf_line_endings(self) -> None:
        lines = classify("* A\r\nbody\r\n")
        assert [line.kind for line in lines] == [LineKind.HEADLINE, LineKind.TEXT]
        assert lines[0].text == "A"
        assert lines[1].raw == "body"


class TestHashLines:
    """Block delimiters, keywords and comments."""

    def test_block_begin_with_parameters(self) -> None:
        [begin, _, _] = classify("#+BEGIN_SRC python :results output\nx\n#+END_SRC")
        assert begin.kind == LineKind.BLOCK_BEGIN
        assert begin.name == "src"
        assert begin.value == "python :results output"

    def test_block_names_are_lower_cased(self) -> None:
        [begin, end] = classify("#+begin_Quote\n#+END_QUOTE")
        assert begin.name == "quote"
        assert end.kind == LineKind.BLOCK_END
        assert end.name == "quote"

    def test_keyword(self) -> None:
        [line] = classify("#+title: My Document")
        assert line.kind == LineKind.KEYWORD
        assert line.name == "TITLE"
        assert line.value == "My Document"

    def test_keyword_with_empty_value(self) -> None:
        [line] = classify("#+STARTUP:")
        assert line.kind == LineKind.KEYWORD
        assert line.value == ""

    def test_keyword_with_bracket_suffix(self) -> None:
        [line] = classify("#+RESULTS[2f1d]: 42")
        assert line.kind == LineKind.KEYWORD
        assert line.name == "RESULTS[2F1D]"

    def test_comment(self) -> None:
        [line] = classify("# a comment")
        assert line.kind == LineKind.COMMENT
        assert line.text == "a comment"

    def test_bare_hash_is_comment(self) -> None:
        assert kinds("#") == [LineKind.COMMENT]

    def test_indented_comment(self) -> None:
        [line] = classify("   # indented")
        assert line.kind == LineKind.COMMENT
        assert line.indent == 3


class TestDrawers:
    """Drawer delimiters and properties."""

    def test_drawer_begin_and_end(self) -> None:
        assert kinds(":LOGBOOK:\n:end:") == [LineKind.DRAWER_BEGIN, LineKind.DRAWER_END]

    def test_drawer_name(self) -> None:
        [line] = classify(":PROPERTIES:")
        assert line.name == "PROPERTIES"

    def test_property(self) -> None:
        [line] = classify(":CUSTOM_ID:  intro ")
        assert line.kind == LineKind.PROPERTY
        assert line.name == "CUSTOM_ID"
        assert line.value == "intro"

    def test_property_with_plus_suffix(self) -> None:
        [line] = classify(":header-args+: :results silent")
        assert line.kind == LineKind.PROPERTY
        assert line.name == "header-args+"

    def test_lone_colon_is_text(self) -> None:
        assert kinds(": fixed width") == [LineKind.TEXT]


class TestPlanningAndClock:
    """Planning and clock lines."""

    def test_planning_line(self) -> None:
        [line] = classify("  SCHEDULED: <2024-03-01 Fri> DEADLINE: <2024-03-08 Fri>")
        assert line.kind == LineKind.PLANNING
        assert line.text == "SCHEDULED: <2024-03-01 Fri> DEADLINE: <2024-03-08 Fri>"

    def test_planning_with_trailing_text_is_text(self) -> None:
        assert kinds("SCHEDULED: <2024-03-01 Fri> tomorrow") == [LineKind.TEXT]

    def test_clock_with_duration(self) -> None:
        [line] = classify("CLOCK: [2024-10-12 Sat 10:00]--[2024-10-12 Sat 11:30] =>  1:30")
        assert line.kind == LineKind.CLOCK
        assert line.text == "[2024-10-12 Sat 10:00]--[2024-10-12 Sat 11:30]"
        assert line.value == "1:30"

    def test_running_clock(self) -> None:
        [line] = classify("CLOCK: [2024-10-12 Sat 10:00]")
        assert line.kind == LineKind.CLOCK
        assert line.value == ""


class TestTablesAndRules:
    """Table rows, table rules and horizontal rules."""

    def test_table_row(self) -> None:
        [line] = classify("| a | b |")
        assert line.kind == LineKind.TABLE_ROW
        assert line.text == "| a | b |"

    def test_table_rule(self) -> None:
        assert kinds("|---+---|") == [LineKind.TABLE_RULE]

    def test_horizontal_rule(self) -> None:
        assert kinds("-----") == [LineKind.HORIZONTAL_RULE]
        assert kinds("----------") == [LineKind.HORIZONTAL_RULE]

    def test_four_dashes_are_text(self) -> None:
        assert kinds("----") == [LineKind.TEXT]


class TestListItems:
    """List bullet classification."""

    @pytest.mark.parametrize("bullet", ["-", "+", "1.", "12)"])
    def test_bullets(self, bullet: str) -> None:
        [line] = classify(f"{bullet} item")
        assert line.kind == LineKind.LIST_ITEM
        assert line.name == bullet
        assert line.text == "item"

    def test_empty_item(self) -> None:
        [line] = classify("-")
        assert line.kind == LineKind.LIST_ITEM
        assert line.text == ""

    def test_negative_number_is_text(self) -> None:
        assert kinds("-5 degrees") == [LineKind.TEXT]

    def test_number_without_delimiter_is_text(self) -> None:
        assert kinds("2024 was a year") == [LineKind.TEXT]

    def test_tab_indent_expands_to_eight_columns(self) -> None:
        [line] = classify("\t- item")
        assert line.indent == 8

    def test_mixed_tab_indent(self) -> None:
        [line] = classify("  \t- item")
        assert line.indent == 8


class TestRawMode:
    """Verbatim block bodies."""

    def test_src_body_is_raw(self) -> None:
        source = "#+BEGIN_SRC org\n* not a headline\n| not a table\n#+END_SRC\n* Real"
        assert kinds(source) == [
            LineKind.BLOCK_BEGIN,
            LineKind.RAW,
            LineKind.RAW,
            LineKind.BLOCK_END,
            LineKind.HEADLINE,
        ]

    def test_blank_lines_inside_raw_block(self) -> None:
        assert kinds("#+BEGIN_EXAMPLE\n\n#+END_EXAMPLE") == [
            LineKind.BLOCK_BEGIN,
            LineKind.RAW,
            LineKind.BLOCK_END,
        ]

    def test_other_end_delimiter_stays_raw(self) -> None:
        assert kinds("#+BEGIN_SRC\n#+END_EXAMPLE\n#+END_SRC") == [
            LineKind.BLOCK_BEGIN,
            LineKind.RAW,
            LineKind.BLOCK_END,
        ]

    def test_comma_escapes_are_undone(self) -> None:
        lines = classify("#+BEGIN_SRC org\n,* Headline\n  ,#+END_SRC\n,,x\n#+END_SRC")
        assert [line.text for line in lines[1:4]] == ["* Headline", "  #+END_SRC", ",x"]

    def test_raw_keeps_indentation(self) -> None:
        lines = classify("#+BEGIN_SRC python\n    return 1\n#+END_SRC")
        assert lines[1].text == "    return 1"

    def test_quote_block_is_not_raw(self) -> None:
        assert kinds("#+BEGIN_QUOTE\n* Headline\n#+END_QUOTE")[1] == LineKind.HEADLINE

    def test_mode_switches_back(self) -> None:
        scanner = Scanner("#+BEGIN_VERSE\nline\n#+END_VERSE")
        assert scanner.mode == ScannerMode.BLOCK
        scanner.next_line()
        assert scanner.mode == ScannerMode.RAW
        scanner.next_line()
        assert scanner.mode == ScannerMode.RAW
        scanner.next_line()
        assert scanner.mode == ScannerMode.BLOCK
        assert scanner.next_line() is None
        assert scanner.at_end

    def test_unterminated_raw_block(self) -> None:
        assert kinds("#+BEGIN_SRC\n* a\n* b") == [
            LineKind.BLOCK_BEGIN,
            LineKind.RAW,
            LineKind.RAW,
        ]


class TestLocations:
    """Line numbers, offsets and source files."""

    def test_line_numbers_and_offsets(self) -> None:
        lines = classify("ab\n\ncd")
        assert [line.lineno for line in lines] == [1, 2, 3]
        assert [line.offset for line in lines] == [0, 3, 4]

    def test_location(self) -> None:
        [_, line] = list(Scanner("x\nhello", source_file="notes.org").lines())
        loc = line.location
        assert loc.lineno == 2
        assert loc.offset == 2
        assert loc.end_offset == 7
        assert str(loc) == "notes.org:2:1"
