"""Tests for error paths: depth limits, demotion and invariant errors."""

import logging
import sys

import pytest

from spoonmark import (
    BlockKind,
    MalformedHttpRoute,
    MalformedTable,
    Paragraph,
    ParseConfig,
    ParseError,
    Parser,
    RawBlock,
    RecursionLimitExceeded,
    SegmentationGap,
    SpoonmarkError,
    Text,
    UnknownBlockKind,
    parse,
)


class TestErrorHierarchy:
    def test_all_errors_share_base(self) -> None:
        for cls in (
            ParseError,
            SegmentationGap,
            RecursionLimitExceeded,
            MalformedTable,
            MalformedHttpRoute,
            UnknownBlockKind,
        ):
            assert issubclass(cls, SpoonmarkError)

    def test_recursion_limit_is_parse_error(self) -> None:
        assert issubclass(RecursionLimitExceeded, ParseError)


class TestParseErrorFormatting:
    def test_message_only(self) -> None:
        assert str(ParseError("bad")) == "bad"

    def test_with_line(self) -> None:
        assert str(ParseError("bad", lineno=3)) == "3 bad"

    def test_with_line_and_column(self) -> None:
        assert str(ParseError("bad", lineno=3, col_offset=7)) == "3:7 bad"

    def test_with_file(self) -> None:
        error = ParseError("bad", lineno=3, col_offset=7, source_file="doc.md")
        assert str(error) == "doc.md:3:7 bad"
        assert error.message == "bad"

    def test_recursion_limit_message(self) -> None:
        error = RecursionLimitExceeded(8, lineno=2)
        assert error.max_depth == 8
        assert str(error) == "2 nesting exceeds the maximum depth of 8"

    def test_malformed_table_message(self) -> None:
        error = MalformedTable(expected=2, found=1)
        assert str(error) == "table row has 1 cells, header has 2"

    def test_unknown_kind_message(self) -> None:
        assert str(UnknownBlockKind("bogus")) == "Illegal block kind encountered: 'bogus'"


class TestRecursionLimit:
    def test_default_limit(self) -> None:
        with pytest.raises(RecursionLimitExceeded) as exc_info:
            parse("> " * 70 + "deep")
        assert exc_info.value.max_depth == 64
        assert exc_info.value.lineno == 1

    def test_at_limit_is_allowed(self) -> None:
        result = parse("> > > x", config=ParseConfig(max_depth=3))
        assert len(result) == 1

    def test_one_past_limit_fails(self) -> None:
        with pytest.raises(RecursionLimitExceeded):
            parse("> > > > x", config=ParseConfig(max_depth=3))

    def test_position_of_nested_quote(self) -> None:
        with pytest.raises(RecursionLimitExceeded) as exc_info:
            parse("para\n\n> > > > x", config=ParseConfig(max_depth=3))
        assert exc_info.value.lineno == 3

    def test_position_inside_note(self) -> None:
        with pytest.raises(RecursionLimitExceeded) as exc_info:
            parse(">info\n> > > x", config=ParseConfig(max_depth=2))
        assert exc_info.value.lineno == 2

    def test_list_depth(self) -> None:
        source = "- a\n  - b\n    - c\n      - d"
        assert parse(source, config=ParseConfig(max_depth=3))
        with pytest.raises(RecursionLimitExceeded) as exc_info:
            parse(source, config=ParseConfig(max_depth=2))
        assert exc_info.value.lineno == 4

    def test_inline_depth(self) -> None:
        source = "*a **b *c* b** a*"
        assert parse(source, config=ParseConfig(max_depth=3))
        with pytest.raises(RecursionLimitExceeded):
            parse(source, config=ParseConfig(max_depth=2))

    def test_whole_parse_fails(self) -> None:
        """Valid blocks before the deep one do not produce partial output."""
        with pytest.raises(RecursionLimitExceeded):
            parse("# Fine\n\n> > deep", config=ParseConfig(max_depth=1))

    def test_warning_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="spoonmark"):
            with pytest.raises(RecursionLimitExceeded):
                parse("> > x", source_file="a.md", config=ParseConfig(max_depth=1))
        assert any("a.md:1" in record.getMessage() for record in caplog.records)


class TestInterpreterStackLimit:
    """A max_depth too large for the interpreter stack still fails cleanly."""

    def test_deep_quotes(self) -> None:
        levels = sys.getrecursionlimit()
        source = "para\n\n" + "> " * levels + "x"
        with pytest.raises(RecursionLimitExceeded) as exc_info:
            parse(source, config=ParseConfig(max_depth=levels * 10))
        assert exc_info.value.max_depth == levels * 10
        assert exc_info.value.lineno == 3
        assert isinstance(exc_info.value.__cause__, RecursionError)

    def test_deep_inline_spans(self) -> None:
        levels = sys.getrecursionlimit()
        source = "*x " * levels + "y" + "*" * levels
        with pytest.raises(RecursionLimitExceeded) as exc_info:
            parse(source, source_file="deep.md", config=ParseConfig(max_depth=levels * 10))
        assert exc_info.value.lineno == 1
        assert str(exc_info.value).startswith("deep.md:1 ")

    def test_warning_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        levels = sys.getrecursionlimit()
        with caplog.at_level(logging.WARNING, logger="spoonmark"):
            with pytest.raises(RecursionLimitExceeded):
                parse("> " * levels + "x", config=ParseConfig(max_depth=levels * 10))
        assert any("interpreter stack" in record.getMessage() for record in caplog.records)


class TestDemotion:
    """Structural problems found while formatting become paragraphs."""

    def test_table_row_mismatch_in_formatter(self, caplog: pytest.LogCaptureFixture) -> None:
        block = RawBlock(BlockKind.TABLE, "| a | b |\n|---|---|\n| 1 |", 1)
        with caplog.at_level(logging.DEBUG, logger="spoonmark"):
            node = Parser("")._format_block(block)
        assert node == Paragraph(children=(Text(content="| a | b |\n|---|---|\n| 1 |"),))
        assert any("demoted" in record.getMessage() for record in caplog.records)

    def test_bad_route_in_formatter(self) -> None:
        block = RawBlock(BlockKind.HTTP, "%% FETCH /x", 1)
        node = Parser("")._format_block(block)
        assert node == Paragraph(children=(Text(content="%% FETCH /x"),))


class TestUnknownBlockKind:
    def test_formatter_rejects_unknown_kind(self) -> None:
        block = RawBlock("bogus", "text", 1)  # type: ignore[arg-type]
        with pytest.raises(UnknownBlockKind) as exc_info:
            Parser("")._format_block(block)
        assert exc_info.value.kind == "bogus"
