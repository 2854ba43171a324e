"""Tests for the public parse API.

Covers the documented end-to-end examples plus the source_file and config
parameters of parse().
"""

import pytest

import spoonmark
from spoonmark import (
    Code,
    Heading,
    Http,
    HttpMethod,
    HttpParam,
    List,
    ListItem,
    Paragraph,
    ParseConfig,
    Parser,
    RecursionLimitExceeded,
    Strong,
    Table,
    Text,
    get_parse_config,
    parse,
)


class TestDocumentedExamples:
    """The canonical input/output pairs."""

    def test_heading_and_paragraph(self) -> None:
        assert parse("# Title\n\nHello **world**.") == (
            Heading(level=1, children=(Text(content="Title"),)),
            Paragraph(
                children=(
                    Text(content="Hello "),
                    Strong(children=(Text(content="world"),)),
                    Text(content="."),
                )
            ),
        )

    def test_nested_list(self) -> None:
        assert parse("- a\n  - b\n- c") == (
            List(
                items=(
                    ListItem(children=(Text(content="a"),)),
                    List(items=(ListItem(children=(Text(content="b"),)),)),
                    ListItem(children=(Text(content="c"),)),
                )
            ),
        )

    def test_fenced_code(self) -> None:
        assert parse("```js\nconst a = 1\n```") == (Code(code="const a = 1", language="js"),)

    def test_http_route(self) -> None:
        assert parse("%% GET /users/{id}") == (
            Http(
                parts=(
                    HttpMethod(method="GET"),
                    Text(content="/users/"),
                    HttpParam(content="{id}"),
                )
            ),
        )

    def test_table(self) -> None:
        assert parse("| a | b |\n|---|---|\n| 1 | 2 |") == (
            Table(
                centered=(False, False),
                head=((Text(content="a"),), (Text(content="b"),)),
                rows=(((Text(content="1"),), (Text(content="2"),)),),
            ),
        )

    def test_mismatched_table_is_paragraph(self) -> None:
        result = parse("| a | b |\n|---|---|\n| 1 |")
        assert len(result) == 1
        assert isinstance(result[0], Paragraph)


class TestParseFunction:
    """parse() entry point behavior."""

    def test_empty_source(self) -> None:
        assert parse("") == ()

    def test_whitespace_only_source(self) -> None:
        assert parse("  \n\n\t\n") == ()

    def test_returns_tuple(self) -> None:
        assert isinstance(parse("text"), tuple)

    def test_crlf_line_endings(self) -> None:
        """Windows line endings parse like Unix ones."""
        assert parse("# A\r\n\r\ntext\r\nmore") == parse("# A\n\ntext\nmore")

    def test_lone_cr_line_endings(self) -> None:
        assert parse("- a\r  - b") == parse("- a\n  - b")

    def test_matches_parser_class(self) -> None:
        source = "# Title\n\n> quoted\n\n- item"
        assert parse(source) == Parser(source).parse()

    def test_deterministic(self) -> None:
        source = ">info\n> Check *this*\n\n| x |\n|:--:|\n| y |"
        assert parse(source) == parse(source)

    def test_version_exposed(self) -> None:
        assert isinstance(spoonmark.__version__, str)


class TestSourceFile:
    """source_file flows into error locations."""

    def test_source_file_in_error(self) -> None:
        config = ParseConfig(max_depth=1)
        with pytest.raises(RecursionLimitExceeded) as exc_info:
            parse("> > deep", source_file="guide.md", config=config)
        assert exc_info.value.source_file == "guide.md"
        assert str(exc_info.value).startswith("guide.md:1 ")


class TestConfigParameter:
    """parse(config=...) applies for one call only."""

    def test_config_applies(self) -> None:
        with pytest.raises(RecursionLimitExceeded):
            parse("> > > x", config=ParseConfig(max_depth=2))

    def test_config_restored_after_call(self) -> None:
        before = get_parse_config()
        parse("text", config=ParseConfig(max_depth=5))
        assert get_parse_config() is before

    def test_config_restored_after_error(self) -> None:
        before = get_parse_config()
        with pytest.raises(RecursionLimitExceeded):
            parse("> > x", config=ParseConfig(max_depth=1))
        assert get_parse_config() is before

    def test_default_config_allows_moderate_nesting(self) -> None:
        source = "> " * 10 + "x"
        result = parse(source)
        assert len(result) == 1
