"""Tests for title and section extraction."""

from spoonmark import DocumentOutline, OutlinePart, extract_outline, flatten_to_text, parse


class TestExtractOutline:
    def test_title_and_parts(self) -> None:
        ast = parse("# Guide\n\nIntro.\n\n## Getting Started\n\ntext\n\n## API *Reference*")
        assert extract_outline(ast) == DocumentOutline(
            title="Guide",
            parts=(
                OutlinePart(id="getting-started", name="Getting Started"),
                OutlinePart(id="api-reference", name="API Reference"),
            ),
        )

    def test_first_level_one_heading_wins(self) -> None:
        assert extract_outline(parse("# One\n\n# Two")).title == "One"

    def test_blank_first_title_is_not_replaced(self) -> None:
        outline = extract_outline(parse("# ` `\n\n# Real\n\n## Part"))
        assert outline == DocumentOutline(
            title=None,
            parts=(OutlinePart(id="part", name="Part"),),
        )

    def test_blank_part_skipped(self) -> None:
        outline = extract_outline(parse("## ` `\n\n## Usage"))
        assert outline.parts == (OutlinePart(id="usage", name="Usage"),)

    def test_setext_headings_count(self) -> None:
        outline = extract_outline(parse("Guide\n=====\n\nSection\n-------"))
        assert outline.title == "Guide"
        assert outline.parts == (OutlinePart(id="section", name="Section"),)

    def test_no_headings(self) -> None:
        assert extract_outline(parse("just text")) == DocumentOutline(title=None, parts=())

    def test_deeper_headings_ignored(self) -> None:
        assert extract_outline(parse("### Deep")).parts == ()

    def test_nested_headings_ignored(self) -> None:
        outline = extract_outline(parse("> # Quoted\n\n>info\n> ## Noted"))
        assert outline == DocumentOutline(title=None, parts=())

    def test_code_span_in_heading(self) -> None:
        outline = extract_outline(parse("## The `parse` function"))
        assert outline.parts == (OutlinePart(id="the-parse-function", name="The parse function"),)


class TestFlattenToText:
    def test_drops_formatting(self) -> None:
        (paragraph,) = parse("a **b** [c *d*](e) `f`")
        assert flatten_to_text(paragraph) == "a b c d f"

    def test_leaf(self) -> None:
        (heading,) = parse("# Title")
        assert flatten_to_text(heading) == "Title"
