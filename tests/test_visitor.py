"""Tests for BaseVisitor dispatch and child walking."""

from spoonmark import (
    BaseVisitor,
    Heading,
    HttpParam,
    Link,
    parse,
)
from spoonmark.nodes import Node


class HeadingCollector(BaseVisitor[None]):
    def __init__(self) -> None:
        self.levels: list[int] = []

    def visit_heading(self, node: Heading) -> None:
        self.levels.append(node.level)


class TypeCounter(BaseVisitor[None]):
    def __init__(self) -> None:
        self.counts: dict[str, int] = {}

    def visit_default(self, node: Node) -> None:
        name = type(node).__name__
        self.counts[name] = self.counts.get(name, 0) + 1


class TestDispatch:
    def test_collects_nested_headings(self) -> None:
        collector = HeadingCollector()
        for block in parse("# A\n\n> ## B\n\n>info\n> ### C"):
            collector.visit(block)
        assert collector.levels == [1, 2, 3]

    def test_specific_method_return_value(self) -> None:
        class LinkUrl(BaseVisitor[str | None]):
            def visit_link(self, node: Link) -> str:
                return node.url

        (paragraph,) = parse("[a](b)")
        assert LinkUrl().visit(paragraph.children[0]) == "b"

    def test_default_returns_none(self) -> None:
        (block,) = parse("text")
        assert BaseVisitor().visit(block) is None


class TestChildWalking:
    def test_walks_table_cells(self) -> None:
        counter = TypeCounter()
        (table,) = parse("| **a** | b |\n|---|---|\n| `c` | [d](e) |")
        counter.visit(table)
        assert counter.counts == {
            "Table": 1,
            "Strong": 1,
            "Text": 3,
            "CodeSpan": 1,
            "Link": 1,
        }

    def test_walks_list_items_and_nested_lists(self) -> None:
        counter = TypeCounter()
        (lst,) = parse("- a\n  - b\n- c")
        counter.visit(lst)
        assert counter.counts == {"List": 2, "ListItem": 3, "Text": 3}

    def test_walks_route_parts(self) -> None:
        class ParamCollector(BaseVisitor[None]):
            def __init__(self) -> None:
                self.params: list[str] = []

            def visit_http_param(self, node: HttpParam) -> None:
                self.params.append(node.content)

        collector = ParamCollector()
        (route,) = parse("%% PUT /a/{b}/c/{d}")
        collector.visit(route)
        assert collector.params == ["{b}", "{d}"]

    def test_leaf_nodes(self) -> None:
        counter = TypeCounter()
        for block in parse("<!-- c -->\n\n---\n\n```\nx\n```"):
            counter.visit(block)
        assert counter.counts == {"Comment": 1, "Ruler": 1, "Code": 1}
