"""AST Visitor for Spoonmark.

Provides a base visitor class with match-based dispatch.

Example, collecting all headings, including those inside notes and quotes:

    class HeadingCollector(BaseVisitor[None]):
        def __init__(self) -> None:
            self.headings: list[Heading] = []

        def visit_heading(self, node: Heading) -> None:
            self.headings.append(node)

    collector = HeadingCollector()
    for block in ast:
        collector.visit(block)

Thread Safety:
    Visitors may accumulate mutable state. Create a new visitor per thread.

"""

from typing import Generic, TypeVar

from spoonmark.nodes import (
    Code,
    CodeSpan,
    Comment,
    Emphasis,
    Heading,
    Http,
    HttpMethod,
    HttpParam,
    Link,
    List,
    ListItem,
    Node,
    Note,
    Paragraph,
    Quote,
    Ruler,
    Strong,
    Table,
    Text,
)

T = TypeVar("T")


class BaseVisitor(Generic[T]):
    """Base AST visitor with match-based dispatch.

    Subclass and override ``visit_*`` methods for node types you care about.
    Unhandled node types fall through to ``visit_default``. Children are
    walked automatically after the ``visit_*`` call; for a Table that means
    every inline node of every header and body cell.

    """

    def visit(self, node: Node) -> T:
        """Dispatch to the appropriate ``visit_*`` method, then walk children."""
        result = self._dispatch(node)
        self._walk_children(node)
        return result

    def visit_default(self, node: Node) -> T:
        """Called for node types without a specific ``visit_*`` method."""
        return None  # type: ignore[return-value]

    # -- Block visitors --------------------------------------------------------

    def visit_comment(self, node: Comment) -> T:
        return self.visit_default(node)

    def visit_heading(self, node: Heading) -> T:
        return self.visit_default(node)

    def visit_paragraph(self, node: Paragraph) -> T:
        return self.visit_default(node)

    def visit_note(self, node: Note) -> T:
        return self.visit_default(node)

    def visit_quote(self, node: Quote) -> T:
        return self.visit_default(node)

    def visit_list(self, node: List) -> T:
        return self.visit_default(node)

    def visit_list_item(self, node: ListItem) -> T:
        return self.visit_default(node)

    def visit_http(self, node: Http) -> T:
        return self.visit_default(node)

    def visit_code(self, node: Code) -> T:
        return self.visit_default(node)

    def visit_table(self, node: Table) -> T:
        return self.visit_default(node)

    def visit_ruler(self, node: Ruler) -> T:
        return self.visit_default(node)

    # -- Inline visitors -------------------------------------------------------

    def visit_text(self, node: Text) -> T:
        return self.visit_default(node)

    def visit_strong(self, node: Strong) -> T:
        return self.visit_default(node)

    def visit_emphasis(self, node: Emphasis) -> T:
        return self.visit_default(node)

    def visit_code_span(self, node: CodeSpan) -> T:
        return self.visit_default(node)

    def visit_link(self, node: Link) -> T:
        return self.visit_default(node)

    # -- Route parts -----------------------------------------------------------

    def visit_http_method(self, node: HttpMethod) -> T:
        return self.visit_default(node)

    def visit_http_param(self, node: HttpParam) -> T:
        return self.visit_default(node)

    # -- Internal dispatch -----------------------------------------------------

    def _dispatch(self, node: Node) -> T:
        """Match-based dispatch to visit_* methods."""
        match node:
            case Comment():
                return self.visit_comment(node)
            case Heading():
                return self.visit_heading(node)
            case Paragraph():
                return self.visit_paragraph(node)
            case Note():
                return self.visit_note(node)
            case Quote():
                return self.visit_quote(node)
            case List():
                return self.visit_list(node)
            case ListItem():
                return self.visit_list_item(node)
            case Http():
                return self.visit_http(node)
            case Code():
                return self.visit_code(node)
            case Table():
                return self.visit_table(node)
            case Ruler():
                return self.visit_ruler(node)
            case Text():
                return self.visit_text(node)
            case Strong():
                return self.visit_strong(node)
            case Emphasis():
                return self.visit_emphasis(node)
            case CodeSpan():
                return self.visit_code_span(node)
            case Link():
                return self.visit_link(node)
            case HttpMethod():
                return self.visit_http_method(node)
            case HttpParam():
                return self.visit_http_param(node)
            case _:
                return self.visit_default(node)

    def _walk_children(self, node: Node) -> None:
        """Recursively visit child nodes."""
        match node:
            case (
                Heading(children=children)
                | Paragraph(children=children)
                | Note(children=children)
                | Quote(children=children)
                | ListItem(children=children)
                | Strong(children=children)
                | Emphasis(children=children)
                | Link(children=children)
            ):
                for child in children:
                    self.visit(child)
            case List(items=items):
                for item in items:
                    self.visit(item)
            case Http(parts=parts):
                for part in parts:
                    self.visit(part)
            case Table(head=head, rows=rows):
                for cell in head:
                    for child in cell:
                        self.visit(child)
                for row in rows:
                    for cell in row:
                        for child in cell:
                            self.visit(child)
            case _:
                pass  # Leaf nodes: no children
