"""Document outline extraction.

Build tools need a title and a table of contents for each document. Both come
straight from the top-level headings of the AST:

- the title is the first level-1 heading;
- the parts are every level-2 heading, each with a slug id for anchors.

Headings nested inside notes or quotes are not part of the outline.

Example:
    >>> ast = parse("# Guide\\n\\n## Install\\n\\n## Usage")
    >>> extract_outline(ast)
    DocumentOutline(title='Guide', parts=(OutlinePart(id='install', name='Install'), ...))

"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from spoonmark.nodes import CodeSpan, Heading, Text
from spoonmark.utils.text import slugify
from spoonmark.visitor import BaseVisitor

if TYPE_CHECKING:
    from spoonmark.nodes import Block, Node


@dataclass(frozen=True, slots=True)
class OutlinePart:
    """A level-2 section: anchor id and display name."""

    id: str
    name: str


@dataclass(frozen=True, slots=True)
class DocumentOutline:
    """Title and sections of one document."""

    title: str | None
    parts: tuple[OutlinePart, ...]


class _TextCollector(BaseVisitor[None]):
    def __init__(self) -> None:
        self.chunks: list[str] = []

    def visit_text(self, node: Text) -> None:
        self.chunks.append(node.content)

    def visit_code_span(self, node: CodeSpan) -> None:
        self.chunks.append(node.code)


def flatten_to_text(node: Node) -> str:
    """Concatenate the text carried by a node and its descendants.

    Formatting is dropped; code spans contribute their code and links their
    label.
    """
    collector = _TextCollector()
    collector.visit(node)
    return "".join(collector.chunks)


def extract_outline(ast: Iterable[Block]) -> DocumentOutline:
    """Extract the title and level-2 parts from a parsed document.

    Only the first level-1 heading names the document; if its text is blank
    the title is None. Level-2 headings with blank text are skipped.
    """
    title: str | None = None
    seen_title = False
    parts: list[OutlinePart] = []
    for block in ast:
        if not isinstance(block, Heading):
            continue
        text = flatten_to_text(block).strip()
        if block.level == 1 and not seen_title:
            seen_title = True
            title = text or None
        elif block.level == 2 and text:
            parts.append(OutlinePart(id=slugify(text), name=text))
    return DocumentOutline(title=title, parts=tuple(parts))


__all__ = [
    "DocumentOutline",
    "OutlinePart",
    "extract_outline",
    "flatten_to_text",
]
