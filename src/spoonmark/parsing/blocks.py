"""Block formatting for Spoonmark parser.

Turns each RawBlock produced by the segmenter into a typed block node. Quote
and Note content goes back through the whole pipeline (segment, then
format) one level deeper, so callouts can hold any block structure.

Structural ambiguities are resolved here: a table whose rows disagree with
its header, or a route line that does not parse, becomes a Paragraph over
the same text. A block is either fully built or demoted; no partial node is
ever returned.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from spoonmark.errors import MalformedHttpRoute, MalformedTable, UnknownBlockKind
from spoonmark.nodes import (
    Code,
    Comment,
    Heading,
    Note,
    Paragraph,
    Quote,
    Ruler,
)
from spoonmark.parsing.http import parse_http_route
from spoonmark.segmenter import BlockKind
from spoonmark.utils.logger import get_logger

if TYPE_CHECKING:
    from spoonmark.nodes import Block
    from spoonmark.segmenter import RawBlock

logger = get_logger(__name__)


def strip_quote_marker(line: str) -> str:
    """Remove the leading ``> `` (or a bare ``>``) from a quote line."""
    if line.startswith("> "):
        return line[2:]
    if line.startswith(">"):
        return line[1:]
    return line


class BlockFormattingMixin:
    """Dispatch from raw block kind to node builder.

    Required Host Attributes:
        - _line_offset: int
        - _depth: int

    Required Host Methods:
        - _parse_inline(text, lineno, depth=0) -> tuple[Inline, ...]
        - _parse_list(text, lineno, depth) -> List
        - _parse_table(text, lineno) -> Table
        - _parse_nested_content(content, lineno) -> tuple[Block, ...]

    """

    def _format_block(self, block: RawBlock) -> Block:
        """Build the node for one raw block.

        Raises:
            UnknownBlockKind: The block's kind has no builder

        """
        lineno = self._line_offset + block.lineno
        text = block.text

        match block.kind:
            case BlockKind.COMMENT:
                return self._format_comment(text)
            case BlockKind.HEADING:
                return self._format_heading(text, lineno)
            case BlockKind.PARAGRAPH:
                return Paragraph(children=self._parse_inline(text, lineno))
            case BlockKind.NOTE:
                return self._format_note(text, lineno)
            case BlockKind.QUOTE:
                content = "\n".join(strip_quote_marker(line) for line in text.split("\n"))
                return Quote(children=self._parse_nested_content(content, lineno))
            case BlockKind.LIST:
                return self._parse_list(text, lineno, self._depth)
            case BlockKind.HTTP:
                try:
                    return parse_http_route(text)
                except MalformedHttpRoute:
                    logger.debug("Line %d: route line demoted to paragraph", lineno)
                    return Paragraph(children=self._parse_inline(text, lineno))
            case BlockKind.CODE:
                return self._format_code(text)
            case BlockKind.TABLE:
                try:
                    return self._parse_table(text, lineno)
                except MalformedTable as e:
                    logger.debug("Line %d: table demoted to paragraph: %s", lineno, e)
                    return Paragraph(children=self._parse_inline(text, lineno))
            case BlockKind.RULER:
                return Ruler()
            case _:
                raise UnknownBlockKind(block.kind)

    def _format_comment(self, text: str) -> Comment:
        inner = text.removeprefix("<!--").removesuffix("-->")
        return Comment(text="\n".join(line.strip() for line in inner.split("\n")).strip())

    def _format_heading(self, text: str, lineno: int) -> Heading:
        # ATX headings are always a single line; setext ones never are
        if "\n" not in text:
            hashes, _, title = text.partition(" ")
            return Heading(
                level=len(hashes),  # type: ignore[arg-type]
                children=self._parse_inline(title.strip(), lineno),
            )

        # Setext: content line, then a line of '=' (level 1) or '-' (level 2)
        first_line, _, underline = text.partition("\n")
        return Heading(
            level=1 if underline.strip().startswith("=") else 2,
            children=self._parse_inline(first_line.strip(), lineno),
            style="setext",
        )

    def _format_note(self, text: str, lineno: int) -> Note:
        kind_line, _, body = text.partition("\n")
        content = "\n".join(strip_quote_marker(line) for line in body.split("\n"))
        return Note(
            kind=kind_line.strip()[1:],  # type: ignore[arg-type]
            children=self._parse_nested_content(content, lineno + 1),
        )

    def _format_code(self, text: str) -> Code:
        lines = text.split("\n")
        language = lines[0][3:].strip() or None
        return Code(code="\n".join(lines[1:-1]), language=language)
