"""Recursive descent parser producing typed AST.

Runs the segmenter over the source and formats every raw block into a typed
node. Quote and Note content is handed to a sub-parser one level deeper, so
nested documents go through exactly the same pipeline as the top level.

Architecture:
The parser uses a mixin-based design for separation of concerns:
- `InlineParsingMixin`: Inline content (emphasis, links, code spans)
- `ListParsingMixin`: Indentation-grouped lists
- `TableParsingMixin`: Pipe tables
- `BlockFormattingMixin`: Raw block dispatch

Thread Safety:
- Parser produces immutable AST (frozen dataclasses)
- Configuration is read from ContextVar (thread-local)
- The rule table is an immutable tuple shared by all parsers

"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from spoonmark.config import ParseConfig, get_parse_config
from spoonmark.errors import RecursionLimitExceeded
from spoonmark.parsing import (
    BlockFormattingMixin,
    InlineParsingMixin,
    ListParsingMixin,
    TableParsingMixin,
)
from spoonmark.rules import DEFAULT_RULES
from spoonmark.segmenter import BlockRule, segment
from spoonmark.utils.logger import get_logger

if TYPE_CHECKING:
    from spoonmark.nodes import Block

logger = get_logger(__name__)


def normalize_newlines(source: str) -> str:
    """Convert ``\\r\\n`` and lone ``\\r`` line endings to ``\\n``."""
    if "\r" not in source:
        return source
    return source.replace("\r\n", "\n").replace("\r", "\n")


class Parser(
    InlineParsingMixin,
    ListParsingMixin,
    TableParsingMixin,
    BlockFormattingMixin,
):
    """Recursive descent parser for the Spoonmark dialect.

    Usage:
        >>> parser = Parser("# Hello\\n\\nWorld")
        >>> parser.parse()
        (Heading(level=1, children=(Text(content='Hello'),), style='atx'), Paragraph(...))

    Thread Safety:
        Parser instances are single-use and not thread-safe. Create one per
        parse operation. The resulting AST is immutable and thread-safe.

    """

    __slots__ = (
        "_source",
        "_source_file",
        "_rules",
        # Nesting depth of this parser's document (0 = top level)
        "_depth",
        # Line of the enclosing document just before this source starts
        "_line_offset",
    )

    def __init__(
        self,
        source: str,
        source_file: str | None = None,
        *,
        rules: Sequence[BlockRule] = DEFAULT_RULES,
    ) -> None:
        """Initialize parser with source text.

        Configuration is read from ContextVar, not passed as parameters.
        Use set_parse_config() or parse_config_context() before creating
        a Parser if you need non-default configuration.

        Args:
            source: Markdown source text
            source_file: Optional source file path for error messages
            rules: Segmentation rule table, in priority order

        """
        self._source = normalize_newlines(source)
        self._source_file = source_file
        self._rules = rules
        self._depth = 0
        self._line_offset = 0

    @property
    def _config(self) -> ParseConfig:
        """Get current parse configuration (thread-local)."""
        return get_parse_config()

    def parse(self) -> tuple[Block, ...]:
        """Parse source into AST blocks.

        Returns:
            Tuple of Block nodes, in source order

        Raises:
            RecursionLimitExceeded: Nesting deeper than ``max_depth``, or
                deeper than the interpreter stack allows

        """
        blocks = segment(self._source, self._rules)
        if self._depth:
            return tuple(self._format_block(block) for block in blocks)

        # A max_depth above what the interpreter stack can hold ends in
        # RecursionError; report it like any other depth failure once the
        # nested frames have unwound
        result: list[Block] = []
        for block in blocks:
            try:
                result.append(self._format_block(block))
            except RecursionError as e:
                max_depth = self._config.max_depth
                logger.warning(
                    "%s:%d: nesting exhausted the interpreter stack before max_depth=%d",
                    self._source_file or "<string>",
                    block.lineno,
                    max_depth,
                )
                raise RecursionLimitExceeded(
                    max_depth,
                    lineno=block.lineno,
                    source_file=self._source_file,
                ) from e
        return tuple(result)

    def _parse_nested_content(self, content: str, lineno: int) -> tuple[Block, ...]:
        """Parse Quote or Note content as a document one level deeper.

        Args:
            content: Content with quote markers already removed
            lineno: Line (in the top-level source) where the content starts

        """
        depth = self._depth + 1
        self._check_depth(depth, lineno)

        sub_parser = Parser(content, self._source_file, rules=self._rules)
        sub_parser._depth = depth
        sub_parser._line_offset = lineno - 1
        return sub_parser.parse()

    def _check_depth(self, depth: int, lineno: int) -> None:
        """Fail the parse when ``depth`` passes the configured maximum."""
        max_depth = self._config.max_depth
        if depth > max_depth:
            logger.warning(
                "%s:%d: nesting depth %d exceeds max_depth=%d",
                self._source_file or "<string>",
                lineno,
                depth,
                max_depth,
            )
            raise RecursionLimitExceeded(
                max_depth,
                lineno=lineno,
                source_file=self._source_file,
            )
