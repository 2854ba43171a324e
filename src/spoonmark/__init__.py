"""
Spoonmark: Markdown dialect parser producing a typed AST

Parses documentation Markdown (headings, paragraphs, callouts, quotes,
nested lists, fenced code, pipe tables, HTTP route blocks and comments)
into immutable, pattern-matchable nodes. Rendering is left to the caller.

Quick Start:
    >>> from spoonmark import parse
    >>> parse("# Hello **World**")
    (Heading(level=1, children=(Text(content='Hello '), Strong(...)), style='atx'),)

    >>> from spoonmark import extract_outline
    >>> extract_outline(parse("# Guide\\n\\n## Install")).title
    'Guide'

Configuration:
    >>> from spoonmark import ParseConfig
    >>> parse(source, config=ParseConfig(max_depth=16))

"""

from spoonmark.config import (
    ParseConfig,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from spoonmark.errors import (
    MalformedHttpRoute,
    MalformedTable,
    ParseError,
    RecursionLimitExceeded,
    SegmentationGap,
    SpoonmarkError,
    UnknownBlockKind,
)
from spoonmark.nodes import (
    Ast,
    Block,
    Code,
    CodeSpan,
    Comment,
    Emphasis,
    Heading,
    Http,
    HttpMethod,
    HttpParam,
    HttpPart,
    Inline,
    Link,
    List,
    ListItem,
    Note,
    Paragraph,
    Quote,
    Ruler,
    Strong,
    Table,
    Text,
)
from spoonmark.outline import DocumentOutline, OutlinePart, extract_outline, flatten_to_text
from spoonmark.parser import Parser
from spoonmark.rules import DEFAULT_RULES
from spoonmark.segmenter import BlockKind, BlockRule, RawBlock, segment
from spoonmark.serialization import from_dict, from_json, to_dict, to_json
from spoonmark.visitor import BaseVisitor

__version__ = "0.1.0"


def parse(
    source: str,
    *,
    source_file: str | None = None,
    config: ParseConfig | None = None,
) -> tuple[Block, ...]:
    """Parse Markdown source into a typed AST.

    Args:
        source: Markdown source text
        source_file: Optional source file path for error messages
        config: Configuration for this call. When None, the config active
            in the current context is used.

    Returns:
        Tuple of top-level Block nodes

    Raises:
        RecursionLimitExceeded: Nesting deeper than ``config.max_depth``

    Example:
        >>> ast = parse("# Hello **World**")
        >>> ast[0].level
        1

    """
    if config is None:
        return Parser(source, source_file=source_file).parse()

    with parse_config_context(config):
        return Parser(source, source_file=source_file).parse()


__all__ = [  # noqa: RUF022 - grouped by category for maintainability
    # Version
    "__version__",
    # Core API
    "parse",
    "Parser",
    # Segmentation
    "BlockKind",
    "BlockRule",
    "DEFAULT_RULES",
    "RawBlock",
    "segment",
    # Block nodes
    "Ast",
    "Block",
    "Code",
    "Comment",
    "Heading",
    "Http",
    "List",
    "ListItem",
    "Note",
    "Paragraph",
    "Quote",
    "Ruler",
    "Table",
    # Inline nodes
    "Inline",
    "CodeSpan",
    "Emphasis",
    "Link",
    "Strong",
    "Text",
    # Route parts
    "HttpPart",
    "HttpMethod",
    "HttpParam",
    # Errors
    "SpoonmarkError",
    "ParseError",
    "SegmentationGap",
    "RecursionLimitExceeded",
    "MalformedTable",
    "MalformedHttpRoute",
    "UnknownBlockKind",
    # Configuration (ContextVar-based)
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
    # Outline
    "DocumentOutline",
    "OutlinePart",
    "extract_outline",
    "flatten_to_text",
    # Visitor
    "BaseVisitor",
    # Serialization
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
]
