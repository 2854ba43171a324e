"""Typed AST nodes for Spoonmark.

All AST nodes are frozen dataclasses with slots:
- Immutability: safe sharing across threads, no node changes kind after
  construction
- Pattern matching: the closed variant sets below work with ``match``
- Tree ownership: children are held in tuples, never shared

Node Hierarchy:
Node (base)
├── Block (block-level elements)
│   ├── Comment
│   ├── Heading
│   ├── Paragraph
│   ├── Note
│   ├── Quote
│   ├── List
│   ├── ListItem
│   ├── Http
│   ├── Code
│   ├── Table
│   └── Ruler
├── Inline (inline elements)
│   ├── Text
│   ├── Strong
│   ├── Emphasis
│   ├── CodeSpan
│   └── Link
└── HttpPart (route segments)
    ├── HttpMethod
    ├── Text
    └── HttpParam

A parsed document, and the content of every Note and Quote, is an ``Ast``:
a tuple of Block nodes.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, TypeAlias

# =============================================================================
# Base Node
# =============================================================================


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all AST nodes."""


# =============================================================================
# Inline Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Text(Node):
    """Plain text content.

    Also used for the literal segments of an HTTP route path.

    """

    content: str


@dataclass(frozen=True, slots=True)
class Emphasis(Node):
    """Emphasized text.

    Markdown: *text* or _text_

    """

    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class Strong(Node):
    """Strong text.

    Markdown: **text** or __text__

    """

    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class CodeSpan(Node):
    """Inline code, kept verbatim.

    Markdown: `code`

    """

    code: str


@dataclass(frozen=True, slots=True)
class Link(Node):
    """Hyperlink.

    Markdown: [label](url)

    """

    url: str
    children: tuple[Inline, ...]


Inline: TypeAlias = Text | Emphasis | Strong | CodeSpan | Link


# =============================================================================
# HTTP Route Parts
# =============================================================================


@dataclass(frozen=True, slots=True)
class HttpMethod(Node):
    """Route verb (GET, POST, PUT, PATCH, DELETE or HEAD)."""

    method: str


@dataclass(frozen=True, slots=True)
class HttpParam(Node):
    """Path parameter, braces included: ``{id}``."""

    content: str


HttpPart: TypeAlias = HttpMethod | Text | HttpParam


# =============================================================================
# Block Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Comment(Node):
    """HTML comment, delimiters removed and lines trimmed.

    Markdown: <!-- text -->

    """

    text: str


@dataclass(frozen=True, slots=True)
class Heading(Node):
    """ATX or setext heading.

    Markdown: # Heading or Heading\\n======

    """

    level: Literal[1, 2, 3, 4, 5, 6]
    children: tuple[Inline, ...]
    style: Literal["atx", "setext"] = "atx"


@dataclass(frozen=True, slots=True)
class Paragraph(Node):
    """Paragraph block."""

    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class Note(Node):
    """Callout with nested block content.

    Markdown:
        >warn
        > Content, parsed as a full document

    """

    kind: Literal["info", "warn", "danger"]
    children: tuple[Block, ...]


@dataclass(frozen=True, slots=True)
class Quote(Node):
    """Block quote with nested block content.

    Markdown: > quoted text

    """

    children: tuple[Block, ...]


@dataclass(frozen=True, slots=True)
class ListItem(Node):
    """Single list entry; leaf of the List tree."""

    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class List(Node):
    """Ordered or unordered list.

    A nested List sits in ``items`` right after the ListItem it belongs to.

    """

    items: tuple[ListItem | List, ...]
    ordered: bool = False


@dataclass(frozen=True, slots=True)
class Http(Node):
    """HTTP route.

    Markdown: %% GET /users/{id}

    """

    parts: tuple[HttpPart, ...]


@dataclass(frozen=True, slots=True)
class Code(Node):
    """Fenced code block. Content is never inline-parsed."""

    code: str
    language: str | None = None


@dataclass(frozen=True, slots=True)
class Table(Node):
    """Pipe table.

    Markdown:
        | A | B |
        |---|:-:|
        | 1 | 2 |

    Every row in ``rows`` has exactly ``len(head)`` cells.

    """

    centered: tuple[bool, ...]
    head: tuple[tuple[Inline, ...], ...]
    rows: tuple[tuple[tuple[Inline, ...], ...], ...]


@dataclass(frozen=True, slots=True)
class Ruler(Node):
    """Horizontal rule.

    Markdown: ---, *** or ___

    """


Block: TypeAlias = (
    Comment
    | Heading
    | Paragraph
    | Note
    | Quote
    | List
    | ListItem
    | Http
    | Code
    | Table
    | Ruler
)

Ast: TypeAlias = tuple[Block, ...]
