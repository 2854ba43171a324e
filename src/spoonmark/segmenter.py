"""Block segmentation for Spoonmark.

Splits document text into an ordered, gap-free sequence of classified raw
blocks. The segmenter knows nothing about individual block grammars: it walks
the text line by line and asks a rule table which rule claims the span at the
cursor.

Segmentation is total. Every character ends up in exactly one RawBlock, except
for two documented trimming rules:

- blank (whitespace-only) lines between blocks are discarded;
- blocks produced by a trimming rule lose surrounding whitespace.

Rules that do not trim (lists) keep their text exactly as written, since
indentation is structural there.

Thread Safety:
    segment() is a pure function. Rule tables are immutable tuples and may be
    shared across threads.

"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum, auto
from typing import TypeAlias

from spoonmark.errors import SegmentationGap


class BlockKind(Enum):
    """Classification of a raw block, decided by the rule that matched it."""

    COMMENT = auto()
    HEADING = auto()
    NOTE = auto()
    QUOTE = auto()
    CODE = auto()
    LIST = auto()
    TABLE = auto()
    HTTP = auto()
    RULER = auto()
    PARAGRAPH = auto()


# A matcher looks at ``source`` starting at ``pos`` (always the start of a
# non-blank line, or just after a comment that closed mid-line) and returns
# the number of characters it claims, or None.
Matcher: TypeAlias = Callable[[str, int], int | None]


@dataclass(frozen=True, slots=True)
class BlockRule:
    """One entry of the segmentation rule table.

    Attributes:
        kind: Kind given to spans this rule claims
        match: Matcher function
        trim: Strip surrounding whitespace from the claimed text

    """

    kind: BlockKind
    match: Matcher
    trim: bool = True


@dataclass(frozen=True, slots=True)
class RawBlock:
    """Classified, not yet parsed span of source text.

    Attributes:
        kind: Block kind chosen by the segmenter
        text: Original characters of the span
        lineno: Line where the span starts (1-indexed)

    """

    kind: BlockKind
    text: str
    lineno: int


def segment(source: str, rules: Sequence[BlockRule]) -> list[RawBlock]:
    """Split source into raw blocks using the given rule table.

    Rules are tried in order at every cursor position; the first match wins.
    Consecutive PARAGRAPH spans with nothing discarded between them are
    merged, so a paragraph covers every contiguous line no earlier rule
    claims.

    Args:
        source: Document text with ``\\n`` line endings
        rules: Prioritized rule table

    Returns:
        Ordered list of RawBlock

    Raises:
        SegmentationGap: No rule claimed a non-blank line

    """
    blocks: list[RawBlock] = []
    source_len = len(source)
    pos = 0
    lineno = 1

    # Open paragraph run: (start offset, start line, end offset)
    para: tuple[int, int, int] | None = None

    def flush_paragraph() -> None:
        nonlocal para
        if para is not None:
            start, start_line, end = para
            blocks.append(RawBlock(BlockKind.PARAGRAPH, source[start:end].strip(), start_line))
            para = None

    while pos < source_len:
        line_end = source.find("\n", pos)
        if line_end == -1:
            line_end = source_len

        if not source[pos:line_end].strip():
            flush_paragraph()
            pos = line_end + 1
            lineno += 1
            continue

        for rule in rules:
            length = rule.match(source, pos)
            if length:
                break
        else:
            raise SegmentationGap(
                "no block rule matched",
                lineno=lineno,
                col_offset=pos - source.rfind("\n", 0, pos),
            )

        end = pos + length
        if rule.kind is BlockKind.PARAGRAPH:
            if para is None:
                para = (pos, lineno, end)
            else:
                para = (para[0], para[1], end)
        else:
            flush_paragraph()
            text = source[pos:end]
            blocks.append(RawBlock(rule.kind, text.strip() if rule.trim else text, lineno))

        lineno += source.count("\n", pos, end)
        pos = end
        if pos < source_len and source[pos] == "\n":
            pos += 1
            lineno += 1

    flush_paragraph()
    return blocks


__all__ = [
    "BlockKind",
    "BlockRule",
    "Matcher",
    "RawBlock",
    "segment",
]
