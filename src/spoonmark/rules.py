"""Block rule table for the segmenter.

Each matcher receives the full source and a cursor at the start of a
non-blank line. It either claims a contiguous span starting at the cursor
(returning its length) or returns None. Matchers never partially match and
never look behind the cursor.

DEFAULT_RULES lists the rules in priority order; the segmenter takes the
first match. The last rule (paragraph) claims any line, so segmentation with
the default table never fails.
"""

from __future__ import annotations

import re

from spoonmark.parsing.charsets import HTTP_METHODS, NOTE_KINDS, RULER_MARKERS
from spoonmark.parsing.table import is_alignment_row, row_cells
from spoonmark.segmenter import BlockKind, BlockRule

_LIST_LINE = re.compile(r"[ \t]*(?:[-+*]|\d{1,9}\.)[ \t]+\S")

_FENCE = "```"


def _line_end(source: str, pos: int) -> int:
    end = source.find("\n", pos)
    return len(source) if end == -1 else end


def _next_line(source: str, line_end: int) -> int | None:
    """Start of the line after the one ending at ``line_end``, if any."""
    return line_end + 1 if line_end < len(source) else None


def is_quote_line(line: str) -> bool:
    return line == ">" or line.startswith("> ")


def match_comment(source: str, pos: int) -> int | None:
    if not source.startswith("<!--", pos):
        return None
    close = source.find("-->", pos + 4)
    if close == -1:
        return None
    return close + 3 - pos


def match_atx_heading(source: str, pos: int) -> int | None:
    end = _line_end(source, pos)
    line = source[pos:end]
    level = len(line) - len(line.lstrip("#"))
    if not 1 <= level <= 6:
        return None
    if line[level : level + 1] != " " or not line[level + 1 :].strip():
        return None
    return end - pos


def match_setext_heading(source: str, pos: int) -> int | None:
    end = _line_end(source, pos)
    underline_start = _next_line(source, end)
    if underline_start is None:
        return None
    underline_end = _line_end(source, underline_start)
    underline = source[underline_start:underline_end].rstrip()
    if len(underline) < 2 or len(set(underline)) != 1 or underline[0] not in "=-":
        return None
    return underline_end - pos


def _quote_run_end(source: str, pos: int) -> int | None:
    """End offset of the quote lines starting at ``pos``, or None if there are none."""
    run_end = None
    line_start: int | None = pos
    while line_start is not None:
        end = _line_end(source, line_start)
        if not is_quote_line(source[line_start:end]):
            break
        run_end = end
        line_start = _next_line(source, end)
    return run_end


def match_note(source: str, pos: int) -> int | None:
    end = _line_end(source, pos)
    line = source[pos:end].rstrip()
    if not line.startswith(">") or line[1:] not in NOTE_KINDS:
        return None
    body_start = _next_line(source, end)
    if body_start is None:
        return None
    run_end = _quote_run_end(source, body_start)
    return None if run_end is None else run_end - pos


def match_quote(source: str, pos: int) -> int | None:
    run_end = _quote_run_end(source, pos)
    return None if run_end is None else run_end - pos


def match_code(source: str, pos: int) -> int | None:
    if not source.startswith(_FENCE, pos):
        return None
    line_start = _next_line(source, _line_end(source, pos))
    while line_start is not None:
        end = _line_end(source, line_start)
        if source[line_start:end].rstrip() == _FENCE:
            return end - pos
        line_start = _next_line(source, end)
    return None


def match_list(source: str, pos: int) -> int | None:
    run_end = None
    line_start: int | None = pos
    while line_start is not None and _LIST_LINE.match(source, line_start):
        run_end = _line_end(source, line_start)
        line_start = _next_line(source, run_end)
    return None if run_end is None else run_end - pos


def match_table(source: str, pos: int) -> int | None:
    """Claim a pipe table whose lines all have the same number of delimiters.

    The candidate is the longest run of pipe-delimited rows at the cursor.
    When any row disagrees with the header on its delimiter count the whole
    candidate is rejected.
    """
    rows: list[list[str]] = []
    run_end = pos
    line_start: int | None = pos
    while line_start is not None:
        end = _line_end(source, line_start)
        cells = row_cells(source[line_start:end])
        if cells is None:
            break
        rows.append(cells)
        run_end = end
        line_start = _next_line(source, end)

    if len(rows) < 3 or not is_alignment_row(rows[1]):
        return None
    if any(len(cells) != len(rows[0]) for cells in rows):
        return None
    return run_end - pos


def match_http(source: str, pos: int) -> int | None:
    if not source.startswith("%% ", pos):
        return None
    end = _line_end(source, pos)
    method, _, path = source[pos + 3 : end].partition(" ")
    if method not in HTTP_METHODS or not path.strip():
        return None
    return end - pos


def match_ruler(source: str, pos: int) -> int | None:
    end = _line_end(source, pos)
    line = source[pos:end].rstrip()
    if len(line) < 3 or line[0] not in RULER_MARKERS or line != line[0] * len(line):
        return None
    return end - pos


def match_paragraph(source: str, pos: int) -> int | None:
    return _line_end(source, pos) - pos


DEFAULT_RULES: tuple[BlockRule, ...] = (
    BlockRule(BlockKind.COMMENT, match_comment),
    BlockRule(BlockKind.HEADING, match_atx_heading),
    BlockRule(BlockKind.HEADING, match_setext_heading),
    BlockRule(BlockKind.NOTE, match_note),
    BlockRule(BlockKind.QUOTE, match_quote),
    BlockRule(BlockKind.CODE, match_code),
    BlockRule(BlockKind.LIST, match_list, trim=False),
    BlockRule(BlockKind.TABLE, match_table),
    BlockRule(BlockKind.HTTP, match_http),
    BlockRule(BlockKind.RULER, match_ruler),
    BlockRule(BlockKind.PARAGRAPH, match_paragraph),
)


__all__ = [
    "DEFAULT_RULES",
    "is_quote_line",
    "match_atx_heading",
    "match_code",
    "match_comment",
    "match_http",
    "match_list",
    "match_note",
    "match_paragraph",
    "match_quote",
    "match_ruler",
    "match_setext_heading",
    "match_table",
]
