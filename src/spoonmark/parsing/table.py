"""Table parsing for Spoonmark parser.

Handles pipe tables:

    | Header 1 | Header 2 |   <- header row
    |----------|:--------:|   <- alignment row (required)
    | Cell 1   | Cell 2   |   <- body rows (one or more)

Cells are separated by un-escaped pipes. An escaped pipe (``\\|``) stays in
the cell text and is resolved to a literal ``|`` by the inline parser.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from spoonmark.errors import MalformedTable
from spoonmark.nodes import Table

if TYPE_CHECKING:
    from spoonmark.nodes import Inline

_ALIGNMENT_CELL = re.compile(r":?-{2,}:?")


def split_cells(line: str) -> list[str]:
    """Split a row on un-escaped pipes.

    The result includes the (normally empty) text before the first pipe and
    after the last one. Escape sequences are kept untouched.

    """
    cells: list[str] = []
    current: list[str] = []
    i = 0
    line_len = len(line)
    while i < line_len:
        char = line[i]
        if char == "\\" and i + 1 < line_len:
            current.append(line[i : i + 2])
            i += 2
        elif char == "|":
            cells.append("".join(current))
            current = []
            i += 1
        else:
            current.append(char)
            i += 1
    cells.append("".join(current))
    return cells


def row_cells(line: str) -> list[str] | None:
    """Return the stripped cells of a ``| a | b |`` row.

    Returns None when the line does not start and end with an un-escaped pipe
    or holds no cell at all.
    """
    parts = split_cells(line.strip())
    if len(parts) < 3 or parts[0] or parts[-1].strip():
        return None
    return [cell.strip() for cell in parts[1:-1]]


def is_alignment_row(cells: list[str]) -> bool:
    """Whether every cell looks like ``---``, ``:--``, ``--:`` or ``:-:``."""
    return all(_ALIGNMENT_CELL.fullmatch(cell) for cell in cells)


class TableParsingMixin:
    """Mixin for pipe table parsing.

    Required Host Methods:
        - _parse_inline(text, lineno, depth=0) -> tuple[Inline, ...]

    """

    def _parse_table(self, text: str, lineno: int) -> Table:
        """Build a Table from a segmented table block.

        Raises:
            MalformedTable: A row's cell count differs from the header's

        """
        lines = [line for line in text.split("\n") if line.strip()]
        head_cells = row_cells(lines[0]) or []
        align_cells = row_cells(lines[1]) or []
        if len(align_cells) != len(head_cells):
            raise MalformedTable(len(head_cells), len(align_cells))

        rows: list[tuple[tuple[Inline, ...], ...]] = []
        for offset, line in enumerate(lines[2:], start=2):
            cells = row_cells(line) or []
            if len(cells) != len(head_cells):
                raise MalformedTable(len(head_cells), len(cells))
            rows.append(tuple(self._parse_inline(cell, lineno + offset) for cell in cells))

        return Table(
            centered=tuple(":" in cell for cell in align_cells),
            head=tuple(self._parse_inline(cell, lineno) for cell in head_cells),
            rows=tuple(rows),
        )
