"""List parsing for Spoonmark parser.

Lists are grouped purely by indentation. Lines at the base indentation (the
indentation of the first line) are sibling items; a run of deeper lines is
parsed recursively as a nested List and placed right after the sibling that
precedes it:

    - a            List(items=(
      - b              ListItem(a),
    - c                List(items=(ListItem(b),)),
      - d              ListItem(c),
                       List(items=(ListItem(d),)),
                   ))

A line indented less than the base is treated as a sibling.
"""

from __future__ import annotations

import re

from spoonmark.nodes import List, ListItem

_MARKER = re.compile(r"[ \t]*(?:[-+*]|(\d{1,9})\.)[ \t]+")


def indent_width(line: str, tab_width: int) -> int:
    """Width of the leading whitespace, with tabs advancing to the next tab stop."""
    width = 0
    for char in line:
        if char == " ":
            width += 1
        elif char == "\t":
            width += tab_width - width % tab_width
        else:
            break
    return width


class ListParsingMixin:
    """Recursive list parsing.

    Required Host Attributes:
        - _config: ParseConfig

    Required Host Methods:
        - _parse_inline(text, lineno, depth=0) -> tuple[Inline, ...]
        - _check_depth(depth, lineno) -> None

    """

    def _parse_list(self, text: str, lineno: int, depth: int) -> List:
        """Parse a list block (indentation intact) into a List tree.

        Args:
            text: Raw list text, leading whitespace preserved
            lineno: Line of the first list line
            depth: Nesting depth of this list

        """
        self._check_depth(depth, lineno)
        tab_width = self._config.tab_width

        lines = [
            (lineno + offset, line)
            for offset, line in enumerate(text.split("\n"))
            if line.strip()
        ]
        base = indent_width(lines[0][1], tab_width)
        first_marker = _MARKER.match(lines[0][1])
        ordered = bool(first_marker and first_marker.group(1))

        items: list[ListItem | List] = []
        run: list[str] = []
        run_lineno = lineno

        for line_no, line in lines:
            if indent_width(line, tab_width) > base:
                if not run:
                    run_lineno = line_no
                run.append(line)
                continue

            if run:
                items.append(self._parse_list("\n".join(run), run_lineno, depth + 1))
                run = []
            items.append(ListItem(children=self._parse_inline(_item_text(line), line_no)))

        if run:
            items.append(self._parse_list("\n".join(run), run_lineno, depth + 1))

        return List(items=tuple(items), ordered=ordered)


def _item_text(line: str) -> str:
    """Strip indentation and the list marker from an item line."""
    match = _MARKER.match(line)
    if match is None:
        return line.strip()
    return line[match.end() :].strip()
