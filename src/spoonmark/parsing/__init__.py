"""Parsing subsystem for Spoonmark.

Provides mixin classes for modular parsing functionality:
- `InlineParsingMixin`: Inline content (emphasis, links, code spans)
- `ListParsingMixin`: Indentation-grouped list trees
- `TableParsingMixin`: Pipe tables
- `BlockFormattingMixin`: Raw block to typed node dispatch

Example:
    >>> from spoonmark.parsing import (
    ...     BlockFormattingMixin,
    ...     InlineParsingMixin,
    ...     ListParsingMixin,
    ...     TableParsingMixin,
    ... )
    >>> class Parser(InlineParsingMixin, ListParsingMixin, TableParsingMixin, BlockFormattingMixin):
    ...     pass

"""

from spoonmark.parsing.blocks import BlockFormattingMixin
from spoonmark.parsing.inline import InlineParsingMixin
from spoonmark.parsing.lists import ListParsingMixin
from spoonmark.parsing.table import TableParsingMixin

__all__ = [
    "BlockFormattingMixin",
    "InlineParsingMixin",
    "ListParsingMixin",
    "TableParsingMixin",
]
