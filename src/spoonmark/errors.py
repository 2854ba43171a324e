"""Exception classes for Spoonmark.

Provides standardized exceptions for error handling throughout Spoonmark.

Only ``RecursionLimitExceeded`` and the internal invariant errors ever escape
``parse()``. ``MalformedTable`` and ``MalformedHttpRoute`` are raised by the
block sub-parsers and resolved by the formatter, which demotes the block to a
paragraph.
"""

from __future__ import annotations


class SpoonmarkError(Exception):
    """Base exception for all Spoonmark errors.

    Subclass this for specific error categories.
    """

    pass


class ParseError(SpoonmarkError):
    """Error during Markdown parsing.

    Raised when the parser encounters input it cannot represent.
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize parse error with optional location.

        Args:
            message: Error description
            lineno: Line number where error occurred (1-indexed)
            col_offset: Column offset where error occurred (1-indexed)
            source_file: Path to source file (optional)
        """
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset
        self.source_file = source_file

        # Build formatted message
        location = ""
        if source_file:
            location = f"{source_file}:"
        if lineno is not None:
            location += f"{lineno}:"
            if col_offset is not None:
                location += f"{col_offset}:"
        if location:
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")


class SegmentationGap(ParseError):
    """No block rule claimed the text at the cursor.

    The default rule table ends with a paragraph catch-all, so this only
    happens with a custom rule table. It signals a broken invariant, not bad
    input.
    """

    pass


class RecursionLimitExceeded(ParseError):
    """Nested quotes, notes, lists or inline spans went deeper than allowed.

    The whole parse fails; the location points at the block that crossed
    the configured ``max_depth``.
    """

    def __init__(
        self,
        max_depth: int,
        lineno: int | None = None,
        source_file: str | None = None,
    ) -> None:
        self.max_depth = max_depth
        super().__init__(
            f"nesting exceeds the maximum depth of {max_depth}",
            lineno=lineno,
            source_file=source_file,
        )


class MalformedTable(SpoonmarkError):
    """A table row does not have the same cell count as the header."""

    def __init__(self, expected: int, found: int) -> None:
        self.expected = expected
        self.found = found
        super().__init__(f"table row has {found} cells, header has {expected}")


class MalformedHttpRoute(SpoonmarkError):
    """Route line does not follow ``%% METHOD /path``."""

    pass


class UnknownBlockKind(SpoonmarkError):
    """The formatter received a block kind it has no handler for.

    This is a defect in a custom rule table or in Spoonmark itself.
    """

    def __init__(self, kind: object) -> None:
        self.kind = kind
        super().__init__(f"Illegal block kind encountered: {kind!r}")
