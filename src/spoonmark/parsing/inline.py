"""Inline parsing for Spoonmark parser.

Turns a line or phrase into a flat tuple of inline nodes. Priority at each
position of the left to right scan:

1. Backslash escape: ``\\*`` becomes a literal ``*``; the backslash is dropped.
2. Code span: a run of N backticks up to the next run of exactly N backticks.
   The content is copied verbatim and never scanned again.
3. Strong / emphasis: ``**text**`` / ``*text*`` (or underscores). Spans nest.
4. Link: ``[label](target)``. The label is parsed recursively, the target is
   plain text.
5. Anything else is text. Adjacent text is merged into one Text node.

Code span closers and bracket pairs are indexed up front, and emphasis is
paired afterwards with a delimiter stack (see ``delimiters``), so no marker
is ever searched for twice.

Thread Safety:
    All methods use call-local state only.

"""

from __future__ import annotations

from bisect import bisect_left
from itertools import groupby
from operator import attrgetter
from typing import TYPE_CHECKING

from spoonmark.nodes import CodeSpan, Emphasis, Link, Strong, Text
from spoonmark.parsing.charsets import ASCII_PUNCTUATION, EMPHASIS_MARKERS
from spoonmark.parsing.delimiters import (
    CodeSpanToken,
    DelimiterToken,
    NodeToken,
    TextToken,
    process_emphasis,
)

if TYPE_CHECKING:
    from spoonmark.nodes import Inline
    from spoonmark.parsing.delimiters import DelimiterMatch, InlineToken, MatchRegistry

# Characters that may start something other than plain text
_SPECIAL_CHARS = frozenset("\\`[") | EMPHASIS_MARKERS


def _run_length(text: str, pos: int, char: str) -> int:
    end = pos
    text_len = len(text)
    while end < text_len and text[end] == char:
        end += 1
    return end - pos


def backtick_runs(text: str) -> dict[int, list[int]]:
    """Index the maximal backtick runs of ``text`` by length.

    Returns a mapping of run length to the sorted start positions of the
    runs with that length.
    """
    runs: dict[int, list[int]] = {}
    pos = text.find("`")
    while pos != -1:
        run = _run_length(text, pos, "`")
        runs.setdefault(run, []).append(pos)
        pos = text.find("`", pos + run)
    return runs


def find_code_span_close(runs: dict[int, list[int]], start: int, count: int) -> int:
    """Find a backtick run of exactly ``count`` characters at or after ``start``.

    Args:
        runs: Index from ``backtick_runs``
        start: End of the opening run
        count: Length of the opening run

    Returns:
        The index of the closing run, or -1

    """
    starts = runs.get(count)
    if not starts:
        return -1
    i = bisect_left(starts, start)
    return starts[i] if i < len(starts) else -1


def match_brackets(text: str, runs: dict[int, list[int]]) -> dict[int, int]:
    """Pair balanced ``[]`` and ``()`` in one pass.

    Escapes and code spans are skipped the same way the tokenizer skips them,
    so every pair lines up with the positions it visits.

    Returns:
        Mapping of opener position to the position of its closer. Unbalanced
        openers are absent.

    """
    pairs: dict[int, int] = {}
    brackets: list[int] = []
    parens: list[int] = []
    pos = 0
    text_len = len(text)
    while pos < text_len:
        char = text[pos]
        if char == "\\" and pos + 1 < text_len and text[pos + 1] in ASCII_PUNCTUATION:
            pos += 2
            continue
        if char == "`":
            run = _run_length(text, pos, "`")
            close = find_code_span_close(runs, pos + run, run)
            pos = close + run if close != -1 else pos + run
            continue

        if char == "[":
            brackets.append(pos)
        elif char == "]" and brackets:
            pairs[brackets.pop()] = pos
        elif char == "(":
            parens.append(pos)
        elif char == ")" and parens:
            pairs[parens.pop()] = pos
        pos += 1
    return pairs


def unescape(text: str) -> str:
    """Resolve backslash escapes of ASCII punctuation."""
    if "\\" not in text:
        return text
    result: list[str] = []
    pos = 0
    text_len = len(text)
    while pos < text_len:
        char = text[pos]
        if char == "\\" and pos + 1 < text_len and text[pos + 1] in ASCII_PUNCTUATION:
            result.append(text[pos + 1])
            pos += 2
            continue
        result.append(char)
        pos += 1
    return "".join(result)


class InlineParsingMixin:
    """Inline span parsing.

    Required Host Methods:
        - _check_depth(depth, lineno) -> None

    """

    def _parse_inline(self, text: str, lineno: int, depth: int = 0) -> tuple[Inline, ...]:
        """Parse inline content into a tuple of inline nodes.

        Args:
            text: Raw inline text
            lineno: Line of the enclosing block, for error reporting
            depth: Span nesting depth of ``text``

        """
        if not text:
            return ()
        self._check_depth(depth, lineno)

        tokens = self._tokenize_inline(text, lineno, depth)
        registry = process_emphasis(tokens)
        return self._build_inline(tokens, registry, 0, len(tokens), lineno, depth)

    def _tokenize_inline(self, text: str, lineno: int, depth: int) -> list[InlineToken]:
        """Split ``text`` into text, code span, link and delimiter tokens."""
        runs = backtick_runs(text)
        pairs = match_brackets(text, runs)
        tokens: list[InlineToken] = []
        tokens_append = tokens.append
        pos = 0
        text_len = len(text)

        while pos < text_len:
            char = text[pos]

            if char == "\\" and pos + 1 < text_len and text[pos + 1] in ASCII_PUNCTUATION:
                tokens_append(TextToken(text[pos + 1]))
                pos += 2
                continue

            # Code span: handled before emphasis so its content stays verbatim
            if char == "`":
                run = _run_length(text, pos, "`")
                close = find_code_span_close(runs, pos + run, run)
                if close == -1:
                    tokens_append(TextToken("`" * run))
                    pos += run
                else:
                    tokens_append(CodeSpanToken(text[pos + run : close]))
                    pos = close + run
                continue

            if char in EMPHASIS_MARKERS:
                run = _run_length(text, pos, char)
                after = pos + run
                before_char = text[pos - 1] if pos > 0 else ""
                after_char = text[after] if after < text_len else ""
                can_open = (
                    bool(after_char)
                    and not after_char.isspace()
                    and (char != "_" or not before_char.isalnum())
                )
                can_close = (
                    bool(before_char)
                    and not before_char.isspace()
                    and (char != "_" or not after_char.isalnum())
                )
                tokens_append(DelimiterToken(char, run, can_open, can_close))  # type: ignore[arg-type]
                pos = after
                continue

            if char == "[":
                link = self._try_parse_link(text, pos, pairs, lineno, depth)
                if link is None:
                    tokens_append(TextToken("["))
                    pos += 1
                else:
                    tokens_append(NodeToken(link[0]))
                    pos = link[1]
                continue

            start = pos
            pos += 1
            while pos < text_len and text[pos] not in _SPECIAL_CHARS:
                pos += 1
            tokens_append(TextToken(text[start:pos]))

        return tokens

    def _try_parse_link(
        self, text: str, pos: int, pairs: dict[int, int], lineno: int, depth: int
    ) -> tuple[Link, int] | None:
        """Try to parse ``[label](target)`` at ``pos``.

        Returns (Link, position after the closing paren) or None.
        """
        label_end = pairs.get(pos, -1)
        if label_end == -1 or text[label_end + 1 : label_end + 2] != "(":
            return None
        target_end = pairs.get(label_end + 1, -1)
        if target_end == -1:
            return None

        children = self._parse_inline(text[pos + 1 : label_end], lineno, depth + 1)
        url = unescape(text[label_end + 2 : target_end].strip())
        return Link(url=url, children=children), target_end + 1

    def _build_inline(
        self,
        tokens: list[InlineToken],
        registry: MatchRegistry,
        start: int,
        end: int,
        lineno: int,
        depth: int,
    ) -> tuple[Inline, ...]:
        """Build nodes from ``tokens[start:end]``.

        Unused delimiter markers become text. An opener is followed by its
        span, and the scan resumes at the span's closer, which may itself
        open another span or carry markers left over.
        """
        nodes: list[Inline] = []
        buffer: list[str] = []

        def flush_text() -> None:
            if buffer:
                nodes.append(Text(content="".join(buffer)))
                buffer.clear()

        idx = start
        while idx < end:
            match tokens[idx]:
                case TextToken(content=content):
                    buffer.append(content)
                    idx += 1
                case CodeSpanToken(code=code):
                    flush_text()
                    nodes.append(CodeSpan(code=code))
                    idx += 1
                case NodeToken(node=node):
                    flush_text()
                    nodes.append(node)  # type: ignore[arg-type]
                    idx += 1
                case DelimiterToken(char=char, run_length=run_length):
                    remaining = registry.remaining_count(idx, run_length)
                    if remaining:
                        buffer.append(char * remaining)
                    matches = registry.get_matches_for_opener(idx)
                    if not matches:
                        idx += 1
                        continue
                    flush_text()
                    nodes.append(self._build_span(tokens, registry, idx, matches, lineno, depth))
                    idx = matches[-1].closer_idx

        flush_text()
        return tuple(nodes)

    def _build_span(
        self,
        tokens: list[InlineToken],
        registry: MatchRegistry,
        opener_idx: int,
        matches: list[DelimiterMatch],
        lineno: int,
        depth: int,
    ) -> Strong | Emphasis:
        """Build the spans opened by the delimiter at ``opener_idx``.

        Matches sharing a closer wrap the same content, the markers paired
        first outermost, so ``***a***`` is Strong around Emphasis. A later
        closer wraps everything built so far plus the content up to it.
        """
        enclosing = len(matches)
        self._check_depth(depth + enclosing, lineno)

        children: tuple[Inline, ...] = ()
        boundary = opener_idx + 1
        for closer_idx, group in groupby(matches, key=attrgetter("closer_idx")):
            content = children + self._build_inline(
                tokens, registry, boundary, closer_idx, lineno, depth + enclosing
            )
            group_matches = list(group)
            for pair in reversed(group_matches):
                if pair.match_count == 2:
                    content = (Strong(children=content),)
                else:
                    content = (Emphasis(children=content),)
            children = content
            enclosing -= len(group_matches)
            boundary = closer_idx + 1

        return children[0]  # type: ignore[return-value]
