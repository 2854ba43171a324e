"""Inline tokens and delimiter matching for Spoonmark parser.

Inline parsing runs in three phases: the text is tokenized in one pass,
emphasis delimiters are paired with a delimiter stack, and the tree is built
from the recorded pairs. Every phase is linear in the number of tokens, so
long runs of unmatched markers never trigger a rescan.

Thread Safety:
    Tokens are immutable. A MatchRegistry is created per inline parse and
    never shared.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, NamedTuple, TypeAlias

DelimiterChar: TypeAlias = Literal["*", "_"]


class DelimiterToken(NamedTuple):
    """A run of ``*`` or ``_`` that may open or close a span.

    Attributes:
        char: The delimiter character.
        run_length: Number of consecutive delimiter characters.
        can_open: Followed by non-whitespace (``_`` also not after alnum).
        can_close: Preceded by non-whitespace (``_`` also not before alnum).

    """

    char: DelimiterChar
    run_length: int
    can_open: bool
    can_close: bool


class TextToken(NamedTuple):
    """Literal text."""

    content: str


class CodeSpanToken(NamedTuple):
    """Verbatim code span content."""

    code: str


class NodeToken(NamedTuple):
    """An inline node built during tokenization (links)."""

    node: object


InlineToken: TypeAlias = DelimiterToken | TextToken | CodeSpanToken | NodeToken


@dataclass(slots=True)
class DelimiterMatch:
    """Record of a matched opener-closer pair.

    Attributes:
        opener_idx: Index of the opener token in the token list.
        closer_idx: Index of the closer token in the token list.
        match_count: Number of delimiters matched (1 for emphasis, 2 for strong).

    """

    opener_idx: int
    closer_idx: int
    match_count: int


@dataclass(slots=True)
class MatchRegistry:
    """External tracking for delimiter matches.

    Keeps match state out of the immutable tokens.

    Usage:
        registry = MatchRegistry()
        registry.record_match(opener_idx=0, closer_idx=5, count=2)
        registry.remaining_count(0, original_count=3)  # 1

    """

    matches: list[DelimiterMatch] = field(default_factory=list)
    consumed: dict[int, int] = field(default_factory=dict)
    # Opener index -> its matches, in the order they were recorded
    _opener_matches: dict[int, list[DelimiterMatch]] = field(default_factory=dict)

    def record_match(self, opener_idx: int, closer_idx: int, count: int) -> None:
        """Record a delimiter match.

        Args:
            opener_idx: Index of the opening delimiter token.
            closer_idx: Index of the closing delimiter token.
            count: Number of delimiters matched (1 or 2).
        """
        match = DelimiterMatch(opener_idx, closer_idx, count)
        self.matches.append(match)
        self._opener_matches.setdefault(opener_idx, []).append(match)
        self.consumed[opener_idx] = self.consumed.get(opener_idx, 0) + count
        self.consumed[closer_idx] = self.consumed.get(closer_idx, 0) + count

    def remaining_count(self, idx: int, original_count: int) -> int:
        """Get the number of unused delimiters of the token at ``idx``."""
        return original_count - self.consumed.get(idx, 0)

    def get_matches_for_opener(self, idx: int) -> list[DelimiterMatch]:
        """Get all match records where ``idx`` is the opener.

        ``***text***`` gives two records for one opener; closer indices never
        decrease along the list.
        """
        return self._opener_matches.get(idx, [])


def process_emphasis(tokens: list[InlineToken]) -> MatchRegistry:
    """Pair emphasis delimiters using a delimiter stack.

    Each closer pairs with the nearest open delimiter of the same character,
    taking two markers when both sides have two left and one otherwise. A
    closer with markers left over keeps pairing with older openers. Pairing
    an opener discards every delimiter opened after it, so spans nest and
    never overlap.

    Every step either consumes markers or moves to the next token, and each
    token is pushed at most once, so the pass is linear.

    Args:
        tokens: Tokens from the inline tokenizer

    Returns:
        MatchRegistry with all matches

    """
    registry = MatchRegistry()
    # Character -> indices of openers that still have markers, innermost last
    stacks: dict[str, list[int]] = {"*": [], "_": []}

    idx = 0
    tokens_len = len(tokens)
    while idx < tokens_len:
        token = tokens[idx]
        if not isinstance(token, DelimiterToken):
            idx += 1
            continue

        stack = stacks[token.char]
        closer_remaining = registry.remaining_count(idx, token.run_length)
        if token.can_close and stack:
            opener_idx = stack[-1]
            # Only delimiter tokens are ever pushed
            opener_length = tokens[opener_idx].run_length  # type: ignore[union-attr]
            opener_remaining = registry.remaining_count(opener_idx, opener_length)
            count = 2 if opener_remaining >= 2 and closer_remaining >= 2 else 1
            registry.record_match(opener_idx, idx, count)

            for other in stacks.values():
                while other and other[-1] > opener_idx:
                    other.pop()
            if opener_remaining == count:
                stack.pop()
            if closer_remaining == count:
                idx += 1
            continue

        if token.can_open and closer_remaining:
            stack.append(idx)
        idx += 1

    return registry


__all__ = [
    "CodeSpanToken",
    "DelimiterChar",
    "DelimiterMatch",
    "DelimiterToken",
    "InlineToken",
    "MatchRegistry",
    "NodeToken",
    "TextToken",
    "process_emphasis",
]
