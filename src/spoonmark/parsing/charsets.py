"""Character sets for O(1) classification.

All sets are frozensets: immutable, shared, no per-call allocation.

Usage:
    from spoonmark.parsing.charsets import ASCII_PUNCTUATION

    if char in ASCII_PUNCTUATION:
        ...
"""

# Characters a backslash can escape
ASCII_PUNCTUATION: frozenset[str] = frozenset("!\"#$%&'()*+,-./:;<=>?@[\\]^_`{|}~")

EMPHASIS_MARKERS: frozenset[str] = frozenset("*_")

RULER_MARKERS: frozenset[str] = frozenset("*-_")

HTTP_METHODS: frozenset[str] = frozenset(
    {"GET", "POST", "PUT", "PATCH", "DELETE", "HEAD"}
)

NOTE_KINDS: frozenset[str] = frozenset({"info", "warn", "danger"})
