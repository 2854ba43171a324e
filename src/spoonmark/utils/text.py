"""Text processing utilities for Spoonmark.

Example:
    >>> from spoonmark.utils.text import slugify
    >>> slugify("Hello World!")
    'hello-world'
"""

from __future__ import annotations

import html as html_module
import re


def slugify(text: str) -> str:
    """Convert heading text to a URL-safe anchor slug.

    HTML entities are decoded first. Unicode word characters (letters, digits,
    underscore) are preserved so that headings written in any script still
    produce a usable anchor.

    Examples:
        >>> slugify("Hello World!")
        'hello-world'
        >>> slugify("Test &amp; Code")
        'test-code'
        >>> slugify("Café")
        'café'
    """
    if not text:
        return ""

    text = html_module.unescape(text).lower().strip()

    # Keep Unicode word characters (\w includes non-ASCII)
    text = re.sub(r"[^\w\s-]", "", text)
    text = re.sub(r"[-\s]+", "-", text)
    return text.strip("-")
