"""Utility modules for Spoonmark.

Provides:
- text: slugify for heading anchors
- logger: get_logger for logging
"""

from spoonmark.utils.logger import get_logger
from spoonmark.utils.text import slugify

__all__ = [
    "get_logger",
    "slugify",
]
