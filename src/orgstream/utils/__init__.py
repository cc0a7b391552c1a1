"""Utility modules for orgstream.

Provides:
- text: slugify, escape_text, escape_attr for HTML output
- logger: get_logger for logging
"""

from orgstream.utils.logger import get_logger
from orgstream.utils.text import escape_attr, escape_text, slugify

__all__ = [
    "escape_attr",
    "escape_text",
    "get_logger",
    "slugify",
]
