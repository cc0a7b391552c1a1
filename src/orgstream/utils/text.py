"""Text processing utilities for orgstream.

Example:
    >>> from orgstream.utils.text import slugify
    >>> slugify("Hello World!")
    'hello-world'
"""

from __future__ import annotations

import html as html_module
import re


def slugify(text: str, separator: str = "-") -> str:
    """Convert a headline title to an anchor-safe slug.

    Keeps Unicode word characters so non-English titles still produce
    readable anchors.

    Examples:
        >>> slugify("Tasks & Notes")
        'tasks-notes'
        >>> slugify("Café")
        'café'
    """
    if not text:
        return ""

    text = html_module.unescape(text).lower().strip()
    text = re.sub(r"[^\w\s-]", "", text)
    text = re.sub(r"[-\s]+", separator, text)
    return text.strip(separator)


def escape_text(text: str) -> str:
    """Escape ``&``, ``<`` and ``>`` for HTML text content.

    Examples:
        >>> escape_text("a < b & c")
        'a &lt; b &amp; c'
    """
    if not text:
        return ""
    return html_module.escape(text, quote=False)


def escape_attr(text: str) -> str:
    """Escape text for a double-quoted HTML attribute value.

    Same as :func:`escape_text` plus ``"``.

    Examples:
        >>> escape_attr('say "hi"')
        'say &quot;hi&quot;'
    """
    if not text:
        return ""
    return html_module.escape(text, quote=False).replace('"', "&quot;")
