"""Classifier mixin for lines starting with ``#``.

Covers block delimiters, keywords and comments.
"""

import re

from orgstream.scanner.lines import Line, LineKind

_BLOCK_BEGIN_RE = re.compile(r"#\+BEGIN_(\S+)(?:[ \t]+(.*?))?[ \t]*", re.IGNORECASE)
_BLOCK_END_RE = re.compile(r"#\+END_(\S+)[ \t]*", re.IGNORECASE)
# KEY may carry an optional [...] suffix, e.g. #+RESULTS[2f1d]:
_KEYWORD_RE = re.compile(r"#\+([^\s:\[]+(?:\[[^\]\n]*\])?):[ \t]*(.*?)[ \t]*")


class BlockClassifierMixin:
    """Mixin providing ``#``-line classification."""

    def _make_line(self, kind: LineKind, **fields: object) -> Line:
        """Create a Line for the current window. Implemented by Scanner."""
        raise NotImplementedError

    def _try_classify_hash_line(self, content: str) -> Line | None:
        """Classify a line whose content starts with ``#``.

        Args:
            content: Line content with leading whitespace stripped

        Returns:
            BLOCK_BEGIN, BLOCK_END, KEYWORD or COMMENT line, or None when
            the line is ordinary text (``#hashtag``).
        """
        if len(content) == 1 or content[1] in " \t":
            return self._make_line(LineKind.COMMENT, text=content[2:])

        if content[1] != "+":
            return None

        match = _BLOCK_BEGIN_RE.fullmatch(content)
        if match:
            return self._make_line(
                LineKind.BLOCK_BEGIN,
                name=match.group(1).lower(),
                value=match.group(2) or "",
            )

        match = _BLOCK_END_RE.fullmatch(content)
        if match:
            return self._make_line(LineKind.BLOCK_END, name=match.group(1).lower())

        match = _KEYWORD_RE.fullmatch(content)
        if match:
            value = match.group(2) or ""
            return self._make_line(
                LineKind.KEYWORD, name=match.group(1).upper(), value=value, text=value
            )

        return None

    def _is_block_end(self, content: str, name: str) -> bool:
        """Check whether content closes the raw block called ``name``."""
        match = _BLOCK_END_RE.fullmatch(content)
        return match is not None and match.group(1).lower() == name
