"""Emphasis recognition for the inline resolver.

Org emphasis is delimited by a single marker character on each side::

    *bold* /italic/ _underline_ =verbatim= ~code~ +strike+

An opener must sit at the start of the text or after whitespace or one of
``-({'"``, and must be followed by a non-whitespace character. The closer
is the nearest same marker preceded by non-whitespace and followed by the
end of text, whitespace or one of ``-.,;:!?')}["\\``.

Thread Safety:
Stateless mixin; all state lives in the call arguments.

"""

from __future__ import annotations

from typing import TYPE_CHECKING

from orgstream.nodes import EMPHASIS_MARKERS, InlineKind, InlineSpan
from orgstream.parsing.charsets import (
    EMPHASIS_MAX_NEWLINES,
    EMPHASIS_POST,
    EMPHASIS_PRE,
    is_whitespace,
)

if TYPE_CHECKING:
    from orgstream.config import ParseConfig


class EmphasisMixin:
    """Emphasis span recognition.

    Required Host Attributes:
        - _config: ParseConfig

    Required Host Methods:
        - _resolve(text, excluded, depth, allow_links) -> list[InlineSpan]

    """

    _config: ParseConfig

    def _resolve(
        self,
        text: str,
        excluded: frozenset[InlineKind],
        depth: int,
        allow_links: bool,
    ) -> list[InlineSpan]:
        raise NotImplementedError

    def _try_emphasis(
        self,
        text: str,
        pos: int,
        excluded: frozenset[InlineKind],
        depth: int,
        allow_links: bool,
    ) -> tuple[InlineSpan, int] | None:
        """Try to recognize an emphasis span opening at pos."""
        marker = text[pos]
        kind = EMPHASIS_MARKERS[marker]
        if kind in excluded or depth >= self._config.emphasis_depth:
            return None

        before = text[pos - 1] if pos > 0 else ""
        if not is_whitespace(before) and before not in EMPHASIS_PRE:
            return None
        if pos + 1 >= len(text) or text[pos + 1].isspace():
            return None

        close = self._find_emphasis_close(text, pos, marker)
        if close == -1:
            return None

        body = text[pos + 1 : close]
        raw = text[pos : close + 1]
        if kind in (InlineKind.VERBATIM, InlineKind.CODE):
            return InlineSpan(kind, raw, text=body, marker=marker), close + 1

        children = self._resolve(body, excluded | {kind}, depth + 1, allow_links)
        return InlineSpan(kind, raw, children=tuple(children), marker=marker), close + 1

    def _find_emphasis_close(self, text: str, pos: int, marker: str) -> int:
        """Find the nearest valid closer for an opener at pos, or -1."""
        search = pos + 2
        text_len = len(text)
        while True:
            close = text.find(marker, search)
            if close == -1:
                return -1
            if text.count("\n", pos + 1, close) > EMPHASIS_MAX_NEWLINES:
                return -1

            after = text[close + 1] if close + 1 < text_len else ""
            if not text[close - 1].isspace() and (is_whitespace(after) or after in EMPHASIS_POST):
                return close
            search = close + 1
