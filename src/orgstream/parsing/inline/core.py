"""Core inline resolution for orgstream.

Turns the text of a paragraph, headline title, table cell or item tag into
a tuple of InlineSpan values. The concatenated ``raw`` of the returned
top-level spans always equals the input text exactly.

Resolution is a single left-to-right scan. At every position that can
start a construct (see INLINE_TRIGGER_RE) the recognizers are tried in a
fixed order; the first that succeeds produces a span and scanning resumes
after it. Text between recognized spans becomes TEXT spans.

Thread Safety:
An InlineResolver holds only its immutable config. Safe to share.

"""

from __future__ import annotations

from orgstream.config import ParseConfig, get_parse_config
from orgstream.nodes import EMPHASIS_MARKERS, InlineKind, InlineSpan
from orgstream.parsing.charsets import INLINE_TRIGGER_RE
from orgstream.parsing.inline.emphasis import EmphasisMixin
from orgstream.parsing.inline.links import LinkParsingMixin
from orgstream.parsing.inline.special import SpecialInlineMixin

_NO_EXCLUSIONS: frozenset[InlineKind] = frozenset()


class InlineResolver(EmphasisMixin, LinkParsingMixin, SpecialInlineMixin):
    """Resolve Org inline markup into spans.

    Usage:
        >>> resolver = InlineResolver()
        >>> [span.kind.name for span in resolver.resolve("a *b* c")]
        ['TEXT', 'BOLD', 'TEXT']

    """

    __slots__ = ("_config",)

    def __init__(self, config: ParseConfig | None = None) -> None:
        self._config = config if config is not None else get_parse_config()

    @property
    def config(self) -> ParseConfig:
        return self._config

    def resolve(self, text: str) -> tuple[InlineSpan, ...]:
        """Resolve text into top-level inline spans."""
        if not text:
            return ()
        return tuple(self._resolve(text, _NO_EXCLUSIONS, 0, True))

    def _resolve(
        self,
        text: str,
        excluded: frozenset[InlineKind],
        depth: int,
        allow_links: bool,
    ) -> list[InlineSpan]:
        spans: list[InlineSpan] = []
        append = spans.append
        text_start = 0
        pos = 0
        search = INLINE_TRIGGER_RE.search

        while True:
            trigger = search(text, pos)
            if trigger is None:
                break
            start = trigger.start()
            result = self._try_at(text, start, excluded, depth, allow_links)
            if result is None:
                pos = start + 1
                continue

            span, end = result
            if text_start < start:
                chunk = text[text_start:start]
                append(InlineSpan(InlineKind.TEXT, chunk, text=chunk))
            append(span)
            pos = text_start = end

        if text_start < len(text):
            chunk = text[text_start:]
            append(InlineSpan(InlineKind.TEXT, chunk, text=chunk))
        return spans

    def _try_at(
        self,
        text: str,
        pos: int,
        excluded: frozenset[InlineKind],
        depth: int,
        allow_links: bool,
    ) -> tuple[InlineSpan, int] | None:
        """Try every recognizer that can start with text[pos]."""
        char = text[pos]

        match char:
            case "[":
                if allow_links and text.startswith("[[", pos):
                    return self._try_bracket_link(text, pos, excluded, depth)
                return self._try_timestamp(text, pos)
            case "<":
                result = self._try_timestamp(text, pos)
                if result is None and allow_links:
                    result = self._try_angle_link(text, pos)
                return result
            case "\\":
                return self._try_backslash(text, pos)
            case "{":
                return self._try_macro(text, pos)
            case "@":
                return self._try_snippet(text, pos)
            case "^":
                return self._try_script(text, pos, excluded, depth, allow_links)
            case _ if char in EMPHASIS_MARKERS:
                result = self._try_emphasis(text, pos, excluded, depth, allow_links)
                if result is None and char == "_":
                    result = self._try_script(text, pos, excluded, depth, allow_links)
                return result
            case _ if allow_links:
                return self._try_plain_link(text, pos)
        return None
