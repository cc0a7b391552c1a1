"""Special inline constructs.

Handles:
- Line breaks: \\\\ at end of line
- Entities: \\alpha, \\mdash{}
- Macros: {{{name(arg1, arg2)}}}
- Export snippets: @@html:<b>@@
- Subscripts and superscripts: H_2O, x^{n+1}

"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from orgstream.nodes import EntityData, InlineKind, InlineSpan, MacroData, SnippetData
from orgstream.parsing.inline.entities import ENTITIES
from orgstream.utils.logger import get_logger

if TYPE_CHECKING:
    from orgstream.config import ParseConfig

logger = get_logger(__name__)

_LINE_BREAK_RE = re.compile(r"\\\\[ \t]*(?=\n|$)")
_ENTITY_RE = re.compile(r"\\([a-zA-Z]+)(\{\})?")
_MACRO_RE = re.compile(r"\{\{\{([a-zA-Z][\w-]*)(?:\((.*?)\))?\}\}\}")
_SNIPPET_RE = re.compile(r"@@([a-zA-Z0-9-]+):(.*?)@@", re.DOTALL)
_SCRIPT_RE = re.compile(r"\*|[+-]?[A-Za-z0-9.,\\]*[A-Za-z0-9]")
_MACRO_ARG_SPLIT_RE = re.compile(r"(?<!\\),")


def split_macro_args(args: str) -> tuple[str, ...]:
    """Split macro arguments on unescaped commas.

    Example:
        >>> split_macro_args("a, b\\\\, c")
        ('a', 'b, c')
    """
    if not args:
        return ()
    parts = _MACRO_ARG_SPLIT_RE.split(args)
    return tuple(part.replace("\\,", ",").strip() for part in parts)


class SpecialInlineMixin:
    """Entities, macros, snippets, line breaks, sub/superscripts.

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

    def _try_backslash(self, text: str, pos: int) -> tuple[InlineSpan, int] | None:
        """Parse a line break or an entity at pos."""
        match = _LINE_BREAK_RE.match(text, pos)
        if match:
            return InlineSpan(InlineKind.LINE_BREAK, match.group(0)), match.end()

        if not self._config.entities:
            return None
        match = _ENTITY_RE.match(text, pos)
        if match is None:
            return None
        name = match.group(1)
        entry = ENTITIES.get(name)
        if entry is None:
            logger.debug("Unknown entity \\%s left as text", name)
            return None
        html, utf8 = entry
        data = EntityData(name, html, utf8)
        return InlineSpan(InlineKind.ENTITY, match.group(0), text=utf8, data=data), match.end()

    def _try_macro(self, text: str, pos: int) -> tuple[InlineSpan, int] | None:
        match = _MACRO_RE.match(text, pos)
        if match is None:
            return None
        data = MacroData(match.group(1).lower(), split_macro_args(match.group(2) or ""))
        return InlineSpan(InlineKind.MACRO, match.group(0), data=data), match.end()

    def _try_snippet(self, text: str, pos: int) -> tuple[InlineSpan, int] | None:
        match = _SNIPPET_RE.match(text, pos)
        if match is None:
            return None
        data = SnippetData(match.group(1).lower(), match.group(2))
        return InlineSpan(InlineKind.SNIPPET, match.group(0), text=match.group(2), data=data), match.end()

    def _try_script(
        self,
        text: str,
        pos: int,
        excluded: frozenset[InlineKind],
        depth: int,
        allow_links: bool,
    ) -> tuple[InlineSpan, int] | None:
        """Parse a subscript (``_``) or superscript (``^``) at pos.

        The marker must follow a non-whitespace character.
        """
        if not self._config.sub_superscripts or pos == 0 or text[pos - 1].isspace():
            return None
        kind = InlineKind.SUBSCRIPT if text[pos] == "_" else InlineKind.SUPERSCRIPT

        if text.startswith("{", pos + 1):
            close = text.find("}", pos + 2)
            if close == -1 or "\n" in text[pos + 2 : close]:
                return None
            body = text[pos + 2 : close]
            if not body:
                return None
            children = self._resolve(body, excluded, depth + 1, allow_links)
            return InlineSpan(kind, text[pos : close + 1], children=tuple(children)), close + 1

        match = _SCRIPT_RE.match(text, pos + 1)
        if match is None:
            return None
        body = match.group(0)
        child = InlineSpan(InlineKind.TEXT, body, text=body)
        return InlineSpan(kind, text[pos : match.end()], children=(child,)), match.end()
