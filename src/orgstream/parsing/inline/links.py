"""Link and timestamp recognition for the inline resolver.

Handles:
- Bracket links: [[target]] and [[target][description]]
- Angle links: <https://example.com>
- Plain links: https://example.com
- Timestamps: <2024-03-01 Fri> and [2024-03-01 Fri]

"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from orgstream.nodes import InlineKind, InlineSpan, LinkData
from orgstream.parsing.charsets import IMAGE_EXTENSIONS, PLAIN_LINK_TRAILING
from orgstream.parsing.timestamp import match_timestamp

if TYPE_CHECKING:
    from orgstream.config import ParseConfig

_SCHEME_RE = re.compile(r"([a-zA-Z][\w+.-]*):")
_ANGLE_LINK_RE = re.compile(r"<([a-zA-Z][\w+.-]*):([^<>\n\]]+)>")
_PLAIN_LINK_RE = re.compile(r"([a-zA-Z][\w+.-]*):([^\s()<>\[\]]+)")


def classify_link_target(target: str, has_description: bool = False) -> str:
    """Classify a link target into a LinkData kind.

    Examples:
        >>> classify_link_target("#install")
        'custom-id'
        >>> classify_link_target("./cat.png")
        'image'
        >>> classify_link_target("Some target")
        'internal'
    """
    if target.startswith("#"):
        return "custom-id"
    if target.startswith("*"):
        return "heading"

    scheme = _SCHEME_RE.match(target)
    is_file = target.startswith(("file:", "./", "../", "/", "~/"))
    if is_file or scheme:
        extension = target.rsplit(".", 1)[-1].lower() if "." in target else ""
        if not has_description and extension in IMAGE_EXTENSIONS:
            return "image"
        return "file" if is_file else "url"
    return "internal"


class LinkParsingMixin:
    """Link and timestamp recognition.

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

    def _try_bracket_link(
        self,
        text: str,
        pos: int,
        excluded: frozenset[InlineKind],
        depth: int,
    ) -> tuple[InlineSpan, int] | None:
        """Parse [[target]] or [[target][description]] at pos."""
        if not text.startswith("[[", pos):
            return None

        target_end = text.find("]", pos + 2)
        if target_end == -1:
            return None
        target = " ".join(text[pos + 2 : target_end].split())
        if not target or "[" in target:
            return None

        if text.startswith("]]", target_end):
            end = target_end + 2
            kind = classify_link_target(target)
            data = LinkData(target, kind)
            return InlineSpan(InlineKind.LINK, text[pos:end], text=target, data=data), end

        if not text.startswith("][", target_end):
            return None
        desc_end = text.find("]]", target_end + 2)
        if desc_end == -1:
            return None
        description = text[target_end + 2 : desc_end]
        end = desc_end + 2
        if not description:
            data = LinkData(target, classify_link_target(target))
            return InlineSpan(InlineKind.LINK, text[pos:end], text=target, data=data), end

        children = self._resolve(description, excluded, depth + 1, False)
        data = LinkData(target, classify_link_target(target, has_description=True))
        return (
            InlineSpan(InlineKind.LINK, text[pos:end], children=tuple(children), data=data),
            end,
        )

    def _try_angle_link(self, text: str, pos: int) -> tuple[InlineSpan, int] | None:
        """Parse <scheme:path> at pos."""
        match = _ANGLE_LINK_RE.match(text, pos)
        if match is None or match.group(1).lower() not in self._config.link_schemes:
            return None
        target = f"{match.group(1)}:{match.group(2)}"
        data = LinkData(target, classify_link_target(target))
        return InlineSpan(InlineKind.LINK, match.group(0), text=target, data=data), match.end()

    def _try_plain_link(self, text: str, pos: int) -> tuple[InlineSpan, int] | None:
        """Parse a bare scheme:path link starting at a word boundary."""
        match = _PLAIN_LINK_RE.match(text, pos)
        if match is None or match.group(1).lower() not in self._config.link_schemes:
            return None
        path = match.group(2).rstrip(PLAIN_LINK_TRAILING)
        if not path:
            return None
        target = f"{match.group(1)}:{path}"
        end = pos + len(target)
        data = LinkData(target, classify_link_target(target))
        return InlineSpan(InlineKind.LINK, target, text=target, data=data), end

    def _try_timestamp(self, text: str, pos: int) -> tuple[InlineSpan, int] | None:
        """Parse an active or inactive timestamp at pos."""
        if pos + 1 >= len(text) or not text[pos + 1].isdigit():
            return None
        matched = match_timestamp(text, pos)
        if matched is None:
            return None
        timestamp, end = matched
        return InlineSpan(InlineKind.TIMESTAMP, text[pos:end], text=text[pos:end], data=timestamp), end
