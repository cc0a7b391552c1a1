"""Construct-to-tag mapping tables.

The mapping table is the extensibility point of the exporter: a renderer
folds the same event stream into different output by swapping the table.

Example:
    >>> from dataclasses import replace
    >>> BOLD_AS_STRONG = replace(
    ...     HTML_TAGS,
    ...     inline={**HTML_TAGS.inline, InlineKind.BOLD: Tag("strong")},
    ... )
    >>> BOLD_AS_STRONG.inline[InlineKind.BOLD].open()
    '<strong>'

"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from orgstream.nodes import InlineKind, ListKind
from orgstream.utils.text import escape_attr


@dataclass(frozen=True, slots=True)
class Tag:
    """An element name with an optional CSS class."""

    name: str
    css_class: str | None = None

    def open(self, **attrs: str | None) -> str:
        """Opening tag; attributes with None values are omitted."""
        parts = [self.name]
        if self.css_class:
            parts.append(f'class="{escape_attr(self.css_class)}"')
        for key, value in attrs.items():
            if value is not None:
                parts.append(f'{key.rstrip("_")}="{escape_attr(value)}"')
        return f"<{' '.join(parts)}>"

    def close(self) -> str:
        return f"</{self.name}>"


@dataclass(frozen=True, slots=True)
class TagMapping:
    """Tags used by the HTML renderer.

    Attributes:
        inline: Tag per container or emphasis span kind
        lists: Tag per list kind
        blocks: Tag per greater block name; unknown names become a div with
            the block name as class
        preformatted: Block names whose body is written as escaped text
        raw_backends: Export block/snippet backends passed through verbatim
        suppressed_blocks: Block names omitted from output
        suppressed_drawers: Drawer names (upper-case) omitted from output

    """

    inline: Mapping[InlineKind, Tag] = field(default_factory=dict)
    lists: Mapping[ListKind, Tag] = field(default_factory=dict)
    blocks: Mapping[str, Tag] = field(default_factory=dict)
    paragraph: Tag = Tag("p")
    preformatted: frozenset[str] = frozenset({"src", "example"})
    raw_backends: frozenset[str] = frozenset({"html"})
    suppressed_blocks: frozenset[str] = frozenset({"comment"})
    suppressed_drawers: frozenset[str] = frozenset({"PROPERTIES", "LOGBOOK"})


HTML_TAGS = TagMapping(
    inline={
        InlineKind.BOLD: Tag("b"),
        InlineKind.ITALIC: Tag("i"),
        InlineKind.UNDERLINE: Tag("span", "underline"),
        InlineKind.VERBATIM: Tag("code"),
        InlineKind.CODE: Tag("code"),
        InlineKind.STRIKETHROUGH: Tag("del"),
        InlineKind.SUBSCRIPT: Tag("sub"),
        InlineKind.SUPERSCRIPT: Tag("sup"),
        InlineKind.LINK: Tag("a"),
    },
    lists={
        ListKind.UNORDERED: Tag("ul", "org-ul"),
        ListKind.ORDERED: Tag("ol", "org-ol"),
        ListKind.DESCRIPTIVE: Tag("dl", "org-dl"),
    },
    blocks={
        "quote": Tag("blockquote"),
        "center": Tag("div", "center"),
        "example": Tag("pre", "example"),
        "src": Tag("pre", "src"),
        "verse": Tag("p", "verse"),
    },
)
