"""Optional materialized document tree.

The parser never needs a tree; ``build_tree`` folds an event stream into
one for consumers that want random access to headlines and their content.

Element is a tagged variant: ``kind`` selects which of ``payload``,
``children``, ``spans`` and ``text`` are meaningful.

    =============== ================ ================= ========= ==========
    kind            payload          children          spans     text
    =============== ================ ================= ========= ==========
    PARAGRAPH                                          content
    LIST            ListInfo         LIST_ITEM
    LIST_ITEM       ListItemInfo     elements
    TABLE           rows (tuple)
    GREATER_BLOCK   BlockInfo        elements          verse     raw body
    DRAWER          DrawerInfo       elements
    COMMENT                                                      comment
    KEYWORD         Keyword
    PROPERTY        NodeProperty
    CLOCK           Clock
    HORIZONTAL_RULE
    =============== ================ ================= ========= ==========

Example:
    >>> from orgstream import parse_events
    >>> doc = build_tree(parse_events("* A\\n:PROPERTIES:\\n:ID: 1\\n:END:\\n** B"))
    >>> [h.title_text for h in doc.headlines_iter()]
    ['A', 'B']
    >>> doc.headlines[0].get_property("id")
    '1'

"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

from orgstream.errors import ParseError
from orgstream.events import START_END_PAIRS, Event, EventType
from orgstream.nodes import Clock, Headline, InlineKind, InlineSpan, NodeProperty


class ElementKind(Enum):
    """Kinds of section element."""

    PARAGRAPH = auto()
    LIST = auto()
    LIST_ITEM = auto()
    TABLE = auto()
    GREATER_BLOCK = auto()
    DRAWER = auto()
    COMMENT = auto()
    KEYWORD = auto()
    PROPERTY = auto()
    CLOCK = auto()
    HORIZONTAL_RULE = auto()


@dataclass(frozen=True, slots=True)
class Element:
    kind: ElementKind
    payload: Any = None
    children: tuple[Element, ...] = ()
    spans: tuple[InlineSpan, ...] = ()
    text: str = ""
    lineno: int = 0

    def walk(self) -> Iterator[Element]:
        """Yield this element and all nested elements, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()


@dataclass(frozen=True, slots=True)
class Section:
    elements: tuple[Element, ...] = ()

    def walk(self) -> Iterator[Element]:
        for element in self.elements:
            yield from element.walk()

    def keywords(self) -> dict[str, str]:
        """Top-level ``#+KEY: value`` lines of this section."""
        return {
            element.payload.key: element.payload.value
            for element in self.elements
            if element.kind is ElementKind.KEYWORD
        }


@dataclass(frozen=True, slots=True)
class HeadlineNode:
    """A headline with its section and child headlines."""

    info: Headline
    section: Section | None = None
    children: tuple[HeadlineNode, ...] = ()
    lineno: int = 0

    @property
    def level(self) -> int:
        return self.info.level

    @property
    def title_text(self) -> str:
        return self.info.title_text

    def properties(self) -> dict[str, str]:
        """Properties from the PROPERTIES drawer of this headline's section.

        Keys keep their source spelling; later duplicates win.
        """
        result: dict[str, str] = {}
        if self.section is None:
            return result
        for element in self.section.elements:
            if element.kind is ElementKind.DRAWER and element.payload.name.upper() == "PROPERTIES":
                for child in element.children:
                    if child.kind is ElementKind.PROPERTY:
                        prop: NodeProperty = child.payload
                        result[prop.key] = prop.value
        return result

    def get_property(self, key: str, default: str | None = None) -> str | None:
        """Look up a property; keys are case-insensitive."""
        wanted = key.upper()
        for name, value in self.properties().items():
            if name.upper() == wanted:
                return value
        return default

    def clocks(self) -> list[Clock]:
        """Clock entries of this headline's section, including LOGBOOK drawers."""
        if self.section is None:
            return []
        return [
            element.payload for element in self.section.walk() if element.kind is ElementKind.CLOCK
        ]

    def walk(self) -> Iterator[HeadlineNode]:
        yield self
        for child in self.children:
            yield from child.walk()


@dataclass(frozen=True, slots=True)
class Document:
    """A parsed document: optional preamble plus top-level headlines."""

    preamble: Section | None = None
    headlines: tuple[HeadlineNode, ...] = ()

    def headlines_iter(self) -> Iterator[HeadlineNode]:
        """Every headline, depth first in document order."""
        for headline in self.headlines:
            yield from headline.walk()

    def keywords(self) -> dict[str, str]:
        """``#+KEY: value`` lines of the preamble."""
        if self.preamble is None:
            return {}
        return self.preamble.keywords()


# =============================================================================
# Builder
# =============================================================================


_ELEMENT_KINDS: dict[EventType, ElementKind] = {
    EventType.PARAGRAPH_START: ElementKind.PARAGRAPH,
    EventType.LIST_START: ElementKind.LIST,
    EventType.LIST_ITEM_START: ElementKind.LIST_ITEM,
    EventType.TABLE_START: ElementKind.TABLE,
    EventType.GREATER_BLOCK_START: ElementKind.GREATER_BLOCK,
    EventType.DRAWER_START: ElementKind.DRAWER,
}

_SINGLE_KINDS: dict[EventType, ElementKind] = {
    EventType.COMMENT: ElementKind.COMMENT,
    EventType.KEYWORD: ElementKind.KEYWORD,
    EventType.PROPERTY: ElementKind.PROPERTY,
    EventType.CLOCK: ElementKind.CLOCK,
    EventType.HORIZONTAL_RULE: ElementKind.HORIZONTAL_RULE,
}


@dataclass(slots=True)
class _Frame:
    """A construct under construction."""

    start: Event | None
    elements: list[Element] = field(default_factory=list)
    headlines: list[HeadlineNode] = field(default_factory=list)
    spans: list[InlineSpan] = field(default_factory=list)
    text: list[str] = field(default_factory=list)
    rows: list[Any] = field(default_factory=list)
    section: Section | None = None
    preamble: Section | None = None


def build_tree(events: Iterable[Event]) -> Document:
    """Fold an event stream into a Document.

    Raises:
        ParseError: If the events are not balanced
    """
    root = _Frame(None)
    stack = [root]
    inline_depth = 0

    for event in events:
        event_type = event.type
        if inline_depth:
            # Container spans already carry their children
            if event_type is EventType.INLINE_START:
                inline_depth += 1
            elif event_type is EventType.INLINE_END:
                inline_depth -= 1
            continue

        top = stack[-1]
        if event_type is EventType.INLINE_START:
            top.spans.append(event.payload)
            inline_depth = 1
        elif event_type is EventType.INLINE:
            top.spans.append(event.payload)
        elif event_type is EventType.TEXT:
            if _is_raw_body(top):
                top.text.append(event.payload)
            else:
                top.spans.append(InlineSpan(InlineKind.TEXT, event.payload, text=event.payload))
        elif event_type is EventType.TABLE_ROW:
            top.rows.append(event.payload)
        elif event_type in _SINGLE_KINDS:
            kind = _SINGLE_KINDS[event_type]
            if kind is ElementKind.COMMENT:
                element = Element(kind, text=event.payload, lineno=event.lineno)
            else:
                element = Element(kind, event.payload, lineno=event.lineno)
            top.elements.append(element)
        elif event.is_start:
            stack.append(_Frame(event))
        elif event.is_end:
            if len(stack) < 2 or START_END_PAIRS[stack[-1].start.type] is not event_type:  # type: ignore[union-attr]
                raise ParseError(f"unbalanced event stream at {event_type.name}", lineno=event.lineno)
            frame = stack.pop()
            _attach(frame, event, stack[-1])

    if len(stack) != 1:
        raise ParseError("unbalanced event stream: events ended with open constructs")
    return Document(preamble=root.preamble, headlines=tuple(root.headlines))


def _is_raw_body(frame: _Frame) -> bool:
    if frame.start is None or frame.start.type is not EventType.GREATER_BLOCK_START:
        return False
    info = frame.start.payload
    return info.is_raw and info.name != "verse"


def _attach(frame: _Frame, end: Event, parent: _Frame) -> None:
    """Attach a finished construct to its parent."""
    start = frame.start
    assert start is not None

    match start.type:
        case EventType.SECTION_START:
            section = Section(tuple(frame.elements))
            if parent.start is None:
                parent.preamble = section
            else:
                parent.section = section
            parent.headlines.extend(frame.headlines)
        case EventType.HEADLINE_START:
            node = HeadlineNode(
                info=end.payload or start.payload,
                section=frame.section,
                children=tuple(frame.headlines),
                lineno=start.lineno,
            )
            parent.headlines.append(node)
        case EventType.TABLE_START:
            parent.elements.append(Element(ElementKind.TABLE, tuple(frame.rows), lineno=start.lineno))
        case _:
            parent.elements.append(
                Element(
                    _ELEMENT_KINDS[start.type],
                    start.payload,
                    children=tuple(frame.elements),
                    spans=tuple(frame.spans),
                    text="".join(frame.text),
                    lineno=start.lineno,
                )
            )


__all__ = [
    "Document",
    "Element",
    "ElementKind",
    "HeadlineNode",
    "Section",
    "build_tree",
]
