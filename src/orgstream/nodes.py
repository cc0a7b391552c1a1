"""Typed payloads carried by orgstream events.

Every structure the parser recognizes is turned into one of these frozen
dataclasses and attached to an event. Nothing here refers back to the
parser, so a consumer may keep payloads after the stream is exhausted.

Inline content is a tagged variant: a single ``InlineSpan`` class whose
``kind`` selects the meaning of ``text``, ``children`` and ``data``. New
kinds extend ``InlineKind`` and the exporter's mapping table rather than
subclassing.

Thread Safety:
All payloads are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

import datetime
from dataclasses import dataclass
from enum import Enum, auto
from typing import TypeAlias

# Blocks whose bodies the scanner passes through without interpretation
RAW_BLOCK_KINDS: frozenset[str] = frozenset({"src", "example", "export", "comment", "verse"})


# =============================================================================
# Inline spans
# =============================================================================


class InlineKind(Enum):
    """Kinds of inline span."""

    TEXT = auto()
    BOLD = auto()  # *bold*
    ITALIC = auto()  # /italic/
    UNDERLINE = auto()  # _underline_
    VERBATIM = auto()  # =verbatim=
    CODE = auto()  # ~code~
    STRIKETHROUGH = auto()  # +strike+
    LINK = auto()  # [[target][description]]
    TIMESTAMP = auto()  # <2024-01-01 Mon>
    SUBSCRIPT = auto()  # a_b
    SUPERSCRIPT = auto()  # a^b
    ENTITY = auto()  # \alpha
    MACRO = auto()  # {{{name(args)}}}
    SNIPPET = auto()  # @@backend:value@@
    LINE_BREAK = auto()  # \\ at end of line


EMPHASIS_MARKERS: dict[str, InlineKind] = {
    "*": InlineKind.BOLD,
    "/": InlineKind.ITALIC,
    "_": InlineKind.UNDERLINE,
    "=": InlineKind.VERBATIM,
    "~": InlineKind.CODE,
    "+": InlineKind.STRIKETHROUGH,
}

# Kinds that always wrap child spans
CONTAINER_KINDS: frozenset[InlineKind] = frozenset(
    {
        InlineKind.BOLD,
        InlineKind.ITALIC,
        InlineKind.UNDERLINE,
        InlineKind.STRIKETHROUGH,
        InlineKind.SUBSCRIPT,
        InlineKind.SUPERSCRIPT,
    }
)


@dataclass(frozen=True, slots=True)
class LinkData:
    """Link target.

    ``kind`` is one of ``url``, ``file``, ``internal``, ``custom-id``,
    ``heading``, ``image``.
    """

    target: str
    kind: str = "url"


@dataclass(frozen=True, slots=True)
class EntityData:
    """Named entity such as ``\\alpha``."""

    name: str
    html: str
    utf8: str


@dataclass(frozen=True, slots=True)
class MacroData:
    """Macro call ``{{{name(arg1, arg2)}}}``."""

    name: str
    args: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class SnippetData:
    """Export snippet ``@@backend:value@@``."""

    backend: str
    value: str


@dataclass(frozen=True, slots=True)
class Timestamp:
    """An Org timestamp.

    Examples: ``<2024-03-01 Fri 10:00 +1w>``, ``[2024-03-01]``,
    ``<2024-03-01 Fri 10:00-11:30>``. A date range ``<a>--<b>`` keeps the
    second timestamp in ``end``.
    """

    active: bool
    year: int
    month: int
    day: int
    dayname: str | None = None
    hour: int | None = None
    minute: int | None = None
    end_hour: int | None = None
    end_minute: int | None = None
    repeater: str | None = None
    warning: str | None = None
    raw: str = ""
    end: Timestamp | None = None

    @property
    def date(self) -> datetime.date:
        return datetime.date(self.year, self.month, self.day)

    @property
    def start(self) -> datetime.datetime | datetime.date:
        """Start as a datetime when a time is present, else as a date."""
        if self.hour is None:
            return self.date
        if self.hour == 24:
            return datetime.datetime.combine(self.date + datetime.timedelta(days=1), datetime.time(0))
        return datetime.datetime(self.year, self.month, self.day, self.hour, self.minute or 0)

    @property
    def is_range(self) -> bool:
        return self.end is not None or self.end_hour is not None


SpanData: TypeAlias = LinkData | Timestamp | EntityData | MacroData | SnippetData


@dataclass(frozen=True, slots=True)
class InlineSpan:
    """One inline construct.

    Attributes:
        kind: The span kind
        raw: Exact source text covered by the span, delimiters included
        text: Literal content: plain text, verbatim/code body, link target
            without description, entity as UTF-8
        children: Child spans of container kinds and described links
        data: Kind-specific payload (link, timestamp, entity, macro, snippet)
        marker: Delimiter character of emphasis spans

    """

    kind: InlineKind
    raw: str
    text: str = ""
    children: tuple[InlineSpan, ...] = ()
    data: SpanData | None = None
    marker: str = ""

    @property
    def is_container(self) -> bool:
        """True when the span is emitted as a Start/End pair around children."""
        if self.kind is InlineKind.LINK:
            return bool(self.children)
        return self.kind in CONTAINER_KINDS

    def plain_text(self) -> str:
        """Literal text of this span with all markup removed."""
        if self.children:
            return spans_plain_text(self.children)
        return self.text


def spans_plain_text(spans: tuple[InlineSpan, ...]) -> str:
    """Concatenate the literal text of a span sequence."""
    return "".join(span.plain_text() for span in spans)


# =============================================================================
# Headlines
# =============================================================================


class TodoType(Enum):
    """Whether a headline keyword marks an open or a finished task."""

    TODO = auto()
    DONE = auto()


@dataclass(frozen=True, slots=True)
class Planning:
    """SCHEDULED/DEADLINE/CLOSED timestamps attached to a headline."""

    scheduled: Timestamp | None = None
    deadline: Timestamp | None = None
    closed: Timestamp | None = None
    raw: str = ""


@dataclass(frozen=True, slots=True)
class Headline:
    """Headline metadata carried by HEADLINE_START and HEADLINE_END.

    Attributes:
        level: Number of leading stars (>= 1)
        title: Resolved title spans
        raw_title: Title text without keyword, priority and tags
        keyword: TODO-type keyword, if any
        todo_type: Kind of ``keyword``
        priority: Priority cookie content (``A`` for ``[#A]``)
        tags: Tags in source order, duplicates removed
        planning: Planning line directly below the headline

    """

    level: int
    title: tuple[InlineSpan, ...] = ()
    raw_title: str = ""
    keyword: str | None = None
    todo_type: TodoType | None = None
    priority: str | None = None
    tags: tuple[str, ...] = ()
    planning: Planning | None = None

    @property
    def title_text(self) -> str:
        return spans_plain_text(self.title)

    @property
    def is_todo(self) -> bool:
        return self.todo_type is TodoType.TODO

    @property
    def is_done(self) -> bool:
        return self.todo_type is TodoType.DONE

    @property
    def is_commented(self) -> bool:
        """True when the title starts with the COMMENT keyword."""
        if not self.raw_title.startswith("COMMENT"):
            return False
        rest = self.raw_title[7:]
        return not rest or rest[0].isspace()

    @property
    def is_archived(self) -> bool:
        return "ARCHIVE" in self.tags

    @property
    def scheduled(self) -> Timestamp | None:
        return self.planning.scheduled if self.planning else None

    @property
    def deadline(self) -> Timestamp | None:
        return self.planning.deadline if self.planning else None

    @property
    def closed(self) -> Timestamp | None:
        return self.planning.closed if self.planning else None


# =============================================================================
# Elements
# =============================================================================


class ListKind(Enum):
    """Kind of plain list, decided by its first item."""

    UNORDERED = auto()
    ORDERED = auto()
    DESCRIPTIVE = auto()


@dataclass(frozen=True, slots=True)
class ListInfo:
    kind: ListKind
    indent: int


@dataclass(frozen=True, slots=True)
class ListItemInfo:
    """List item metadata.

    Attributes:
        bullet: Bullet as written (``-``, ``+``, ``*``, ``1.``, ``1)``)
        indent: Column of the bullet
        counter: Counter cookie value (``[@3]``)
        checkbox: Checkbox state: ``" "``, ``"X"`` or ``"-"``
        tag: Term of a descriptive item (``- term :: text``)

    """

    bullet: str
    indent: int = 0
    counter: int | None = None
    checkbox: str | None = None
    tag: tuple[InlineSpan, ...] = ()

    @property
    def checked(self) -> bool | None:
        if self.checkbox is None:
            return None
        return self.checkbox == "X"


@dataclass(frozen=True, slots=True)
class TableRowInfo:
    """A table row: resolved cells, or a horizontal rule."""

    cells: tuple[tuple[InlineSpan, ...], ...] = ()
    is_rule: bool = False


@dataclass(frozen=True, slots=True)
class BlockInfo:
    """Greater block delimited by ``#+BEGIN_NAME`` / ``#+END_NAME``."""

    name: str
    parameters: str = ""

    @property
    def is_raw(self) -> bool:
        return self.name in RAW_BLOCK_KINDS

    @property
    def language(self) -> str | None:
        """First parameter word: language of src blocks, backend of export blocks."""
        if not self.parameters:
            return None
        return self.parameters.split()[0]


@dataclass(frozen=True, slots=True)
class DrawerInfo:
    name: str


@dataclass(frozen=True, slots=True)
class Keyword:
    """``#+KEY: value`` line. ``key`` is upper-cased."""

    key: str
    value: str


@dataclass(frozen=True, slots=True)
class NodeProperty:
    """``:KEY: value`` line inside a PROPERTIES drawer."""

    key: str
    value: str


@dataclass(frozen=True, slots=True)
class Clock:
    """``CLOCK:`` line, usually inside a LOGBOOK drawer."""

    timestamp: Timestamp
    duration: str | None = None


__all__ = [
    "CONTAINER_KINDS",
    "EMPHASIS_MARKERS",
    "RAW_BLOCK_KINDS",
    "BlockInfo",
    "Clock",
    "DrawerInfo",
    "EntityData",
    "Headline",
    "InlineKind",
    "InlineSpan",
    "Keyword",
    "LinkData",
    "ListInfo",
    "ListItemInfo",
    "ListKind",
    "MacroData",
    "NodeProperty",
    "Planning",
    "SnippetData",
    "SpanData",
    "TableRowInfo",
    "Timestamp",
    "TodoType",
    "spans_plain_text",
]
