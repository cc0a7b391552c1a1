"""Event and EventType definitions.

The block state machine produces a flat stream of Event objects that
consumers (the HTML renderer, the tree builder, user code) fold into
whatever they need. Start/End events are always balanced and properly
nested.

Thread Safety:
Event is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any


class EventType(Enum):
    """Event types produced by the parser."""

    # Headlines and sections
    HEADLINE_START = auto()
    HEADLINE_END = auto()
    SECTION_START = auto()
    SECTION_END = auto()

    # Elements
    PARAGRAPH_START = auto()
    PARAGRAPH_END = auto()
    LIST_START = auto()
    LIST_END = auto()
    LIST_ITEM_START = auto()
    LIST_ITEM_END = auto()
    TABLE_START = auto()
    TABLE_ROW = auto()
    TABLE_END = auto()
    GREATER_BLOCK_START = auto()
    GREATER_BLOCK_END = auto()
    DRAWER_START = auto()
    DRAWER_END = auto()

    # Inline content
    INLINE_START = auto()  # Container span (bold, italic, described link, ...)
    INLINE_END = auto()
    INLINE = auto()  # Leaf span (code, timestamp, entity, ...)
    TEXT = auto()

    # Single-line elements
    COMMENT = auto()
    HORIZONTAL_RULE = auto()
    KEYWORD = auto()
    PROPERTY = auto()
    CLOCK = auto()


# Start type -> matching End type
START_END_PAIRS: dict[EventType, EventType] = {
    EventType.HEADLINE_START: EventType.HEADLINE_END,
    EventType.SECTION_START: EventType.SECTION_END,
    EventType.PARAGRAPH_START: EventType.PARAGRAPH_END,
    EventType.LIST_START: EventType.LIST_END,
    EventType.LIST_ITEM_START: EventType.LIST_ITEM_END,
    EventType.TABLE_START: EventType.TABLE_END,
    EventType.GREATER_BLOCK_START: EventType.GREATER_BLOCK_END,
    EventType.DRAWER_START: EventType.DRAWER_END,
    EventType.INLINE_START: EventType.INLINE_END,
}

START_TYPES: frozenset[EventType] = frozenset(START_END_PAIRS)
END_TYPES: frozenset[EventType] = frozenset(START_END_PAIRS.values())


@dataclass(frozen=True, slots=True)
class Event:
    """An event produced by the parser.

    Attributes:
        type: The event type
        payload: Type-specific payload (see ``orgstream.nodes``); the raw
            string for TEXT and COMMENT, None for section/paragraph events
        lineno: Line the event originates from; End events carry the line
            that closed the construct

    """

    type: EventType
    payload: Any = None
    lineno: int = 0

    @property
    def is_start(self) -> bool:
        return self.type in START_TYPES

    @property
    def is_end(self) -> bool:
        return self.type in END_TYPES

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        if self.payload is None:
            return f"Event({self.type.name})"
        text = repr(self.payload)
        if len(text) > 40:
            text = text[:37] + "..."
        return f"Event({self.type.name}, {text})"
