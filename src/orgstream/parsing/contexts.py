"""Context stack for the block state machine.

The stack holds every open structural context of an Org document,
outermost first::

    HEADLINE(1) > SECTION > HEADLINE(2) > SECTION > LIST(0) > LIST_ITEM(0)

Paragraph text and raw block bodies are buffers owned by the state
machine, not contexts. Every closing decision the machine makes is a
function of this stack and the next classified line.

Usage:
    stack = ContextStack()
    stack.push(Context(ContextKind.LIST, indent=2, payload=info))

    # Innermost drawer, if any
    index = stack.find_innermost(ContextKind.DRAWER)

    # Lists above this depth may be closed by indentation
    floor = stack.delimited_floor()
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

from orgstream.events import EventType


class ContextKind(Enum):
    """Kinds of structural context."""

    HEADLINE = auto()  # * Title (level)
    SECTION = auto()  # Body of a headline, or the preamble
    LIST = auto()  # Plain list (indent)
    LIST_ITEM = auto()  # List item (indent)
    TABLE = auto()  # | rows
    GREATER_BLOCK = auto()  # #+BEGIN_NAME (name)
    DRAWER = auto()  # :NAME: (name)


# Context kind -> (start event, end event)
CONTEXT_EVENTS: dict[ContextKind, tuple[EventType, EventType]] = {
    ContextKind.HEADLINE: (EventType.HEADLINE_START, EventType.HEADLINE_END),
    ContextKind.SECTION: (EventType.SECTION_START, EventType.SECTION_END),
    ContextKind.LIST: (EventType.LIST_START, EventType.LIST_END),
    ContextKind.LIST_ITEM: (EventType.LIST_ITEM_START, EventType.LIST_ITEM_END),
    ContextKind.TABLE: (EventType.TABLE_START, EventType.TABLE_END),
    ContextKind.GREATER_BLOCK: (EventType.GREATER_BLOCK_START, EventType.GREATER_BLOCK_END),
    ContextKind.DRAWER: (EventType.DRAWER_START, EventType.DRAWER_END),
}

# Contexts with an explicit closing delimiter
DELIMITED_KINDS: frozenset[ContextKind] = frozenset(
    {ContextKind.GREATER_BLOCK, ContextKind.DRAWER}
)

# Contexts closed by indentation and blank lines
LIST_KINDS: frozenset[ContextKind] = frozenset({ContextKind.LIST, ContextKind.LIST_ITEM})


@dataclass(slots=True)
class Context:
    """An open structural context.

    Attributes:
        kind: The context kind
        level: Headline level (HEADLINE only)
        indent: Bullet column (LIST and LIST_ITEM only)
        name: Block or drawer name, lower-cased for blocks
        payload: Payload carried by the Start and End events
        lineno: Line that opened the context

    """

    kind: ContextKind
    level: int = 0
    indent: int = 0
    name: str = ""
    payload: Any = None
    lineno: int = 0

    @property
    def is_delimited(self) -> bool:
        return self.kind in DELIMITED_KINDS


class ContextStack:
    """Stack of open contexts.

    Invariant: stack[-1] is the innermost context. An empty stack means the
    parser is at document level, outside any section.
    """

    __slots__ = ("_stack",)

    def __init__(self) -> None:
        self._stack: list[Context] = []

    def __len__(self) -> int:
        return len(self._stack)

    def __bool__(self) -> bool:
        return bool(self._stack)

    def __iter__(self) -> Iterator[Context]:
        return iter(self._stack)

    def __getitem__(self, index: int) -> Context:
        return self._stack[index]

    @property
    def top(self) -> Context | None:
        """Innermost context, or None at document level."""
        return self._stack[-1] if self._stack else None

    def top_is(self, kind: ContextKind) -> bool:
        return bool(self._stack) and self._stack[-1].kind is kind

    def push(self, context: Context) -> None:
        self._stack.append(context)

    def pop(self) -> Context:
        """Pop the innermost context.

        Raises:
            IndexError: If the stack is empty
        """
        return self._stack.pop()

    def find_innermost(self, kind: ContextKind, name: str | None = None) -> int:
        """Index of the innermost context of this kind (and name), or -1."""
        for i in range(len(self._stack) - 1, -1, -1):
            context = self._stack[i]
            if context.kind is kind and (name is None or context.name == name):
                return i
        return -1

    def find_parent_headline(self, level: int) -> int:
        """Index of the innermost headline with a level below ``level``, or -1."""
        for i in range(len(self._stack) - 1, -1, -1):
            context = self._stack[i]
            if context.kind is ContextKind.HEADLINE and context.level < level:
                return i
        return -1

    def delimited_floor(self) -> int:
        """Number of contexts up to and including the innermost delimited one.

        Lists above this depth may be closed by indentation or blank lines;
        lists below it belong to an enclosing block or drawer.
        """
        for i in range(len(self._stack) - 1, -1, -1):
            if self._stack[i].kind in DELIMITED_KINDS:
                return i + 1
        return 0

