"""Block-level state machine.

Consumes classified lines from the Scanner and appends events to an
outbox. The machine never looks ahead: every decision depends on the
context stack, the buffers and the line being fed.

Closing discipline:
- A headline closes every context down to the nearest headline of a
  lower level, keeping that headline's section open.
- A list item at indent I closes items at indent >= I and lists at
  indent > I; other content at indent J closes items and lists at >= J.
- Only lists above the innermost block or drawer are closed by
  indentation and blank lines.
- ``#+END_x`` and ``:END:`` pop down to their matching context,
  force-closing whatever is still open above it.
- Document end closes everything, innermost first.

Thread Safety:
A machine owns all of its state. Use one instance per parse.

"""

from __future__ import annotations

import re
from collections import deque
from dataclasses import replace

from orgstream.config import ParseConfig
from orgstream.events import Event, EventType
from orgstream.nodes import (
    BlockInfo,
    DrawerInfo,
    InlineKind,
    InlineSpan,
    Keyword,
    ListInfo,
    ListItemInfo,
    ListKind,
    NodeProperty,
    TableRowInfo,
)
from orgstream.parsing.contexts import (
    CONTEXT_EVENTS,
    LIST_KINDS,
    Context,
    ContextKind,
    ContextStack,
)
from orgstream.parsing.headline import parse_headline, parse_todo_sequence
from orgstream.parsing.inline import InlineResolver
from orgstream.parsing.planning import parse_clock, parse_planning
from orgstream.scanner.lines import Line, LineKind
from orgstream.utils.logger import get_logger

logger = get_logger(__name__)

_ITEM_PREFIX_RE = re.compile(r"(?:\[@(\d+)\][ \t]*)?(?:\[([ xX-])\](?:[ \t]+|$))?")
_ITEM_TAG_RE = re.compile(r"(.*?\S)[ \t]+::(?:[ \t]+|$)")
_TODO_KEYWORDS = frozenset({"TODO", "SEQ_TODO", "TYP_TODO"})


class BlockStateMachine:
    """Turns classified lines into balanced events.

    Usage:
        >>> from orgstream.scanner import Scanner
        >>> machine = BlockStateMachine()
        >>> for line in Scanner("* Title\\nbody").lines():
        ...     machine.feed(line)
        >>> machine.finish()
        >>> [event.type.name for event in machine.outbox][:3]
        ['HEADLINE_START', 'SECTION_START', 'PARAGRAPH_START']

    """

    __slots__ = (
        "_blank_run",
        "_done",
        "_finished",
        "_last_lineno",
        "_outbox",
        "_paragraph",
        "_paragraph_lineno",
        "_pending_headline",
        "_raw_lines",
        "_resolver",
        "_stack",
        "_todo",
    )

    def __init__(self, config: ParseConfig | None = None) -> None:
        self._resolver = InlineResolver(config)
        config = self._resolver.config
        self._todo: frozenset[str] = frozenset(config.todo_keywords)
        self._done: frozenset[str] = frozenset(config.done_keywords)
        self._stack = ContextStack()
        self._outbox: deque[Event] = deque()
        self._paragraph: list[str] = []
        self._paragraph_lineno = 0
        self._raw_lines: list[str] | None = None
        self._pending_headline: Context | None = None
        self._blank_run = 0
        self._last_lineno = 0
        self._finished = False

    @property
    def outbox(self) -> deque[Event]:
        """Events produced so far and not yet taken by the consumer."""
        return self._outbox

    @property
    def depth(self) -> int:
        """Number of open contexts."""
        return len(self._stack)

    # =========================================================================
    # Feeding
    # =========================================================================

    def feed(self, line: Line) -> None:
        """Process one classified line."""
        self._last_lineno = line.lineno

        if self._pending_headline is not None:
            if line.kind is LineKind.PLANNING and self._attach_planning(line):
                return
            self._emit_pending_headline()

        if self._raw_lines is not None:
            self._feed_raw(line)
            return

        if line.kind is LineKind.BLANK:
            self._on_blank()
            return
        self._blank_run = 0

        if self._stack.top_is(ContextKind.TABLE) and line.kind not in (
            LineKind.TABLE_ROW,
            LineKind.TABLE_RULE,
        ):
            self._close_top(line.lineno)

        match line.kind:
            case LineKind.HEADLINE:
                self._on_headline(line)
            case LineKind.TEXT:
                self._on_text(line)
            case LineKind.LIST_ITEM:
                self._on_list_item(line)
            case LineKind.TABLE_ROW | LineKind.TABLE_RULE:
                self._on_table_line(line)
            case LineKind.BLOCK_BEGIN:
                self._on_block_begin(line)
            case LineKind.BLOCK_END:
                self._on_block_end(line)
            case LineKind.DRAWER_BEGIN:
                self._on_drawer_begin(line)
            case LineKind.DRAWER_END:
                self._on_drawer_end(line)
            case LineKind.PROPERTY:
                self._on_property(line)
            case LineKind.KEYWORD:
                self._on_keyword(line)
            case LineKind.CLOCK:
                self._on_clock(line)
            case LineKind.COMMENT:
                self._on_single(line, EventType.COMMENT, line.text)
            case LineKind.HORIZONTAL_RULE:
                self._on_single(line, EventType.HORIZONTAL_RULE, None)
            case _:
                # Planning lines that do not follow a headline, stray RAW
                self._on_text(line)

    def finish(self) -> None:
        """Flush buffers and close every open context, innermost first."""
        if self._finished:
            return
        self._finished = True

        if self._pending_headline is not None:
            self._emit_pending_headline()
        if self._raw_lines is not None:
            self._emit_raw_body()
        self._flush_paragraph()
        self._close_to(0, self._last_lineno)

    # =========================================================================
    # Line handlers
    # =========================================================================

    def _on_blank(self) -> None:
        self._flush_paragraph()
        if self._stack.top_is(ContextKind.TABLE):
            self._close_top(self._last_lineno)
        self._blank_run += 1
        if self._blank_run >= 2:
            while self._stack.top is not None and self._stack.top.kind in LIST_KINDS:
                self._close_top(self._last_lineno)

    def _on_headline(self, line: Line) -> None:
        self._flush_paragraph()

        parent = self._stack.find_parent_headline(line.level)
        depth = parent + 1
        if parent >= 0 and depth < len(self._stack) and self._stack[depth].kind is ContextKind.SECTION:
            depth += 1
        self._close_to(depth, line.lineno)
        if parent >= 0:
            self._ensure_section(line.lineno)

        headline = parse_headline(line.level, line.text, self._resolver, self._todo, self._done)
        context = Context(ContextKind.HEADLINE, level=line.level, payload=headline, lineno=line.lineno)
        self._stack.push(context)
        self._pending_headline = context

    def _attach_planning(self, line: Line) -> bool:
        """Fold a planning line into the pending headline."""
        planning = parse_planning(line.text)
        if planning is None:
            return False
        context = self._pending_headline
        assert context is not None
        context.payload = replace(context.payload, planning=planning)
        self._emit_pending_headline()
        return True

    def _emit_pending_headline(self) -> None:
        context = self._pending_headline
        assert context is not None
        self._pending_headline = None
        self._emit(EventType.HEADLINE_START, context.payload, context.lineno)

    def _on_text(self, line: Line) -> None:
        text = line.text if line.kind is LineKind.TEXT else line.raw.strip()
        if self._lists_to_close(line.indent):
            self._flush_paragraph()
            self._close_lists(line.indent, line.lineno)
        if not self._paragraph:
            self._ensure_section(line.lineno)
            self._paragraph_lineno = line.lineno
        self._paragraph.append(text)

    def _on_list_item(self, line: Line) -> None:
        self._flush_paragraph()
        indent = line.indent

        floor = self._stack.delimited_floor()
        while len(self._stack) > floor:
            top = self._stack[-1]
            if top.kind is ContextKind.LIST_ITEM and top.indent >= indent:
                self._close_top(line.lineno)
            elif top.kind is ContextKind.LIST and top.indent > indent:
                self._close_top(line.lineno)
            else:
                break

        bullet = line.name
        rest = line.text
        prefix = _ITEM_PREFIX_RE.match(rest)
        counter = int(prefix.group(1)) if prefix and prefix.group(1) else None
        checkbox = prefix.group(2).upper() if prefix and prefix.group(2) else None
        if prefix:
            rest = rest[prefix.end() :]

        tag: tuple[InlineSpan, ...] = ()
        ordered = bullet[0].isdigit()
        if not ordered:
            tag_match = _ITEM_TAG_RE.match(rest)
            if tag_match:
                tag = self._resolver.resolve(tag_match.group(1))
                rest = rest[tag_match.end() :]

        top = self._stack.top
        if top is None or top.kind is not ContextKind.LIST or top.indent != indent:
            self._ensure_section(line.lineno)
            if ordered:
                kind = ListKind.ORDERED
            elif tag:
                kind = ListKind.DESCRIPTIVE
            else:
                kind = ListKind.UNORDERED
            self._open(Context(ContextKind.LIST, indent=indent, payload=ListInfo(kind, indent)), line.lineno)

        info = ListItemInfo(bullet=bullet, indent=indent, counter=counter, checkbox=checkbox, tag=tag)
        self._open(Context(ContextKind.LIST_ITEM, indent=indent, payload=info), line.lineno)

        rest = rest.strip()
        if rest:
            self._paragraph_lineno = line.lineno
            self._paragraph.append(rest)

    def _on_table_line(self, line: Line) -> None:
        self._flush_paragraph()
        if not self._stack.top_is(ContextKind.TABLE):
            self._close_lists(line.indent, line.lineno)
            self._ensure_section(line.lineno)
            self._open(Context(ContextKind.TABLE), line.lineno)

        if line.kind is LineKind.TABLE_RULE:
            row = TableRowInfo(is_rule=True)
        else:
            row = TableRowInfo(cells=tuple(self._resolver.resolve(cell) for cell in split_table_row(line.text)))
        self._emit(EventType.TABLE_ROW, row, line.lineno)

    def _on_block_begin(self, line: Line) -> None:
        self._flush_paragraph()
        self._close_lists(line.indent, line.lineno)
        self._ensure_section(line.lineno)

        info = BlockInfo(line.name, line.value)
        self._open(Context(ContextKind.GREATER_BLOCK, name=line.name, payload=info), line.lineno)
        if info.is_raw:
            self._raw_lines = []

    def _on_block_end(self, line: Line) -> None:
        index = self._stack.find_innermost(ContextKind.GREATER_BLOCK, line.name)
        if index == -1:
            logger.debug("Line %d: stray #+END_%s treated as text", line.lineno, line.name)
            self._on_text(line)
            return
        self._flush_paragraph()
        self._close_to(index, line.lineno)

    def _feed_raw(self, line: Line) -> None:
        if line.kind is LineKind.BLOCK_END:
            self._emit_raw_body()
            self._close_top(line.lineno)
            return
        assert self._raw_lines is not None
        self._raw_lines.append(line.text)

    def _emit_raw_body(self) -> None:
        """Emit the buffered body of the innermost raw block."""
        lines = self._raw_lines or []
        self._raw_lines = None
        if not lines:
            return

        body = "\n".join(lines)
        lineno = self._stack[-1].lineno + 1
        if self._stack[-1].name == "verse":
            self._emit_spans(self._resolver.resolve(body), lineno)
        else:
            self._emit(EventType.TEXT, body, lineno)

    def _on_drawer_begin(self, line: Line) -> None:
        self._flush_paragraph()
        if self._in_properties_drawer():
            self._emit(EventType.PROPERTY, NodeProperty(line.name, ""), line.lineno)
            return
        self._close_lists(line.indent, line.lineno)
        self._ensure_section(line.lineno)
        self._open(
            Context(ContextKind.DRAWER, name=line.name, payload=DrawerInfo(line.name)),
            line.lineno,
        )

    def _on_drawer_end(self, line: Line) -> None:
        index = self._stack.find_innermost(ContextKind.DRAWER)
        if index == -1:
            logger.debug("Line %d: stray :END: treated as text", line.lineno)
            self._on_text(line)
            return
        self._flush_paragraph()
        self._close_to(index, line.lineno)

    def _on_property(self, line: Line) -> None:
        if not self._in_properties_drawer():
            self._on_text(line)
            return
        self._flush_paragraph()
        self._emit(EventType.PROPERTY, NodeProperty(line.name, line.value), line.lineno)

    def _on_keyword(self, line: Line) -> None:
        if line.name in _TODO_KEYWORDS:
            todo, done = parse_todo_sequence(line.value)
            if todo or done:
                self._todo = frozenset(todo)
                self._done = frozenset(done)
                logger.debug("Line %d: TODO keywords now %s | %s", line.lineno, todo, done)
        self._on_single(line, EventType.KEYWORD, Keyword(line.name, line.value))

    def _on_clock(self, line: Line) -> None:
        clock = parse_clock(line.text, line.value)
        if clock is None:
            self._on_text(line)
            return
        self._on_single(line, EventType.CLOCK, clock)

    def _on_single(self, line: Line, event_type: EventType, payload: object) -> None:
        """Emit a single-line element in the current section."""
        self._flush_paragraph()
        self._close_lists(line.indent, line.lineno)
        self._ensure_section(line.lineno)
        self._emit(event_type, payload, line.lineno)

    # =========================================================================
    # Stack helpers
    # =========================================================================

    def _ensure_section(self, lineno: int) -> None:
        """Open a section when content arrives directly in a headline or the preamble."""
        top = self._stack.top
        if top is None or top.kind is ContextKind.HEADLINE:
            self._open(Context(ContextKind.SECTION), lineno)

    def _in_properties_drawer(self) -> bool:
        top = self._stack.top
        return top is not None and top.kind is ContextKind.DRAWER and top.name.upper() == "PROPERTIES"

    def _lists_to_close(self, indent: int) -> bool:
        top = self._stack.top
        return (
            top is not None
            and top.kind in LIST_KINDS
            and top.indent >= indent
            and len(self._stack) > self._stack.delimited_floor()
        )

    def _close_lists(self, indent: int, lineno: int) -> None:
        """Close items and lists at or right of ``indent`` above the delimited floor."""
        floor = self._stack.delimited_floor()
        while len(self._stack) > floor:
            top = self._stack[-1]
            if top.kind not in LIST_KINDS or top.indent < indent:
                break
            self._close_top(lineno)

    def _open(self, context: Context, lineno: int) -> None:
        context.lineno = lineno
        self._stack.push(context)
        self._emit(CONTEXT_EVENTS[context.kind][0], context.payload, lineno)

    def _close_top(self, lineno: int) -> None:
        context = self._stack.pop()
        self._emit(CONTEXT_EVENTS[context.kind][1], context.payload, lineno)

    def _close_to(self, depth: int, lineno: int) -> None:
        """Close contexts until ``depth`` remain, logging implicit closes."""
        while len(self._stack) > depth:
            top = self._stack[-1]
            if top.is_delimited and len(self._stack) - 1 > depth:
                logger.debug(
                    "Line %d: unterminated %s '%s' from line %d closed implicitly",
                    lineno,
                    top.kind.name.lower(),
                    top.name,
                    top.lineno,
                )
            self._close_top(lineno)

    # =========================================================================
    # Emission
    # =========================================================================

    def _emit(self, event_type: EventType, payload: object, lineno: int) -> None:
        self._outbox.append(Event(event_type, payload, lineno))

    def _flush_paragraph(self) -> None:
        if not self._paragraph:
            return
        text = "\n".join(self._paragraph)
        lineno = self._paragraph_lineno
        self._paragraph = []

        self._emit(EventType.PARAGRAPH_START, None, lineno)
        self._emit_spans(self._resolver.resolve(text), lineno)
        self._emit(EventType.PARAGRAPH_END, None, lineno)

    def _emit_spans(self, spans: tuple[InlineSpan, ...], lineno: int) -> None:
        for span in spans:
            if span.kind is InlineKind.TEXT:
                self._emit(EventType.TEXT, span.text, lineno)
            elif span.is_container:
                self._emit(EventType.INLINE_START, span, lineno)
                self._emit_spans(span.children, lineno)
                self._emit(EventType.INLINE_END, span, lineno)
            else:
                self._emit(EventType.INLINE, span, lineno)


def split_table_row(text: str) -> list[str]:
    """Split a table row into stripped cell texts.

    Example:
        >>> split_table_row("| a | *b* |")
        ['a', '*b*']
    """
    text = text.strip()
    if text.startswith("|"):
        text = text[1:]
    if text.endswith("|"):
        text = text[:-1]
    return [cell.strip() for cell in text.split("|")]


__all__ = ["BlockStateMachine", "split_table_row"]
