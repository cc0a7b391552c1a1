"""HTML renderer using StringBuilder pattern.

Folds an event stream into HTML with an open-tag stack that mirrors the
event nesting: each Start event writes an opening tag and pushes the
matching closing tag, each End event pops and writes it.

Thread Safety:
All per-render state is encapsulated in RenderContext, created fresh for each
render() call. Multiple threads can safely share a single HtmlRenderer instance
and call render() concurrently without synchronization.

Macros:
``#+MACRO:`` definitions and the TITLE/AUTHOR/DATE/EMAIL keywords are
collected in a first pass over the events, so a macro may be used before
the line that defines it.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote as url_quote

from orgstream.config import ParseConfig
from orgstream.errors import RenderError
from orgstream.events import START_END_PAIRS, Event, EventType
from orgstream.nodes import (
    BlockInfo,
    Clock,
    DrawerInfo,
    Headline,
    InlineKind,
    InlineSpan,
    Keyword,
    LinkData,
    ListItemInfo,
    ListKind,
    MacroData,
    TableRowInfo,
)
from orgstream.parsing.inline import InlineResolver
from orgstream.renderers.mapping import HTML_TAGS, Tag, TagMapping
from orgstream.stringbuilder import StringBuilder
from orgstream.utils.logger import get_logger
from orgstream.utils.text import escape_attr, escape_text
from orgstream.utils.text import slugify as default_slugify

logger = get_logger(__name__)

_MACRO_ARG_RE = re.compile(r"\$(\d)")
_MAX_MACRO_DEPTH = 8
_DOCUMENT_KEYWORDS = frozenset({"TITLE", "AUTHOR", "DATE", "EMAIL"})
_DEFAULT_LIST_TAGS = {
    ListKind.UNORDERED: Tag("ul"),
    ListKind.ORDERED: Tag("ol"),
    ListKind.DESCRIPTIVE: Tag("dl"),
}


def _encode_url(url: str) -> str:
    """Percent-encode spaces and non-ASCII characters of a link target.

    Reserved URL characters and existing escapes are kept. The result still
    needs ``escape_attr`` before it goes into an attribute.
    """
    return url_quote(url, safe="/:?#[]@!$&'()*+,;=-_.~%")


@dataclass(frozen=True, slots=True)
class HeadingInfo:
    """Headline metadata collected during rendering.

    Used to build a table of contents without a second pass.
    """

    level: int
    text: str
    slug: str


@dataclass(slots=True)
class _Frame:
    """An open tag on the render stack."""

    start: EventType
    close: str = ""
    suppressing: bool = False
    mode: str | None = None  # "pre", "raw" or "verse" body handling
    payload: Any = None


@dataclass(slots=True)
class RenderContext:
    """Per-render mutable state.

    Thread Safety:
        Each render() call creates its own RenderContext instance.
        No shared mutable state between concurrent renders.
    """

    sb: StringBuilder = field(default_factory=StringBuilder)
    stack: list[_Frame] = field(default_factory=list)
    headings: list[HeadingInfo] = field(default_factory=list)
    seen_slugs: set[str] = field(default_factory=set)
    outline: list[tuple[int, str]] = field(default_factory=list)
    suppress: int = 0
    table_rows: list[TableRowInfo] = field(default_factory=list)
    macros: dict[str, str] = field(default_factory=dict)
    keywords: dict[str, str] = field(default_factory=dict)


class HtmlRenderer:
    """Render an event stream to HTML.

    Usage:
        >>> from orgstream import parse_events
        >>> HtmlRenderer().render(parse_events("Hello *World*"))
        '<p>Hello <b>World</b></p>\\n'

    Thread Safety:
        Multiple threads can safely share a single HtmlRenderer instance.
        Each render() call creates an independent RenderContext.

    Memory:
        render() holds the whole event sequence in a list. A first pass
        collects ``#+MACRO:`` definitions and document keywords so that a
        macro can be expanded above the line defining it. The output is a
        single string, so it grows with the document regardless.
    """

    __slots__ = ("_last_context", "_mapping", "_max_level", "_resolver", "_slugify")

    def __init__(
        self,
        mapping: TagMapping = HTML_TAGS,
        *,
        slugify: Callable[[str], str] | None = None,
        max_heading_level: int = 6,
        config: ParseConfig | None = None,
    ) -> None:
        """Initialize renderer.

        Args:
            mapping: Construct-to-tag table
            slugify: Optional custom slugify function for headline IDs
            max_heading_level: Deepest ``<hN>`` emitted; deeper headlines reuse it
            config: Parse configuration for macro expansions
        """
        self._mapping = mapping
        self._slugify = slugify or default_slugify
        self._max_level = max_heading_level
        self._resolver = InlineResolver(config)
        self._last_context: RenderContext | None = None

    def render(self, events: Iterable[Event]) -> str:
        """Render events to an HTML string.

        Raises:
            RenderError: If an End event has no matching Start, or Start
                events remain open when the sequence ends
        """
        ctx = RenderContext()
        events = list(events)
        self._collect_keywords(events, ctx)

        for event in events:
            self._render_event(event, ctx)

        if ctx.stack:
            raise RenderError(f"unbalanced event stream: {ctx.stack[-1].start.name} never closed")

        self._last_context = ctx
        return ctx.sb.build()

    def get_headings(self) -> list[HeadingInfo]:
        """Headline info collected during the last render() call."""
        if self._last_context is None:
            return []
        return self._last_context.headings.copy()

    # =========================================================================
    # Event dispatch
    # =========================================================================

    def _collect_keywords(self, events: list[Event], ctx: RenderContext) -> None:
        for event in events:
            if event.type is not EventType.KEYWORD:
                continue
            keyword: Keyword = event.payload
            if keyword.key == "MACRO":
                name, _, template = keyword.value.partition(" ")
                if name:
                    ctx.macros[name.lower()] = template.strip()
            elif keyword.key in _DOCUMENT_KEYWORDS:
                previous = ctx.keywords.get(keyword.key)
                ctx.keywords[keyword.key] = f"{previous} {keyword.value}" if previous else keyword.value

    def _render_event(self, event: Event, ctx: RenderContext) -> None:
        if event.is_end:
            self._end(event, ctx)
            return
        if ctx.suppress:
            if event.is_start:
                ctx.stack.append(_Frame(event.type))
            return

        sb = ctx.sb
        match event.type:
            case EventType.HEADLINE_START:
                self._start_headline(event, ctx)
            case EventType.SECTION_START:
                if ctx.outline:
                    level, slug = ctx.outline[-1]
                    level = min(level, self._max_level)
                    sb.append(f'<div id="text-{escape_attr(slug)}" class="outline-text-{level}">\n')
                    self._push(ctx, event, "</div>\n")
                else:
                    self._push(ctx, event)
            case EventType.PARAGRAPH_START:
                tag = self._mapping.paragraph
                sb.append(tag.open())
                self._push(ctx, event, tag.close() + "\n")
            case EventType.LIST_START:
                kind = event.payload.kind
                tag = self._mapping.lists.get(kind, _DEFAULT_LIST_TAGS[kind])
                sb.append_line(tag.open())
                self._push(ctx, event, tag.close() + "\n", payload=kind)
            case EventType.LIST_ITEM_START:
                self._start_list_item(event, ctx)
            case EventType.TABLE_START:
                ctx.table_rows = []
                self._push(ctx, event)
            case EventType.TABLE_ROW:
                ctx.table_rows.append(event.payload)
            case EventType.GREATER_BLOCK_START:
                self._start_block(event, ctx)
            case EventType.DRAWER_START:
                info: DrawerInfo = event.payload
                if info.name.upper() in self._mapping.suppressed_drawers:
                    self._push(ctx, event, suppressing=True)
                else:
                    sb.append(f'<div class="drawer {escape_attr(info.name.lower())}">\n')
                    self._push(ctx, event, "</div>\n")
            case EventType.INLINE_START:
                span: InlineSpan = event.payload
                open_tag, close_tag = self._inline_tags(span)
                sb.append(open_tag)
                self._push(ctx, event, close_tag)
            case EventType.INLINE:
                sb.append(self._render_leaf(event.payload, ctx, 0))
            case EventType.TEXT:
                sb.append(self._render_text(event.payload, ctx))
            case EventType.HORIZONTAL_RULE:
                sb.append_line("<hr />")
            case EventType.CLOCK:
                sb.append(self._render_clock(event.payload))
            case EventType.COMMENT | EventType.KEYWORD | EventType.PROPERTY:
                pass

    def _push(
        self,
        ctx: RenderContext,
        event: Event,
        close: str = "",
        *,
        mode: str | None = None,
        suppressing: bool = False,
        payload: Any = None,
    ) -> None:
        if mode is None and ctx.stack:
            mode = ctx.stack[-1].mode
        ctx.stack.append(_Frame(event.type, close, suppressing, mode, payload))
        if suppressing:
            ctx.suppress += 1

    def _end(self, event: Event, ctx: RenderContext) -> None:
        if not ctx.stack:
            raise RenderError(f"{event.type.name} at line {event.lineno} has no matching start")
        frame = ctx.stack.pop()
        if START_END_PAIRS[frame.start] is not event.type:
            raise RenderError(
                f"{event.type.name} at line {event.lineno} does not close {frame.start.name}"
            )

        if frame.suppressing:
            ctx.suppress -= 1
            return
        if ctx.suppress:
            return

        match event.type:
            case EventType.TABLE_END:
                self._write_table(ctx)
            case EventType.HEADLINE_END:
                ctx.outline.pop()
        ctx.sb.append(frame.close)

    # =========================================================================
    # Block rendering
    # =========================================================================

    def _start_headline(self, event: Event, ctx: RenderContext) -> None:
        info: Headline = event.payload
        if info.is_commented:
            self._push(ctx, event, suppressing=True)
            return

        level = min(info.level, self._max_level)
        text = info.title_text
        slug = self._unique_slug(text, ctx)
        ctx.headings.append(HeadingInfo(level=info.level, text=text, slug=slug))
        ctx.outline.append((info.level, slug))

        sb = ctx.sb
        sb.append(f'<div id="outline-container-{escape_attr(slug)}" class="outline-{level}">\n')
        sb.append(f'<h{level} id="{escape_attr(slug)}">')
        if info.keyword:
            state = "todo" if info.is_todo else "done"
            sb.append(
                f'<span class="{state} {escape_attr(info.keyword)}">{escape_text(info.keyword)}</span> '
            )
        if info.priority:
            sb.append(f'<span class="priority">[{escape_text(info.priority)}]</span> ')
        sb.append(self._render_spans(info.title, ctx))
        if info.tags:
            tags = "&#xa0;".join(
                f'<span class="{escape_attr(tag)}">{escape_text(tag)}</span>' for tag in info.tags
            )
            sb.append(f'&#xa0;&#xa0;&#xa0;<span class="tag">{tags}</span>')
        sb.append_line(f"</h{level}>")
        self._push(ctx, event, "</div>\n")

    def _unique_slug(self, text: str, ctx: RenderContext) -> str:
        slug = self._slugify(text) or "headline"
        original_slug = slug
        counter = 1
        while slug in ctx.seen_slugs:
            slug = f"{original_slug}-{counter}"
            counter += 1
        ctx.seen_slugs.add(slug)
        return slug

    def _start_list_item(self, event: Event, ctx: RenderContext) -> None:
        info: ListItemInfo = event.payload
        list_kind = ctx.stack[-1].payload if ctx.stack else None
        sb = ctx.sb

        if list_kind is ListKind.DESCRIPTIVE:
            if info.tag:
                sb.append(f"<dt>{self._render_spans(info.tag, ctx)}</dt>")
            sb.append("<dd>")
            self._push(ctx, event, "</dd>\n")
            return

        css_class = None
        if info.checkbox is not None:
            css_class = {"X": "on", "-": "trans"}.get(info.checkbox, "off")
        value = str(info.counter) if info.counter is not None else None
        sb.append(Tag("li").open(class_=css_class, value=value))
        if info.checkbox is not None:
            mark = "&#xa0;" if info.checkbox == " " else escape_text(info.checkbox)
            sb.append(f"<code>[{mark}]</code> ")
        self._push(ctx, event, "</li>\n")

    def _start_block(self, event: Event, ctx: RenderContext) -> None:
        info: BlockInfo = event.payload
        mapping = self._mapping
        name = info.name
        sb = ctx.sb

        if name in mapping.suppressed_blocks:
            self._push(ctx, event, suppressing=True)
            return
        if name == "export":
            backend = (info.language or "").lower()
            if backend in mapping.raw_backends:
                self._push(ctx, event, mode="raw")
            else:
                self._push(ctx, event, suppressing=True)
            return

        tag = mapping.blocks.get(name) or Tag("div", name)
        if name == "src":
            language = info.language
            if language:
                tag = Tag(tag.name, f"{tag.css_class or 'src'} src-{language}")
            sb.append(tag.open() + "<code>")
            self._push(ctx, event, f"</code>{tag.close()}\n", mode="pre")
        elif name in mapping.preformatted:
            sb.append(tag.open())
            self._push(ctx, event, tag.close() + "\n", mode="pre")
        elif name == "verse":
            sb.append(tag.open())
            self._push(ctx, event, tag.close() + "\n", mode="verse")
        else:
            sb.append_line(tag.open())
            self._push(ctx, event, tag.close() + "\n")

    def _write_table(self, ctx: RenderContext) -> None:
        """Write buffered rows; rows before the first rule form the header."""
        groups: list[list[TableRowInfo]] = [[]]
        for row in ctx.table_rows:
            if row.is_rule:
                if groups[-1]:
                    groups.append([])
            else:
                groups[-1].append(row)
        groups = [group for group in groups if group]
        ctx.table_rows = []

        sb = ctx.sb
        sb.append_line("<table>")
        if len(groups) > 1:
            sb.append_line("<thead>")
            for row in groups[0]:
                self._write_row(row, "th", ctx)
            sb.append_line("</thead>")
            groups = groups[1:]
        for group in groups:
            sb.append_line("<tbody>")
            for row in group:
                self._write_row(row, "td", ctx)
            sb.append_line("</tbody>")
        sb.append_line("</table>")

    def _write_row(self, row: TableRowInfo, cell_tag: str, ctx: RenderContext) -> None:
        scope = ' scope="col"' if cell_tag == "th" else ""
        cells = "".join(
            f"<{cell_tag}{scope}>{self._render_spans(cell, ctx)}</{cell_tag}>" for cell in row.cells
        )
        ctx.sb.append_line(f"<tr>{cells}</tr>")

    def _render_clock(self, clock: Clock) -> str:
        duration = ""
        if clock.duration:
            duration = f' <span class="duration">=&gt; {escape_text(clock.duration)}</span>'
        return (
            '<p class="clock"><span class="timestamp-wrapper">'
            '<span class="timestamp-kwd">CLOCK:</span> '
            f'<span class="timestamp">{escape_text(clock.timestamp.raw)}</span>'
            f"</span>{duration}</p>\n"
        )

    # =========================================================================
    # Inline rendering
    # =========================================================================

    def _render_text(self, text: str, ctx: RenderContext) -> str:
        mode = ctx.stack[-1].mode if ctx.stack else None
        if mode == "raw":
            return text
        escaped = escape_text(text)
        if mode == "verse":
            return escaped.replace("\n", "<br />\n")
        return escaped

    def _inline_tags(self, span: InlineSpan) -> tuple[str, str]:
        """Opening and closing tags of a container span."""
        tag = self._mapping.inline.get(span.kind, Tag("span"))
        if span.kind is InlineKind.LINK:
            return tag.open(href=self._link_href(span.data)), tag.close()
        return tag.open(), tag.close()

    def _render_spans(self, spans: tuple[InlineSpan, ...], ctx: RenderContext, depth: int = 0) -> str:
        """Render spans that are not delivered as events (titles, cells, tags)."""
        sb = StringBuilder()
        for span in spans:
            if span.kind is InlineKind.TEXT:
                sb.append(escape_text(span.text))
            elif span.is_container:
                open_tag, close_tag = self._inline_tags(span)
                sb.append(open_tag)
                sb.append(self._render_spans(span.children, ctx, depth))
                sb.append(close_tag)
            else:
                sb.append(self._render_leaf(span, ctx, depth))
        return sb.build()

    def _render_leaf(self, span: InlineSpan, ctx: RenderContext, depth: int) -> str:
        match span.kind:
            case InlineKind.VERBATIM | InlineKind.CODE:
                tag = self._mapping.inline.get(span.kind, Tag("code"))
                return f"{tag.open()}{escape_text(span.text)}{tag.close()}"
            case InlineKind.LINK:
                link: LinkData = span.data
                href = self._link_href(link)
                if link.kind == "image":
                    alt = self._link_target(link).rsplit("/", 1)[-1]
                    return f'<img src="{escape_attr(href)}" alt="{escape_attr(alt)}" />'
                tag = self._mapping.inline.get(InlineKind.LINK, Tag("a"))
                return f"{tag.open(href=href)}{escape_text(span.text)}{tag.close()}"
            case InlineKind.TIMESTAMP:
                return (
                    '<span class="timestamp-wrapper"><span class="timestamp">'
                    f"{escape_text(span.raw)}</span></span>"
                )
            case InlineKind.ENTITY:
                return span.data.html
            case InlineKind.SNIPPET:
                if span.data.backend in self._mapping.raw_backends:
                    return span.data.value
                return ""
            case InlineKind.MACRO:
                return self._expand_macro(span.data, ctx, depth)
            case InlineKind.LINE_BREAK:
                return "<br />"
        return escape_text(span.raw)

    def _expand_macro(self, macro: MacroData, ctx: RenderContext, depth: int) -> str:
        if depth >= _MAX_MACRO_DEPTH:
            logger.debug("Macro %s nested too deeply; expansion stopped", macro.name)
            return ""

        template = ctx.macros.get(macro.name)
        if template is None:
            key = macro.name.upper()
            if key not in _DOCUMENT_KEYWORDS:
                logger.debug("Undefined macro %s expands to nothing", macro.name)
                return ""
            template = ctx.keywords.get(key, "")

        args = macro.args

        def substitute(match: re.Match[str]) -> str:
            index = int(match.group(1)) - 1
            return args[index] if 0 <= index < len(args) else ""

        expanded = _MACRO_ARG_RE.sub(substitute, template)
        return self._render_spans(self._resolver.resolve(expanded), ctx, depth + 1)

    def _link_href(self, link: LinkData) -> str:
        return _encode_url(self._link_target(link))

    def _link_target(self, link: LinkData) -> str:
        """Unencoded href of a link: anchors for internal targets, paths for files."""
        target = link.target
        match link.kind:
            case "custom-id":
                return target
            case "heading":
                return "#" + self._slugify(target.lstrip("*").strip())
            case "internal":
                return "#" + self._slugify(target)
            case "file" | "image":
                return target[5:] if target.startswith("file:") else target
        return target
