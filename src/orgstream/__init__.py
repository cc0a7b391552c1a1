"""
orgstream: streaming Org-mode parser for Python

Parses Org-mode text into a lazy, balanced sequence of semantic events and
renders that sequence to HTML. A document tree is only built when asked
for. Zero runtime dependencies.

Quick Start:
    >>> from orgstream import parse_events, render
    >>> [event.type.name for event in parse_events("* TODO Write")]
    ['HEADLINE_START', 'HEADLINE_END']
    >>> render("Some *bold* text")
    '<p>Some <b>bold</b> text</p>\\n'

    >>> # Or use the high-level Org class
    >>> from orgstream import Org, ParseConfig
    >>> org = Org(ParseConfig(todo_keywords=("TODO", "NEXT")))
    >>> org.parse("* NEXT Call").headlines[0].info.keyword
    'NEXT'

Installation:
    pip install orgstream
"""

from collections.abc import Iterable

from orgstream.config import (
    DEFAULT_LINK_SCHEMES,
    ParseConfig,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from orgstream.emitter import EventStream, decode_source, parse_events
from orgstream.errors import EncodingError, OrgStreamError, ParseError, RenderError
from orgstream.events import Event, EventType
from orgstream.location import SourceLocation
from orgstream.nodes import (
    BlockInfo,
    Clock,
    DrawerInfo,
    EntityData,
    Headline,
    InlineKind,
    InlineSpan,
    Keyword,
    LinkData,
    ListInfo,
    ListItemInfo,
    ListKind,
    MacroData,
    NodeProperty,
    Planning,
    SnippetData,
    TableRowInfo,
    Timestamp,
    TodoType,
)
from orgstream.renderers.html import HtmlRenderer
from orgstream.renderers.mapping import HTML_TAGS, Tag, TagMapping
from orgstream.renderers.protocol import EventRenderer
from orgstream.serialization import event_from_dict, event_to_dict, events_from_json, events_to_json
from orgstream.tree import Document, Element, ElementKind, HeadlineNode, Section, build_tree

__version__ = "0.1.0"


def parse(
    source: str | bytes,
    *,
    source_file: str | None = None,
    config: ParseConfig | None = None,
) -> Document:
    """Parse Org source into a materialized Document tree.

    Args:
        source: Org text, or UTF-8 encoded bytes
        source_file: Optional source file path for error messages
        config: Parse configuration (defaults to the active ContextVar config)

    Returns:
        Document with the preamble and top-level headlines

    Raises:
        EncodingError: If source is not valid text

        >>> doc = parse("* Hello")
        >>> doc.headlines[0].title_text
        'Hello'
    """
    return build_tree(parse_events(source, source_file=source_file, config=config))


def render(
    source: str | bytes | Iterable[Event],
    *,
    mapping: TagMapping = HTML_TAGS,
    config: ParseConfig | None = None,
) -> str:
    """Render Org source (or an event sequence) to HTML.

    Args:
        source: Org text, UTF-8 bytes, or events from ``parse_events()``
        mapping: Construct-to-tag table
        config: Parse configuration used when source is text

        >>> print(render("* Hello"), end="")
        <div id="outline-container-hello" class="outline-1">
        <h1 id="hello">Hello</h1>
        </div>
    """
    if isinstance(source, str | bytes):
        events: Iterable[Event] = parse_events(source, config=config)
    else:
        events = source
    return HtmlRenderer(mapping, config=config).render(events)


class Org:
    """High-level Org processor combining parser and renderer.

        >>> org = Org()
        >>> org("Hello /World/")
        '<p>Hello <i>World</i></p>\\n'

        >>> # Access the tree
        >>> doc = org.parse("* Heading")
        >>> doc.headlines[0].level
        1

        The configuration is passed to every stream explicitly, so several
        Org instances with different settings can be used concurrently.

    """

    __slots__ = ("_config", "_mapping")

    def __init__(
        self,
        config: ParseConfig | None = None,
        *,
        mapping: TagMapping = HTML_TAGS,
    ) -> None:
        """Initialize Org processor.

        Args:
            config: Parse configuration (defaults to the active ContextVar config
                at construction time)
            mapping: Construct-to-tag table for HTML output
        """
        self._config = config if config is not None else get_parse_config()
        self._mapping = mapping

    @property
    def config(self) -> ParseConfig:
        return self._config

    def __call__(self, source: str | bytes) -> str:
        """Parse and render Org source to HTML."""
        return self.render(source)

    def events(self, source: str | bytes, *, source_file: str | None = None) -> EventStream:
        """Lazy event stream over source."""
        return parse_events(source, source_file=source_file, config=self._config)

    def parse(self, source: str | bytes, *, source_file: str | None = None) -> Document:
        """Parse source into a Document tree."""
        return build_tree(self.events(source, source_file=source_file))

    def render(self, source: str | bytes | Iterable[Event]) -> str:
        """Render source text or an event sequence to HTML."""
        return render(source, mapping=self._mapping, config=self._config)


__all__ = [
    "DEFAULT_LINK_SCHEMES",
    "HTML_TAGS",
    "BlockInfo",
    "Clock",
    "Document",
    "DrawerInfo",
    "Element",
    "ElementKind",
    "EncodingError",
    "EntityData",
    "Event",
    "EventRenderer",
    "EventStream",
    "EventType",
    "Headline",
    "HeadlineNode",
    "HtmlRenderer",
    "InlineKind",
    "InlineSpan",
    "Keyword",
    "LinkData",
    "ListInfo",
    "ListItemInfo",
    "ListKind",
    "MacroData",
    "NodeProperty",
    "Org",
    "OrgStreamError",
    "ParseConfig",
    "ParseError",
    "Planning",
    "RenderError",
    "Section",
    "SnippetData",
    "SourceLocation",
    "TableRowInfo",
    "Tag",
    "TagMapping",
    "Timestamp",
    "TodoType",
    "__version__",
    "build_tree",
    "decode_source",
    "event_from_dict",
    "event_to_dict",
    "events_from_json",
    "events_to_json",
    "get_parse_config",
    "parse",
    "parse_config_context",
    "parse_events",
    "render",
    "reset_parse_config",
    "set_parse_config",
]
