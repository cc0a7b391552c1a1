"""orgstream renderers.

Renderers fold an event stream into an output format.

Available Renderers:
- HtmlRenderer: Renders events to HTML using StringBuilder pattern

Extensibility:
- TagMapping / HTML_TAGS: construct-to-tag table consumed by HtmlRenderer
- EventRenderer: protocol for third-party exporters

Thread Safety:
All renderers use state local to each render() call.
Safe for concurrent use from multiple threads.

"""

from orgstream.renderers.html import HeadingInfo, HtmlRenderer, RenderContext
from orgstream.renderers.mapping import HTML_TAGS, Tag, TagMapping
from orgstream.renderers.protocol import EventRenderer

__all__ = [
    "HTML_TAGS",
    "EventRenderer",
    "HeadingInfo",
    "HtmlRenderer",
    "RenderContext",
    "Tag",
    "TagMapping",
]
