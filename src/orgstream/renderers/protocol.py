"""EventRenderer protocol: stable interface for event-stream exporters.

Any exporter that implements ``render(events) -> str`` conforms to this
protocol. The built-in ``HtmlRenderer`` is the reference implementation.

Example:
    from orgstream.renderers.protocol import EventRenderer

    def export(renderer: EventRenderer, source: str) -> str:
        return renderer.render(parse_events(source))

"""

from collections.abc import Iterable
from typing import Protocol

from orgstream.events import Event


class EventRenderer(Protocol):
    """Protocol for event-stream renderers.

    Implementations fold a balanced event sequence into a string.

    """

    def render(self, events: Iterable[Event]) -> str:
        """Render an event sequence to a string.

        Args:
            events: Balanced events, usually an ``EventStream``.

        Returns:
            Rendered string output.

        """
        ...
