"""Lazy event emission.

``EventStream`` wraps a Scanner and a BlockStateMachine. Each request for
an event advances the scanner only until the machine has queued at least
one event, so a consumer that stops early never pays for the rest of the
document.

Usage:
    >>> stream = parse_events("* Hello")
    >>> stream.next_event().type.name
    'HEADLINE_START'
    >>> [event.type.name for event in stream]
    ['HEADLINE_END']

Thread Safety:
A stream owns its scanner, machine and outbox. Use one stream per thread;
independent streams share no mutable state.

"""

from __future__ import annotations

from orgstream.config import ParseConfig, get_parse_config
from orgstream.errors import EncodingError, ParseError
from orgstream.events import Event
from orgstream.parsing.machine import BlockStateMachine
from orgstream.scanner import Scanner

_BOM = "\ufeff"


def decode_source(source: str | bytes) -> str:
    """Validate and normalize an input buffer.

    Bytes are decoded strictly as UTF-8. Strings must be encodable as UTF-8
    (no lone surrogates). A leading byte order mark is dropped.

    Raises:
        EncodingError: If the buffer is not valid text
        TypeError: If source is neither str nor bytes

    Examples:
        >>> decode_source("caf\\u00e9".encode())
        'café'
        >>> decode_source(b"\\xff")
        Traceback (most recent call last):
            ...
        orgstream.errors.EncodingError: input is not valid UTF-8: invalid start byte (at offset 0)
    """
    if isinstance(source, bytes | bytearray | memoryview):
        try:
            text = bytes(source).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise EncodingError(f"input is not valid UTF-8: {exc.reason}", offset=exc.start) from exc
    elif isinstance(source, str):
        text = source
        try:
            text.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise EncodingError(f"input is not encodable text: {exc.reason}", offset=exc.start) from exc
    else:
        raise TypeError(f"source must be str or bytes, not {type(source).__name__}")

    if text.startswith(_BOM):
        text = text[1:]
    return text


class EventStream:
    """Forward-only, pull-driven sequence of events.

    ``next_event()`` returns None once the document is exhausted; asking
    again after that raises ParseError. Iteration stops cleanly instead.
    A stream cannot be rewound: call ``parse_events()`` again for a fresh
    sequence over the same buffer.
    """

    __slots__ = ("_config", "_exhausted", "_machine", "_scanner", "_source_file")

    def __init__(
        self,
        source: str,
        *,
        source_file: str | None = None,
        config: ParseConfig | None = None,
    ) -> None:
        self._config = config if config is not None else get_parse_config()
        self._source_file = source_file
        self._scanner = Scanner(source, source_file)
        self._machine = BlockStateMachine(self._config)
        self._exhausted = False

    @property
    def config(self) -> ParseConfig:
        """Configuration captured when the stream was created."""
        return self._config

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    def next_event(self) -> Event | None:
        """Produce the next event, or None at the end of the document.

        Raises:
            ParseError: If called again after returning None
        """
        if self._exhausted:
            raise ParseError(
                "event stream is exhausted; call parse_events() again for a fresh stream",
                source_file=self._source_file,
            )
        return self._advance()

    def _advance(self) -> Event | None:
        outbox = self._machine.outbox
        while not outbox:
            line = self._scanner.next_line()
            if line is not None:
                self._machine.feed(line)
                continue
            self._machine.finish()
            if not outbox:
                self._exhausted = True
                return None
        return outbox.popleft()

    def __iter__(self) -> EventStream:
        return self

    def __next__(self) -> Event:
        if self._exhausted:
            raise StopIteration
        event = self._advance()
        if event is None:
            raise StopIteration
        return event


def parse_events(
    source: str | bytes,
    *,
    source_file: str | None = None,
    config: ParseConfig | None = None,
) -> EventStream:
    """Create a lazy event stream over an Org buffer.

    The buffer is validated eagerly, so an EncodingError is raised here
    and no stream (and no event) exists for invalid input.

    Args:
        source: Org text, or UTF-8 encoded bytes
        source_file: Optional path used in error messages and locations
        config: Parse configuration (defaults to the active ContextVar config)

    Returns:
        EventStream positioned before the first event
    """
    text = decode_source(source)
    return EventStream(text, source_file=source_file, config=config)
