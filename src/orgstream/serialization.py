"""Event serialization: JSON round-trip for orgstream events.

Converts events and their payloads to/from JSON-compatible dicts. Useful
for:
- Snapshot tests of event streams
- Shipping parsed events to another process
- Debugging and inspection

All output is deterministic (sorted keys).

Example:
    from orgstream import parse_events
    from orgstream.serialization import events_to_json, events_from_json

    events = list(parse_events("* Hello *World*"))
    assert events_from_json(events_to_json(events)) == events

Thread Safety:
    All functions are pure; safe to call from any thread.

"""

import json
from collections.abc import Iterable
from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any

from orgstream.events import Event, EventType
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

# Registry of payload type names to classes for deserialization
_PAYLOAD_TYPES: dict[str, type] = {
    cls.__name__: cls
    for cls in (
        BlockInfo,
        Clock,
        DrawerInfo,
        EntityData,
        Headline,
        InlineSpan,
        Keyword,
        LinkData,
        ListInfo,
        ListItemInfo,
        MacroData,
        NodeProperty,
        Planning,
        SnippetData,
        TableRowInfo,
        Timestamp,
    )
}

_ENUM_TYPES: dict[str, type[Enum]] = {
    cls.__name__: cls for cls in (InlineKind, ListKind, TodoType)
}


def event_to_dict(event: Event) -> dict[str, Any]:
    """Convert an event to a JSON-compatible dict.

    Example:
        >>> event_to_dict(Event(EventType.TEXT, "hi", 3))
        {'type': 'TEXT', 'lineno': 3, 'payload': 'hi'}
    """
    return {
        "type": event.type.name,
        "lineno": event.lineno,
        "payload": _serialize_value(event.payload),
    }


def _serialize_value(value: Any) -> Any:
    """Serialize a payload value."""
    if isinstance(value, Enum):
        return {"_enum": type(value).__name__, "name": value.name}
    if is_dataclass(value) and not isinstance(value, type):
        result: dict[str, Any] = {"_type": type(value).__name__}
        for f in fields(value):
            result[f.name] = _serialize_value(getattr(value, f.name))
        return result
    if isinstance(value, tuple):
        return [_serialize_value(item) for item in value]
    if isinstance(value, frozenset):
        return sorted(value)
    # Primitives: str, int, bool, None
    return value


def event_from_dict(data: dict[str, Any]) -> Event:
    """Reconstruct an event from a dict produced by event_to_dict.

    Raises:
        ValueError: If the event type or a payload type is unknown.

    """
    type_name = data.get("type")
    try:
        event_type = EventType[type_name]  # type: ignore[index]
    except KeyError:
        msg = f"Unknown event type: {type_name!r}"
        raise ValueError(msg) from None
    return Event(event_type, _deserialize_value(data.get("payload")), data.get("lineno", 0))


def _deserialize_value(value: Any) -> Any:
    """Deserialize a payload value."""
    if isinstance(value, dict):
        if "_enum" in value:
            enum_cls = _ENUM_TYPES.get(value["_enum"])
            if enum_cls is None:
                msg = f"Unknown enum type: {value['_enum']!r}"
                raise ValueError(msg)
            return enum_cls[value["name"]]

        type_name = value.get("_type")
        payload_cls = _PAYLOAD_TYPES.get(type_name) if type_name else None
        if payload_cls is None:
            msg = f"Unknown payload type: {type_name!r}"
            raise ValueError(msg)
        kwargs = {
            f.name: _deserialize_value(value[f.name]) for f in fields(payload_cls) if f.name in value
        }
        return payload_cls(**kwargs)
    if isinstance(value, list):
        return tuple(_deserialize_value(item) for item in value)
    return value


def events_to_json(events: Iterable[Event], *, indent: int | None = None) -> str:
    """Serialize events to a JSON array string.

    Args:
        events: Events to serialize (an EventStream is consumed).
        indent: JSON indentation level (None for compact).

    """
    return json.dumps([event_to_dict(event) for event in events], sort_keys=True, indent=indent)


def events_from_json(data: str) -> list[Event]:
    """Deserialize events from a JSON string produced by events_to_json.

    Raises:
        ValueError: If the JSON is not an array of events.

    """
    raw = json.loads(data)
    if not isinstance(raw, list):
        msg = f"Expected a JSON array of events, got {type(raw).__name__}"
        raise ValueError(msg)
    return [event_from_dict(item) for item in raw]
