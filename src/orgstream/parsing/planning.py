"""Planning and clock line payloads."""

from __future__ import annotations

import re

from orgstream.nodes import Clock, Planning
from orgstream.parsing.timestamp import match_timestamp, parse_timestamp

_ENTRY_RE = re.compile(r"(SCHEDULED|DEADLINE|CLOSED):[ \t]*")


def parse_planning(text: str) -> Planning | None:
    """Parse a planning line.

    Returns None when any entry carries an invalid timestamp (for example
    ``<2024-02-30>``); the caller then treats the line as plain text.

    Example:
        >>> planning = parse_planning("SCHEDULED: <2024-03-01 Fri> DEADLINE: <2024-03-08 Fri>")
        >>> planning.deadline.day
        8
    """
    found: dict[str, object] = {}
    pos = 0
    text = text.strip()
    while pos < len(text):
        entry = _ENTRY_RE.match(text, pos)
        if entry is None:
            return None
        matched = match_timestamp(text, entry.end())
        if matched is None:
            return None
        timestamp, end = matched
        found[entry.group(1).lower()] = timestamp
        pos = end
        while pos < len(text) and text[pos] in " \t":
            pos += 1

    if not found:
        return None
    return Planning(raw=text, **found)  # type: ignore[arg-type]


def parse_clock(timestamp_text: str, duration: str = "") -> Clock | None:
    """Build a Clock from the parts the scanner extracted.

    Example:
        >>> parse_clock("[2024-10-12 Sat 10:00]--[2024-10-12 Sat 11:00]", "1:00").duration
        '1:00'
    """
    timestamp = parse_timestamp(timestamp_text)
    if timestamp is None:
        return None
    return Clock(timestamp=timestamp, duration=duration or None)
