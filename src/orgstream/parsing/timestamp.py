"""Timestamp parsing.

Org timestamps come in an active form ``<...>`` and an inactive form
``[...]``::

    <2024-03-01 Fri>
    <2024-03-01 Fri 10:00-11:30 +1w -2d>
    [2024-03-01 Fri 09:15]
    <2024-03-01 Fri>--<2024-03-03 Sun>

Thread Safety:
All functions are pure. Safe to call from any thread.

"""

from __future__ import annotations

import datetime
import re
from dataclasses import replace

from orgstream.nodes import Timestamp

_BODY_RE = re.compile(
    r"(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})"
    r"(?:[ \t]+(?P<dayname>[^\s\d+\-\]>][^\s+\-\]>]*))?"
    r"(?:[ \t]+(?P<hour>\d{1,2}):(?P<minute>\d{2})"
    r"(?:-(?P<end_hour>\d{1,2}):(?P<end_minute>\d{2}))?)?"
    r"(?P<mods>(?:[ \t]+(?:\+\+|\.\+|\+|--|-)\d+[hdwmy](?:/\d+[hdwmy])?)*)"
    r"[ \t]*"
)
_REPEATER_RE = re.compile(r"(?:\+\+|\.\+|\+)\d+[hdwmy](?:/\d+[hdwmy])?")
_WARNING_RE = re.compile(r"--?\d+[hdwmy]")


def match_timestamp(text: str, pos: int) -> tuple[Timestamp, int] | None:
    """Match a timestamp (or a date range) starting at ``pos``.

    Args:
        text: Text to scan
        pos: Index of the opening ``<`` or ``[``

    Returns:
        (timestamp, end_index) or None when no valid timestamp starts here.
    """
    first = _match_single(text, pos)
    if first is None:
        return None

    timestamp, end = first
    if text.startswith("--", end) and end + 2 < len(text) and text[end + 2] == text[pos]:
        second = _match_single(text, end + 2)
        if second is not None:
            other, range_end = second
            return replace(timestamp, raw=text[pos:range_end], end=other), range_end

    return timestamp, end


def parse_timestamp(text: str) -> Timestamp | None:
    """Parse a string that consists of exactly one timestamp or range.

    Examples:
        >>> parse_timestamp("<2024-03-01 Fri>").day
        1
        >>> parse_timestamp("not a timestamp") is None
        True
    """
    text = text.strip()
    if not text or text[0] not in "<[":
        return None
    matched = match_timestamp(text, 0)
    if matched is None or matched[1] != len(text):
        return None
    return matched[0]


def _match_single(text: str, pos: int) -> tuple[Timestamp, int] | None:
    """Match one ``<...>`` or ``[...]`` timestamp at pos."""
    if pos >= len(text):
        return None
    opener = text[pos]
    if opener == "<":
        closer = ">"
    elif opener == "[":
        closer = "]"
    else:
        return None

    close = text.find(closer, pos + 1)
    if close == -1:
        return None

    body = text[pos + 1 : close]
    match = _BODY_RE.fullmatch(body)
    if match is None:
        return None

    year = int(match.group("year"))
    month = int(match.group("month"))
    day = int(match.group("day"))
    try:
        datetime.date(year, month, day)
    except ValueError:
        return None

    hour = _int_or_none(match.group("hour"))
    minute = _int_or_none(match.group("minute"))
    end_hour = _int_or_none(match.group("end_hour"))
    end_minute = _int_or_none(match.group("end_minute"))
    if not _valid_time(hour, minute) or not _valid_time(end_hour, end_minute):
        return None

    repeater = None
    warning = None
    for mod in match.group("mods").split():
        if _REPEATER_RE.fullmatch(mod):
            repeater = mod
        elif _WARNING_RE.fullmatch(mod):
            warning = mod

    timestamp = Timestamp(
        active=opener == "<",
        year=year,
        month=month,
        day=day,
        dayname=match.group("dayname"),
        hour=hour,
        minute=minute,
        end_hour=end_hour,
        end_minute=end_minute,
        repeater=repeater,
        warning=warning,
        raw=text[pos : close + 1],
    )
    return timestamp, close + 1


def _int_or_none(value: str | None) -> int | None:
    return int(value) if value is not None else None


def _valid_time(hour: int | None, minute: int | None) -> bool:
    if hour is None:
        return True
    if minute is None or not 0 <= minute <= 59:
        return False
    # 24:00 is the end of the day, nothing later
    return 0 <= hour <= 23 or (hour == 24 and minute == 0)
