"""Parsing subsystem for orgstream.

Architecture:
parsing/
├── machine.py     # BlockStateMachine (classified lines -> events)
├── contexts.py    # Context stack of open headlines, lists, blocks, drawers
├── headline.py    # Keyword, priority, title and tags of a headline
├── planning.py    # SCHEDULED/DEADLINE/CLOSED and CLOCK payloads
├── timestamp.py   # <2024-03-01 Fri 10:00 +1w> parsing
├── charsets.py    # Emphasis boundary sets
└── inline/        # InlineResolver

Example:
    >>> from orgstream.parsing import InlineResolver
    >>> [span.kind.name for span in InlineResolver().resolve("=x= y")]
    ['VERBATIM', 'TEXT']

"""

from orgstream.parsing.inline import InlineResolver
from orgstream.parsing.machine import BlockStateMachine
from orgstream.parsing.timestamp import parse_timestamp

__all__ = ["BlockStateMachine", "InlineResolver", "parse_timestamp"]
