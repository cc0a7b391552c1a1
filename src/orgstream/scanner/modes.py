"""Scanner operating modes and constants."""

from __future__ import annotations

from enum import Enum, auto


class ScannerMode(Enum):
    """Scanner operating modes.

    - BLOCK: Classifying structural lines
    - RAW: Inside a verbatim block body, waiting for its end delimiter

    """

    BLOCK = auto()
    RAW = auto()


# Org's default tab-width for indentation
TAB_WIDTH = 8

PLANNING_KEYWORDS = ("SCHEDULED:", "DEADLINE:", "CLOSED:")

DIGITS: frozenset[str] = frozenset("0123456789")

UNORDERED_BULLETS: frozenset[str] = frozenset("-+*")
