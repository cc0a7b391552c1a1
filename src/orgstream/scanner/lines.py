"""Line and LineKind definitions for the orgstream scanner.

The scanner classifies each logical line of the buffer into a Line that
the block state machine consumes. A Line carries the structural payload
that can be extracted without parsing the rest of the document.

Thread Safety:
Line is frozen (immutable) and safe to share across threads.

"""

from dataclasses import dataclass
from enum import Enum, auto

from orgstream.location import SourceLocation


class LineKind(Enum):
    """Structural kinds of a logical line."""

    BLANK = auto()
    HEADLINE = auto()  # * Title
    LIST_ITEM = auto()  # - item, 1. item
    TABLE_ROW = auto()  # | a | b |
    TABLE_RULE = auto()  # |---+---|
    BLOCK_BEGIN = auto()  # #+BEGIN_QUOTE
    BLOCK_END = auto()  # #+END_QUOTE
    RAW = auto()  # Body line of a verbatim block
    DRAWER_BEGIN = auto()  # :LOGBOOK:
    DRAWER_END = auto()  # :END:
    PROPERTY = auto()  # :KEY: value
    PLANNING = auto()  # SCHEDULED: <...>
    CLOCK = auto()  # CLOCK: [...]--[...] =>  1:00
    KEYWORD = auto()  # #+TITLE: value
    COMMENT = auto()  # # text
    HORIZONTAL_RULE = auto()  # -----
    TEXT = auto()  # Anything else


@dataclass(frozen=True, slots=True)
class Line:
    """A classified line.

    Attributes:
        kind: The line kind
        raw: Full line without its newline
        text: Kind-specific text: headline title part, list item content,
            keyword value, raw block body line (comma escapes undone), ...
        indent: Leading whitespace width in columns (tabs stop every 8)
        lineno: Line number (1-indexed)
        offset: Absolute start offset in the source
        level: Headline level
        name: Block or drawer name (lower-cased for blocks), keyword or
            property key, list bullet
        value: Block parameters, keyword or property value, clock duration
        source_file: Optional source file path

    """

    kind: LineKind
    raw: str
    text: str = ""
    indent: int = 0
    lineno: int = 0
    offset: int = 0
    level: int = 0
    name: str = ""
    value: str = ""
    source_file: str | None = None

    @property
    def location(self) -> SourceLocation:
        return SourceLocation(
            lineno=self.lineno,
            col_offset=1,
            offset=self.offset,
            end_offset=self.offset + len(self.raw),
            source_file=self.source_file,
        )

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        val = self.raw
        if len(val) > 20:
            val = val[:17] + "..."
        return f"Line({self.kind.name}, {val!r}, {self.lineno})"
