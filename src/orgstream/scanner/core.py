"""Line-window scanner for Org-mode text.

Implements a window-based approach: find the end of the line, classify the
whole line, then commit. Every call consumes exactly one logical line, so
forward progress is guaranteed and the scan position never rewinds.

Thread Safety:
Scanner instances are single-use. Create one per source string.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from collections.abc import Iterator

from orgstream.scanner.classifiers import (
    BlockClassifierMixin,
    DrawerClassifierMixin,
    HeadlineClassifierMixin,
    ListClassifierMixin,
    PlanningClassifierMixin,
    TableClassifierMixin,
)
from orgstream.scanner.lines import Line, LineKind
from orgstream.scanner.modes import TAB_WIDTH, ScannerMode
from orgstream.scanner.scanners import BlockScannerMixin, RawScannerMixin


class Scanner(
    # Classifiers (pure logic, no position mutation)
    HeadlineClassifierMixin,
    BlockClassifierMixin,
    DrawerClassifierMixin,
    TableClassifierMixin,
    PlanningClassifierMixin,
    ListClassifierMixin,
    # Scanners (mode-specific scanning logic)
    BlockScannerMixin,
    RawScannerMixin,
):
    """Classifies Org text one logical line at a time.

    Usage:
        >>> scanner = Scanner("* Hello\\n\\nWorld")
        >>> for line in scanner.lines():
        ...     print(line)
        Line(HEADLINE, '* Hello', 1)
        Line(BLANK, '', 2)
        Line(TEXT, 'World', 3)

    The only state carried between lines is the scanner mode: once the
    opening delimiter of a verbatim block (src, example, export, comment,
    verse) is seen, lines are RAW until the matching end delimiter.

    """

    __slots__ = (
        "_source",
        "_source_len",
        "_source_file",
        "_pos",
        "_lineno",
        "_mode",
        "_raw_block",
        # Current line window
        "_line_raw",
        "_line_start",
        "_line_indent",
    )

    def __init__(self, source: str, source_file: str | None = None) -> None:
        """Initialize scanner with source text.

        Args:
            source: Org source text
            source_file: Optional source file path for locations
        """
        self._source = source
        self._source_len = len(source)
        self._source_file = source_file
        self._pos = 0
        self._lineno = 0
        self._mode = ScannerMode.BLOCK
        self._raw_block = ""

        self._line_raw = ""
        self._line_start = 0
        self._line_indent = 0

    @property
    def mode(self) -> ScannerMode:
        return self._mode

    @property
    def at_end(self) -> bool:
        return self._pos >= self._source_len

    def next_line(self) -> Line | None:
        """Classify and consume the next logical line.

        Returns:
            The classified Line, or None when the buffer is exhausted.

        Complexity: O(len(line))
        """
        if self._pos >= self._source_len:
            return None

        line_start = self._pos
        line_end = self._find_line_end()
        line = self._source[line_start:line_end]
        if line.endswith("\r"):
            line = line[:-1]
        self._commit_to(line_end)

        indent, content_start = self._calc_indent(line)
        content = line[content_start:]

        self._line_raw = line
        self._line_start = line_start
        self._line_indent = indent

        if self._mode == ScannerMode.RAW:
            return self._scan_raw(line, content)
        return self._scan_block(line, content, indent)

    def lines(self) -> Iterator[Line]:
        """Iterate over the remaining classified lines."""
        while True:
            line = self.next_line()
            if line is None:
                return
            yield line

    # =========================================================================
    # Window navigation helpers
    # =========================================================================

    def _find_line_end(self) -> int:
        """Find the end of the current line (position of \\n or EOF)."""
        idx = self._source.find("\n", self._pos)
        return idx if idx != -1 else self._source_len

    def _commit_to(self, line_end: int) -> None:
        """Move past line_end and its newline, if any."""
        self._pos = line_end
        self._lineno += 1
        if self._pos < self._source_len:
            self._pos += 1

    def _calc_indent(self, line: str) -> tuple[int, int]:
        """Calculate indent width and content start position.

        Spaces count as 1, tabs expand to the next multiple of TAB_WIDTH.

        Returns:
            (indent_columns, content_start_index)
        """
        indent = 0
        pos = 0
        line_len = len(line)
        while pos < line_len:
            char = line[pos]
            if char == " ":
                indent += 1
            elif char == "\t":
                indent += TAB_WIDTH - (indent % TAB_WIDTH)
            else:
                break
            pos += 1
        return indent, pos

    def _make_line(self, kind: LineKind, **fields: object) -> Line:
        """Create a Line for the current window.

        Args:
            kind: The line kind
            **fields: Kind-specific Line fields (text, level, name, value)

        Returns:
            Line positioned at the current window.
        """
        return Line(
            kind=kind,
            raw=self._line_raw,
            indent=self._line_indent,
            lineno=self._lineno,
            offset=self._line_start,
            source_file=self._source_file,
            **fields,  # type: ignore[arg-type]
        )
