"""Block mode scanner mixin."""

from __future__ import annotations

from orgstream.nodes import RAW_BLOCK_KINDS
from orgstream.scanner.lines import Line, LineKind
from orgstream.scanner.modes import PLANNING_KEYWORDS, ScannerMode


class BlockScannerMixin:
    """Mixin providing block mode scanning logic.

    Classifies one line using the window approach:
    1. The Scanner has already found the line window and its indent
    2. Dispatch on the first content character to the classifiers
    3. Fall back to TEXT

    """

    # These will be set by the Scanner class
    _mode: ScannerMode
    _raw_block: str

    def _make_line(self, kind: LineKind, **fields: object) -> Line:
        raise NotImplementedError

    # Classifier methods (provided by classifier mixins)
    def _try_classify_headline(self, line: str) -> Line | None:
        raise NotImplementedError

    def _try_classify_hash_line(self, content: str) -> Line | None:
        raise NotImplementedError

    def _try_classify_drawer_line(self, content: str) -> Line | None:
        raise NotImplementedError

    def _classify_table_line(self, content: str) -> Line:
        raise NotImplementedError

    def _try_classify_horizontal_rule(self, content: str) -> Line | None:
        raise NotImplementedError

    def _try_classify_planning(self, content: str) -> Line | None:
        raise NotImplementedError

    def _try_classify_clock(self, content: str) -> Line | None:
        raise NotImplementedError

    def _try_classify_list_item(self, content: str, indent: int) -> Line | None:
        raise NotImplementedError

    def _scan_block(self, line: str, content: str, indent: int) -> Line:
        """Classify one line in block mode.

        Args:
            line: Full line without newline
            content: Line with leading whitespace removed
            indent: Leading whitespace width in columns

        Returns:
            The classified Line. Switches to RAW mode after the opening
            delimiter of a verbatim block.
        """
        if line.startswith("*"):
            headline = self._try_classify_headline(line)
            if headline is not None:
                return headline

        if not content or content.isspace():
            return self._make_line(LineKind.BLANK)

        first = content[0]
        classified: Line | None = None

        if first == "#":
            classified = self._try_classify_hash_line(content)
            if classified is not None and classified.kind == LineKind.BLOCK_BEGIN:
                if classified.name in RAW_BLOCK_KINDS:
                    self._mode = ScannerMode.RAW
                    self._raw_block = classified.name
        elif first == ":":
            classified = self._try_classify_drawer_line(content)
        elif first == "|":
            classified = self._classify_table_line(content)
        elif first == "-":
            classified = self._try_classify_horizontal_rule(content)
        elif content.startswith(PLANNING_KEYWORDS):
            classified = self._try_classify_planning(content)
        elif content.startswith("CLOCK:"):
            classified = self._try_classify_clock(content)

        if classified is None:
            classified = self._try_classify_list_item(content, indent)

        if classified is None:
            classified = self._make_line(LineKind.TEXT, text=content.rstrip())

        return classified
