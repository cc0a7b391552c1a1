"""Headline classifier mixin."""

from orgstream.scanner.lines import Line, LineKind


class HeadlineClassifierMixin:
    """Mixin providing headline classification."""

    def _make_line(self, kind: LineKind, **fields: object) -> Line:
        """Create a Line for the current window. Implemented by Scanner."""
        raise NotImplementedError

    def _try_classify_headline(self, line: str) -> Line | None:
        """Try to classify a full line as a headline.

        Headlines start at column 0 with one or more ``*`` followed by a
        space, a tab or the end of the line. ``*bold*`` at column 0 is not
        a headline.

        Args:
            line: Full line without newline

        Returns:
            HEADLINE line, or None.
        """
        level = 0
        line_len = len(line)
        while level < line_len and line[level] == "*":
            level += 1

        if level < line_len and line[level] not in " \t":
            return None

        return self._make_line(LineKind.HEADLINE, level=level, text=line[level:].strip())
