"""Table row and horizontal rule classifier mixin."""

from orgstream.scanner.lines import Line, LineKind


class TableClassifierMixin:
    """Mixin providing table row and horizontal rule classification."""

    def _make_line(self, kind: LineKind, **fields: object) -> Line:
        """Create a Line for the current window. Implemented by Scanner."""
        raise NotImplementedError

    def _classify_table_line(self, content: str) -> Line:
        """Classify content starting with ``|``.

        ``|-`` starts a rule row, anything else is a data row.
        """
        if content.startswith("|-"):
            return self._make_line(LineKind.TABLE_RULE, text=content.rstrip())
        return self._make_line(LineKind.TABLE_ROW, text=content.rstrip())

    def _try_classify_horizontal_rule(self, content: str) -> Line | None:
        """Five or more dashes and nothing else."""
        stripped = content.rstrip()
        if len(stripped) >= 5 and stripped.count("-") == len(stripped):
            return self._make_line(LineKind.HORIZONTAL_RULE)
        return None
