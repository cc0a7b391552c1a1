"""List item classifier mixin."""

from orgstream.scanner.lines import Line, LineKind
from orgstream.scanner.modes import DIGITS, UNORDERED_BULLETS


class ListClassifierMixin:
    """Mixin providing list bullet classification."""

    def _make_line(self, kind: LineKind, **fields: object) -> Line:
        """Create a Line for the current window. Implemented by Scanner."""
        raise NotImplementedError

    def _try_classify_list_item(self, content: str, indent: int) -> Line | None:
        """Try to classify content as a list item.

        Bullets are ``-``, ``+``, ``*`` (only when indented, column 0 belongs
        to headlines), ``1.`` or ``1)``, followed by whitespace or the end
        of the line.

        Args:
            content: Line content with leading whitespace stripped
            indent: Column of the first non-whitespace character

        Returns:
            LIST_ITEM line with ``name`` = bullet, ``text`` = item content.
        """
        char = content[0]
        if char in UNORDERED_BULLETS:
            if char == "*" and indent == 0:
                return None
            end = 1
        elif char in DIGITS:
            end = 0
            while end < len(content) and content[end] in DIGITS:
                end += 1
            if end >= len(content) or content[end] not in ".)":
                return None
            end += 1
        else:
            return None

        if end < len(content) and content[end] not in " \t":
            return None

        return self._make_line(
            LineKind.LIST_ITEM,
            name=content[:end],
            text=content[end:].strip(),
        )
