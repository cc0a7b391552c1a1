"""Drawer and node property classifier mixin."""

import re

from orgstream.scanner.lines import Line, LineKind

_DRAWER_RE = re.compile(r":([\w-]+):[ \t]*")
_PROPERTY_RE = re.compile(r":([^\s:]+):[ \t]+(.*?)[ \t]*")


class DrawerClassifierMixin:
    """Mixin providing drawer delimiter and property classification."""

    def _make_line(self, kind: LineKind, **fields: object) -> Line:
        """Create a Line for the current window. Implemented by Scanner."""
        raise NotImplementedError

    def _try_classify_drawer_line(self, content: str) -> Line | None:
        """Classify a line whose content starts with ``:``.

        ``:NAME:`` alone opens a drawer (``:END:`` closes one); ``:KEY: value``
        is a node property. Whether a property is meaningful depends on the
        enclosing drawer, which is the state machine's business.

        Args:
            content: Line content with leading whitespace stripped

        Returns:
            DRAWER_BEGIN, DRAWER_END or PROPERTY line, or None.
        """
        match = _DRAWER_RE.fullmatch(content)
        if match:
            name = match.group(1)
            if name.upper() == "END":
                return self._make_line(LineKind.DRAWER_END, name="END")
            return self._make_line(LineKind.DRAWER_BEGIN, name=name)

        match = _PROPERTY_RE.fullmatch(content)
        if match:
            return self._make_line(
                LineKind.PROPERTY,
                name=match.group(1),
                value=match.group(2),
                text=match.group(2),
            )

        return None
