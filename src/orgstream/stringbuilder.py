"""StringBuilder for O(n) output accumulation.

Renderers append fragments to a list and join once at the end instead of
concatenating strings per event.

Thread Safety:
StringBuilder instances are local to each render() call.
No shared mutable state.

"""

from __future__ import annotations


class StringBuilder:
    """Efficient string accumulator.

    Usage:
        >>> sb = StringBuilder()
        >>> sb.append("<p>").append("Hello").append_line("</p>")
        StringBuilder(4 parts)
        >>> sb.build()
        '<p>Hello</p>\\n'

    """

    __slots__ = ("_parts",)

    def __init__(self) -> None:
        self._parts: list[str] = []

    def append(self, s: str) -> StringBuilder:
        """Append a string (empty strings are skipped)."""
        if s:
            self._parts.append(s)
        return self

    def append_line(self, s: str = "") -> StringBuilder:
        """Append a string followed by a newline.

        Consecutive calls never produce a blank line: the newline is
        skipped when the builder already ends with one and ``s`` is empty.
        """
        if s:
            self._parts.append(s)
        elif self._parts and self._parts[-1].endswith("\n"):
            return self
        self._parts.append("\n")
        return self

    def build(self) -> str:
        """Join all parts into the final string."""
        return "".join(self._parts)

    def __len__(self) -> int:
        """Return number of parts (not total length)."""
        return len(self._parts)

    def __bool__(self) -> bool:
        return bool(self._parts)

    def __repr__(self) -> str:
        return f"StringBuilder({len(self._parts)} parts)"
