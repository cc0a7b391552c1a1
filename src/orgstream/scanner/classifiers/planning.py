"""Planning and clock line classifier mixin."""

import re

from orgstream.scanner.lines import Line, LineKind

_TS = r"(?:<[^<>\n]+>|\[[^\[\]\n]+\])"
_PLANNING_RE = re.compile(
    rf"(?:(?:SCHEDULED|DEADLINE|CLOSED):[ \t]*{_TS}(?:--{_TS})?[ \t]*)+"
)
_CLOCK_RE = re.compile(rf"CLOCK:[ \t]+({_TS}(?:--{_TS})?)(?:[ \t]+=>[ \t]+(\S+))?[ \t]*")


class PlanningClassifierMixin:
    """Mixin providing planning and clock line classification."""

    def _make_line(self, kind: LineKind, **fields: object) -> Line:
        """Create a Line for the current window. Implemented by Scanner."""
        raise NotImplementedError

    def _try_classify_planning(self, content: str) -> Line | None:
        """Line made only of SCHEDULED/DEADLINE/CLOSED entries."""
        if _PLANNING_RE.fullmatch(content):
            return self._make_line(LineKind.PLANNING, text=content.rstrip())
        return None

    def _try_classify_clock(self, content: str) -> Line | None:
        """``CLOCK: [ts]--[ts] =>  1:00``; ``text`` = timestamp, ``value`` = duration."""
        match = _CLOCK_RE.fullmatch(content)
        if match:
            return self._make_line(
                LineKind.CLOCK, text=match.group(1), value=match.group(2) or ""
            )
        return None
