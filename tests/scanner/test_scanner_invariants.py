"""Property-based tests for scanner invariants using Hypothesis.

The scanner must classify every logical line exactly once, in order,
whatever the input.
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from orgstream.scanner import LineKind, Scanner

ORG_ALPHABET = "*#+-:|[]<>_=/~^\\{}@ \t\n0123456789abcXYZ"


def expected_lines(source: str) -> list[str]:
    if not source:
        return []
    parts = source.split("\n")
    if source.endswith("\n"):
        parts.pop()
    return [part.removesuffix("\r") for part in parts]


class TestLineInvariants:
    """Line-level invariants."""

    @given(st.text(max_size=500))
    @settings(max_examples=200)
    def test_one_line_per_logical_line(self, source: str) -> None:
        """Every logical line yields exactly one classified Line, in order."""
        lines = list(Scanner(source).lines())
        assert [line.raw for line in lines] == expected_lines(source)

    @given(st.text(alphabet=ORG_ALPHABET, max_size=500))
    @settings(max_examples=200)
    def test_line_numbers_are_sequential(self, source: str) -> None:
        lines = list(Scanner(source).lines())
        assert [line.lineno for line in lines] == list(range(1, len(lines) + 1))

    @given(st.text(alphabet=ORG_ALPHABET, max_size=500))
    @settings(max_examples=200)
    def test_offsets_point_at_line_starts(self, source: str) -> None:
        """``offset`` is the position of the line's first character."""
        for line in Scanner(source).lines():
            assert source.startswith(line.raw, line.offset)

    @given(st.text(alphabet=ORG_ALPHABET, max_size=300))
    @settings(max_examples=100)
    def test_headlines_start_at_column_zero(self, source: str) -> None:
        for line in Scanner(source).lines():
            if line.kind == LineKind.HEADLINE:
                assert line.raw.startswith("*")
                assert line.level >= 1

    @given(st.text(alphabet=ORG_ALPHABET, max_size=300))
    @settings(max_examples=100)
    def test_blank_lines_are_whitespace(self, source: str) -> None:
        for line in Scanner(source).lines():
            if line.kind == LineKind.BLANK:
                assert not line.raw.strip()


class TestRawModeInvariants:
    """Raw mode invariants."""

    @given(st.lists(st.text(alphabet=ORG_ALPHABET.replace("\n", ""), max_size=40), max_size=20))
    @settings(max_examples=100)
    def test_raw_body_never_classified(self, body: list[str]) -> None:
        """Inside a src block only the matching end delimiter leaves raw mode."""
        body = [line for line in body if not line.strip().upper().startswith("#+END_SRC")]
        source = "\n".join(["#+BEGIN_SRC", *body, "#+END_SRC"])
        lines = list(Scanner(source).lines())

        assert lines[0].kind == LineKind.BLOCK_BEGIN
        assert lines[-1].kind == LineKind.BLOCK_END
        assert all(line.kind == LineKind.RAW for line in lines[1:-1])
