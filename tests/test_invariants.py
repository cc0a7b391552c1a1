"""Property-based tests for event stream invariants using Hypothesis.

These tests verify that certain properties always hold regardless
of the input, helping catch edge cases that example-based tests miss.
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from orgstream import parse_events
from orgstream.config import ParseConfig
from orgstream.events import START_END_PAIRS, Event, EventType

ORG_LINES = st.sampled_from(
    [
        "* Headline",
        "** TODO [#B] Sub :tag:",
        "*** Deep",
        "SCHEDULED: <2024-03-01 Fri>",
        "Some *bold* and /italic/ text",
        "",
        "- item",
        "  - nested [X] item",
        "1. ordered",
        "- term :: description",
        "| a | b |",
        "|---+---|",
        "#+BEGIN_QUOTE",
        "#+END_QUOTE",
        "#+BEGIN_SRC python",
        "#+END_SRC",
        "#+BEGIN_VERSE",
        "#+END_VERSE",
        ":PROPERTIES:",
        ":LOGBOOK:",
        ":ID: 7",
        ":END:",
        "CLOCK: [2024-10-12 Sat 10:00]--[2024-10-12 Sat 11:00] =>  1:00",
        "#+TITLE: Doc",
        "#+TODO: A B | C",
        "# comment",
        "-----",
        "    indented text",
        "[[https://orgmode.org][Org]] <2024-03-01>",
    ]
)

ORG_DOCUMENTS = st.lists(ORG_LINES, max_size=40).map("\n".join)

OPENERS = st.sampled_from(["#+BEGIN_QUOTE", ":NOTES:", "- item", "  - item", "#+BEGIN_CENTER"])
WORDS = st.text(alphabet="abc ", min_size=1, max_size=20).filter(str.strip)


def collect(source: str) -> list[Event]:
    return list(parse_events(source, config=ParseConfig()))


def assert_balanced(events: list[Event]) -> None:
    stack: list[Event] = []
    for event in events:
        if event.is_start:
            stack.append(event)
        elif event.is_end:
            assert stack, f"{event.type.name} without a start"
            start = stack.pop()
            assert START_END_PAIRS[start.type] is event.type
            assert start.payload == event.payload
    assert not stack, f"{stack[-1].type.name} never closed"


def top_level_raw(events: list[Event]) -> str:
    """Rebuild paragraph text from the top-level inline events."""
    parts: list[str] = []
    depth = 0
    for event in events:
        if event.type is EventType.INLINE_START:
            if depth == 0:
                parts.append(event.payload.raw)
            depth += 1
        elif event.type is EventType.INLINE_END:
            depth -= 1
        elif depth:
            continue
        elif event.type is EventType.TEXT:
            parts.append(event.payload)
        elif event.type is EventType.INLINE:
            parts.append(event.payload.raw)
    return "".join(parts)


class TestBalancedNesting:
    """Start and End events always nest properly."""

    @given(st.text(max_size=1000))
    @settings(max_examples=200)
    def test_arbitrary_text(self, source: str) -> None:
        assert_balanced(collect(source))

    @given(ORG_DOCUMENTS)
    @settings(max_examples=300)
    def test_structural_lines(self, source: str) -> None:
        """Any mix of structural lines, matched or not, stays balanced."""
        assert_balanced(collect(source))

    @given(st.lists(OPENERS, max_size=30))
    @settings(max_examples=100)
    def test_unterminated_openers(self, lines: list[str]) -> None:
        """Blocks and drawers opened but never closed are closed at the end."""
        events = collect("\n".join(lines))
        assert_balanced(events)
        starts = sum(1 for event in events if event.type is EventType.GREATER_BLOCK_START)
        assert starts == sum(1 for line in lines if line.startswith("#+BEGIN"))


class TestDeterminism:
    """Parsing is a pure function of the buffer."""

    @given(ORG_DOCUMENTS)
    @settings(max_examples=100)
    def test_same_events_twice(self, source: str) -> None:
        assert collect(source) == collect(source)

    @given(ORG_DOCUMENTS)
    @settings(max_examples=50)
    def test_str_and_bytes_agree(self, source: str) -> None:
        assert collect(source) == list(parse_events(source.encode(), config=ParseConfig()))


class TestCoverage:
    """Inline events reconstruct paragraph text exactly once."""

    @given(st.text(alphabet="ab */_=~+[]<>\\{}@^-.,", max_size=120))
    @settings(max_examples=300)
    def test_paragraph_text(self, text: str) -> None:
        line = ("x " + text).rstrip()
        assert top_level_raw(collect(line)) == line

    @given(st.lists(WORDS, min_size=1, max_size=5))
    @settings(max_examples=100)
    def test_multiline_paragraph(self, words: list[str]) -> None:
        lines = [word.strip() for word in words]
        assert top_level_raw(collect("\n".join(lines))) == "\n".join(lines)


class TestMarkerSoup:
    """Dense markup never crashes the parser."""

    @given(st.text(alphabet="*/_=~+[]<>\\{}@^:|#-\n \t0123456789", max_size=500))
    @settings(max_examples=300)
    def test_no_exceptions(self, source: str) -> None:
        events = collect(source)
        assert_balanced(events)
